# npmrange/npm/__init__.py

from .comparator import Comparator, ComparatorSet, Operator
from .options import NpmParseOptions, DEFAULT_PARSE_OPTIONS
from .parser import PartialVersion, RangeParser
from .range import NpmRange, satisfies

__all__ = [
    'Comparator',
    'ComparatorSet',
    'Operator',
    'NpmParseOptions',
    'DEFAULT_PARSE_OPTIONS',
    'PartialVersion',
    'RangeParser',
    'NpmRange',
    'satisfies'
]
