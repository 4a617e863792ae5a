# npmrange/__init__.py

"""
Semantic version ranges: the canonical interval algebra and the npm range syntax.
"""

from npmrange.core.exceptions import (
    NpmRangeError,
    ArgumentError,
    NullArgumentError,
    MetadataNotAllowedError,
    InvalidVersionError,
    RangeSyntaxError,
    ParseBudgetExceededError,
)
from npmrange.core.versions import (
    MIN_VERSION,
    MIN_RELEASE,
    MAX_VERSION,
    parse_version,
)
from npmrange.core.unbroken_range import UnbrokenRange
from npmrange.npm import (
    Comparator,
    ComparatorSet,
    NpmParseOptions,
    NpmRange,
    Operator,
    satisfies,
)

__all__ = [
    'NpmRangeError',
    'ArgumentError',
    'NullArgumentError',
    'MetadataNotAllowedError',
    'InvalidVersionError',
    'RangeSyntaxError',
    'ParseBudgetExceededError',
    'MIN_VERSION',
    'MIN_RELEASE',
    'MAX_VERSION',
    'parse_version',
    'UnbrokenRange',
    'Comparator',
    'ComparatorSet',
    'NpmParseOptions',
    'NpmRange',
    'Operator',
    'satisfies',
]
