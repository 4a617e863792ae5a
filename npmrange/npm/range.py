# npmrange/npm/range.py

"""
npm-style range expressions: an OR of comparator sets.
"""

from __future__ import annotations

from functools import cached_property
from typing import Iterable, Optional, Tuple, Union

from semver import Version

from npmrange.core.console import Console
from npmrange.core.exceptions import (
    InvalidVersionError,
    NullArgumentError,
    RangeSyntaxError,
)
from npmrange.core.versions import parse_version
from npmrange.npm.comparator import ComparatorSet
from npmrange.npm.options import DEFAULT_PARSE_OPTIONS, OR_SEPARATOR, NpmParseOptions
from npmrange.npm.parser import RangeParser

# ==============================================================
# NPM RANGE
# ==============================================================

class NpmRange:
    """
    A range of versions written in npm syntax, e.g. ``^1.2.3 || >=2.5.0 <3``.

    A version is in the range if it is in at least one of its comparator sets.
    Instances are immutable; build them with ``NpmRange.parse``.
    """

    def __init__(self, comparator_sets: Iterable[ComparatorSet],
                 options: NpmParseOptions = DEFAULT_PARSE_OPTIONS):
        self.comparator_sets: Tuple[ComparatorSet, ...] = tuple(comparator_sets)
        if not self.comparator_sets:
            raise ValueError("There must be at least one comparator set in the range")
        self.options = options

    # ----------------------------------------------------------
    # Parsing
    # ----------------------------------------------------------

    @classmethod
    def parse(cls, text: str, options: NpmParseOptions = DEFAULT_PARSE_OPTIONS,
              console: Optional[Console] = None, verbose: bool = False) -> "NpmRange":
        """
        Parse a range.

        Args:
            text (str): The range to parse.
            options (NpmParseOptions): The options to use when parsing.
            console: Optional console receiving the expansion log when verbose.
            verbose (bool): Log every expanded segment.

        Returns:
            NpmRange: The parsed range.

        Raises:
            NullArgumentError: If text or options is None.
            RangeSyntaxError: If the range has invalid syntax or exceeds the
                parse budget.
        """
        if text is None:
            raise NullArgumentError("text")
        if options is None:
            raise NullArgumentError("options")

        parser = RangeParser(options, console=console, verbose=verbose)
        return cls(parser.parse(text), options)

    @classmethod
    def try_parse(cls, text: str, options: NpmParseOptions = DEFAULT_PARSE_OPTIONS
                  ) -> Tuple[Optional["NpmRange"], bool]:
        """
        Parse a range, reporting syntax errors as ``(None, False)``.

        A None text or options is still a programming error and raises
        NullArgumentError.
        """
        if text is None:
            raise NullArgumentError("text")
        if options is None:
            raise NullArgumentError("options")

        try:
            return cls.parse(text, options), True
        except RangeSyntaxError:
            return None, False

    # ----------------------------------------------------------
    # Membership
    # ----------------------------------------------------------

    def contains(self, version: Union[Version, str]) -> bool:
        """Whether the version satisfies at least one comparator set. Build metadata is ignored."""
        if version is None:
            raise NullArgumentError("version")
        if isinstance(version, str):
            version = parse_version(version)

        include_prerelease = self.options.include_prerelease
        return any(
            comparator_set.contains(version, include_prerelease)
            for comparator_set in self.comparator_sets
        )

    def __contains__(self, version: Union[Version, str]) -> bool:
        return self.contains(version)

    # ----------------------------------------------------------
    # Rendering
    # ----------------------------------------------------------

    @cached_property
    def _rendered(self) -> str:
        return f" {OR_SEPARATOR} ".join(str(s) for s in self.comparator_sets)

    def __str__(self) -> str:
        return self._rendered

    def __repr__(self) -> str:
        return f"NpmRange({self._rendered!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NpmRange):
            return NotImplemented
        return (self.comparator_sets == other.comparator_sets
                and self.options == other.options)

    def __hash__(self) -> int:
        return hash((self.comparator_sets, self.options))


def satisfies(version: Union[Version, str], range_text: Union[NpmRange, str],
              options: NpmParseOptions = DEFAULT_PARSE_OPTIONS) -> bool:
    """
    Whether the version satisfies the range.

    Unparsable versions or ranges never satisfy anything, so this returns
    False instead of raising for them.
    """
    if version is None:
        raise NullArgumentError("version")
    if range_text is None:
        raise NullArgumentError("range_text")

    if isinstance(range_text, NpmRange):
        npm_range = range_text
    else:
        npm_range, ok = NpmRange.try_parse(range_text, options)
        if not ok:
            return False

    try:
        return npm_range.contains(version)
    except InvalidVersionError:
        return False
