# npmrange/core/unbroken_range.py

"""
Canonical single-interval version ranges.

An ``UnbrokenRange`` is one contiguous interval of versions with an inclusive
flag per bound and a pre-release visibility flag. Pre-release versions are
only members when a bound of the same major.minor.patch is itself a
pre-release, or when the range was built with ``include_all_prerelease``.

Ranges are created through the class-method factories, which normalize any
contradictory bounds to the single ``UnbrokenRange.EMPTY`` value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from semver import Version

from npmrange.core.versions import (
    MAX_VERSION,
    MIN_RELEASE,
    MIN_VERSION,
    VersionLike,
    ensure_version,
    first_prerelease,
    is_prerelease,
    next_release,
    same_triple,
    successor,
)

# ==============================================================
# UNBROKEN RANGE
# ==============================================================

@dataclass(frozen=True)
class UnbrokenRange:
    """
    A contiguous range of versions. A ``None`` start is unbounded below.

    Build ranges with the class-method factories; the constructor rejects
    bounds that describe an empty range other than ``EMPTY`` itself.
    """

    start: Optional[Version]
    start_inclusive: bool
    end: Version
    end_inclusive: bool
    include_all_prerelease: bool = False

    ALL: ClassVar["UnbrokenRange"]
    ALL_RELEASE: ClassVar["UnbrokenRange"]
    EMPTY: ClassVar["UnbrokenRange"]

    def __post_init__(self):
        if self.start is not None:
            object.__setattr__(self, "start", ensure_version(self.start, "start"))
        object.__setattr__(self, "end", ensure_version(self.end, "end"))

        # Only the factories may normalize; an empty range is always EMPTY
        if (_is_empty(self.start, self.start_inclusive, self.end, self.end_inclusive,
                      self.include_all_prerelease)
                and not _is_empty_marker(self)):
            raise ValueError(
                f"Bounds {self.start}..{self.end} describe an empty range; "
                "use the UnbrokenRange factories, which return UnbrokenRange.EMPTY"
            )

    # ----------------------------------------------------------
    # Factories
    # ----------------------------------------------------------

    @classmethod
    def equals(cls, version: VersionLike) -> "UnbrokenRange":
        version = ensure_version(version, "version")
        return cls._create(version, True, version, True, False)

    @classmethod
    def greater_than(cls, version: VersionLike, include_all_prerelease: bool = False) -> "UnbrokenRange":
        version = ensure_version(version, "version")
        return cls._create(version, False, MAX_VERSION, True, include_all_prerelease)

    @classmethod
    def at_least(cls, version: VersionLike, include_all_prerelease: bool = False) -> "UnbrokenRange":
        version = ensure_version(version, "version")
        return cls._create(version, True, MAX_VERSION, True, include_all_prerelease)

    @classmethod
    def less_than(cls, version: VersionLike, include_all_prerelease: bool = False) -> "UnbrokenRange":
        version = ensure_version(version, "version")
        return cls._create(None, False, version, False, include_all_prerelease)

    @classmethod
    def at_most(cls, version: VersionLike, include_all_prerelease: bool = False) -> "UnbrokenRange":
        version = ensure_version(version, "version")
        return cls._create(None, False, version, True, include_all_prerelease)

    @classmethod
    def inclusive(cls, start: VersionLike, end: VersionLike,
                  include_all_prerelease: bool = False) -> "UnbrokenRange":
        """Range of versions ``start <= v <= end``."""
        start, end = cls._validate_bounds(start, end)
        return cls._create(start, True, end, True, include_all_prerelease)

    @classmethod
    def inclusive_of_start(cls, start: VersionLike, end: VersionLike,
                           include_all_prerelease: bool = False) -> "UnbrokenRange":
        """Range of versions ``start <= v < end``."""
        start, end = cls._validate_bounds(start, end)
        return cls._create(start, True, end, False, include_all_prerelease)

    @classmethod
    def inclusive_of_end(cls, start: VersionLike, end: VersionLike,
                         include_all_prerelease: bool = False) -> "UnbrokenRange":
        """Range of versions ``start < v <= end``."""
        start, end = cls._validate_bounds(start, end)
        return cls._create(start, False, end, True, include_all_prerelease)

    @classmethod
    def exclusive(cls, start: VersionLike, end: VersionLike,
                  include_all_prerelease: bool = False) -> "UnbrokenRange":
        """Range of versions ``start < v < end``."""
        start, end = cls._validate_bounds(start, end)
        return cls._create(start, False, end, False, include_all_prerelease)

    @staticmethod
    def _validate_bounds(start: VersionLike, end: VersionLike) -> tuple[Version, Version]:
        return ensure_version(start, "start"), ensure_version(end, "end")

    @classmethod
    def _create(cls, start: Optional[Version], start_inclusive: bool,
                end: Version, end_inclusive: bool,
                include_all_prerelease: bool) -> "UnbrokenRange":
        if _is_empty(start, start_inclusive, end, end_inclusive, include_all_prerelease):
            return cls.EMPTY
        return cls(start, start_inclusive, end, end_inclusive, include_all_prerelease)

    # ----------------------------------------------------------
    # Membership
    # ----------------------------------------------------------

    def contains(self, version: VersionLike) -> bool:
        """
        Whether the version is a member of this range.

        Args:
            version (Version or str): The version to test. It must not carry
                build metadata.

        Raises:
            NullArgumentError: If version is None.
            MetadataNotAllowedError: If version carries build metadata.
            InvalidVersionError: If version is a string that is not valid SemVer.
        """
        version = ensure_version(version, "version")

        if self.start is not None:
            comparison = version.compare(self.start)
            if comparison < 0 or (comparison == 0 and not self.start_inclusive):
                return False

        comparison = version.compare(self.end)
        if comparison > 0 or (comparison == 0 and not self.end_inclusive):
            return False

        if not is_prerelease(version) or self.include_all_prerelease:
            return True

        # A pre-release bound opens its own major.minor.patch to pre-releases
        return (_anchors(self.start, version) or _anchors(self.end, version))

    def __contains__(self, version: VersionLike) -> bool:
        return self.contains(version)

    @property
    def is_empty(self) -> bool:
        return self == UnbrokenRange.EMPTY

    # ----------------------------------------------------------
    # Rendering
    # ----------------------------------------------------------

    def __str__(self) -> str:
        if self.is_empty:
            return "∅"
        left = "[" if self.start_inclusive else "("
        right = "]" if self.end_inclusive else ")"
        start = "" if self.start is None else str(self.start)
        text = f"{left}{start}, {self.end}{right}"
        if self.include_all_prerelease:
            text += " *"
        return text


def _anchors(bound: Optional[Version], version: Version) -> bool:
    return bound is not None and is_prerelease(bound) and same_triple(bound, version)


def _is_empty_marker(range_: UnbrokenRange) -> bool:
    return (range_.start == MAX_VERSION and range_.end == MIN_VERSION
            and not (range_.start_inclusive or range_.end_inclusive
                     or range_.include_all_prerelease))


def _is_empty(start: Optional[Version], start_inclusive: bool,
              end: Version, end_inclusive: bool,
              include_all_prerelease: bool) -> bool:
    """A range is empty when no version visible to it lies between its bounds."""
    if start is not None:
        comparison = start.compare(end)
        if comparison > 0:
            return True
        if comparison == 0:
            return not (start_inclusive and end_inclusive)
        # Inclusive bounds always admit themselves
        if start_inclusive or end_inclusive:
            return False
    elif end_inclusive:
        return False

    return not _has_visible_between(start, end, include_all_prerelease)


def _has_visible_between(start: Optional[Version], end: Version,
                         include_all_prerelease: bool) -> bool:
    """Whether some visible version lies strictly between both bounds."""
    if include_all_prerelease:
        lowest = MIN_VERSION if start is None else successor(start)
        return lowest.compare(end) < 0

    # The smallest visible candidates: the next release, the next pre-release
    # anchored by the start, and the first pre-release anchored by the end.
    candidates = [MIN_RELEASE if start is None else next_release(start)]
    if start is not None and is_prerelease(start):
        candidates.append(successor(start))
    if is_prerelease(end):
        candidates.append(first_prerelease(end))

    return any(
        (start is None or start.compare(c) < 0) and c.compare(end) < 0
        for c in candidates
    )

# ==============================================================
# CONSTANTS
# ==============================================================

UnbrokenRange.EMPTY = UnbrokenRange(MAX_VERSION, False, MIN_VERSION, False, False)
UnbrokenRange.ALL_RELEASE = UnbrokenRange(None, False, MAX_VERSION, True, False)
UnbrokenRange.ALL = UnbrokenRange(None, False, MAX_VERSION, True, True)
