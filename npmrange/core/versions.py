# npmrange/core/versions.py

"""
Version ordering helpers built on top of ``semver.Version``.

The version value type itself (parsing, total ordering, rendering) is the one
provided by the ``semver`` distribution. This module only adds the sentinels
and the small predicates the range algebra consumes.
"""

from __future__ import annotations

from typing import Union

from semver import Version

from npmrange.core.exceptions import (
    InvalidVersionError,
    MetadataNotAllowedError,
    NullArgumentError,
)

# ==============================================================
# SENTINELS
# ==============================================================

MAX_COMPONENT = 2147483647

# Lowest representable version: no version sorts before 0.0.0-0
MIN_VERSION = Version(0, 0, 0, prerelease="0")
MIN_RELEASE = Version(0, 0, 0)
MAX_VERSION = Version(MAX_COMPONENT, MAX_COMPONENT, MAX_COMPONENT)

VersionLike = Union[Version, str]

# ==============================================================
# PARSING
# ==============================================================

def parse_version(text: str) -> Version:
    """
    Parse a strict SemVer 2.0.0 string, allowing a leading ``v``/``V``.

    Args:
        text (str): The version string to parse.

    Returns:
        Version: The parsed version.

    Raises:
        NullArgumentError: If text is None.
        InvalidVersionError: If text is not a valid version.
    """
    if text is None:
        raise NullArgumentError("text")

    clean = text.strip()
    if clean[:1] in ("v", "V"):
        clean = clean[1:]

    try:
        version = Version.parse(clean)
    except (ValueError, TypeError) as e:
        raise InvalidVersionError(text, str(e)) from e

    if max(version.major, version.minor, version.patch) > MAX_COMPONENT:
        raise InvalidVersionError(text, f"components cannot exceed {MAX_COMPONENT}")
    return version


def ensure_version(value: VersionLike, param_name: str, allow_metadata: bool = False) -> Version:
    """Coerce a public argument to a Version, enforcing the argument preconditions."""
    if value is None:
        raise NullArgumentError(param_name)
    if isinstance(value, str):
        value = parse_version(value)
    elif not isinstance(value, Version):
        raise TypeError(
            f"Expected a version for parameter '{param_name}', got {type(value).__name__}"
        )
    if not allow_metadata and has_metadata(value):
        raise MetadataNotAllowedError(param_name, value)
    return value

# ==============================================================
# ORDERING PREDICATES
# ==============================================================

def compare(a: Version, b: Version) -> int:
    """Total order over versions; build metadata is ignored."""
    return a.compare(b)


def is_prerelease(version: Version) -> bool:
    return bool(version.prerelease)


def has_metadata(version: Version) -> bool:
    return bool(version.build)


def same_triple(a: Version, b: Version) -> bool:
    """Whether both versions share major.minor.patch."""
    return (a.major, a.minor, a.patch) == (b.major, b.minor, b.patch)


def release_of(version: Version) -> Version:
    return Version(version.major, version.minor, version.patch)


def successor(version: Version) -> Version:
    """
    The version immediately following ``version`` in the total order.

    Nothing sorts strictly between a release ``a.b.c`` and ``a.b.(c+1)-0``,
    nor between a pre-release ``a.b.c-p`` and ``a.b.c-p.0``.
    """
    if is_prerelease(version):
        return Version(
            version.major, version.minor, version.patch,
            prerelease=f"{version.prerelease}.0",
        )
    return Version(version.major, version.minor, version.patch + 1, prerelease="0")


def next_release(version: Version) -> Version:
    """The smallest release strictly greater than ``version``."""
    if is_prerelease(version):
        return release_of(version)
    return Version(version.major, version.minor, version.patch + 1)


def first_prerelease(version: Version) -> Version:
    """The lowest pre-release of the version's major.minor.patch triple."""
    return Version(version.major, version.minor, version.patch, prerelease="0")


__all__ = [
    "MAX_COMPONENT",
    "MIN_VERSION",
    "MIN_RELEASE",
    "MAX_VERSION",
    "Version",
    "VersionLike",
    "parse_version",
    "ensure_version",
    "compare",
    "is_prerelease",
    "has_metadata",
    "same_triple",
    "release_of",
    "successor",
    "next_release",
    "first_prerelease",
]
