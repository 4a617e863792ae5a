# npmrange/npm/comparator.py

"""
Comparators and comparator sets of the npm range grammar.

A ``Comparator`` is one relational test against a version. A
``ComparatorSet`` is the AND of its comparators, plus a group-level
pre-release gate: a pre-release version is only a member when some
comparator in the set names a pre-release of the same major.minor.patch.
For example ``^1.2.3-pr.1`` desugars to ``>=1.2.3-pr.1 <2.0.0-0``, which must
admit ``1.2.3-pr.2`` but not ``1.2.4-alpha``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple

from semver import Version

from npmrange.core.versions import is_prerelease, same_triple

# ==============================================================
# OPERATORS
# ==============================================================

class Operator(str, Enum):
    EQUAL = "="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="

    def __str__(self) -> str:
        return self.value

# ==============================================================
# COMPARATOR
# ==============================================================

@dataclass(frozen=True)
class Comparator:
    operator: Operator
    version: Version

    def test(self, version: Version) -> bool:
        """Plain order comparison, without any pre-release rule."""
        comparison = version.compare(self.version)
        if self.operator is Operator.EQUAL:
            return comparison == 0
        if self.operator is Operator.LESS_THAN:
            return comparison < 0
        if self.operator is Operator.LESS_THAN_OR_EQUAL:
            return comparison <= 0
        if self.operator is Operator.GREATER_THAN:
            return comparison > 0
        return comparison >= 0

    def includes(self, version: Version) -> bool:
        """
        Whether this comparator on its own includes the version.

        A pre-release is only included when this comparator's version is a
        pre-release of the same major.minor.patch.
        """
        if is_prerelease(version) and not self.anchors(version):
            return False
        return self.test(version)

    def anchors(self, version: Version) -> bool:
        """Whether this comparator makes pre-releases of the version's triple visible."""
        return is_prerelease(self.version) and same_triple(self.version, version)

    def __str__(self) -> str:
        if self.operator is Operator.EQUAL:
            return str(self.version)
        return f"{self.operator}{self.version}"

# ==============================================================
# COMPARATOR SET
# ==============================================================

@dataclass(frozen=True)
class ComparatorSet:
    comparators: Tuple[Comparator, ...]

    def __init__(self, comparators: Iterable[Comparator]):
        comparators = tuple(comparators)
        if not comparators:
            raise ValueError("A comparator set needs at least one comparator")
        object.__setattr__(self, "comparators", comparators)

    def contains(self, version: Version, include_prerelease: bool = False) -> bool:
        for comparator in self.comparators:
            if not comparator.test(version):
                return False

        if not is_prerelease(version) or include_prerelease:
            return True

        return any(comparator.anchors(version) for comparator in self.comparators)

    def __iter__(self):
        return iter(self.comparators)

    def __len__(self) -> int:
        return len(self.comparators)

    def __str__(self) -> str:
        return " ".join(str(c) for c in self.comparators)
