# npmrange/npm/parser.py

"""
Compiler from npm range syntax to comparator sets.

The grammar, lowest precedence first::

    range       := alternative ( '||' alternative )*
    alternative := hyphen | segment ( ws+ segment )* | <empty>
    hyphen      := partial ws+ '-' ws+ partial
    segment     := ( '<' | '<=' | '>' | '>=' | '=' | '^' | '~' | '~>' )? ws* partial
    partial     := [vV]? xr ( '.' xr ( '.' xr pre? build? )? )?
    xr          := 'x' | 'X' | '*' | numeric

Text is consumed by a single forward scanner with a step budget, so no input
can make parsing take more than ``max_steps`` steps. Every syntax form is
expanded to zero, one or two comparators, following the desugaring rules of
node-semver: exclusive upper bounds carry a ``-0`` pre-release so that no
pre-release of the bound itself slips in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from rich.markup import escape
from semver import Version

from npmrange.core.console import Console, ConsoleAware
from npmrange.core.exceptions import ParseBudgetExceededError, RangeSyntaxError
from npmrange.core.versions import MAX_COMPONENT, MIN_VERSION
from npmrange.npm.comparator import Comparator, ComparatorSet, Operator
from npmrange.npm.options import DEFAULT_PARSE_OPTIONS, OR_SEPARATOR, NpmParseOptions

DIGITS = frozenset("0123456789")
WILDCARDS = frozenset("xX*")
WHITESPACE = frozenset(" \t\r\n")
IDENTIFIER_CHARS = frozenset(
    "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ-"
)

# ==============================================================
# PARTIAL VERSION
# ==============================================================

@dataclass(frozen=True)
class PartialVersion:
    """
    A version as written in a range: trailing components may be elided or
    wildcards, both represented as ``None``. Once a component is ``None``,
    every component to its right is ``None`` as well.
    """
    major: Optional[int]
    minor: Optional[int] = None
    patch: Optional[int] = None
    prerelease: Optional[str] = None

    @property
    def arity(self) -> int:
        """Number of components given."""
        for count, component in enumerate((self.major, self.minor, self.patch)):
            if component is None:
                return count
        return 3

    @property
    def is_any(self) -> bool:
        return self.major is None

    @property
    def is_complete(self) -> bool:
        return self.patch is not None

    def to_version(self) -> Version:
        return Version(self.major, self.minor, self.patch, prerelease=self.prerelease)

    def floor(self, prerelease: Optional[str] = None) -> Version:
        """Lowest version matching the given components, missing ones set to 0."""
        return Version(self.major, self.minor or 0, self.patch or 0, prerelease=prerelease)

    def ceiling(self, prerelease: Optional[str] = "0") -> Optional[Version]:
        """
        Exclusive upper bound of a partial version: the next minor, or the next
        major. None when no version lies above the partial.
        """
        if self.minor is None:
            return _bump(self.major + 1, 0, 0, prerelease)
        return _bump(self.major, self.minor + 1, 0, prerelease)


def _bump(major: int, minor: int, patch: int, prerelease: Optional[str] = "0") -> Optional[Version]:
    """
    Build a bumped bound, carrying a component past MAX_COMPONENT into the next
    one up. Returns None when the major itself overflows.
    """
    if patch > MAX_COMPONENT:
        minor, patch = minor + 1, 0
    if minor > MAX_COMPONENT:
        major, minor, patch = major + 1, 0, 0
    if major > MAX_COMPONENT:
        return None
    return Version(major, minor, patch, prerelease=prerelease)

# ==============================================================
# SCANNER
# ==============================================================

class _Scanner:
    """Forward-only cursor over the range text, bounded by a step budget."""

    def __init__(self, text: str, max_steps: int):
        self.text = text
        self.pos = 0
        self.steps = 0
        self.max_steps = max_steps

    def _tick(self) -> None:
        self.steps += 1
        if self.steps > self.max_steps:
            raise ParseBudgetExceededError(self.text, self.pos, self.max_steps)

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        return self.text[index] if index < len(self.text) else ""

    def advance(self) -> str:
        self._tick()
        char = self.text[self.pos]
        self.pos += 1
        return char

    def take_while(self, allowed: frozenset) -> str:
        start = self.pos
        while self.peek() in allowed:
            self.advance()
        return self.text[start:self.pos]

    def skip_whitespace(self) -> bool:
        return bool(self.take_while(WHITESPACE))

    def error(self, reason: str, position: Optional[int] = None) -> RangeSyntaxError:
        return RangeSyntaxError(self.text, self.pos if position is None else position, reason)

# ==============================================================
# RANGE PARSER
# ==============================================================

class RangeParser(ConsoleAware):
    """Parses npm range text into comparator sets."""

    def __init__(self, options: NpmParseOptions = DEFAULT_PARSE_OPTIONS,
                 console: Optional[Console] = None, verbose: bool = False):
        super().__init__(console, verbose)
        self.options = options

    def parse(self, text: str) -> List[ComparatorSet]:
        """
        Parse the whole range text.

        Returns:
            List[ComparatorSet]: One comparator set per ``||`` alternative.

        Raises:
            RangeSyntaxError: If the text does not match the grammar.
            ParseBudgetExceededError: If the text is too long or the step
                budget runs out.
        """
        if len(text) > self.options.max_length:
            raise ParseBudgetExceededError(
                text, self.options.max_length, self.options.max_length, "characters"
            )

        self.log(f"[dim]Parsing range[/] [cyan]{escape(text)}[/]")
        scanner = _Scanner(text, self.options.max_steps)
        sets = [self._parse_alternative(scanner)]
        while not scanner.at_end():
            if scanner.peek() == "|" and scanner.peek(1) == "|":
                scanner.advance()
                scanner.advance()
            else:
                raise scanner.error(f"expected '{OR_SEPARATOR}'")
            sets.append(self._parse_alternative(scanner))
        return sets

    # ----------------------------------------------------------
    # Grammar
    # ----------------------------------------------------------

    def _parse_alternative(self, scanner: _Scanner) -> ComparatorSet:
        comparators: List[Comparator] = []
        scanner.skip_whitespace()
        first = True

        while not self._at_alternative_end(scanner):
            segment_start = scanner.pos
            operator = self._parse_operator(scanner)
            scanner.skip_whitespace()
            partial = self._parse_partial(scanner)
            self._expect_segment_end(scanner)
            scanner.skip_whitespace()

            if first and operator == "" and self._at_hyphen(scanner):
                comparators.extend(self._parse_hyphen(scanner, partial, segment_start))
                break

            expanded = self._expand(operator, partial)
            self._log_expansion(scanner.text[segment_start:scanner.pos], expanded)
            comparators.extend(expanded)
            first = False

        if not comparators:
            comparators.append(self._any())
        return ComparatorSet(comparators)

    def _parse_hyphen(self, scanner: _Scanner, lower: PartialVersion,
                      segment_start: int) -> List[Comparator]:
        scanner.advance()
        if not scanner.skip_whitespace():
            raise scanner.error("expected whitespace after '-'")
        upper = self._parse_partial(scanner)
        self._expect_segment_end(scanner)
        scanner.skip_whitespace()
        if not self._at_alternative_end(scanner):
            raise scanner.error("a hyphen range must be the whole alternative")

        expanded = self._expand_hyphen(lower, upper)
        self._log_expansion(scanner.text[segment_start:scanner.pos], expanded)
        return expanded

    @staticmethod
    def _at_alternative_end(scanner: _Scanner) -> bool:
        return scanner.at_end() or scanner.peek() == "|"

    @staticmethod
    def _at_hyphen(scanner: _Scanner) -> bool:
        return scanner.peek() == "-" and scanner.peek(1) in WHITESPACE

    @staticmethod
    def _parse_operator(scanner: _Scanner) -> str:
        char = scanner.peek()
        if char == "^":
            scanner.advance()
            return "^"
        if char == "~":
            scanner.advance()
            if scanner.peek() == ">":
                scanner.advance()
            return "~"
        if char in ("<", ">"):
            scanner.advance()
            if scanner.peek() == "=":
                scanner.advance()
                return char + "="
            return char
        if char == "=":
            scanner.advance()
            return "="
        return ""

    def _parse_partial(self, scanner: _Scanner) -> PartialVersion:
        start = scanner.pos
        if scanner.peek() in ("v", "V"):
            scanner.advance()

        major = self._parse_component(scanner)
        minor = patch = prerelease = None
        if scanner.peek() == ".":
            scanner.advance()
            minor = self._parse_component(scanner)
            if scanner.peek() == ".":
                scanner.advance()
                patch = self._parse_component(scanner)
                if scanner.peek() == "-":
                    scanner.advance()
                    prerelease = self._parse_identifiers(scanner, "pre-release")
                if scanner.peek() == "+":
                    scanner.advance()
                    # build metadata never takes part in range matching
                    self._parse_identifiers(scanner, "build metadata")

        if major is None:
            minor = patch = None
        elif minor is None:
            patch = None
        if prerelease is not None and patch is None:
            raise scanner.error("a pre-release needs a complete major.minor.patch", start)

        return PartialVersion(major, minor, patch, prerelease)

    @staticmethod
    def _parse_component(scanner: _Scanner) -> Optional[int]:
        start = scanner.pos
        if scanner.peek() in WILDCARDS:
            scanner.advance()
            return None

        digits = scanner.take_while(DIGITS)
        if not digits:
            found = scanner.peek()
            raise scanner.error(
                f"expected a version number, found '{found}'" if found
                else "expected a version number, found end of range"
            )
        if len(digits) > 1 and digits[0] == "0":
            raise scanner.error(f"numeric component '{digits}' has a leading zero", start)
        value = int(digits)
        if value > MAX_COMPONENT:
            raise scanner.error(f"numeric component '{digits}' exceeds {MAX_COMPONENT}", start)
        return value

    @staticmethod
    def _parse_identifiers(scanner: _Scanner, kind: str) -> str:
        identifiers = []
        while True:
            start = scanner.pos
            identifier = scanner.take_while(IDENTIFIER_CHARS)
            if not identifier:
                raise scanner.error(f"empty {kind} identifier")
            if (kind == "pre-release" and identifier.isdigit()
                    and len(identifier) > 1 and identifier[0] == "0"):
                raise scanner.error(f"numeric {kind} identifier '{identifier}' has a leading zero", start)
            identifiers.append(identifier)
            if scanner.peek() != ".":
                return ".".join(identifiers)
            scanner.advance()

    @staticmethod
    def _expect_segment_end(scanner: _Scanner) -> None:
        char = scanner.peek()
        if char and char not in WHITESPACE and char != "|":
            raise scanner.error(f"unexpected character '{char}'")

    # ----------------------------------------------------------
    # Expansion
    # ----------------------------------------------------------

    def _expand(self, operator: str, partial: PartialVersion) -> List[Comparator]:
        if operator == "^":
            return self._expand_caret(partial)
        if operator == "~":
            return self._expand_tilde(partial)
        return self._expand_primitive(operator or "=", partial)

    def _expand_primitive(self, operator: str, partial: PartialVersion) -> List[Comparator]:
        if partial.is_any:
            if operator in ("<", ">"):
                return [self._none()]
            return []

        if partial.is_complete:
            return [Comparator(Operator(operator), partial.to_version())]

        floor = partial.floor(self._floor_prerelease)
        if operator == "=":
            return [_gte(floor)] + _below(partial.ceiling())
        if operator == ">":
            # >1 is >=2.0.0, >1.2 is >=1.3.0
            ceiling = partial.ceiling(self._floor_prerelease)
            return [self._none()] if ceiling is None else [_gte(ceiling)]
        if operator == "<=":
            return _below(partial.ceiling())
        if operator == "<":
            return [_lt(partial.floor("0"))]
        return [_gte(floor)]

    def _expand_caret(self, partial: PartialVersion) -> List[Comparator]:
        """``^V`` allows changes that keep the leftmost non-zero component."""
        if partial.is_any:
            return []

        major, minor, patch = partial.major, partial.minor, partial.patch
        if minor is None:
            return [_gte(partial.floor(self._floor_prerelease))] + _below(_bump(major + 1, 0, 0))

        if patch is None:
            lower = partial.floor(self._floor_prerelease)
            if major == 0:
                return [_gte(lower)] + _below(_bump(0, minor + 1, 0))
            return [_gte(lower)] + _below(_bump(major + 1, 0, 0))

        if major != 0:
            upper = _bump(major + 1, 0, 0)
        elif minor != 0:
            upper = _bump(0, minor + 1, 0)
        else:
            upper = _bump(0, 0, patch + 1)
        return [_gte(partial.to_version())] + _below(upper)

    def _expand_tilde(self, partial: PartialVersion) -> List[Comparator]:
        """``~V`` allows patch-level changes, or minor-level ones if the minor is elided."""
        if partial.is_any:
            return []
        if partial.is_complete:
            lower = partial.to_version()
        else:
            lower = partial.floor(self._floor_prerelease)
        return [_gte(lower)] + _below(partial.ceiling())

    def _expand_hyphen(self, lower: PartialVersion, upper: PartialVersion) -> List[Comparator]:
        """``A - B``: inclusive of B when complete, else up to B's next minor or major."""
        comparators = []
        if not lower.is_any:
            if lower.is_complete:
                comparators.append(_gte(lower.to_version()))
            else:
                comparators.append(_gte(lower.floor(self._floor_prerelease)))

        if not upper.is_any:
            if upper.is_complete:
                comparators.append(Comparator(Operator.LESS_THAN_OR_EQUAL, upper.to_version()))
            else:
                comparators.extend(_below(upper.ceiling()))
        return comparators

    @property
    def _floor_prerelease(self) -> Optional[str]:
        return "0" if self.options.include_prerelease else None

    def _any(self) -> Comparator:
        """Comparator admitting every version (pre-releases still go through the set's gate)."""
        return _gte(Version(0, 0, 0, prerelease=self._floor_prerelease))

    @staticmethod
    def _none() -> Comparator:
        return _lt(MIN_VERSION)

    def _log_expansion(self, segment: str, expanded: List[Comparator]) -> None:
        rendered = " ".join(str(c) for c in expanded) or "*"
        self.log(f"  [cyan]{escape(segment.strip())}[/] → {rendered}")


def _gte(version: Version) -> Comparator:
    return Comparator(Operator.GREATER_THAN_OR_EQUAL, version)


def _lt(version: Version) -> Comparator:
    return Comparator(Operator.LESS_THAN, version)


def _below(bound: Optional[Version]) -> List[Comparator]:
    """Exclusive upper bound comparator, or none when nothing lies above."""
    return [] if bound is None else [_lt(bound)]
