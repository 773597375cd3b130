"""
Maven version ordering and version range specifiers.
"""

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Optional, Union

from ..utils.exceptions import InvalidPatternError

# Qualifier order; "" is a release and anything unknown sorts after "sp"
QUALIFIERS = ("alpha", "beta", "milestone", "rc", "snapshot", "", "sp")
QUALIFIER_ALIASES = {
    "a": "alpha",
    "b": "beta",
    "m": "milestone",
    "cr": "rc",
    "ga": "",
    "final": "",
    "release": "",
}
RELEASE_RANK = QUALIFIERS.index("")

_TOKEN_RE = re.compile(r"\d+|[^\d.\-_]+")
_SNAPSHOT_TIMESTAMP_RE = re.compile(r"^(.*)-(\d{8}\.\d{6})-(\d+)$")

Item = Union[int, str, tuple]


def _qualifier_key(qualifier: str) -> tuple[int, str]:
    if qualifier in QUALIFIERS:
        return QUALIFIERS.index(qualifier), ""
    return len(QUALIFIERS), qualifier


def _parse_items(version: str) -> list[Item]:
    """
    Split a version into comparable items.

    Every ``-`` starts a nested sublist, as does a qualifier followed by a
    number (``rc1``). Trailing zeros and release qualifiers are trimmed from
    each list before its sublist, so ``2.0.0-M1`` and ``2.0-M1`` are equal.
    """
    tail: Optional[tuple] = None
    for segment in reversed(version.lower().split("-")):
        items = _segment_items(_TOKEN_RE.findall(segment))
        if tail:
            items.append(tail)
        tail = tuple(items)
    return list(tail or ())


def _segment_items(tokens: list[str]) -> list[Item]:
    items: list[Item] = []
    for index, token in enumerate(tokens):
        if token.isdigit():
            items.append(int(token))
            continue
        followed_by_digit = index + 1 < len(tokens) and tokens[index + 1].isdigit()
        if not followed_by_digit:
            # Single letters are only qualifier shorthands when numbered (1.0-a1)
            items.append(token if len(token) == 1 else QUALIFIER_ALIASES.get(token, token))
            continue
        items.append(QUALIFIER_ALIASES.get(token, token))
        nested = _segment_items(tokens[index + 1 :])
        if nested:
            items.append(tuple(nested))
        break
    return _normalize(items)


def _normalize(items: list[Item]) -> list[Item]:
    while items and items[-1] in (0, "", ()):
        items.pop()
    return items


def _compare_item(left: Optional[Item], right: Optional[Item]) -> int:
    """Compare two version items; ``None`` pads the shorter list."""
    if left is None:
        return -_compare_item(right, None) if right is not None else 0
    if isinstance(left, int):
        if right is None:
            return 0 if left == 0 else 1
        if isinstance(right, int):
            return (left > right) - (left < right)
        return 1  # numbers are newer than qualifiers and sublists
    if isinstance(left, tuple):
        if right is None:
            return _compare_items(left, ())
        if isinstance(right, int):
            return -1
        if isinstance(right, str):
            return 1
        return _compare_items(left, right)
    if right is None:
        left_key = _qualifier_key(left)
        return (left_key[0] > RELEASE_RANK) - (left_key[0] < RELEASE_RANK)
    if not isinstance(right, str):
        return -1
    left_key, right_key = _qualifier_key(left), _qualifier_key(right)
    return (left_key > right_key) - (left_key < right_key)


def _compare_items(left, right) -> int:
    for i in range(max(len(left), len(right))):
        result = _compare_item(
            left[i] if i < len(left) else None,
            right[i] if i < len(right) else None,
        )
        if result:
            return result
    return 0


@total_ordering
class MavenVersion:
    """A version that orders the way Maven orders artifact versions."""

    def __init__(self, version: str):
        self.original = version.strip()
        self.items = _parse_items(self.original)

    def compare(self, other: "MavenVersion") -> int:
        return _compare_items(self.items, other.items)

    def __eq__(self, other) -> bool:
        if not isinstance(other, MavenVersion):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: "MavenVersion") -> bool:
        if not isinstance(other, MavenVersion):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash(tuple(self.items))

    def __str__(self) -> str:
        return self.original

    def __repr__(self) -> str:
        return f"MavenVersion({self.original!r})"


def base_version(version: Optional[str]) -> Optional[str]:
    """Map a timestamped snapshot (``1.0-20240101.120000-3``) to ``1.0-SNAPSHOT``."""
    if version is None:
        return None
    match = _SNAPSHOT_TIMESTAMP_RE.match(version)
    if match:
        return f"{match.group(1)}-SNAPSHOT"
    return version


@dataclass(frozen=True)
class Restriction:
    """One bounded interval of a version range."""

    lower: Optional[MavenVersion]
    lower_inclusive: bool
    upper: Optional[MavenVersion]
    upper_inclusive: bool

    def contains(self, version: MavenVersion) -> bool:
        if self.lower is not None:
            result = version.compare(self.lower)
            if result < 0 or (result == 0 and not self.lower_inclusive):
                return False
        if self.upper is not None:
            result = version.compare(self.upper)
            if result > 0 or (result == 0 and not self.upper_inclusive):
                return False
        return True


@dataclass(frozen=True)
class VersionRange:
    """A Maven version range such as ``[1.0,2.0)`` or ``(,1.0],[1.2,)``."""

    spec: str
    restrictions: tuple[Restriction, ...]

    @classmethod
    def parse(cls, spec: str) -> "VersionRange":
        """Parse a range specifier, raising InvalidPatternError when malformed."""
        remaining = spec.strip()
        restrictions: list[Restriction] = []
        upper_bound: Optional[MavenVersion] = None

        while remaining.startswith(("[", "(")):
            index_right = remaining.find("]")
            index_paren = remaining.find(")")
            candidates = [i for i in (index_right, index_paren) if i >= 0]
            if not candidates:
                raise InvalidPatternError(f"Unbounded range: {spec}", pattern=spec)
            index = min(candidates)

            restriction = cls._parse_restriction(remaining[: index + 1], spec)
            if upper_bound is not None and (
                restriction.lower is None or restriction.lower < upper_bound
            ):
                raise InvalidPatternError(f"Ranges overlap: {spec}", pattern=spec)
            restrictions.append(restriction)
            upper_bound = restriction.upper

            remaining = remaining[index + 1 :].strip()
            if remaining.startswith(","):
                remaining = remaining[1:].strip()

        if remaining:
            raise InvalidPatternError(
                f"Only fully-qualified sets allowed in multiple set scenario: {spec}",
                pattern=spec,
            )
        if not restrictions:
            raise InvalidPatternError(f"Not a version range: {spec}", pattern=spec)
        return cls(spec=spec, restrictions=tuple(restrictions))

    @staticmethod
    def _parse_restriction(text: str, spec: str) -> Restriction:
        lower_inclusive = text.startswith("[")
        upper_inclusive = text.endswith("]")
        body = text[1:-1].strip()

        if "," not in body:
            if not (lower_inclusive and upper_inclusive) or not body:
                raise InvalidPatternError(
                    f"Single version must be surrounded by []: {spec}", pattern=spec
                )
            version = MavenVersion(body)
            return Restriction(version, True, version, True)

        lower_text, _, upper_text = body.partition(",")
        lower_text, upper_text = lower_text.strip(), upper_text.strip()
        if "," in upper_text:
            raise InvalidPatternError(f"Too many bounds: {spec}", pattern=spec)
        if lower_text == upper_text and lower_text and not (
            lower_inclusive and upper_inclusive
        ):
            raise InvalidPatternError(
                f"Range cannot have identical boundaries: {spec}", pattern=spec
            )

        lower = MavenVersion(lower_text) if lower_text else None
        upper = MavenVersion(upper_text) if upper_text else None
        if lower is not None and upper is not None and upper < lower:
            raise InvalidPatternError(
                f"Range defies version ordering: {spec}", pattern=spec
            )
        return Restriction(lower, lower_inclusive, upper, upper_inclusive)

    def contains(self, version: Union[str, MavenVersion]) -> bool:
        if not isinstance(version, MavenVersion):
            version = MavenVersion(version)
        return any(r.contains(version) for r in self.restrictions)

    def __str__(self) -> str:
        return self.spec
