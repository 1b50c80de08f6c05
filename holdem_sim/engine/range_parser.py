"""
Range parsing for Hold'em simulation.
Expands range notation (AA, AKs, AKo, 22+, A2s-A9s, 7h8h) into concrete
two-card combinations.

The expansion keeps every combination, so a range holding both AKo and
AKs yields 12 + 4 = 16 hands and a uniform pick over the pool reproduces
real deal frequencies.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from ..errors import InvalidCard, InvalidRangeToken, UnsupportedRangeNotation
from .deck import Card, RANK_VALUES, RANKS, SUITS, VALUE_RANKS

ExpandedHand = tuple[Card, Card]

_RANK = "[23456789TJQKA]"
_CONCRETE_RE = re.compile(r"^[2-9TJQKA][hdcs][2-9TJQKA][hdcs]$")
_PLUS_RE = re.compile(rf"^({_RANK})({_RANK})([so]?)\+$")
_DASH_RE = re.compile(rf"^({_RANK})({_RANK})([so]?)-({_RANK})({_RANK})([so]?)$")
_SEPARATORS = re.compile(r"[,\s]+")


class Suitedness(Enum):
    PAIR = ""
    SUITED = "s"
    OFFSUIT = "o"


COMBO_COUNTS = {
    Suitedness.PAIR: 6,
    Suitedness.SUITED: 4,
    Suitedness.OFFSUIT: 12,
}


@dataclass(frozen=True)
class HandClass:
    """One of the 169 starting-hand classes, e.g. AKs."""
    first: str
    second: str
    suitedness: Suitedness

    @property
    def name(self) -> str:
        return f"{self.first}{self.second}{self.suitedness.value}"

    @property
    def is_pair(self) -> bool:
        return self.suitedness == Suitedness.PAIR

    @property
    def combo_count(self) -> int:
        return COMBO_COUNTS[self.suitedness]

    def combos(self) -> list[ExpandedHand]:
        """All concrete combinations of this class, ranks kept in token order."""
        hands = []
        if self.suitedness == Suitedness.PAIR:
            for i, s1 in enumerate(SUITS):
                for s2 in SUITS[i + 1:]:
                    hands.append((Card(self.first, s1), Card(self.second, s2)))
        elif self.suitedness == Suitedness.SUITED:
            for suit in SUITS:
                hands.append((Card(self.first, suit), Card(self.second, suit)))
        else:
            for s1 in SUITS:
                for s2 in SUITS:
                    if s1 != s2:
                        hands.append((Card(self.first, s1), Card(self.second, s2)))
        return hands

    @classmethod
    def parse(cls, token: str) -> "HandClass":
        """Parse a 2- or 3-character class token such as ``QQ`` or ``AKo``."""
        if len(token) not in (2, 3):
            raise InvalidRangeToken(token, "expected 2 or 3 characters")
        first, second = token[0], token[1]
        if first not in RANK_VALUES or second not in RANK_VALUES:
            raise InvalidRangeToken(token, "unknown rank")
        suffix = token[2:]
        if first == second:
            if suffix:
                raise InvalidRangeToken(token, "pairs cannot be suited or offsuit")
            return cls(first, second, Suitedness.PAIR)
        if suffix == "s":
            return cls(first, second, Suitedness.SUITED)
        if suffix == "o":
            return cls(first, second, Suitedness.OFFSUIT)
        raise InvalidRangeToken(token, "non-pair hands need an 's' or 'o' suffix")


def split_range(text: str) -> list[str]:
    """Split user text such as ``"AA, AKs KQo"`` into tokens."""
    return [t for t in _SEPARATORS.split(text.strip()) if t]


def parse_token(token: str) -> list[ExpandedHand]:
    """Expand a single range token into its concrete combinations."""
    token = token.strip()
    if not token:
        raise InvalidRangeToken(token, "empty token")

    if len(token) == 4 and _CONCRETE_RE.match(token):
        return [_parse_concrete(token)]

    if token.endswith("+"):
        return _expand_all(_parse_plus(token))

    if "-" in token:
        return _expand_all(_parse_dash(token))

    return HandClass.parse(token).combos()


def expand_range(tokens: Iterable[str]) -> list[ExpandedHand]:
    """
    Expand a list of range tokens into a single hand pool.

    The pool is the plain concatenation of each token's combinations;
    nothing is deduplicated.

    Args:
        tokens: Range tokens, e.g. ``["AA", "AKs", "AKo"]``

    Returns:
        List of (card, card) tuples
    """
    if isinstance(tokens, str):
        tokens = split_range(tokens)
    hands: list[ExpandedHand] = []
    for token in tokens:
        hands.extend(parse_token(token))
    return hands


def expand_classes(token: str) -> list[HandClass]:
    """The hand classes a class or range token covers (concrete hands excluded)."""
    token = token.strip()
    if token.endswith("+"):
        return _parse_plus(token)
    if "-" in token:
        return _parse_dash(token)
    return [HandClass.parse(token)]


def combo_count(token: str) -> int:
    """Number of concrete combinations a token expands to."""
    return len(parse_token(token))


def hand_class(hand: ExpandedHand) -> str:
    """Name the starting-hand class of a concrete hand, e.g. AhKh -> AKs."""
    c1, c2 = hand
    if c1.value < c2.value:
        c1, c2 = c2, c1
    if c1.rank == c2.rank:
        return f"{c1.rank}{c2.rank}"
    return f"{c1.rank}{c2.rank}{'s' if c1.suit == c2.suit else 'o'}"


def format_hands(hands: Iterable[ExpandedHand]) -> str:
    """Display string for concrete hands, e.g. ``"AhKh, AdKd"``."""
    return ", ".join(f"{c1}{c2}" for c1, c2 in hands)


def _expand_all(classes: list[HandClass]) -> list[ExpandedHand]:
    hands = []
    for hc in classes:
        hands.extend(hc.combos())
    return hands


def _parse_concrete(token: str) -> ExpandedHand:
    try:
        c1 = Card.from_string(token[:2])
        c2 = Card.from_string(token[2:])
    except InvalidCard:
        raise InvalidRangeToken(token, "unknown card") from None
    if c1 == c2:
        raise InvalidRangeToken(token, "same card twice")
    return (c1, c2)


def _high_low(first: str, second: str) -> tuple[int, int]:
    v1, v2 = RANK_VALUES[first], RANK_VALUES[second]
    return max(v1, v2), min(v1, v2)


def _parse_plus(token: str) -> list[HandClass]:
    """22+ -> 22..AA; ATs+ -> ATs, AJs, AQs, AKs."""
    m = _PLUS_RE.match(token)
    if not m:
        raise InvalidRangeToken(token)
    first, second, suffix = m.groups()
    if first == second:
        if suffix:
            raise InvalidRangeToken(token, "pairs cannot be suited or offsuit")
        start = RANK_VALUES[first]
        return [HandClass(VALUE_RANKS[v], VALUE_RANKS[v], Suitedness.PAIR)
                for v in range(start, RANK_VALUES["A"] + 1)]
    if not suffix:
        raise InvalidRangeToken(token, "non-pair hands need an 's' or 'o' suffix")
    high, low = _high_low(first, second)
    kind = Suitedness(suffix)
    return [HandClass(VALUE_RANKS[high], VALUE_RANKS[v], kind) for v in range(low, high)]


def _parse_dash(token: str) -> list[HandClass]:
    """22-99 -> 22..99; A2s-A9s -> A2s..A9s."""
    m = _DASH_RE.match(token)
    if not m:
        raise InvalidRangeToken(token)
    a1, b1, suffix1, a2, b2, suffix2 = m.groups()

    if a1 == b1 and a2 == b2:
        if suffix1 or suffix2:
            raise InvalidRangeToken(token, "pairs cannot be suited or offsuit")
        lo, hi = sorted((RANK_VALUES[a1], RANK_VALUES[a2]))
        return [HandClass(VALUE_RANKS[v], VALUE_RANKS[v], Suitedness.PAIR)
                for v in range(lo, hi + 1)]

    if a1 == b1 or a2 == b2:
        raise UnsupportedRangeNotation(token, "cannot mix pairs and non-pairs")
    if not suffix1 or not suffix2:
        raise InvalidRangeToken(token, "non-pair hands need an 's' or 'o' suffix")
    if suffix1 != suffix2:
        raise UnsupportedRangeNotation(token, "both ends must share a suffix")

    high1, low1 = _high_low(a1, b1)
    high2, low2 = _high_low(a2, b2)
    if high1 != high2:
        raise UnsupportedRangeNotation(token, "both ends must share the high card")
    lo, hi = sorted((low1, low2))
    kind = Suitedness(suffix1)
    return [HandClass(VALUE_RANKS[high1], VALUE_RANKS[v], kind) for v in range(lo, hi + 1)]


def all_hand_classes() -> list[HandClass]:
    """Every one of the 169 classes: pairs, then suited/offsuit by descending ranks."""
    ranks = list(reversed(RANKS))
    classes = [HandClass(r, r, Suitedness.PAIR) for r in ranks]
    for i, high in enumerate(ranks):
        for low in ranks[i + 1:]:
            classes.append(HandClass(high, low, Suitedness.SUITED))
            classes.append(HandClass(high, low, Suitedness.OFFSUIT))
    return classes
