"""
Starting-hand strength ranking.

Orders the 169 starting-hand classes strongest first with a fixed scoring
formula and derives "top N%" ranges from that order.
"""

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Sequence

from ..errors import InvalidPercentage, RankingInvariantError
from .deck import Card, RANK_VALUES, parse_cards
from .range_parser import HandClass, Suitedness, all_hand_classes

TOTAL_STARTING_HANDS = 169
TOTAL_COMBINATIONS = 1326  # C(52, 2)

# Scoring weights
PAIR_BASE = 20000
PAIR_STEP = 100
HIGH_CARD_WEIGHT = 1000
KICKER_WEIGHT = 50
SUITED_BONUS = 200
GAP_BONUS = {0: 100, 1: 50, 2: 25}
ACE_BONUS = 500
BROADWAY_BONUS = 100

RANGE_LABELS = [
    (95, "Ultra-wide (95%+)"),
    (80, "Very loose (80-95%)"),
    (60, "Loose (60-80%)"),
    (40, "Medium-loose (40-60%)"),
    (25, "Medium (25-40%)"),
    (15, "Tight (15-25%)"),
    (8, "Very tight (8-15%)"),
    (3, "Ultra-tight (3-8%)"),
]

PRESET_PERCENTAGES = {
    "PREMIUM": 2.4,
    "ULTRA_TIGHT": 5.9,
    "VERY_TIGHT": 9.5,
    "TIGHT": 15.4,
    "MEDIUM_TIGHT": 22.5,
    "MEDIUM": 30.2,
    "MEDIUM_LOOSE": 40.2,
    "LOOSE": 50.3,
    "VERY_LOOSE": 65.1,
    "ULTRA_LOOSE": 80.5,
}


@dataclass(frozen=True)
class HandStrength:
    """Score breakdown for one starting-hand class."""
    hand: str
    score: int
    category: str  # "pairs", "suited" or "offsuit"
    high_card: int
    low_card: int
    suited: bool
    gap: int

    @property
    def connected(self) -> bool:
        return self.category != "pairs" and self.gap == 0


def _score(hc: HandClass) -> HandStrength:
    v1, v2 = RANK_VALUES[hc.first], RANK_VALUES[hc.second]
    high, low = max(v1, v2), min(v1, v2)

    if hc.is_pair:
        return HandStrength(hc.name, PAIR_BASE + PAIR_STEP * high, "pairs", high, low, False, 0)

    suited = hc.suitedness == Suitedness.SUITED
    gap = high - low - 1
    score = HIGH_CARD_WEIGHT * high + KICKER_WEIGHT * low
    if suited:
        score += SUITED_BONUS
    score += GAP_BONUS.get(gap, 0)
    if high == 14:
        score += ACE_BONUS
    if high >= 11:
        score += BROADWAY_BONUS
    return HandStrength(hc.name, score, "suited" if suited else "offsuit", high, low, suited, gap)


def calculate_hand_strength(hand: str) -> HandStrength:
    """Score a starting-hand class token such as ``AKs``."""
    return _score(HandClass.parse(hand))


def generate_all_hands() -> list[str]:
    """All 169 class tokens: pairs AA..22, then AKs, AKo, AQs, ... 32o."""
    return [hc.name for hc in all_hand_classes()]


def build_starting_hand_ranking() -> tuple[str, ...]:
    """
    Build the 169-hand ranking, strongest first.

    Sorting is stable, so equal scores keep generation order
    (pairs first, then descending high card, suited before offsuit).
    """
    strengths = [_score(hc) for hc in all_hand_classes()]
    strengths.sort(key=lambda s: s.score, reverse=True)
    ranking = tuple(s.hand for s in strengths)

    if len(ranking) != TOTAL_STARTING_HANDS:
        raise RankingInvariantError(f"Expected {TOTAL_STARTING_HANDS} hands, got {len(ranking)}")
    if len(set(ranking)) != TOTAL_STARTING_HANDS:
        raise RankingInvariantError("Duplicate hands found in ranking")
    return ranking


@lru_cache(maxsize=None)
def starting_hand_ranking() -> tuple[str, ...]:
    """The process-wide ranking, built once on first use."""
    return build_starting_hand_ranking()


@lru_cache(maxsize=None)
def _positions() -> dict:
    return {hand: i + 1 for i, hand in enumerate(starting_hand_ranking())}


def hand_rank(hand: str) -> int:
    """1-based position in the ranking; 170 for unknown hands."""
    return _positions().get(hand, TOTAL_STARTING_HANDS + 1)


def is_valid_hand(hand: str) -> bool:
    return hand in _positions()


def hand_strength_percentage(hand: str) -> float:
    """Share of classes this hand is at least as strong as, 0-100 with one decimal."""
    rank = hand_rank(hand)
    if rank > TOTAL_STARTING_HANDS:
        return 0.0
    return _round_half_up((TOTAL_STARTING_HANDS - rank + 1) / TOTAL_STARTING_HANDS * 1000) / 10


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def _check_percentage(percentage: float) -> None:
    if not 0 <= percentage <= 100:
        raise InvalidPercentage(f"Percentage must be between 0 and 100, got {percentage}")


def top_percent_hands(percentage: float, ranking: Sequence[str] = None) -> list[str]:
    """
    Top N% of starting hands by count of classes.

    Args:
        percentage: 0-100
        ranking: Ranking to slice (defaults to the standard ranking)

    Returns:
        The first round(N% of 169) classes, strongest first
    """
    _check_percentage(percentage)
    ranking = ranking if ranking is not None else starting_hand_ranking()
    count = _round_half_up(percentage / 100 * len(ranking))
    return list(ranking[:count])


def top_percent_by_combinations(percentage: float, ranking: Sequence[str] = None) -> list[str]:
    """
    Top N% of starting hands weighted by combinations.

    Classes are added strongest first while each one brings the running
    combination count closer to N% of 1326.
    """
    _check_percentage(percentage)
    ranking = ranking if ranking is not None else starting_hand_ranking()
    target = percentage / 100 * TOTAL_COMBINATIONS
    selected = []
    total = 0
    for hand in ranking:
        combos = HandClass.parse(hand).combo_count
        if abs(total + combos - target) > abs(total - target):
            break
        selected.append(hand)
        total += combos
    return selected


def hands_in_range(min_percent: float, max_percent: float) -> list[str]:
    """Hands in the top max% but not in the top min%."""
    if min_percent > max_percent:
        raise InvalidPercentage("min_percent cannot be greater than max_percent")
    inner = set(top_percent_hands(min_percent))
    return [h for h in top_percent_hands(max_percent) if h not in inner]


def range_label(percentage: float) -> str:
    for threshold, label in RANGE_LABELS:
        if percentage >= threshold:
            return label
    return "Premium only (<3%)"


@dataclass
class RangeStats:
    """Combinatorial summary of a set of starting-hand classes."""
    count: int
    combinations: int
    percentage: float
    average_strength: int
    strongest_hand: str
    weakest_hand: str


def range_stats(hands: Iterable[str], board: Iterable[Card] = ()) -> RangeStats:
    """
    Summarize a range, counting only combinations not blocked by the board.

    Unknown hand tokens are ignored.
    """
    board = set(parse_cards(board))
    valid = [h for h in hands if is_valid_hand(h)]
    if not valid:
        return RangeStats(0, 0, 0.0, 0, "", "")

    combos = 0
    for hand in valid:
        combos += sum(1 for c1, c2 in HandClass.parse(hand).combos()
                      if c1 not in board and c2 not in board)

    remaining = 52 - len(board)
    possible = remaining * (remaining - 1) // 2
    ranks = [hand_rank(h) for h in valid]
    return RangeStats(
        count=len(valid),
        combinations=combos,
        percentage=_round_half_up(combos / possible * 1000) / 10,
        average_strength=_round_half_up(sum(TOTAL_STARTING_HANDS + 1 - r for r in ranks) / len(ranks)),
        strongest_hand=min(valid, key=hand_rank),
        weakest_hand=max(valid, key=hand_rank),
    )


def explain_ranking(hand1: str, hand2: str) -> str:
    """Describe why one class outranks the other."""
    s1, s2 = calculate_hand_strength(hand1), calculate_hand_strength(hand2)
    stronger, weaker = (s1, s2) if s1.score > s2.score else (s2, s1)
    lines = [f"{stronger.hand} ({stronger.score}) ranks higher than {weaker.hand} ({weaker.score})"]
    for s in (stronger, weaker):
        lines.append(f"  {s.hand}: category={s.category}, high={s.high_card}, "
                     f"low={s.low_card}, suited={s.suited}")
    return "\n".join(lines)

