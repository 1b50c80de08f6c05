"""
Hand evaluation for Hold'em simulation.
Ranks 5-card poker hands and finds the best 5 of 6 or 7 cards.
"""

from dataclasses import dataclass
from enum import Enum
from collections import Counter
from itertools import combinations
from typing import Sequence

from ..errors import WrongCardCount
from .deck import Card


class HandCategory(Enum):
    """Poker hand categories, ordered by strength."""
    HIGH_CARD = 1
    PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


WHEEL = [14, 5, 4, 3, 2]

# Index tuples for every 5-card subset, keyed by hand size
SUBSETS = {n: tuple(combinations(range(n), 5)) for n in (5, 6, 7)}


@dataclass(frozen=True)
class HandEvaluation:
    """Result of evaluating one 5-card hand."""
    category: HandCategory
    value: int
    kickers: tuple = ()

    @property
    def key(self) -> tuple:
        """Sort key: category, then tiebreak value, then kickers."""
        return (self.category.value, self.value, self.kickers)

    @property
    def label(self) -> str:
        return self.category.label

    def __str__(self) -> str:
        return f"{self.label} ({self.value})"


@dataclass
class EvaluatorConfig:
    """Configuration for hand evaluation rules."""
    resolve_kickers: bool = False   # Break ties on kickers and full-house pairs


class HandEvaluator:
    """Evaluates 5-card hands and picks the best 5 of up to 7 cards."""

    def __init__(self, config: EvaluatorConfig = None):
        self.config = config or EvaluatorConfig()

    def evaluate(self, cards: Sequence[Card]) -> HandEvaluation:
        """Evaluate exactly 5 cards."""
        if len(cards) != 5:
            raise WrongCardCount(len(cards), "exactly 5")
        return self._evaluate_five(cards)

    def best_hand(self, cards: Sequence[Card]) -> HandEvaluation:
        """
        Best 5-card hand from 5, 6 or 7 cards.

        Every 5-card subset is evaluated; the best hand is not always
        the five highest cards (a flush can leave out a higher card).
        """
        subsets = SUBSETS.get(len(cards))
        if subsets is None:
            raise WrongCardCount(len(cards), "5 to 7")

        best = None
        best_key = None
        for idx in subsets:
            evaluation = self._evaluate_five([cards[i] for i in idx])
            key = evaluation.key
            if best_key is None or key > best_key:
                best, best_key = evaluation, key
        return best

    @staticmethod
    def compare(a: HandEvaluation, b: HandEvaluation) -> int:
        """1 if a beats b, -1 if b beats a, 0 for a tie."""
        ka, kb = a.key, b.key
        if ka > kb:
            return 1
        if ka < kb:
            return -1
        return 0

    def _evaluate_five(self, cards: Sequence[Card]) -> HandEvaluation:
        values = sorted((c.value for c in cards), reverse=True)
        first_suit = cards[0].suit
        is_flush = all(c.suit == first_suit for c in cards)

        is_wheel = values == WHEEL
        is_straight = is_wheel or (
            len(set(values)) == 5 and values[0] - values[4] == 4
        )
        straight_high = 5 if is_wheel else values[0]

        # Ranks ordered by count, then by rank value
        counts = Counter(values)
        grouped = sorted(counts.items(), key=lambda rc: (rc[1], rc[0]), reverse=True)
        shape = [count for _, count in grouped]
        ranks = [rank for rank, _ in grouped]

        if is_straight and is_flush:
            if straight_high == 14:
                return self._result(HandCategory.ROYAL_FLUSH, 14, ())
            return self._result(HandCategory.STRAIGHT_FLUSH, straight_high, ())

        if shape[0] == 4:
            return self._result(HandCategory.FOUR_OF_A_KIND, ranks[0], (ranks[1],))

        if shape[0] == 3 and shape[1] == 2:
            return self._result(HandCategory.FULL_HOUSE, ranks[0], (ranks[1],))

        if is_flush:
            return self._result(HandCategory.FLUSH, values[0], tuple(values[1:]))

        if is_straight:
            return self._result(HandCategory.STRAIGHT, straight_high, ())

        if shape[0] == 3:
            return self._result(HandCategory.THREE_OF_A_KIND, ranks[0], tuple(ranks[1:]))

        if shape[0] == 2 and shape[1] == 2:
            return self._result(HandCategory.TWO_PAIR, ranks[0] * 100 + ranks[1], (ranks[2],))

        if shape[0] == 2:
            return self._result(HandCategory.PAIR, ranks[0], tuple(ranks[1:]))

        return self._result(HandCategory.HIGH_CARD, values[0], tuple(values[1:]))

    def _result(self, category: HandCategory, value: int, kickers: tuple) -> HandEvaluation:
        if not self.config.resolve_kickers:
            kickers = ()
        return HandEvaluation(category, value, kickers)


_default_evaluator = HandEvaluator()


def evaluate_hand(cards: Sequence[Card], config: EvaluatorConfig = None) -> HandEvaluation:
    """Convenience function to evaluate exactly 5 cards."""
    evaluator = HandEvaluator(config) if config else _default_evaluator
    return evaluator.evaluate(cards)


def evaluate_best(cards: Sequence[Card], config: EvaluatorConfig = None) -> HandEvaluation:
    """Convenience function to evaluate the best hand from 5 to 7 cards."""
    evaluator = HandEvaluator(config) if config else _default_evaluator
    return evaluator.best_hand(cards)


def compare_hands(a: HandEvaluation, b: HandEvaluation) -> int:
    return HandEvaluator.compare(a, b)
