"""
A single simulated Hold'em hand: deal the board, evaluate every player,
find the winners.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional, Sequence

from ..errors import DeckExhausted
from .deck import Card, Deck, has_duplicates
from .hand_evaluator import HandEvaluation, HandEvaluator
from .range_parser import ExpandedHand

logger = logging.getLogger(__name__)

BOARD_SIZE = 5


@dataclass
class ShowdownResult:
    """Outcome of one dealt hand."""
    board: list[Card]
    evaluations: list[HandEvaluation]
    winners: list[int]  # Indices of the co-maximal players

    @property
    def is_split(self) -> bool:
        return len(self.winners) > 1


def cards_conflict(hole_cards: Sequence[ExpandedHand], board: Sequence[Card] = ()) -> bool:
    """True if the same physical card was dealt twice."""
    cards = list(board)
    for hand in hole_cards:
        cards.extend(hand)
    return has_duplicates(cards)


def complete_board(fixed_board: Sequence[Card], dead: Sequence[Card],
                   rng: random.Random) -> list[Card]:
    """Fill the board up to 5 cards from a fresh shuffled deck."""
    board = list(fixed_board)
    needed = BOARD_SIZE - len(board)
    if needed <= 0:
        return board

    deck = Deck.without(dead)
    if deck.cards_remaining() < needed:
        error = DeckExhausted(needed=needed, remaining=deck.cards_remaining())
        logger.error("Cannot complete board %s: %s", board, error)
        raise error
    deck.shuffle(rng)
    board.extend(deck.draw(needed))
    return board


def find_winners(evaluations: Sequence[HandEvaluation]) -> list[int]:
    """Indices of every player holding the best hand."""
    best_key = max(e.key for e in evaluations)
    return [i for i, e in enumerate(evaluations) if e.key == best_key]


def play_showdown(hole_cards: Sequence[ExpandedHand], fixed_board: Sequence[Card],
                  evaluator: HandEvaluator, rng: random.Random) -> Optional[ShowdownResult]:
    """
    Deal out one hand.

    Returns None when the hole cards and board share a card; such a deal
    is skipped rather than scored.
    """
    if cards_conflict(hole_cards, fixed_board):
        return None

    dead = list(fixed_board)
    for hand in hole_cards:
        dead.extend(hand)
    board = complete_board(fixed_board, dead, rng)

    evaluations = [evaluator.best_hand([*hand, *board]) for hand in hole_cards]
    return ShowdownResult(board=board, evaluations=evaluations, winners=find_winners(evaluations))
