"""
Hold'em simulation engine components.
"""

from .deck import Card, Deck, Suit, RANKS, RANK_VALUES, parse_cards, has_duplicates
from .range_parser import ExpandedHand, HandClass, Suitedness, expand_range, parse_token, split_range
from .hand_evaluator import (HandCategory, HandEvaluation, HandEvaluator, EvaluatorConfig,
                             evaluate_hand, evaluate_best, compare_hands)
from .starting_hands import (build_starting_hand_ranking, starting_hand_ranking,
                             top_percent_hands, top_percent_by_combinations)
from .showdown import ShowdownResult, play_showdown
