"""
Hold'em Equity Simulator
"""

from .engine.deck import Card, Deck, Suit, parse_cards
from .engine.range_parser import expand_range
from .engine.hand_evaluator import HandCategory, HandEvaluation, evaluate_hand, evaluate_best, compare_hands
from .engine.starting_hands import build_starting_hand_ranking, starting_hand_ranking, top_percent_hands
from .simulator import Player, PlayerResult, SimulationConfig, SimulationResult, Simulator, TieCredit, run_simulation
from .errors import HoldemSimError

__version__ = "0.1.0"
