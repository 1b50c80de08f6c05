"""
Exceptions raised by the holdem simulation engine.

Caller-input problems subclass ValueError; broken internal invariants
subclass RuntimeError.
"""


class HoldemSimError(Exception):
    """Base class for every error raised by holdem_sim."""


class InvalidCard(HoldemSimError, ValueError):
    """A card string or rank/suit pair does not name a real card."""

    def __init__(self, card: str):
        self.card = card
        super().__init__(f"Invalid card: {card!r}")


class InvalidRangeToken(HoldemSimError, ValueError):
    """A range token is malformed."""

    def __init__(self, token: str, reason: str = ""):
        self.token = token
        self.reason = reason
        message = f"Invalid range token: {token!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class UnsupportedRangeNotation(InvalidRangeToken):
    """Range notation that is well formed but cannot be expanded."""


class WrongCardCount(HoldemSimError, ValueError):
    """An evaluation was asked for with the wrong number of cards."""

    def __init__(self, count: int, expected: str):
        self.count = count
        super().__init__(f"Expected {expected} cards, got {count}")


class InvalidPercentage(HoldemSimError, ValueError):
    """A percentage outside 0..100, or an inverted percentage window."""


class InvalidBoard(HoldemSimError, ValueError):
    """A fixed board with an illegal card count or duplicate cards."""


class InvalidIterations(HoldemSimError, ValueError):
    """Iteration count is not a positive integer."""


class InsufficientPlayers(HoldemSimError, ValueError):
    """Fewer than two active players have a non-empty range."""


class DeckExhausted(HoldemSimError, RuntimeError):
    """Not enough cards left in the deck to complete the board."""

    def __init__(self, needed: int, remaining: int):
        self.needed = needed
        self.remaining = remaining
        super().__init__(f"Deck exhausted: needed {needed} cards, {remaining} remaining")


class RankingInvariantError(HoldemSimError, RuntimeError):
    """The starting-hand ranking is not 169 unique hands."""
