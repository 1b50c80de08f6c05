"""
Deck management for Hold'em simulation.
Handles card creation, parsing, shuffling and drawing.
"""

import random
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union
from enum import Enum

from ..errors import DeckExhausted, InvalidCard


class Suit(Enum):
    HEARTS = "h"
    DIAMONDS = "d"
    CLUBS = "c"
    SPADES = "s"


RANKS = ["2", "3", "4", "5", "6", "7", "8", "9", "T", "J", "Q", "K", "A"]
RANK_VALUES = {rank: i + 2 for i, rank in enumerate(RANKS)}
VALUE_RANKS = {value: rank for rank, value in RANK_VALUES.items()}
SUITS = list(Suit)

_CARD_SEPARATORS = re.compile(r"[\s,]+")


@dataclass(frozen=True)
class Card:
    rank: str
    suit: Suit

    def __post_init__(self):
        if self.rank not in RANK_VALUES or not isinstance(self.suit, Suit):
            raise InvalidCard(f"{self.rank}{getattr(self.suit, 'value', self.suit)}")

    @property
    def value(self) -> int:
        """Numeric rank value, 2 through 14 (ace high)."""
        return RANK_VALUES[self.rank]

    @classmethod
    def from_string(cls, text: str) -> "Card":
        """Parse a card such as ``"Ah"`` or ``"10h"``."""
        cleaned = text.strip()
        if cleaned[:2] == "10":
            cleaned = "T" + cleaned[2:]
        if len(cleaned) != 2:
            raise InvalidCard(text)
        rank, suit = cleaned[0].upper(), cleaned[1].lower()
        try:
            return cls(rank, Suit(suit))
        except ValueError:
            raise InvalidCard(text) from None

    def __str__(self) -> str:
        return f"{self.rank}{self.suit.value}"

    def __repr__(self) -> str:
        return self.__str__()


# Shared by every fresh deck
FULL_DECK = tuple(Card(rank=rank, suit=suit) for suit in Suit for rank in RANKS)


def parse_cards(cards: Union[str, Iterable[str], None]) -> list[Card]:
    """
    Parse a list of cards.

    Accepts concatenated text (``"Kh7d2c"``), separated text
    (``"Kh 7d, 2c"``) or an iterable of card strings / Card objects.
    """
    if cards is None:
        return []
    if isinstance(cards, str):
        parsed = []
        for chunk in _CARD_SEPARATORS.split(cards.strip()):
            chunk = chunk.replace("10", "T")
            if len(chunk) % 2:
                raise InvalidCard(chunk)
            parsed.extend(Card.from_string(chunk[i:i + 2]) for i in range(0, len(chunk), 2))
        return parsed
    return [c if isinstance(c, Card) else Card.from_string(c) for c in cards]


def has_duplicates(cards: Iterable[Card]) -> bool:
    """True if any physical card appears more than once."""
    seen = set()
    for card in cards:
        if card in seen:
            return True
        seen.add(card)
    return False


def format_cards(cards: Iterable[Card]) -> str:
    return " ".join(str(c) for c in cards)


@dataclass
class Deck:
    cards: list[Card] = field(default_factory=list)

    @classmethod
    def standard_52(cls) -> "Deck":
        """Create a standard 52-card deck."""
        return cls(cards=list(FULL_DECK))

    @classmethod
    def without(cls, dead: Iterable[Card]) -> "Deck":
        """Create a standard deck with the given cards already removed."""
        dead = set(dead)
        return cls(cards=[c for c in FULL_DECK if c not in dead])

    def shuffle(self, rng: Optional[random.Random] = None) -> None:
        """Shuffle the deck with the given random source."""
        (rng or random).shuffle(self.cards)

    def draw(self, n: int = 1) -> list[Card]:
        """Draw n cards from the top of the deck."""
        if n > len(self.cards):
            raise DeckExhausted(needed=n, remaining=len(self.cards))
        drawn = self.cards[-n:] if n else []
        del self.cards[len(self.cards) - n:]
        drawn.reverse()
        return drawn

    def remove_cards(self, cards: Iterable[Card]) -> int:
        """Remove specific cards from the deck. Returns how many were found."""
        dead = set(cards)
        before = len(self.cards)
        self.cards = [c for c in self.cards if c not in dead]
        return before - len(self.cards)

    def contains(self, card: Card) -> bool:
        return card in self.cards

    def cards_remaining(self) -> int:
        """Cards left to draw."""
        return len(self.cards)

