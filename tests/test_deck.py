from __future__ import annotations

import random

import pytest

from holdem_sim.engine.deck import FULL_DECK, Card, Deck, Suit, format_cards, has_duplicates, parse_cards
from holdem_sim.errors import DeckExhausted, InvalidCard


class TestCard:
    def test_from_string(self) -> None:
        card = Card.from_string("Ah")
        assert card.rank == "A"
        assert card.suit == Suit.HEARTS
        assert card.value == 14
        assert str(card) == "Ah"

    def test_ten_and_case_insensitive_suit(self) -> None:
        assert Card.from_string("10H") == Card("T", Suit.HEARTS)

    def test_cards_are_hashable_values(self) -> None:
        assert len({Card.from_string("Kd"), Card("K", Suit.DIAMONDS)}) == 1

    @pytest.mark.parametrize("text", ["", "A", "1h", "Ax", "AhK"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(InvalidCard):
            Card.from_string(text)

    def test_invalid_rank_on_construction(self) -> None:
        with pytest.raises(InvalidCard):
            Card("Z", Suit.SPADES)


class TestParseCards:
    def test_concatenated(self) -> None:
        assert format_cards(parse_cards("Kh7d2c")) == "Kh 7d 2c"

    def test_separated(self) -> None:
        assert format_cards(parse_cards("Kh, 7d 2c")) == "Kh 7d 2c"

    def test_iterable_and_none(self) -> None:
        ace = Card.from_string("As")
        assert parse_cards(["Kh", ace]) == [Card.from_string("Kh"), ace]
        assert parse_cards(None) == []
        assert parse_cards("") == []

    def test_odd_length_chunk(self) -> None:
        with pytest.raises(InvalidCard):
            parse_cards("Kh7")

    def test_has_duplicates(self) -> None:
        assert has_duplicates(parse_cards("AhKhAh"))
        assert not has_duplicates(parse_cards("AhKhQh"))


class TestDeck:
    def test_standard_52(self) -> None:
        deck = Deck.standard_52()
        assert deck.cards_remaining() == 52
        assert len(set(deck.cards)) == 52
        for suit in Suit:
            assert sum(1 for c in deck.cards if c.suit == suit) == 13

    def test_standard_52_is_independent(self) -> None:
        deck = Deck.standard_52()
        deck.draw(5)
        assert len(FULL_DECK) == 52
        assert Deck.standard_52().cards_remaining() == 52

    def test_draw_removes_cards(self) -> None:
        deck = Deck.standard_52()
        drawn = deck.draw(3)
        assert len(drawn) == 3
        assert deck.cards_remaining() == 49
        assert not any(deck.contains(c) for c in drawn)

    def test_draw_zero(self) -> None:
        deck = Deck.standard_52()
        assert deck.draw(0) == []
        assert deck.cards_remaining() == 52

    def test_draw_too_many(self) -> None:
        deck = Deck.without(FULL_DECK[:50])
        with pytest.raises(DeckExhausted) as exc:
            deck.draw(3)
        assert exc.value.needed == 3
        assert exc.value.remaining == 2

    def test_without_and_remove(self) -> None:
        dead = parse_cards("AhKh")
        deck = Deck.without(dead)
        assert deck.cards_remaining() == 50
        assert deck.remove_cards(parse_cards("AhQh")) == 1
        assert deck.cards_remaining() == 49

    def test_seeded_shuffle_is_reproducible(self) -> None:
        a, b = Deck.standard_52(), Deck.standard_52()
        a.shuffle(random.Random(3))
        b.shuffle(random.Random(3))
        assert a.cards == b.cards
        assert sorted(a.cards, key=str) == sorted(FULL_DECK, key=str)
