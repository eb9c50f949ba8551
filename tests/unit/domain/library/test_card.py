"""Tests for Card entity and card types."""

import pytest

from bloomcrux.domain.common.exceptions import ValidationError
from bloomcrux.domain.common.value_objects.ids import DeckId
from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.library.entities.card import Card
from bloomcrux.domain.library.value_objects.card_type import CardType


class TestCardType:
    def test_default_levels(self) -> None:
        assert CardType("Sorting").default_bloom_level == BloomLevel.UNDERSTAND
        assert CardType.CER.default_bloom_level == BloomLevel.EVALUATE
        assert CardType.COMPARE_CONTRAST.default_bloom_level == BloomLevel.ANALYZE

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError):
            CardType("Crossword")


class TestCard:
    def test_level_defaults_from_type(self) -> None:
        card = Card.create(DeckId(1), CardType.TWO_TIER_MCQ, "  Why?  ")
        assert card.bloom_level == BloomLevel.APPLY
        assert card.front == "Why?"
        assert not card.id.is_persisted

    def test_explicit_level_wins(self) -> None:
        card = Card.create(DeckId(1), CardType.STANDARD_MCQ, "Q", bloom_level=BloomLevel.CREATE)
        assert card.level == BloomLevel.CREATE

    def test_change_type_resets_level(self) -> None:
        card = Card.create(DeckId(1), CardType.STANDARD_MCQ, "Q", bloom_level=BloomLevel.CREATE)
        card.change_type(CardType.SHORT_ANSWER)
        assert card.bloom_level == BloomLevel.UNDERSTAND

    def test_blank_front_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Card.create(DeckId(1), CardType.STANDARD_MCQ, "   ")
        card = Card.create(DeckId(1), CardType.STANDARD_MCQ, "Q")
        with pytest.raises(ValidationError):
            card.update_content(front="")

    def test_negative_position_rejected(self) -> None:
        card = Card.create(DeckId(1), CardType.STANDARD_MCQ, "Q")
        with pytest.raises(ValidationError):
            card.move_to(-1)
