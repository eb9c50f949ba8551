"""Card formats and the Bloom level each one exercises by default."""

from enum import Enum

from bloomcrux.domain.learning.bloom import BloomLevel


class CardType(str, Enum):
    STANDARD_MCQ = "Standard MCQ"
    FILL_IN_THE_BLANK = "Fill in the Blank"
    SHORT_ANSWER = "Short Answer"
    SORTING = "Sorting"
    SEQUENCING = "Sequencing"
    COMPARE_CONTRAST = "Compare/Contrast"
    TWO_TIER_MCQ = "Two-Tier MCQ"
    CER = "CER"

    def __str__(self) -> str:
        return self.value

    @property
    def default_bloom_level(self) -> BloomLevel:
        return DEFAULT_BLOOM_BY_TYPE.get(self, BloomLevel.REMEMBER)


DEFAULT_BLOOM_BY_TYPE: dict[CardType, BloomLevel] = {
    CardType.STANDARD_MCQ: BloomLevel.REMEMBER,
    CardType.FILL_IN_THE_BLANK: BloomLevel.REMEMBER,
    CardType.SHORT_ANSWER: BloomLevel.UNDERSTAND,
    CardType.SORTING: BloomLevel.UNDERSTAND,
    CardType.SEQUENCING: BloomLevel.UNDERSTAND,
    CardType.COMPARE_CONTRAST: BloomLevel.ANALYZE,
    CardType.TWO_TIER_MCQ: BloomLevel.APPLY,
    CardType.CER: BloomLevel.EVALUATE,
}
