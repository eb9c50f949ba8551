"""Tests for mission composition, seeded shuffling and scoring helpers."""

from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.learning.services.deterministic_shuffle import (
    hash_seed,
    mulberry32,
    seeded_shuffle,
)
from bloomcrux.domain.learning.services.mission_composer import (
    MissionRequest,
    QuestCard,
    QuestSettings,
    compose_mission,
    compute_mission_set,
    compute_pass,
    has_collapse,
    split_into_missions,
    weighted_average,
)

LEVELS = [BloomLevel.REMEMBER] * 4 + [BloomLevel.UNDERSTAND] * 3 + [BloomLevel.APPLY] * 2
CARDS = [QuestCard(card_id=i, bloom_level=level) for i, level in enumerate(LEVELS, start=1)]


class TestDeterministicShuffle:
    def test_fnv1a_hash(self) -> None:
        assert hash_seed("") == 2166136261
        assert hash_seed("a") == 0xE40C292C

    def test_generator_is_reproducible(self) -> None:
        first, second = mulberry32(42), mulberry32(42)
        values = [first() for _ in range(5)]
        assert values == [second() for _ in range(5)]
        assert all(0 <= v < 1 for v in values)

    def test_shuffle_is_a_stable_permutation(self) -> None:
        items = list(range(20))
        shuffled = seeded_shuffle(items, "7:Remember:0")
        assert sorted(shuffled) == items
        assert seeded_shuffle(items, "7:Remember:0") == shuffled
        assert items == list(range(20))


class TestComposeMission:
    def test_remember_mission_has_only_primary_cards(self) -> None:
        mission = compose_mission(MissionRequest(deck_id=7, level=BloomLevel.REMEMBER, cards=CARDS))

        assert mission.primary_ids == [1, 2, 3, 4]
        assert mission.blasts_ids == []
        assert mission.review_ids == []
        assert sorted(mission.mission_ids) == [1, 2, 3, 4]
        assert mission.seed_used == "7:Remember:0"

    def test_apply_mission_mixes_in_lower_levels(self) -> None:
        mission = compose_mission(MissionRequest(deck_id=7, level=BloomLevel.APPLY, cards=CARDS))

        assert mission.primary_ids == [8, 9]
        assert len(mission.blasts_ids) == 2
        assert all(cid <= 7 for cid in mission.blasts_ids)
        assert mission.debug.total == 4

    def test_composition_is_deterministic(self) -> None:
        request = MissionRequest(deck_id=7, level=BloomLevel.APPLY, cards=CARDS, seed="abc")
        assert compose_mission(request) == compose_mission(request)
        assert compose_mission(request).seed_used == "abc"

    def test_blasts_are_trimmed_first_at_the_cap(self) -> None:
        mission = compose_mission(
            MissionRequest(
                deck_id=7,
                level=BloomLevel.APPLY,
                cards=CARDS,
                settings=QuestSettings(mission_cap=3),
            )
        )

        assert mission.debug.trimmed_from_blasts == 1
        assert mission.debug.total == 3

    def test_review_candidates_limited_to_lower_levels(self) -> None:
        sets = compute_mission_set(
            MissionRequest(
                deck_id=7,
                level=BloomLevel.UNDERSTAND,
                cards=CARDS,
                review_candidate_ids=[1, 8, 2, 5],
            )
        )
        assert [c.card_id for c in sets.review] == [1, 2]

    def test_inactive_cards_are_skipped(self) -> None:
        sets = compute_mission_set(
            MissionRequest(
                deck_id=7, level=BloomLevel.REMEMBER, cards=CARDS, active_card_ids={1, 3}
            )
        )
        assert [c.card_id for c in sets.primary] == [1, 3]

    def test_out_of_range_index_yields_empty_primary(self) -> None:
        mission = compose_mission(
            MissionRequest(deck_id=7, level=BloomLevel.REMEMBER, cards=CARDS, mission_index=3)
        )
        assert mission.primary_ids == []

    def test_split_into_missions(self) -> None:
        assert split_into_missions(CARDS[:5], 2) == [[1, 2], [3, 4], [5]]


class TestScoring:
    def test_pass_uses_unrounded_percent(self) -> None:
        result = compute_pass(3, 1.8, 60)
        assert result.passed
        assert result.percent == 60.0

        assert not compute_pass(1000, 599, 60).passed

    def test_pass_percent_rounds_to_one_decimal(self) -> None:
        assert compute_pass(3, 2).percent == 66.7

    def test_empty_mission_fails(self) -> None:
        result = compute_pass(0, 0)
        assert result.percent == 0.0
        assert not result.passed

    def test_weighted_average_favours_recent(self) -> None:
        assert weighted_average([]) == 0
        assert weighted_average([50, 80]) == 70

    def test_collapse_needs_two_consecutive_low_scores(self) -> None:
        assert has_collapse([40, 45])
        assert not has_collapse([40, 60, 45])
        assert not has_collapse([30, 40, 90, 80])
