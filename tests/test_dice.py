"""Unit tests for the die rolling policies."""

import pytest

from rollexpr.dice import roll_choose, roll_dice, roll_exploding, roll_plain, roll_reroll_below
from rollexpr.narration import Draw, DrawKind, DrawMark, Kept, NarrationLog, RollStarted
from rollexpr.nodes import Modifier, ModifierKind, Roll
from rollexpr.random_source import SeededRandomSource


class TestPlain:
    def test_sums_every_die(self, scripted) -> None:
        source = scripted(4, 5, 6)
        assert roll_plain(3, 6, source) == 15
        assert source.calls == [6, 6, 6]

    def test_zero_dice(self, scripted) -> None:
        assert roll_plain(0, 6, scripted()) == 0

    def test_in_range(self) -> None:
        source = SeededRandomSource(1)
        for _ in range(50):
            assert 3 <= roll_plain(3, 8, source) <= 24


class TestChoose:
    def test_keeps_highest(self, scripted) -> None:
        assert roll_choose(4, 6, 3, True, scripted(2, 6, 1, 5)) == 13

    def test_keeps_lowest(self, scripted) -> None:
        assert roll_choose(4, 6, 2, False, scripted(2, 6, 1, 5)) == 3

    def test_keep_zero_totals_zero(self, scripted) -> None:
        source = scripted(6, 6, 6)
        assert roll_choose(3, 6, 0, True, source) == 0
        assert source.exhausted

    def test_keep_more_than_rolled_keeps_everything(self, scripted) -> None:
        assert roll_choose(4, 6, 5, True, scripted(1, 2, 3, 4)) == 10

    def test_duplicates(self, scripted) -> None:
        assert roll_choose(5, 6, 2, True, scripted(6, 3, 6, 6, 1)) == 12

    def test_highest_never_below_lowest(self) -> None:
        for seed in range(20):
            high = roll_choose(5, 10, 2, True, SeededRandomSource(seed))
            low = roll_choose(5, 10, 2, False, SeededRandomSource(seed))
            assert 2 <= low <= high <= 20

    def test_narrates_kept_subset_in_selection_order(self, scripted) -> None:
        log = NarrationLog()
        roll_choose(4, 6, 2, False, scripted(2, 6, 1, 5), log)
        assert log.events[-1] == Kept(ModifierKind.choose_low, (1, 2))
        log = NarrationLog()
        roll_choose(4, 6, 2, True, scripted(2, 6, 1, 5), log)
        assert log.events[-1] == Kept(ModifierKind.choose_high, (6, 5))


class TestRerollBelow:
    def test_redraws_until_above_threshold(self, scripted) -> None:
        source = scripted(1, 2, 5, 3)
        assert roll_reroll_below(2, 6, 2, source) == 8
        assert source.exhausted

    def test_threshold_zero_never_rerolls(self, scripted) -> None:
        assert roll_reroll_below(2, 6, 0, scripted(1, 1)) == 2

    def test_narration_marks_rejected_draws(self, scripted) -> None:
        log = NarrationLog()
        roll_reroll_below(1, 6, 2, scripted(1, 2, 4), log)
        assert log.events == [
            Draw(1, DrawKind.first, DrawMark.rerolled),
            Draw(2, DrawKind.reroll, DrawMark.rerolled),
            Draw(4, DrawKind.reroll),
        ]


class TestExploding:
    def test_explosions_add_to_the_same_die(self, scripted) -> None:
        source = scripted(6, 6, 2, 3)
        assert roll_exploding(2, 6, 6, source) == 17
        assert source.exhausted

    def test_no_explosion(self, scripted) -> None:
        assert roll_exploding(3, 6, 6, scripted(1, 2, 3)) == 6

    def test_narration_marks_extra_draws(self, scripted) -> None:
        log = NarrationLog()
        roll_exploding(1, 6, 5, scripted(5, 6, 1), log)
        assert log.events == [
            Draw(5, DrawKind.first, DrawMark.exploded),
            Draw(6, DrawKind.explosion, DrawMark.exploded),
            Draw(1, DrawKind.explosion),
        ]


class TestRollDice:
    @pytest.mark.parametrize(
        "modifier, faces, expected",
        [
            (None, (3, 4), 7),
            (Modifier(ModifierKind.choose_high, 1), (3, 4), 4),
            (Modifier(ModifierKind.choose_low, 1), (3, 4), 3),
            (Modifier(ModifierKind.reroll_below, 3), (3, 4, 5), 9),
            (Modifier(ModifierKind.explode, 4), (3, 4, 1), 8),
        ],
    )
    def test_dispatches_on_modifier(self, scripted, modifier, faces, expected) -> None:
        assert roll_dice(Roll(2, 6, modifier), scripted(*faces)) == expected

    def test_announces_roll_first(self, scripted) -> None:
        log = NarrationLog()
        roll = Roll(1, 20)
        roll_dice(roll, scripted(17), log)
        assert log.events == [RollStarted(roll), Draw(17)]

    def test_passes_sides_to_source(self, scripted) -> None:
        source = scripted(1, 1)
        roll_dice(Roll(2, 12), source)
        assert source.calls == [12, 12]
