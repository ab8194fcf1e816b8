"""Tests for target-muscle efficiency scoring and bottleneck detection."""

from __future__ import annotations

import pytest

from fatigue_engine.models.enums import Muscle
from fatigue_engine.models.exercise import Exercise, MuscleEngagement
from fatigue_engine.scoring.efficiency import (
    EFFICIENT_BADGE,
    LIMITED_BADGE,
    POOR_BADGE,
    calculate_efficiency_score,
    efficiency_badge,
    find_bottleneck_muscle,
    rank_exercises_for_target,
)

TRICEPS_DAY_FATIGUE = {Muscle.TRICEPS: 40.0, Muscle.PECTORALIS: 85.0, Muscle.FOREARMS: 30.0}


class TestEfficiencyScore:
    def test_isolation_beats_compound_when_chest_is_fatigued(
        self, tricep_extension: Exercise, close_grip_press: Exercise
    ) -> None:
        isolation = calculate_efficiency_score(
            Muscle.TRICEPS, tricep_extension.engagements, TRICEPS_DAY_FATIGUE
        )
        compound = calculate_efficiency_score(
            Muscle.TRICEPS, close_grip_press.engagements, TRICEPS_DAY_FATIGUE
        )
        # 0.9 × 60 / (0.1 × 70) and 0.75 × 60 / (0.7 × 15)
        assert isolation == pytest.approx(54.0 / 7.0)
        assert compound == pytest.approx(45.0 / 10.5)
        assert isolation > compound

    def test_pure_isolation_returns_target_score(self) -> None:
        score = calculate_efficiency_score(
            Muscle.BICEPS, [MuscleEngagement(Muscle.BICEPS, 80)], {Muscle.BICEPS: 25.0}
        )
        assert score == pytest.approx(60.0)

    def test_target_not_engaged(self, bench_press: Exercise) -> None:
        assert calculate_efficiency_score(Muscle.CALVES, bench_press.engagements, {}) == 0.0

    def test_exhausted_supporter_gives_zero(self, close_grip_press: Exercise) -> None:
        score = calculate_efficiency_score(
            Muscle.TRICEPS, close_grip_press.engagements, {Muscle.PECTORALIS: 100.0}
        )
        assert score == 0.0

    def test_missing_fatigue_counts_as_fresh(self, close_grip_press: Exercise) -> None:
        score = calculate_efficiency_score(Muscle.TRICEPS, close_grip_press.engagements, {})
        assert score == pytest.approx(75.0 / 70.0)


class TestBottleneck:
    def test_most_limiting_supporter(self, bench_press: Exercise) -> None:
        fatigue = {Muscle.TRICEPS: 90.0, Muscle.DELTOIDS: 10.0}
        assert find_bottleneck_muscle(Muscle.PECTORALIS, bench_press.engagements, fatigue) is Muscle.TRICEPS

    def test_none_for_isolation(self) -> None:
        assert find_bottleneck_muscle(Muscle.CORE, [MuscleEngagement(Muscle.CORE, 90)], {}) is None


class TestBadge:
    @pytest.mark.parametrize(
        "score,badge",
        [(7.7, EFFICIENT_BADGE), (5.01, EFFICIENT_BADGE), (5.0, LIMITED_BADGE), (2.0, LIMITED_BADGE), (1.99, POOR_BADGE)],
    )
    def test_thresholds(self, score: float, badge: object) -> None:
        assert efficiency_badge(score) == badge

    def test_colors(self) -> None:
        assert (EFFICIENT_BADGE.color, LIMITED_BADGE.color, POOR_BADGE.color) == ("green", "yellow", "red")


class TestRankExercises:
    def test_sorted_descending(
        self, tricep_extension: Exercise, close_grip_press: Exercise, bench_press: Exercise
    ) -> None:
        results = rank_exercises_for_target(
            Muscle.TRICEPS, [close_grip_press, bench_press, tricep_extension], TRICEPS_DAY_FATIGUE
        )
        assert [r.exercise.id for r in results][0] == "tricep-extension"
        assert [r.score for r in results] == sorted((r.score for r in results), reverse=True)

    def test_excludes_unrelated_exercises(self, pull_up: Exercise, tricep_extension: Exercise) -> None:
        results = rank_exercises_for_target(Muscle.TRICEPS, [pull_up, tricep_extension], {})
        assert [r.exercise.id for r in results] == ["tricep-extension"]

    def test_explanation_names_bottleneck(self, close_grip_press: Exercise) -> None:
        (result,) = rank_exercises_for_target(Muscle.TRICEPS, [close_grip_press], TRICEPS_DAY_FATIGUE)
        assert result.bottleneck is Muscle.PECTORALIS
        assert result.explanation == "Limited by Pectoralis (85% fatigued)"
        assert result.badge == LIMITED_BADGE
