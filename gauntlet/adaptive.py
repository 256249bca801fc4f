"""Adaptive recommender -- turns recent performance into a spawn-rate multiplier."""

from gauntlet.performance import PerformanceMetrics

LIFE_LOSS_PENALTY_PER_LIFE = 0.02
MAX_LIFE_LOSS_PENALTY = 0.1
SCORE_GAIN_BONUS_PER_POINT = 0.001
MAX_SCORE_GAIN_BONUS = 0.1


def compute_recommendation(metrics: PerformanceMetrics) -> float:
    """Multiplier applied on top of a level's spawn rate.

    Each term is capped at 0.1 but the sum is not, so the result is only
    nominally within [0.9, 1.1] (a negative score gain rate can push it
    lower, a negative lives counter higher).
    """
    lives_lost_penalty = min(
        metrics.lives_lost_in_window * LIFE_LOSS_PENALTY_PER_LIFE,
        MAX_LIFE_LOSS_PENALTY,
    )
    score_gain_bonus = min(
        metrics.score_gain_rate * SCORE_GAIN_BONUS_PER_POINT,
        MAX_SCORE_GAIN_BONUS,
    )
    return 1.0 - lives_lost_penalty + score_gain_bonus
