# grant_review/services/scoring_service.py
"""
Composite score arithmetic. Pure functions, no database access.
"""
import math
from typing import Mapping

PCT_MIN = 0.0
PCT_MAX = 100.0


def clamp_pct(value: float) -> float:
    return max(PCT_MIN, min(PCT_MAX, float(value)))


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def compute_score_pct(
    weights: Mapping[int, float],
    values: Mapping[int, float],
) -> int | None:
    """
    Weighted average of the note values, as a rounded percentage.

    - ``weights``: criterion id -> weight, scorable criteria only (weight > 0)
    - ``values``: criterion id -> note value in [0, 100]

    A criterion without a note is left out of both sums, it does not count
    as zero. Returns None when no scorable criterion has a note.
    """
    weighted_sum = 0.0
    weight_sum = 0.0
    for criterion_id, weight in weights.items():
        if weight <= 0:
            continue
        value = values.get(criterion_id)
        if value is None:
            continue
        weighted_sum += value * weight
        weight_sum += weight

    if weight_sum <= 0:
        return None
    return round_half_up(weighted_sum / weight_sum)
