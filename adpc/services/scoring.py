# adpc/services/scoring.py
from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Sequence

from adpc.core.config import ADPC_DIMENSIONS, FALLBACK_PROFILE
from adpc.services.validation import ScoredResponse


@dataclass(frozen=True)
class ScoreOutcome:
    scores: dict[str, int]
    primary_profile: str


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def normalize(chosen: float, min_possible: float, max_possible: float) -> int:
    """
    Reescala `chosen` a 0..100 dentro de [min_possible, max_possible].
    Sin rango (max <= min) puntúa 0. El resultado siempre se acota a [0, 100].
    """
    span = max_possible - min_possible
    if span <= 0:
        return 0
    score = _round_half_up((chosen - min_possible) / span * 100)
    return max(0, min(100, score))


def pick_primary_profile(scores: dict[str, int], dimensions: Sequence[str], fallback: str = FALLBACK_PROFILE) -> str:
    # Gana el primero en `dimensions` con el puntaje estrictamente mayor
    best, best_score = None, 0
    for dim in dimensions:
        if scores.get(dim, 0) > best_score:
            best, best_score = dim, scores[dim]
    return best if best is not None else fallback


def compute_scores(
    scored: Iterable[ScoredResponse],
    dimensions: Sequence[str] = ADPC_DIMENSIONS,
    fallback: str = FALLBACK_PROFILE,
) -> ScoreOutcome:
    chosen: dict[str, float] = defaultdict(float)
    min_possible: dict[str, float] = defaultdict(float)
    max_possible: dict[str, float] = defaultdict(float)

    for r in scored:
        chosen[r.dimension] += r.weight
        # min/max por pregunta respondida, bajo la dimensión de la pregunta
        min_possible[r.question_dimension] += r.min_weight
        max_possible[r.question_dimension] += r.max_weight

    scores = {
        dim: normalize(chosen.get(dim, 0.0), min_possible.get(dim, 0.0), max_possible.get(dim, 0.0))
        for dim in dimensions
    }
    return ScoreOutcome(scores=scores, primary_profile=pick_primary_profile(scores, dimensions, fallback))
