"""Reduce a trainee's attempt history to scalar performance metrics.

Scores arrive the way the simulator writes them ("82%"). Anything that does
not parse to an integer percentage in [0, 100] is dropped from the statistics
instead of failing the whole computation.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

IMPROVEMENT_MIN_SCORED = 6
IMPROVEMENT_WINDOW = 3

_SCORE_RE = re.compile(r"^\s*(\d{1,3})\s*%?\s*$")


@dataclass(frozen=True)
class AttemptRecord:
    """The slice of a surgery attempt the aggregator needs."""

    score: str | None
    total_time: int
    attempt_date: datetime
    is_completed: bool = True


@dataclass(frozen=True)
class TraineeMetrics:
    best_score: int
    average_score: float
    total_training_time: int
    improvement_rate: float
    improvement_rate_available: bool
    total_attempts: int
    scored_attempts: int
    last_activity_at: datetime | None
    kind: Literal["metrics"] = "metrics"


@dataclass(frozen=True)
class NoData:
    """No completed attempt with a parseable score."""

    kind: Literal["no_data"] = "no_data"


NO_DATA = NoData()

MetricsResult = TraineeMetrics | NoData


def parse_score(raw: str | None) -> int | None:
    """Parse "82%" (or "82") into 82; None for anything else."""
    if raw is None:
        return None
    match = _SCORE_RE.match(raw)
    if not match:
        return None
    value = int(match.group(1))
    if value > 100:
        return None
    return value


def _mean(values: list[int]) -> float:
    return sum(values) / len(values)


def improvement_rate(scores: list[int]) -> float:
    """Percent change between the mean of the first and last three scores.

    0.0 when fewer than six scores exist or the early mean is zero.
    """
    if len(scores) < IMPROVEMENT_MIN_SCORED:
        return 0.0
    first_mean = _mean(scores[:IMPROVEMENT_WINDOW])
    if first_mean == 0:
        return 0.0
    last_mean = _mean(scores[-IMPROVEMENT_WINDOW:])
    return (last_mean - first_mean) / first_mean * 100.0


def compute_trainee_metrics(attempts: Iterable[AttemptRecord]) -> MetricsResult:
    """Aggregate one trainee's attempts.

    Only completed attempts are scored; training time accrues over every
    attempt supplied.
    """
    ordered = sorted(attempts, key=lambda a: a.attempt_date)
    completed = [a for a in ordered if a.is_completed]

    scores = [s for s in (parse_score(a.score) for a in completed) if s is not None]
    if not scores:
        return NO_DATA

    rate = improvement_rate(scores)
    first_mean = _mean(scores[:IMPROVEMENT_WINDOW])
    return TraineeMetrics(
        best_score=max(scores),
        average_score=_mean(scores),
        total_training_time=sum(a.total_time or 0 for a in ordered),
        improvement_rate=rate,
        improvement_rate_available=len(scores) >= IMPROVEMENT_MIN_SCORED and first_mean != 0,
        total_attempts=len(completed),
        scored_attempts=len(scores),
        last_activity_at=ordered[-1].attempt_date,
    )
