"""Cohort ranker. Deterministic, dense, 1-based, no shared rank numbers."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from uuid import UUID

from orthosim.performance.aggregator import (
    AttemptRecord,
    NoData,
    TraineeMetrics,
    compute_trainee_metrics,
)
from orthosim.performance.formatting import format_percent


@dataclass(frozen=True)
class CohortMember:
    """One trainee plus their attempt history, as fetched for ranking."""

    trainee_id: UUID
    attempts: Sequence[AttemptRecord] = field(default_factory=tuple)
    user_id: UUID | None = None
    name: str = ""
    email: str = ""
    institution: str | None = None
    graduation_year: int | None = None


@dataclass(frozen=True)
class RankedEntry:
    rank: int
    member: CohortMember
    metrics: TraineeMetrics

    @property
    def trainee_id(self) -> UUID:
        return self.member.trainee_id

    @property
    def best_score_display(self) -> str:
        return format_percent(self.metrics.best_score)

    @property
    def average_score_display(self) -> str:
        return format_percent(self.metrics.average_score, decimals=1)


def _sort_key(item: tuple[CohortMember, TraineeMetrics]) -> tuple[int, float, str]:
    member, metrics = item
    # best desc, then average desc, then trainee id asc
    return (-metrics.best_score, -metrics.average_score, str(member.trainee_id))


def rank_cohort(members: Iterable[CohortMember]) -> list[RankedEntry]:
    """
    Rank every member that has scored data.

    Members whose aggregation yields NoData are left out entirely (unranked,
    not rank 0). Ranks are assigned only after the whole cohort is aggregated.
    """
    scored: list[tuple[CohortMember, TraineeMetrics]] = []
    for member in members:
        result = compute_trainee_metrics(member.attempts)
        if isinstance(result, NoData):
            continue
        scored.append((member, result))

    scored.sort(key=_sort_key)
    return [
        RankedEntry(rank=idx + 1, member=member, metrics=metrics)
        for idx, (member, metrics) in enumerate(scored)
    ]
