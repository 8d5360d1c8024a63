"""Trainee performance aggregation and cohort ranking."""

from orthosim.performance.aggregator import (
    NO_DATA,
    AttemptRecord,
    NoData,
    TraineeMetrics,
    compute_trainee_metrics,
    parse_score,
)
from orthosim.performance.ranker import CohortMember, RankedEntry, rank_cohort
from orthosim.performance.service import (
    LeaderboardRepository,
    PersistenceError,
    RankingError,
    SqlLeaderboardRepository,
    UpstreamFetchError,
    compute_cohort_ranking,
    rank_mentor_cohort,
)

__all__ = [
    "NO_DATA",
    "AttemptRecord",
    "CohortMember",
    "LeaderboardRepository",
    "NoData",
    "PersistenceError",
    "RankedEntry",
    "RankingError",
    "SqlLeaderboardRepository",
    "TraineeMetrics",
    "UpstreamFetchError",
    "compute_cohort_ranking",
    "compute_trainee_metrics",
    "parse_score",
    "rank_cohort",
    "rank_mentor_cohort",
]
