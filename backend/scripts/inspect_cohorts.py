#!/usr/bin/env python3
"""Print mentor/trainee cohorts and flag trainees pointing at missing mentors.

Usage:
    python scripts/inspect_cohorts.py
    python scripts/inspect_cohorts.py --mentor-code MENTOR_12345678ABCD --rank
"""

import sys
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.orm import Session, selectinload

from orthosim import models  # noqa: F401
from orthosim.core.logging import get_logger, setup_logging
from orthosim.db.session import session_scope
from orthosim.models.profile import MentorProfile, TraineeProfile
from orthosim.performance import SqlLeaderboardRepository, rank_mentor_cohort

logger = get_logger(__name__)


def find_dangling_trainees(db: Session) -> list[TraineeProfile]:
    """Trainees whose mentor_id matches no mentor profile."""
    mentor_ids = {row.id for row in db.query(MentorProfile.id).all()}
    trainees = db.query(TraineeProfile).options(selectinload(TraineeProfile.user)).all()
    return [t for t in trainees if t.mentor_id not in mentor_ids]


def print_cohorts(db: Session, mentor_code: str | None = None, rank: bool = False) -> int:
    query = db.query(MentorProfile).options(
        selectinload(MentorProfile.user),
        selectinload(MentorProfile.trainees).selectinload(TraineeProfile.user),
    )
    if mentor_code:
        query = query.filter(MentorProfile.mentor_code == mentor_code)
    mentors = query.order_by(MentorProfile.created_at).all()

    if not mentors:
        print("No mentors found.")

    for mentor in mentors:
        status = "active" if mentor.is_code_active else "inactive"
        print(f"\n{mentor.user.name} <{mentor.user.email}>  code={mentor.mentor_code} ({status})")
        if not mentor.trainees:
            print("  (no trainees)")
        for trainee in mentor.trainees:
            print(f"  - {trainee.user.name} <{trainee.user.email}> {trainee.institution or ''}")

        if rank:
            ranked = rank_mentor_cohort(SqlLeaderboardRepository(db), mentor.id, persist=False)
            for entry in ranked:
                print(
                    f"    #{entry.rank} {entry.member.name}: best {entry.best_score_display}, "
                    f"avg {entry.average_score_display}"
                )

    dangling = find_dangling_trainees(db)
    if dangling:
        print(f"\n✗ {len(dangling)} trainee(s) reference a missing mentor:")
        for trainee in dangling:
            name = trainee.user.name if trainee.user else "?"
            print(f"  - {name} (trainee {trainee.id}, mentor_id {trainee.mentor_id})")
    else:
        print("\n✓ Every trainee is attached to an existing mentor")
    return len(dangling)


def main() -> None:
    import argparse

    parser = argparse.ArgumentParser(description="Inspect mentor/trainee cohorts")
    parser.add_argument("--mentor-code", type=str, default=None, help="Only show this mentor")
    parser.add_argument(
        "--rank", action="store_true", help="Also print the current cohort ranking"
    )
    parser.add_argument(
        "--log-level", type=str, default="WARNING", help="Log level for ranking events"
    )
    args = parser.parse_args()
    setup_logging(level=args.log_level)

    try:
        with session_scope() as db:
            dangling = print_cohorts(db, mentor_code=args.mentor_code, rank=args.rank)
    except Exception as e:
        logger.error(f"Cohort inspection failed: {e}", exc_info=True)
        print(f"\n✗ Error inspecting cohorts: {e}")
        sys.exit(1)

    sys.exit(1 if dangling else 0)


if __name__ == "__main__":
    main()
