"""Create OrthoSim tables

Revision ID: 001
Revises: 
Create Date: 2026-10-19 10:00:00.000000

"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def _id() -> sa.Column:
    return sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True)


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
    )


def upgrade() -> None:
    op.create_table(
        "users",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("user_type", sa.String(16), nullable=False),
        sa.Column("profile_image", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _created_at(),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_user_type", "users", ["user_type"])

    op.create_table(
        "mentor_profiles",
        _id(),
        sa.Column(
            "user_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("specialization", sa.String(255), nullable=True),
        sa.Column("qualification", sa.String(255), nullable=True),
        sa.Column("department", sa.String(255), nullable=True),
        sa.Column("mentor_code", sa.String(64), nullable=False),
        sa.Column("is_code_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("mentor_code_expiry", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
    )
    op.create_index(
        "ix_mentor_profiles_mentor_code", "mentor_profiles", ["mentor_code"], unique=True
    )

    op.create_table(
        "trainee_profiles",
        _id(),
        sa.Column(
            "user_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column(
            "mentor_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("mentor_profiles.id"),
            nullable=False,
        ),
        sa.Column("institution", sa.String(255), nullable=True),
        sa.Column("graduation_year", sa.Integer(), nullable=True),
        _created_at(),
    )
    op.create_index("ix_trainee_profiles_mentor_id", "trainee_profiles", ["mentor_id"])

    op.create_table(
        "surgery_attempts",
        _id(),
        sa.Column(
            "trainee_profile_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("trainee_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "attempt_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.Column("total_time", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("score", sa.String(16), nullable=False),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("xray_image_path", sa.String(), nullable=True),
        # Reduction
        sa.Column("reduction_duration", sa.Integer(), nullable=True),
        sa.Column("reduction_needed_bone_length", sa.Float(), nullable=True),
        sa.Column("reduction_actual_bone_length", sa.Float(), nullable=True),
        sa.Column("reduction_accuracy", sa.Float(), nullable=True),
        # Entry site
        sa.Column("entry_site_duration", sa.Integer(), nullable=True),
        sa.Column("cutting_accuracy", sa.Float(), nullable=True),
        sa.Column("needed_thandle_depth", sa.Float(), nullable=True),
        sa.Column("actual_thandle_depth", sa.Float(), nullable=True),
        sa.Column("thandle_accuracy", sa.Float(), nullable=True),
        # Nail insertion
        sa.Column("nail_insertion_duration", sa.Integer(), nullable=True),
        sa.Column("needed_wire_depth", sa.Float(), nullable=True),
        sa.Column("actual_wire_depth", sa.Float(), nullable=True),
        sa.Column("wire_position_accuracy", sa.Float(), nullable=True),
        sa.Column("needed_nail_depth", sa.Float(), nullable=True),
        sa.Column("actual_nail_depth", sa.Float(), nullable=True),
        sa.Column("nail_position_accuracy", sa.Float(), nullable=True),
        # Locking and closure
        sa.Column("locking_closure_duration", sa.Integer(), nullable=True),
        sa.Column("steps_accuracy", sa.Float(), nullable=True),
        sa.Column("step_tool_accuracy", sa.Float(), nullable=True),
        sa.Column("first_proximal_screw_accuracy", sa.Float(), nullable=True),
        sa.Column("second_proximal_screw_accuracy", sa.Float(), nullable=True),
        sa.Column("distal_screw_accuracy", sa.Float(), nullable=True),
        sa.Column("tool_usage_order", sa.JSON(), nullable=True),
        sa.Column("nail_locking_steps", sa.JSON(), nullable=True),
        sa.Column("performance_detail", sa.JSON(), nullable=True),
    )
    op.create_index(
        "ix_surgery_attempts_trainee_profile_id", "surgery_attempts", ["trainee_profile_id"]
    )
    op.create_index("ix_surgery_attempts_attempt_date", "surgery_attempts", ["attempt_date"])

    op.create_table(
        "feedbacks",
        _id(),
        sa.Column(
            "surgery_attempt_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("surgery_attempts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "mentor_profile_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("mentor_profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("comment", sa.Text(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=True),
        _created_at(),
        sa.CheckConstraint(
            "rating IS NULL OR (rating >= 1 AND rating <= 5)", name="ck_feedback_rating"
        ),
    )
    op.create_index("ix_feedbacks_surgery_attempt_id", "feedbacks", ["surgery_attempt_id"])
    op.create_index("ix_feedbacks_mentor_profile_id", "feedbacks", ["mentor_profile_id"])

    op.create_table(
        "leaderboard_entries",
        _id(),
        sa.Column(
            "trainee_profile_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("trainee_profiles.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("rank", sa.Integer(), nullable=False),
        sa.Column("best_score", sa.Integer(), nullable=False),
        sa.Column("average_score", sa.Float(), nullable=False),
        sa.Column("total_attempts", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_training_time", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    )

    op.create_table(
        "ai_chat_logs",
        _id(),
        sa.Column(
            "user_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("prompt", sa.Text(), nullable=False),
        sa.Column("response", sa.Text(), nullable=False),
        sa.Column("category", sa.String(64), nullable=False, server_default="general"),
        sa.Column("rating", sa.Integer(), nullable=True),
        sa.Column(
            "timestamp", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    )
    op.create_index("ix_ai_chat_logs_user_id", "ai_chat_logs", ["user_id"])
    op.create_index("ix_ai_chat_logs_timestamp", "ai_chat_logs", ["timestamp"])


def downgrade() -> None:
    op.drop_table("ai_chat_logs")
    op.drop_table("leaderboard_entries")
    op.drop_table("feedbacks")
    op.drop_table("surgery_attempts")
    op.drop_table("trainee_profiles")
    op.drop_table("mentor_profiles")
    op.drop_table("users")
