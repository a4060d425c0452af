"""participants core tables

Revision ID: 0001_participants_core
Revises:
Create Date: 2026-01-12 10:14:03.118402

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001_participants_core'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id():
    return sa.Column("id", sa.Uuid(), primary_key=True, nullable=False)


def _created_at(name="created_at"):
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)


def _owner(name="participant_id", unique=False):
    return sa.Column(
        name,
        sa.Uuid(),
        sa.ForeignKey("participants.id"),
        nullable=False,
        unique=unique,
    )


def upgrade():
    op.create_table(
        "participants",
        _id(),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("nickname", sa.String(length=30), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("role", sa.String(length=16), nullable=False),
        sa.Column("team", sa.String(length=16), nullable=False),
        sa.Column("stream", sa.String(length=16), nullable=False),
        sa.Column("github_username", sa.String(length=39), nullable=True),
        sa.Column("avatar_url", sa.String(length=512), nullable=True),
        sa.Column("repo_url", sa.String(length=512), nullable=True),
        sa.Column("auth_user_id", sa.Uuid(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="approved"),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("receive_notifications", sa.Boolean(), nullable=False, server_default=sa.true()),
        _created_at(),
        _created_at("updated_at"),
        sa.UniqueConstraint("nickname", name="uq_participants_nickname"),
        sa.UniqueConstraint("email", name="uq_participants_email"),
        sa.UniqueConstraint("github_username", name="uq_participants_github_username"),
        sa.UniqueConstraint("auth_user_id", name="uq_participants_auth_user_id"),
        sa.CheckConstraint("nickname ~ '^[a-z0-9_-]{2,30}$'", name="ck_participants_nickname"),
    )

    op.create_table(
        "admin_users",
        _id(),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _created_at(),
    )
    op.create_index("ix_admin_users_user_id", "admin_users", ["user_id"], unique=True)

    op.create_table(
        "leaderboard",
        _id(),
        _owner(unique=True),
        sa.Column("total_points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_submissions", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("on_time_submissions", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("current_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("rank", sa.Integer(), nullable=True),
        _created_at("updated_at"),
    )

    op.create_table(
        "participant_mastery",
        _id(),
        _owner(unique=True),
        sa.Column("mastery_level", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("clearance", sa.String(length=16), nullable=False, server_default="RECRUIT"),
        sa.Column("days_completed", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("artifacts_submitted", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("ai_tutor_sessions", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("peer_assists_given", sa.Integer(), nullable=False, server_default="0"),
    )

    op.create_table(
        "submissions",
        _id(),
        _owner(),
        sa.Column("assignment_key", sa.String(length=64), nullable=False),
        sa.Column("commit_url", sa.String(length=512), nullable=True),
        sa.Column("points", sa.Integer(), nullable=False, server_default="0"),
        _created_at("submitted_at"),
    )

    op.create_table(
        "peer_reviews",
        _id(),
        sa.Column(
            "submission_id",
            sa.Uuid(),
            sa.ForeignKey("submissions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _owner("reviewer_id"),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("feedback", sa.Text(), nullable=True),
        _created_at(),
    )

    op.create_table(
        "participant_achievements",
        _id(),
        _owner(),
        sa.Column("achievement_code", sa.String(length=64), nullable=False),
        _created_at("earned_at"),
        sa.UniqueConstraint("participant_id", "achievement_code", name="uq_participant_achievement"),
    )

    op.create_table(
        "task_force_members",
        _id(),
        sa.Column("task_force_id", sa.Uuid(), nullable=False),
        _owner(),
        sa.Column("member_role", sa.String(length=32), nullable=False, server_default="member"),
    )

    op.create_table(
        "participant_recognitions",
        _id(),
        _owner(),
        sa.Column("recognition_type", sa.String(length=64), nullable=False),
        sa.Column("note", sa.String(length=512), nullable=True),
        _created_at("awarded_at"),
    )

    op.create_table(
        "activity_log",
        _id(),
        _owner(),
        sa.Column("action", sa.String(length=64), nullable=False),
        sa.Column("details_json", sa.JSON(), nullable=False),
        _created_at(),
    )

    op.create_table(
        "comments",
        _id(),
        _owner("author_id"),
        sa.Column("submission_id", sa.Uuid(), nullable=True),
        sa.Column("body", sa.Text(), nullable=False),
        _created_at(),
    )

    for table, column in (
        ("submissions", "participant_id"),
        ("peer_reviews", "reviewer_id"),
        ("peer_reviews", "submission_id"),
        ("participant_achievements", "participant_id"),
        ("task_force_members", "participant_id"),
        ("task_force_members", "task_force_id"),
        ("participant_recognitions", "participant_id"),
        ("activity_log", "participant_id"),
        ("comments", "author_id"),
        ("comments", "submission_id"),
    ):
        op.create_index(f"ix_{table}_{column}", table, [column])


def downgrade():
    for table in (
        "comments",
        "activity_log",
        "participant_recognitions",
        "task_force_members",
        "participant_achievements",
        "peer_reviews",
        "submissions",
        "participant_mastery",
        "leaderboard",
        "admin_users",
        "participants",
    ):
        op.drop_table(table)
