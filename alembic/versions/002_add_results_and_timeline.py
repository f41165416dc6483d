"""Add race results, race timeline and profile bio.

Revision ID: 002_add_results_and_timeline
Revises: 001_initial
Create Date: 2026-10-20 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "002_add_results_and_timeline"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # Profile bio
    op.add_column("users", sa.Column("bio", sa.Text(), nullable=False, server_default=""))
    op.add_column("users", sa.Column("profile_image", sa.String(2048), nullable=True))

    # Create event_results table
    op.create_table(
        "event_results",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("event_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("date_range", sa.String(100), nullable=False),
        sa.Column("document_url", sa.String(2048), nullable=False),
        sa.Column("document_name", sa.String(200), nullable=False),
        sa.Column("boat_class", sa.String(100), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_event_results_event_id", "event_results", ["event_id"], unique=False)

    # Create race_timelines table
    op.create_table(
        "race_timelines",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("event_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, default=False),
        sa.Column("require_approval", sa.Boolean(), nullable=False, default=True),
        sa.Column("allow_public_viewing", sa.Boolean(), nullable=False, default=False),
        sa.Column("allow_participant_posting", sa.Boolean(), nullable=False, default=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("event_id"),
    )

    # Create timeline_posts table
    op.create_table(
        "timeline_posts",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("timeline_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("media_url", sa.String(2048), nullable=True),
        sa.Column("media_type", sa.String(50), nullable=True),
        sa.Column("is_approved", sa.Boolean(), nullable=False, default=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["timeline_id"], ["race_timelines.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_timeline_posts_timeline_id", "timeline_posts", ["timeline_id"], unique=False)
    op.create_index("ix_timeline_posts_user_id", "timeline_posts", ["user_id"], unique=False)

    # Create timeline_post_likes table
    op.create_table(
        "timeline_post_likes",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("post_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["post_id"], ["timeline_posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("post_id", "user_id", name="uq_timeline_post_likes_post_user"),
    )
    op.create_index("ix_timeline_post_likes_post_id", "timeline_post_likes", ["post_id"], unique=False)

    # Create timeline_post_comments table
    op.create_table(
        "timeline_post_comments",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("post_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["post_id"], ["timeline_posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_timeline_post_comments_post_id", "timeline_post_comments", ["post_id"], unique=False)


def downgrade() -> None:
    op.drop_table("timeline_post_comments")
    op.drop_table("timeline_post_likes")
    op.drop_table("timeline_posts")
    op.drop_table("race_timelines")
    op.drop_table("event_results")
    op.drop_column("users", "profile_image")
    op.drop_column("users", "bio")
