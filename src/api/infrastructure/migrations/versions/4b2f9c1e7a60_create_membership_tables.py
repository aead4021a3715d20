"""create membership tables

Revision ID: 4b2f9c1e7a60
Revises:
Create Date: 2026-10-19 10:12:03.418552

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "4b2f9c1e7a60"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(length=255), nullable=False),  # auth subject id
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("city", sa.String(length=255), nullable=True),
        sa.Column("favorite_sport", sa.String(length=100), nullable=True),
        sa.Column("avatar_url", sa.String(length=2048), nullable=True),
        sa.Column("is_premium", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "events",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("sport_type", sa.String(length=100), nullable=False),
        sa.Column("location", sa.String(length=500), nullable=False),
        # Organizer's local time, no zone
        sa.Column("starts_at", sa.DateTime(timezone=False), nullable=False),
        sa.Column("max_participants", sa.Integer(), nullable=True),
        sa.Column("creator_id", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "max_participants IS NULL OR max_participants >= 1",
            name="ck_events_max_participants_positive",
        ),
    )
    op.create_index(
        op.f("ix_events_creator_id"), "events", ["creator_id"], unique=False
    )

    op.create_table(
        "event_participants",
        sa.Column("event_id", sa.String(length=255), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("confirmed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "checked_in", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("checked_in_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("event_id", "user_id"),
        sa.CheckConstraint(
            "(checked_in = false AND checked_in_at IS NULL) OR "
            "(checked_in = true AND checked_in_at IS NOT NULL "
            "AND checked_in_at >= confirmed_at)",
            name="ck_event_participants_check_in",
        ),
    )
    op.create_index(
        op.f("ix_event_participants_user_id"),
        "event_participants",
        ["user_id"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(
        op.f("ix_event_participants_user_id"), table_name="event_participants"
    )
    op.drop_table("event_participants")
    op.drop_index(op.f("ix_events_creator_id"), table_name="events")
    op.drop_table("events")
    op.drop_table("profiles")
