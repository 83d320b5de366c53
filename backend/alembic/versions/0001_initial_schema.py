"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates all tables for the Up For Something backend:
users, friendships, user_statuses, availability_days, events,
event_participants, shout_messages.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("user_id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("bio", sa.String(280), nullable=True),
        sa.Column("avatar_url", sa.String(512), nullable=True),
        sa.Column("home_location", sa.String(80), nullable=True),
        sa.Column("custom_location", sa.String(80), nullable=True),
        sa.Column("use_custom_location", sa.Boolean, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- friendships ---
    op.create_table(
        "friendships",
        sa.Column("friendship_id", sa.String(36), primary_key=True),
        sa.Column("user_a_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False, index=True),
        sa.Column("user_b_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False, index=True),
        sa.Column("pair_key", sa.String(73), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("pair_key", name="uq_friendship_pair"),
    )

    # --- user_statuses ---
    op.create_table(
        "user_statuses",
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.user_id"), primary_key=True),
        sa.Column("mode", sa.String(20), nullable=False, server_default="off"),
        sa.Column("text", sa.String(64), nullable=True),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- availability_days ---
    op.create_table(
        "availability_days",
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.user_id"), primary_key=True),
        sa.Column("date", sa.Date, primary_key=True),
        sa.Column("is_up", sa.Boolean, nullable=False, server_default="0"),
        sa.Column("up_text", sa.String(64), nullable=True),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- events ---
    op.create_table(
        "events",
        sa.Column("event_id", sa.String(36), primary_key=True),
        sa.Column("host_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False, index=True),
        sa.Column("activity", sa.String(64), nullable=False),
        sa.Column("start_time_utc", sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column("location", sa.String(80), nullable=True),
        sa.Column("notes", sa.String(500), nullable=True),
        sa.Column("image_url", sa.String(512), nullable=True),
        sa.Column("is_instant", sa.Boolean, nullable=False, server_default="0"),
        sa.Column("is_potential", sa.Boolean, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- event_participants ---
    op.create_table(
        "event_participants",
        sa.Column("event_id", sa.String(36), sa.ForeignKey("events.event_id"), primary_key=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.user_id"), primary_key=True, index=True),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="invited"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
    )

    # --- shout_messages ---
    op.create_table(
        "shout_messages",
        sa.Column("shout_id", sa.String(36), primary_key=True),
        sa.Column("event_id", sa.String(36), sa.ForeignKey("events.event_id"), nullable=False, index=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("message", sa.String(500), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("shout_messages")
    op.drop_table("event_participants")
    op.drop_table("events")
    op.drop_table("availability_days")
    op.drop_table("user_statuses")
    op.drop_table("friendships")
    op.drop_table("users")
