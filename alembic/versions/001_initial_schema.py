"""Initial schema: users, library, quest state and economy.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
    ]


def _updated_at() -> sa.Column:
    return sa.Column(
        "updated_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("(CURRENT_TIMESTAMP)"),
        nullable=False,
    )


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("external_id", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_external_id"), "users", ["external_id"], unique=True)

    op.create_table(
        "folders",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "name", name="uq_folder_user_name"),
    )
    op.create_index(op.f("ix_folders_id"), "folders", ["id"], unique=False)
    op.create_index(op.f("ix_folders_user_id"), "folders", ["user_id"], unique=False)

    op.create_table(
        "decks",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("folder_id", sa.Integer(), nullable=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["folder_id"], ["folders.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_decks_id"), "decks", ["id"], unique=False)
    op.create_index(op.f("ix_decks_user_id"), "decks", ["user_id"], unique=False)
    op.create_index(op.f("ix_decks_folder_id"), "decks", ["folder_id"], unique=False)

    op.create_table(
        "cards",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("deck_id", sa.Integer(), nullable=False),
        sa.Column("card_type", sa.String(40), nullable=False),
        sa.Column("bloom_level", sa.String(20), nullable=True),
        sa.Column("front", sa.Text(), nullable=False),
        sa.Column("back", sa.Text(), nullable=False, server_default=""),
        sa.Column("meta", sa.JSON(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("starred", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.ForeignKeyConstraint(["deck_id"], ["decks.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_cards_id"), "cards", ["id"], unique=False)
    op.create_index(op.f("ix_cards_deck_id"), "cards", ["deck_id"], unique=False)
    op.create_index(op.f("ix_cards_bloom_level"), "cards", ["bloom_level"], unique=False)

    op.create_table(
        "card_masteries",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("deck_id", sa.Integer(), nullable=False),
        sa.Column("card_id", sa.Integer(), nullable=False),
        sa.Column("bloom_level", sa.String(20), nullable=False),
        sa.Column("card_type", sa.String(40), nullable=True),
        sa.Column("ef", sa.Float(), nullable=False, server_default="2.5"),
        sa.Column("reps", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("interval_days", sa.Float(), nullable=False, server_default="0"),
        sa.Column("next_due_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("history", sa.JSON(), nullable=False),
        sa.Column("lapses", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("stability", sa.Float(), nullable=False, server_default="1"),
        sa.Column("difficulty", sa.Float(), nullable=False, server_default="0"),
        sa.Column("relearn_stage", sa.Integer(), nullable=True),
        sa.Column("retention_target", sa.Float(), nullable=False, server_default="0.9"),
        sa.Column("spaced_short_ok", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("spaced_long_ok", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "consecutive_spaced_successes", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column("last_gap_days", sa.Float(), nullable=True),
        sa.Column("accuracy_k", sa.Integer(), nullable=False, server_default="8"),
        sa.Column("accuracy_ptr", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("accuracy_outcomes", sa.JSON(), nullable=False),
        sa.Column("confidence_ewma", sa.Float(), nullable=False, server_default="0"),
        sa.Column("confidence_lambda", sa.Float(), nullable=False, server_default="0.6"),
        sa.Column("retention", sa.Float(), nullable=False, server_default="0"),
        sa.Column("accuracy", sa.Float(), nullable=False, server_default="0"),
        sa.Column("confidence", sa.Float(), nullable=False, server_default="0"),
        sa.Column("mastery", sa.Float(), nullable=False, server_default="0"),
        _updated_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["deck_id"], ["decks.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["card_id"], ["cards.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "card_id", name="uq_card_mastery_user_card"),
    )
    op.create_index(op.f("ix_card_masteries_id"), "card_masteries", ["id"], unique=False)
    op.create_index(
        op.f("ix_card_masteries_user_id"), "card_masteries", ["user_id"], unique=False
    )
    op.create_index(
        op.f("ix_card_masteries_deck_id"), "card_masteries", ["deck_id"], unique=False
    )
    op.create_index(
        op.f("ix_card_masteries_card_id"), "card_masteries", ["card_id"], unique=False
    )
    op.create_index(
        op.f("ix_card_masteries_next_due_at"), "card_masteries", ["next_due_at"], unique=False
    )

    op.create_table(
        "card_performances",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("deck_id", sa.Integer(), nullable=False),
        sa.Column("card_id", sa.Integer(), nullable=False),
        sa.Column("attempts", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("correct", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_seen_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["deck_id"], ["decks.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["card_id"], ["cards.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "deck_id", "card_id", name="uq_card_performance"),
    )
    op.create_index(op.f("ix_card_performances_id"), "card_performances", ["id"], unique=False)
    op.create_index(
        op.f("ix_card_performances_user_id"), "card_performances", ["user_id"], unique=False
    )
    op.create_index(
        op.f("ix_card_performances_deck_id"), "card_performances", ["deck_id"], unique=False
    )
    op.create_index(
        op.f("ix_card_performances_card_id"), "card_performances", ["card_id"], unique=False
    )

    op.create_table(
        "bloom_masteries",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("deck_id", sa.Integer(), nullable=False),
        sa.Column("bloom_level", sa.String(20), nullable=False),
        sa.Column("correctness_ewma", sa.Float(), nullable=False, server_default="0"),
        sa.Column("retention_strength", sa.Float(), nullable=False, server_default="0"),
        sa.Column("coverage", sa.Float(), nullable=False, server_default="0"),
        sa.Column("mastery_pct", sa.Integer(), nullable=False, server_default="0"),
        _updated_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["deck_id"], ["decks.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "deck_id", "bloom_level", name="uq_bloom_mastery"),
    )
    op.create_index(op.f("ix_bloom_masteries_id"), "bloom_masteries", ["id"], unique=False)
    op.create_index(
        op.f("ix_bloom_masteries_user_id"), "bloom_masteries", ["user_id"], unique=False
    )
    op.create_index(
        op.f("ix_bloom_masteries_deck_id"), "bloom_masteries", ["deck_id"], unique=False
    )

    op.create_table(
        "mission_attempts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("deck_id", sa.Integer(), nullable=False),
        sa.Column("bloom_level", sa.String(20), nullable=False),
        sa.Column("mode", sa.String(20), nullable=False, server_default="quest"),
        sa.Column("score_pct", sa.Float(), nullable=False),
        sa.Column("cards_seen", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("cards_correct", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("breakdown", sa.JSON(), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "ended_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["deck_id"], ["decks.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_mission_attempts_id"), "mission_attempts", ["id"], unique=False)
    op.create_index(
        op.f("ix_mission_attempts_user_id"), "mission_attempts", ["user_id"], unique=False
    )
    op.create_index(
        op.f("ix_mission_attempts_deck_id"), "mission_attempts", ["deck_id"], unique=False
    )
    op.create_index(
        op.f("ix_mission_attempts_ended_at"), "mission_attempts", ["ended_at"], unique=False
    )

    op.create_table(
        "quest_progress",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("deck_id", sa.Integer(), nullable=False),
        sa.Column("per_bloom", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["deck_id"], ["decks.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "deck_id", name="uq_quest_progress"),
    )
    op.create_index(op.f("ix_quest_progress_id"), "quest_progress", ["id"], unique=False)
    op.create_index(
        op.f("ix_quest_progress_user_id"), "quest_progress", ["user_id"], unique=False
    )
    op.create_index(
        op.f("ix_quest_progress_deck_id"), "quest_progress", ["deck_id"], unique=False
    )

    op.create_table(
        "user_economy",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("tokens", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("commander_xp", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("commander_level", sa.Integer(), nullable=False, server_default="1"),
        _updated_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id"),
    )

    op.create_table(
        "xp_events",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("deck_id", sa.Integer(), nullable=True),
        sa.Column("bloom_level", sa.String(20), nullable=True),
        sa.Column("event_type", sa.String(40), nullable=False),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["deck_id"], ["decks.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_xp_events_id"), "xp_events", ["id"], unique=False)
    op.create_index(op.f("ix_xp_events_user_id"), "xp_events", ["user_id"], unique=False)
    op.create_index(op.f("ix_xp_events_deck_id"), "xp_events", ["deck_id"], unique=False)
    op.create_index(op.f("ix_xp_events_event_type"), "xp_events", ["event_type"], unique=False)
    op.create_index(op.f("ix_xp_events_created_at"), "xp_events", ["created_at"], unique=False)

    op.create_table(
        "cosmetic_purchases",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("cosmetic_id", sa.String(50), nullable=False),
        sa.Column("price_paid", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "purchased_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "cosmetic_id", name="uq_cosmetic_purchase"),
    )
    op.create_index(
        op.f("ix_cosmetic_purchases_id"), "cosmetic_purchases", ["id"], unique=False
    )
    op.create_index(
        op.f("ix_cosmetic_purchases_user_id"), "cosmetic_purchases", ["user_id"], unique=False
    )

    op.create_table(
        "user_settings",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("default_cover", sa.String(50), nullable=True),
        _updated_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id"),
    )

    op.create_table(
        "user_streaks",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("current_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_activity_date", sa.Date(), nullable=True),
        sa.Column(
            "three_day_chest_claimed", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column(
            "seven_day_chest_claimed", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id"),
    )


def downgrade() -> None:
    """Drop all tables."""
    for table in (
        "user_streaks",
        "user_settings",
        "cosmetic_purchases",
        "xp_events",
        "user_economy",
        "quest_progress",
        "mission_attempts",
        "bloom_masteries",
        "card_performances",
        "card_masteries",
        "cards",
        "decks",
        "folders",
        "users",
    ):
        op.drop_table(table)
