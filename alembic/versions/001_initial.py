"""Initial migration – create bot_settings, commands, error_logs tables.

Revision ID: 001
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # ── bot_settings (singleton row, id = 1) ──────────────────────────
    op.create_table(
        "bot_settings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("token", sa.Text(), nullable=True),
        sa.Column("prefix", sa.String(32), nullable=False, server_default="!"),
        sa.Column("status", sa.String(20), nullable=False, server_default="online"),
        sa.Column(
            "status_message",
            sa.String(255),
            nullable=False,
            server_default="Serving commands!",
        ),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )

    # ── commands ──────────────────────────────────────────────────────
    op.create_table(
        "commands",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(64), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default="true"),
    )

    # ── error_logs ────────────────────────────────────────────────────
    op.create_table(
        "error_logs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("stack", sa.Text(), nullable=True),
        sa.Column("timestamp", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("idx_error_logs_timestamp", "error_logs", ["timestamp"])


def downgrade() -> None:
    op.drop_index("idx_error_logs_timestamp", table_name="error_logs")
    op.drop_table("error_logs")
    op.drop_table("commands")
    op.drop_table("bot_settings")
