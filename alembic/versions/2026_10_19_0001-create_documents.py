"""create_documents

Revision ID: 3f1c9a7d2e01
Revises:
Create Date: 2026-10-19 00:01:00.000000

Creates the single ``documents`` table that backs every collection:
one row per document keyed by (collection, id), fields in JSONB.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2e01"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        "documents",
        sa.Column("collection", sa.String(length=512), nullable=False),
        sa.Column("id", sa.String(length=128), nullable=False),
        sa.Column("data", postgresql.JSONB(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("collection", "id"),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table("documents")
