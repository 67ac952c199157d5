"""Add lower-cased title and audience columns for event search.

Revision ID: 20251027_event_search_columns
Revises: 20251020_initial_catalog
Create Date: 2025-10-27

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20251027_event_search_columns"
down_revision: Union[str, None] = "20251020_initial_catalog"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Add title_normalized / audience_normalized and backfill them."""
    with op.batch_alter_table("event") as batch_op:
        batch_op.add_column(
            sa.Column("title_normalized", sa.String(length=512), server_default="", nullable=False)
        )
        batch_op.add_column(
            sa.Column("audience_normalized", sa.String(length=512), server_default="", nullable=False)
        )

    # Python lower() folds non-ASCII letters; SQLite's lower() does not.
    event = sa.table(
        "event",
        sa.column("id", sa.Integer),
        sa.column("title", sa.String),
        sa.column("audience", sa.String),
        sa.column("title_normalized", sa.String),
        sa.column("audience_normalized", sa.String),
    )
    bind = op.get_bind()
    rows = bind.execute(sa.select(event.c.id, event.c.title, event.c.audience)).fetchall()
    for row in rows:
        bind.execute(
            event.update()
            .where(event.c.id == row.id)
            .values(title_normalized=row.title.lower(), audience_normalized=row.audience.lower())
        )


def downgrade() -> None:
    """Drop the search columns."""
    with op.batch_alter_table("event") as batch_op:
        batch_op.drop_column("audience_normalized")
        batch_op.drop_column("title_normalized")
