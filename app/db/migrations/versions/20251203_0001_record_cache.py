"""Record cache table for the volunteer directory"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20251203_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "record_cache",
        sa.Column("key", sa.String(), primary_key=True),
        sa.Column("payload", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index(op.f("ix_record_cache_key"), "record_cache", ["key"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_record_cache_key"), table_name="record_cache")
    op.drop_table("record_cache")
