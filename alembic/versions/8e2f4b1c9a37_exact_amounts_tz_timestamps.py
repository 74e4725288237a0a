from alembic import op
import sqlalchemy as sa

from nollyspot.db.types import TokenAmount

# revision identifiers, used by Alembic.
revision = "8e2f4b1c9a37"
down_revision = "5c1e0a7d2b94"
branch_labels = None
depends_on = None

AMOUNT_COLUMNS = {
    "posts": [("price_amount", False)],
    "transactions": [("amount", False), ("refund_amount", True)],
}
TIMESTAMP_COLUMNS = {
    "users": ["created_at"],
    "posts": ["created_at"],
    "transactions": ["created_at", "updated_at"],
}


def upgrade() -> None:
    # batch mode so SQLite can rebuild the tables
    for table in ("users", "posts", "transactions"):
        with op.batch_alter_table(table) as batch:
            for name, nullable in AMOUNT_COLUMNS.get(table, []):
                batch.alter_column(name, existing_type=sa.Float(), type_=TokenAmount(), existing_nullable=nullable)
            for name in TIMESTAMP_COLUMNS[table]:
                batch.alter_column(
                    name,
                    existing_type=sa.DateTime(),
                    type_=sa.DateTime(timezone=True),
                    existing_nullable=False,
                )


def downgrade() -> None:
    for table in ("users", "posts", "transactions"):
        with op.batch_alter_table(table) as batch:
            for name, nullable in AMOUNT_COLUMNS.get(table, []):
                batch.alter_column(name, existing_type=TokenAmount(), type_=sa.Float(), existing_nullable=nullable)
            for name in TIMESTAMP_COLUMNS[table]:
                batch.alter_column(
                    name,
                    existing_type=sa.DateTime(timezone=True),
                    type_=sa.DateTime(),
                    existing_nullable=False,
                )
