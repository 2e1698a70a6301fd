"""003: create cash_cards table

Revision ID: 003
Revises: 002
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE cash_cards (
            id              BIGSERIAL       PRIMARY KEY,
            amount          NUMERIC(19, 2)  NOT NULL,
            owner           VARCHAR(64)     NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW()
        );
    """)
    op.execute("CREATE INDEX idx_cash_cards_owner_amount ON cash_cards (owner, amount);")
    op.execute("""
        CREATE TRIGGER trg_cash_cards_updated_at
            BEFORE UPDATE ON cash_cards
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE cash_cards IS 'Cash cards, each owned by exactly one principal';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS cash_cards CASCADE;")
