"""002: create users table

Revision ID: 002
Revises: 001
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE users (
            username        VARCHAR(64)     PRIMARY KEY,
            password_hash   VARCHAR(255)    NOT NULL,
            role            VARCHAR(32)     NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_users_role CHECK (role IN ('CARD-OWNER', 'NON-OWNER'))
        );
    """)
    op.execute("COMMENT ON TABLE users IS 'Principals for HTTP Basic authentication';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS users CASCADE;")
