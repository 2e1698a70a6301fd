"""004: seed reference principals and cash cards

Revision ID: 004
Revises: 003
Create Date: 2026-10-17
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

from src.cc_gateway.auth.password import hash_password

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_PRINCIPALS = [
    ("egor", "abc123", "CARD-OWNER"),
    ("vlad", "qwerty", "CARD-OWNER"),
    ("denis-owns-no-cards", "qrs456", "NON-OWNER"),
]


def upgrade() -> None:
    insert_user = sa.text(
        "INSERT INTO users (username, password_hash, role) "
        "VALUES (:username, :password_hash, :role)"
    )
    for username, password, role in _PRINCIPALS:
        op.get_bind().execute(
            insert_user,
            {"username": username, "password_hash": hash_password(password), "role": role},
        )

    op.execute("""
        INSERT INTO cash_cards (id, amount, owner) VALUES
            (99,  123.45, 'egor'),
            (100,   1.00, 'egor'),
            (101, 150.00, 'egor'),
            (102, 200.00, 'vlad');
    """)
    # Explicit ids above do not advance the BIGSERIAL sequence
    op.execute("""
        SELECT setval(
            pg_get_serial_sequence('cash_cards', 'id'),
            (SELECT MAX(id) FROM cash_cards)
        );
    """)


def downgrade() -> None:
    op.execute("DELETE FROM cash_cards WHERE id IN (99, 100, 101, 102);")
    op.execute("DELETE FROM users WHERE username IN ('egor', 'vlad', 'denis-owns-no-cards');")
