"""CashCardRepository: concrete implementation of CashCardRepositoryProtocol.

All queries use raw text() SQL (no ORM). Every statement filters on
``owner`` so a foreign card is never read, changed or removed.

Transaction ownership: the CALLER (application service) commits or rolls
back. update/delete are single statements, so the row lock taken by
PostgreSQL serializes concurrent writers on the same card.
"""

from decimal import Decimal

from sqlalchemy import TextClause, text
from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_cashcard.domain.models import CashCard, CashCardSlice, PageRequest, SortOrder
from src.cc_common.enums import CashCardSortField, SortDirection

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_INSERT_CARD_SQL = text("""
    INSERT INTO cash_cards (amount, owner)
    VALUES (:amount, :owner)
    RETURNING id, amount, owner
""")

_GET_CARD_SQL = text("""
    SELECT id, amount, owner
    FROM cash_cards
    WHERE id = :card_id AND owner = :owner
""")

_COUNT_BY_OWNER_SQL = text("""
    SELECT COUNT(*) FROM cash_cards WHERE owner = :owner
""")

_UPDATE_AMOUNT_SQL = text("""
    UPDATE cash_cards
    SET amount = :amount
    WHERE id = :card_id AND owner = :owner
    RETURNING id
""")

_DELETE_CARD_SQL = text("""
    DELETE FROM cash_cards
    WHERE id = :card_id AND owner = :owner
    RETURNING id
""")

# Column names come from CashCardSortField, never from request text.
_SORT_COLUMNS: dict[CashCardSortField, str] = {
    CashCardSortField.ID: "id",
    CashCardSortField.AMOUNT: "amount",
    CashCardSortField.OWNER: "owner",
}


def _order_by_clause(sort: tuple[SortOrder, ...]) -> str:
    """Build ORDER BY terms; id ASC is appended so page boundaries are stable."""
    terms = [
        f"{_SORT_COLUMNS[order.field]} {'DESC' if order.direction == SortDirection.DESC else 'ASC'}"
        for order in sort
    ]
    if not any(order.field == CashCardSortField.ID for order in sort):
        terms.append("id ASC")
    return ", ".join(terms)


def _list_by_owner_sql(sort: tuple[SortOrder, ...]) -> TextClause:
    return text(f"""
    SELECT id, amount, owner
    FROM cash_cards
    WHERE owner = :owner
    ORDER BY {_order_by_clause(sort)}
    LIMIT :limit OFFSET :offset
""")


# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------

def _row_to_card(row: object) -> CashCard:
    return CashCard(
        id=row.id,  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        owner=row.owner,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

class CashCardRepository:
    async def create(
        self, db: AsyncSession, amount: Decimal, owner: str
    ) -> CashCard:
        result = await db.execute(_INSERT_CARD_SQL, {"amount": amount, "owner": owner})
        return _row_to_card(result.fetchone())

    async def get_by_id(
        self, db: AsyncSession, card_id: int, owner: str
    ) -> CashCard | None:
        result = await db.execute(_GET_CARD_SQL, {"card_id": card_id, "owner": owner})
        row = result.fetchone()
        return _row_to_card(row) if row else None

    async def list_by_owner(
        self, db: AsyncSession, owner: str, page: PageRequest
    ) -> CashCardSlice:
        result = await db.execute(
            _list_by_owner_sql(page.sort),
            {"owner": owner, "limit": page.size, "offset": page.offset},
        )
        items = [_row_to_card(row) for row in result.fetchall()]

        count_result = await db.execute(_COUNT_BY_OWNER_SQL, {"owner": owner})
        total = int(count_result.scalar_one())
        return CashCardSlice(items=items, total=total)

    async def update_amount(
        self, db: AsyncSession, card_id: int, owner: str, amount: Decimal
    ) -> bool:
        result = await db.execute(
            _UPDATE_AMOUNT_SQL,
            {"card_id": card_id, "owner": owner, "amount": amount},
        )
        return result.fetchone() is not None

    async def delete(
        self, db: AsyncSession, card_id: int, owner: str
    ) -> bool:
        result = await db.execute(_DELETE_CARD_SQL, {"card_id": card_id, "owner": owner})
        return result.fetchone() is not None
