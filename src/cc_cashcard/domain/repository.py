# src/cc_cashcard/domain/repository.py
"""Repository Protocol: dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol; the API tests inject
an in-memory implementation. Infrastructure layer provides the SQL one.

Every method is scoped by owner. A card that exists but belongs to someone
else is reported exactly like a missing card (None / False).
"""

from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_cashcard.domain.models import CashCard, CashCardSlice, PageRequest


class CashCardRepositoryProtocol(Protocol):
    async def create(
        self, db: AsyncSession, amount: Decimal, owner: str
    ) -> CashCard: ...

    async def get_by_id(
        self, db: AsyncSession, card_id: int, owner: str
    ) -> CashCard | None: ...

    async def list_by_owner(
        self, db: AsyncSession, owner: str, page: PageRequest
    ) -> CashCardSlice: ...

    async def update_amount(
        self, db: AsyncSession, card_id: int, owner: str, amount: Decimal
    ) -> bool: ...

    async def delete(
        self, db: AsyncSession, card_id: int, owner: str
    ) -> bool: ...
