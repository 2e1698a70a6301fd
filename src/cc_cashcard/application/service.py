"""CashCardApplicationService: owner-scoped CRUD over the repository.

The caller (router) passes the db session and the authenticated owner.
Mutations commit here (or roll back on error); reads need no commit.
The repository reports a miss as None/False; this layer turns it into
CashCardNotFoundError.
"""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cc_cashcard.application.schemas import CashCardPageResponse, CashCardResponse
from src.cc_cashcard.domain.models import BIGINT_MAX, BIGINT_MIN, PageRequest
from src.cc_cashcard.domain.repository import CashCardRepositoryProtocol
from src.cc_cashcard.domain.sorting import parse_sort
from src.cc_cashcard.infrastructure.persistence import CashCardRepository
from src.cc_common.errors import CashCardNotFoundError

logger = logging.getLogger(__name__)


def _check_card_id(card_id: int) -> None:
    """An id the id column cannot hold belongs to no card."""
    if not BIGINT_MIN <= card_id <= BIGINT_MAX:
        raise CashCardNotFoundError(card_id)


class CashCardApplicationService:
    def __init__(self, repo: CashCardRepositoryProtocol | None = None) -> None:
        self._repo: CashCardRepositoryProtocol = repo or CashCardRepository()

    async def get_card(
        self, db: AsyncSession, card_id: int, owner: str
    ) -> CashCardResponse:
        _check_card_id(card_id)
        card = await self._repo.get_by_id(db, card_id, owner)
        if card is None:
            raise CashCardNotFoundError(card_id)
        return CashCardResponse.from_domain(card)

    async def list_cards(
        self,
        db: AsyncSession,
        owner: str,
        page: int,
        size: int | None,
        sort: list[str] | None,
    ) -> CashCardPageResponse:
        request = self.build_page_request(page, size, sort)
        cards = await self._repo.list_by_owner(db, owner, request)
        return CashCardPageResponse.from_slice(cards, request)

    async def create_card(
        self, db: AsyncSession, owner: str, amount: Decimal
    ) -> CashCardResponse:
        try:
            card = await self._repo.create(db, amount, owner)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Created cash card id=%s owner=%s", card.id, owner)
        return CashCardResponse.from_domain(card)

    async def update_card(
        self, db: AsyncSession, card_id: int, owner: str, amount: Decimal
    ) -> None:
        _check_card_id(card_id)
        try:
            updated = await self._repo.update_amount(db, card_id, owner, amount)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        if not updated:
            raise CashCardNotFoundError(card_id)
        logger.info("Updated cash card id=%s owner=%s", card_id, owner)

    async def delete_card(
        self, db: AsyncSession, card_id: int, owner: str
    ) -> None:
        _check_card_id(card_id)
        try:
            deleted = await self._repo.delete(db, card_id, owner)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        if not deleted:
            raise CashCardNotFoundError(card_id)
        logger.info("Deleted cash card id=%s owner=%s", card_id, owner)

    @staticmethod
    def build_page_request(
        page: int, size: int | None, sort: list[str] | None
    ) -> PageRequest:
        """Apply configured defaults; oversized pages are clamped, not rejected."""
        effective_size = size or settings.CASHCARD_DEFAULT_PAGE_SIZE
        effective_size = min(effective_size, settings.CASHCARD_MAX_PAGE_SIZE)
        sort_values = sort or [settings.CASHCARD_DEFAULT_SORT]
        return PageRequest(page=page, size=effective_size, sort=parse_sort(sort_values))
