"""Shared test fixtures.

The HTTP client runs the real FastAPI app with both repositories swapped for
in-memory implementations of their Protocols, preloaded with the reference
dataset, so the API tests need no database.
"""

from collections.abc import AsyncGenerator
from dataclasses import replace
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.cc_cashcard.api.router import get_cash_card_service
from src.cc_cashcard.application.service import CashCardApplicationService
from src.cc_cashcard.domain.models import CashCard, CashCardSlice, PageRequest
from src.cc_common.database import get_db_session
from src.cc_common.enums import Role, SortDirection
from src.cc_gateway.auth.dependencies import get_user_service
from src.cc_gateway.auth.password import hash_password
from src.cc_gateway.user.models import Credential
from src.cc_gateway.user.service import UserService
from src.main import app

# Low bcrypt cost keeps each authenticated request fast.
_TEST_ROUNDS = 4

REFERENCE_PRINCIPALS = [
    Credential("egor", hash_password("abc123", rounds=_TEST_ROUNDS), Role.CARD_OWNER),
    Credential("vlad", hash_password("qwerty", rounds=_TEST_ROUNDS), Role.CARD_OWNER),
    Credential(
        "denis-owns-no-cards", hash_password("qrs456", rounds=_TEST_ROUNDS), Role.NON_OWNER
    ),
]

REFERENCE_CARDS = [
    CashCard(id=99, amount=Decimal("123.45"), owner="egor"),
    CashCard(id=100, amount=Decimal("1.00"), owner="egor"),
    CashCard(id=101, amount=Decimal("150.00"), owner="egor"),
    CashCard(id=102, amount=Decimal("200.00"), owner="vlad"),
]


class InMemoryUserRepository:
    def __init__(self, credentials: list[Credential]) -> None:
        self._by_username = {c.username: c for c in credentials}

    async def get_by_username(self, db: object, username: str) -> Credential | None:
        return self._by_username.get(username)


class InMemoryCashCardRepository:
    def __init__(self, cards: list[CashCard]) -> None:
        self._cards = {c.id: replace(c) for c in cards}
        self._next_id = max(self._cards, default=0) + 1

    def _owned(self, card_id: int, owner: str) -> CashCard | None:
        card = self._cards.get(card_id)
        return card if card is not None and card.owner == owner else None

    async def create(self, db: object, amount: Decimal, owner: str) -> CashCard:
        card = CashCard(id=self._next_id, amount=amount, owner=owner)
        self._cards[card.id] = card
        self._next_id += 1
        return replace(card)

    async def get_by_id(self, db: object, card_id: int, owner: str) -> CashCard | None:
        card = self._owned(card_id, owner)
        return replace(card) if card else None

    async def list_by_owner(self, db: object, owner: str, page: PageRequest) -> CashCardSlice:
        owned = sorted((c for c in self._cards.values() if c.owner == owner), key=lambda c: c.id)
        # Stable sorts applied last-key-first give the combined ordering.
        for order in reversed(page.sort):
            owned.sort(
                key=lambda c: getattr(c, order.field.value),
                reverse=order.direction == SortDirection.DESC,
            )
        window = owned[page.offset:page.offset + page.size]
        return CashCardSlice(items=[replace(c) for c in window], total=len(owned))

    async def update_amount(
        self, db: object, card_id: int, owner: str, amount: Decimal
    ) -> bool:
        card = self._owned(card_id, owner)
        if card is None:
            return False
        card.amount = amount
        return True

    async def delete(self, db: object, card_id: int, owner: str) -> bool:
        if self._owned(card_id, owner) is None:
            return False
        del self._cards[card_id]
        return True


async def _fake_db_session() -> AsyncGenerator[AsyncMock, None]:
    yield AsyncMock()


@pytest.fixture
def cash_card_repo() -> InMemoryCashCardRepository:
    return InMemoryCashCardRepository(REFERENCE_CARDS)


@pytest.fixture
async def client(cash_card_repo: InMemoryCashCardRepository) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints."""
    user_service = UserService(repo=InMemoryUserRepository(REFERENCE_PRINCIPALS))
    card_service = CashCardApplicationService(repo=cash_card_repo)

    app.dependency_overrides[get_db_session] = _fake_db_session
    app.dependency_overrides[get_user_service] = lambda: user_service
    app.dependency_overrides[get_cash_card_service] = lambda: card_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
