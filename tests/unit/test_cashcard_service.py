# tests/unit/test_cashcard_service.py
"""Unit tests for CashCardApplicationService using mock repository."""
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from config.settings import settings
from src.cc_cashcard.application.service import CashCardApplicationService
from src.cc_cashcard.domain.models import (
    BIGINT_MAX,
    BIGINT_MIN,
    CashCard,
    CashCardSlice,
    SortOrder,
)
from src.cc_common.enums import CashCardSortField, SortDirection
from src.cc_common.errors import CashCardNotFoundError, InvalidSortError


def _make_card(**kwargs) -> CashCard:
    defaults = dict(id=99, amount=Decimal("123.45"), owner="egor")
    defaults.update(kwargs)
    return CashCard(**defaults)


@pytest.fixture
def db():
    return AsyncMock()


@pytest.fixture
def mock_repo():
    return MagicMock()


class TestGetCard:
    async def test_returns_response_when_found(self, db, mock_repo):
        mock_repo.get_by_id = AsyncMock(return_value=_make_card())
        svc = CashCardApplicationService(repo=mock_repo)

        resp = await svc.get_card(db, 99, "egor")

        assert resp.id == 99
        assert resp.amount == Decimal("123.45")
        mock_repo.get_by_id.assert_awaited_once_with(db, 99, "egor")

    async def test_raises_not_found(self, db, mock_repo):
        mock_repo.get_by_id = AsyncMock(return_value=None)
        svc = CashCardApplicationService(repo=mock_repo)

        with pytest.raises(CashCardNotFoundError):
            await svc.get_card(db, 1000, "egor")

    @pytest.mark.parametrize("card_id", [BIGINT_MAX + 1, BIGINT_MIN - 1, 2**70])
    async def test_id_outside_bigint_is_not_found_without_query(
        self, db, mock_repo, card_id
    ):
        mock_repo.get_by_id = AsyncMock()
        mock_repo.update_amount = AsyncMock()
        mock_repo.delete = AsyncMock()
        svc = CashCardApplicationService(repo=mock_repo)

        with pytest.raises(CashCardNotFoundError):
            await svc.get_card(db, card_id, "egor")
        with pytest.raises(CashCardNotFoundError):
            await svc.update_card(db, card_id, "egor", Decimal("1"))
        with pytest.raises(CashCardNotFoundError):
            await svc.delete_card(db, card_id, "egor")

        mock_repo.get_by_id.assert_not_awaited()
        mock_repo.update_amount.assert_not_awaited()
        mock_repo.delete.assert_not_awaited()
        db.commit.assert_not_awaited()

    async def test_largest_bigint_id_reaches_repository(self, db, mock_repo):
        mock_repo.get_by_id = AsyncMock(return_value=None)
        svc = CashCardApplicationService(repo=mock_repo)

        with pytest.raises(CashCardNotFoundError):
            await svc.get_card(db, BIGINT_MAX, "egor")
        mock_repo.get_by_id.assert_awaited_once_with(db, BIGINT_MAX, "egor")


class TestListCards:
    async def test_uses_configured_defaults(self, db, mock_repo):
        mock_repo.list_by_owner = AsyncMock(return_value=CashCardSlice(items=[], total=0))
        svc = CashCardApplicationService(repo=mock_repo)

        await svc.list_cards(db, "egor", page=0, size=None, sort=None)

        page = mock_repo.list_by_owner.call_args.args[2]
        assert page.page == 0
        assert page.size == settings.CASHCARD_DEFAULT_PAGE_SIZE
        assert page.sort == (SortOrder(CashCardSortField.AMOUNT, SortDirection.DESC),)

    async def test_size_is_clamped_to_maximum(self, db, mock_repo):
        mock_repo.list_by_owner = AsyncMock(return_value=CashCardSlice(items=[], total=0))
        svc = CashCardApplicationService(repo=mock_repo)

        resp = await svc.list_cards(
            db, "egor", page=0, size=settings.CASHCARD_MAX_PAGE_SIZE + 1, sort=None
        )

        assert resp.page.size == settings.CASHCARD_MAX_PAGE_SIZE

    async def test_page_metadata(self, db, mock_repo):
        cards = [_make_card(id=101, amount=Decimal("150.00"))]
        mock_repo.list_by_owner = AsyncMock(return_value=CashCardSlice(items=cards, total=3))
        svc = CashCardApplicationService(repo=mock_repo)

        resp = await svc.list_cards(db, "egor", page=0, size=1, sort=["amount,desc"])

        assert [c.id for c in resp.content] == [101]
        assert resp.page.number == 0
        assert resp.page.size == 1
        assert resp.page.total_elements == 3
        assert resp.page.total_pages == 3

    async def test_invalid_sort_raises_before_query(self, db, mock_repo):
        mock_repo.list_by_owner = AsyncMock()
        svc = CashCardApplicationService(repo=mock_repo)

        with pytest.raises(InvalidSortError):
            await svc.list_cards(db, "egor", page=0, size=None, sort=["owner,up"])
        mock_repo.list_by_owner.assert_not_awaited()


class TestCreateCard:
    async def test_creates_and_commits(self, db, mock_repo):
        mock_repo.create = AsyncMock(return_value=_make_card(id=103, amount=Decimal("5.00")))
        svc = CashCardApplicationService(repo=mock_repo)

        resp = await svc.create_card(db, "egor", Decimal("5.00"))

        assert resp.id == 103
        mock_repo.create.assert_awaited_once_with(db, Decimal("5.00"), "egor")
        db.commit.assert_awaited_once()

    async def test_rolls_back_on_failure(self, db, mock_repo):
        mock_repo.create = AsyncMock(side_effect=RuntimeError("db down"))
        svc = CashCardApplicationService(repo=mock_repo)

        with pytest.raises(RuntimeError):
            await svc.create_card(db, "egor", Decimal("5.00"))
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()


class TestUpdateCard:
    async def test_updates_owned_card(self, db, mock_repo):
        mock_repo.update_amount = AsyncMock(return_value=True)
        svc = CashCardApplicationService(repo=mock_repo)

        await svc.update_card(db, 99, "egor", Decimal("2000"))

        mock_repo.update_amount.assert_awaited_once_with(db, 99, "egor", Decimal("2000"))
        db.commit.assert_awaited_once()

    async def test_raises_not_found_when_nothing_updated(self, db, mock_repo):
        mock_repo.update_amount = AsyncMock(return_value=False)
        svc = CashCardApplicationService(repo=mock_repo)

        with pytest.raises(CashCardNotFoundError):
            await svc.update_card(db, 102, "egor", Decimal("2000"))


class TestDeleteCard:
    async def test_deletes_owned_card(self, db, mock_repo):
        mock_repo.delete = AsyncMock(return_value=True)
        svc = CashCardApplicationService(repo=mock_repo)

        await svc.delete_card(db, 99, "egor")

        mock_repo.delete.assert_awaited_once_with(db, 99, "egor")

    async def test_raises_not_found_when_nothing_deleted(self, db, mock_repo):
        mock_repo.delete = AsyncMock(return_value=False)
        svc = CashCardApplicationService(repo=mock_repo)

        with pytest.raises(CashCardNotFoundError):
            await svc.delete_card(db, 99, "vlad")
