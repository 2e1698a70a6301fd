"""cc_cashcard REST endpoints: all require Basic auth and the CARD-OWNER role.

GET    /cashcards/{card_id}    one owned card (200 / 404)
GET    /cashcards              owned cards, ?page&size&sort (200)
POST   /cashcards              create, Location header, empty body (201)
PUT    /cashcards/{card_id}    replace amount, empty body (204 / 404)
DELETE /cashcards/{card_id}    remove, empty body (204 / 404)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cc_cashcard.application.schemas import (
    CashCardPageResponse,
    CashCardRequest,
    CashCardResponse,
)
from src.cc_cashcard.application.service import CashCardApplicationService
from src.cc_cashcard.domain.models import BIGINT_MAX
from src.cc_common.database import get_db_session
from src.cc_gateway.auth.dependencies import require_card_owner
from src.cc_gateway.user.models import Principal

router = APIRouter(prefix="/cashcards", tags=["cashcards"])

# Largest page whose OFFSET still fits in BIGINT at the maximum page size.
_MAX_PAGE = BIGINT_MAX // settings.CASHCARD_MAX_PAGE_SIZE

_service = CashCardApplicationService()


def get_cash_card_service() -> CashCardApplicationService:
    return _service


@router.get("/{card_id}", response_model=CashCardResponse, name="get_cash_card")
async def get_cash_card(
    card_id: int,
    principal: Annotated[Principal, Depends(require_card_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[CashCardApplicationService, Depends(get_cash_card_service)],
) -> CashCardResponse:
    return await service.get_card(db, card_id, principal.username)


@router.get("", response_model=CashCardPageResponse)
async def list_cash_cards(
    principal: Annotated[Principal, Depends(require_card_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[CashCardApplicationService, Depends(get_cash_card_service)],
    page: int = Query(0, ge=0, le=_MAX_PAGE, description="Zero-based page index"),
    size: int | None = Query(None, ge=1, description="Page size (default from settings)"),
    sort: list[str] | None = Query(None, description="field,direction (repeatable)"),
) -> CashCardPageResponse:
    return await service.list_cards(db, principal.username, page, size, sort)


@router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
async def create_cash_card(
    body: CashCardRequest,
    request: Request,
    principal: Annotated[Principal, Depends(require_card_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[CashCardApplicationService, Depends(get_cash_card_service)],
) -> Response:
    card = await service.create_card(db, principal.username, body.amount)

    location = str(request.url_for("get_cash_card", card_id=card.id))
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": location})


@router.put("/{card_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_cash_card(
    card_id: int,
    body: CashCardRequest,
    principal: Annotated[Principal, Depends(require_card_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[CashCardApplicationService, Depends(get_cash_card_service)],
) -> Response:
    await service.update_card(db, card_id, principal.username, body.amount)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_cash_card(
    card_id: int,
    principal: Annotated[Principal, Depends(require_card_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[CashCardApplicationService, Depends(get_cash_card_service)],
) -> Response:
    await service.delete_card(db, card_id, principal.username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
