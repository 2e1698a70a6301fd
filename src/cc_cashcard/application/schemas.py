"""Pydantic request/response schemas for cc_cashcard.

Amounts travel as JSON numbers (123.45), not strings, and are held as
Decimal in between.

List responses follow the ``content`` + ``page`` shape:
{
    "content": [{"id": 101, "amount": 150.0, "owner": "egor"}, ...],
    "page": {"size": 20, "number": 0, "totalElements": 3, "totalPages": 1}
}
"""

import math
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

from src.cc_cashcard.domain.models import CashCard, CashCardSlice, PageRequest

JsonAmount = Annotated[Decimal, PlainSerializer(float, return_type=float)]

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CashCardRequest(BaseModel):
    """Body for POST and PUT.

    ``id`` and ``owner`` are accepted so a full card document can be sent back,
    but they are ignored: the store assigns the id and the owner is always the
    authenticated principal.
    """

    id: int | None = None
    amount: Decimal = Field(..., max_digits=19, decimal_places=2)
    owner: str | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class CashCardResponse(BaseModel):
    id: int
    amount: JsonAmount
    owner: str

    @classmethod
    def from_domain(cls, card: CashCard) -> "CashCardResponse":
        return cls(id=card.id, amount=card.amount, owner=card.owner)


class PageMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    size: int
    number: int
    total_elements: int = Field(alias="totalElements")
    total_pages: int = Field(alias="totalPages")


class CashCardPageResponse(BaseModel):
    content: list[CashCardResponse]
    page: PageMetadata

    @classmethod
    def from_slice(cls, cards: CashCardSlice, request: PageRequest) -> "CashCardPageResponse":
        return cls(
            content=[CashCardResponse.from_domain(c) for c in cards.items],
            page=PageMetadata(
                size=request.size,
                number=request.page,
                total_elements=cards.total,
                total_pages=math.ceil(cards.total / request.size),
            ),
        )
