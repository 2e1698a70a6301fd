"""Domain models for cc_cashcard: pure dataclasses, no business logic."""

from dataclasses import dataclass
from decimal import Decimal

from src.cc_common.enums import CashCardSortField, SortDirection

# Range of the BIGSERIAL id column; also the limit for LIMIT/OFFSET values.
BIGINT_MIN = -(2**63)
BIGINT_MAX = 2**63 - 1


@dataclass
class CashCard:
    id: int
    amount: Decimal
    owner: str


@dataclass(frozen=True)
class SortOrder:
    field: CashCardSortField
    direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True)
class PageRequest:
    """Zero-based offset pagination over one owner's cards."""

    page: int
    size: int
    sort: tuple[SortOrder, ...] = ()

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class CashCardSlice:
    """One page of cards plus the total number of cards the owner has."""

    items: list[CashCard]
    total: int
