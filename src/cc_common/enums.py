"""Global enums: must match DB CHECK constraints exactly."""

from enum import Enum


class Role(str, Enum):
    CARD_OWNER = "CARD-OWNER"
    NON_OWNER = "NON-OWNER"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class CashCardSortField(str, Enum):
    """Columns a cash card listing may be ordered by."""
    ID = "id"
    AMOUNT = "amount"
    OWNER = "owner"
