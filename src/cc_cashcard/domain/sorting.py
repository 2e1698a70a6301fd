"""Parsing of ``sort=field,direction`` query values.

Accepted forms, one per ``sort`` parameter:
  amount            -> amount ASC
  amount,desc       -> amount DESC
  AMOUNT,Desc       -> amount DESC (case-insensitive)

Repeated parameters are applied in the order given.
"""

from src.cc_cashcard.domain.models import SortOrder
from src.cc_common.enums import CashCardSortField, SortDirection
from src.cc_common.errors import InvalidSortError


def parse_sort_param(value: str) -> SortOrder:
    parts = [p.strip().lower() for p in value.split(",")]
    if not parts[0] or len(parts) > 2:
        raise InvalidSortError(value)

    try:
        sort_field = CashCardSortField(parts[0])
    except ValueError:
        raise InvalidSortError(value) from None

    if len(parts) == 1 or not parts[1]:
        return SortOrder(field=sort_field)

    try:
        direction = SortDirection(parts[1])
    except ValueError:
        raise InvalidSortError(value) from None
    return SortOrder(field=sort_field, direction=direction)


def parse_sort(values: list[str]) -> tuple[SortOrder, ...]:
    """Parse every ``sort`` value; a field named twice keeps its first position."""
    orders: list[SortOrder] = []
    seen: set[CashCardSortField] = set()
    for value in values:
        order = parse_sort_param(value)
        if order.field in seen:
            continue
        seen.add(order.field)
        orders.append(order)
    return tuple(orders)
