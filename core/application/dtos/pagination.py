"""Paging and sorting parameters as they appear on the wire."""

from typing import Dict, Iterable, List, Tuple

from core.domain.exceptions import ValidationError
from core.domain.value_objects import PageRequest, SortDirection, SortOrder

# camelCase wire name -> domain attribute
_WIRE_TO_DOMAIN: Dict[str, str] = {
    "id": "id",
    "status": "status",
    "totalAmount": "total_amount",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}
_DOMAIN_TO_WIRE = {domain: wire for wire, domain in _WIRE_TO_DOMAIN.items()}


def to_wire_property(domain_property: str) -> str:
    return _DOMAIN_TO_WIRE.get(domain_property, domain_property)


def parse_sort(values: Iterable[str]) -> Tuple[SortOrder, ...]:
    """
    Parse `sort` query values.

    Each value is `property[,property...][,asc|desc]`; the direction applies
    to every property in the same value, e.g. `createdAt,desc` or
    `status,id,asc`. Empty values are ignored.

    Raises:
        ValidationError: On unknown properties
    """
    orders: List[SortOrder] = []

    for value in values:
        tokens = [token.strip() for token in value.split(",") if token.strip()]
        if not tokens:
            continue

        direction = SortDirection.ASC
        if tokens[-1].upper() in SortDirection.__members__:
            direction = SortDirection(tokens.pop().upper())

        for token in tokens:
            domain_property = _WIRE_TO_DOMAIN.get(token)
            if domain_property is None:
                raise ValidationError(f"Cannot sort orders by '{token}'", field="sort")
            orders.append(SortOrder(domain_property, direction))

    return tuple(orders)


def build_page_request(page: int, size: int, sort: Iterable[str]) -> PageRequest:
    """Build a PageRequest from raw query values.

    Raises:
        ValidationError: On negative page, non-positive size or unknown sort
    """
    orders = parse_sort(sort)
    try:
        if orders:
            return PageRequest(page=page, size=size, sort=orders)
        return PageRequest(page=page, size=size)
    except ValueError as e:
        raise ValidationError(str(e))
