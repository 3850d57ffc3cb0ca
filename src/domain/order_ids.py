# src/domain/order_ids.py

import re
from typing import Any, Iterable

# Versions 1-5, RFC 4122 variant.
BOOKING_ID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_valid_booking_id(candidate: Any) -> bool:
    return isinstance(candidate, str) and bool(BOOKING_ID_PATTERN.match(candidate))


def partition_order_ids(candidates: Iterable[Any]) -> tuple[list[str], list[Any]]:
    """
    Split client-supplied ids into well-formed booking ids and everything else.
    Input order is preserved on both sides.
    """
    valid: list[str] = []
    invalid: list[Any] = []
    for candidate in candidates:
        if is_valid_booking_id(candidate):
            valid.append(candidate)
        else:
            invalid.append(candidate)
    return valid, invalid
