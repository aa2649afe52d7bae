"""Combine unordered collections with server-side position vectors."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol, TypeVar

from wunderlist_status.http.client import UnexpectedPayloadError


class Identified(Protocol):
    @property
    def id(self) -> int: ...


ItemT = TypeVar("ItemT", bound=Identified)
T = TypeVar("T")


def order_by_positions(items: Sequence[ItemT], positions: Sequence[int]) -> list[ItemT]:
    """Return items listed in `positions`, in that order.

    Position IDs without a matching item are skipped and items missing from
    `positions` are left out. Each ID is resolved by a linear scan.
    """

    return _pick_in_order(items, positions, lambda item: item.id)


def order_payloads_by_positions(
    payloads: Sequence[object],
    positions: Sequence[int],
) -> list[object]:
    """Order raw JSON objects by their `"id"` field, before any parsing.

    Entries that are not objects or lack an integer `id` never match, so a
    malformed entry left out of `positions` is never looked at again.
    """

    return _pick_in_order(payloads, positions, _payload_id)


def _pick_in_order(
    items: Sequence[T],
    positions: Sequence[int],
    key: Callable[[T], object],
) -> list[T]:
    ordered: list[T] = []
    for item_id in positions:
        match = next((item for item in items if key(item) == item_id), None)
        if match is not None:
            ordered.append(match)
    return ordered


def _payload_id(payload: object) -> int | None:
    if not isinstance(payload, dict):
        return None
    value = payload.get("id")
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def parse_positions(payload: object) -> list[int]:
    """Extract the ordering vector from a `*_positions` response."""

    if not isinstance(payload, list):
        raise UnexpectedPayloadError(f"Expected a JSON array of positions, got {payload!r}")
    if not payload:
        return []
    first = payload[0]
    values = first.get("values") if isinstance(first, dict) else None
    if not isinstance(values, list):
        raise UnexpectedPayloadError(f"Position entry without 'values': {first!r}")
    return [value for value in values if isinstance(value, int) and not isinstance(value, bool)]
