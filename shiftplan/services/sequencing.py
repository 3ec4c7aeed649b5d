"""Processing order of the day's production orders."""

from __future__ import annotations

from typing import Dict, List, Sequence, TypeVar

PRIORITY_RANK: Dict[str, int] = {"high": 0, "medium": 1, "low": 2}

T = TypeVar("T")


def _order_of(item):
    # Accept OrderWithSteps views as well as bare orders
    return getattr(item, "order", item)


def _quantity(item) -> float:
    return float(_order_of(item).total_quantity)


def _priority_rank(item) -> int:
    priority = (_order_of(item).priority or "medium").lower()
    return PRIORITY_RANK.get(priority, PRIORITY_RANK["medium"])


def sequence_orders(orders: Sequence[T], policy: str = "quantity") -> List[T]:
    """
    Sort orders into processing sequence.

    Args:
        orders: Orders (or OrderWithSteps views) for the day
        policy: "quantity" for ascending quantity only, or "priority" for
            high > medium > low with ascending quantity inside a bucket

    Returns:
        New list; equal keys keep their input order.
    """
    if policy == "quantity":
        return sorted(orders, key=_quantity)
    if policy == "priority":
        return sorted(orders, key=lambda o: (_priority_rank(o), _quantity(o)))
    raise ValueError(f"Unknown sequencing policy: {policy!r}")
