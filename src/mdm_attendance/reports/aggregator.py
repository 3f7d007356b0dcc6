from __future__ import annotations

from datetime import date
from typing import Any, Callable, Hashable, Iterable, Optional, Sequence, TypeVar

from ..core.enums import ALL_DIMENSIONS, Dimension
from .normalizer import DimensionTotals, normalize_record, record_field

K = TypeVar("K", bound=Hashable)


def aggregate(
    records: Iterable[Any],
    key_fn: Callable[[Any], K],
    *,
    keys: Optional[Iterable[K]] = None,
    dimensions: Sequence[Dimension] = ALL_DIMENSIONS,
) -> dict[K, DimensionTotals]:
    """Sum records per group key.

    Every key in ``keys`` is present in the result (zero-valued when no record
    maps to it) in the order given; groups for keys not listed follow in
    first-seen order. Each record contributes to exactly one group.
    """
    groups: dict[K, DimensionTotals] = {}
    for key in keys or ():
        groups[key] = DimensionTotals(dimensions)

    for record in records:
        key = key_fn(record)
        totals = groups.get(key)
        if totals is None:
            totals = groups[key] = DimensionTotals(dimensions)
        totals.merge(normalize_record(record, dimensions))
    return groups


def sum_totals(items: Iterable[DimensionTotals], dimensions: Sequence[Dimension] = ALL_DIMENSIONS) -> DimensionTotals:
    out = DimensionTotals(dimensions)
    for item in items:
        out.merge(item)
    return out


def by_date(record: Any) -> date:
    return record_field(record, "date")


def by_class(record: Any) -> tuple[int, str]:
    return (int(record_field(record, "standard")), str(record_field(record, "division")))


def latest_by_class(records: Iterable[Any]) -> dict[tuple[int, str], Any]:
    """Latest-dated record per (standard, division).

    Registered counts are a roster snapshot: reports carry them forward from
    the most recent entry of each class instead of summing across days.
    """
    latest: dict[tuple[int, str], Any] = {}
    for record in records:
        key = by_class(record)
        current = latest.get(key)
        if current is None or record_field(record, "date") >= record_field(current, "date"):
            latest[key] = record
    return latest


def carried_registered(records: Iterable[Any]) -> DimensionTotals:
    """Registered totals summed over the latest record of each class."""
    totals = DimensionTotals((Dimension.REGISTERED,))
    for record in latest_by_class(records).values():
        totals.merge(normalize_record(record, (Dimension.REGISTERED,)))
    return totals
