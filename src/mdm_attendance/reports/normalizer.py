from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Sequence

from ..core.enums import ALL_DIMENSIONS, Dimension
from .accumulator import CategoryAccumulator

# Raw document keys accepted per dimension: stored-document style first, then API style.
_MAPPING_KEYS = {
    Dimension.REGISTERED: ("registeredStudents", "registered"),
    Dimension.PRESENT: ("presentStudents", "present"),
    Dimension.MEAL_TAKEN: ("mealTakenStudents", "mealTaken", "meal_taken"),
    Dimension.ALT_MEAL_TAKEN: ("alpaharTakenStudents", "altMealTaken", "alt_meal_taken"),
}

_ATTRIBUTES = {
    Dimension.REGISTERED: "registered",
    Dimension.PRESENT: "present",
    Dimension.MEAL_TAKEN: "meal_taken",
    Dimension.ALT_MEAL_TAKEN: "alt_meal_taken",
}


class DimensionTotals:
    """One accumulator per attendance dimension.

    Only the dimensions a report variant asks for are carried; reading a
    dimension that was not requested gives a zero accumulator.
    """

    __slots__ = ("_by_dimension",)

    def __init__(self, dimensions: Iterable[Dimension] = ALL_DIMENSIONS):
        self._by_dimension: dict[Dimension, CategoryAccumulator] = {d: CategoryAccumulator() for d in dimensions}

    @property
    def dimensions(self) -> tuple[Dimension, ...]:
        return tuple(self._by_dimension)

    def __getitem__(self, dimension: Dimension) -> CategoryAccumulator:
        acc = self._by_dimension.get(dimension)
        return acc if acc is not None else CategoryAccumulator()

    @property
    def registered(self) -> CategoryAccumulator:
        return self[Dimension.REGISTERED]

    @property
    def present(self) -> CategoryAccumulator:
        return self[Dimension.PRESENT]

    @property
    def meal_taken(self) -> CategoryAccumulator:
        return self[Dimension.MEAL_TAKEN]

    @property
    def alt_meal_taken(self) -> CategoryAccumulator:
        return self[Dimension.ALT_MEAL_TAKEN]

    def merge(self, other: "DimensionTotals") -> "DimensionTotals":
        for dimension, acc in self._by_dimension.items():
            acc.add(other[dimension])
        return self

    def is_zero(self) -> bool:
        return all(acc.is_zero() for acc in self._by_dimension.values())

    def to_dict(self) -> dict:
        return {d.value: acc.to_dict() for d, acc in self._by_dimension.items()}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DimensionTotals):
            return NotImplemented
        return self._by_dimension == other._by_dimension


def _block_for(record: Any, dimension: Dimension) -> Optional[Mapping]:
    if isinstance(record, Mapping):
        for key in _MAPPING_KEYS[dimension]:
            if key in record:
                return record.get(key)
        return None
    return getattr(record, _ATTRIBUTES[dimension], None)


def normalize_record(record: Any, dimensions: Sequence[Dimension] = ALL_DIMENSIONS) -> DimensionTotals:
    """Split one attendance record into per-dimension accumulators.

    Accepts an ``AttendanceRecord`` or a raw document mapping. Absent blocks
    (legacy rows without alt-meal data) come out as zero.
    """
    snapshot = DimensionTotals(dimensions)
    for dimension in snapshot.dimensions:
        snapshot[dimension].add(_block_for(record, dimension))
    return snapshot


def record_field(record: Any, name: str, default: Any = None) -> Any:
    """Read ``standard``/``division``/``date`` from a dataclass or a mapping."""
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)
