"""Category x gender accumulator.

Every report figure is a sum of ``{category: {male, female}}`` blocks. The
accumulator never raises on malformed input: missing categories, missing
genders, ``None`` and non-numeric values all count as zero, and negative
values are clamped to zero, so a finalized accumulator always satisfies
``grandTotal == totalMale + totalFemale``.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from ..core.constants import CATEGORY_CODES, GENDERS


def coerce_count(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        # "3.5", inf and nan: go through float so strings truncate like numbers do
        try:
            count = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return 0
    return count if count > 0 else 0


class CategoryAccumulator:
    """Male/female counts per category with derived totals."""

    __slots__ = ("_counts",)

    def __init__(self, source: Optional[Union["CategoryAccumulator", Mapping]] = None):
        self._counts: dict[str, dict[str, int]] = {c: {g: 0 for g in GENDERS} for c in CATEGORY_CODES}
        if source is not None:
            self.add(source)

    def add(self, source: Union["CategoryAccumulator", Mapping, None]) -> "CategoryAccumulator":
        if isinstance(source, CategoryAccumulator):
            block: Mapping = source._counts
        elif isinstance(source, Mapping):
            block = source
        else:
            return self

        for category in CATEGORY_CODES:
            entry = block.get(category)
            if not isinstance(entry, Mapping):
                continue
            for gender in GENDERS:
                self._counts[category][gender] += coerce_count(entry.get(gender))
        return self

    def get(self, category: str, gender: str) -> int:
        return self._counts[category][gender]

    @property
    def total_male(self) -> int:
        return sum(self._counts[c]["male"] for c in CATEGORY_CODES)

    @property
    def total_female(self) -> int:
        return sum(self._counts[c]["female"] for c in CATEGORY_CODES)

    @property
    def grand_total(self) -> int:
        return self.total_male + self.total_female

    def is_zero(self) -> bool:
        return self.grand_total == 0

    def to_dict(self) -> dict:
        out: dict[str, Any] = {c: dict(self._counts[c]) for c in CATEGORY_CODES}
        out["totalMale"] = self.total_male
        out["totalFemale"] = self.total_female
        out["grandTotal"] = self.grand_total
        return out

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CategoryAccumulator):
            return NotImplemented
        return self._counts == other._counts

    def __repr__(self) -> str:
        return f"CategoryAccumulator(male={self.total_male}, female={self.total_female})"


def accumulate(dest: CategoryAccumulator, source: Union[CategoryAccumulator, Mapping, None]) -> CategoryAccumulator:
    """Add ``source`` into ``dest`` in place and return ``dest``."""
    return dest.add(source)


def finalize(acc: CategoryAccumulator) -> dict:
    """Snapshot with ``totalMale``, ``totalFemale`` and ``grandTotal``."""
    return acc.to_dict()
