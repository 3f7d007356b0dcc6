from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..core.constants import CATEGORY_CODES, GENDERS
from ..core.enums import ALL_DIMENSIONS, Dimension
from .accumulator import CategoryAccumulator
from .model import ReportRow

_CATEGORY_SHORT = {"sc": "sc", "st": "st", "obc": "obc", "general": "gen"}
_PERCENT_COLUMNS = ("present", "alt", "mdm")


def category_columns(acc: CategoryAccumulator) -> list[int]:
    """sc-m, sc-f, st-m, st-f, obc-m, obc-f, gen-m, gen-f, total-m, total-f, total-t"""
    values = [acc.get(c, g) for c in CATEGORY_CODES for g in GENDERS]
    return values + [acc.total_male, acc.total_female, acc.grand_total]


@dataclass(frozen=True)
class SheetLayout:
    """Column layout for flattening report rows into spreadsheet rows."""

    dimensions: tuple[Dimension, ...]
    percentages: bool

    def header(self) -> list[str]:
        cols = ["label"]
        for dimension in self.dimensions:
            for c in CATEGORY_CODES:
                cols += [f"{dimension.value}.{_CATEGORY_SHORT[c]}-m", f"{dimension.value}.{_CATEGORY_SHORT[c]}-f"]
            cols += [f"{dimension.value}.total-m", f"{dimension.value}.total-f", f"{dimension.value}.total-t"]
        if self.percentages:
            for name in _PERCENT_COLUMNS:
                cols += [f"%{name}-m", f"%{name}-f", f"%{name}-t"]
        return cols

    def row(self, row: ReportRow) -> list:
        values: list = [row.label]
        for dimension in self.dimensions:
            values += category_columns(row.totals[dimension])
        if self.percentages:
            values += row.percentages.as_list() if row.percentages else [0] * 9
        return values

    def sheet(self, rows: Sequence[ReportRow]) -> list[list]:
        return [self.row(r) for r in rows]


DAILY_COMBINED = SheetLayout(dimensions=ALL_DIMENSIONS, percentages=True)
DAILY_COUNTS = SheetLayout(dimensions=ALL_DIMENSIONS, percentages=False)
SEMI_MONTHLY = SheetLayout(
    dimensions=(Dimension.PRESENT, Dimension.MEAL_TAKEN, Dimension.ALT_MEAL_TAKEN),
    percentages=False,
)
