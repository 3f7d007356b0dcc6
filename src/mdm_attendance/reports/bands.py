"""Standard-band partitioning with streaming subtotals.

Records must arrive sorted by (standard, division), which is the order the
attendance repository returns. A band's subtotal row is emitted right after
the last record of that band, detected by looking at the next record, so the
rows come out in one pass. Bands with no records get no subtotal row; the
grand total row is always last.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.constants import MAX_STANDARD, PRE_PRIMARY_STANDARD
from ..core.enums import ALL_DIMENSIONS, Band, Dimension, RowKind
from ..core.exceptions import DataIntegrityError
from .labels import ENGLISH, ReportLabels
from .model import ReportRow
from .normalizer import DimensionTotals, normalize_record, record_field
from .percentages import derive


def classify_standard(standard: int, break_at: int) -> Band:
    if standard == PRE_PRIMARY_STANDARD:
        return Band.PRE_PRIMARY
    if 1 <= standard < break_at:
        return Band.LOWER
    if break_at <= standard <= MAX_STANDARD:
        return Band.UPPER
    raise DataIntegrityError(f"standard {standard!r} is outside 0..{MAX_STANDARD}")


def band_standards(band: Band, break_at: int) -> range:
    if band == Band.PRE_PRIMARY:
        return range(PRE_PRIMARY_STANDARD, PRE_PRIMARY_STANDARD + 1)
    if band == Band.LOWER:
        return range(1, break_at)
    return range(break_at, MAX_STANDARD + 1)


def bands_for(break_at: int) -> list[Band]:
    """Bands that can hold at least one standard for this break point."""
    return [b for b in (Band.PRE_PRIMARY, Band.LOWER, Band.UPPER) if len(band_standards(b, break_at)) > 0]


def with_percentages(row: ReportRow) -> ReportRow:
    t = row.totals
    row.percentages = derive(t.registered, t.present, t.meal_taken, t.alt_meal_taken)
    return row


def partition(
    records: Sequence[Any],
    break_at: int,
    *,
    labels: ReportLabels = ENGLISH,
    dimensions: Sequence[Dimension] = ALL_DIMENSIONS,
    percentages: bool = True,
) -> list[ReportRow]:
    rows: list[ReportRow] = []
    band_totals: Optional[DimensionTotals] = None
    grand_totals = DimensionTotals(dimensions)
    previous_key: Optional[tuple[int, str]] = None

    def emit(row: ReportRow) -> None:
        rows.append(with_percentages(row) if percentages else row)

    for idx, record in enumerate(records):
        standard = int(record_field(record, "standard"))
        division = str(record_field(record, "division"))
        key = (standard, division)
        if previous_key is not None and key < previous_key:
            raise DataIntegrityError("attendance records must be sorted by (standard, division)")
        previous_key = key

        band = classify_standard(standard, break_at)
        snapshot = normalize_record(record, dimensions)
        emit(
            ReportRow(
                kind=RowKind.CLASS,
                label=labels.class_label(standard, division),
                totals=snapshot,
                key=key,
                band=band,
            )
        )

        if band_totals is None:
            band_totals = DimensionTotals(dimensions)
        band_totals.merge(snapshot)
        grand_totals.merge(snapshot)

        next_record = records[idx + 1] if idx + 1 < len(records) else None
        next_band = (
            classify_standard(int(record_field(next_record, "standard")), break_at) if next_record is not None else None
        )
        if next_band != band:
            emit(
                ReportRow(
                    kind=RowKind.SUBTOTAL,
                    label=labels.subtotal_label(band, break_at),
                    totals=band_totals,
                    key=band.value,
                    band=band,
                )
            )
            band_totals = None

    emit(ReportRow(kind=RowKind.GRAND_TOTAL, label=labels.total, totals=grand_totals, key="total"))
    return rows
