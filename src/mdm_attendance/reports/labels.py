from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Band


@dataclass(frozen=True)
class ReportLabels:
    """Locale strings used in row labels and report metadata."""

    pre_primary: str
    total: str
    standard_prefix: str
    months: tuple[str, ...]

    def band_label(self, band: Band, break_at: int) -> str:
        if band == Band.PRE_PRIMARY:
            return self.pre_primary
        if band == Band.LOWER:
            return f"1-{break_at - 1}"
        return f"{break_at}-8"

    def subtotal_label(self, band: Band, break_at: int) -> str:
        return f"{self.band_label(band, break_at)} {self.total}"

    def section_label(self, band: Band, break_at: int) -> str:
        if band == Band.PRE_PRIMARY:
            return self.pre_primary
        return f"{self.standard_prefix} {self.band_label(band, break_at)}"

    def class_label(self, standard: int, division: str) -> str:
        name = self.pre_primary if standard == 0 else str(standard)
        return f"{name} - {division}"

    def month_name(self, month: int) -> str:
        return self.months[month - 1]


ENGLISH = ReportLabels(
    pre_primary="Balvatika",
    total="Total",
    standard_prefix="Std",
    months=(
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
)

GUJARATI = ReportLabels(
    pre_primary="બાલવાટિકા",
    total="કુલ",
    standard_prefix="ધોરણ",
    months=(
        "જાન્યુઆરી", "ફેબ્રુઆરી", "માર્ચ", "એપ્રિલ", "મે", "જૂન",
        "જુલાઈ", "ઓગસ્ટ", "સપ્ટેમ્બર", "ઓક્ટોબર", "નવેમ્બર", "ડિસેમ્બર",
    ),
)

_LOCALES = {"en": ENGLISH, "gu": GUJARATI}


def labels_for(locale: str) -> ReportLabels:
    return _LOCALES.get((locale or "").lower(), ENGLISH)
