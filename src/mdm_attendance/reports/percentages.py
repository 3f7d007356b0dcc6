from __future__ import annotations

from dataclasses import dataclass

from .accumulator import CategoryAccumulator


def safe_rate(numerator: int, denominator: int) -> int:
    """Whole-number percentage, halves rounded up; 0 when the denominator is 0."""
    if denominator <= 0:
        return 0
    # round-half-up of numerator / denominator * 100 in exact integer arithmetic
    return (200 * numerator + denominator) // (2 * denominator)


@dataclass(frozen=True)
class RateTriple:
    male: int
    female: int
    total: int

    def as_list(self) -> list[int]:
        return [self.male, self.female, self.total]

    def to_dict(self) -> dict:
        return {"male": self.male, "female": self.female, "total": self.total}


def _rate(numerator: CategoryAccumulator, denominator: CategoryAccumulator) -> RateTriple:
    return RateTriple(
        male=safe_rate(numerator.total_male, denominator.total_male),
        female=safe_rate(numerator.total_female, denominator.total_female),
        total=safe_rate(numerator.grand_total, denominator.grand_total),
    )


@dataclass(frozen=True)
class PercentageBlock:
    present_rate: RateTriple
    alt_meal_rate: RateTriple
    mdm_rate: RateTriple

    def as_list(self) -> list[int]:
        return self.present_rate.as_list() + self.alt_meal_rate.as_list() + self.mdm_rate.as_list()

    def to_dict(self) -> dict:
        return {
            "presentRate": self.present_rate.to_dict(),
            "altMealRate": self.alt_meal_rate.to_dict(),
            "mdmRate": self.mdm_rate.to_dict(),
        }


def derive(
    registered: CategoryAccumulator,
    present: CategoryAccumulator,
    meal_taken: CategoryAccumulator,
    alt_meal_taken: CategoryAccumulator,
) -> PercentageBlock:
    """Attendance rate over registered; MDM and alt-meal rates over present."""
    return PercentageBlock(
        present_rate=_rate(present, registered),
        alt_meal_rate=_rate(alt_meal_taken, present),
        mdm_rate=_rate(meal_taken, present),
    )
