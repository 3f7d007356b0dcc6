from __future__ import annotations

import random
from decimal import Decimal

from mdm_attendance.database.mysql_base import load_json_block
from mdm_attendance.reports.accumulator import CategoryAccumulator, accumulate, coerce_count, finalize


def _block(**counts):
    """block(sc=(3, 1), general=(0, 2)) -> {"sc": {"male": 3, "female": 1}, ...}"""
    return {cat: {"male": m, "female": f} for cat, (m, f) in counts.items()}


def test_missing_and_malformed_fields_count_as_zero():
    acc = CategoryAccumulator(
        {
            "sc": {"male": 3},
            "obc": None,
            "st": {"female": "2"},
            "general": {"male": -4, "female": "x"},
        }
    )

    assert acc.get("sc", "male") == 3
    assert acc.get("sc", "female") == 0
    assert acc.get("st", "female") == 2
    assert acc.get("general", "male") == 0
    assert acc.total_male == 3
    assert acc.total_female == 2
    assert acc.grand_total == 5


def test_non_mapping_sources_are_ignored():
    acc = CategoryAccumulator()
    acc.add(None)
    acc.add(42)
    acc.add("sc")

    assert acc.is_zero()


def test_coerce_count():
    assert coerce_count(None) == 0
    assert coerce_count(True) == 0
    assert coerce_count("7") == 7
    assert coerce_count(4.9) == 4
    assert coerce_count(-1) == 0
    assert coerce_count([1]) == 0
    assert coerce_count("3.5") == 3
    assert coerce_count(float("inf")) == 0
    assert coerce_count(float("nan")) == 0
    assert coerce_count(Decimal("Infinity")) == 0
    assert coerce_count("-Infinity") == 0


def test_infinite_counts_from_json_columns_do_not_raise():
    block = load_json_block('{"sc": {"male": Infinity, "female": 1}}')

    acc = accumulate(CategoryAccumulator(), block)

    assert acc.get("sc", "male") == 0
    assert acc.grand_total == 1


def test_grand_total_equals_male_plus_female():
    acc = CategoryAccumulator()
    accumulate(acc, _block(sc=(3, 1), st=(2, 2), obc=(5, 0), general=(7, 9)))
    accumulate(acc, _block(general=(1, 1)))

    snapshot = finalize(acc)
    male = sum(snapshot[c]["male"] for c in ("sc", "st", "obc", "general"))
    female = sum(snapshot[c]["female"] for c in ("sc", "st", "obc", "general"))

    assert snapshot["totalMale"] == male == 18
    assert snapshot["totalFemale"] == female == 13
    assert snapshot["grandTotal"] == male + female


def test_accumulation_is_order_independent():
    blocks = [
        _block(sc=(1, 2)),
        _block(st=(3, 0), general=(4, 4)),
        {"obc": {"male": 5}},
        {},
        _block(sc=(0, 6), obc=(2, 2)),
    ]
    expected = CategoryAccumulator()
    for b in blocks:
        accumulate(expected, b)

    rng = random.Random(7)
    for _ in range(20):
        shuffled = blocks[:]
        rng.shuffle(shuffled)
        acc = CategoryAccumulator()
        for b in shuffled:
            accumulate(acc, b)
        assert acc == expected
        assert finalize(acc) == finalize(expected)


def test_accumulators_can_be_summed_into_each_other():
    a = CategoryAccumulator(_block(sc=(1, 1)))
    b = CategoryAccumulator(_block(sc=(2, 0), general=(0, 5)))

    total = CategoryAccumulator().add(a).add(b)

    assert total.get("sc", "male") == 3
    assert total.grand_total == a.grand_total + b.grand_total
    # sources are left untouched
    assert a.grand_total == 2
