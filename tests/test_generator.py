import pytest

from gearspeed.generator import (build_combination, calculate_gear_ratio,
                                 calculate_output_rpm,
                                 generate_all_combinations, get_speed_category)
from gearspeed.models import (GEAR_SIZES, INPUT_RPMS, Combination, InvalidGear,
                              SpeedCategory)


def test_generates_every_combination(combinations):
    """3 motors x 7 driving x 7 driven gears gives 147 records"""
    assert len(combinations) == 147
    triples = {(c.input_rpm, c.driving_gear, c.driven_gear) for c in combinations}
    assert len(triples) == 147


def test_generation_order(combinations):
    """Input RPM varies slowest, driven gear fastest"""
    first, second = combinations[0], combinations[1]
    assert (first.input_rpm, first.driving_gear, first.driven_gear) == (100, 12, 12)
    assert (second.input_rpm, second.driving_gear, second.driven_gear) == (100, 12, 24)
    last = combinations[-1]
    assert (last.input_rpm, last.driving_gear, last.driven_gear) == (600, 80, 80)
    assert combinations[49].input_rpm == 200


def test_derived_values_are_exact(combinations):
    for combo in combinations:
        assert combo.gear_ratio == combo.driven_gear / combo.driving_gear
        assert combo.output_rpm == combo.input_rpm / combo.gear_ratio
        assert combo.category is get_speed_category(combo.output_rpm)


def test_categories_partition_the_set(combinations):
    counts = {category: 0 for category in SpeedCategory}
    for combo in combinations:
        counts[combo.category] += 1

    assert sum(counts.values()) == 147
    assert counts[SpeedCategory.HIGH] == 38
    assert counts[SpeedCategory.MEDIUM] == 67
    assert counts[SpeedCategory.LOW] == 42


@pytest.mark.parametrize("output_rpm, expected", [
    (4000.0, SpeedCategory.HIGH),
    (500.01, SpeedCategory.HIGH),
    (500.0, SpeedCategory.MEDIUM),
    (100.01, SpeedCategory.MEDIUM),
    (100.0, SpeedCategory.LOW),
    (15.0, SpeedCategory.LOW),
])
def test_speed_category_thresholds_are_strict(output_rpm, expected):
    assert get_speed_category(output_rpm) is expected


def test_gear_ratio_and_output_rpm():
    assert calculate_gear_ratio(24, 48) == 2.0
    assert calculate_output_rpm(200, 24, 48) == 100.0
    assert calculate_output_rpm(600, 80, 12) == 4000.0


@pytest.mark.parametrize("driving, driven", [(0, 12), (-12, 24), (12, 0), (24, -48)])
def test_non_positive_gear_raises_invalid_gear(driving, driven):
    with pytest.raises(InvalidGear):
        calculate_gear_ratio(driving, driven)


def test_invalid_gear_is_a_value_error():
    with pytest.raises(ValueError, match="driving gear"):
        calculate_output_rpm(100, 0, 12)


def test_generator_fails_fast_on_invalid_sizes():
    with pytest.raises(InvalidGear):
        generate_all_combinations(gear_sizes=(12, 0, 24))


def test_custom_domains():
    combos = generate_all_combinations(input_rpms=(100,), gear_sizes=(12, 24),
                                       driven_sizes=(36,))
    assert [(c.driving_gear, c.driven_gear) for c in combos] == [(12, 36), (24, 36)]


def test_combination_is_immutable():
    combo = build_combination(200, 24, 48)
    with pytest.raises(AttributeError):
        combo.output_rpm = 1.0


def test_combination_to_dict():
    combo = build_combination(200, 24, 48)
    assert isinstance(combo, Combination)
    assert combo.to_dict() == {
        "input_rpm": 200,
        "driving_gear": 24,
        "driven_gear": 48,
        "gear_ratio": 2.0,
        "output_rpm": 100.0,
        "category": "Low Speed",
    }


def test_combination_to_row_formats_values():
    row = build_combination(600, 80, 12).to_row()
    assert row["input_display"] == "600 RPM"
    assert row["gears_display"] == "80T → 12T"
    assert row["ratio_display"] == "0.15:1"
    assert row["output_display"] == "4000.0 RPM"
    assert row["category_class"] == "high-speed"


def test_default_domains():
    assert INPUT_RPMS == (100, 200, 600)
    assert GEAR_SIZES == (12, 24, 36, 48, 60, 72, 80)


def test_ratio_too_large_for_float_raises_invalid_gear():
    """Integer division past float range is reported as a bad gear"""
    with pytest.raises(InvalidGear, match="ratio too large"):
        calculate_gear_ratio(24, int("1" * 400))


def test_ratio_underflow_raises_invalid_gear():
    with pytest.raises(InvalidGear, match="ratio out of range"):
        calculate_gear_ratio(int("1" * 400), 48)


def test_output_rpm_overflow_raises_invalid_gear():
    with pytest.raises(InvalidGear):
        calculate_output_rpm(1e308, 80, 12)
