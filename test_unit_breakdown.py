"""Tests for bay unit and base quantity calculation."""

import math

import pytest

from calculations import (
    StructureGeometry, compute_unit_breakdown, calculate_mid_bays_per_house, parse_width_ft
)


def make_geometry(**overrides):
    values = dict(
        range_count=1,
        house_count=2,
        house_length_ft=100,
        width_ft=30,
        gutter_connect=True,
        concrete_slab='No',
        gutter_partitions=0,
        gable_partitions=0,
    )
    values.update(overrides)
    return StructureGeometry(**values)


def test_gutter_connected_two_houses_no_slab():
    units = compute_unit_breakdown(make_geometry())

    assert (units.A, units.B, units.C, units.D) == (2, 6, 2, 6)
    assert units.total_length_ft == 320
    assert units.base_stringer_ft == 320
    assert units.base_angle_sections is None
    assert units.ba_bolts is None


def test_gutter_connected_two_houses_on_slab():
    units = compute_unit_breakdown(make_geometry(concrete_slab='Yes'))

    assert units.base_angle_sections == pytest.approx(26.6667, rel=1e-4)
    assert units.ba_bolts == 134
    assert units.base_stringer_ft is None


def test_slab_not_set_leaves_base_quantities_empty():
    units = compute_unit_breakdown(make_geometry(concrete_slab=None))

    assert units.base_angle_sections is None
    assert units.ba_bolts is None
    assert units.base_stringer_ft is None
    assert (units.A, units.B, units.C, units.D) == (2, 6, 2, 6)


@pytest.mark.parametrize("length", [21, 50, 100, 250])
def test_single_gutter_connected_house_has_no_additional_units(length):
    units = compute_unit_breakdown(make_geometry(house_count=1, house_length_ft=length))

    assert units.A == 2
    assert units.C == 0
    assert units.D == 0


@pytest.mark.parametrize("houses", [1, 2, 5])
def test_free_standing_houses(houses):
    units = compute_unit_breakdown(make_geometry(house_count=houses, gutter_connect=False))
    mid_bays = calculate_mid_bays_per_house(100)

    assert units.A == 2 * houses
    assert units.B == mid_bays * houses
    assert units.C == 0
    assert units.D == 0


def test_free_standing_base_length():
    units = compute_unit_breakdown(make_geometry(house_count=3, gutter_connect=False))

    # 30 × 6 + 100 × 6
    assert units.base_stringer_ft == 780


def test_partitions_add_to_base_length():
    units = compute_unit_breakdown(make_geometry(gutter_partitions=2, gable_partitions=1))

    assert units.total_length_ft == 320 + 2 * 100 + 30


def test_mid_bays_never_negative_and_non_decreasing():
    previous = 0
    for length in range(0, 200):
        mid_bays = calculate_mid_bays_per_house(length)
        assert mid_bays >= 0
        assert mid_bays >= previous
        previous = mid_bays


def test_mid_bay_boundaries():
    assert calculate_mid_bays_per_house(32) == 0
    assert calculate_mid_bays_per_house(33) == 1
    assert calculate_mid_bays_per_house(45) == 2


def test_zero_length_house_does_not_crash():
    units = compute_unit_breakdown(make_geometry(house_length_ft=0))

    assert units.B == 0
    assert units.D == 0
    assert units.base_stringer_ft == 30 * 4


@pytest.mark.parametrize("length,width,houses", [(100, 30, 2), (45, 24, 1), (300, 42, 6), (64, 18, 3)])
def test_ba_bolts_round_up(length, width, houses):
    units = compute_unit_breakdown(make_geometry(
        house_length_ft=length, width_ft=width, house_count=houses, concrete_slab='Yes'
    ))

    assert units.ba_bolts == math.ceil(units.base_angle_sections * 5)
    assert units.base_angle_sections == pytest.approx(units.total_length_ft / 12)


def test_range_count_does_not_change_units():
    one_range = compute_unit_breakdown(make_geometry(range_count=1))
    three_ranges = compute_unit_breakdown(make_geometry(range_count=3))

    assert one_range == three_ranges


@pytest.mark.parametrize("raw,expected", [
    ("30", 30.0), ("30'", 30.0), (" 42.5 ft", 42.5), (36, 36.0), ("", 0.0), (None, 0.0), ("wide", 0.0),
    ("1e2", 100.0), ("-30", 0.0), (".5", 0.5), ("+24 ft", 24.0), ("12e", 12.0)
])
def test_parse_width(raw, expected):
    assert parse_width_ft(raw) == expected
