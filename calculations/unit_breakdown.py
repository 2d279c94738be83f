"""Bay unit counts and base support quantities for a greenhouse structure."""

import math
import re
from dataclasses import dataclass
from typing import Optional

from config import BASE_LENGTH_FT, BAY_LENGTH_FT, BASE_ANGLE_SECTION_FT, BA_BOLTS_PER_SECTION

LEADING_NUMBER = re.compile(r'\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')


@dataclass(frozen=True)
class StructureGeometry:
    """Snapshot of one saved structure configuration."""
    range_count: int
    house_count: int
    house_length_ft: float
    width_ft: float
    gutter_connect: bool = True
    concrete_slab: Optional[str] = None  # "Yes", "No" or None when not chosen
    gutter_partitions: int = 0
    gable_partitions: int = 0

    @classmethod
    def from_structure(cls, structure, gutter_connect: bool) -> "StructureGeometry":
        """Build a geometry snapshot from a StructureModel row.

        gutter_connect lives on the greenhouse model, not the structure row,
        so the caller passes it in.
        """
        return cls(
            range_count=structure.range_count or 0,
            house_count=structure.house_count or 0,
            house_length_ft=structure.house_length or 0,
            width_ft=parse_width_ft(structure.width),
            gutter_connect=bool(gutter_connect),
            concrete_slab=structure.concrete_slab or None,
            gutter_partitions=structure.gutter_partitions or 0,
            gable_partitions=structure.gable_partitions or 0,
        )


@dataclass
class UnitBreakdown:
    """Derived bill-of-material counts for a structure."""
    A: int  # End bays on starter house
    B: int  # Mid bays on starter house
    C: int  # End bays on additional houses
    D: int  # Mid bays on additional houses
    total_length_ft: float
    base_angle_sections: Optional[float] = None
    ba_bolts: Optional[int] = None
    base_stringer_ft: Optional[float] = None

    @property
    def uses_base_angle(self) -> bool:
        return self.base_angle_sections is not None

    def __str__(self) -> str:
        units = f"A={self.A} B={self.B} C={self.C} D={self.D}"
        if self.uses_base_angle:
            return f"{units}, base angle {self.base_angle_sections:.2f} sections, {self.ba_bolts} bolts"
        if self.base_stringer_ft is not None:
            return f"{units}, base stringer {self.base_stringer_ft:.2f} ft"
        return units


def parse_width_ft(width) -> float:
    """Parse a stored width such as "30", "30'" or 30.0 into feet.

    Reads the leading decimal number, with optional sign, fraction and
    exponent, so "1e2" is 100. "Infinity" is not accepted.
    Negative or unparsable widths count as zero.
    """
    if width is None:
        return 0.0
    if isinstance(width, (int, float)):
        return float(width) if width > 0 else 0.0

    match = LEADING_NUMBER.match(str(width))
    if match is None:
        return 0.0
    value = float(match.group(1))
    return value if value > 0 else 0.0


def calculate_mid_bays_per_house(house_length_ft: float) -> int:
    """Mid bays that fit in one house after the end bay pair."""
    if not house_length_ft or house_length_ft <= 0:
        return 0
    return max(0, math.floor((house_length_ft - BASE_LENGTH_FT) / BAY_LENGTH_FT))


def compute_unit_breakdown(geometry: StructureGeometry) -> UnitBreakdown:
    """Derive A/B/C/D bay units and base support quantities.

    Gutter-connected houses share one pair of end bays for the range (A),
    each additional house adds its own pair (C) and its own mid bays (D).
    Free-standing houses each get full end bay treatment and never use C/D.

    Base support length:
        width × (A + C) + house_length × A
        + gutter_partitions × house_length + gable_partitions × width

    On a concrete slab the length is covered by 12ft base angle sections
    with 5 bolts per section; otherwise by base stringer in linear feet.

    Args:
        geometry: Structure snapshot. range_count is carried but does not
            enter the arithmetic.

    Returns:
        UnitBreakdown with exactly one base branch populated, or neither
        when concrete_slab is not set.
    """
    houses = max(0, geometry.house_count or 0)
    house_length = geometry.house_length_ft if geometry.house_length_ft and geometry.house_length_ft > 0 else 0
    width = geometry.width_ft if geometry.width_ft and geometry.width_ft > 0 else 0
    mid_bays = calculate_mid_bays_per_house(house_length)

    if geometry.gutter_connect:
        additional_houses = max(0, houses - 1)
        a_units = 2
        b_units = mid_bays
        c_units = 2 * additional_houses
        d_units = mid_bays * additional_houses
    else:
        a_units = 2 * houses
        b_units = mid_bays * houses
        c_units = 0
        d_units = 0

    total_length = (
        width * (a_units + c_units)
        + house_length * a_units
        + max(0, geometry.gutter_partitions or 0) * house_length
        + max(0, geometry.gable_partitions or 0) * width
    )

    breakdown = UnitBreakdown(A=a_units, B=b_units, C=c_units, D=d_units, total_length_ft=total_length)

    if geometry.concrete_slab == 'Yes':
        breakdown.base_angle_sections = total_length / BASE_ANGLE_SECTION_FT
        breakdown.ba_bolts = math.ceil(breakdown.base_angle_sections * BA_BOLTS_PER_SECTION)
    elif geometry.concrete_slab == 'No':
        breakdown.base_stringer_ft = total_length

    return breakdown
