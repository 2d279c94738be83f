"""Vent totals aggregation helpers."""

from typing import Dict, List
from dataclasses import dataclass


@dataclass
class VentTotalsResult:
    """Aggregated screen and drive totals for a project."""
    total_screen_area_ft2: float
    total_slitting_fee_usd: float
    total_drives: int
    vents_breakdown: Dict[str, dict]  # {vent label: {screen_area, slitting_fee, drives}}


def calculate_vent_totals(vent_configurations: List) -> VentTotalsResult:
    """Sum persisted screen quantities and drive counts across vent configurations.

    Args:
        vent_configurations: VentConfiguration instances with screen and
            drive configurations loaded

    Returns:
        VentTotalsResult with project totals and per-vent breakdown
    """
    total_area = 0.0
    total_fee = 0.0
    total_drives = 0
    vents_breakdown = {}

    for vc in vent_configurations:
        area = sum(sc.calculated_quantity or 0 for sc in vc.screen_configurations)
        fee = sum(sc.slitting_fee or 0 for sc in vc.screen_configurations)
        drives = sum(dc.quantity or 0 for dc in vc.drive_configurations)

        total_area += area
        total_fee += fee
        total_drives += drives

        label = vc.label()
        if label in vents_breakdown:
            label = f"{label} #{vc.id}"
        vents_breakdown[label] = {
            'screen_area': area,
            'slitting_fee': fee,
            'drives': drives
        }

    return VentTotalsResult(
        total_screen_area_ft2=round(total_area, 2),
        total_slitting_fee_usd=round(total_fee, 2),
        total_drives=total_drives,
        vents_breakdown=vents_breakdown
    )
