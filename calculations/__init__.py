from .unit_breakdown import (
    StructureGeometry, UnitBreakdown, compute_unit_breakdown,
    calculate_mid_bays_per_house, parse_width_ft
)
from .screen_quantity import (
    VentSpec, ScreenStock, ScreenQuantityResult,
    compute_screen_quantity, compute_screen_quantity_for_vent
)
from .drive_filter import (
    DriveSpec, VENT_DRIVE_COMPATIBILITY,
    compatible_drive_types, is_drive_compatible, filter_compatible_drives
)
from .vent_totals import calculate_vent_totals, VentTotalsResult

__all__ = [
    'StructureGeometry', 'UnitBreakdown', 'compute_unit_breakdown',
    'calculate_mid_bays_per_house', 'parse_width_ft',
    'VentSpec', 'ScreenStock', 'ScreenQuantityResult',
    'compute_screen_quantity', 'compute_screen_quantity_for_vent',
    'DriveSpec', 'VENT_DRIVE_COMPATIBILITY',
    'compatible_drive_types', 'is_drive_compatible', 'filter_compatible_drives',
    'calculate_vent_totals', 'VentTotalsResult'
]
