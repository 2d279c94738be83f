"""Drive compatibility filtering for vent configurations."""

from dataclasses import dataclass
from typing import Optional, List, Sequence, FrozenSet


@dataclass(frozen=True)
class DriveSpec:
    """Drive catalog entry."""
    drive_type: str
    motor: str
    size: float  # feet
    greenhouse_type: str = "All"


# Vent type -> drive types able to actuate it. Vent types missing here
# (catalog entries added after this table) get no drives.
VENT_DRIVE_COMPATIBILITY = {
    'CT Roof': frozenset({'Roof Vents'}),
    'Gothic Roof': frozenset({'Roof Vents'}),
    'Insulator Roof': frozenset({'Roof Vents'}),
    'Solar Light Roof': frozenset({'Roof Vents'}),
    'Oxnard Vent': frozenset({'Wall Vents'}),
    'Wall': frozenset({'Wall Vents'}),
    'Pad': frozenset({'Pad Vent'}),
}


def compatible_drive_types(vent_type: Optional[str]) -> FrozenSet[str]:
    """Drive types compatible with a vent type, empty when unmapped."""
    if not vent_type:
        return frozenset()
    return VENT_DRIVE_COMPATIBILITY.get(vent_type, frozenset())


def is_drive_compatible(drive, vent_type: str, vent_length_ft: float) -> bool:
    """Check one drive against a vent.

    The drive must be at least as long as the vent run it actuates and of a
    drive type mapped to the vent type.
    """
    if drive.size is None or drive.size < vent_length_ft:
        return False
    return drive.drive_type in compatible_drive_types(vent_type)


def filter_compatible_drives(
    drives: Sequence,
    vent_type: Optional[str],
    vent_length_ft: Optional[float]
) -> List:
    """Filter the drive catalog down to drives usable on a vent.

    Works on any objects with drive_type and size attributes (DriveSpec or
    Drive rows). Until both a vent type and a vent length are chosen there
    is nothing to filter on and the full catalog comes back.

    Args:
        drives: Full drive catalog
        vent_type: Selected vent type name
        vent_length_ft: Selected vent run length

    Returns:
        New list of admissible drives in catalog order
    """
    if not vent_type or not vent_length_ft:
        return list(drives)

    return [d for d in drives if is_drive_compatible(d, vent_type, vent_length_ft)]
