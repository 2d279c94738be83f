"""Screen stock area and slitting fee for a vent run."""

from dataclasses import dataclass, field
from typing import Optional, List

from config import SLITTING_FEE_PER_FT


@dataclass(frozen=True)
class VentSpec:
    """Vent catalog entry joined with a project's vent configuration."""
    vent_type: str
    size_inches: float
    length_ft: float
    quantity: int = 1
    single_double: str = "Single"

    @property
    def is_double(self) -> bool:
        return self.single_double == "Double"

    @classmethod
    def from_configuration(cls, vent_configuration) -> Optional["VentSpec"]:
        """Build a spec from a VentConfiguration row, None if it has no vent."""
        vent = vent_configuration.vent
        if vent is None:
            return None
        return cls(
            vent_type=vent.type,
            size_inches=vent.size or 0,
            length_ft=vent_configuration.vent_length or 0,
            quantity=vent_configuration.vent_quantity or 0,
            single_double=vent.single_double,
        )


@dataclass(frozen=True)
class ScreenStock:
    """Screen product with the stock widths it is manufactured in."""
    product: str
    widths_ft: List[float] = field(default_factory=list)

    def offers_width(self, width_ft: float) -> bool:
        return any(float(w) == float(width_ft) for w in self.widths_ft)


@dataclass
class ScreenQuantityResult:
    """Result of screen quantity calculation."""
    area_ft2: float
    slitting_fee_usd: float
    total_area_needed_ft2: float = 0.0
    minimum_area_ft2: float = 0.0

    @property
    def minimum_dominates(self) -> bool:
        """True when stock width, not vent opening, sets the order size."""
        return self.area_ft2 > self.total_area_needed_ft2


def _positive(value) -> bool:
    return value is not None and value > 0


def compute_screen_quantity(
    screen_width_ft: Optional[float],
    vent_size_inches: Optional[float],
    vent_length_ft: Optional[float],
    vent_quantity: Optional[int],
    is_double: bool = False
) -> ScreenQuantityResult:
    """Calculate screen area to order and the slitting fee.

    Formula:
        vent_size_ft = vent_size_inches / 12  (× 2 for double vents)
        total_area_needed = vent_size_ft × length × quantity
        minimum_area = screen_width × length
        area = max(total_area_needed, minimum_area × quantity)
        slitting_fee = 0.22 × length × quantity

    Stock cannot be ordered narrower than it is manufactured, so each vent
    run needs at least one full screen width. A double vent counts as twice
    the single opening since one slit panel covers both halves.

    Args:
        screen_width_ft: Chosen stock width of the screen product
        vent_size_inches: Vent opening size from the vent catalog
        vent_length_ft: Length of one vent run
        vent_quantity: Number of vent runs
        is_double: True for double vents

    Returns:
        ScreenQuantityResult; area and fee are 0 when any input is missing
        or not positive
    """
    if not all(_positive(v) for v in (screen_width_ft, vent_size_inches, vent_length_ft, vent_quantity)):
        return ScreenQuantityResult(area_ft2=0.0, slitting_fee_usd=0.0)

    vent_size_ft = vent_size_inches / 12
    effective_vent_size_ft = vent_size_ft * 2 if is_double else vent_size_ft

    total_area_needed = effective_vent_size_ft * vent_length_ft * vent_quantity
    minimum_area = screen_width_ft * vent_length_ft

    area = max(total_area_needed, minimum_area * vent_quantity)
    slitting_fee = SLITTING_FEE_PER_FT * (vent_length_ft * vent_quantity)

    return ScreenQuantityResult(
        area_ft2=area,
        slitting_fee_usd=slitting_fee,
        total_area_needed_ft2=total_area_needed,
        minimum_area_ft2=minimum_area
    )


def compute_screen_quantity_for_vent(screen_width_ft: Optional[float], vent: Optional[VentSpec]) -> ScreenQuantityResult:
    """Convenience wrapper taking a VentSpec."""
    if vent is None:
        return ScreenQuantityResult(area_ft2=0.0, slitting_fee_usd=0.0)
    return compute_screen_quantity(
        screen_width_ft, vent.size_inches, vent.length_ft, vent.quantity, vent.is_double
    )
