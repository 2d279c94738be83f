"""Project, structure and vent configuration operations.

Every function takes an open session and leaves committing to the caller,
normally through session_scope(). Missing records and rule violations raise
ValueError with a message suitable for showing to the user.
"""

from typing import Optional, List, Iterable

from calculations import (
    StructureGeometry, UnitBreakdown, compute_unit_breakdown,
    VentSpec, ScreenStock, ScreenQuantityResult, compute_screen_quantity_for_vent,
    filter_compatible_drives
)
from utils.logging_config import get_logger
from .models import (
    Project, ProjectStatus, Category, Option, UserSelection,
    GreenhouseModel, StructureDescription, StructureModel, ConcreteSlab,
    Vent, Screen, Drive, VentConfiguration, ScreenConfiguration, DriveConfiguration,
    VentFreightRequirements, ConfigurationType, ScreenType,
    DoorType, DoorsAndVestibules, Door, Vestibule, DoorFreightRequirements, Covering
)

logger = get_logger(__name__)

STRUCTURE_OPTION_FIELDS = (
    'load', 'glazing', 'eave', 'structural_upgrades', 'zones', 'phase_voltage',
    'nat_gas_propane', 'elevation', 'temps_climate', 'roof', 'roof_vent', 'sidewalls',
    'endwalls', 'upper_gables', 'stemwall', 'endwall_transitions'
)

WALL_FIELDS = (
    'wall_type', 'system_quantity', 'houses_wide_per_system', 'house_width',
    'frame_height', 'eave_height', 'spacing'
)


# --- Projects ---------------------------------------------------------------

def create_project(
    session,
    project_name: str,
    customer_name: Optional[str] = None,
    bid_number: Optional[str] = None,
    **fields
) -> Project:
    """Create a draft project."""
    if not project_name or not project_name.strip():
        raise ValueError("Project name is required")

    project = Project(
        project_name=project_name.strip(),
        customer_name=customer_name,
        bid_number=bid_number,
        status=ProjectStatus.DRAFT.value,
        ship_to_address=fields.get('ship_to_address'),
        phone=fields.get('phone'),
        email=fields.get('email'),
        notes=fields.get('notes')
    )
    session.add(project)
    session.flush()
    logger.info("Created project %s (%s)", project.id, project.project_name)
    return project


def get_project(session, project_id: int) -> Project:
    project = session.get(Project, project_id)
    if project is None:
        raise ValueError(f"Project {project_id} not found")
    return project


def update_project_status(session, project_id: int, status: str) -> Project:
    """Move a project to another status (draft, in_progress, review, completed)."""
    try:
        ProjectStatus(status)
    except ValueError:
        raise ValueError(f"Unknown project status '{status}'") from None

    project = get_project(session, project_id)
    project.status = status
    logger.info("Project %s status -> %s", project_id, status)
    return project


def delete_project(session, project_id: int):
    """Delete a project with its structures, selections, vents, doors and vestibules."""
    project = get_project(session, project_id)
    session.delete(project)
    logger.info("Deleted project %s", project_id)


# --- Catalog selections -----------------------------------------------------

def get_categories(session) -> List[Category]:
    return session.query(Category).order_by(Category.display_order).all()


def select_option(session, project_id: int, option_id: int) -> UserSelection:
    """Record the option chosen for its subcategory, replacing an earlier choice."""
    get_project(session, project_id)
    option = session.get(Option, option_id)
    if option is None:
        raise ValueError(f"Option {option_id} not found")

    selection = session.query(UserSelection).filter(
        UserSelection.project_id == project_id,
        UserSelection.subcategory_id == option.subcategory_id
    ).first()

    if selection is None:
        selection = UserSelection(
            project_id=project_id,
            subcategory_id=option.subcategory_id,
            option_id=option.id
        )
        session.add(selection)
    else:
        selection.option_id = option.id
        selection.option = option

    session.flush()
    return selection


def get_selections(session, project_id: int) -> List[UserSelection]:
    return session.query(UserSelection).filter(
        UserSelection.project_id == project_id
    ).order_by(UserSelection.subcategory_id).all()


# --- Structure --------------------------------------------------------------

def save_structure(
    session,
    project_id: int,
    name: str,
    model_id: int,
    width: str,
    house_count: int,
    house_length: float,
    range_count: int = 1,
    concrete_slab: Optional[str] = None,
    gutter_partitions: int = 0,
    gable_partitions: int = 0,
    description: Optional[str] = None,
    **options
) -> StructureModel:
    """Save a project's structure.

    Each save adds a new StructureModel row; earlier rows stay as history and
    get_latest_structure() returns the newest. Base angle, BA bolts and base
    stringer are computed from the unit breakdown and stored with the row.

    Args:
        session: Open session
        project_id: Owning project
        name: Structure name shown to the user
        model_id: GreenhouseModel id (decides gutter connect)
        width: House width as entered, e.g. "30"
        house_count: Houses per range
        house_length: House length in feet
        range_count: Ranges (stored only)
        concrete_slab: "Yes", "No" or None
        gutter_partitions: Partitions along the house length
        gable_partitions: Partitions across the width
        description: Optional structure description text
        **options: Other structure options (load, glazing, eave, roof, ...)

    Returns:
        The new StructureModel
    """
    if not name or not name.strip():
        raise ValueError("Structure name is required")

    project = get_project(session, project_id)

    model = session.get(GreenhouseModel, model_id) if model_id else None
    if model is None:
        raise ValueError("Please select a greenhouse model")

    if range_count is None or range_count < 0:
        raise ValueError(f"Range count must be zero or more, got {range_count}")

    if concrete_slab is not None and concrete_slab not in {c.value for c in ConcreteSlab}:
        raise ValueError(f"Concrete slab must be 'Yes' or 'No', got '{concrete_slab}'")

    unknown = set(options) - set(STRUCTURE_OPTION_FIELDS)
    if unknown:
        raise ValueError(f"Unknown structure option(s): {', '.join(sorted(unknown))}")

    # One description per project, updated in place
    desc = project.structure_descriptions[0] if project.structure_descriptions else None
    if desc is None:
        desc = StructureDescription(project_id=project.id, name=name.strip(), description=description)
        session.add(desc)
        session.flush()
    else:
        desc.name = name.strip()
        desc.description = description

    structure = StructureModel(
        project_id=project.id,
        model_id=model.id,
        description_id=desc.id,
        width=str(width),
        range_count=range_count,
        house_count=house_count,
        house_length=house_length,
        concrete_slab=concrete_slab,
        gutter_partitions=gutter_partitions or 0,
        gable_partitions=gable_partitions or 0,
        **options
    )
    structure.greenhouse_model = model

    breakdown = compute_unit_breakdown(structure_geometry(structure))
    structure.base_angle_12ft = breakdown.base_angle_sections
    structure.ba_bolts = breakdown.ba_bolts
    structure.base_stringer = breakdown.base_stringer_ft

    session.add(structure)
    session.flush()
    logger.info("Saved structure %s for project %s: %s", structure.id, project.id, breakdown)
    return structure


def get_latest_structure(session, project_id: int) -> Optional[StructureModel]:
    """Active structure of a project: the most recently saved row."""
    return session.query(StructureModel).filter(
        StructureModel.project_id == project_id
    ).order_by(StructureModel.created_at.desc(), StructureModel.id.desc()).first()


def structure_geometry(structure: StructureModel) -> StructureGeometry:
    """Geometry snapshot of a structure row, gutter connect taken from its model."""
    gutter_connect = structure.greenhouse_model.gutter_connect if structure.greenhouse_model else True
    return StructureGeometry.from_structure(structure, gutter_connect)


def structure_unit_breakdown(session, project_id: int) -> Optional[UnitBreakdown]:
    """Unit breakdown of a project's active structure, None if it has none."""
    structure = get_latest_structure(session, project_id)
    if structure is None:
        return None
    return compute_unit_breakdown(structure_geometry(structure))


# --- Vents ------------------------------------------------------------------

def get_vent_configuration(session, configuration_id: int) -> VentConfiguration:
    vc = session.get(VentConfiguration, configuration_id)
    if vc is None:
        raise ValueError(f"Vent configuration {configuration_id} not found")
    return vc


def list_vent_configurations(session, project_id: int) -> List[VentConfiguration]:
    """Vent configurations of a project, newest first."""
    return session.query(VentConfiguration).filter(
        VentConfiguration.project_id == project_id
    ).order_by(VentConfiguration.created_at.desc(), VentConfiguration.id.desc()).all()


def compatible_drives_for_vent(session, vent_id: Optional[int], vent_length: Optional[float]) -> List[Drive]:
    """Drive catalog filtered for a vent; full catalog until a vent is chosen."""
    drives = session.query(Drive).order_by(Drive.drive_type, Drive.size, Drive.id).all()
    vent = session.get(Vent, vent_id) if vent_id else None
    return filter_compatible_drives(drives, vent.type if vent else None, vent_length)


def recompute_screen_configurations(vent_configuration: VentConfiguration) -> List[ScreenQuantityResult]:
    """Replace derived quantity and slitting fee on every screen of a vent configuration.

    Values are always recomputed from scratch, never adjusted from what was
    stored before.
    """
    vent_spec = VentSpec.from_configuration(vent_configuration)
    results = []
    for sc in vent_configuration.screen_configurations:
        result = compute_screen_quantity_for_vent(sc.screen_width, vent_spec)
        sc.calculated_quantity = result.area_ft2
        sc.slitting_fee = result.slitting_fee_usd
        results.append(result)
        logger.debug(
            "Screen %s on vent configuration %s: %.2f ft2, fee %.2f",
            sc.screen_id, vent_configuration.id, result.area_ft2, result.slitting_fee_usd
        )
    return results


def _build_screen_configuration(session, screen_data: dict) -> ScreenConfiguration:
    screen_id = screen_data.get('screen_id')
    screen = session.get(Screen, screen_id) if screen_id is not None else None
    if screen is None:
        raise ValueError(f"Screen {screen_id} not found")

    try:
        width = float(screen_data.get('screen_width'))
    except (TypeError, ValueError):
        raise ValueError(f"Invalid screen width for {screen.product}") from None

    stock = ScreenStock(product=screen.product, widths_ft=screen.get_widths())
    if not stock.offers_width(width):
        raise ValueError(
            f"{screen.product} is not available in {width:g} ft width "
            f"(available: {', '.join(f'{w:g}' for w in stock.widths_ft)})"
        )

    screen_type = screen_data.get('screen_type') or ScreenType.GOTHIC_ROOF.value
    if screen_type not in {t.value for t in ScreenType}:
        raise ValueError(f"Unknown screen type '{screen_type}'")

    sc = ScreenConfiguration(screen_id=screen.id, screen_width=width, screen_type=screen_type)
    sc.screen = screen
    return sc


def _check_drive_fits(drive: Drive, vent: Optional[Vent], vent_length: Optional[float]):
    if not filter_compatible_drives([drive], vent.type if vent else None, vent_length):
        raise ValueError(
            f"Drive {drive.drive_type} - {drive.motor} ({drive.size:g} ft) "
            f"is not compatible with {vent.type} vent of {vent_length:g} ft"
        )


def _build_drive_configuration(session, drive_data: dict, vent: Optional[Vent],
                               vent_length: Optional[float]) -> DriveConfiguration:
    drive_id = drive_data.get('drive_id')
    drive = session.get(Drive, drive_id) if drive_id is not None else None
    if drive is None:
        raise ValueError(f"Drive {drive_id} not found")

    quantity = drive_data.get('quantity', 1)
    if not quantity or quantity < 1:
        raise ValueError("Drive quantity must be at least 1")

    _check_drive_fits(drive, vent, vent_length)

    dc = DriveConfiguration(drive_id=drive.id, quantity=quantity)
    dc.drive = drive
    return dc


def save_vent_configuration(
    session,
    project_id: int,
    vent_id: Optional[int] = None,
    vent_quantity: Optional[int] = 1,
    vent_length: Optional[float] = None,
    screens: Iterable[dict] = (),
    drives: Iterable[dict] = (),
    configuration_id: Optional[int] = None,
    configuration_type: str = ConfigurationType.VENT.value,
    ati_house: bool = False,
    notes: Optional[str] = None,
    drives_freight: Optional[str] = None,
    screen_freight: Optional[str] = None,
    **wall_fields
) -> VentConfiguration:
    """Create or replace a vent configuration with its screens and drives.

    Screens and drives are replaced in full. Screen widths must be offered by
    the screen product and drives must pass the compatibility filter for the
    vent. Screen quantities and slitting fees are recomputed before returning.

    Args:
        session: Open session
        project_id: Owning project
        vent_id: Vent catalog id
        vent_quantity: Number of vent runs
        vent_length: Length of one run in feet
        screens: Dicts with screen_id, screen_width, screen_type
        drives: Dicts with drive_id, quantity
        configuration_id: Existing configuration to replace, None to create
        configuration_type: ConfigurationType value
        ati_house: ATI house flag
        notes: Free text
        drives_freight: Freight note for drives
        screen_freight: Freight note for screens
        **wall_fields: Roll up / drop wall fields (wall_type, frame_height, ...)

    Returns:
        The saved VentConfiguration
    """
    if configuration_type not in {t.value for t in ConfigurationType}:
        raise ValueError(f"Unknown configuration type '{configuration_type}'")

    unknown = set(wall_fields) - set(WALL_FIELDS)
    if unknown:
        raise ValueError(f"Unknown vent configuration field(s): {', '.join(sorted(unknown))}")

    get_project(session, project_id)

    vent = None
    if vent_id:
        vent = session.get(Vent, vent_id)
        if vent is None:
            raise ValueError(f"Vent {vent_id} not found")

    # Validate every child before touching the existing ones
    new_screens = [_build_screen_configuration(session, s) for s in screens]
    new_drives = [_build_drive_configuration(session, d, vent, vent_length) for d in drives]

    if configuration_id is not None:
        vc = get_vent_configuration(session, configuration_id)
        if vc.project_id != project_id:
            raise ValueError(f"Vent configuration {configuration_id} belongs to another project")
    else:
        vc = VentConfiguration(project_id=project_id)
        session.add(vc)

    vc.configuration_type = configuration_type
    vc.vent_id = vent.id if vent else None
    vc.vent = vent
    vc.vent_quantity = vent_quantity
    vc.vent_length = vent_length
    vc.ati_house = bool(ati_house)
    vc.notes = notes
    for field_name in WALL_FIELDS:
        setattr(vc, field_name, wall_fields.get(field_name))

    vc.screen_configurations.clear()
    vc.screen_configurations.extend(new_screens)
    vc.drive_configurations.clear()
    vc.drive_configurations.extend(new_drives)

    if drives_freight is not None or screen_freight is not None:
        if vc.freight_requirements is None:
            vc.freight_requirements = VentFreightRequirements()
        vc.freight_requirements.drives_freight = drives_freight
        vc.freight_requirements.screen_freight = screen_freight

    recompute_screen_configurations(vc)
    session.flush()
    logger.info(
        "Saved vent configuration %s for project %s (%d screens, %d drives)",
        vc.id, project_id, len(new_screens), len(new_drives)
    )
    return vc


def update_vent_dimensions(
    session,
    configuration_id: int,
    vent_length: Optional[float] = None,
    vent_quantity: Optional[int] = None
) -> VentConfiguration:
    """Change vent length and/or quantity and recompute the screens.

    Every attached drive must still fit the vent at the new length; nothing
    is changed otherwise.
    """
    vc = get_vent_configuration(session, configuration_id)
    new_length = vc.vent_length if vent_length is None else vent_length
    for dc in vc.drive_configurations:
        _check_drive_fits(dc.drive, vc.vent, new_length)

    if vent_length is not None:
        vc.vent_length = vent_length
    if vent_quantity is not None:
        vc.vent_quantity = vent_quantity
    recompute_screen_configurations(vc)
    session.flush()
    return vc


def delete_vent_configuration(session, configuration_id: int):
    """Delete a vent configuration with its screens, drives and freight."""
    vc = get_vent_configuration(session, configuration_id)
    session.delete(vc)
    logger.info("Deleted vent configuration %s", configuration_id)


# --- Doors and vestibules ---------------------------------------------------

COVERINGS = frozenset(c.value for c in Covering)


def get_door_types(session) -> List[DoorType]:
    return session.query(DoorType).order_by(DoorType.type, DoorType.id).all()


def get_doors_and_vestibules(session, project_id: int) -> DoorsAndVestibules:
    """Doors and vestibules section of a project, created empty on first access."""
    project = get_project(session, project_id)
    if project.doors_and_vestibules is None:
        project.doors_and_vestibules = DoorsAndVestibules(project_id=project.id)
        session.flush()
    return project.doors_and_vestibules


def _door_type(session, door_type_id) -> DoorType:
    door_type = session.get(DoorType, door_type_id) if door_type_id is not None else None
    if door_type is None:
        raise ValueError(f"Door type {door_type_id} not found")
    return door_type


def _covering(value, what: str) -> str:
    covering = value or Covering.NA.value
    if covering not in COVERINGS:
        raise ValueError(f"Unknown {what} '{covering}'")
    return covering


def _build_door(session, door_data: dict) -> Door:
    door_type = _door_type(session, door_data.get('door_type_id'))

    quantity = door_data.get('quantity', 1)
    if not quantity or quantity < 1:
        raise ValueError("Door quantity must be at least 1")

    door = Door(
        door_type_id=door_type.id,
        door_covering=_covering(door_data.get('door_covering'), "door covering"),
        quantity=quantity
    )
    door.door_type = door_type
    return door


def _build_vestibule(session, vestibule_data: dict) -> Vestibule:
    # Door type is optional on a vestibule
    door_type_id = vestibule_data.get('door_type_id')
    door_type = _door_type(session, door_type_id) if door_type_id else None

    vestibule = Vestibule(
        dimensions=vestibule_data.get('dimensions') or None,
        roof_covering=_covering(vestibule_data.get('roof_covering'), "roof covering"),
        side_covering=_covering(vestibule_data.get('side_covering'), "side covering"),
        door_type_id=door_type.id if door_type else None,
        pressure_fan=vestibule_data.get('pressure_fan') or None
    )
    vestibule.door_type = door_type
    return vestibule


def save_doors_and_vestibules(
    session,
    project_id: int,
    doors: Iterable[dict] = (),
    vestibules: Iterable[dict] = (),
    freight: Optional[dict] = None
) -> DoorsAndVestibules:
    """Replace a project's doors and vestibules.

    Doors and vestibules are replaced in full. Freight requirements are
    updated in place when they exist, and created only when freight values
    are given.

    Args:
        session: Open session
        project_id: Owning project
        doors: Dicts with door_type_id, door_covering, quantity
        vestibules: Dicts with dimensions, roof_covering, side_covering,
            door_type_id, pressure_fan
        freight: Dict with any of aj_door_freight, glazing_freight, screen_freight

    Returns:
        The saved DoorsAndVestibules
    """
    freight = dict(freight or {})
    unknown = set(freight) - {'aj_door_freight', 'glazing_freight', 'screen_freight'}
    if unknown:
        raise ValueError(f"Unknown freight field(s): {', '.join(sorted(unknown))}")

    get_project(session, project_id)
    new_doors = [_build_door(session, d) for d in doors]
    new_vestibules = [_build_vestibule(session, v) for v in vestibules]

    dv = get_doors_and_vestibules(session, project_id)
    dv.doors.clear()
    dv.doors.extend(new_doors)
    dv.vestibules.clear()
    dv.vestibules.extend(new_vestibules)

    if dv.freight_requirements is not None:
        for field_name, value in freight.items():
            setattr(dv.freight_requirements, field_name, value)
    elif freight:
        dv.freight_requirements = DoorFreightRequirements(**freight)

    session.flush()
    logger.info(
        "Saved doors and vestibules for project %s (%d doors, %d vestibules)",
        project_id, len(new_doors), len(new_vestibules)
    )
    return dv
