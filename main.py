#!/usr/bin/env python3
"""Greenhouse Configurator - command line entry point."""

import argparse
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from config import APP_NAME, APP_VERSION, EXPORTS_PATH, LOG_LEVEL
from calculations import (
    StructureGeometry, compute_unit_breakdown, compute_screen_quantity,
    filter_compatible_drives
)
from utils.logging_config import setup_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='greenhouse', description=f"{APP_NAME} {APP_VERSION}")
    parser.add_argument('--database', help='SQLAlchemy database URL (default: local SQLite file)')
    parser.add_argument('--log-level', default=LOG_LEVEL, help='DEBUG, INFO, WARNING, ERROR')
    parser.add_argument('--log-file', help='Also write a rotating log file')
    sub = parser.add_subparsers(dest='command', required=True)

    sub.add_parser('init', help='Create the schema and seed the catalog')

    units = sub.add_parser('units', help='Bay units and base quantities for a structure')
    units.add_argument('--houses', type=int, required=True)
    units.add_argument('--length', type=float, required=True, help='House length (ft)')
    units.add_argument('--width', type=float, required=True, help='House width (ft)')
    units.add_argument('--ranges', type=int, default=1)
    units.add_argument('--free-standing', action='store_true', help='Houses are not gutter connected')
    units.add_argument('--concrete-slab', choices=['Yes', 'No'])
    units.add_argument('--gutter-partitions', type=int, default=0)
    units.add_argument('--gable-partitions', type=int, default=0)

    screen = sub.add_parser('screen', help='Screen area and slitting fee for a vent')
    screen.add_argument('--screen-width', type=float, required=True, help='Stock width (ft)')
    screen.add_argument('--vent-size', type=float, required=True, help='Vent size (in)')
    screen.add_argument('--vent-length', type=float, required=True, help='Vent run length (ft)')
    screen.add_argument('--vent-quantity', type=int, default=1)
    screen.add_argument('--double', action='store_true', help='Double vent')

    drives = sub.add_parser('drives', help='Drives from the catalog compatible with a vent')
    drives.add_argument('--vent-type')
    drives.add_argument('--vent-length', type=float)

    export = sub.add_parser('export', help='Write a project bill of materials workbook')
    export.add_argument('project_id', type=int)
    export.add_argument('--output', help='Output .xlsx path')

    return parser


def cmd_init(args) -> int:
    from database import init_db, seed_database
    from database.connection import check_database_access
    ok, message = check_database_access()
    if not ok:
        logger.error(message)
        return 1
    init_db()
    added = seed_database()
    print(f"Database ready, seeded: {', '.join(f'{k}={v}' for k, v in added.items())}")
    return 0


def cmd_units(args) -> int:
    geometry = StructureGeometry(
        range_count=args.ranges,
        house_count=args.houses,
        house_length_ft=args.length,
        width_ft=args.width,
        gutter_connect=not args.free_standing,
        concrete_slab=args.concrete_slab,
        gutter_partitions=args.gutter_partitions,
        gable_partitions=args.gable_partitions
    )
    breakdown = compute_unit_breakdown(geometry)
    print(f"A units: {breakdown.A}")
    print(f"B units: {breakdown.B}")
    print(f"C units: {breakdown.C}")
    print(f"D units: {breakdown.D}")
    if breakdown.base_angle_sections is not None:
        print(f"Base angle: {breakdown.base_angle_sections:.2f} (12ft sections)")
        print(f"BA bolts: {breakdown.ba_bolts}")
    if breakdown.base_stringer_ft is not None:
        print(f"Base stringer: {breakdown.base_stringer_ft:.2f} ft")
    return 0


def cmd_screen(args) -> int:
    result = compute_screen_quantity(
        args.screen_width, args.vent_size, args.vent_length, args.vent_quantity, args.double
    )
    print(f"Screen area: {result.area_ft2:.2f} ft²")
    print(f"Slitting fee: $ {result.slitting_fee_usd:,.2f}")
    return 0


def cmd_drives(args) -> int:
    from database import session_scope, Drive
    with session_scope() as session:
        catalog = session.query(Drive).order_by(Drive.drive_type, Drive.size, Drive.id).all()
        drives = filter_compatible_drives(catalog, args.vent_type, args.vent_length)
        if not drives:
            print("No compatible drives")
        for drive in drives:
            print(f"{drive.id:>4}  {drive.drive_type} - {drive.motor} ({drive.size:g} ft, {drive.greenhouse_type})")
    return 0


def cmd_export(args) -> int:
    from database import session_scope
    from database.project_store import (
        get_project, get_latest_structure, structure_unit_breakdown, list_vent_configurations
    )
    from export.excel_export import export_project_to_excel

    with session_scope() as session:
        project = get_project(session, args.project_id)
        output = args.output or EXPORTS_PATH / f"project_{project.id:05d}_bom.xlsx"
        path = export_project_to_excel(
            project,
            get_latest_structure(session, project.id),
            structure_unit_breakdown(session, project.id),
            list_vent_configurations(session, project.id),
            output,
            doors_and_vestibules=project.doors_and_vestibules
        )
    print(f"Exported to {path}")
    return 0


COMMANDS = {
    'init': cmd_init,
    'units': cmd_units,
    'screen': cmd_screen,
    'drives': cmd_drives,
    'export': cmd_export,
}


def main(argv=None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    if args.database:
        from database import configure_database
        configure_database(args.database)

    try:
        return COMMANDS[args.command](args)
    except Exception as e:
        logger.error("%s failed: %s", args.command, e)
        logger.debug("Traceback", exc_info=True)
        return 1


if __name__ == '__main__':
    sys.exit(main())
