"""Excel bill-of-materials export using openpyxl."""

from pathlib import Path
from typing import Optional, List

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill
from openpyxl.utils import get_column_letter

from calculations import UnitBreakdown, calculate_vent_totals
from database.models import Project, StructureModel, VentConfiguration, DoorsAndVestibules
from utils.logging_config import get_logger

logger = get_logger(__name__)


# Styles
HEADER_FONT = Font(bold=True, color='FFFFFF')
HEADER_FILL = PatternFill(start_color='2E7D32', end_color='2E7D32', fill_type='solid')
HEADER_ALIGNMENT = Alignment(horizontal='center', vertical='center', wrap_text=True)

THIN_BORDER = Border(
    left=Side(style='thin'),
    right=Side(style='thin'),
    top=Side(style='thin'),
    bottom=Side(style='thin')
)

WARNING_FILL = PatternFill(start_color='FFEB9C', end_color='FFEB9C', fill_type='solid')


def set_column_widths(ws, widths: dict):
    """Set column widths for a worksheet."""
    for col, width in widths.items():
        ws.column_dimensions[get_column_letter(col)].width = width


def style_header_row(ws, row: int, num_cols: int):
    """Apply header styling to a row."""
    for col in range(1, num_cols + 1):
        cell = ws.cell(row=row, column=col)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = HEADER_ALIGNMENT
        cell.border = THIN_BORDER


def export_project_to_excel(
    project: Project,
    structure: Optional[StructureModel],
    breakdown: Optional[UnitBreakdown],
    vent_configurations: List[VentConfiguration],
    output_path: str | Path,
    doors_and_vestibules: Optional[DoorsAndVestibules] = None
) -> str:
    """Export a project's bill of materials to an Excel file.

    Args:
        project: Project model instance
        structure: Active StructureModel, None if not configured yet
        breakdown: Unit breakdown of the structure
        vent_configurations: VentConfiguration instances with children loaded
        output_path: Path to save Excel file
        doors_and_vestibules: Doors and vestibules section, None if not configured

    Returns:
        Path to created Excel file
    """
    wb = Workbook()

    # Summary sheet
    ws_summary = wb.active
    ws_summary.title = "Summary"
    _write_summary_sheet(ws_summary, project, structure, vent_configurations)

    # Structure sheet
    ws_structure = wb.create_sheet("Structure")
    _write_structure_sheet(ws_structure, structure, breakdown)

    # Vents sheet
    ws_vents = wb.create_sheet("Vents")
    _write_vents_sheet(ws_vents, vent_configurations)

    # Doors sheet
    ws_doors = wb.create_sheet("Doors")
    _write_doors_sheet(ws_doors, doors_and_vestibules)

    # Save
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(output_path)
    logger.info("Exported project %s to %s", project.id, output_path)

    return str(output_path)


def _write_summary_sheet(ws, project: Project, structure: Optional[StructureModel],
                         vent_configurations: List[VentConfiguration]):
    """Write summary information."""
    ws['A1'] = "Project Summary"
    ws['A1'].font = Font(bold=True, size=14)

    ws['A3'] = "Project:"
    ws['B3'] = project.project_name
    ws['A4'] = "Bid Number:"
    ws['B4'] = project.bid_number or "-"
    ws['A5'] = "Customer:"
    ws['B5'] = project.customer_name or "-"
    ws['A6'] = "Status:"
    ws['B6'] = project.status
    ws['A7'] = "Created:"
    ws['B7'] = project.created_at.strftime('%Y-%m-%d') if project.created_at else "-"

    ws['A9'] = "Structure:"
    if structure is not None:
        model_name = structure.greenhouse_model.name if structure.greenhouse_model else "-"
        ws['B9'] = f"{model_name}, {structure.house_count} x {structure.width}' x {structure.house_length:g}'"
    else:
        ws['B9'] = "-"

    totals = calculate_vent_totals(vent_configurations)
    ws['A10'] = "Vent Configurations:"
    ws['B10'] = len(vent_configurations)
    ws['A11'] = "Total Screen (ft²):"
    ws['B11'] = totals.total_screen_area_ft2
    ws['A12'] = "Total Slitting Fee:"
    ws['B12'] = f"$ {totals.total_slitting_fee_usd:,.2f}"
    ws['A13'] = "Total Drives:"
    ws['B13'] = totals.total_drives

    ws['A15'] = "Notes:"
    ws['A16'] = project.notes or "-"
    ws.merge_cells('A16:D20')

    set_column_widths(ws, {1: 22, 2: 40, 3: 15, 4: 15})


def _write_structure_sheet(ws, structure: Optional[StructureModel], breakdown: Optional[UnitBreakdown]):
    """Write structure geometry and unit breakdown."""
    headers = ["Item", "Value", "Unit"]
    for col, header in enumerate(headers, 1):
        ws.cell(row=1, column=col, value=header)
    style_header_row(ws, 1, len(headers))

    if structure is None or breakdown is None:
        ws.cell(row=2, column=1, value="No structure configured")
        ws.cell(row=2, column=1).fill = WARNING_FILL
        set_column_widths(ws, {1: 28, 2: 15, 3: 15})
        return

    rows = [
        ("Ranges", structure.range_count, ""),
        ("Houses", structure.house_count, ""),
        ("House Width", structure.width, "ft"),
        ("House Length", structure.house_length, "ft"),
        ("Gutter Connect", "Yes" if structure.greenhouse_model and structure.greenhouse_model.gutter_connect else "No", ""),
        ("Concrete Slab", structure.concrete_slab or "-", ""),
        ("Gutter Partitions", structure.gutter_partitions, ""),
        ("Gable Partitions", structure.gable_partitions, ""),
        ("A Units", breakdown.A, "end bays"),
        ("B Units", breakdown.B, "mid bays"),
        ("C Units", breakdown.C, "end bays (additional houses)"),
        ("D Units", breakdown.D, "mid bays (additional houses)"),
        ("Base Length", round(breakdown.total_length_ft, 2), "ft"),
    ]
    if breakdown.base_angle_sections is not None:
        rows.append(("Base Angle", round(breakdown.base_angle_sections, 2), "12ft sections"))
        rows.append(("BA Bolts", breakdown.ba_bolts, "bolts"))
    if breakdown.base_stringer_ft is not None:
        rows.append(("Base Stringer", round(breakdown.base_stringer_ft, 2), "linear ft"))

    for row, (item, value, unit) in enumerate(rows, 2):
        ws.cell(row=row, column=1, value=item)
        ws.cell(row=row, column=2, value=value)
        ws.cell(row=row, column=3, value=unit)

        # Apply borders
        for col in range(1, len(headers) + 1):
            ws.cell(row=row, column=col).border = THIN_BORDER

    set_column_widths(ws, {1: 28, 2: 15, 3: 28})


def _write_vents_sheet(ws, vent_configurations: List[VentConfiguration]):
    """Write one row per screen and per drive of every vent configuration."""
    headers = [
        "Configuration", "Vent", "Qty", "Length (ft)",
        "Item", "Product", "Width / Size (ft)", "Screen Type",
        "Quantity", "Slitting Fee"
    ]

    for col, header in enumerate(headers, 1):
        ws.cell(row=1, column=col, value=header)
    style_header_row(ws, 1, len(headers))

    row = 2
    for vc in vent_configurations:
        lines = []
        for sc in vc.screen_configurations:
            lines.append((
                "Screen", sc.screen.product if sc.screen else "-", sc.screen_width, sc.screen_type,
                round(sc.calculated_quantity or 0, 2), f"$ {sc.slitting_fee or 0:,.2f}"
            ))
        for dc in vc.drive_configurations:
            drive = dc.drive
            lines.append((
                "Drive", f"{drive.drive_type} - {drive.motor}" if drive else "-",
                drive.size if drive else None, "-", dc.quantity, "-"
            ))
        if not lines:
            lines.append(("-", "-", None, "-", None, "-"))

        for line in lines:
            ws.cell(row=row, column=1, value=vc.configuration_type)
            ws.cell(row=row, column=2, value=vc.label())
            ws.cell(row=row, column=3, value=vc.vent_quantity)
            ws.cell(row=row, column=4, value=vc.vent_length)
            for offset, value in enumerate(line):
                ws.cell(row=row, column=5 + offset, value=value)

            for col in range(1, len(headers) + 1):
                ws.cell(row=row, column=col).border = THIN_BORDER
            row += 1

    set_column_widths(ws, {
        1: 18, 2: 30, 3: 8, 4: 12,
        5: 10, 6: 28, 7: 16, 8: 20,
        9: 12, 10: 14
    })


def _write_doors_sheet(ws, doors_and_vestibules: Optional[DoorsAndVestibules]):
    """Write doors, vestibules and freight notes."""
    headers = ["Item", "Door Type", "Covering", "Quantity", "Dimensions", "Side Covering", "Pressure Fan"]
    for col, header in enumerate(headers, 1):
        ws.cell(row=1, column=col, value=header)
    style_header_row(ws, 1, len(headers))
    set_column_widths(ws, {1: 14, 2: 28, 3: 16, 4: 10, 5: 18, 6: 16, 7: 28})

    dv = doors_and_vestibules
    if dv is None or not (dv.doors or dv.vestibules):
        ws.cell(row=2, column=1, value="No doors or vestibules configured")
        ws.cell(row=2, column=1).fill = WARNING_FILL
        return

    lines = []
    for door in dv.doors:
        lines.append((
            "Door", door.door_type.label() if door.door_type else "-",
            door.door_covering, door.quantity, "-", "-", "-"
        ))
    for vestibule in dv.vestibules:
        # Roof covering goes in the Covering column
        lines.append((
            "Vestibule", vestibule.door_type.label() if vestibule.door_type else "-",
            vestibule.roof_covering, 1, vestibule.dimensions or "-",
            vestibule.side_covering, vestibule.pressure_fan or "-"
        ))

    row = 2
    for line in lines:
        for col, value in enumerate(line, 1):
            ws.cell(row=row, column=col, value=value)
            ws.cell(row=row, column=col).border = THIN_BORDER
        row += 1

    freight = dv.freight_requirements
    if freight is not None:
        row += 1
        ws.cell(row=row, column=1, value="Freight").font = Font(bold=True)
        for label, value in (
            ("AJ Door", freight.aj_door_freight),
            ("Glazing", freight.glazing_freight),
            ("Screen", freight.screen_freight),
        ):
            row += 1
            ws.cell(row=row, column=1, value=label)
            ws.cell(row=row, column=2, value=value or "-")
