"""Tests for project, structure and vent configuration persistence."""

import pytest

from database import session_scope
from database.models import (
    Project, StructureModel, VentConfiguration, ScreenConfiguration, DriveConfiguration,
    VentFreightRequirements, Category, Option, Subcategory,
    DoorType, DoorsAndVestibules, Door, Vestibule, DoorFreightRequirements
)
from database.project_store import (
    create_project, get_project, update_project_status, delete_project,
    get_categories, select_option, get_selections,
    save_structure, get_latest_structure, structure_geometry, structure_unit_breakdown,
    save_vent_configuration, update_vent_dimensions, recompute_screen_configurations,
    compatible_drives_for_vent, list_vent_configurations, delete_vent_configuration,
    get_door_types, get_doors_and_vestibules, save_doors_and_vestibules
)
from calculations import compute_screen_quantity, filter_compatible_drives


def new_project(name="North Range Expansion"):
    with session_scope() as session:
        return create_project(session, name, customer_name="Valley Growers", bid_number="B-1001").id


def test_create_project_defaults_to_draft(db):
    project_id = new_project()

    with session_scope() as session:
        project = get_project(session, project_id)
        assert project.status == "draft"
        assert project.customer_name == "Valley Growers"
        assert not project.archived


def test_project_name_required(db):
    with pytest.raises(ValueError, match="Project name is required"):
        with session_scope() as session:
            create_project(session, "   ")


def test_update_status(db):
    project_id = new_project()
    with session_scope() as session:
        update_project_status(session, project_id, "review")
    with session_scope() as session:
        assert get_project(session, project_id).status == "review"

    with pytest.raises(ValueError, match="Unknown project status"):
        with session_scope() as session:
            update_project_status(session, project_id, "shipped")


def test_missing_project(db):
    with pytest.raises(ValueError, match="not found"):
        with session_scope() as session:
            get_project(session, 999)


def test_save_structure_stores_base_quantities(db, catalog):
    project_id = new_project()

    with session_scope() as session:
        structure = save_structure(
            session, project_id, "Main range", catalog['gothic'],
            width="30", house_count=2, house_length=100, concrete_slab="Yes", glazing="PC8"
        )
        assert structure.base_angle_12ft == pytest.approx(320 / 12)
        assert structure.ba_bolts == 134
        assert structure.base_stringer is None
        assert structure.glazing == "PC8"


def test_latest_structure_wins(db, catalog):
    project_id = new_project()

    with session_scope() as session:
        save_structure(session, project_id, "Main range", catalog['gothic'],
                       width="30", house_count=2, house_length=100, concrete_slab="No")
    with session_scope() as session:
        save_structure(session, project_id, "Main range v2", catalog['quonset'],
                       width="30", house_count=3, house_length=100, concrete_slab="No")

    with session_scope() as session:
        assert session.query(StructureModel).filter(StructureModel.project_id == project_id).count() == 2

        latest = get_latest_structure(session, project_id)
        assert latest.house_count == 3
        assert latest.structure_description.name == "Main range v2"
        assert latest.base_stringer == 780

        geometry = structure_geometry(latest)
        assert geometry.gutter_connect is False
        assert geometry.width_ft == 30

        units = structure_unit_breakdown(session, project_id)
        assert (units.A, units.B, units.C, units.D) == (6, 18, 0, 0)


def test_structure_breakdown_none_without_structure(db):
    project_id = new_project()
    with session_scope() as session:
        assert structure_unit_breakdown(session, project_id) is None


def test_structure_validation(db, catalog):
    project_id = new_project()

    with pytest.raises(ValueError, match="Structure name is required"):
        with session_scope() as session:
            save_structure(session, project_id, "", catalog['gothic'], "30", 1, 100)

    with pytest.raises(ValueError, match="greenhouse model"):
        with session_scope() as session:
            save_structure(session, project_id, "Range", None, "30", 1, 100)

    with pytest.raises(ValueError, match="Concrete slab"):
        with session_scope() as session:
            save_structure(session, project_id, "Range", catalog['gothic'], "30", 1, 100, concrete_slab="Maybe")

    with pytest.raises(ValueError, match="Range count"):
        with session_scope() as session:
            save_structure(session, project_id, "Range", catalog['gothic'], "30", 1, 100, range_count=-1)

    with session_scope() as session:
        assert get_latest_structure(session, project_id) is None


def test_option_selection_replaces_previous_choice(db):
    project_id = new_project()

    with session_scope() as session:
        categories = get_categories(session)
        assert [c.name for c in categories][:2] == ["Structure", "Vents"]

        glazing = session.query(Subcategory).filter(Subcategory.name == "Glazing").one()
        poly, pc8 = sorted(glazing.options, key=lambda o: o.id)
        select_option(session, project_id, poly.id)
        select_option(session, project_id, pc8.id)

    with session_scope() as session:
        selections = get_selections(session, project_id)
        assert len(selections) == 1
        assert selections[0].option.name == "PC8 Polycarbonate"


def test_save_vent_configuration_persists_screen_quantities(db, catalog):
    project_id = new_project()

    with session_scope() as session:
        vc = save_vent_configuration(
            session, project_id,
            vent_id=catalog['gothic_roof_single'], vent_quantity=2, vent_length=100,
            screens=[{'screen_id': catalog['econet'], 'screen_width': 10, 'screen_type': 'Gothic Roof'}],
            drives=[{'drive_id': catalog['roof_150'], 'quantity': 2}],
            drives_freight="LTL", screen_freight="Included"
        )
        vc_id = vc.id

    with session_scope() as session:
        vc = session.get(VentConfiguration, vc_id)
        sc = vc.screen_configurations[0]
        # 36" single vent, 10 ft stock: minimum area 10 × 100 × 2
        expected = compute_screen_quantity(10, 36, 100, 2, False)
        assert sc.calculated_quantity == expected.area_ft2 == pytest.approx(2000)
        assert sc.slitting_fee == expected.slitting_fee_usd == pytest.approx(44)
        assert vc.drive_configurations[0].quantity == 2
        assert vc.freight_requirements.drives_freight == "LTL"


def test_changing_vent_dimensions_recomputes_screens(db, catalog):
    project_id = new_project()

    with session_scope() as session:
        vc = save_vent_configuration(
            session, project_id,
            vent_id=catalog['gothic_roof_double'], vent_quantity=1, vent_length=100,
            screens=[{'screen_id': catalog['econet'], 'screen_width': 4, 'screen_type': 'Gothic Roof'}]
        )
        vc_id = vc.id
        # 36" double = 6 ft opening beats 4 ft stock
        assert vc.screen_configurations[0].calculated_quantity == pytest.approx(600)

    with session_scope() as session:
        update_vent_dimensions(session, vc_id, vent_length=50, vent_quantity=3)

    with session_scope() as session:
        sc = session.get(VentConfiguration, vc_id).screen_configurations[0]
        assert sc.calculated_quantity == pytest.approx(6 * 50 * 3)
        assert sc.slitting_fee == pytest.approx(0.22 * 150)


def test_lengthening_vent_past_drive_size_is_rejected(db, catalog):
    project_id = new_project()

    with session_scope() as session:
        vc = save_vent_configuration(
            session, project_id,
            vent_id=catalog['gothic_roof_single'], vent_quantity=1, vent_length=100,
            screens=[{'screen_id': catalog['econet'], 'screen_width': 10, 'screen_type': 'Gothic Roof'}],
            drives=[{'drive_id': catalog['roof_150'], 'quantity': 1}]
        )
        vc_id = vc.id

    with pytest.raises(ValueError, match="not compatible"):
        with session_scope() as session:
            update_vent_dimensions(session, vc_id, vent_length=250)

    with session_scope() as session:
        vc = session.get(VentConfiguration, vc_id)
        assert vc.vent_length == 100
        assert vc.screen_configurations[0].calculated_quantity == pytest.approx(1000)
        drives = [dc.drive for dc in vc.drive_configurations]
        assert filter_compatible_drives(drives, vc.vent.type, vc.vent_length) == drives

    # Still within the 150 ft drive
    with session_scope() as session:
        update_vent_dimensions(session, vc_id, vent_length=150)
        assert session.get(VentConfiguration, vc_id).vent_length == 150


def test_recompute_is_idempotent(db, catalog):
    project_id = new_project()

    with session_scope() as session:
        vc = save_vent_configuration(
            session, project_id,
            vent_id=catalog['pad'], vent_quantity=2, vent_length=75,
            screens=[{'screen_id': catalog['econet_t'], 'screen_width': 14, 'screen_type': 'Pad Vent'}]
        )
        before = (vc.screen_configurations[0].calculated_quantity, vc.screen_configurations[0].slitting_fee)
        recompute_screen_configurations(vc)
        recompute_screen_configurations(vc)
        after = (vc.screen_configurations[0].calculated_quantity, vc.screen_configurations[0].slitting_fee)
        assert before == after


def test_resave_replaces_children(db, catalog):
    project_id = new_project()

    with session_scope() as session:
        vc = save_vent_configuration(
            session, project_id,
            vent_id=catalog['gothic_roof_single'], vent_quantity=1, vent_length=100,
            screens=[
                {'screen_id': catalog['econet'], 'screen_width': 10, 'screen_type': 'Gothic Roof'},
                {'screen_id': catalog['econet_t'], 'screen_width': 6, 'screen_type': 'Gothic Roof'},
            ],
            drives=[{'drive_id': catalog['roof_150'], 'quantity': 1}]
        )
        vc_id = vc.id

    with session_scope() as session:
        save_vent_configuration(
            session, project_id, configuration_id=vc_id,
            vent_id=catalog['gothic_roof_single'], vent_quantity=1, vent_length=200,
            screens=[{'screen_id': catalog['econet'], 'screen_width': 12, 'screen_type': 'Gothic Roof'}],
            drives=[{'drive_id': catalog['roof_300'], 'quantity': 1}]
        )

    with session_scope() as session:
        assert session.query(ScreenConfiguration).count() == 1
        assert session.query(DriveConfiguration).count() == 1
        sc = session.query(ScreenConfiguration).one()
        assert sc.calculated_quantity == pytest.approx(12 * 200)


def test_screen_width_must_be_offered(db, catalog):
    project_id = new_project()

    with pytest.raises(ValueError, match="not available in 11 ft"):
        with session_scope() as session:
            save_vent_configuration(
                session, project_id,
                vent_id=catalog['pad'], vent_quantity=1, vent_length=50,
                screens=[{'screen_id': catalog['econet'], 'screen_width': 11, 'screen_type': 'Pad Vent'}]
            )

    with session_scope() as session:
        assert session.query(VentConfiguration).count() == 0


def test_incompatible_drive_rejected(db, catalog):
    project_id = new_project()

    with pytest.raises(ValueError, match="not compatible"):
        with session_scope() as session:
            save_vent_configuration(
                session, project_id,
                vent_id=catalog['pad'], vent_quantity=1, vent_length=50,
                drives=[{'drive_id': catalog['wall_100'], 'quantity': 1}]
            )

    with pytest.raises(ValueError, match="not compatible"):
        with session_scope() as session:
            # Pad drive too short for the run
            save_vent_configuration(
                session, project_id,
                vent_id=catalog['pad'], vent_quantity=1, vent_length=90,
                drives=[{'drive_id': catalog['pad_60'], 'quantity': 1}]
            )


def test_compatible_drives_for_vent(db, catalog):
    with session_scope() as session:
        drives = compatible_drives_for_vent(session, catalog['pad'], 50)
        assert [d.size for d in drives] == [60, 120]
        assert all(d.drive_type == 'Pad Vent' for d in drives)

        assert len(compatible_drives_for_vent(session, None, None)) == 10


def test_delete_vent_configuration_cascades(db, catalog):
    project_id = new_project()

    with session_scope() as session:
        vc = save_vent_configuration(
            session, project_id,
            vent_id=catalog['gothic_roof_single'], vent_quantity=1, vent_length=100,
            screens=[{'screen_id': catalog['econet'], 'screen_width': 10, 'screen_type': 'Gothic Roof'}],
            drives=[{'drive_id': catalog['roof_150'], 'quantity': 1}],
            drives_freight="LTL"
        )
        vc_id = vc.id

    with session_scope() as session:
        assert len(list_vent_configurations(session, project_id)) == 1
        delete_vent_configuration(session, vc_id)

    with session_scope() as session:
        assert session.query(VentConfiguration).count() == 0
        assert session.query(ScreenConfiguration).count() == 0
        assert session.query(DriveConfiguration).count() == 0
        assert session.query(VentFreightRequirements).count() == 0


def test_delete_project_cascades(db, catalog):
    project_id = new_project()

    with session_scope() as session:
        save_structure(session, project_id, "Main range", catalog['gothic'],
                       width="30", house_count=2, house_length=100)
        save_vent_configuration(
            session, project_id,
            vent_id=catalog['pad'], vent_quantity=1, vent_length=50,
            screens=[{'screen_id': catalog['econet'], 'screen_width': 6, 'screen_type': 'Pad Vent'}]
        )

    with session_scope() as session:
        delete_project(session, project_id)

    with session_scope() as session:
        assert session.query(Project).count() == 0
        assert session.query(StructureModel).count() == 0
        assert session.query(ScreenConfiguration).count() == 0
        # Catalog is untouched
        assert session.query(Category).count() == 5
        assert session.query(Option).count() > 0


def door_type_id(session, kind, size):
    return session.query(DoorType).filter(DoorType.type == kind, DoorType.size == size).one().id


def test_door_types_seeded(db):
    with session_scope() as session:
        kinds = {t.type for t in get_door_types(session)}
        assert kinds == {"Hinged", "Inside Sliding", "Outside Sliding", "Door Jamb Kit"}


def test_doors_and_vestibules_created_on_first_access(db):
    project_id = new_project()

    with session_scope() as session:
        first = get_doors_and_vestibules(session, project_id).id
    with session_scope() as session:
        assert get_doors_and_vestibules(session, project_id).id == first
        assert session.query(DoorsAndVestibules).count() == 1


def test_save_doors_and_vestibules_replaces_children(db):
    project_id = new_project()

    with session_scope() as session:
        hinged = door_type_id(session, "Hinged", "3' x 7'")
        sliding = door_type_id(session, "Outside Sliding", "10' x 10'")
        save_doors_and_vestibules(
            session, project_id,
            doors=[
                {'door_type_id': hinged, 'door_covering': 'Poly', 'quantity': 2},
                {'door_type_id': sliding, 'door_covering': 'PC8', 'quantity': 1},
            ],
            vestibules=[{'dimensions': "8' x 10'", 'roof_covering': 'Poly', 'side_covering': 'PC8',
                         'door_type_id': hinged, 'pressure_fan': '12" exhaust'}],
            freight={'aj_door_freight': 'LTL', 'glazing_freight': 'Included'}
        )

    with session_scope() as session:
        save_doors_and_vestibules(
            session, project_id,
            doors=[{'door_type_id': sliding, 'quantity': 3}],
            freight={'screen_freight': 'UPS'}
        )

    with session_scope() as session:
        dv = get_doors_and_vestibules(session, project_id)
        assert [(d.door_type.type, d.door_covering, d.quantity) for d in dv.doors] == [
            ("Outside Sliding", "N/A", 3)
        ]
        assert dv.vestibules == []
        assert session.query(Door).count() == 1
        assert session.query(Vestibule).count() == 0

        # Freight is updated in place, earlier values kept
        assert session.query(DoorFreightRequirements).count() == 1
        assert dv.freight_requirements.aj_door_freight == "LTL"
        assert dv.freight_requirements.screen_freight == "UPS"


def test_doors_validation_leaves_previous_save(db):
    project_id = new_project()

    with session_scope() as session:
        hinged = door_type_id(session, "Hinged", "3' x 7'")
        save_doors_and_vestibules(session, project_id, doors=[{'door_type_id': hinged, 'quantity': 1}])

    with pytest.raises(ValueError, match="Door quantity"):
        with session_scope() as session:
            save_doors_and_vestibules(session, project_id, doors=[{'door_type_id': hinged, 'quantity': 0}])

    with pytest.raises(ValueError, match="door covering"):
        with session_scope() as session:
            save_doors_and_vestibules(
                session, project_id, doors=[{'door_type_id': hinged, 'door_covering': 'Glass'}]
            )

    with pytest.raises(ValueError, match="Door type 999 not found"):
        with session_scope() as session:
            save_doors_and_vestibules(session, project_id, vestibules=[{'door_type_id': 999}])

    with session_scope() as session:
        dv = get_doors_and_vestibules(session, project_id)
        assert [d.quantity for d in dv.doors] == [1]


def test_vestibule_without_door_type(db):
    project_id = new_project()

    with session_scope() as session:
        dv = save_doors_and_vestibules(session, project_id, vestibules=[{'dimensions': "6' x 8'"}])
        vestibule = dv.vestibules[0]
        assert vestibule.door_type is None
        assert vestibule.roof_covering == vestibule.side_covering == "N/A"
        assert dv.freight_requirements is None


def test_delete_project_removes_doors(db):
    project_id = new_project()

    with session_scope() as session:
        hinged = door_type_id(session, "Hinged", "3' x 7'")
        save_doors_and_vestibules(
            session, project_id,
            doors=[{'door_type_id': hinged}], vestibules=[{'dimensions': "8' x 10'"}],
            freight={'aj_door_freight': 'LTL'}
        )

    with session_scope() as session:
        delete_project(session, project_id)

    with session_scope() as session:
        assert session.query(DoorsAndVestibules).count() == 0
        assert session.query(Door).count() == 0
        assert session.query(Vestibule).count() == 0
        assert session.query(DoorFreightRequirements).count() == 0
        assert session.query(DoorType).count() == 6
