"""Seed database with the preset catalog: categories, models, vents, screens, drives and door types."""

import json

from config import SEED_DATA_PATH
from utils.logging_config import get_logger
from .models import Category, Subcategory, Option, GreenhouseModel, Vent, Screen, Drive, DoorType
from .connection import session_scope

logger = get_logger(__name__)


def _load_json(filename):
    """Load a JSON seed file, empty list if it is missing."""
    seed_file = SEED_DATA_PATH / filename
    if seed_file.exists():
        with open(seed_file, 'r', encoding='utf-8') as f:
            return json.load(f)
    logger.warning("Seed file %s not found", seed_file)
    return []


def seed_categories(session):
    """Seed categories, subcategories and options if empty."""
    if session.query(Category).count() > 0:
        return 0  # Already seeded

    count = 0
    for cat_data in _load_json('categories.json'):
        category = Category(
            name=cat_data['name'],
            description=cat_data.get('description'),
            display_order=cat_data.get('display_order', 0),
            icon=cat_data.get('icon')
        )
        for sub_data in cat_data.get('subcategories', []):
            subcategory = Subcategory(
                name=sub_data['name'],
                description=sub_data.get('description'),
                display_order=sub_data.get('display_order', 0)
            )
            for opt_data in sub_data.get('options', []):
                subcategory.options.append(Option(
                    name=opt_data['name'],
                    description=opt_data.get('description'),
                    specifications=opt_data.get('specifications', {}),
                    price=opt_data.get('price', 0.0),
                    dependencies=opt_data.get('dependencies', {})
                ))
            category.subcategories.append(subcategory)
        session.add(category)
        count += 1

    return count


def seed_greenhouse_models(session):
    """Seed greenhouse models if empty."""
    if session.query(GreenhouseModel).count() > 0:
        return 0

    count = 0
    for model_data in _load_json('greenhouse_models.json'):
        session.add(GreenhouseModel(
            name=model_data['name'],
            gutter_connect=model_data.get('gutter_connect', True),
            description=model_data.get('description')
        ))
        count += 1
    return count


def seed_vents(session):
    """Seed vent catalog if empty."""
    if session.query(Vent).count() > 0:
        return 0

    count = 0
    for vent_data in _load_json('vents.json'):
        session.add(Vent(
            type=vent_data['type'],
            single_double=vent_data.get('single_double', 'Single'),
            size=vent_data['size'],
            vent_glazing=vent_data.get('vent_glazing')
        ))
        count += 1
    return count


def seed_screens(session):
    """Seed screen catalog if empty."""
    if session.query(Screen).count() > 0:
        return 0

    count = 0
    for screen_data in _load_json('screens.json'):
        session.add(Screen(
            product=screen_data['product'],
            width=screen_data.get('width', []),
            net_price_0_5k=screen_data.get('net_price_0_5k'),
            net_price_5k_20k=screen_data.get('net_price_5k_20k'),
            net_price_20k_plus=screen_data.get('net_price_20k_plus')
        ))
        count += 1
    return count


def seed_drives(session):
    """Seed drive catalog if empty."""
    if session.query(Drive).count() > 0:
        return 0

    count = 0
    for drive_data in _load_json('drives.json'):
        session.add(Drive(
            drive_type=drive_data['drive_type'],
            motor=drive_data['motor'],
            size=drive_data['size'],
            greenhouse_type=drive_data.get('greenhouse_type', 'All')
        ))
        count += 1
    return count


def seed_door_types(session):
    """Seed door type catalog if empty."""
    if session.query(DoorType).count() > 0:
        return 0

    count = 0
    for door_data in _load_json('door_types.json'):
        session.add(DoorType(type=door_data['type'], size=door_data['size']))
        count += 1
    return count


def seed_database():
    """Seed all preset data into the database.

    Returns:
        Dict of table name -> rows added
    """
    with session_scope() as session:
        added = {
            'categories': seed_categories(session),
            'greenhouse_models': seed_greenhouse_models(session),
            'vents': seed_vents(session),
            'screens': seed_screens(session),
            'drives': seed_drives(session),
            'door_types': seed_door_types(session),
        }
    logger.info("Seeded catalog: %s", added)
    return added


if __name__ == '__main__':
    # Can be run directly to seed the database
    from .connection import init_db
    init_db()
    print(f"Seeded {seed_database()}")
