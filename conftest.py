"""Shared pytest fixtures."""

import pytest

from database import configure_database, init_db, seed_database, session_scope
from database.models import GreenhouseModel, Vent, Screen, Drive


@pytest.fixture
def db(tmp_path):
    """Fresh seeded SQLite database per test."""
    configure_database(f"sqlite:///{tmp_path / 'test_greenhouse.db'}")
    init_db()
    seed_database()
    yield
    configure_database(None)


@pytest.fixture
def catalog(db):
    """Ids of seeded catalog rows, looked up by name."""
    with session_scope() as session:
        def model_id(name):
            return session.query(GreenhouseModel).filter(GreenhouseModel.name == name).one().id

        def vent_id(vent_type, single_double='Single'):
            return session.query(Vent).filter(
                Vent.type == vent_type, Vent.single_double == single_double
            ).first().id

        def screen_id(product):
            return session.query(Screen).filter(Screen.product == product).one().id

        def drive_id(drive_type, size):
            return session.query(Drive).filter(Drive.drive_type == drive_type, Drive.size == size).one().id

        return {
            'gothic': model_id('Gothic Arch'),
            'quonset': model_id('Quonset'),
            'gothic_roof_single': vent_id('Gothic Roof', 'Single'),
            'gothic_roof_double': vent_id('Gothic Roof', 'Double'),
            'pad': vent_id('Pad'),
            'econet': screen_id('Econet 4045'),
            'econet_t': screen_id('Econet T'),
            'roof_150': drive_id('Roof Vents', 150),
            'roof_300': drive_id('Roof Vents', 300),
            'wall_100': drive_id('Wall Vents', 100),
            'pad_60': drive_id('Pad Vent', 60),
        }
