from .models import (
    Base, Project, Category, Subcategory, Option, UserSelection,
    GreenhouseModel, StructureDescription, StructureModel,
    Vent, Screen, Drive, VentConfiguration, ScreenConfiguration, DriveConfiguration,
    VentFreightRequirements,
    DoorType, DoorsAndVestibules, Door, Vestibule, DoorFreightRequirements,
    ProjectStatus, ConcreteSlab, SingleDouble, GreenhouseType,
    ScreenType, ConfigurationType, DoorKind, Covering
)
from .connection import get_session, init_db, session_scope, configure_database
from .seed_data import seed_database

__all__ = [
    'Base', 'Project', 'Category', 'Subcategory', 'Option', 'UserSelection',
    'GreenhouseModel', 'StructureDescription', 'StructureModel',
    'Vent', 'Screen', 'Drive', 'VentConfiguration', 'ScreenConfiguration', 'DriveConfiguration',
    'VentFreightRequirements',
    'DoorType', 'DoorsAndVestibules', 'Door', 'Vestibule', 'DoorFreightRequirements',
    'ProjectStatus', 'ConcreteSlab', 'SingleDouble', 'GreenhouseType',
    'ScreenType', 'ConfigurationType', 'DoorKind', 'Covering',
    'get_session', 'init_db', 'session_scope', 'configure_database', 'seed_database'
]
