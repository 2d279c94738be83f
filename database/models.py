"""SQLAlchemy ORM models for the Greenhouse Project Configurator."""

from datetime import datetime
from typing import Optional, List
from sqlalchemy import (
    Integer, String, Float, Boolean, DateTime, Text, ForeignKey, JSON, UniqueConstraint
)
from sqlalchemy.orm import DeclarativeBase, relationship, Mapped, mapped_column
import enum


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class ProjectStatus(enum.Enum):
    """Status options for projects."""
    DRAFT = "draft"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    COMPLETED = "completed"


class ConcreteSlab(enum.Enum):
    """Foundation choice; decides base angle vs base stringer."""
    YES = "Yes"
    NO = "No"


class SingleDouble(enum.Enum):
    SINGLE = "Single"
    DOUBLE = "Double"


class GreenhouseType(enum.Enum):
    """Greenhouse families a drive can be used on."""
    ALL = "All"
    GOTHIC = "Gothic"
    SOLAR_LIGHT = "Solar Light"


class ScreenType(enum.Enum):
    """Screen placements for a screen configuration."""
    GOTHIC_ROOF = "Gothic Roof"
    INSULATOR_ROOF = "Insulator Roof"
    PAD_VENT = "Pad Vent"
    SOLAR_LIGHT_DOUBLE = "Solar Light Double"
    SOLAR_LIGHT_SINGLE = "Solar Light Single"
    WALL_VENT = "Wall Vent"
    ROLL_UP_WALL_GTR_EW = "Roll Up Wall Gtr EW"
    ROLL_UP_WALL_GUTTERED = "Roll Up Wall Guttered"
    ROLL_UP_WALL_QUONSET = "Roll Up Wall Quonset"


class ConfigurationType(enum.Enum):
    """Kinds of vent configuration."""
    VENT = "Vent"
    ROLL_UP_WALL_ENDWALL = "Roll Up Wall - Endwall"
    ROLL_UP_WALL_SIDEWALL = "Roll Up Wall - Sidewall"
    DROP_WALL = "Drop Wall"


class DoorKind(enum.Enum):
    """Door type families in the door catalog."""
    HINGED = "Hinged"
    INSIDE_SLIDING = "Inside Sliding"
    OUTSIDE_SLIDING = "Outside Sliding"
    DOOR_JAMB_KIT = "Door Jamb Kit"


class Covering(enum.Enum):
    """Coverings for doors and vestibule roofs and sides."""
    NA = "N/A"
    POLY = "Poly"
    PC8 = "PC8"
    PC80 = "PC80%"
    CPC = "CPC"
    MS = "MS"
    INSECT_SCREEN = "Insect Screen"


class Project(Base):
    """Greenhouse project (one customer bid)."""
    __tablename__ = 'projects'

    id: Mapped[int] = mapped_column(primary_key=True)
    project_name: Mapped[str] = mapped_column(String(200), nullable=False)
    bid_number: Mapped[Optional[str]] = mapped_column(String(50))
    customer_name: Mapped[Optional[str]] = mapped_column(String(200))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, onupdate=datetime.now)
    status: Mapped[str] = mapped_column(String(20), default=ProjectStatus.DRAFT.value)
    archived: Mapped[bool] = mapped_column(Boolean, default=False)

    # Contact / shipping
    ship_to_address: Mapped[Optional[str]] = mapped_column(Text)
    phone: Mapped[Optional[str]] = mapped_column(String(50))
    email: Mapped[Optional[str]] = mapped_column(String(200))

    notes: Mapped[Optional[str]] = mapped_column(Text)

    # Relationships
    structure_descriptions: Mapped[List["StructureDescription"]] = relationship(
        "StructureDescription", back_populates="project", cascade="all, delete-orphan"
    )
    structures: Mapped[List["StructureModel"]] = relationship(
        "StructureModel", back_populates="project", cascade="all, delete-orphan",
        order_by="StructureModel.id"
    )
    selections: Mapped[List["UserSelection"]] = relationship(
        "UserSelection", back_populates="project", cascade="all, delete-orphan"
    )
    vent_configurations: Mapped[List["VentConfiguration"]] = relationship(
        "VentConfiguration", back_populates="project", cascade="all, delete-orphan",
        order_by="VentConfiguration.id"
    )
    doors_and_vestibules: Mapped[Optional["DoorsAndVestibules"]] = relationship(
        "DoorsAndVestibules", back_populates="project", cascade="all, delete-orphan",
        uselist=False
    )

    def __repr__(self):
        return f"<Project(id={self.id}, name='{self.project_name}', customer='{self.customer_name}')>"


class Category(Base):
    """Top-level configurator category (Structure, Vents, Curtains, ...)."""
    __tablename__ = 'categories'

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    display_order: Mapped[int] = mapped_column(Integer, default=0)
    icon: Mapped[Optional[str]] = mapped_column(String(50))

    subcategories: Mapped[List["Subcategory"]] = relationship(
        "Subcategory", back_populates="category", cascade="all, delete-orphan",
        order_by="Subcategory.display_order"
    )

    def __repr__(self):
        return f"<Category(id={self.id}, name='{self.name}')>"


class Subcategory(Base):
    __tablename__ = 'subcategories'

    id: Mapped[int] = mapped_column(primary_key=True)
    category_id: Mapped[int] = mapped_column(ForeignKey('categories.id'), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    display_order: Mapped[int] = mapped_column(Integer, default=0)

    category: Mapped["Category"] = relationship("Category", back_populates="subcategories")
    options: Mapped[List["Option"]] = relationship(
        "Option", back_populates="subcategory", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Subcategory(id={self.id}, name='{self.name}')>"


class Option(Base):
    """Selectable option within a subcategory."""
    __tablename__ = 'options'

    id: Mapped[int] = mapped_column(primary_key=True)
    subcategory_id: Mapped[int] = mapped_column(ForeignKey('subcategories.id'), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    specifications: Mapped[Optional[dict]] = mapped_column(JSON, default=dict)
    price: Mapped[float] = mapped_column(Float, default=0.0)
    dependencies: Mapped[Optional[dict]] = mapped_column(JSON, default=dict)  # {"requires": [...], "conflicts": [...]}

    subcategory: Mapped["Subcategory"] = relationship("Subcategory", back_populates="options")

    def __repr__(self):
        return f"<Option(id={self.id}, name='{self.name}', price={self.price})>"


class UserSelection(Base):
    """Option chosen for a subcategory within a project (one per subcategory)."""
    __tablename__ = 'user_selections'
    __table_args__ = (UniqueConstraint('project_id', 'subcategory_id'),)

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey('projects.id'), nullable=False)
    subcategory_id: Mapped[int] = mapped_column(ForeignKey('subcategories.id'), nullable=False)
    option_id: Mapped[int] = mapped_column(ForeignKey('options.id'), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, onupdate=datetime.now)

    project: Mapped["Project"] = relationship("Project", back_populates="selections")
    subcategory: Mapped["Subcategory"] = relationship("Subcategory")
    option: Mapped["Option"] = relationship("Option")

    def __repr__(self):
        return f"<UserSelection(project_id={self.project_id}, option_id={self.option_id})>"


class GreenhouseModel(Base):
    """Greenhouse model from the structure catalog."""
    __tablename__ = 'greenhouse_models'

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    gutter_connect: Mapped[bool] = mapped_column(Boolean, default=True)
    description: Mapped[Optional[str]] = mapped_column(Text)

    def __repr__(self):
        return f"<GreenhouseModel(id={self.id}, name='{self.name}', gutter_connect={self.gutter_connect})>"


class StructureDescription(Base):
    """User-facing name for a project's structure."""
    __tablename__ = 'structure_descriptions'

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey('projects.id'), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, onupdate=datetime.now)

    project: Mapped["Project"] = relationship("Project", back_populates="structure_descriptions")

    def __repr__(self):
        return f"<StructureDescription(id={self.id}, name='{self.name}')>"


class StructureModel(Base):
    """Saved structure configuration. Every save adds a row; the newest is active."""
    __tablename__ = 'structure_models'

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey('projects.id'), nullable=False)
    model_id: Mapped[int] = mapped_column(ForeignKey('greenhouse_models.id'), nullable=False)
    description_id: Mapped[Optional[int]] = mapped_column(ForeignKey('structure_descriptions.id'))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)

    # Geometry
    width: Mapped[str] = mapped_column(String(20), nullable=False)  # e.g. "30"
    load: Mapped[Optional[str]] = mapped_column(String(50))
    glazing: Mapped[Optional[str]] = mapped_column(String(50))
    eave: Mapped[Optional[str]] = mapped_column(String(20))
    range_count: Mapped[int] = mapped_column(Integer, default=1)  # Stored, not used in unit math
    house_count: Mapped[int] = mapped_column(Integer, default=1)
    house_length: Mapped[float] = mapped_column(Float, default=0.0)  # feet

    # Options
    structural_upgrades: Mapped[Optional[str]] = mapped_column(String(200))
    zones: Mapped[Optional[int]] = mapped_column(Integer)
    concrete_slab: Mapped[Optional[str]] = mapped_column(String(5))  # ConcreteSlab value or NULL
    phase_voltage: Mapped[Optional[str]] = mapped_column(String(50))
    nat_gas_propane: Mapped[Optional[str]] = mapped_column(String(50))
    elevation: Mapped[Optional[float]] = mapped_column(Float)
    temps_climate: Mapped[Optional[str]] = mapped_column(String(200))
    roof: Mapped[Optional[str]] = mapped_column(String(100))
    roof_vent: Mapped[Optional[str]] = mapped_column(String(100))
    sidewalls: Mapped[Optional[str]] = mapped_column(String(100))
    endwalls: Mapped[Optional[str]] = mapped_column(String(100))
    upper_gables: Mapped[Optional[str]] = mapped_column(String(100))
    gutter_partitions: Mapped[int] = mapped_column(Integer, default=0)
    gable_partitions: Mapped[int] = mapped_column(Integer, default=0)
    stemwall: Mapped[Optional[str]] = mapped_column(String(100))
    endwall_transitions: Mapped[Optional[int]] = mapped_column(Integer)

    # Calculated values (written on save from the unit breakdown)
    base_angle_12ft: Mapped[Optional[float]] = mapped_column(Float)
    ba_bolts: Mapped[Optional[int]] = mapped_column(Integer)
    base_stringer: Mapped[Optional[float]] = mapped_column(Float)

    # Relationships
    project: Mapped["Project"] = relationship("Project", back_populates="structures")
    greenhouse_model: Mapped["GreenhouseModel"] = relationship("GreenhouseModel")
    structure_description: Mapped[Optional["StructureDescription"]] = relationship("StructureDescription")

    def __repr__(self):
        return f"<StructureModel(id={self.id}, project_id={self.project_id}, width='{self.width}', houses={self.house_count})>"


class Vent(Base):
    """Vent catalog entry."""
    __tablename__ = 'vents'

    id: Mapped[int] = mapped_column(primary_key=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    single_double: Mapped[str] = mapped_column(String(10), default=SingleDouble.SINGLE.value)
    size: Mapped[float] = mapped_column(Float, nullable=False)  # inches
    vent_glazing: Mapped[Optional[str]] = mapped_column(String(50))

    def __repr__(self):
        return f"<Vent(id={self.id}, type='{self.type}', {self.single_double}, size={self.size})>"


class Screen(Base):
    """Screen product catalog entry."""
    __tablename__ = 'screens'

    id: Mapped[int] = mapped_column(primary_key=True)
    product: Mapped[str] = mapped_column(String(100), nullable=False)
    width: Mapped[list] = mapped_column(JSON, default=list)  # Stock widths in feet, ordered

    # Net price per ft² by order size
    net_price_0_5k: Mapped[Optional[float]] = mapped_column(Float)
    net_price_5k_20k: Mapped[Optional[float]] = mapped_column(Float)
    net_price_20k_plus: Mapped[Optional[float]] = mapped_column(Float)

    def __repr__(self):
        return f"<Screen(id={self.id}, product='{self.product}', widths={self.width})>"

    def get_widths(self) -> List[float]:
        """Stock widths as floats, in catalog order."""
        return [float(w) for w in (self.width or [])]


class Drive(Base):
    """Drive catalog entry."""
    __tablename__ = 'drives'

    id: Mapped[int] = mapped_column(primary_key=True)
    drive_type: Mapped[str] = mapped_column(String(50), nullable=False)
    motor: Mapped[str] = mapped_column(String(100), nullable=False)
    size: Mapped[float] = mapped_column(Float, nullable=False)  # feet
    greenhouse_type: Mapped[str] = mapped_column(String(20), default=GreenhouseType.ALL.value)

    def __repr__(self):
        return f"<Drive(id={self.id}, type='{self.drive_type}', motor='{self.motor}', size={self.size})>"


class VentConfiguration(Base):
    """Vent, roll-up wall or drop wall configured for a project."""
    __tablename__ = 'vent_configurations'

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey('projects.id'), nullable=False)
    configuration_type: Mapped[str] = mapped_column(String(30), default=ConfigurationType.VENT.value)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)

    # Vent specific
    vent_id: Mapped[Optional[int]] = mapped_column(ForeignKey('vents.id'))
    vent_quantity: Mapped[Optional[int]] = mapped_column(Integer, default=1)
    vent_length: Mapped[Optional[float]] = mapped_column(Float)  # feet
    ati_house: Mapped[bool] = mapped_column(Boolean, default=False)

    # Roll up wall specific
    wall_type: Mapped[Optional[str]] = mapped_column(String(20))  # Guttered / Quonset
    system_quantity: Mapped[Optional[int]] = mapped_column(Integer)
    houses_wide_per_system: Mapped[Optional[int]] = mapped_column(Integer)
    house_width: Mapped[Optional[float]] = mapped_column(Float)
    frame_height: Mapped[Optional[float]] = mapped_column(Float)
    eave_height: Mapped[Optional[float]] = mapped_column(Float)
    spacing: Mapped[Optional[float]] = mapped_column(Float)

    notes: Mapped[Optional[str]] = mapped_column(Text)

    # Relationships
    project: Mapped["Project"] = relationship("Project", back_populates="vent_configurations")
    vent: Mapped[Optional["Vent"]] = relationship("Vent")
    screen_configurations: Mapped[List["ScreenConfiguration"]] = relationship(
        "ScreenConfiguration", back_populates="vent_configuration", cascade="all, delete-orphan",
        order_by="ScreenConfiguration.id"
    )
    drive_configurations: Mapped[List["DriveConfiguration"]] = relationship(
        "DriveConfiguration", back_populates="vent_configuration", cascade="all, delete-orphan",
        order_by="DriveConfiguration.id"
    )
    freight_requirements: Mapped[Optional["VentFreightRequirements"]] = relationship(
        "VentFreightRequirements", back_populates="vent_configuration", cascade="all, delete-orphan",
        uselist=False
    )

    def __repr__(self):
        return f"<VentConfiguration(id={self.id}, type='{self.configuration_type}', vent_id={self.vent_id})>"

    def label(self) -> str:
        """Short description for listings and exports."""
        if self.vent:
            return f"{self.vent.type} - {self.vent.single_double} - {self.vent.size:g}\""
        return self.configuration_type


class ScreenConfiguration(Base):
    """Screen ordered for a vent configuration. Quantity and fee are derived."""
    __tablename__ = 'screen_configurations'

    id: Mapped[int] = mapped_column(primary_key=True)
    vent_configuration_id: Mapped[int] = mapped_column(ForeignKey('vent_configurations.id'), nullable=False)
    screen_id: Mapped[int] = mapped_column(ForeignKey('screens.id'), nullable=False)
    screen_width: Mapped[float] = mapped_column(Float, nullable=False)
    screen_type: Mapped[str] = mapped_column(String(30), default=ScreenType.GOTHIC_ROOF.value)

    # Derived: always equal to a recompute from the current inputs
    calculated_quantity: Mapped[float] = mapped_column(Float, default=0.0)  # ft²
    slitting_fee: Mapped[float] = mapped_column(Float, default=0.0)  # USD

    vent_configuration: Mapped["VentConfiguration"] = relationship(
        "VentConfiguration", back_populates="screen_configurations"
    )
    screen: Mapped["Screen"] = relationship("Screen")

    def __repr__(self):
        return f"<ScreenConfiguration(id={self.id}, screen_id={self.screen_id}, qty={self.calculated_quantity})>"


class DriveConfiguration(Base):
    __tablename__ = 'drive_configurations'

    id: Mapped[int] = mapped_column(primary_key=True)
    vent_configuration_id: Mapped[int] = mapped_column(ForeignKey('vent_configurations.id'), nullable=False)
    drive_id: Mapped[int] = mapped_column(ForeignKey('drives.id'), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, default=1)

    vent_configuration: Mapped["VentConfiguration"] = relationship(
        "VentConfiguration", back_populates="drive_configurations"
    )
    drive: Mapped["Drive"] = relationship("Drive")

    def __repr__(self):
        return f"<DriveConfiguration(id={self.id}, drive_id={self.drive_id}, qty={self.quantity})>"


class VentFreightRequirements(Base):
    __tablename__ = 'vent_freight_requirements'

    id: Mapped[int] = mapped_column(primary_key=True)
    vent_configuration_id: Mapped[int] = mapped_column(ForeignKey('vent_configurations.id'), nullable=False)
    drives_freight: Mapped[Optional[str]] = mapped_column(String(100))
    screen_freight: Mapped[Optional[str]] = mapped_column(String(100))

    vent_configuration: Mapped["VentConfiguration"] = relationship(
        "VentConfiguration", back_populates="freight_requirements"
    )


class DoorType(Base):
    """Door catalog entry, e.g. Hinged 3' x 7'."""
    __tablename__ = 'door_types'

    id: Mapped[int] = mapped_column(primary_key=True)
    type: Mapped[str] = mapped_column(String(30), nullable=False)  # DoorKind value
    size: Mapped[str] = mapped_column(String(50), nullable=False)

    def __repr__(self):
        return f"<DoorType(id={self.id}, type='{self.type}', size='{self.size}')>"

    def label(self) -> str:
        return f"{self.type} - {self.size}"


class DoorsAndVestibules(Base):
    """Doors and vestibules section of a project (one per project)."""
    __tablename__ = 'doors_and_vestibules'

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey('projects.id'), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, onupdate=datetime.now)

    project: Mapped["Project"] = relationship("Project", back_populates="doors_and_vestibules")
    doors: Mapped[List["Door"]] = relationship(
        "Door", back_populates="doors_and_vestibules", cascade="all, delete-orphan",
        order_by="Door.id"
    )
    vestibules: Mapped[List["Vestibule"]] = relationship(
        "Vestibule", back_populates="doors_and_vestibules", cascade="all, delete-orphan",
        order_by="Vestibule.id"
    )
    freight_requirements: Mapped[Optional["DoorFreightRequirements"]] = relationship(
        "DoorFreightRequirements", back_populates="doors_and_vestibules", cascade="all, delete-orphan",
        uselist=False
    )

    def __repr__(self):
        return f"<DoorsAndVestibules(id={self.id}, project_id={self.project_id})>"


class Door(Base):
    __tablename__ = 'doors'

    id: Mapped[int] = mapped_column(primary_key=True)
    doors_and_vestibules_id: Mapped[int] = mapped_column(ForeignKey('doors_and_vestibules.id'), nullable=False)
    door_type_id: Mapped[int] = mapped_column(ForeignKey('door_types.id'), nullable=False)
    door_covering: Mapped[str] = mapped_column(String(20), default=Covering.NA.value)
    quantity: Mapped[int] = mapped_column(Integer, default=1)

    doors_and_vestibules: Mapped["DoorsAndVestibules"] = relationship(
        "DoorsAndVestibules", back_populates="doors"
    )
    door_type: Mapped["DoorType"] = relationship("DoorType")

    def __repr__(self):
        return f"<Door(id={self.id}, door_type_id={self.door_type_id}, qty={self.quantity})>"


class Vestibule(Base):
    __tablename__ = 'vestibules'

    id: Mapped[int] = mapped_column(primary_key=True)
    doors_and_vestibules_id: Mapped[int] = mapped_column(ForeignKey('doors_and_vestibules.id'), nullable=False)
    dimensions: Mapped[Optional[str]] = mapped_column(String(100))
    roof_covering: Mapped[str] = mapped_column(String(20), default=Covering.NA.value)
    side_covering: Mapped[str] = mapped_column(String(20), default=Covering.NA.value)
    door_type_id: Mapped[Optional[int]] = mapped_column(ForeignKey('door_types.id'))
    pressure_fan: Mapped[Optional[str]] = mapped_column(String(200))

    doors_and_vestibules: Mapped["DoorsAndVestibules"] = relationship(
        "DoorsAndVestibules", back_populates="vestibules"
    )
    door_type: Mapped[Optional["DoorType"]] = relationship("DoorType")

    def __repr__(self):
        return f"<Vestibule(id={self.id}, dimensions='{self.dimensions}')>"


class DoorFreightRequirements(Base):
    __tablename__ = 'freight_requirements'

    id: Mapped[int] = mapped_column(primary_key=True)
    doors_and_vestibules_id: Mapped[int] = mapped_column(ForeignKey('doors_and_vestibules.id'), nullable=False)
    aj_door_freight: Mapped[Optional[str]] = mapped_column(String(100))
    glazing_freight: Mapped[Optional[str]] = mapped_column(String(100))
    screen_freight: Mapped[Optional[str]] = mapped_column(String(100))

    doors_and_vestibules: Mapped["DoorsAndVestibules"] = relationship(
        "DoorsAndVestibules", back_populates="freight_requirements"
    )
