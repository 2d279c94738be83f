"""Configuration settings for the Greenhouse Project Configurator."""

import os
from pathlib import Path

# Default to local directory, can be changed to shared network drive
# Example: DATABASE_PATH = Path("//server/share/greenhouse_data")
DATABASE_PATH = Path(os.environ.get('GREENHOUSE_DATABASE_PATH', Path(__file__).parent / 'data'))

# Database file name
DATABASE_NAME = 'greenhouse_projects.db'

# Full database file path
DATABASE_FILE = DATABASE_PATH / DATABASE_NAME

# Bill-of-materials workbooks
EXPORTS_PATH = DATABASE_PATH / 'exports'

# Seed catalog shipped with the application
SEED_DATA_PATH = Path(__file__).parent / 'data' / 'seed'

# Ensure directories exist
def ensure_directories():
    """Create required directories if they don't exist."""
    DATABASE_PATH.mkdir(parents=True, exist_ok=True)
    EXPORTS_PATH.mkdir(parents=True, exist_ok=True)

# SQLite connection string
def get_database_url():
    """Get SQLAlchemy database URL.

    GREENHOUSE_DATABASE_URL overrides the local SQLite file, e.g. for a
    shared PostgreSQL catalog.
    """
    url = os.environ.get('GREENHOUSE_DATABASE_URL')
    if url:
        return url
    ensure_directories()
    return f"sqlite:///{DATABASE_FILE}"

# Application settings
APP_NAME = "Greenhouse Configurator"
APP_VERSION = "1.0.0"
LOG_LEVEL = os.environ.get('GREENHOUSE_LOG_LEVEL', 'INFO')

# Calculation defaults
BASE_LENGTH_FT = 21  # House length covered by one pair of end bays
BAY_LENGTH_FT = 12  # Length of one mid bay
BASE_ANGLE_SECTION_FT = 12  # Base angle is sold in 12ft sections
BA_BOLTS_PER_SECTION = 5
SLITTING_FEE_PER_FT = 0.22  # USD per linear foot of vent run
