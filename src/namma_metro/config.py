"""Configuration settings for the metro route finder."""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = Path(os.getenv("METRO_DATA_DIR", PROJECT_ROOT / "data"))
DB_PATH = Path(os.getenv("METRO_DB_PATH", DATA_DIR / "namma_metro.db"))
DATA_DIR.mkdir(parents=True, exist_ok=True)  # Ensure data directory exists

# Network parameters (fixed per edge, not real geography)
KM_PER_EDGE = 1.1
MINUTES_PER_EDGE = 2
INTERCHANGE_MINUTES = 3  # extra buffer per interchange station

# Query limits
MAX_ALTERNATES = int(os.getenv("METRO_MAX_ALTERNATES", "3"))
AUTOCOMPLETE_LIMIT = int(os.getenv("METRO_AUTOCOMPLETE_LIMIT", "20"))
INCLUDE_PLANNED = _env_flag("METRO_INCLUDE_PLANNED", True)

# Station keys longer than this are truncated
MAX_KEY_LENGTH = 79

# Distance slabs: (max km inclusive, fare in Rs); anything beyond is MAX_FARE
FARE_SLABS = [
    (2, 10),
    (4, 20),
    (6, 30),
    (8, 40),
    (10, 50),
    (15, 60),
    (20, 70),
    (25, 80),
]
MAX_FARE = 90

# HTTP service
API_HOST = os.getenv("METRO_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("METRO_API_PORT", "8000"))
