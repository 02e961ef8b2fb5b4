"""Configuration for the MotoPark SF ingestion pipeline"""
import os
from pathlib import Path
from dotenv import load_dotenv

from .errors import ConfigError

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


# Base paths
BASE_DIR = Path(__file__).resolve().parent.parent.parent
DATA_DIR = Path(os.getenv("MOTOPARK_DATA_DIR", str(BASE_DIR / "data")))
OUTPUT_DIR = Path(os.getenv("MOTOPARK_OUTPUT_DIR", str(BASE_DIR / "output")))

# DataSF exports (rows.json format)
UNMETERED_DATASET_ID = "egmb-2zhs"  # Motorcycle Parking (Unmetered)
METERED_DATASET_ID = "uf55-k7py"    # Metered motorcycle spaces
UNMETERED_FILENAME = "unmetered.json"
METERED_FILENAME = "metered.json"

# Output settings
COMPRESS_OUTPUT = _env_bool("MOTOPARK_COMPRESS_OUTPUT", False)
LOG_LEVEL = os.getenv("MOTOPARK_LOG_LEVEL", "INFO").upper()

# San Francisco bounding box used by the validator
SF_BOUNDS = {
    "min_lat": 37.6398,
    "max_lat": 37.9298,
    "min_lon": -123.1738,
    "max_lon": -122.2818,
}
