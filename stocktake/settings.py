import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Catalog Source ---
# Either an http(s) URL or a path relative to BASE_DIR.
CATALOG_SOURCE = os.getenv("CATALOG_SOURCE", "data/catalog.csv")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "15"))

# --- Export Configuration ---
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")
EXPORT_FILENAME_PREFIX = os.getenv("EXPORT_FILENAME_PREFIX", "count")
EXPORT_ONLY_REORDER = os.getenv("EXPORT_ONLY_REORDER", "false").lower() in (
    "1",
    "true",
    "yes",
)
EXPORT_COLUMNS = ["Name", "Category", "Total", "Minimum", "ToOrder"]

# --- Logging ---
LOG_LEVEL = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")
LOG_FILENAME = os.getenv("LOG_FILENAME", "stocktake.log")
LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", str(5 * 1024 * 1024)))  # 5 MB
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "3"))
# Console stays terse for the counting prompts; the file keeps the full record.
LOG_CONSOLE_FORMAT = "%(message)s"
LOG_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# --- Locations ---
# Fixed for the lifetime of the app. The position in this list is the round number.
COOLED = "cooled"
DRY = "dry"
CONTAINER = "container"

LOCATIONS = [
    {"id": COOLED, "name": "Cooler", "order": 1},
    {"id": DRY, "name": "Dry Storage", "order": 2},
    {"id": CONTAINER, "name": "Container", "order": 3},
]

# Suffix appended to the slugged name to build an item id.
LOCATION_ID_SUFFIXES = {
    COOLED: "-cooled",
    DRY: "",
    CONTAINER: "-container",
}

# Location that receives the second stock record of a split product.
OVERFLOW_LOCATION = CONTAINER

# --- Category Rules ---
# Category header -> where its items live and whether cooled items also get a
# container record. Categories not listed fall back to DEFAULT_CATEGORY_RULE.
# Every entry with "overflow": False is an exception to the container split.
DEFAULT_CATEGORY_RULE = {"location_id": COOLED, "unit": None, "overflow": True}

CATEGORY_RULES = {
    "BACKSTAGE": {"location_id": COOLED, "unit": None, "overflow": False},
    "SPIRITS": {"location_id": DRY, "unit": None, "overflow": False},
    "RED WINE": {"location_id": DRY, "unit": None, "overflow": False},
    "WINES - RED": {"location_id": DRY, "unit": None, "overflow": False},
    "SEASONAL WINES - RED": {"location_id": DRY, "unit": None, "overflow": False},
}

# Unit used when a rule doesn't pin one: first keyword found in the category wins.
UNIT_KEYWORDS = {
    "WINE": "bottles",
}
DEFAULT_UNIT = "pieces"

# Label used in the overview for totals without a category.
UNCATEGORIZED_LABEL = "Other"
