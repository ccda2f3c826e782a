import logging
from pathlib import Path
from typing import Optional

import requests

from . import settings
from . import utils
from .parsers import parse_catalog
from .schemas import Catalog, Location

logger = logging.getLogger(__name__)


def build_locations() -> list[Location]:
    """The fixed set of locations, in counting order."""
    locations = [Location(**location) for location in settings.LOCATIONS]
    return sorted(locations, key=lambda location: location.order)


def fetch_catalog_text(url: str) -> str | None:
    """Downloads the catalog listing. Returns None if the request fails."""
    logger.info(f"🚀 Fetching catalog from: {url}")
    try:
        response = requests.get(url, timeout=settings.REQUEST_TIMEOUT)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error loading catalog: {e}")
        return None
    return response.text


def read_catalog_text(path: Path) -> str | None:
    if not path.is_absolute():
        path = settings.BASE_DIR / path
    logger.info(f"📄 Reading catalog from: {path}")
    return utils.read_text(path)


def load_catalog(source: Optional[str] = None) -> Catalog:
    """
    Loads the catalog from a URL or a local file and parses it.
    A failed load is logged and leaves the catalog without items.
    """
    source = source or settings.CATALOG_SOURCE
    locations = build_locations()

    if source.startswith(("http://", "https://")):
        text = fetch_catalog_text(source)
    else:
        text = read_catalog_text(Path(source))

    if text is None:
        logger.warning("⚠️ Catalog unavailable. Continuing with an empty catalog.")
        return Catalog(locations=locations, items=[])

    items = parse_catalog(text)
    logger.info(f"✅ Loaded {len(items)} stock records.")
    return Catalog(locations=locations, items=items)


def save_export(csv_text: str, filename: str, output_dir: Optional[Path] = None) -> Path:
    """Writes an export to the output directory and returns its path."""
    output_dir = output_dir or settings.OUTPUT_DIR
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / filename
    path.write_text(csv_text, encoding="utf-8")
    logger.info(f"✅ Count export saved to: {path}")
    return path
