import logging
import math
import re
from datetime import date
from pathlib import Path

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_NON_DIGIT = re.compile(r"[^0-9]")


def get_date_suffix_for_filename(today: date | None = None) -> str:
    """Returns the local date as a DD-MM-YYYY string for filenames."""
    return (today or date.today()).strftime("%d-%m-%Y")


def slugify(name: str) -> str:
    """'Spa Red (0.5L)' -> 'spa-red-0-5l'"""
    return _NON_ALNUM.sub("-", name.lower()).strip("-")


def parse_quantity(raw: int | float | str | None) -> int:
    """
    Turns whatever came out of an entry field into a non-negative count.
    Non-digit characters are dropped, so empty or garbage input becomes 0.
    Numbers are truncated towards zero; NaN and infinity count as 0.
    """
    if raw is None:
        return 0
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, int):
        return max(0, raw)
    if isinstance(raw, float):
        return max(0, int(raw)) if math.isfinite(raw) else 0
    digits = _NON_DIGIT.sub("", str(raw))
    return int(digits) if digits else 0


def read_text(file_path: Path) -> str | None:
    """
    Reads a text file with a two-stage encoding fallback:
    1. UTF-8 with BOM support ('utf-8-sig').
    2. Latin-1, which can decode any byte.
    Returns None when the file can't be read at all.
    """
    try:
        return file_path.read_text(encoding="utf-8-sig")

    except UnicodeDecodeError:
        logger.info(
            f"INFO: UTF-8 decoding failed for {file_path.name}. Retrying with 'latin-1'."
        )
        try:
            return file_path.read_text(encoding="latin-1")
        except OSError as e:
            logger.error(f"❌ Could not read {file_path.name} with latin-1. Reason: {e}")
            return None

    except FileNotFoundError:
        logger.error(f"❌ File not found at {file_path}.")
        return None

    except OSError as e:
        logger.error(f"❌ Could not read {file_path.name}. Reason: {e}")
        return None
