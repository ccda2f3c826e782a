import logging
from typing import Iterable

from pydantic import ValidationError

from . import settings
from .schemas import CategoryRule, Item, Product
from .utils import slugify

logger = logging.getLogger(__name__)


def resolve_category_rule(category: str) -> CategoryRule:
    """Looks the category up in the rule table, falling back to the default rule."""
    rule = settings.CATEGORY_RULES.get(category, settings.DEFAULT_CATEGORY_RULE)
    return CategoryRule(**rule)


def resolve_unit(category: str, rule: CategoryRule) -> str:
    if rule.unit:
        return rule.unit
    for keyword, unit in settings.UNIT_KEYWORDS.items():
        if keyword in category:
            return unit
    return settings.DEFAULT_UNIT


def make_item_id(name: str, location_id: str) -> str:
    return slugify(name) + settings.LOCATION_ID_SUFFIXES.get(location_id, f"-{location_id}")


def _split_line(line: str) -> tuple[str, str]:
    fields = [field.strip() for field in line.split(",")]
    name = fields[0]
    second = fields[1] if len(fields) > 1 else ""
    return name, second


def _is_category_header(name: str, second: str) -> bool:
    return name == name.upper() and not second


def parse_catalog(text: str) -> list[Item]:
    """
    Parses the line-oriented catalog listing into stock records.

    Lines are either an uppercase category header (`SOFT DRINKS`) or a
    `name, minimum stock` data line (`Cola, 24`). Anything else is skipped.
    Items in cooled storage whose category allows it get a second record
    in the overflow container. Output keeps the order of the listing.
    """
    items: list[Item] = []
    seen_ids: set[str] = set()
    current_category = ""

    for line in text.splitlines():
        name, second = _split_line(line)
        if not name:
            continue

        if _is_category_header(name, second):
            current_category = name
            continue

        if not (second.isascii() and second.isdigit()):
            continue

        minimum_stock = int(second)
        rule = resolve_category_rule(current_category)
        unit = resolve_unit(current_category, rule)

        locations = [rule.location_id]
        if rule.location_id == settings.COOLED and rule.overflow:
            locations.append(settings.OVERFLOW_LOCATION)

        for location_id in locations:
            item_id = make_item_id(name, location_id)
            if item_id in seen_ids:
                logger.warning(f"⚠️ Duplicate catalog entry '{name}' ({item_id}), skipping.")
                continue
            try:
                item = Item(
                    id=item_id,
                    name=name,
                    minimum_stock=minimum_stock,
                    location_id=location_id,
                    category=current_category,
                    unit=unit,
                )
            except ValidationError as e:
                logger.warning(f"⚠️ Invalid catalog entry '{name}': {e}")
                continue
            seen_ids.add(item_id)
            items.append(item)

    return items


def build_products(items: Iterable[Item]) -> list[Product]:
    """
    Groups stock records by display name into products, in order of first
    appearance. Category, unit and minimum come from the first record.
    """
    grouped: dict[str, list[Item]] = {}
    for item in items:
        grouped.setdefault(item.name, []).append(item)

    return [
        Product(
            name=name,
            category=stocks[0].category,
            unit=stocks[0].unit,
            minimum_stock=stocks[0].minimum_stock,
            stocks=stocks,
        )
        for name, stocks in grouped.items()
    ]
