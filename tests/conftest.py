"""Pytest configuration and fixtures."""

import pytest

from stocktake.data_handler import build_locations
from stocktake.parsers import parse_catalog
from stocktake.schemas import Catalog, Item, Location
from stocktake.session import CountSession

SAMPLE_CATALOG = """SOFT DRINKS
Cola,24
Fanta,12
RED WINE
Merlot,6
SPIRITS
Gin,2
BACKSTAGE
Energy Drink,12
"""


@pytest.fixture
def catalog_text() -> str:
    return SAMPLE_CATALOG


@pytest.fixture
def locations() -> list[Location]:
    return build_locations()


@pytest.fixture
def items(catalog_text: str) -> list[Item]:
    return parse_catalog(catalog_text)


@pytest.fixture
def catalog(locations: list[Location], items: list[Item]) -> Catalog:
    return Catalog(locations=locations, items=items)


@pytest.fixture
def session(catalog: Catalog) -> CountSession:
    return CountSession(catalog)
