from typing import Iterable, Sequence

import pandas as pd

from . import settings
from .counts import CountStore
from .parsers import build_products
from .schemas import AggregatedTotal, Count, Item, Location, LocationCount, Product, RoundView

COUNT_COLUMNS = ["item_id", "location_id", "round", "quantity"]


def _counts_frame(counts: Iterable[Count]) -> pd.DataFrame:
    return pd.DataFrame([count.model_dump() for count in counts], columns=COUNT_COLUMNS)


def compute_product_totals(
    products: Sequence[Product], counts: Iterable[Count]
) -> list[AggregatedTotal]:
    """
    Sums every count of every stock record of each product, across all
    locations and rounds, and works out how much to reorder.
    """
    owner = {item.id: product.name for product in products for item in product.stocks}

    df = _counts_frame(counts)
    df["product"] = df["item_id"].map(owner)
    # Counts for ids outside the catalog don't belong to any product.
    sums = df.dropna(subset=["product"]).groupby("product", sort=False)["quantity"].sum()

    totals = []
    for product in products:
        total = int(sums.get(product.name, 0))
        totals.append(
            AggregatedTotal(
                item_id=product.stocks[0].id if product.stocks else "",
                name=product.name,
                category=product.category,
                unit=product.unit,
                total=total,
                minimum_stock=product.minimum_stock,
                to_order=max(0, product.minimum_stock - total),
            )
        )
    return totals


def compute_totals(items: Sequence[Item], counts: Iterable[Count]) -> list[AggregatedTotal]:
    """Totals per display name, in order of first appearance in `items`."""
    return compute_product_totals(build_products(items), counts)


def _as_store(counts: Iterable[Count]) -> CountStore:
    return counts if isinstance(counts, CountStore) else CountStore.from_counts(counts)


def _ordered(locations: Iterable[Location]) -> list[Location]:
    return sorted(locations, key=lambda location: location.order)


def compute_round_view(
    locations: Iterable[Location], items: Sequence[Item], counts: Iterable[Count]
) -> list[RoundView]:
    """One view per location in its fixed order; the round is its position + 1."""
    store = _as_store(counts)
    views = []
    for index, location in enumerate(_ordered(locations)):
        item_ids = {item.id for item in items if item.location_id == location.id}
        views.append(
            RoundView(
                round=index + 1,
                location_id=location.id,
                counted=list(store.query(item_ids=item_ids)),
            )
        )
    return views


def group_by_category(
    totals: Iterable[AggregatedTotal], only_reorder: bool = False
) -> dict[str, list[AggregatedTotal]]:
    """Overview table sections, keyed by category in order of first appearance."""
    sections: dict[str, list[AggregatedTotal]] = {}
    for total in totals:
        if only_reorder and total.to_order <= 0:
            continue
        category = total.category or settings.UNCATEGORIZED_LABEL
        sections.setdefault(category, []).append(total)
    return sections


def items_by_category(items: Iterable[Item], location_id: str) -> dict[str, list[Item]]:
    """The entry screen of one location: its items grouped by category."""
    sections: dict[str, list[Item]] = {}
    for item in items:
        if item.location_id == location_id:
            sections.setdefault(item.category, []).append(item)
    return sections


def input_order(items: Iterable[Item], location_id: str) -> list[str]:
    """Item ids in the order their entry fields are shown for a location."""
    return [
        item.id
        for section in items_by_category(items, location_id).values()
        for item in section
    ]


def product_detail(
    name: str,
    locations: Iterable[Location],
    items: Sequence[Item],
    counts: Iterable[Count],
) -> list[LocationCount]:
    """
    Per-location quantities of one product, for the locations where it has
    a stock record. Quantities of all rounds at a location are added up.
    """
    store = _as_store(counts)
    detail = []
    for location in _ordered(locations):
        stock = next(
            (item for item in items if item.name == name and item.location_id == location.id),
            None,
        )
        if stock is None:
            continue
        quantity = sum(
            count.quantity
            for count in store.query(location_id=location.id, item_ids={stock.id})
        )
        detail.append(
            LocationCount(
                location_id=location.id,
                location_name=location.name,
                item_id=stock.id,
                quantity=quantity,
            )
        )
    return detail
