import logging
from datetime import date
from pathlib import Path
from typing import Optional

from . import aggregation, data_handler, exporter
from .counts import CountStore
from .parsers import build_products
from .schemas import AggregatedTotal, Catalog, Count, Item, Location, LocationCount, RoundView
from .state import (
    Action,
    AdvanceInput,
    AppState,
    ConfirmReset,
    EnterQuantity,
    reduce,
)

logger = logging.getLogger(__name__)


class CountSession:
    """
    One user's counting session over a loaded catalog.
    Drives the application state and the count store; everything it shows
    is recomputed from those two.
    """

    def __init__(self, catalog: Catalog):
        self.catalog = catalog
        self.products = build_products(catalog.items)
        self.store = CountStore(item.id for item in catalog.items)
        self.state = AppState(location_count=len(catalog.locations))

    @property
    def locations(self) -> list[Location]:
        return self.catalog.locations

    @property
    def items(self) -> list[Item]:
        return self.catalog.items

    @property
    def active_location(self) -> Optional[Location]:
        if self.state.is_overview:
            return None
        return self.locations[self.state.active_tab]

    def dispatch(self, action: Action) -> AppState:
        previous = self.state

        if isinstance(action, EnterQuantity):
            self.enter_quantity(action.item_id, action.value)
        elif isinstance(action, ConfirmReset) and previous.show_reset_confirmation:
            self.store.reset_all()
            logger.info("🧹 All counts cleared.")

        self.state = reduce(previous, action)
        return self.state

    def enter_quantity(self, item_id: str, value) -> Count:
        """Records a quantity for an item in the active location's round."""
        location = self.active_location
        if location is None:
            raise ValueError("Quantities can only be entered on a location tab.")
        if item_id not in aggregation.input_order(self.items, location.id):
            raise ValueError(f"Item '{item_id}' is not stocked in {location.name}.")
        return self.store.upsert(item_id, location.id, self.state.round, value)

    def advance_input(self) -> Optional[str]:
        """Moves focus to the next entry field of the active location."""
        location = self.active_location
        order = aggregation.input_order(self.items, location.id) if location else []
        self.dispatch(AdvanceInput(order=tuple(order)))
        return self.state.active_input_id

    # --- Views ---

    def entry_sections(self) -> dict[str, list[Item]]:
        location = self.active_location
        if location is None:
            return {}
        return aggregation.items_by_category(self.items, location.id)

    def entered_quantity(self, item_id: str) -> Optional[int]:
        """The quantity already entered for an item in the active round, if any."""
        location = self.active_location
        if location is None:
            return None
        count = self.store.get(item_id, location.id, self.state.round)
        return count.quantity if count else None

    def totals(self) -> list[AggregatedTotal]:
        return aggregation.compute_product_totals(self.products, self.store)

    def overview(self) -> dict[str, list[AggregatedTotal]]:
        return aggregation.group_by_category(self.totals(), self.state.only_reorder)

    def round_view(self) -> list[RoundView]:
        return aggregation.compute_round_view(self.locations, self.items, self.store)

    def detail(self) -> list[LocationCount]:
        if self.state.selected_product is None:
            return []
        return aggregation.product_detail(
            self.state.selected_product, self.locations, self.items, self.store
        )

    # --- Export ---

    def export(self, today: date | None = None) -> tuple[str, str]:
        """Returns the export filename and CSV text, honouring the reorder filter."""
        text = exporter.export_csv(self.totals(), self.state.only_reorder)
        return exporter.export_filename(today), text

    def save_export(self, output_dir: Optional[Path] = None, today: date | None = None) -> Path:
        filename, text = self.export(today)
        return data_handler.save_export(text, filename, output_dir)
