import logging

import pandas as pd

from stocktake import data_handler, settings
from stocktake.logger import setup_logger
from stocktake.session import CountSession
from stocktake.state import EnterQuantity, SelectTab, ShowOverview, ToggleOnlyReorder

logger = logging.getLogger(__name__)


def count_round(session: CountSession) -> bool:
    """
    Prompts for every item of the active location in display order.
    Blank input keeps the current value, 'q' or end of input stops counting.
    Returns False once the user quits.
    """
    location = session.active_location
    logger.info(f"\n-- Round {session.state.round}: {location.name} --")

    for category, items in session.entry_sections().items():
        logger.info(f"\n[{category or settings.UNCATEGORIZED_LABEL}]")
        for item in items:
            current = session.entered_quantity(item.id)
            prompt = f"  {item.name} ({item.unit})" + (f" [{current}]" if current is not None else "") + ": "
            try:
                raw = input(prompt).strip()
            except EOFError:
                return False
            if raw.lower() == "q":
                return False
            if raw:
                session.dispatch(EnterQuantity(item_id=item.id, value=raw))
            session.advance_input()
    return True


def print_overview(session: CountSession):
    rows = [
        total.model_dump(by_alias=True)
        for section in session.overview().values()
        for total in section
    ]
    if not rows:
        logger.warning("⚠️ Nothing to show.")
        return
    df = pd.DataFrame(rows, columns=settings.EXPORT_COLUMNS)
    logger.info("\n--- Overview ---")
    logger.info(df.to_string(index=False))


def run_process():
    """Loads the catalog, walks every round, then prints and saves the overview."""
    setup_logger()
    logger.info("--- Starting Stock Count ---")

    catalog = data_handler.load_catalog()
    if not catalog.items:
        logger.warning("⚠️ The catalog is empty. Nothing to count.")
        return

    session = CountSession(catalog)
    for index in range(len(session.locations)):
        session.dispatch(SelectTab(index=index))
        if not count_round(session):
            break

    session.dispatch(ShowOverview())
    if settings.EXPORT_ONLY_REORDER != session.state.only_reorder:
        session.dispatch(ToggleOnlyReorder())

    print_overview(session)
    session.save_export()

    logger.info("\n--- Stock Count Finished ---")


if __name__ == "__main__":
    run_process()
