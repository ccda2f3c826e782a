from datetime import date
from typing import Iterable

import pandas as pd

from . import settings
from .schemas import AggregatedTotal
from .utils import get_date_suffix_for_filename


def export_csv(totals: Iterable[AggregatedTotal], only_reorder: bool = False) -> str:
    """
    Serializes totals to CSV text with the `Name,Category,Total,Minimum,ToOrder`
    header. Names or categories containing commas or quotes get quoted.
    """
    rows = [
        total.model_dump(by_alias=True)
        for total in totals
        if not only_reorder or total.to_order > 0
    ]
    df = pd.DataFrame(rows, columns=settings.EXPORT_COLUMNS)
    df["Category"] = df["Category"].fillna("")
    return df.to_csv(index=False, lineterminator="\n")


def export_filename(today: date | None = None) -> str:
    """e.g. 'count-19-10-2026.csv'"""
    return f"{settings.EXPORT_FILENAME_PREFIX}-{get_date_suffix_for_filename(today)}.csv"
