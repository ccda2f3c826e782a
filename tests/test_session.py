"""Tests for the counting session controller."""

from datetime import date

import pytest

from stocktake.session import CountSession
from stocktake.state import (
    ConfirmReset,
    EnterQuantity,
    FocusInput,
    OpenDetail,
    RequestReset,
    SelectTab,
    ShowOverview,
    ToggleOnlyReorder,
)


def _totals(session: CountSession) -> dict[str, int]:
    return {total.name: total.total for total in session.totals()}


def test_entries_are_recorded_in_active_round(session: CountSession) -> None:
    session.dispatch(EnterQuantity(item_id="cola-cooled", value="10"))
    session.dispatch(SelectTab(index=2))
    session.dispatch(EnterQuantity(item_id="cola-container", value="5"))

    counts = {(c.item_id, c.location_id, c.round): c.quantity for c in session.store}
    assert counts == {
        ("cola-cooled", "cooled", 1): 10,
        ("cola-container", "container", 3): 5,
    }
    cola = next(t for t in session.totals() if t.name == "Cola")
    assert (cola.total, cola.to_order) == (15, 9)


def test_reentry_overwrites(session: CountSession) -> None:
    session.dispatch(EnterQuantity(item_id="fanta-cooled", value="4"))
    session.dispatch(EnterQuantity(item_id="fanta-cooled", value="7x"))

    assert len(session.store) == 1
    assert session.entered_quantity("fanta-cooled") == 7
    assert session.state.active_input_id == "fanta-cooled"


def test_entering_on_overview_is_rejected(session: CountSession) -> None:
    session.dispatch(ShowOverview())

    with pytest.raises(ValueError):
        session.dispatch(EnterQuantity(item_id="cola-cooled", value="1"))


def test_confirm_without_request_keeps_counts(session: CountSession) -> None:
    session.dispatch(EnterQuantity(item_id="cola-cooled", value="3"))

    session.dispatch(ConfirmReset())

    assert len(session.store) == 1


def test_confirmed_reset_clears_everything(session: CountSession) -> None:
    session.dispatch(EnterQuantity(item_id="cola-cooled", value="3"))
    session.dispatch(SelectTab(index=1))
    session.dispatch(EnterQuantity(item_id="gin", value="2"))

    session.dispatch(RequestReset())
    session.dispatch(ConfirmReset())

    assert len(session.store) == 0
    assert set(_totals(session).values()) == {0}
    assert not session.state.show_reset_confirmation


def test_advance_input_follows_entry_screen(session: CountSession) -> None:
    session.dispatch(FocusInput(item_id="fanta-cooled"))

    assert session.advance_input() == "energy-drink-cooled"
    assert session.advance_input() == "cola-cooled"


def test_entry_sections_for_active_location(session: CountSession) -> None:
    session.dispatch(SelectTab(index=1))

    sections = session.entry_sections()

    assert {category: [i.id for i in items] for category, items in sections.items()} == {
        "RED WINE": ["merlot"],
        "SPIRITS": ["gin"],
    }


def test_overview_and_export_honour_reorder_filter(session: CountSession) -> None:
    session.dispatch(SelectTab(index=1))
    session.dispatch(EnterQuantity(item_id="gin", value="2"))
    session.dispatch(EnterQuantity(item_id="merlot", value="6"))
    session.dispatch(ShowOverview())
    session.dispatch(ToggleOnlyReorder())

    overview = session.overview()
    filename, text = session.export(date(2025, 12, 31))

    assert "SPIRITS" not in overview
    assert "RED WINE" not in overview
    assert filename == "count-31-12-2025.csv"
    assert "Gin" not in text
    assert "Cola,SOFT DRINKS,0,24,24" in text.splitlines()


def test_detail_popup_shows_per_location_counts(session: CountSession) -> None:
    session.dispatch(EnterQuantity(item_id="cola-cooled", value="10"))
    session.dispatch(OpenDetail(name="Cola"))

    detail = session.detail()

    assert [(d.location_id, d.quantity) for d in detail] == [
        ("cooled", 10),
        ("container", 0),
    ]


def test_round_view(session: CountSession) -> None:
    session.dispatch(EnterQuantity(item_id="cola-cooled", value="1"))

    views = session.round_view()

    assert [len(v.counted) for v in views] == [1, 0, 0]


def test_save_export_writes_dated_file(session: CountSession, tmp_path) -> None:
    path = session.save_export(tmp_path, today=date(2025, 1, 2))

    assert path.name == "count-02-01-2025.csv"
    assert path.read_text(encoding="utf-8").startswith("Name,Category,Total,Minimum,ToOrder\n")


def test_entry_for_item_stocked_elsewhere_is_rejected(session: CountSession) -> None:
    with pytest.raises(ValueError):
        session.dispatch(EnterQuantity(item_id="gin", value="5"))

    session.dispatch(OpenDetail(name="Gin"))
    gin = next(t for t in session.totals() if t.name == "Gin")
    assert len(session.store) == 0
    assert gin.total == sum(d.quantity for d in session.detail()) == 0


def test_overview_total_matches_detail_popup(session: CountSession) -> None:
    session.dispatch(EnterQuantity(item_id="cola-cooled", value="4"))
    session.dispatch(SelectTab(index=2))
    session.dispatch(EnterQuantity(item_id="cola-container", value="6"))
    session.dispatch(OpenDetail(name="Cola"))

    cola = next(t for t in session.totals() if t.name == "Cola")

    assert cola.total == sum(d.quantity for d in session.detail()) == 10
