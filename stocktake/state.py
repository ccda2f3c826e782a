"""
Application state of a counting session and the pure transitions over it.

`reduce` never touches counts or files; actions with side effects
(entering a quantity, confirming a reset) are carried out by the session
after the state transition.
"""
from typing import Optional, Sequence, Union

from pydantic import BaseModel, Field


class AppState(BaseModel):
    location_count: int = Field(default=0, ge=0)
    # Tabs 0..location_count-1 are locations, location_count is the overview.
    active_tab: int = Field(default=0, ge=0)
    active_input_id: Optional[str] = None
    show_reset_confirmation: bool = False
    only_reorder: bool = False
    selected_product: Optional[str] = None

    @property
    def is_overview(self) -> bool:
        return self.active_tab == self.location_count

    @property
    def round(self) -> Optional[int]:
        return None if self.is_overview else self.active_tab + 1

    class Config:
        frozen = True


class _Action(BaseModel):
    class Config:
        frozen = True


class SelectTab(_Action):
    index: int


class ShowOverview(_Action):
    pass


class FocusInput(_Action):
    item_id: str


class BlurInput(_Action):
    pass


class AdvanceInput(_Action):
    order: tuple[str, ...]


class EnterQuantity(_Action):
    item_id: str
    value: Union[int, float, str, None] = None


class ToggleOnlyReorder(_Action):
    pass


class RequestReset(_Action):
    pass


class CancelReset(_Action):
    pass


class ConfirmReset(_Action):
    pass


class OpenDetail(_Action):
    name: str


class CloseDetail(_Action):
    pass


Action = Union[
    SelectTab,
    ShowOverview,
    FocusInput,
    BlurInput,
    AdvanceInput,
    EnterQuantity,
    ToggleOnlyReorder,
    RequestReset,
    CancelReset,
    ConfirmReset,
    OpenDetail,
    CloseDetail,
]


def next_input_id(current: Optional[str], order: Sequence[str]) -> Optional[str]:
    """The entry field after `current`, wrapping around to the first one."""
    if not order:
        return None
    if current not in order:
        return order[0]
    return order[(list(order).index(current) + 1) % len(order)]


def reduce(state: AppState, action: Action) -> AppState:
    if isinstance(action, SelectTab):
        index = min(max(action.index, 0), state.location_count)
        return state.model_copy(update={"active_tab": index, "active_input_id": None})

    if isinstance(action, ShowOverview):
        return state.model_copy(
            update={"active_tab": state.location_count, "active_input_id": None}
        )

    if isinstance(action, (FocusInput, EnterQuantity)):
        return state.model_copy(update={"active_input_id": action.item_id})

    if isinstance(action, BlurInput):
        return state.model_copy(update={"active_input_id": None})

    if isinstance(action, AdvanceInput):
        return state.model_copy(
            update={"active_input_id": next_input_id(state.active_input_id, action.order)}
        )

    if isinstance(action, ToggleOnlyReorder):
        return state.model_copy(update={"only_reorder": not state.only_reorder})

    if isinstance(action, RequestReset):
        return state.model_copy(update={"show_reset_confirmation": True})

    if isinstance(action, (CancelReset, ConfirmReset)):
        return state.model_copy(update={"show_reset_confirmation": False})

    if isinstance(action, OpenDetail):
        return state.model_copy(update={"selected_product": action.name})

    if isinstance(action, CloseDetail):
        return state.model_copy(update={"selected_product": None})

    raise TypeError(f"Unknown action: {action!r}")
