"""
Dashboard view state.

The whole UI state is one frozen ViewState. Every change goes through
reduce(state, event), a pure function, so the flows can be tested without
any rendering.

Two slots hold fetched data:
- OWN: the user's position (or the fallback)
- SELECTED: the last point clicked on the map

Each fetch carries a sequence number. Only the newest request for a slot may
update it; slower, superseded responses are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from itertools import count
from typing import Iterator, Optional, Tuple, Union

from ..schemas import CurrentWeather, Forecast
from .units import TemperatureUnit

Location = Tuple[float, float]


class Tab(str, Enum):
    CURRENT = "current"
    SELECTED = "selected"
    MAP = "map"


class SlotName(str, Enum):
    OWN = "own"
    SELECTED = "selected"


@dataclass(frozen=True)
class Slot:
    weather: Optional[CurrentWeather] = None
    forecast: Optional[Forecast] = None
    error: str = ""
    loading: bool = False
    latest_seq: int = 0
    location: Optional[Location] = None
    pending_location: Optional[Location] = None

    @property
    def has_data(self) -> bool:
        return self.weather is not None


@dataclass(frozen=True)
class ViewState:
    own: Slot = field(default_factory=Slot)
    selected: Slot = field(default_factory=Slot)
    active_tab: Tab = Tab.CURRENT
    unit: TemperatureUnit = TemperatureUnit.CELSIUS
    advisory: str = ""
    own_location: Optional[Location] = None

    def slot(self, name: SlotName) -> Slot:
        return self.own if name is SlotName.OWN else self.selected

    @property
    def loading(self) -> bool:
        return self.own.loading or self.selected.loading


# -------------------------
# Events
# -------------------------

@dataclass(frozen=True)
class LocationResolved:
    location: Location
    advisory: Optional[str] = None


@dataclass(frozen=True)
class FetchStarted:
    slot: SlotName
    seq: int
    location: Location


@dataclass(frozen=True)
class FetchSucceeded:
    slot: SlotName
    seq: int
    weather: CurrentWeather
    forecast: Forecast


@dataclass(frozen=True)
class FetchFailed:
    slot: SlotName
    seq: int
    message: str


@dataclass(frozen=True)
class TabSelected:
    tab: Tab


@dataclass(frozen=True)
class UnitToggled:
    pass


Event = Union[LocationResolved, FetchStarted, FetchSucceeded, FetchFailed, TabSelected, UnitToggled]


def sequence() -> Iterator[int]:
    """Monotonically increasing request numbers, starting at 1."""
    return count(1)


def _with_slot(state: ViewState, name: SlotName, slot: Slot) -> ViewState:
    if name is SlotName.OWN:
        return replace(state, own=slot)
    return replace(state, selected=slot)


def reduce(state: ViewState, event: Event) -> ViewState:
    """Return the state after `event`. Never mutates `state`."""
    if isinstance(event, LocationResolved):
        return replace(state, own_location=event.location, advisory=event.advisory or "")

    if isinstance(event, FetchStarted):
        slot = state.slot(event.slot)
        return _with_slot(state, event.slot, replace(slot, loading=True, latest_seq=event.seq, pending_location=event.location))

    if isinstance(event, FetchSucceeded):
        slot = state.slot(event.slot)
        if event.seq != slot.latest_seq:
            return state
        # weather and forecast land together or not at all
        new_state = _with_slot(
            state,
            event.slot,
            replace(
                slot,
                weather=event.weather,
                forecast=event.forecast,
                error="",
                loading=False,
                location=slot.pending_location,
            ),
        )
        if event.slot is SlotName.SELECTED:
            new_state = replace(new_state, active_tab=Tab.SELECTED)
        return new_state

    if isinstance(event, FetchFailed):
        slot = state.slot(event.slot)
        if event.seq != slot.latest_seq:
            return state
        return _with_slot(
            state,
            event.slot,
            replace(slot, weather=None, forecast=None, error=event.message, loading=False),
        )

    if isinstance(event, TabSelected):
        # The "Selected Location" tab is disabled until something was picked
        if event.tab is Tab.SELECTED and not state.selected.has_data:
            return state
        return replace(state, active_tab=event.tab)

    if isinstance(event, UnitToggled):
        return replace(state, unit=state.unit.toggle())

    raise TypeError(f"Unknown event: {event!r}")
