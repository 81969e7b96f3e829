"""
WeatherExplorer: the dashboard's orchestration.

- on start: ask for geolocation once, then load "my location"
- on a map click: load the selected point
- tab / unit changes only touch the view state

The two loads are independent flows with their own slot and error; either can
run while the other is in flight.
"""

from __future__ import annotations

import logging
from typing import Optional

from .geolocation import LocationProvider, acquire_location
from .proxy import ProxyClient, ProxyError
from .render import build_dashboard, build_view
from .state import (
    Event,
    FetchFailed,
    FetchStarted,
    FetchSucceeded,
    LocationResolved,
    SlotName,
    Tab,
    TabSelected,
    UnitToggled,
    ViewState,
    reduce,
    sequence,
)

logger = logging.getLogger(__name__)

SELECTED_FAILURE_MESSAGE = "Could not fetch data. Please try again."


class WeatherExplorer:
    def __init__(
        self,
        proxy: ProxyClient,
        geolocation: Optional[LocationProvider] = None,
        state: Optional[ViewState] = None,
    ):
        self.proxy = proxy
        self.geolocation = geolocation
        self.state = state if state is not None else ViewState()
        self._seq = sequence()

    def dispatch(self, event: Event) -> ViewState:
        self.state = reduce(self.state, event)
        return self.state

    async def start(self) -> ViewState:
        """Resolve the user's position (or the fallback) and load its weather."""
        location, advisory = acquire_location(self.geolocation)
        self.dispatch(LocationResolved(location, advisory))
        return await self.load(SlotName.OWN, *location)

    async def select_location(self, lat: float, lon: float) -> ViewState:
        """A click on the map."""
        return await self.load(SlotName.SELECTED, lat, lon)

    async def load(self, slot: SlotName, lat: float, lon: float) -> ViewState:
        seq = next(self._seq)
        self.dispatch(FetchStarted(slot, seq, (lat, lon)))
        try:
            weather, forecast = await self.proxy.fetch_pair(lat, lon)
        except ProxyError as e:
            logger.warning("Fetch #%d for %s slot at %s,%s failed: %s", seq, slot.value, lat, lon, e)
            return self.dispatch(FetchFailed(slot, seq, _failure_message(slot, e)))

        if seq != self.state.slot(slot).latest_seq:
            logger.debug("Discarding stale fetch #%d for %s slot", seq, slot.value)
            return self.state
        return self.dispatch(FetchSucceeded(slot, seq, weather, forecast))

    def switch_tab(self, tab: Tab) -> ViewState:
        return self.dispatch(TabSelected(tab))

    def toggle_unit(self) -> ViewState:
        return self.dispatch(UnitToggled())

    def render(self) -> dict:
        return build_view(self.state)

    def render_dashboard(self) -> dict:
        return build_dashboard(self.state)


def _failure_message(slot: SlotName, error: ProxyError) -> str:
    if slot is SlotName.OWN:
        return f"Error fetching data: {error}"
    return SELECTED_FAILURE_MESSAGE
