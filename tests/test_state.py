import pytest

from weather_explorer.client.state import (
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
from weather_explorer.client.units import TemperatureUnit
from weather_explorer.schemas import CurrentWeather, Forecast

from .conftest import current_payload, forecast_payload


@pytest.fixture
def pair():
    return CurrentWeather.model_validate(current_payload()), Forecast.model_validate(forecast_payload())


def _loaded(state, slot, seq, pair, location=(1.0, 2.0)):
    state = reduce(state, FetchStarted(slot, seq, location))
    return reduce(state, FetchSucceeded(slot, seq, *pair))


def test_initial_state():
    state = ViewState()
    assert state.active_tab is Tab.CURRENT
    assert state.unit is TemperatureUnit.CELSIUS
    assert not state.loading
    assert state.own.weather is None


def test_location_resolved_sets_advisory():
    state = reduce(ViewState(), LocationResolved((40.7128, -74.0060), "Location access denied. Using default location."))
    assert state.own_location == (40.7128, -74.0060)
    assert state.advisory.startswith("Location access denied")


def test_fetch_started_marks_loading():
    state = reduce(ViewState(), FetchStarted(SlotName.OWN, 1, (1.0, 2.0)))
    assert state.own.loading
    assert state.own.latest_seq == 1
    assert state.loading
    assert not state.selected.loading


def test_success_stores_pair_together(pair):
    state = _loaded(ViewState(), SlotName.OWN, 1, pair)
    assert state.own.weather is pair[0]
    assert state.own.forecast is pair[1]
    assert state.own.location == (1.0, 2.0)
    assert not state.own.loading
    assert state.active_tab is Tab.CURRENT


def test_selected_success_switches_tab(pair):
    state = _loaded(ViewState(), SlotName.SELECTED, 1, pair, location=(10.0, 20.0))
    assert state.active_tab is Tab.SELECTED
    assert state.selected.location == (10.0, 20.0)


def test_failure_clears_slot(pair):
    state = _loaded(ViewState(), SlotName.SELECTED, 1, pair)
    state = reduce(state, FetchStarted(SlotName.SELECTED, 2, (3.0, 4.0)))
    state = reduce(state, FetchFailed(SlotName.SELECTED, 2, "Could not fetch data. Please try again."))

    assert state.selected.weather is None
    assert state.selected.forecast is None
    assert state.selected.error == "Could not fetch data. Please try again."
    assert not state.selected.loading


def test_failure_leaves_other_slot_alone(pair):
    state = _loaded(ViewState(), SlotName.OWN, 1, pair)
    state = reduce(state, FetchStarted(SlotName.SELECTED, 2, (3.0, 4.0)))
    state = reduce(state, FetchFailed(SlotName.SELECTED, 2, "boom"))

    assert state.own.weather is pair[0]
    assert state.own.error == ""


def test_success_clears_previous_error(pair):
    state = reduce(ViewState(), FetchStarted(SlotName.OWN, 1, (1.0, 2.0)))
    state = reduce(state, FetchFailed(SlotName.OWN, 1, "boom"))
    state = _loaded(state, SlotName.OWN, 2, pair)
    assert state.own.error == ""


def test_stale_success_is_discarded(pair):
    older = CurrentWeather.model_validate(current_payload(name="Older"))
    state = reduce(ViewState(), FetchStarted(SlotName.SELECTED, 1, (1.0, 1.0)))
    state = reduce(state, FetchStarted(SlotName.SELECTED, 2, (2.0, 2.0)))
    state = reduce(state, FetchSucceeded(SlotName.SELECTED, 2, *pair))
    state = reduce(state, FetchSucceeded(SlotName.SELECTED, 1, older, pair[1]))

    assert state.selected.weather.name == "London"
    assert state.selected.location == (2.0, 2.0)


def test_stale_failure_is_discarded(pair):
    state = reduce(ViewState(), FetchStarted(SlotName.OWN, 1, (1.0, 1.0)))
    state = reduce(state, FetchStarted(SlotName.OWN, 2, (2.0, 2.0)))
    state = reduce(state, FetchSucceeded(SlotName.OWN, 2, *pair))
    after = reduce(state, FetchFailed(SlotName.OWN, 1, "late failure"))

    assert after is state


def test_selected_tab_disabled_without_data(pair):
    state = reduce(ViewState(), TabSelected(Tab.SELECTED))
    assert state.active_tab is Tab.CURRENT

    state = _loaded(state, SlotName.SELECTED, 1, pair)
    state = reduce(state, TabSelected(Tab.MAP))
    state = reduce(state, TabSelected(Tab.SELECTED))
    assert state.active_tab is Tab.SELECTED


def test_tab_switch_keeps_data(pair):
    state = _loaded(ViewState(), SlotName.OWN, 1, pair)
    state = reduce(state, TabSelected(Tab.MAP))
    assert state.own.weather is pair[0]
    assert state.own.latest_seq == 1


def test_unit_toggle_does_not_touch_snapshots(pair):
    state = _loaded(ViewState(), SlotName.OWN, 1, pair)
    toggled = reduce(state, UnitToggled())

    assert toggled.unit is TemperatureUnit.FAHRENHEIT
    assert toggled.own.weather.main.temp == 12.3
    assert reduce(toggled, UnitToggled()).unit is TemperatureUnit.CELSIUS


def test_reduce_does_not_mutate(pair):
    state = ViewState()
    reduce(state, FetchStarted(SlotName.OWN, 1, (1.0, 2.0)))
    assert state == ViewState()


def test_sequence_is_monotonic():
    seq = sequence()
    assert [next(seq) for _ in range(3)] == [1, 2, 3]


def test_unknown_event():
    with pytest.raises(TypeError):
        reduce(ViewState(), object())
