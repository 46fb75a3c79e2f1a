import pytest

from nearsky.models.aircraft import (
    NO_AIRCRAFT_DISTANCE_KM,
    AircraftSnapshot,
    EnrichmentRecord,
    TrackedAircraft,
)
from nearsky.models.geo import Coordinate
from nearsky.models.tracking import CycleStatus
from nearsky.services.selector import Selection, select_closest
from nearsky.services.tracking import TrackingPhase, TrackingState

OBSERVER = Coordinate(latitude=51.5074, longitude=-0.1278)


def _selection(distance: float, hex_code: str = "abc123") -> Selection:
    snapshot = AircraftSnapshot(
        hex=hex_code,
        flight="TEST1",
        squawk="1234",
        position=Coordinate(latitude=51.5, longitude=-0.1),
    )
    return Selection(snapshot=snapshot, distance_km=distance, bearing_deg=45.0)


def test_initial_state_is_idle_waiting():
    state = TrackingState()

    assert state.phase is TrackingPhase.IDLE
    assert state.current == TrackedAircraft.waiting()
    assert state.current.present is False
    assert state.current.distance_km == NO_AIRCRAFT_DISTANCE_KM
    assert state.alert.armed is False


def test_alert_fires_once_per_approach():
    state = TrackingState(alert_radius_km=5.0)
    distances = [12.0, 6.0, 4.9, 3.0, 1.2, 4.99, 5.0, 7.0, 4.0, 2.0]

    edges = [state.apply(_selection(d)).alert_triggered for d in distances]

    assert edges == [False, False, True, False, False, False, False, False, True, False]


def test_alert_fires_on_first_cycle_when_already_close():
    state = TrackingState()

    result = state.apply(_selection(0.16))

    assert result.alert_triggered is True
    assert result.alert_active is True
    assert state.alert.armed is True
    assert state.alert.last_distance_km == pytest.approx(0.16)


def test_threshold_distance_does_not_alert():
    state = TrackingState(alert_radius_km=5.0)

    result = state.apply(_selection(5.0))

    assert result.alert_triggered is False
    assert result.alert_active is False


def test_no_aircraft_resets_alert():
    state = TrackingState()
    assert state.apply(_selection(1.0)).alert_triggered is True

    result = state.apply(None)

    assert result.status is CycleStatus.NO_AIRCRAFT
    assert result.aircraft == TrackedAircraft.no_aircraft()
    assert result.aircraft.hex == ""
    assert result.aircraft.distance_km == NO_AIRCRAFT_DISTANCE_KM
    assert state.alert.armed is False
    assert state.apply(_selection(1.0)).alert_triggered is True


def test_feed_failure_keeps_previous_aircraft():
    state = TrackingState()
    previous = state.apply(_selection(8.0), EnrichmentRecord(registration="G-ABCD"))

    result = state.record_failure(RuntimeError("connection refused"))

    assert result.status is CycleStatus.FEED_ERROR
    assert result.aircraft == previous.aircraft
    assert result.error == "connection refused"
    assert result.alert_triggered is False
    assert state.current == previous.aircraft


def test_feed_failure_does_not_disturb_alert():
    state = TrackingState()
    state.apply(_selection(2.0))

    failed = state.record_failure("timeout")
    after = state.apply(_selection(1.5))

    assert failed.alert_active is True
    assert after.alert_triggered is False


def test_feed_failure_before_first_poll_keeps_waiting_state():
    state = TrackingState()

    result = state.record_failure("timeout")

    assert result.aircraft == TrackedAircraft.waiting()
    assert state.phase is TrackingPhase.IDLE


def test_tracked_aircraft_merges_enrichment_and_geometry():
    state = TrackingState()
    enrichment = EnrichmentRecord(registration="G-EUPT", aircraft_type="A319", operator="BA")

    aircraft = state.apply(_selection(3.2), enrichment).aircraft

    assert aircraft.present is True
    assert aircraft.hex == "abc123"
    assert aircraft.flight == "TEST1"
    assert aircraft.latitude == pytest.approx(51.5)
    assert aircraft.longitude == pytest.approx(-0.1)
    assert aircraft.distance_km == pytest.approx(3.2)
    assert aircraft.bearing_deg == pytest.approx(45.0)
    assert aircraft.registration == "G-EUPT"
    assert aircraft.aircraft_type == "A319"
    assert aircraft.operator == "BA"
    assert aircraft.squawk_description == "Discrete Code"


def test_missing_enrichment_defaults_to_na():
    state = TrackingState()

    aircraft = state.apply(_selection(8.0)).aircraft

    assert (aircraft.registration, aircraft.aircraft_type, aircraft.operator) == (
        "N/A",
        "N/A",
        "N/A",
    )


def test_each_cycle_replaces_the_aircraft():
    state = TrackingState()
    first = state.apply(_selection(8.0)).aircraft

    second = state.apply(_selection(7.0)).aircraft

    assert first is not second
    assert first.distance_km == pytest.approx(8.0)


@pytest.mark.parametrize(
    "position, distance, alert",
    [
        ((51.4700, -0.4543), 22.98, False),
        ((51.5080, -0.1300), 0.166, True),
    ],
)
def test_london_examples(position, distance, alert):
    state = TrackingState()
    snapshot = AircraftSnapshot(
        hex="abc123", position=Coordinate(latitude=position[0], longitude=position[1])
    )

    result = state.apply(select_closest([snapshot], OBSERVER))

    assert result.aircraft.distance_km == pytest.approx(distance, abs=0.1)
    assert result.alert_triggered is alert


def test_state_holds_only_current_aircraft_between_cycles():
    state = TrackingState(alert_radius_km=5.0)

    first = state.apply(_selection(3.0, "aaa111"))
    failed = state.record_failure("feed down")

    assert failed.aircraft == first.aircraft
    assert state.current == first.aircraft
    assert not hasattr(state, "last_result")
