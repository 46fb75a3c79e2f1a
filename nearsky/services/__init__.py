"""Service-layer helpers for the NearSky tracker."""

from .mailbox import ResultMailbox
from .selector import Selection, select_closest
from .tracker import AlertCallback, Tracker
from .tracking import PROXIMITY_ALERT_KM, AlertState, TrackingPhase, TrackingState

__all__ = [
    "AlertCallback",
    "AlertState",
    "PROXIMITY_ALERT_KM",
    "ResultMailbox",
    "Selection",
    "TrackingPhase",
    "TrackingState",
    "Tracker",
    "select_closest",
]
