"""Result models — session output contracts."""

from ev_session_sim.models.results import DisplayDistances, SessionResult, TimelinePoint

__all__ = [
    "DisplayDistances",
    "SessionResult",
    "TimelinePoint",
]
