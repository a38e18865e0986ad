"""Configuration models — vehicle record, session inputs, slider bounds."""

from ev_session_sim.config.vehicle import DEFAULT_VEHICLE, VehicleParameters
from ev_session_sim.config.session import (
    DistanceUnit,
    SessionBounds,
    SessionInputs,
    SliderBounds,
    SoCInputMode,
)
from ev_session_sim.config.loader import SessionFile, dump_session_file, load_session_file
from ev_session_sim.config.store import VehicleSettingsStore

__all__ = [
    "DEFAULT_VEHICLE",
    "VehicleParameters",
    "DistanceUnit",
    "SoCInputMode",
    "SessionInputs",
    "SliderBounds",
    "SessionBounds",
    "SessionFile",
    "load_session_file",
    "dump_session_file",
    "VehicleSettingsStore",
]
