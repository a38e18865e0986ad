"""Engine — pure session calculations, scenario narratives and unit primitives."""

from ev_session_sim.engine.units import (
    CHARGING_LEVELS,
    ChargingLevel,
    charging_efficiency,
    charging_level_for,
    convert_distance,
    convert_to_miles,
    distance_unit_label,
    distance_unit_name,
    format_soc_mode_value,
    format_time_hours_minutes,
    get_charging_level,
    levels_within,
    mode_value_to_soc,
    soc_mode_bounds,
    soc_to_mode_value,
    speed_for_level,
)
from ev_session_sim.engine.session import (
    VehicleConfigurationError,
    compute_session,
    validate_vehicle,
)
from ev_session_sim.engine.scenarios import SCENARIO_RULES, ScenarioRule, describe_scenario, match_scenario_rule
from ev_session_sim.engine.timeline import session_timeline

__all__ = [
    "CHARGING_LEVELS",
    "ChargingLevel",
    "charging_efficiency",
    "charging_level_for",
    "get_charging_level",
    "speed_for_level",
    "levels_within",
    "convert_distance",
    "convert_to_miles",
    "distance_unit_label",
    "distance_unit_name",
    "format_time_hours_minutes",
    "soc_to_mode_value",
    "mode_value_to_soc",
    "soc_mode_bounds",
    "format_soc_mode_value",
    "compute_session",
    "validate_vehicle",
    "VehicleConfigurationError",
    "SCENARIO_RULES",
    "ScenarioRule",
    "describe_scenario",
    "match_scenario_rule",
    "session_timeline",
]
