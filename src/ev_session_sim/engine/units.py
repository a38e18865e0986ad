"""Unit & efficiency primitives.

Pure lookups and conversions shared by the session engine and the hosts:
  - charging efficiency by power tier
  - charging level presets (L1 / L2 / DCFC1–4)
  - miles ↔ km
  - "Xh Ym" time formatting
  - starting-SoC input modes (percent / kWh / range)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ev_session_sim.config.session import DistanceUnit, SliderBounds, SoCInputMode
from ev_session_sim.config.vehicle import VehicleParameters

MILES_TO_KM = 1.60934

# (upper bound kW, efficiency); the first tier whose bound exceeds the speed wins.
# Upper bounds are strict: exactly 2 kW is L2, exactly 20 kW is DC.
_EFFICIENCY_TIERS: tuple[tuple[float, float], ...] = (
    (2.0, 0.75),
    (20.0, 0.90),
    (math.inf, 0.97),
)


def charging_efficiency(speed_kw: float) -> float:
    """Wall-to-battery efficiency for a charging power (kW).

    Three tiers, no interpolation:
      [0, 2)   → 0.75  (Level 1)
      [2, 20)  → 0.90  (Level 2)
      [20, ∞)  → 0.97  (DC fast charging)
    """
    if speed_kw < 0:
        raise ValueError(f"charging speed must be non-negative, got {speed_kw}")
    for upper, efficiency in _EFFICIENCY_TIERS:
        if speed_kw < upper:
            return efficiency
    return _EFFICIENCY_TIERS[-1][1]


# ═══════════════════════════════════════════════════════════════════════════
# Charging levels
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ChargingLevel:
    """One charger class offered as a preset."""

    key: str
    label: str
    min_kw: float
    max_kw: float
    typical_kw: float

    @property
    def range_text(self) -> str:
        return f"{self.min_kw:g}-{self.max_kw:g} kW"

    @property
    def efficiency(self) -> float:
        return charging_efficiency(self.typical_kw)


CHARGING_LEVELS: tuple[ChargingLevel, ...] = (
    ChargingLevel("L1", "L1", 0.0, 1.9, 1.0),
    ChargingLevel("L2", "L2", 2.0, 19.2, 11.0),
    ChargingLevel("DCFC1", "⚡", 20.0, 75.0, 50.0),
    ChargingLevel("DCFC2", "⚡⚡", 75.0, 150.0, 110.0),
    ChargingLevel("DCFC3", "⚡⚡⚡", 150.0, 250.0, 200.0),
    ChargingLevel("DCFC4", "⚡⚡⚡⚡", 250.0, 500.0, 350.0),
)

_LEVELS_BY_KEY = {level.key: level for level in CHARGING_LEVELS}


def get_charging_level(key: str) -> ChargingLevel:
    try:
        return _LEVELS_BY_KEY[key]
    except KeyError:
        raise ValueError(
            f"unknown charging level {key!r}; expected one of {sorted(_LEVELS_BY_KEY)}"
        ) from None


def charging_level_for(speed_kw: float) -> ChargingLevel:
    """Classify a speed into a level. Upper bounds are inclusive (19.2 kW is still L2)."""
    for level in CHARGING_LEVELS[:-1]:
        if speed_kw <= level.max_kw:
            return level
    return CHARGING_LEVELS[-1]


def speed_for_level(key: str, max_kw: float | None = None) -> float:
    """Typical speed for a level preset, capped at the slider maximum."""
    typical = get_charging_level(key).typical_kw
    return typical if max_kw is None else min(typical, max_kw)


def levels_within(max_kw: float) -> list[ChargingLevel]:
    """Levels reachable with a slider that tops out at ``max_kw``."""
    return [level for level in CHARGING_LEVELS if level.min_kw < max_kw]


# ═══════════════════════════════════════════════════════════════════════════
# Distance
# ═══════════════════════════════════════════════════════════════════════════

def convert_distance(miles: float, unit: DistanceUnit) -> float:
    """Miles → display unit."""
    if unit == "km":
        return miles * MILES_TO_KM
    return miles


def convert_to_miles(value: float, unit: DistanceUnit) -> float:
    """Display unit → miles."""
    if unit == "km":
        return value / MILES_TO_KM
    return value


def distance_unit_label(unit: DistanceUnit) -> str:
    return "km" if unit == "km" else "mi"


def distance_unit_name(unit: DistanceUnit) -> str:
    return "Kilometers" if unit == "km" else "Miles"


# ═══════════════════════════════════════════════════════════════════════════
# Time
# ═══════════════════════════════════════════════════════════════════════════

def format_time_hours_minutes(hours: float) -> str:
    """Render a duration as ``"2h 15m"``, ``"45m"`` or ``"3h"``.

    Minutes that round up to 60 carry into the hour, so 0.9917 h is "1h",
    never "0h 60m".
    """
    h = math.floor(hours)
    m = round((hours - h) * 60)
    if m >= 60:
        h += 1
        m -= 60
    if h == 0:
        return f"{m}m"
    if m == 0:
        return f"{h}h"
    return f"{h}h {m}m"


# ═══════════════════════════════════════════════════════════════════════════
# Starting-SoC input modes
# ═══════════════════════════════════════════════════════════════════════════

def soc_to_mode_value(soc_pct: float, mode: SoCInputMode, vehicle: VehicleParameters) -> float:
    """Express a state of charge as the quantity shown by the input mode."""
    if mode == "kwh":
        return (soc_pct / 100) * vehicle.battery_capacity_kwh
    if mode == "range":
        return (soc_pct / 100) * vehicle.range_at_full_miles
    return soc_pct


def mode_value_to_soc(value: float, mode: SoCInputMode, vehicle: VehicleParameters) -> float:
    """Inverse of ``soc_to_mode_value``; the result is clamped to [0, 100]."""
    if mode == "kwh":
        pct = (value / vehicle.battery_capacity_kwh) * 100
    elif mode == "range":
        pct = (value / vehicle.range_at_full_miles) * 100
    else:
        pct = value
    return max(0.0, min(100.0, pct))


def soc_mode_bounds(mode: SoCInputMode, vehicle: VehicleParameters) -> SliderBounds:
    if mode == "kwh":
        return SliderBounds(min=0, max=vehicle.battery_capacity_kwh, step=0.1)
    if mode == "range":
        return SliderBounds(min=0, max=vehicle.range_at_full_miles, step=1)
    return SliderBounds(min=0, max=100, step=1)


def format_soc_mode_value(value: float, mode: SoCInputMode) -> str:
    if mode == "kwh":
        return f"{value:.1f} kWh"
    if mode == "range":
        return f"{value:.0f} mi"
    return f"{value:.0f}%"
