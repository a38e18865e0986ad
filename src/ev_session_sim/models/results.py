"""Result types — the contract between engine, API and dashboard.

Every result is transient: built from the current inputs, shown, and
discarded on the next recomputation. Distances are stored in miles;
``DisplayDistances`` carries the same figures converted for display.
"""

from __future__ import annotations

from pydantic import BaseModel

from ev_session_sim.config.session import DistanceUnit


class DisplayDistances(BaseModel):
    """Range figures converted to the requested display unit."""

    unit: DistanceUnit
    unit_label: str
    """"mi" or "km"."""
    starting_range: float
    range_added: float
    expected_range: float


class SessionResult(BaseModel):
    """Derived state of one charging session."""

    # --- Charging ---
    efficiency: float
    """Tier efficiency looked up from the charging speed (0–1]."""

    # --- Battery energy ---
    starting_kwh: float
    remaining_capacity_kwh: float
    """Headroom at plug-in = capacity − starting energy (≥ 0)."""
    max_possible_energy_kwh: float
    """time × speed × efficiency, before the capacity cap."""
    energy_delivered_kwh: float
    """min(max possible, remaining capacity) — never pushes the pack past 100%."""
    ending_kwh: float

    # --- State of charge ---
    starting_soc_pct: float
    ending_soc_pct: float

    # --- Time split ---
    time_spent_hours: float
    time_to_full_hours: float | None
    """Hours until the pack is full; None when the charger delivers no power."""
    charging_time_hours: float
    idle_time_hours: float
    """Time plugged in after reaching 100% — billed as idle fee."""

    # --- Cost ---
    charging_cost: float
    idle_fee: float
    total_cost: float
    """charging_cost + idle_fee, unrounded."""

    # --- Range (miles) ---
    starting_range_miles: float
    range_added_miles: float
    expected_range_miles: float

    display: DisplayDistances

    @property
    def soc_added_pct(self) -> float:
        return max(0.0, self.ending_soc_pct - self.starting_soc_pct)

    @property
    def has_idle_time(self) -> bool:
        return self.idle_time_hours > 0


class TimelinePoint(BaseModel):
    """Session state after ``elapsed_hours`` of the plug-in period."""

    elapsed_hours: float
    soc_pct: float
    energy_delivered_kwh: float
    charging_cost: float
    idle_fee: float
    total_cost: float
