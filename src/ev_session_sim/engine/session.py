"""Session calculation engine.

Pure arithmetic: vehicle + session inputs → SessionResult. No state is
kept between calls; the same inputs always give the same result.
"""

from __future__ import annotations

import logging
import math

from ev_session_sim.config.session import SessionInputs
from ev_session_sim.config.vehicle import VehicleParameters
from ev_session_sim.engine.units import charging_efficiency, convert_distance, distance_unit_label
from ev_session_sim.models.results import DisplayDistances, SessionResult

logger = logging.getLogger(__name__)


class VehicleConfigurationError(ValueError):
    """Vehicle record cannot support the percentage / range math."""


def validate_vehicle(vehicle: VehicleParameters) -> None:
    """Reject vehicles with non-positive or non-finite capacity or range.

    ``VehicleParameters`` validation already enforces this; the check here
    catches records built with ``model_construct`` or otherwise unvalidated.
    """
    if not (vehicle.battery_capacity_kwh > 0 and math.isfinite(vehicle.battery_capacity_kwh)):
        raise VehicleConfigurationError(
            f"battery_capacity_kwh must be finite and > 0, got {vehicle.battery_capacity_kwh}"
        )
    if not (vehicle.range_at_full_miles > 0 and math.isfinite(vehicle.range_at_full_miles)):
        raise VehicleConfigurationError(
            f"range_at_full_miles must be finite and > 0, got {vehicle.range_at_full_miles}"
        )


def compute_session(vehicle: VehicleParameters, inputs: SessionInputs) -> SessionResult:
    """Compute every derived quantity of one charging session."""
    validate_vehicle(vehicle)

    capacity = vehicle.battery_capacity_kwh
    speed = inputs.charging_speed_kw
    hours = inputs.time_spent_hours

    # ── Energy ─────────────────────────────────────────────────────────
    efficiency = charging_efficiency(speed)
    starting_kwh = (inputs.starting_soc_pct / 100) * capacity
    remaining_capacity = max(0.0, capacity - starting_kwh)
    effective_power_kw = speed * efficiency
    max_possible_energy = hours * effective_power_kw
    # The pack can never be filled past 100%.
    energy_delivered = min(max_possible_energy, remaining_capacity)

    # ── Time split ─────────────────────────────────────────────────────
    # Zero power never fills the pack: all plugged-in time counts as charging.
    if effective_power_kw > 0:
        time_to_full: float | None = remaining_capacity / effective_power_kw
        charging_time = min(hours, time_to_full)
        idle_time = max(0.0, hours - time_to_full)
    else:
        time_to_full = None
        charging_time = hours
        idle_time = 0.0

    # ── Cost ───────────────────────────────────────────────────────────
    charging_cost = energy_delivered * inputs.price_per_kwh
    idle_fee = idle_time * 60 * inputs.idle_fee_per_minute
    total_cost = charging_cost + idle_fee

    # ── Ending state ───────────────────────────────────────────────────
    ending_kwh = min(capacity, starting_kwh + energy_delivered)
    ending_soc = (ending_kwh / capacity) * 100

    # ── Range (miles) ──────────────────────────────────────────────────
    range_at_full = vehicle.range_at_full_miles
    range_added = (energy_delivered / capacity) * range_at_full
    expected_range = (ending_soc / 100) * range_at_full
    starting_range = (inputs.starting_soc_pct / 100) * range_at_full

    unit = inputs.distance_unit
    display = DisplayDistances(
        unit=unit,
        unit_label=distance_unit_label(unit),
        starting_range=convert_distance(starting_range, unit),
        range_added=convert_distance(range_added, unit),
        expected_range=convert_distance(expected_range, unit),
    )

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "session: soc %.1f%%→%.1f%% energy=%.3f kWh charging=%.3f h idle=%.3f h total=%.2f",
            inputs.starting_soc_pct, ending_soc, energy_delivered,
            charging_time, idle_time, total_cost,
        )

    return SessionResult(
        efficiency=efficiency,
        starting_kwh=starting_kwh,
        remaining_capacity_kwh=remaining_capacity,
        max_possible_energy_kwh=max_possible_energy,
        energy_delivered_kwh=energy_delivered,
        ending_kwh=ending_kwh,
        starting_soc_pct=inputs.starting_soc_pct,
        ending_soc_pct=ending_soc,
        time_spent_hours=hours,
        time_to_full_hours=time_to_full,
        charging_time_hours=charging_time,
        idle_time_hours=idle_time,
        charging_cost=charging_cost,
        idle_fee=idle_fee,
        total_cost=total_cost,
        starting_range_miles=starting_range,
        range_added_miles=range_added,
        expected_range_miles=expected_range,
        display=display,
    )
