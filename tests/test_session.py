"""Tests for engine/session.py — hand-calculated expected values."""

from __future__ import annotations

import itertools

import pytest

from ev_session_sim.config import SessionInputs, VehicleParameters
from ev_session_sim.engine.session import (
    VehicleConfigurationError,
    compute_session,
    validate_vehicle,
)


# ═══════════════════════════════════════════════════════════════════════════
# Reference session: 50 kW for 1 h from 20%
# ═══════════════════════════════════════════════════════════════════════════

def test_efficiency(vehicle: VehicleParameters, dcfc_hour: SessionInputs):
    r = compute_session(vehicle, dcfc_hour)
    assert r.efficiency == 0.97


def test_starting_energy(vehicle: VehicleParameters, dcfc_hour: SessionInputs):
    r = compute_session(vehicle, dcfc_hour)
    # 20% × 84 = 16.8 kWh; headroom 84 − 16.8 = 67.2 kWh
    assert r.starting_kwh == pytest.approx(16.8)
    assert r.remaining_capacity_kwh == pytest.approx(67.2)


def test_energy_delivered_under_cap(vehicle: VehicleParameters, dcfc_hour: SessionInputs):
    r = compute_session(vehicle, dcfc_hour)
    # 1 h × 50 kW × 0.97 = 48.5 kWh < 67.2 kWh headroom
    assert r.max_possible_energy_kwh == pytest.approx(48.5)
    assert r.energy_delivered_kwh == pytest.approx(48.5)


def test_ending_state(vehicle: VehicleParameters, dcfc_hour: SessionInputs):
    r = compute_session(vehicle, dcfc_hour)
    # 16.8 + 48.5 = 65.3 kWh → 65.3 / 84 = 77.74%
    assert r.ending_kwh == pytest.approx(65.3)
    assert r.ending_soc_pct == pytest.approx(77.738, abs=1e-3)


def test_cost_without_idle(vehicle: VehicleParameters, dcfc_hour: SessionInputs):
    r = compute_session(vehicle, dcfc_hour)
    # 48.5 kWh × $0.25 = $12.125
    assert r.charging_cost == pytest.approx(12.125)
    assert r.idle_time_hours == 0
    assert r.idle_fee == 0
    assert r.total_cost == pytest.approx(12.125)
    assert not r.has_idle_time


def test_time_to_full(vehicle: VehicleParameters, dcfc_hour: SessionInputs):
    r = compute_session(vehicle, dcfc_hour)
    # 67.2 / (50 × 0.97) = 1.3855 h > 1 h session
    assert r.time_to_full_hours == pytest.approx(67.2 / 48.5)
    assert r.charging_time_hours == pytest.approx(1.0)


def test_range_in_miles(vehicle: VehicleParameters, dcfc_hour: SessionInputs):
    r = compute_session(vehicle, dcfc_hour)
    # start 20% × 320 = 64 mi; added 48.5 / 84 × 320 = 184.76 mi
    assert r.starting_range_miles == pytest.approx(64)
    assert r.range_added_miles == pytest.approx(48.5 / 84 * 320)
    assert r.expected_range_miles == pytest.approx(65.3 / 84 * 320)


def test_display_distances_in_km(vehicle: VehicleParameters, dcfc_hour: SessionInputs):
    km_inputs = dcfc_hour.model_copy(update={"distance_unit": "km"})
    r = compute_session(vehicle, km_inputs)
    assert r.display.unit == "km"
    assert r.display.unit_label == "km"
    assert r.display.starting_range == pytest.approx(64 * 1.60934)
    # Stored quantities stay in miles
    assert r.starting_range_miles == pytest.approx(64)


def test_display_distances_in_miles(vehicle: VehicleParameters, dcfc_hour: SessionInputs):
    r = compute_session(vehicle, dcfc_hour)
    assert r.display.unit_label == "mi"
    assert r.display.range_added == r.range_added_miles


# ═══════════════════════════════════════════════════════════════════════════
# Saturation: pack fills mid-session, idle fee applies
# ═══════════════════════════════════════════════════════════════════════════

def test_saturation_caps_energy(vehicle: VehicleParameters, saturating: SessionInputs):
    r = compute_session(vehicle, saturating)
    # Headroom 5% × 84 = 4.2 kWh; 1 h × 350 × 0.97 = 339.5 kWh possible
    assert r.remaining_capacity_kwh == pytest.approx(4.2)
    assert r.max_possible_energy_kwh == pytest.approx(339.5)
    assert r.energy_delivered_kwh == pytest.approx(4.2)
    assert r.ending_kwh == pytest.approx(84)
    assert r.ending_soc_pct == pytest.approx(100)


def test_saturation_idle_path(vehicle: VehicleParameters, saturating: SessionInputs):
    r = compute_session(vehicle, saturating)
    ttf = 4.2 / 339.5
    assert r.time_to_full_hours == pytest.approx(ttf)
    assert r.charging_time_hours == pytest.approx(ttf)
    assert r.idle_time_hours == pytest.approx(1 - ttf)
    assert r.has_idle_time
    # idle fee = idle h × 60 × $0.50
    assert r.idle_fee == pytest.approx((1 - ttf) * 60 * 0.50)
    assert r.charging_cost == pytest.approx(4.2 * 0.25)
    assert r.total_cost == r.charging_cost + r.idle_fee


def test_full_battery_is_all_idle(vehicle: VehicleParameters):
    r = compute_session(vehicle, SessionInputs(starting_soc_pct=100, charging_speed_kw=11, time_spent_hours=2))
    assert r.energy_delivered_kwh == 0
    assert r.charging_time_hours == 0
    assert r.idle_time_hours == pytest.approx(2)


# ═══════════════════════════════════════════════════════════════════════════
# Zero-power and zero-time edges
# ═══════════════════════════════════════════════════════════════════════════

def test_zero_speed_never_fills(vehicle: VehicleParameters):
    r = compute_session(vehicle, SessionInputs(starting_soc_pct=40, charging_speed_kw=0, time_spent_hours=3))
    assert r.time_to_full_hours is None
    assert r.energy_delivered_kwh == 0
    assert r.charging_time_hours == 3
    assert r.idle_time_hours == 0
    assert r.total_cost == 0
    assert r.ending_soc_pct == pytest.approx(40)


def test_zero_time(vehicle: VehicleParameters):
    r = compute_session(vehicle, SessionInputs(starting_soc_pct=40, charging_speed_kw=150, time_spent_hours=0))
    assert r.energy_delivered_kwh == 0
    assert r.charging_time_hours == 0
    assert r.idle_time_hours == 0
    assert r.total_cost == 0


# ═══════════════════════════════════════════════════════════════════════════
# Invariants over a grid of inputs
# ═══════════════════════════════════════════════════════════════════════════

_SOCS = [0, 5, 20, 50, 95, 100]
_SPEEDS = [0, 1.4, 2, 11, 19.9, 20, 50, 150, 350]
_HOURS = [0, 0.1, 0.5, 1, 2.5, 8, 24]


@pytest.mark.parametrize("soc, speed, hours", list(itertools.product(_SOCS, _SPEEDS, _HOURS)))
def test_session_invariants(vehicle: VehicleParameters, soc, speed, hours):
    inputs = SessionInputs(
        starting_soc_pct=soc, charging_speed_kw=speed, time_spent_hours=hours,
        price_per_kwh=0.31, idle_fee_per_minute=0.4,
    )
    r = compute_session(vehicle, inputs)
    eps = 1e-9
    assert 0 <= r.starting_kwh <= vehicle.battery_capacity_kwh + eps
    assert 0 <= r.ending_kwh <= vehicle.battery_capacity_kwh + eps
    assert 0 <= r.ending_soc_pct <= 100 + eps
    assert r.energy_delivered_kwh >= 0
    assert r.charging_time_hours >= 0
    assert r.idle_time_hours >= 0
    assert abs(r.charging_time_hours + r.idle_time_hours - hours) < 1e-9
    assert r.total_cost == r.charging_cost + r.idle_fee
    assert r.ending_soc_pct >= r.starting_soc_pct - eps


def test_is_pure(vehicle: VehicleParameters, dcfc_hour: SessionInputs):
    assert compute_session(vehicle, dcfc_hour) == compute_session(vehicle, dcfc_hour)


# ═══════════════════════════════════════════════════════════════════════════
# Configuration errors
# ═══════════════════════════════════════════════════════════════════════════

def test_zero_capacity_rejected(dcfc_hour: SessionInputs):
    bad = VehicleParameters.model_construct(
        name="broken", battery_capacity_kwh=0.0, range_at_full_miles=300.0,
        max_charging_speed_kw=0.0, time_10_to_80_minutes=0.0,
    )
    with pytest.raises(VehicleConfigurationError, match="battery_capacity_kwh"):
        compute_session(bad, dcfc_hour)


def test_negative_range_rejected(dcfc_hour: SessionInputs):
    bad = VehicleParameters.model_construct(
        name="broken", battery_capacity_kwh=60.0, range_at_full_miles=-1.0,
        max_charging_speed_kw=0.0, time_10_to_80_minutes=0.0,
    )
    with pytest.raises(VehicleConfigurationError, match="range_at_full_miles"):
        compute_session(bad, dcfc_hour)


def test_infinite_capacity_rejected(dcfc_hour: SessionInputs):
    bad = VehicleParameters.model_construct(
        name="broken", battery_capacity_kwh=float("inf"), range_at_full_miles=300.0,
        max_charging_speed_kw=0.0, time_10_to_80_minutes=0.0,
    )
    with pytest.raises(VehicleConfigurationError, match="battery_capacity_kwh"):
        compute_session(bad, dcfc_hour)


def test_validate_vehicle_accepts_default(vehicle: VehicleParameters):
    validate_vehicle(vehicle)


def test_configuration_error_is_value_error():
    assert issubclass(VehicleConfigurationError, ValueError)
