"""Shared test fixtures — the default vehicle and the reference sessions."""

from __future__ import annotations

import pytest

from ev_session_sim.config import SessionInputs, VehicleParameters


@pytest.fixture
def vehicle() -> VehicleParameters:
    return VehicleParameters(
        name="2025 Hyundai IONIQ 5 SEL RWD",
        battery_capacity_kwh=84,
        range_at_full_miles=320,
        max_charging_speed_kw=350,
        time_10_to_80_minutes=20,
    )


@pytest.fixture
def dcfc_hour() -> SessionInputs:
    """One hour at 50 kW from 20% — stays under the capacity cap."""
    return SessionInputs(
        starting_soc_pct=20,
        charging_speed_kw=50,
        time_spent_hours=1,
        price_per_kwh=0.25,
        idle_fee_per_minute=0.50,
    )


@pytest.fixture
def saturating() -> SessionInputs:
    """One hour at 350 kW from 95% — fills up early and sits idle."""
    return SessionInputs(
        starting_soc_pct=95,
        charging_speed_kw=350,
        time_spent_hours=1,
        price_per_kwh=0.25,
        idle_fee_per_minute=0.50,
    )
