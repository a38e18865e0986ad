"""Session summary — plain-text rendering of a computed session.

Mirrors the summary card of the host UI: progress bar line, scenario story,
battery state, charging details and cost breakdown. Idle lines only appear
when the battery filled up before the driver unplugged.
"""

from __future__ import annotations

from ev_session_sim.config.session import SessionInputs
from ev_session_sim.config.vehicle import VehicleParameters
from ev_session_sim.engine.scenarios import describe_scenario
from ev_session_sim.engine.units import format_time_hours_minutes
from ev_session_sim.models.results import SessionResult


def format_progress(result: SessionResult) -> str:
    """``"20% → 78% (58% added)"``."""
    return (
        f"{result.starting_soc_pct:.0f}% → {result.ending_soc_pct:.0f}% "
        f"({result.ending_soc_pct - result.starting_soc_pct:.0f}% added)"
    )


def generate_session_summary(
    result: SessionResult,
    inputs: SessionInputs,
    vehicle: VehicleParameters | None = None,
) -> str:
    """Render the full session summary as a text block."""
    unit = result.display.unit_label
    sections: list[str] = []

    # ── 1. Header ──
    sections.append("=" * 60)
    sections.append("SESSION SUMMARY")
    sections.append("=" * 60)
    if vehicle is not None:
        sections.append(f"Vehicle: {vehicle.name}")
    sections.append(format_progress(result))

    # ── 2. Scenario ──
    sections.append("")
    sections.append("What's happening during this session?")
    sections.append(
        describe_scenario(inputs.charging_speed_kw, inputs.time_spent_hours, inputs.starting_soc_pct)
    )

    # ── 3. Battery state ──
    sections.append("")
    sections.append("-" * 60)
    sections.append("BATTERY STATE")
    sections.append("-" * 60)
    sections.append(
        f"Starting: {result.starting_soc_pct:.0f}%\n"
        f"    Energy: {result.starting_kwh:.1f} kWh\n"
        f"    Range:  {result.display.starting_range:.0f} {unit}\n"
        f"Ending:   {result.ending_soc_pct:.0f}%\n"
        f"    Energy: {result.ending_kwh:.1f} kWh\n"
        f"    Range:  {result.display.expected_range:.0f} {unit}"
    )

    # ── 4. Charging details ──
    sections.append("")
    sections.append("-" * 60)
    sections.append("CHARGING DETAILS")
    sections.append("-" * 60)
    lines = [f"Time Spent:       {format_time_hours_minutes(result.time_spent_hours)}"]
    if result.has_idle_time:
        lines.append(f"    Charging:     {format_time_hours_minutes(result.charging_time_hours)}")
        lines.append(f"    Idle:         {format_time_hours_minutes(result.idle_time_hours)}")
    lines.append(f"Efficiency:       {result.efficiency * 100:.0f}%")
    lines.append(f"Energy Delivered: {result.energy_delivered_kwh:.2f} kWh")
    lines.append(f"Range Added:      {result.display.range_added:.0f} {unit}")
    sections.extend(lines)

    # ── 5. Cost ──
    sections.append("")
    sections.append(f"Charging Cost:    ${result.charging_cost:.2f}")
    if result.has_idle_time:
        sections.append(f"Idle Fee:         ${result.idle_fee:.2f}")
    sections.append(f"Total Cost:       ${result.total_cost:.2f}")

    return "\n".join(sections)
