"""Session timeline — state of the session sampled across the plug-in period.

Each point re-runs ``compute_session`` with the elapsed time truncated, so
the curve shows the charge rising, flattening at 100%, and idle fees
accruing afterwards.
"""

from __future__ import annotations

from ev_session_sim.config.session import SessionInputs
from ev_session_sim.config.vehicle import VehicleParameters
from ev_session_sim.engine.session import compute_session
from ev_session_sim.models.results import TimelinePoint


def session_timeline(
    vehicle: VehicleParameters,
    inputs: SessionInputs,
    steps: int = 48,
) -> list[TimelinePoint]:
    """``steps + 1`` evenly spaced points from plug-in to unplug (inclusive)."""
    if steps < 1:
        raise ValueError(f"steps must be >= 1, got {steps}")

    total = inputs.time_spent_hours
    points: list[TimelinePoint] = []
    for i in range(steps + 1):
        elapsed = total * i / steps
        r = compute_session(vehicle, inputs.model_copy(update={"time_spent_hours": elapsed}))
        points.append(TimelinePoint(
            elapsed_hours=elapsed,
            soc_pct=r.ending_soc_pct,
            energy_delivered_kwh=r.energy_delivered_kwh,
            charging_cost=r.charging_cost,
            idle_fee=r.idle_fee,
            total_cost=r.total_cost,
        ))
    return points
