"""FastAPI server — HTTP host for the charging-session calculator.

Run with:
    uvicorn ev_session_sim.api.server:app --reload --port 8000

Or:
    python -m ev_session_sim.api.server

Endpoints:
    GET  /context            — input sections with bounds + charging levels
    GET  /schema             — JSON Schema for vehicle and session inputs
    GET  /defaults           — default vehicle, session and slider bounds
    GET  /levels             — charging level presets
    GET  /efficiency         — efficiency tier for a charging speed
    GET  /vehicle            — current vehicle settings
    PUT  /vehicle            — save vehicle settings (replaces the record)
    POST /vehicle/reset      — restore the default vehicle
    POST /session            — compute a session + narrative + summary text
    POST /session/narrative  — scenario sentence only
    POST /session/timeline   — session state sampled over the plug-in period
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ev_session_sim.api.context import (
    LevelInfo,
    get_defaults,
    get_input_schema,
    get_input_sections,
    get_levels,
)
from ev_session_sim.api.narrative import format_progress, generate_session_summary
from ev_session_sim.config import SessionInputs, VehicleParameters, VehicleSettingsStore
from ev_session_sim.engine.scenarios import describe_scenario, match_scenario_rule
from ev_session_sim.engine.session import VehicleConfigurationError, compute_session
from ev_session_sim.engine.timeline import session_timeline
from ev_session_sim.engine.units import charging_efficiency, charging_level_for
from ev_session_sim.models.results import SessionResult, TimelinePoint

logger = logging.getLogger(__name__)

API_VERSION = "1.0"


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="EV Charging Session Simulator API",
    version=API_VERSION,
    description=(
        "Compute the outcome of an EV charging session: energy delivered, "
        "ending state of charge, range added, charging vs. idle time and the "
        "cost breakdown, plus a short story of what the driver is doing."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

vehicle_store = VehicleSettingsStore()


@app.exception_handler(VehicleConfigurationError)
def _vehicle_config_error(request: Request, exc: VehicleConfigurationError) -> JSONResponse:
    logger.warning("Rejected vehicle configuration on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class SessionRequest(BaseModel):
    """Request body for /session. Vehicle defaults to the saved settings."""
    session: SessionInputs = Field(default_factory=SessionInputs)
    vehicle: VehicleParameters | None = Field(
        default=None,
        description="Optional one-off vehicle. Omit to use the saved vehicle settings.",
    )


class TimelineRequest(SessionRequest):
    steps: int = Field(default=48, ge=1, le=1_000, description="Number of intervals to sample")


class SessionResponse(BaseModel):
    """Response from /session."""
    vehicle: VehicleParameters
    result: SessionResult
    charging_level: str
    scenario_rule: str
    narrative: str
    progress: str
    summary: str


class NarrativeResponse(BaseModel):
    scenario_rule: str
    narrative: str


class TimelineResponse(BaseModel):
    points: list[TimelinePoint]


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _resolve_vehicle(req: SessionRequest) -> VehicleParameters:
    return req.vehicle if req.vehicle is not None else vehicle_store.get()


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/")
def root():
    """API root — welcome message and pointers."""
    return {
        "name": "EV Charging Session Simulator API",
        "version": API_VERSION,
        "start_here": "GET /context",
        "docs": "GET /docs (interactive Swagger UI)",
    }


@app.get("/context")
def get_context():
    """Input sections (with bounds and defaults) and charging level presets."""
    return {
        "input_sections": [s.model_dump() for s in get_input_sections()],
        "levels": [lv.model_dump() for lv in get_levels()],
    }


@app.get("/schema")
def get_schema():
    """JSON Schema for the vehicle and session inputs."""
    return get_input_schema()


@app.get("/defaults")
def defaults():
    """Default vehicle, session inputs and slider bounds."""
    return get_defaults()


@app.get("/levels", response_model=list[LevelInfo])
def levels():
    """Charging level presets (L1, L2, DCFC1–4)."""
    return get_levels()


@app.get("/efficiency")
def efficiency(speed_kw: float = Query(..., ge=0, description="Charging power (kW)")):
    """Efficiency tier and charging level for a speed."""
    return {
        "speed_kw": speed_kw,
        "efficiency": charging_efficiency(speed_kw),
        "level": charging_level_for(speed_kw).key,
    }


@app.get("/vehicle", response_model=VehicleParameters)
def get_vehicle():
    """Current vehicle settings."""
    return vehicle_store.get()


@app.put("/vehicle", response_model=VehicleParameters)
def save_vehicle(vehicle: VehicleParameters):
    """Save vehicle settings. The whole record is replaced."""
    return vehicle_store.save(vehicle)


@app.post("/vehicle/reset", response_model=VehicleParameters)
def reset_vehicle():
    """Restore the default vehicle."""
    logger.info("Vehicle settings reset to default")
    return vehicle_store.reset()


@app.post("/session", response_model=SessionResponse)
def simulate_session(req: SessionRequest):
    """Compute one charging session.

    Example minimal request:
    ```json
    {"session": {"starting_soc_pct": 20, "charging_speed_kw": 50, "time_spent_hours": 1}}
    ```
    """
    vehicle = _resolve_vehicle(req)
    inputs = req.session
    result = compute_session(vehicle, inputs)
    rule = match_scenario_rule(inputs.charging_speed_kw, inputs.time_spent_hours, inputs.starting_soc_pct)
    logger.info(
        "session computed: %.0f kW × %.2f h from %.0f%% → %.1f%%, total $%.2f",
        inputs.charging_speed_kw, inputs.time_spent_hours, inputs.starting_soc_pct,
        result.ending_soc_pct, result.total_cost,
    )
    return SessionResponse(
        vehicle=vehicle,
        result=result,
        charging_level=charging_level_for(inputs.charging_speed_kw).key,
        scenario_rule=rule.name,
        narrative=describe_scenario(inputs.charging_speed_kw, inputs.time_spent_hours, inputs.starting_soc_pct),
        progress=format_progress(result),
        summary=generate_session_summary(result, inputs, vehicle),
    )


@app.post("/session/narrative", response_model=NarrativeResponse)
def session_narrative(session: SessionInputs):
    """Scenario sentence only — no vehicle needed."""
    rule = match_scenario_rule(session.charging_speed_kw, session.time_spent_hours, session.starting_soc_pct)
    return NarrativeResponse(
        scenario_rule=rule.name,
        narrative=describe_scenario(session.charging_speed_kw, session.time_spent_hours, session.starting_soc_pct),
    )


@app.post("/session/timeline", response_model=TimelineResponse)
def session_timeline_endpoint(req: TimelineRequest):
    """SoC, energy and cost sampled across the plug-in period."""
    vehicle = _resolve_vehicle(req)
    return TimelineResponse(points=session_timeline(vehicle, req.session, req.steps))


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "ev_session_sim.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
