"""YAML session files — a vehicle, a set of session inputs and optional slider bounds."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from ev_session_sim.config.session import SessionBounds, SessionInputs
from ev_session_sim.config.vehicle import VehicleParameters

logger = logging.getLogger(__name__)


class SessionFile(BaseModel):
    """Complete input bundle for one calculation, as stored on disk."""

    vehicle: VehicleParameters = Field(default_factory=VehicleParameters)
    session: SessionInputs = Field(default_factory=SessionInputs)
    bounds: SessionBounds = Field(default_factory=SessionBounds)


def load_session_file(path: str | Path) -> SessionFile:
    """Read a YAML session file; missing sections fall back to defaults."""
    path = Path(path)
    logger.info("Loading session file %s", path)
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level, got {type(data).__name__}")
    return SessionFile(**data)


def dump_session_file(session_file: SessionFile, path: str | Path) -> None:
    """Write ``session_file`` as YAML."""
    path = Path(path)
    with open(path, "w") as f:
        yaml.safe_dump(session_file.model_dump(), f, sort_keys=False)
    logger.info("Wrote session file %s", path)
