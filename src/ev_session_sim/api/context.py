"""Self-describing context — input schemas, defaults and charging levels.

Lets an API client discover which fields it can send, their bounds and
defaults, without reading the source.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from ev_session_sim.config import SessionBounds, SessionInputs, VehicleParameters
from ev_session_sim.engine.units import CHARGING_LEVELS


class ParameterInfo(BaseModel):
    """One configurable parameter, machine-readable."""
    name: str
    type: str
    default: Any
    description: str
    constraints: dict[str, Any] = Field(default_factory=dict)


class SectionSchema(BaseModel):
    """Schema for one input section (vehicle or session)."""
    section: str
    description: str
    parameters: list[ParameterInfo]


class LevelInfo(BaseModel):
    key: str
    label: str
    range: str
    typical_kw: float
    efficiency: float


def _extract_params(model_cls: type[BaseModel]) -> list[ParameterInfo]:
    """Extract parameter info from a Pydantic model class."""
    params: list[ParameterInfo] = []
    for name, field_info in model_cls.model_fields.items():
        constraints: dict[str, Any] = {}
        for attr in ("ge", "gt", "le", "lt"):
            meta_val = _get_field_metadata(field_info, attr)
            if meta_val is not None:
                constraints[attr] = meta_val

        default = field_info.default
        default_val = default if default is not None and not callable(default) else None

        type_str = str(field_info.annotation) if field_info.annotation else "Any"
        type_str = type_str.replace("typing.", "").replace("<class '", "").replace("'>", "")

        params.append(ParameterInfo(
            name=name,
            type=type_str,
            default=default_val,
            description=field_info.description or "",
            constraints=constraints,
        ))
    return params


def _get_field_metadata(field_info: Any, attr: str) -> Any:
    for m in getattr(field_info, "metadata", []):
        if hasattr(m, attr):
            return getattr(m, attr)
    return None


def get_input_sections() -> list[SectionSchema]:
    return [
        SectionSchema(
            section="vehicle",
            description="Vehicle record — replaced wholesale via PUT /vehicle.",
            parameters=_extract_params(VehicleParameters),
        ),
        SectionSchema(
            section="session",
            description="Per-calculation inputs — send with every POST /session.",
            parameters=_extract_params(SessionInputs),
        ),
    ]


def get_levels() -> list[LevelInfo]:
    return [
        LevelInfo(
            key=level.key,
            label=level.label,
            range=level.range_text,
            typical_kw=level.typical_kw,
            efficiency=level.efficiency,
        )
        for level in CHARGING_LEVELS
    ]


def get_input_schema() -> dict:
    """JSON Schemas for the vehicle and session input models."""
    return {
        "vehicle": VehicleParameters.model_json_schema(),
        "session": SessionInputs.model_json_schema(),
    }


def get_defaults() -> dict:
    """Default vehicle, session inputs and slider bounds as JSON."""
    return {
        "vehicle": VehicleParameters().model_dump(),
        "session": SessionInputs().model_dump(),
        "bounds": SessionBounds().model_dump(),
    }
