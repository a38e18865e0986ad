"""Vehicle parameters — the record edited by the settings dialog."""

from pydantic import BaseModel, ConfigDict, Field


class VehicleParameters(BaseModel):
    """One vehicle, fixed for the duration of a session.

    Frozen: the settings collaborator replaces the whole record on save,
    it never mutates fields in place.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: str = Field(default="2025 Hyundai IONIQ 5 SEL RWD", description="Human label for this vehicle")
    battery_capacity_kwh: float = Field(default=84.0, gt=0, description="Usable battery capacity (kWh)")
    range_at_full_miles: float = Field(default=320.0, gt=0, description="Rated range at 100% SoC (miles)")
    max_charging_speed_kw: float = Field(
        default=350.0, ge=0,
        description="Peak DC charging power (kW). Descriptive only — not used by the session formulas.",
    )
    time_10_to_80_minutes: float = Field(
        default=20.0, ge=0,
        description="10–80% charge time at >250 kW (minutes). Descriptive only.",
    )


DEFAULT_VEHICLE = VehicleParameters()
