"""Session inputs and slider bounds — the values a host UI collects."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

DistanceUnit = Literal["miles", "km"]
SoCInputMode = Literal["percent", "kwh", "range"]


class SessionInputs(BaseModel):
    """Inputs for one charging-session calculation, supplied fresh on every change."""

    model_config = ConfigDict(allow_inf_nan=False)

    starting_soc_pct: float = Field(default=20.0, ge=0, le=100, description="Battery level at plug-in (%)")
    charging_speed_kw: float = Field(default=50.0, ge=0, description="Charger power (kW)")
    time_spent_hours: float = Field(default=2.0, ge=0, description="Time plugged in (hours)")
    price_per_kwh: float = Field(default=0.25, ge=0, description="Energy price ($/kWh)")
    idle_fee_per_minute: float = Field(
        default=0.50, ge=0,
        description="Overstay fee charged per minute once the battery is full ($/min)",
    )
    distance_unit: DistanceUnit = Field(
        default="miles",
        description="Display unit for range figures. All internal distance math is in miles.",
    )


class SliderBounds(BaseModel):
    """User-editable range for one slider control."""

    model_config = ConfigDict(allow_inf_nan=False)

    min: float = Field(default=0.0, ge=0, description="Lower bound; every slider quantity is non-negative")
    max: float = Field(default=100.0, description="Upper bound")
    step: float = Field(default=1.0, gt=0, description="Slider increment")

    @model_validator(mode="after")
    def _check_order(self) -> SliderBounds:
        if not self.min < self.max:
            raise ValueError(f"min ({self.min}) must be below max ({self.max})")
        return self

    def clamp(self, value: float) -> float:
        """Pin ``value`` into ``[min, max]``."""
        return max(self.min, min(self.max, value))

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def with_range(self, min_value: float, max_value: float) -> SliderBounds:
        """New bounds with the same step; raises if ``min_value >= max_value``."""
        return SliderBounds(min=min_value, max=max_value, step=self.step)


class SessionBounds(BaseModel):
    """Slider ranges for the adjustable session inputs."""

    charging_speed_kw: SliderBounds = Field(default_factory=lambda: SliderBounds(min=0, max=500, step=1))
    time_spent_hours: SliderBounds = Field(default_factory=lambda: SliderBounds(min=0, max=24, step=0.25))
    price_per_kwh: SliderBounds = Field(default_factory=lambda: SliderBounds(min=0, max=1, step=0.01))
    idle_fee_per_minute: SliderBounds = Field(default_factory=lambda: SliderBounds(min=0, max=2, step=0.05))

    def clamp_inputs(self, inputs: SessionInputs) -> SessionInputs:
        """Return a copy of ``inputs`` with every bounded field pinned into its range."""
        return SessionInputs.model_validate({
            **inputs.model_dump(),
            "charging_speed_kw": self.charging_speed_kw.clamp(inputs.charging_speed_kw),
            "time_spent_hours": self.time_spent_hours.clamp(inputs.time_spent_hours),
            "price_per_kwh": self.price_per_kwh.clamp(inputs.price_per_kwh),
            "idle_fee_per_minute": self.idle_fee_per_minute.clamp(inputs.idle_fee_per_minute),
        })
