"""In-memory holder for the current vehicle record.

The settings collaborator reads a snapshot with ``get()`` and replaces it
wholesale with ``save()``. Nothing is written to disk.
"""

from __future__ import annotations

import logging
from typing import Any

from ev_session_sim.config.vehicle import DEFAULT_VEHICLE, VehicleParameters

logger = logging.getLogger(__name__)


class VehicleSettingsStore:
    """Current vehicle parameters for one host process."""

    def __init__(self, initial: VehicleParameters | None = None) -> None:
        self._current = initial or DEFAULT_VEHICLE

    def get(self) -> VehicleParameters:
        return self._current

    def save(self, params: VehicleParameters | dict[str, Any]) -> VehicleParameters:
        """Replace the current record. Dicts are validated into ``VehicleParameters``."""
        if not isinstance(params, VehicleParameters):
            params = VehicleParameters(**params)
        logger.info(
            "Saved vehicle settings: %s (%.1f kWh, %.0f mi)",
            params.name, params.battery_capacity_kwh, params.range_at_full_miles,
        )
        self._current = params
        return params

    def reset(self) -> VehicleParameters:
        """Restore the default vehicle."""
        self._current = DEFAULT_VEHICLE
        return self._current
