"""Tests for the HTTP API layer.

Covers:
  - Health / root / context / schema / defaults
  - Levels and efficiency lookup
  - Vehicle settings get / save / reset
  - Session, narrative and timeline endpoints
  - Validation and configuration errors
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from ev_session_sim.api import server
from ev_session_sim.api.server import app
from ev_session_sim.config import DEFAULT_VEHICLE, VehicleSettingsStore
from ev_session_sim.engine import scenarios as sc


client = TestClient(app)


@pytest.fixture(autouse=True)
def _fresh_store(monkeypatch):
    """Each test starts from the default vehicle."""
    monkeypatch.setattr(server, "vehicle_store", VehicleSettingsStore())


# ═══════════════════════════════════════════════════════════════════════════
# Discovery endpoints
# ═══════════════════════════════════════════════════════════════════════════

class TestDiscovery:

    def test_health(self):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_root(self):
        data = client.get("/").json()
        assert data["name"] == "EV Charging Session Simulator API"
        assert data["start_here"] == "GET /context"

    def test_context(self):
        data = client.get("/context").json()
        sections = {s["section"]: s for s in data["input_sections"]}
        assert set(sections) == {"vehicle", "session"}
        soc = next(p for p in sections["session"]["parameters"] if p["name"] == "starting_soc_pct")
        assert soc["constraints"] == {"ge": 0, "le": 100}
        assert soc["default"] == 20
        assert len(data["levels"]) == 6

    def test_schema(self):
        data = client.get("/schema").json()
        assert "battery_capacity_kwh" in data["vehicle"]["properties"]
        assert "idle_fee_per_minute" in data["session"]["properties"]

    def test_defaults(self):
        data = client.get("/defaults").json()
        assert data["vehicle"]["battery_capacity_kwh"] == 84
        assert data["session"]["charging_speed_kw"] == 50
        assert data["bounds"]["time_spent_hours"] == {"min": 0, "max": 24, "step": 0.25}

    def test_levels(self):
        data = client.get("/levels").json()
        assert [lv["key"] for lv in data][:2] == ["L1", "L2"]
        assert data[0]["efficiency"] == 0.75

    @pytest.mark.parametrize("speed, eff, level", [
        (1.9, 0.75, "L1"),
        (2, 0.90, "L2"),
        (20, 0.97, "DCFC1"),
    ])
    def test_efficiency(self, speed, eff, level):
        data = client.get("/efficiency", params={"speed_kw": speed}).json()
        assert data["efficiency"] == eff
        assert data["level"] == level

    def test_efficiency_rejects_negative(self):
        assert client.get("/efficiency", params={"speed_kw": -1}).status_code == 422


# ═══════════════════════════════════════════════════════════════════════════
# Vehicle settings
# ═══════════════════════════════════════════════════════════════════════════

class TestVehicleSettings:

    def test_get_default(self):
        assert client.get("/vehicle").json() == DEFAULT_VEHICLE.model_dump()

    def test_save_and_read_back(self):
        body = {"name": "Compact EV", "battery_capacity_kwh": 40, "range_at_full_miles": 150}
        resp = client.put("/vehicle", json=body)
        assert resp.status_code == 200
        assert resp.json()["battery_capacity_kwh"] == 40
        assert client.get("/vehicle").json()["name"] == "Compact EV"

    def test_save_rejects_zero_capacity(self):
        resp = client.put("/vehicle", json={"battery_capacity_kwh": 0})
        assert resp.status_code == 422
        assert client.get("/vehicle").json()["battery_capacity_kwh"] == 84

    def test_save_rejects_overflowing_capacity(self):
        resp = client.put(
            "/vehicle",
            content='{"battery_capacity_kwh": 1e400}',
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 422
        assert client.get("/vehicle").json()["battery_capacity_kwh"] == 84

    def test_reset(self):
        client.put("/vehicle", json={"name": "Other", "battery_capacity_kwh": 50})
        resp = client.post("/vehicle/reset")
        assert resp.json()["name"] == DEFAULT_VEHICLE.name

    def test_saved_vehicle_used_by_session(self):
        client.put("/vehicle", json={"battery_capacity_kwh": 40, "range_at_full_miles": 150})
        data = client.post("/session", json={"session": {"starting_soc_pct": 50}}).json()
        assert data["result"]["starting_kwh"] == pytest.approx(20)


# ═══════════════════════════════════════════════════════════════════════════
# Session endpoints
# ═══════════════════════════════════════════════════════════════════════════

class TestSession:

    def test_reference_session(self):
        body = {"session": {
            "starting_soc_pct": 20, "charging_speed_kw": 50, "time_spent_hours": 1,
            "price_per_kwh": 0.25, "idle_fee_per_minute": 0.5,
        }}
        resp = client.post("/session", json=body)
        assert resp.status_code == 200
        data = resp.json()
        r = data["result"]
        assert r["efficiency"] == 0.97
        assert r["energy_delivered_kwh"] == pytest.approx(48.5)
        assert r["ending_kwh"] == pytest.approx(65.3)
        assert r["total_cost"] == pytest.approx(12.125)
        assert r["idle_time_hours"] == 0
        assert data["charging_level"] == "DCFC1"
        assert data["scenario_rule"] == "speed_fallback"
        assert data["narrative"] == sc.MODERATE_SESSION
        assert data["progress"] == "20% → 78% (58% added)"
        assert "SESSION SUMMARY" in data["summary"]

    def test_empty_body_uses_defaults(self):
        resp = client.post("/session", json={})
        assert resp.status_code == 200
        assert resp.json()["vehicle"]["name"] == DEFAULT_VEHICLE.name

    def test_one_off_vehicle(self):
        body = {
            "vehicle": {"battery_capacity_kwh": 100, "range_at_full_miles": 400},
            "session": {"starting_soc_pct": 10, "time_spent_hours": 0},
        }
        data = client.post("/session", json=body).json()
        assert data["result"]["starting_kwh"] == pytest.approx(10)
        assert data["result"]["starting_range_miles"] == pytest.approx(40)
        # Saved settings untouched
        assert client.get("/vehicle").json()["battery_capacity_kwh"] == 84

    def test_saturation_session(self):
        body = {"session": {"starting_soc_pct": 95, "charging_speed_kw": 350, "time_spent_hours": 1}}
        r = client.post("/session", json=body).json()["result"]
        assert r["energy_delivered_kwh"] == pytest.approx(4.2)
        assert r["idle_time_hours"] > 0
        assert r["idle_fee"] > 0

    def test_km_display(self):
        body = {"session": {"distance_unit": "km"}}
        d = client.post("/session", json=body).json()["result"]["display"]
        assert d["unit_label"] == "km"
        assert d["starting_range"] == pytest.approx(64 * 1.60934)

    def test_out_of_range_soc_rejected(self):
        resp = client.post("/session", json={"session": {"starting_soc_pct": 120}})
        assert resp.status_code == 422

    def test_overflowing_number_rejected(self):
        # 1e400 decodes to inf; a zero-hour session must not report a full battery
        resp = client.post(
            "/session",
            content='{"session": {"charging_speed_kw": 1e400, "time_spent_hours": 0}}',
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 422

    def test_configuration_error_maps_to_400(self, monkeypatch):
        broken = DEFAULT_VEHICLE.model_construct(
            name="broken", battery_capacity_kwh=0.0, range_at_full_miles=300.0,
            max_charging_speed_kw=0.0, time_10_to_80_minutes=0.0,
        )
        monkeypatch.setattr(server, "vehicle_store", VehicleSettingsStore(broken))
        resp = client.post("/session", json={})
        assert resp.status_code == 400
        assert "battery_capacity_kwh" in resp.json()["detail"]

    def test_narrative_endpoint(self):
        body = {"starting_soc_pct": 5, "charging_speed_kw": 200, "time_spent_hours": 0.2}
        data = client.post("/session/narrative", json=body).json()
        assert data["scenario_rule"] == "critical_battery"
        assert data["narrative"] == sc.EMERGENCY_HIGHWAY

    def test_timeline_endpoint(self):
        body = {"session": {"starting_soc_pct": 95, "charging_speed_kw": 350, "time_spent_hours": 1}, "steps": 4}
        points = client.post("/session/timeline", json=body).json()["points"]
        assert len(points) == 5
        assert points[0]["soc_pct"] == pytest.approx(95)
        assert points[-1]["soc_pct"] == pytest.approx(100)

    def test_timeline_rejects_zero_steps(self):
        resp = client.post("/session/timeline", json={"steps": 0})
        assert resp.status_code == 422
