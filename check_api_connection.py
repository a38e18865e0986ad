#!/usr/bin/env python3
"""Quick smoke check against a running API server.

Usage:
    EV_SIM_API_URL=http://localhost:8000 python check_api_connection.py
"""

import os
import sys

import requests

API_URL = os.environ.get("EV_SIM_API_URL", "http://localhost:8000").rstrip("/")

print("=" * 60)
print(f"Checking EV Charging Session Simulator API at {API_URL}")
print("=" * 60)
print()

# 1. Health check
print("1. Health check...")
try:
    health = requests.get(f"{API_URL}/health", timeout=10)
    print(f"   ✓ Status: {health.status_code}")
    print(f"   ✓ Response: {health.json()}")
except requests.RequestException as e:
    print(f"   ✗ Failed: {e}")
    sys.exit(1)
print()

# 2. Context
print("2. Getting context...")
try:
    context = requests.get(f"{API_URL}/context", timeout=10)
    ctx_data = context.json()
    print(f"   ✓ Status: {context.status_code}")
    print(f"   ✓ Input sections: {[s['section'] for s in ctx_data['input_sections']]}")
    print(f"   ✓ Charging levels: {[lv['key'] for lv in ctx_data['levels']]}")
except requests.RequestException as e:
    print(f"   ✗ Failed: {e}")
    sys.exit(1)
print()

# 3. Reference session
print("3. Computing reference session (50 kW × 1 h from 20%)...")
try:
    resp = requests.post(
        f"{API_URL}/session",
        json={"session": {"starting_soc_pct": 20, "charging_speed_kw": 50, "time_spent_hours": 1}},
        timeout=10,
    )
    data = resp.json()
    r = data["result"]
    print(f"   ✓ Status: {resp.status_code}")
    print(f"   ✓ Energy delivered: {r['energy_delivered_kwh']:.2f} kWh")
    print(f"   ✓ Ending SoC: {r['ending_soc_pct']:.1f}%")
    print(f"   ✓ Total cost: ${r['total_cost']:.2f}")
    print(f"   ✓ Scenario: {data['narrative']}")
except requests.RequestException as e:
    print(f"   ✗ Failed: {e}")
    sys.exit(1)
print()

print("=" * 60)
print("✓ All checks passed.")
print("=" * 60)
