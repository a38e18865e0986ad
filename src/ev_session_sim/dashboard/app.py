"""EV Charging Session Simulator — Streamlit dashboard.

Layout: sidebar inputs (vehicle settings, session sliders, slider ranges,
unit toggle) → main area with metric cards, state-of-charge bar, session
timeline, cost table and the plain-text summary.

Run with:
    streamlit run src/ev_session_sim/dashboard/app.py
"""

from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go
import streamlit as st
from pydantic import ValidationError

from ev_session_sim.api.narrative import format_progress, generate_session_summary
from ev_session_sim.config import (
    DEFAULT_VEHICLE,
    SessionBounds,
    SessionInputs,
    SliderBounds,
    VehicleParameters,
    VehicleSettingsStore,
)
from ev_session_sim.engine.scenarios import describe_scenario
from ev_session_sim.engine.session import compute_session
from ev_session_sim.engine.timeline import session_timeline
from ev_session_sim.engine.units import (
    charging_level_for,
    distance_unit_name,
    format_soc_mode_value,
    format_time_hours_minutes,
    levels_within,
    mode_value_to_soc,
    soc_mode_bounds,
    soc_to_mode_value,
    speed_for_level,
)

# ---------------------------------------------------------------------------
# Defaults — single source of truth for sidebar defaults
# ---------------------------------------------------------------------------
_DEF_IN = SessionInputs()
_DEF_B = SessionBounds()

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(page_title="EV Charging Session Simulator", page_icon="⚡", layout="wide")

st.markdown("""
<style>
div[data-testid="stMetric"] {
    background: linear-gradient(135deg, rgba(30,34,44,0.95), rgba(22,26,35,0.98));
    border: 1px solid rgba(255,255,255,0.06);
    border-radius: 10px;
    padding: 14px 16px 12px;
}
</style>
""", unsafe_allow_html=True)

# ---------------------------------------------------------------------------
# Session state — vehicle store and editable slider ranges survive reruns
# ---------------------------------------------------------------------------
if "vehicle_store" not in st.session_state:
    st.session_state.vehicle_store = VehicleSettingsStore()
if "bounds" not in st.session_state:
    st.session_state.bounds = _DEF_B.model_copy(deep=True)

store: VehicleSettingsStore = st.session_state.vehicle_store
bounds: SessionBounds = st.session_state.bounds


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _card(icon: str, label: str, value: str, accent: str = "#6c5ce7") -> str:
    """Return HTML for a styled metric card with colored top accent."""
    return f"""
    <div style="
        background: linear-gradient(135deg, rgba(30,34,44,0.95), rgba(22,26,35,0.98));
        border: 1px solid rgba(255,255,255,0.05);
        border-top: 3px solid {accent};
        border-radius: 8px;
        padding: 14px 16px 12px;
        text-align: center;
    ">
        <div style="font-size: 1.3rem; margin-bottom: 2px; line-height: 1;">{icon}</div>
        <div style="font-size: 1.25rem; font-weight: 700; color: #fff;">{value}</div>
        <div style="font-size: 0.65rem; color: rgba(255,255,255,0.42); text-transform: uppercase;
                    letter-spacing: 0.6px; margin-top: 3px;">{label}</div>
    </div>
    """


def _range_editor(key: str, label: str, current: SliderBounds) -> SliderBounds:
    """Min / max inputs for one slider; invalid ranges keep the previous bounds."""
    c1, c2 = st.columns(2)
    lo = c1.number_input(f"{label} min", min_value=0.0, value=float(current.min), key=f"{key}_min")
    hi = c2.number_input(f"{label} max", value=float(current.max), key=f"{key}_max")
    if lo == current.min and hi == current.max:
        return current
    try:
        return current.with_range(lo, hi)
    except ValidationError:
        st.warning(f"{label}: min must be non-negative and below max, range unchanged.")
        return current


# ---------------------------------------------------------------------------
# SIDEBAR — Vehicle settings
# ---------------------------------------------------------------------------
st.sidebar.header("Session Inputs")

with st.sidebar.expander("Vehicle settings"):
    current = store.get()
    with st.form("vehicle_form"):
        v_name = st.text_input("Vehicle name", current.name)
        v_cap = st.number_input("Usable battery capacity (kWh)", 0.1, 500.0,
                                float(current.battery_capacity_kwh), 0.1)
        v_range = st.number_input("Range at 100% (miles)", 1.0, 1_000.0,
                                  float(current.range_at_full_miles), 1.0)
        v_max = st.number_input("Max charging speed (kW)", 0.0, 1_000.0,
                                float(current.max_charging_speed_kw), 1.0)
        v_t1080 = st.number_input("10-80% charge time (minutes at >250kW)", 0.0, 600.0,
                                  float(current.time_10_to_80_minutes), 0.5)
        c1, c2 = st.columns(2)
        save_clicked = c1.form_submit_button("Save changes", type="primary")
        reset_clicked = c2.form_submit_button("Reset to default")
    if save_clicked:
        store.save(VehicleParameters(
            name=v_name, battery_capacity_kwh=v_cap, range_at_full_miles=v_range,
            max_charging_speed_kw=v_max, time_10_to_80_minutes=v_t1080,
        ))
        st.rerun()
    if reset_clicked:
        store.reset()
        st.rerun()

vehicle = store.get()

# ---------------------------------------------------------------------------
# SIDEBAR — Session inputs
# ---------------------------------------------------------------------------
with st.sidebar.expander("Starting charge", expanded=True):
    _MODES = {"percent": "%", "kwh": "kWh", "range": "Range"}
    soc_mode = st.radio("Input as", list(_MODES), format_func=_MODES.get, horizontal=True)
    # Kept as a percentage; the input mode only changes how it is shown.
    if "starting_soc_pct" not in st.session_state:
        st.session_state.starting_soc_pct = _DEF_IN.starting_soc_pct
    soc_b = soc_mode_bounds(soc_mode, vehicle)
    soc_val = st.slider(
        "Starting state of charge", float(soc_b.min), float(soc_b.max),
        float(soc_b.clamp(soc_to_mode_value(st.session_state.starting_soc_pct, soc_mode, vehicle))),
        float(soc_b.step),
        key=f"soc_{soc_mode}_{vehicle.battery_capacity_kwh:g}_{vehicle.range_at_full_miles:g}",
    )
    starting_soc = mode_value_to_soc(soc_val, soc_mode, vehicle)
    st.session_state.starting_soc_pct = starting_soc
    st.caption(f"{format_soc_mode_value(soc_val, soc_mode)} = {starting_soc:.0f}%")

with st.sidebar.expander("Charging speed", expanded=True):
    sb = bounds.charging_speed_kw
    visible_levels = levels_within(sb.max)
    _LEVEL_KEYS = [lv.key for lv in visible_levels]
    _default_level = charging_level_for(sb.clamp(_DEF_IN.charging_speed_kw)).key
    level_key = st.radio(
        "Level", _LEVEL_KEYS,
        index=_LEVEL_KEYS.index(_default_level) if _default_level in _LEVEL_KEYS else 0,
        format_func=lambda k: next(f"{lv.label} ({lv.range_text})" for lv in visible_levels if lv.key == k),
    )
    speed = st.slider("Charging speed (kW)", float(sb.min), float(sb.max),
                      float(sb.clamp(speed_for_level(level_key, sb.max))), float(sb.step),
                      key=f"speed_{level_key}")

with st.sidebar.expander("Time & price", expanded=True):
    tb = bounds.time_spent_hours
    hours = st.slider("Time spent (hours)", float(tb.min), float(tb.max),
                      float(tb.clamp(_DEF_IN.time_spent_hours)), float(tb.step))
    pb = bounds.price_per_kwh
    price = st.slider("Price per kWh ($)", float(pb.min), float(pb.max),
                      float(pb.clamp(_DEF_IN.price_per_kwh)), float(pb.step), format="%.2f")
    ib = bounds.idle_fee_per_minute
    idle_fee = st.slider("Idle fee per minute ($)", float(ib.min), float(ib.max),
                         float(ib.clamp(_DEF_IN.idle_fee_per_minute)), float(ib.step), format="%.2f")

with st.sidebar.expander("Slider ranges"):
    new_bounds = SessionBounds(
        charging_speed_kw=_range_editor("speed", "Speed kW", bounds.charging_speed_kw),
        time_spent_hours=_range_editor("time", "Hours", bounds.time_spent_hours),
        price_per_kwh=_range_editor("price", "Price", bounds.price_per_kwh),
        idle_fee_per_minute=_range_editor("idle", "Idle fee", bounds.idle_fee_per_minute),
    )
    if new_bounds != bounds:
        st.session_state.bounds = new_bounds
        st.rerun()

unit = st.sidebar.radio("Distance unit", ["miles", "km"], format_func=distance_unit_name, horizontal=True)

inputs = bounds.clamp_inputs(SessionInputs(
    starting_soc_pct=starting_soc,
    charging_speed_kw=speed,
    time_spent_hours=hours,
    price_per_kwh=price,
    idle_fee_per_minute=idle_fee,
    distance_unit=unit,
))

# ---------------------------------------------------------------------------
# Compute
# ---------------------------------------------------------------------------
result = compute_session(vehicle, inputs)
timeline = session_timeline(vehicle, inputs)
d = result.display

# ---------------------------------------------------------------------------
# MAIN — Summary
# ---------------------------------------------------------------------------
st.title("EV Charging Session Simulator")
st.caption(f"🚗 {vehicle.name}")

st.info(describe_scenario(inputs.charging_speed_kw, inputs.time_spent_hours, inputs.starting_soc_pct))

cols = st.columns(5)
cards = [
    ("🔋", "Ending SoC", f"{result.ending_soc_pct:.0f}%", "#00b894"),
    ("⚡", "Energy Delivered", f"{result.energy_delivered_kwh:.2f} kWh", "#0984e3"),
    ("📈", "Range Added", f"{d.range_added:.0f} {d.unit_label}", "#6c5ce7"),
    ("⏱️", "Time Spent", format_time_hours_minutes(result.time_spent_hours), "#fdcb6e"),
    ("💲", "Total Cost", f"${result.total_cost:.2f}", "#e17055"),
]
for col, (icon, label, value, accent) in zip(cols, cards):
    col.markdown(_card(icon, label, value, accent), unsafe_allow_html=True)

# --- State-of-charge bar ---
st.subheader("Battery")
fig_soc = go.Figure()
fig_soc.add_trace(go.Bar(
    y=["SoC"], x=[result.starting_soc_pct], orientation="h",
    name="Starting", marker_color="#60a5fa",
))
fig_soc.add_trace(go.Bar(
    y=["SoC"], x=[result.soc_added_pct], orientation="h",
    name="Added", marker_color="#22c55e",
))
fig_soc.update_layout(
    barmode="stack", height=140, margin=dict(l=10, r=10, t=10, b=10),
    xaxis=dict(range=[0, 100], ticksuffix="%"), showlegend=True,
)
st.plotly_chart(fig_soc, use_container_width=True)
st.caption(format_progress(result))

c1, c2 = st.columns(2)
c1.metric("Starting", f"{result.starting_soc_pct:.0f}%",
          help=f"{result.starting_kwh:.1f} kWh · {d.starting_range:.0f} {d.unit_label}")
c2.metric("Ending", f"{result.ending_soc_pct:.0f}%",
          delta=f"{result.soc_added_pct:.0f}% added",
          help=f"{result.ending_kwh:.1f} kWh · {d.expected_range:.0f} {d.unit_label}")

# --- Timeline ---
st.subheader("Session Timeline")
df = pd.DataFrame([p.model_dump() for p in timeline])
fig_tl = go.Figure()
fig_tl.add_trace(go.Scatter(x=df["elapsed_hours"], y=df["soc_pct"], name="SoC (%)", mode="lines"))
fig_tl.add_trace(go.Scatter(x=df["elapsed_hours"], y=df["total_cost"], name="Total cost ($)",
                            mode="lines", yaxis="y2", line=dict(dash="dot")))
fig_tl.update_layout(
    height=320, margin=dict(l=10, r=10, t=10, b=10),
    xaxis_title="Elapsed (hours)",
    yaxis=dict(title="SoC (%)", range=[0, 100]),
    yaxis2=dict(title="Cost ($)", overlaying="y", side="right"),
)
if result.has_idle_time and result.time_to_full_hours is not None:
    fig_tl.add_vline(x=result.time_to_full_hours, line_dash="dash", line_color="orange",
                     annotation_text="Full — idle fees start")
st.plotly_chart(fig_tl, use_container_width=True)

# --- Charging details ---
st.subheader("Charging Details")
rows = [
    ("Charging time", format_time_hours_minutes(result.charging_time_hours)),
    ("Idle time", format_time_hours_minutes(result.idle_time_hours)),
    ("Efficiency", f"{result.efficiency * 100:.0f}%"),
    ("Charging cost", f"${result.charging_cost:.2f}"),
    ("Idle fee", f"${result.idle_fee:.2f}"),
    ("Total cost", f"${result.total_cost:.2f}"),
]
st.dataframe(pd.DataFrame(rows, columns=["Item", "Value"]), hide_index=True, use_container_width=True)

with st.expander("Show plain-text summary"):
    st.code(generate_session_summary(result, inputs, vehicle), language="text")

if vehicle != DEFAULT_VEHICLE:
    st.caption("Using custom vehicle settings.")
