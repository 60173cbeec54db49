"""
Marine Contaminant Diffusion Engine: Streamlit Interface.

Run with:  streamlit run main.py
"""

import sys
import os

# Ensure the project root is on the Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import streamlit as st
import numpy as np

from data.interfaces import MockDataProvider
from models.diffusion import (
    EnvironmentalVector,
    predict,
    predict_multiple_distances,
    concentration_profile,
)
from models.risk import assess_risk
from models.field import apply_time_slot, predict_at, concentration_grid
from api.predict import check_domain
from visualization.plots import (
    create_distance_profile_figure,
    create_factor_figure,
    create_influence_figure,
    create_field_figure,
)
from config import (
    DEFAULT_SALINITY_PSU,
    DEFAULT_CURRENT_SPEED,
    DEFAULT_WIND_SPEED,
    DEFAULT_DEPTH_M,
    DEFAULT_TOXIC_THRESHOLD,
    DEFAULT_PROFILE_DISTANCES_KM,
    ZONE_LEVELS,
    MAP_CENTER,
    MAP_HALF_SPAN_DEG,
    MAP_GRID_POINTS,
)

# ── Page Config ──────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Marine Contaminant Diffusion",
    page_icon="🌊",
    layout="wide",
)

st.title("Marine Contaminant Diffusion")
st.markdown(
    "Estimates contaminant concentrations away from a discharge and across "
    "the Toulon roadstead, and classifies the resulting risk."
)

provider = MockDataProvider()

# ── Sidebar Controls ─────────────────────────────────────────────────────────

st.sidebar.header("Source & Environment")

source_concentration = st.sidebar.number_input(
    "Source Concentration (µg/L)", min_value=0.001, value=15.0, step=0.5,
)
temperature = st.sidebar.slider("Temperature (°C)", 0.0, 35.0, 20.0, 0.5)
ph = st.sidebar.slider("pH", 5.0, 10.0, 8.1, 0.1)
salinity = st.sidebar.slider("Salinity (PSU)", 0.0, 45.0, DEFAULT_SALINITY_PSU, 0.5)
current_speed = st.sidebar.slider("Current Speed (m/s)", 0.0, 3.0, DEFAULT_CURRENT_SPEED, 0.1)
wind_speed = st.sidebar.slider("Wind Speed (m/s)", 0.0, 30.0, DEFAULT_WIND_SPEED, 0.5)
depth = st.sidebar.slider("Depth (m)", 0.0, 50.0, DEFAULT_DEPTH_M, 0.5)
distance = st.sidebar.slider("Distance From Source (km)", 0.0, 30.0, 5.0, 0.5)
toxic_threshold = st.sidebar.number_input(
    "Toxic Threshold (µg/L)", min_value=0.001, value=DEFAULT_TOXIC_THRESHOLD, step=0.5,
)

# ── Single-Point Prediction ─────────────────────────────────────────────────

vector = EnvironmentalVector(
    source_concentration=source_concentration,
    distance=distance,
    temperature=temperature,
    ph=ph,
    salinity=salinity,
    current_speed=current_speed,
    wind_speed=wind_speed,
    depth=depth,
)
for problem in check_domain(vector):
    st.warning(problem)

prediction = predict(vector)
risk = assess_risk(prediction, toxic_threshold)

st.header("Prediction")
m1, m2, m3, m4 = st.columns(4)
m1.metric("Predicted Concentration", f"{prediction.predicted_concentration:.4f} µg/L")
m2.metric("Risk", f"{risk.risk_level}: {risk.risk_category}")
m3.metric("Safety Margin", f"{risk.safety_margin:.0%}")
m4.metric("Confidence", f"{prediction.confidence:.0%}")

if risk.exceeds_threshold:
    st.error("Predicted concentration exceeds the toxic threshold.")

base = {
    "source_concentration": source_concentration,
    "temperature": temperature,
    "ph": ph,
    "salinity": salinity,
    "current_speed": current_speed,
    "wind_speed": wind_speed,
    "depth": depth,
}
curve_distances = np.linspace(0.0, 30.0, 121)
curve = concentration_profile(base, curve_distances)
markers = predict_multiple_distances(base, DEFAULT_PROFILE_DISTANCES_KM)

col_profile, col_factors = st.columns([2, 1])
with col_profile:
    st.plotly_chart(
        create_distance_profile_figure(curve_distances, curve, toxic_threshold, markers),
        use_container_width=True,
    )
with col_factors:
    st.plotly_chart(create_factor_figure(prediction.factors), use_container_width=True)

# ── Multi-Source Field ──────────────────────────────────────────────────────

st.header("Toulon Roadstead")

slots = provider.get_time_slots()
slot_labels = [s.label for s in slots]
slot_label = st.selectbox("Period", slot_labels, index=len(slot_labels) - 1)
slot = slots[slot_labels.index(slot_label)]

zone_level = st.radio(
    "Pollution Zone Level", ZONE_LEVELS,
    index=ZONE_LEVELS.index(slot.concentration_level), horizontal=True,
)
seed = st.number_input("Random Seed", min_value=0, value=42, step=1)

sources = apply_time_slot(provider.get_point_sources(), slot)
zones = apply_time_slot(provider.get_area_sources(), slot)

q1, q2 = st.columns(2)
query_lat = q1.number_input("Latitude", value=43.1000, step=0.001, format="%.4f")
query_lng = q2.number_input("Longitude", value=5.9500, step=0.001, format="%.4f")

rng = np.random.default_rng(int(seed))
field_prediction = predict_at(
    (query_lat, query_lng), sources, slot.wind_speed,
    zones=zones, zone_level=zone_level, rng=rng,
)

lats = np.linspace(MAP_CENTER[0] - MAP_HALF_SPAN_DEG, MAP_CENTER[0] + MAP_HALF_SPAN_DEG, MAP_GRID_POINTS)
lngs = np.linspace(MAP_CENTER[1] - MAP_HALF_SPAN_DEG * 2, MAP_CENTER[1] + MAP_HALF_SPAN_DEG * 2, MAP_GRID_POINTS)
grid = concentration_grid(
    lats, lngs, sources, slot.wind_speed,
    zones=zones, zone_level=zone_level, rng=np.random.default_rng(int(seed)),
)

col_map, col_inf = st.columns([2, 1])
with col_map:
    st.plotly_chart(
        create_field_figure(lats, lngs, grid, sources, zones, (query_lat, query_lng)),
        use_container_width=True,
    )
with col_inf:
    st.metric("Total Concentration", f"{field_prediction.total_concentration:.6f} ng/L")
    st.plotly_chart(create_influence_figure(field_prediction), use_container_width=True)
