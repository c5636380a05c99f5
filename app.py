"""
BirthWindow — Main Streamlit Dashboard
======================================
Birth Timing Optimality Calculator

Entry point: streamlit run app.py
"""

import json
import logging
from datetime import date, datetime

import streamlit as st
from dotenv import load_dotenv
from streamlit_folium import st_folium
from streamlit_js_eval import get_geolocation

load_dotenv()

# ── Internal imports ──────────────────────────────────────────────────────────
from config import settings
from config.constants import SEVERITY_COLORS
from config.known_locations import KNOWN_LOCATIONS, DEFAULT_LOCATION_KEY

from data_fetch.geocoding_client import GeocodingClient, GeocodingError
from data_fetch.geolocation import (
    GeolocationError,
    location_from_browser_payload,
    location_from_coordinates,
)

from models.data_types import InvalidInputError, LocationData
from models.optimal_timing_model import OptimalTimingEngine
from models.seasonal_risk_model import get_optimal_birth_months

from analysis.report import build_export_payload, export_filename
from analysis.score_labels import score_color, score_description, score_label
from analysis.timing_range import build_monthly_scores
from analysis.trend_analysis import compute_score_trend

from visualization.location_map import build_location_map
from visualization.risk_breakdown import build_category_breakdown, build_risk_factor_bar
from visualization.score_gauge import build_score_gauge
from visualization.timeline_chart import build_timeline_chart

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("birthwindow.app")

# ─────────────────────────────────────────────────────────────────────────────
# Page config
# ─────────────────────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="BirthWindow — Birth Timing Optimality",
    page_icon="👶",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
  .rec-card {
      background: #f8fafc; border-radius: 8px; padding: 10px 16px;
      border-left: 5px solid #3b82f6; margin-bottom: 8px; line-height: 1.6;
  }
  .rec-card.critical { border-left-color: #ef4444; background: #fef2f2; }
  .rec-card.delay    { border-left-color: #f59e0b; background: #fffbeb; }
  .factor-tag {
      display: inline-block; border-radius: 6px; padding: 3px 10px;
      font-size: 0.78rem; margin: 2px; font-weight: 500; color: white;
  }
  .stMetric label { font-size: 0.78rem !important; }
  [data-testid="stSidebar"] {
      background: linear-gradient(180deg, #f8fafc 0%, #eef2f7 100%);
  }
  hr { border-color: #e2e8f0 !important; }
</style>
""", unsafe_allow_html=True)


# ─────────────────────────────────────────────────────────────────────────────
# Shared resources and cached computations
# ─────────────────────────────────────────────────────────────────────────────
@st.cache_resource(show_spinner=False)
def get_engine() -> OptimalTimingEngine:
    """One engine (and solar sample cache) per server process."""
    return OptimalTimingEngine()


@st.cache_resource(show_spinner=False)
def get_geocoder() -> GeocodingClient:
    return GeocodingClient()


@st.cache_data(ttl=3600, show_spinner=False)
def run_analysis(lat: float, lon: float, city: str, country: str, target_iso: str, range_months: int):
    """Single-date result, timing range and report for one location/date."""
    engine = get_engine()
    location = LocationData(latitude=lat, longitude=lon, city=city, country=country)
    target = date.fromisoformat(target_iso)

    result = engine.calculate(location, target)
    timing = engine.analyze_range(location, target, range_months)
    report = engine.report(location, target)
    return result, timing, report


# ─────────────────────────────────────────────────────────────────────────────
# Session state defaults
# ─────────────────────────────────────────────────────────────────────────────
if "location" not in st.session_state:
    default = KNOWN_LOCATIONS[DEFAULT_LOCATION_KEY]
    st.session_state["location"] = LocationData(
        latitude=default["latitude"],
        longitude=default["longitude"],
        city=default["city"],
        country=default["country"],
    )
if "geo_error" not in st.session_state:
    st.session_state["geo_error"] = None

# ─────────────────────────────────────────────────────────────────────────────
# Sidebar
# ─────────────────────────────────────────────────────────────────────────────
with st.sidebar:
    st.markdown("""
    <div style="text-align:center;padding:8px 0;">
      <span style="font-size:2.2rem;">👶</span><br>
      <span style="font-size:1.3rem;font-weight:700;color:#3b82f6;">BirthWindow</span><br>
      <span style="font-size:0.72rem;color:#888;">Birth Timing Optimality Calculator</span>
    </div>
    """, unsafe_allow_html=True)
    st.divider()

    input_mode = st.radio(
        "📍 Location Input",
        ["Search Address", "Use My Location", "Enter Coordinates"],
    )

    if input_mode == "Search Address":
        geocoder = get_geocoder()
        address = st.text_input("City or address", placeholder="e.g. London, UK")
        if address and len(address.strip()) >= 2:
            suggestions = geocoder.suggest_locations(address.strip())
            if suggestions:
                st.caption("Suggestions: " + " · ".join(suggestions))
        if st.button("🔍 Look up", type="primary"):
            try:
                hit = geocoder.geocode(address)
                st.session_state["location"] = hit.to_location()
                st.success(f"📍 {hit.formatted_address}")
            except GeocodingError as e:
                st.error(f"⚠️ {e.message}")

    elif input_mode == "Use My Location":
        payload = get_geolocation()
        if payload is None:
            st.info("Waiting for browser location permission…")
        else:
            try:
                st.session_state["location"] = location_from_browser_payload(payload)
                st.session_state["geo_error"] = None
            except GeolocationError as e:
                st.session_state["geo_error"] = e.message
        if st.session_state["geo_error"]:
            st.error(st.session_state["geo_error"])

    else:  # Enter Coordinates
        lat_in = st.number_input("Latitude", value=40.7128, min_value=-90.0, max_value=90.0, format="%.4f")
        lon_in = st.number_input("Longitude", value=-74.0060, min_value=-180.0, max_value=180.0, format="%.4f")
        if st.button("📌 Use coordinates", type="primary"):
            try:
                st.session_state["location"] = location_from_coordinates(lat_in, lon_in)
            except InvalidInputError as e:
                st.error(f"⚠️ {e}")

    st.divider()

    today = date.today()
    target_date = st.date_input(
        "🗓 Target birth date",
        value=date(today.year + 1, today.month, 15),
        min_value=date(1964, 1, 1),
        max_value=date(2060, 12, 31),
    )
    range_months = st.slider("Analysis window (± months)", min_value=6, max_value=36, value=24, step=6)

    st.divider()
    st.markdown("""
    <div style="font-size:0.78rem;line-height:1.8;color:#555;">
      🟡 <b>Solar activity</b>: simulated cycle model (cycles 20–25)<br>
      🟢 <b>Geocoding</b>: OpenStreetMap Nominatim<br>
      🟢 <b>Reverse geocoding</b>: BigDataCloud<br>
      <span style="color:#888;">For education only. Not medical advice.</span>
    </div>
    """, unsafe_allow_html=True)


# ─────────────────────────────────────────────────────────────────────────────
# Main
# ─────────────────────────────────────────────────────────────────────────────
location: LocationData = st.session_state["location"]
place = ", ".join(p for p in (location.city, location.country) if p) or "Unknown location"

st.title("👶 BirthWindow — Birth Timing Optimality")
st.caption(f"{place} · {location.latitude:.4f}, {location.longitude:.4f} · "
           f"Target {target_date.strftime('%B %Y')}")

with st.spinner("Scoring every month in the window…"):
    try:
        result, timing, report = run_analysis(
            location.latitude, location.longitude,
            location.city or "", location.country or "",
            target_date.isoformat(), range_months,
        )
    except InvalidInputError as e:
        st.error(f"⚠️ Invalid input: {e}")
        st.stop()

score = result.overall_score
color = score_color(score)

# ─────────────────────────────────────────────────────────────────────────────
# ① Top metrics row
# ─────────────────────────────────────────────────────────────────────────────
m1, m2, m3, m4, m5 = st.columns(5)
with m1:
    st.metric(
        "Optimality", f"{score}/100",
        delta=f"{score_label(score)} · {result.confidence_level} confidence",
        delta_color="off",
        help="Weighted blend: solar cycle 40%, seasonal 35%, latitude 15%, environment 10%.",
    )
with m2:
    delta = result.life_expectancy_delta
    st.metric("Lifespan Impact", f"{'+' if delta >= 0 else ''}{delta} yrs")
with m3:
    st.metric(
        "Sunspots", f"{result.solar_data.sunspot_number}",
        delta=f"{result.solar_data.solar_risk} solar risk",
        delta_color="off",
    )
with m4:
    st.metric("Vitamin D", f"{result.seasonal_data.vitamin_d_score}/100")
with m5:
    st.metric("School-Age Advantage", f"{result.seasonal_data.relative_age_advantage}/100")

st.divider()

# ─────────────────────────────────────────────────────────────────────────────
# ② Gauge + map
# ─────────────────────────────────────────────────────────────────────────────
gauge_col, map_col = st.columns([1.0, 1.3], gap="medium")
with gauge_col:
    st.plotly_chart(build_score_gauge(score), use_container_width=True)
    st.markdown(
        f"<div style='text-align:center;color:{color};font-weight:600;'>"
        f"{score_description(score)} Timing</div>",
        unsafe_allow_html=True,
    )
    best_months = get_optimal_birth_months(location, target_date.year)
    st.caption("Best seasonal months here: " +
               ", ".join(date(2000, m, 1).strftime("%B") for m in best_months))
with map_col:
    st_folium(build_location_map(location, score), height=360, width="100%", returned_objects=[])

st.divider()

# ─────────────────────────────────────────────────────────────────────────────
# ③ Risk breakdown
# ─────────────────────────────────────────────────────────────────────────────
st.subheader("📊 Risk Breakdown")
f_col, c_col = st.columns([1.4, 1.0])
with f_col:
    st.plotly_chart(build_risk_factor_bar(result.risk_factors), use_container_width=True)
    tags = "".join(
        f"<span class='factor-tag' style='background:{SEVERITY_COLORS[f.severity]}'>"
        f"{f.name} ({f.impact:+d})</span>"
        for f in result.risk_factors
    )
    st.markdown(tags, unsafe_allow_html=True)
with c_col:
    st.plotly_chart(build_category_breakdown(result.category_scores), use_container_width=True)

st.divider()

# ─────────────────────────────────────────────────────────────────────────────
# ④ Timeline
# ─────────────────────────────────────────────────────────────────────────────
st.subheader("📈 Timing Across the Window")
monthly = build_monthly_scores(timing)
trend = compute_score_trend(monthly["score"].tolist())
st.plotly_chart(
    build_timeline_chart(
        monthly,
        optimal_dates=[w.birth_date for w in timing.optimal_windows],
        selected_date=target_date,
        trend=trend,
    ),
    use_container_width=True,
)
t1, t2, t3 = st.columns(3)
t1.metric("Best month", date(2000, timing.best_overall_month, 1).strftime("%B"))
t2.metric("Worst month", date(2000, timing.worst_overall_month, 1).strftime("%B"))
t3.metric("Next-year outlook", timing.yearly_trend.title())
st.caption(trend["description"])

if report.alternatives:
    st.markdown("**Alternative dates**")
    alt_cols = st.columns(len(report.alternatives))
    for col, alt in zip(alt_cols, report.alternatives):
        col.metric(alt.birth_date.strftime("%B %Y"), f"{alt.overall_score}/100",
                   delta=alt.overall_score - score)

st.divider()

# ─────────────────────────────────────────────────────────────────────────────
# ⑤ Recommendations
# ─────────────────────────────────────────────────────────────────────────────
st.subheader("🩺 Recommendations")
for rec in result.prioritized_recommendations:
    css = {"CRITICAL": "critical", "DELAY": "delay"}.get(rec.priority, "")
    st.markdown(f"<div class='rec-card {css}'>{rec.text}</div>", unsafe_allow_html=True)

with st.expander("📚 Report summary & scientific basis", expanded=False):
    st.text(report.summary)
    for ref in report.scientific_basis:
        st.markdown(f"- {ref}")

st.divider()

# ─────────────────────────────────────────────────────────────────────────────
# ⑥ Download
# ─────────────────────────────────────────────────────────────────────────────
st.subheader("📥 Download Report")
payload = build_export_payload(location, result)
st.download_button(
    label="📄 Download JSON Report",
    data=json.dumps(payload, indent=2, ensure_ascii=False),
    file_name=export_filename(location, result.birth_date),
    mime="application/json",
)
st.caption(f"Generated {datetime.now().strftime('%d %B %Y · %H:%M')}")
