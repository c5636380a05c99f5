"""
BirthWindow - Folium Location Map

Leaflet map centred on the analysed location with:
  - Street / satellite base layers and layer control
  - Score-coloured marker with a popup summary
  - Equator and ±35° reference-latitude lines
  - Score colour legend
"""

from typing import Optional

import branca.colormap as cm
import folium

from analysis.score_labels import score_color, score_label
from config.constants import REFERENCE_LATITUDE
from models.data_types import LocationData


def build_location_map(
    location: LocationData,
    score: Optional[float] = None,
    zoom: int = 4,
) -> folium.Map:
    """Build a Folium map for one location, optionally annotated with its score."""
    lat, lon = location.latitude, location.longitude

    m = folium.Map(location=[lat, lon], zoom_start=zoom, tiles=None)

    folium.TileLayer(
        tiles="OpenStreetMap",
        name="🗺 Street Map",
        overlay=False,
        control=True,
    ).add_to(m)
    folium.TileLayer(
        tiles="https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
        attr="Esri, Maxar, Earthstar Geographics",
        name="🛰 Satellite",
        overlay=False,
        control=True,
    ).add_to(m)

    # ------------------------------------------------------------------
    # Reference latitudes
    # ------------------------------------------------------------------
    lines = folium.FeatureGroup(name="Reference latitudes")
    for ref_lat, label, color in [
        (0.0, "Equator", "#f59e0b"),
        (REFERENCE_LATITUDE, f"{REFERENCE_LATITUDE:.0f}°N", "#10b981"),
        (-REFERENCE_LATITUDE, f"{REFERENCE_LATITUDE:.0f}°S", "#10b981"),
    ]:
        folium.PolyLine(
            locations=[[ref_lat, -180], [ref_lat, 180]],
            color=color,
            weight=1.5,
            dash_array="6 6",
            tooltip=label,
        ).add_to(lines)
    lines.add_to(m)

    # ------------------------------------------------------------------
    # Marker
    # ------------------------------------------------------------------
    place = ", ".join(p for p in (location.city, location.country) if p) or "Selected location"
    if score is not None:
        color = score_color(score)
        header = f"Optimality: {score:.0f} / 100 ({score_label(score)})"
        icon_color = "green" if score >= 80 else ("orange" if score >= 60 else "red")
    else:
        color = "#3b82f6"
        header = place
        icon_color = "blue"

    popup_html = f"""
    <div style="font-family:'Segoe UI',sans-serif;min-width:200px;line-height:1.6;">
      <div style="background:{color};color:white;padding:6px 10px;border-radius:6px 6px 0 0;
                  font-weight:700;font-size:14px;text-align:center;">
        {header}
      </div>
      <div style="padding:8px 10px;background:#f8f9fa;border-radius:0 0 6px 6px;">
        <b>Location</b>: {place}<br>
        <b>Coordinates</b>: {lat:.4f}, {lon:.4f}<br>
        <b>Hemisphere</b>: {"Northern" if lat > 0 else "Southern"}
      </div>
    </div>
    """

    folium.Marker(
        location=[lat, lon],
        popup=folium.Popup(popup_html, max_width=260),
        tooltip=f"📍 {place}",
        icon=folium.Icon(color=icon_color, icon="child", prefix="fa"),
    ).add_to(m)

    if location.accuracy:
        folium.Circle(
            location=[lat, lon],
            radius=float(location.accuracy),
            color=color,
            fill=True,
            fill_opacity=0.1,
            weight=1,
        ).add_to(m)

    colormap = cm.LinearColormap(
        colors=["#ef4444", "#f59e0b", "#10b981"],
        index=[0, 60, 100],
        vmin=0, vmax=100,
        caption="Optimality Score (0–100)",
    )
    colormap.add_to(m)

    folium.LayerControl(collapsed=False).add_to(m)
    return m
