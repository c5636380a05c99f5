"""Smoke tests for the Plotly and Folium builders."""

from datetime import date

import folium
import plotly.graph_objects as go

from analysis.timing_range import analyze_timing_range, build_monthly_scores
from analysis.trend_analysis import compute_score_trend
from models.data_types import LocationData, RiskFactor
from models.optimal_timing_model import calculate_optimal_timing
from visualization.location_map import build_location_map
from visualization.risk_breakdown import build_category_breakdown, build_risk_factor_bar
from visualization.score_gauge import build_score_gauge
from visualization.timeline_chart import build_timeline_chart


def test_score_gauge():
    """Test the gauge carries the score and the /100 suffix."""
    fig = build_score_gauge(72)
    assert isinstance(fig, go.Figure)
    indicator = fig.data[0]
    assert indicator.value == 72
    assert indicator.number.suffix == "/100"
    assert "Good Timing" in indicator.title.text


def test_risk_factor_bar_sorted_by_impact():
    """Test bars run from largest risk to largest benefit."""
    factors = [
        RiskFactor(category="seasonal", name="Benefit", impact=20, severity="LOW", description="x"),
        RiskFactor(category="solar", name="Risk", impact=-42, severity="HIGH", description="y"),
        RiskFactor(category="environmental", name="Mild", impact=-5, severity="LOW", description="z"),
    ]
    fig = build_risk_factor_bar(factors)
    bar = fig.data[0]
    assert list(bar.y) == ["Risk", "Mild", "Benefit"]
    assert list(bar.text) == ["-42", "-5", "+20"]


def test_category_breakdown_labels():
    """Test category labels include their weights."""
    fig = build_category_breakdown({"solar": 47.5, "seasonal": 66, "geographic": 59.3, "environmental": 75})
    assert list(fig.data[0].x) == ["Solar (40%)", "Seasonal (35%)", "Geographic (15%)", "Environmental (10%)"]


def test_timeline_chart(new_york, midpoint_source):
    """Test the timeline has score, optimal-window and lifespan traces."""
    analysis = analyze_timing_range(new_york, date(2024, 7, 15), 6, midpoint_source)
    monthly = build_monthly_scores(analysis)
    fig = build_timeline_chart(
        monthly,
        optimal_dates=[w.birth_date for w in analysis.optimal_windows],
        selected_date=date(2024, 7, 15),
        trend=compute_score_trend(list(monthly["score"])),
    )
    names = [t.name for t in fig.data]
    assert names[0] == "Optimality Score"
    assert "Optimal Window" in names
    assert names[-1] == "Life Expectancy"
    stars = next(t for t in fig.data if t.name == "Optimal Window")
    assert len(stars.x) == len(analysis.optimal_windows)


def test_location_map_renders_city(new_york, midpoint_source):
    """Test the map HTML mentions the city and score."""
    score = calculate_optimal_timing(new_york, date(2024, 7, 15), midpoint_source).overall_score
    m = build_location_map(new_york, score=score)
    assert isinstance(m, folium.Map)
    html = m.get_root().render()
    assert "New York" in html
    assert "Optimality: 58 / 100" in html


def test_location_map_accuracy_circle():
    """Test an accuracy radius adds a circle without a score."""
    loc = LocationData(latitude=-33.87, longitude=151.21, city="Sydney", accuracy=120.0)
    html = build_location_map(loc).get_root().render()
    assert "Sydney" in html
    assert "L.circle" in html
