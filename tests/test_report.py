"""Tests for the optimality report and export payload."""

import json
from datetime import date, datetime, timezone

from analysis.report import (
    _signed,
    build_export_payload,
    export_filename,
    generate_optimality_report,
    report_to_json,
)
from analysis.score_labels import score_color, score_description, score_label
from config.constants import SCIENTIFIC_BASIS
from models.data_types import LocationData


def test_report_summary_lines(new_york, midpoint_source):
    """Test the four summary lines for New York in July 2024."""
    report = generate_optimality_report(new_york, date(2024, 7, 15), midpoint_source)
    assert report.summary.splitlines() == [
        "Birth timing analysis for July 2024 in New York, United States:",
        "Overall optimality score: 58/100 (LOW confidence)",
        "Estimated lifespan impact: -3.5 years",
        "Primary risk factors: 2 high-risk factors identified",
    ]


def test_report_alternatives_exclude_selected(new_york, midpoint_source):
    """Test at most three alternatives, never the selected date."""
    selected = date(2024, 7, 15)
    report = generate_optimality_report(new_york, selected, midpoint_source)
    assert len(report.alternatives) <= 3
    assert all(a.birth_date != selected for a in report.alternatives)
    scores = [a.overall_score for a in report.alternatives]
    assert scores == sorted(scores, reverse=True)


def test_report_scientific_basis(new_york, midpoint_source):
    """Test the fixed citation list is attached."""
    report = generate_optimality_report(new_york, date(2024, 7, 15), midpoint_source)
    assert list(report.scientific_basis) == SCIENTIFIC_BASIS
    assert len(report.scientific_basis) == 5


def test_report_json_wire_shape(new_york, midpoint_source):
    """Test JSON export keys."""
    report = generate_optimality_report(new_york, date(2024, 7, 15), midpoint_source)
    data = json.loads(report_to_json(report))
    assert set(data) == {"summary", "analysis", "alternatives", "scientificBasis"}
    assert data["analysis"]["overallScore"] == 58


def test_signed_lifespan_formatting():
    """Test lifespan deltas carry an explicit sign."""
    assert _signed(0.8) == "+0.8"
    assert _signed(0.0) == "+0"
    assert _signed(-3.5) == "-3.5"


def test_export_payload(new_york, midpoint_source):
    """Test the birth-report download body."""
    report = generate_optimality_report(new_york, date(2024, 7, 15), midpoint_source)
    generated = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    payload = build_export_payload(new_york, report.analysis, generated_at=generated)

    assert payload["title"] == "Birth Analysis Report for New York, United States"
    assert payload["birthDate"] == "July 15, 2024"
    assert payload["location"]["coordinates"] == "40.7128, -74.006"
    assert payload["generatedAt"] == "2024-01-02T03:04:05+00:00"
    assert set(payload["analysis"]["riskFactors"][0]) == {"name", "category", "severity", "description"}
    assert payload["analysis"]["recommendations"] == list(report.analysis.recommendations)
    json.dumps(payload)


def test_export_filename(new_york):
    """Test spaces in the city become dashes."""
    assert export_filename(new_york, date(2024, 7, 15)) == "birth-report-2024-07-15-New-York.json"


def test_score_labels():
    """Test score tiers, descriptions and colours."""
    assert score_label(85) == "Optimal"
    assert score_label(60) == "Good"
    assert score_label(45) == "Fair"
    assert score_label(10) == "Poor"
    assert score_description(95) == "Excellent"
    assert score_description(75) == "Good"
    assert score_description(55) == "Below Average"
    assert score_description(0) == "Poor"
    assert score_color(90) == "#10b981"
    assert score_color(10) == "#ef4444"


def test_summary_without_place_names(midpoint_source):
    """Test a coordinates-only location reads Unknown in the summary."""
    bare = LocationData(latitude=40.7128, longitude=-74.006)
    report = generate_optimality_report(bare, date(2024, 7, 15), midpoint_source)
    first = report.summary.splitlines()[0]
    assert first == "Birth timing analysis for July 2024 in Unknown, Unknown:"
    assert "None" not in report.summary
