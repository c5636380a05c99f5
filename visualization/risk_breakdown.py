"""
BirthWindow - Risk Breakdown Charts

Diverging bar chart of signed risk-factor impacts and a bar chart of the
four weighted category scores.
"""

from typing import Dict, Sequence

import plotly.graph_objects as go

from config.constants import CATEGORY_COLORS, CATEGORY_WEIGHTS, SEVERITY_COLORS
from models.data_types import RiskFactor


def build_risk_factor_bar(risk_factors: Sequence[RiskFactor]) -> go.Figure:
    """
    Horizontal diverging bars: negative impacts left (red side), benefits right.

    Parameters
    ----------
    risk_factors : sequence of RiskFactor

    Returns
    -------
    plotly.graph_objects.Figure
    """
    ordered = sorted(risk_factors, key=lambda f: f.impact)
    names = [f.name for f in ordered]
    impacts = [f.impact for f in ordered]
    colors = [
        SEVERITY_COLORS["HIGH"] if f.impact < 0 and f.severity == "HIGH"
        else SEVERITY_COLORS["MEDIUM"] if f.impact < 0
        else SEVERITY_COLORS["LOW"]
        for f in ordered
    ]

    fig = go.Figure(go.Bar(
        x=impacts,
        y=names,
        orientation="h",
        marker=dict(color=colors, line=dict(color="white", width=1)),
        text=[f"{v:+d}" for v in impacts],
        textposition="outside",
        customdata=[[f.category, f.severity, f.description] for f in ordered],
        hovertemplate=(
            "<b>%{y}</b> (%{customdata[0]})<br>"
            "Impact: %{x:+d} · %{customdata[1]}<br>"
            "%{customdata[2]}<extra></extra>"
        ),
    ))

    fig.add_vline(x=0, line_color="#888", line_width=1)

    span = max([abs(v) for v in impacts] + [10]) * 1.3
    fig.update_layout(
        xaxis=dict(range=[-span, span], title="Impact (negative = risk, positive = benefit)",
                   gridcolor="#f5f5f5", zeroline=False),
        yaxis=dict(title=""),
        height=max(220, 38 * len(ordered) + 60),
        margin=dict(l=10, r=20, t=15, b=30),
        paper_bgcolor="white",
        plot_bgcolor="white",
        font=dict(family="Inter, sans-serif", size=12),
        showlegend=False,
    )
    return fig


def build_category_breakdown(category_scores: Dict[str, float]) -> go.Figure:
    """
    Category scores (0–100) with their weight in the overall score.

    Parameters
    ----------
    category_scores : dict  {"solar": float, "seasonal": float, ...}
    """
    keys = [k for k in CATEGORY_WEIGHTS if k in category_scores]
    labels = [f"{k.title()} ({CATEGORY_WEIGHTS[k]:.0%})" for k in keys]
    values = [category_scores[k] for k in keys]

    fig = go.Figure(go.Bar(
        x=labels,
        y=values,
        marker=dict(color=[CATEGORY_COLORS[k] for k in keys]),
        text=[f"{v:.0f}" for v in values],
        textposition="outside",
        hovertemplate="<b>%{x}</b>: %{y:.1f}/100<extra></extra>",
    ))

    fig.update_layout(
        yaxis=dict(range=[0, 115], title="Score (0–100)", gridcolor="#f5f5f5"),
        xaxis=dict(title=""),
        height=250,
        margin=dict(l=10, r=10, t=15, b=20),
        paper_bgcolor="white",
        plot_bgcolor="white",
        font=dict(family="Inter, sans-serif", size=11),
        showlegend=False,
    )
    return fig
