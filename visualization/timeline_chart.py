"""
BirthWindow - Plotly Timing Timeline

Monthly optimality scores across the analysis window with:
  - Score tier reference lines (Optimal / Good / Fair)
  - Highlighted optimal windows and the selected month
  - Optional least-squares trend overlay
  - Estimated life expectancy subplot
"""

from typing import Dict, Optional, Sequence

import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from analysis.score_labels import score_color
from config.constants import SCORE_LEVELS

TIER_LINES = [
    {"score": SCORE_LEVELS["OPTIMAL"]["min"], "label": "Optimal", "dash": "dot"},
    {"score": SCORE_LEVELS["GOOD"]["min"], "label": "Good", "dash": "dash"},
    {"score": SCORE_LEVELS["FAIR"]["min"], "label": "Fair", "dash": "dash"},
]


def build_timeline_chart(
    monthly: pd.DataFrame,
    optimal_dates: Sequence = (),
    selected_date=None,
    trend: Optional[Dict] = None,
) -> go.Figure:
    """
    Parameters
    ----------
    monthly : DataFrame
        Output of ``build_monthly_scores()``.
    optimal_dates : sequence of date
        Birth dates of the optimal windows, marked with stars.
    selected_date : date, optional
        Drawn as a vertical marker.
    trend : dict, optional
        Output of ``compute_score_trend()``; adds a fitted line when significant.
    """
    fig = make_subplots(
        rows=2, cols=1,
        row_heights=[0.70, 0.30],
        shared_xaxes=True,
        vertical_spacing=0.08,
        subplot_titles=("Monthly Optimality Score", "Estimated Life Expectancy (years)"),
    )

    dates = list(monthly["date"])
    scores = list(monthly["score"])

    fig.add_trace(
        go.Scatter(
            x=dates,
            y=scores,
            mode="lines+markers",
            name="Optimality Score",
            line=dict(color="#3b82f6", width=3),
            marker=dict(
                size=8,
                color=[score_color(s) for s in scores],
                line=dict(color="white", width=1.5),
            ),
            customdata=list(monthly["trend"]),
            hovertemplate="<b>%{x|%b %Y}</b><br>Score: %{y}/100 (%{customdata})<extra></extra>",
        ),
        row=1, col=1,
    )

    optimal = {pd.Timestamp(d) for d in optimal_dates}
    if optimal:
        picked = monthly[monthly["date"].isin(optimal)]
        fig.add_trace(
            go.Scatter(
                x=list(picked["date"]),
                y=list(picked["score"]),
                mode="markers",
                name="Optimal Window",
                marker=dict(symbol="star", size=14, color="#10b981",
                            line=dict(color="white", width=1)),
                hovertemplate="<b>%{x|%b %Y}</b><br>Optimal window: %{y}/100<extra></extra>",
            ),
            row=1, col=1,
        )

    if trend and trend.get("significant") and len(dates) > 1:
        n = len(dates)
        slope = trend["slope_per_month"]
        start = trend["intercept"]
        fig.add_trace(
            go.Scatter(
                x=[dates[0], dates[-1]],
                y=[start, start + slope * (n - 1)],
                mode="lines",
                name="Trend",
                line=dict(color="#8b5cf6", width=2, dash="dash"),
                hoverinfo="skip",
            ),
            row=1, col=1,
        )

    for tl in TIER_LINES:
        fig.add_hline(
            y=tl["score"],
            line_dash=tl["dash"],
            line_color=SCORE_LEVELS[tl["label"].upper()]["color"],
            line_width=1,
            annotation_text=tl["label"],
            annotation_position="top right",
            annotation_font_size=10,
            row=1, col=1,
        )

    if selected_date is not None:
        fig.add_vline(
            x=pd.Timestamp(selected_date),
            line_dash="dot",
            line_color="#555",
            line_width=1.5,
        )

    fig.add_trace(
        go.Scatter(
            x=dates,
            y=list(monthly["estimated_lifespan"]),
            mode="lines",
            name="Life Expectancy",
            line=dict(color="#10b981", width=2),
            fill="tozeroy",
            fillcolor="rgba(16,185,129,0.10)",
            hovertemplate="<b>%{x|%b %Y}</b><br>%{y:.1f} years<extra></extra>",
        ),
        row=2, col=1,
    )

    fig.update_layout(
        height=480,
        margin=dict(l=20, r=20, t=40, b=20),
        plot_bgcolor="white",
        paper_bgcolor="white",
        font=dict(family="Inter, sans-serif", size=12),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        hovermode="x unified",
    )
    fig.update_yaxes(range=[0, 105], title_text="Score", row=1, col=1, gridcolor="#f0f0f0")
    fig.update_yaxes(range=[70, 86], title_text="Years", row=2, col=1, gridcolor="#f0f0f0")
    fig.update_xaxes(gridcolor="#f0f0f0")

    return fig
