"""
BirthWindow - Plotly Optimality Gauge

Speedometer-style gauge for the overall 0–100 optimality score.
"""

import plotly.graph_objects as go

from analysis.score_labels import score_color, score_description

GAUGE_STEPS = [
    {"range": [0, 40], "color": "#fadbd8"},     # Poor
    {"range": [40, 60], "color": "#fdebd0"},    # Fair
    {"range": [60, 80], "color": "#fef9e7"},    # Good
    {"range": [80, 100], "color": "#d5f5e3"},   # Optimal
]


def build_score_gauge(score: float, title: str = "Birth Timing Optimality") -> go.Figure:
    """
    Build a Plotly gauge for a 0–100 optimality score (higher is better).

    Parameters
    ----------
    score : float  0–100
    title : str

    Returns
    -------
    plotly.graph_objects.Figure
    """
    color = score_color(score)

    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=score,
        number={"font": {"size": 40, "color": color}, "suffix": "/100"},
        title={
            "text": f"{title}<br><span style='font-size:12px;color:#888'>"
                    f"{score_description(score)} Timing</span>",
            "font": {"size": 14, "color": "#555"},
        },
        gauge={
            "axis": {
                "range": [0, 100],
                "tickwidth": 1,
                "tickcolor": "#aaa",
                "tickvals": [0, 40, 60, 80, 100],
            },
            "bar": {"color": color, "thickness": 0.25},
            "bgcolor": "white",
            "borderwidth": 0,
            "steps": GAUGE_STEPS,
            "threshold": {
                "line": {"color": color, "width": 4},
                "thickness": 0.75,
                "value": score,
            },
        },
    ))

    fig.update_layout(
        height=240,
        margin=dict(l=20, r=20, t=60, b=10),
        paper_bgcolor="white",
        font=dict(family="Inter, sans-serif"),
    )
    return fig
