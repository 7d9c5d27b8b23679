"""
src/layout/components/confidence_gauge.py
──────────────────────────────────────────
Prediction confidence gauge using Plotly indicator chart.
"""
from __future__ import annotations

import plotly.graph_objects as go
from dash import dcc

CARD_BG = "#161b22"
MAX_CONFIDENCE = 95


def _gauge_color(confidence: float) -> str:
    if confidence >= 80:
        return "#2ea44f"
    if confidence >= 65:
        return "#58a6ff"
    if confidence >= 50:
        return "#e8a020"
    return "#8b949e"


def confidence_gauge(
    confidence: float,
    title: str = "Confidence",
    height: int = 140,
) -> dcc.Graph:
    """
    Plotly gauge for a prediction confidence in [0, 95].

    Args:
        confidence: Value shown on the gauge
        title: Label shown above the number
        height: Figure height in px
    """
    color = _gauge_color(confidence)

    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=confidence,
        number={"suffix": "%", "font": {"color": color, "size": 22}},
        title={"text": title, "font": {"color": "#8b949e", "size": 11}},
        gauge={
            "axis": {
                "range": [0, MAX_CONFIDENCE],
                "tickwidth": 1,
                "tickcolor": "#30363d",
                "tickfont": {"color": "#8b949e", "size": 8},
            },
            "bar": {"color": color, "thickness": 0.3},
            "bgcolor": "rgba(0,0,0,0)",
            "borderwidth": 0,
            "steps": [
                {"range": [0, 50], "color": "rgba(139,148,158,0.10)"},
                {"range": [50, 65], "color": "rgba(232,160,32,0.10)"},
                {"range": [65, 80], "color": "rgba(88,166,255,0.10)"},
                {"range": [80, MAX_CONFIDENCE], "color": "rgba(46,164,79,0.10)"},
            ],
        },
    ))

    fig.update_layout(
        paper_bgcolor=CARD_BG,
        plot_bgcolor=CARD_BG,
        margin=dict(l=15, r=15, t=30, b=5),
        height=height,
        font=dict(color="#c9d1d9"),
    )

    return dcc.Graph(
        figure=fig,
        config={"displayModeBar": False},
        style={"height": f"{height}px"},
    )
