"""
src/callbacks/trends.py
────────────────────────
Activity trends page callbacks.
"""
from __future__ import annotations

import plotly.graph_objects as go
from dash import Input, Output, html

from config.zones import ZONE_CONFIG, parse_zone
from src.analytics.anomaly import DEFAULT_THRESHOLD
from src.analytics.dashboard import pressure_trends
from src.data import store
from src.data.errors import DataUnavailable
from src.logging_setup import get_logger

logger = get_logger(__name__)

CARD_BG = "#161b22"
GRID_CLR = "#30363d"
MUTED = "#8b949e"
PLOTLY_TMPL = "plotly_dark"


def _layout(height: int = 300) -> dict:
    return {
        "template": PLOTLY_TMPL,
        "paper_bgcolor": CARD_BG,
        "plot_bgcolor": CARD_BG,
        "margin": {"l": 10, "r": 10, "t": 10, "b": 10},
        "font": {"color": "#c9d1d9", "size": 11},
        "xaxis": {"gridcolor": GRID_CLR},
        "yaxis": {"gridcolor": GRID_CLR},
        "legend": {"bgcolor": "rgba(0,0,0,0)", "font": {"size": 10}},
        "height": height,
        "showlegend": True,
    }


def _empty(message: str):
    empty = go.Figure()
    empty.update_layout(**_layout())
    return empty, empty, html.Div(message, style={"color": MUTED})


def register(app) -> None:

    @app.callback(
        [
            Output("trends-main-chart", "figure"),
            Output("trends-patients-chart", "figure"),
            Output("trends-spike-summary", "children"),
            Output("trends-chart-title", "children"),
        ],
        [
            Input("trends-zone", "value"),
            Input("trends-window", "value"),
            Input("trends-options", "value"),
            Input("interval-live", "n_intervals"),
        ],
    )
    def update_trends(zone_value: str, window_hours: int, options: list, n_intervals: int):
        options = options or []
        zone = None if zone_value == "all" else parse_zone(zone_value)
        chart_title = f"{zone.value if zone else 'All zones'}: ambulance dispatches per hour"

        try:
            frame = store.get_activity_frame(hours=int(window_hours), zone=zone)
        except DataUnavailable:
            logger.exception("Record store unavailable; trends not drawn")
            return (*_empty("Record store unavailable."), chart_title)

        hourly = pressure_trends(frame)
        if hourly.empty:
            return (*_empty("No activity in this window."), chart_title)

        # ── Dispatch count chart ──────────────────────────────────────────────
        fig = go.Figure()
        patients_fig = go.Figure()
        for zone_key, group in hourly.groupby("zone", sort=False):
            cfg = ZONE_CONFIG[parse_zone(zone_key)]
            fig.add_scatter(
                x=group["hour"],
                y=group["log_count"],
                mode="lines",
                line={"color": cfg["color"], "width": 1.3},
                name=cfg["name"],
                hovertemplate="%{x|%d/%m %H:%M}<br>%{y} dispatches<extra></extra>",
            )
            if "rolling" in options:
                fig.add_scatter(
                    x=group["hour"],
                    y=group["log_count"].rolling(24, min_periods=2).mean(),
                    mode="lines",
                    line={"color": cfg["color"], "width": 1, "dash": "dash"},
                    name=f"{cfg['name']} 24h avg",
                    opacity=0.7,
                )
            if "spikes" in options:
                spikes = group[group["spike"]]
                if not spikes.empty:
                    fig.add_scatter(
                        x=spikes["hour"],
                        y=spikes["log_count"],
                        mode="markers",
                        marker={"color": "#da3633", "size": 7, "symbol": "x"},
                        name=f"{cfg['name']} spike",
                    )

            patients_fig.add_scatter(
                x=group["hour"],
                y=group["mean_patients"],
                mode="lines",
                line={"color": cfg["color"], "width": 1.2},
                name=cfg["name"],
                hovertemplate="%{x|%d/%m %H:%M}<br>%{y:.2f} patients<extra></extra>",
            )

        fig.update_layout(**_layout(300))
        patients_fig.update_layout(**_layout(220))

        # ── Spike summary ─────────────────────────────────────────────────────
        spikes = hourly[hourly["spike"]].sort_values("hour", ascending=False)
        summary_items = [
            html.Div([
                html.Div(f"{len(spikes)}", style={"fontSize": "1.8rem", "fontWeight": "700", "color": "#da3633" if len(spikes) else "#2ea44f"}),
                html.Div(f"Hours above {DEFAULT_THRESHOLD:.1f}σ", style={"fontSize": ".7rem", "color": MUTED}),
            ], style={"marginBottom": "10px"}),
            html.Div([
                html.Div(f"{int(hourly['log_count'].sum())}", style={"fontSize": "1.2rem", "fontWeight": "700", "color": MUTED}),
                html.Div("Dispatches in window", style={"fontSize": ".7rem", "color": MUTED}),
            ], style={"marginBottom": "14px"}),
        ]
        if not spikes.empty:
            summary_items.append(html.Div("Latest spikes:", style={"fontSize": ".7rem", "color": MUTED, "textTransform": "uppercase", "marginBottom": "6px"}))
            for _, row in spikes.head(5).iterrows():
                summary_items.append(
                    html.Div(
                        f"• {row['zone']} {row['hour']:%d/%m %H:%M} ({row['log_count']} dispatches, z={row['log_count_zscore']:.1f})",
                        style={"fontSize": ".72rem", "color": "#f0883e", "marginBottom": "3px"},
                    )
                )

        return fig, patients_fig, html.Div(summary_items), chart_title
