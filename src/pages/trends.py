"""
src/pages/trends.py
────────────────────
Hourly ambulance activity per zone with spike detection overlay.
"""
import dash_bootstrap_components as dbc
from dash import dcc, html

from config.zones import ZONES

MUTED = "#8b949e"

_ZONE_OPTIONS = [{"label": "All zones", "value": "all"}] + [
    {"label": zone.value, "value": zone.value} for zone in ZONES
]

_WINDOW_OPTIONS = [
    {"label": "24 hours", "value": 24},
    {"label": "3 days", "value": 3 * 24},
    {"label": "7 days", "value": 7 * 24},
    {"label": "14 days", "value": 14 * 24},
]

_LABEL_STYLE = {"fontSize": ".72rem", "color": MUTED, "textTransform": "uppercase"}


def layout() -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H2("Activity Trends", className="page-title"),
                    html.P("Hourly ambulance dispatches and patients per dispatch", className="page-subtitle"),
                ],
                className="page-header",
            ),

            # ── Controls ───────────────────────────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        [
                            html.Label("Zone", style=_LABEL_STYLE),
                            dcc.Dropdown(
                                id="trends-zone",
                                options=_ZONE_OPTIONS,
                                value="all",
                                clearable=False,
                                className="dark-dropdown",
                            ),
                        ],
                        md=3,
                    ),
                    dbc.Col(
                        [
                            html.Label("Window", style=_LABEL_STYLE),
                            dcc.Dropdown(
                                id="trends-window",
                                options=_WINDOW_OPTIONS,
                                value=7 * 24,
                                clearable=False,
                                className="dark-dropdown",
                            ),
                        ],
                        md=2,
                    ),
                    dbc.Col(
                        [
                            html.Label("Options", style=_LABEL_STYLE),
                            dbc.Checklist(
                                id="trends-options",
                                options=[
                                    {"label": " Spikes", "value": "spikes"},
                                    {"label": " Moving average", "value": "rolling"},
                                ],
                                value=["spikes"],
                                inline=True,
                                style={"fontSize": ".82rem", "color": "#c9d1d9", "paddingTop": "8px"},
                                inputStyle={"marginRight": "4px"},
                            ),
                        ],
                        md=4,
                    ),
                ],
                className="g-3 mb-3",
            ),

            # ── Dispatch count chart ───────────────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                html.Div(id="trends-chart-title", className="chart-title"),
                                dcc.Graph(id="trends-main-chart", config={"displayModeBar": True}),
                            ],
                            className="chart-card",
                        ),
                        md=12,
                    ),
                ],
                className="g-3 mb-3",
            ),

            # ── Patients per dispatch + spike summary ──────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Mean patients per dispatch", className="chart-title"),
                                dcc.Graph(id="trends-patients-chart", config={"displayModeBar": False}),
                            ],
                            className="chart-card",
                        ),
                        md=8,
                    ),
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Activity Spikes", className="chart-title"),
                                html.Div(id="trends-spike-summary"),
                            ],
                            className="chart-card",
                        ),
                        md=4,
                    ),
                ],
                className="g-3",
            ),
        ],
        style={"padding": "1.5rem"},
    )
