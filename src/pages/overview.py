"""
src/pages/overview.py
──────────────────────
City-wide overview page.

Static structure; dynamic KPI data injected via callbacks.
"""

import dash_bootstrap_components as dbc
from dash import html


def layout() -> html.Div:
    return html.Div(
        [
            # ── Page header ───────────────────────────────────────────────────
            html.Div(
                [
                    html.H2("Overview", className="page-title"),
                    html.P(
                        "Emergency department, ambulance and accident pressure across the five zones",
                        className="page-subtitle",
                    ),
                    html.Div(id="overview-fallback-notice"),
                ],
                className="page-header",
            ),
            # ── Pressure KPI banner (dynamic) ─────────────────────────────────
            html.Div(id="overview-kpi-banner", className="mb-4"),
            # ── Zone prediction cards (dynamic) ───────────────────────────────
            html.Div(id="overview-zone-cards", className="mb-3"),
            # ── Recent alerts + hospital loads ────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Recent Alerts", className="chart-title"),
                                html.Div(id="overview-alerts-table"),
                            ],
                            className="chart-card",
                        ),
                        md=8,
                    ),
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Busiest Hospitals", className="chart-title"),
                                html.Div(id="overview-hospital-loads"),
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
