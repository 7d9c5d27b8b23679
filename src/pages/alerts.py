"""
src/pages/alerts.py
────────────────────
Current alerts page with filters and acknowledgement.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html

from config.alerts import SEVERITY_LABELS, AlertSeverity
from config.zones import ZONES

MUTED = "#8b949e"

_SEVERITY_OPTIONS = [{"label": "All", "value": "all"}] + [
    {"label": SEVERITY_LABELS[sev.value], "value": sev.value}
    for sev in (AlertSeverity.CRITICAL, AlertSeverity.WARNING, AlertSeverity.INFO)
]

_ZONE_OPTIONS = [{"label": "All", "value": "all"}] + [
    {"label": zone.value, "value": zone.value} for zone in ZONES
]

_LABEL_STYLE = {"fontSize": ".72rem", "color": MUTED, "textTransform": "uppercase"}


def _filter(label: str, dropdown_id: str, options: list[dict]) -> dbc.Col:
    return dbc.Col(
        [
            html.Label(label, style=_LABEL_STYLE),
            dcc.Dropdown(
                id=dropdown_id,
                options=options,
                value="all",
                clearable=False,
                style={"fontSize": ".85rem"},
                className="dark-dropdown",
            ),
        ],
        md=3,
    )


def layout() -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H2("Alerts", className="page-title"),
                    html.P(
                        "Alerts derived from the last 24 hours of activity, incidents and weather",
                        className="page-subtitle",
                    ),
                ],
                className="page-header",
            ),
            # ── Summary badges ─────────────────────────────────────────────────
            html.Div(id="alerts-summary-badges", className="mb-3"),
            # ── Filter row ─────────────────────────────────────────────────────
            dbc.Row(
                [
                    _filter("Severity", "alerts-filter-severity", _SEVERITY_OPTIONS),
                    _filter("Zone", "alerts-filter-zone", _ZONE_OPTIONS),
                    _filter(
                        "Status",
                        "alerts-filter-status",
                        [
                            {"label": "All", "value": "all"},
                            {"label": "Unacknowledged", "value": "unacked"},
                            {"label": "Acknowledged", "value": "acked"},
                        ],
                    ),
                ],
                className="g-3 mb-3",
            ),
            # ── Alert table ────────────────────────────────────────────────────
            html.Div(
                html.Div(id="alerts-table"),
                className="chart-card",
            ),
        ],
        style={"padding": "1.5rem"},
    )
