"""
src/callbacks/alerts.py
────────────────────────
Alerts page callbacks.

Acknowledged ids live only in the client-side `store-ack-alerts`; the
server confirms the alert exists and keeps nothing.
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import ALL, Input, Output, State, ctx, html, no_update

from config.alerts import (
    ALERT_TYPE_LABELS,
    MAX_ALERTS_DISPLAY,
    SEVERITY_COLORS,
    SEVERITY_LABELS,
    AlertSeverity,
)
from src.analytics.alerts import acknowledge_alert, count_alert_types, get_current_alerts
from src.data import store
from src.data.errors import DataUnavailable
from src.data.models import Alert
from src.layout.components.alert_badge import alert_badge
from src.logging_setup import get_logger

logger = get_logger(__name__)

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"


def filter_alerts(
    alerts: list[Alert],
    severity: str = "all",
    zone: str = "all",
    status: str = "all",
    acked_ids: list[str] | None = None,
) -> list[Alert]:
    """Apply the page filters; input order (severity-sorted) is kept."""
    acked = set(acked_ids or [])
    if severity != "all":
        alerts = [a for a in alerts if a.severity.value == severity]
    if zone != "all":
        alerts = [a for a in alerts if a.zone.value == zone]
    if status == "unacked":
        alerts = [a for a in alerts if a.id not in acked]
    elif status == "acked":
        alerts = [a for a in alerts if a.id in acked]
    return alerts


def _ack_button(alert_id: str, is_acked: bool) -> html.Button:
    return html.Button(
        "✓ Acknowledged" if is_acked else "Acknowledge",
        id={"type": "ack-btn", "index": alert_id},
        n_clicks=0,
        disabled=is_acked,
        style={
            "fontSize": ".68rem",
            "fontWeight": "600",
            "color": "#2ea44f" if is_acked else "#58a6ff",
            "background": "transparent",
            "border": f"1px solid {'#2ea44f' if is_acked else '#58a6ff'}",
            "borderRadius": "4px",
            "padding": "2px 8px",
            "cursor": "default" if is_acked else "pointer",
            "opacity": "0.6" if is_acked else "1",
        },
    )


def _build_table(alerts: list[Alert], acked_ids: list[str]) -> html.Div:
    if not alerts:
        return html.Div(
            "No alerts for the selected filters.",
            style={"color": MUTED, "padding": "20px", "textAlign": "center"},
        )

    rows = []
    for alert in alerts[:MAX_ALERTS_DISPLAY]:
        rows.append(
            html.Tr(
                [
                    html.Td(alert.timestamp.strftime("%d/%m %H:%M"), style={"color": MUTED, "fontSize": ".78rem"}),
                    html.Td(
                        html.Span(alert.zone.value, style={"color": "#58a6ff", "fontSize": ".82rem", "fontWeight": "600"}),
                    ),
                    html.Td(alert_badge(alert.severity.value)),
                    html.Td(ALERT_TYPE_LABELS.get(alert.type.value, alert.type.value),
                            style={"fontSize": ".78rem", "color": "#c9d1d9"}),
                    html.Td(alert.message, style={"fontSize": ".78rem"}),
                    html.Td(
                        alert.description,
                        style={"fontSize": ".72rem", "color": MUTED, "maxWidth": "300px", "overflow": "hidden", "textOverflow": "ellipsis"},
                    ),
                    html.Td(_ack_button(alert.id, alert.id in acked_ids)),
                ],
                style={"borderBottom": f"1px solid {BORDER}"},
            )
        )

    return html.Div(
        html.Table(
            [
                html.Thead(
                    html.Tr(
                        [html.Th(h) for h in ["Time", "Zone", "Severity", "Type", "Message", "Details", "Status"]],
                        style={"color": MUTED, "fontSize": ".68rem", "textTransform": "uppercase"},
                    )
                ),
                html.Tbody(rows),
            ],
            style={"width": "100%", "borderCollapse": "collapse", "fontSize": ".82rem"},
        ),
        style={"overflowX": "auto"},
    )


def _summary_badges(alerts: list[Alert]) -> dbc.Row:
    by_severity = {sev.value: 0 for sev in AlertSeverity}
    for alert in alerts:
        by_severity[alert.severity.value] += 1

    cols = [
        dbc.Col(
            html.Div(
                [
                    html.Div(str(by_severity[sev]), style={"fontSize": "1.4rem", "fontWeight": "700", "color": SEVERITY_COLORS[sev]}),
                    html.Div(SEVERITY_LABELS[sev], style={"fontSize": ".65rem", "color": MUTED, "textTransform": "uppercase"}),
                ],
                style={"backgroundColor": CARD_BG, "border": f"1px solid {BORDER}", "borderRadius": "8px", "padding": "10px 16px"},
            ),
            xs=4, md=2,
        )
        for sev in (AlertSeverity.CRITICAL.value, AlertSeverity.WARNING.value, AlertSeverity.INFO.value)
    ]

    type_counts = count_alert_types(alerts)
    cols.append(
        dbc.Col(
            html.Div(
                [
                    html.Span(
                        f"{ALERT_TYPE_LABELS[c.type.value]}: {c.count}",
                        style={"fontSize": ".72rem", "color": "#c9d1d9", "marginRight": "12px", "whiteSpace": "nowrap"},
                    )
                    for c in type_counts
                ] or html.Span("No alerts", style={"fontSize": ".72rem", "color": MUTED}),
                style={"backgroundColor": CARD_BG, "border": f"1px solid {BORDER}", "borderRadius": "8px",
                       "padding": "10px 16px", "height": "100%", "display": "flex", "flexWrap": "wrap", "alignItems": "center"},
            ),
            xs=12, md=6,
        )
    )
    return dbc.Row(cols, className="g-2")


def register(app) -> None:

    @app.callback(
        [
            Output("alerts-table", "children"),
            Output("alerts-summary-badges", "children"),
        ],
        [
            Input("interval-live", "n_intervals"),
            Input("alerts-filter-severity", "value"),
            Input("alerts-filter-zone", "value"),
            Input("alerts-filter-status", "value"),
            Input("store-ack-alerts", "data"),
        ],
    )
    def update_alerts_table(
        n_intervals: int,
        severity_filter: str,
        zone_filter: str,
        status_filter: str,
        acked_ids: list[str],
    ):
        try:
            alerts = get_current_alerts(store)
        except DataUnavailable:
            logger.exception("Record store unavailable; alerts page left empty")
            message = html.Div(
                "Record store unavailable. Alerts cannot be derived right now.",
                style={"color": "#e8a020", "padding": "20px", "textAlign": "center"},
            )
            return message, html.Div()

        filtered = filter_alerts(alerts, severity_filter, zone_filter, status_filter, acked_ids)
        return _build_table(filtered, acked_ids or []), _summary_badges(alerts)

    @app.callback(
        Output("store-ack-alerts", "data"),
        Input({"type": "ack-btn", "index": ALL}, "n_clicks"),
        State("store-ack-alerts", "data"),
        prevent_initial_call=True,
    )
    def acknowledge(n_clicks_list: list, acked_ids: list[str]) -> list[str]:
        # Re-rendered buttons fire with n_clicks=0; only real clicks count.
        if not ctx.triggered_id or not ctx.triggered[0]["value"]:
            return no_update
        alert_id = ctx.triggered_id["index"]
        acked = list(acked_ids or [])
        if alert_id in acked:
            return no_update

        try:
            confirmed = acknowledge_alert(alert_id, None, store)
        except DataUnavailable:
            logger.exception("Could not confirm alert %s", alert_id)
            return no_update
        if confirmed is None:
            return no_update
        acked.append(alert_id)
        return acked
