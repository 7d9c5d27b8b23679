"""
src/callbacks/navigation.py: routing, navbar and Overview page callbacks.
"""
from __future__ import annotations

from datetime import UTC, datetime

import dash_bootstrap_components as dbc
from dash import Input, Output, State, html

from config.alerts import ALERT_TYPE_LABELS, RISK_COLORS
from config.zones import ZONE_CONFIG
from src.analytics.dashboard import build_dashboard_summary, fallback_summary
from src.data import store
from src.data.errors import DataUnavailable
from src.data.models import DashboardSummary, ZonePrediction
from src.layout.components.alert_badge import alert_badge, risk_badge
from src.layout.components.confidence_gauge import confidence_gauge
from src.layout.components.kpi_card import (
    fleet_card,
    hospitals_card,
    incidents_card,
    mini_kpi,
    pressure_card,
)
from src.logging_setup import get_logger

logger = get_logger(__name__)

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"

_TREND_ARROWS = {"Increasing": "▲", "Decreasing": "▼", "Stable": "■"}


def load_summary(now: datetime | None = None) -> tuple[DashboardSummary, bool]:
    """Summary from the store, or the fixed fallback when the store fails."""
    try:
        return build_dashboard_summary(store, now), False
    except DataUnavailable:
        logger.exception("Record store unavailable; showing fallback predictions")
        return fallback_summary(now), True


def _zone_card(prediction: ZonePrediction) -> dbc.Col:
    cfg = ZONE_CONFIG[prediction.zone]
    overall = prediction.overall_risk.value
    env = prediction.details.environmental_factors
    weather = env.weather_condition.value + (" (est.)" if env.weather_source == "fallback" else "")

    return dbc.Col(
        html.Div(
            [
                html.Div(
                    [
                        html.Span(cfg["name"], style={"fontWeight": "700", "color": cfg["color"], "fontSize": ".95rem"}),
                        html.Span(
                            f"{_TREND_ARROWS[prediction.trend.value]} {prediction.trend.value}",
                            style={"fontSize": ".68rem", "color": MUTED, "marginLeft": "8px"},
                        ),
                    ],
                    style={"marginBottom": "8px"},
                ),
                html.Div(risk_badge(overall, "Overall"), style={"marginBottom": "10px"}),
                html.Div(
                    [
                        mini_kpi("ED", prediction.ed_pressure.value, RISK_COLORS[prediction.ed_pressure.value]),
                        mini_kpi("Ambulance", prediction.ambulance_pressure.value,
                                 RISK_COLORS[prediction.ambulance_pressure.value]),
                        mini_kpi("Accident", prediction.accident_risk.value, RISK_COLORS[prediction.accident_risk.value]),
                        mini_kpi("Weather", weather),
                    ],
                    style={"display": "grid", "gridTemplateColumns": "1fr 1fr", "gap": "8px"},
                ),
                confidence_gauge(prediction.confidence),
            ],
            style={
                "backgroundColor": CARD_BG,
                "border": f"1px solid {RISK_COLORS[overall] if overall == 'High' else BORDER}",
                "borderRadius": "8px",
                "padding": "14px",
            },
        ),
        xs=12, md=6, lg=True,
    )


def _alerts_table(summary: DashboardSummary) -> html.Div:
    if not summary.alerts:
        return html.Div("No current alerts.", style={"color": MUTED, "padding": "12px"})

    rows = []
    for alert in summary.alerts:
        rows.append(html.Tr([
            html.Td(alert.timestamp.strftime("%d/%m %H:%M"), style={"fontSize": ".72rem", "color": MUTED}),
            html.Td(html.Span(alert.zone.value, style={"color": "#58a6ff", "fontSize": ".78rem"})),
            html.Td(alert_badge(alert.severity.value)),
            html.Td(ALERT_TYPE_LABELS.get(alert.type.value, alert.type.value), style={"fontSize": ".72rem"}),
            html.Td(alert.message[:60] + "…" if len(alert.message) > 60 else alert.message,
                    style={"fontSize": ".70rem", "color": MUTED}),
        ]))
    return html.Table(
        [html.Thead(html.Tr([html.Th(h) for h in ["Time", "Zone", "Severity", "Type", "Message"]],
                            style={"color": MUTED, "fontSize": ".65rem", "textTransform": "uppercase"})),
         html.Tbody(rows)],
        style={"width": "100%", "borderCollapse": "collapse", "fontSize": ".8rem"},
    )


def _hospital_loads(summary: DashboardSummary) -> html.Div:
    if not summary.pressure_trends:
        return html.Div("No hospital data.", style={"color": MUTED, "padding": "12px"})

    level_colors = {"CRITICAL": "#da3633", "HIGH": "#f0883e", "MEDIUM": "#e8a020", "NORMAL": "#2ea44f"}
    bar_colors = {"CRITICAL": "danger", "HIGH": "warning", "MEDIUM": "info", "NORMAL": "success"}
    items = []
    for load in summary.pressure_trends:
        color = level_colors.get(load.level, MUTED)
        items.append(html.Div(
            [
                html.Div(
                    [
                        html.Span(load.hospital_name, style={"fontSize": ".8rem", "fontWeight": "600"}),
                        html.Span(f"{load.percentage}%", style={"fontSize": ".8rem", "fontWeight": "700", "color": color}),
                    ],
                    style={"display": "flex", "justifyContent": "space-between"},
                ),
                dbc.Progress(value=min(load.percentage, 100), color=bar_colors.get(load.level, "secondary"),
                             style={"height": "4px", "backgroundColor": BORDER}),
                html.Div(f"{load.zone.value} · {load.level}", style={"fontSize": ".65rem", "color": MUTED}),
            ],
            style={"marginBottom": "10px"},
        ))
    return html.Div(items)


def register(app) -> None:
    """Register navigation + overview page callbacks."""

    # ── Page routing ──────────────────────────────────────────────────────────
    from src.pages import alerts, overview, trends

    @app.callback(
        Output("page-content", "children"),
        Input("url", "pathname"),
    )
    def display_page(pathname: str):
        routes = {
            "/": overview.layout,
            "/alerts": alerts.layout,
            "/trends": trends.layout,
        }
        return routes.get(pathname, overview.layout)()

    # ── Navbar collapse ───────────────────────────────────────────────────────
    @app.callback(
        Output("navbar-collapse", "is_open"),
        Input("navbar-toggler", "n_clicks"),
        State("navbar-collapse", "is_open"),
        prevent_initial_call=True,
    )
    def toggle_navbar(n_clicks: int, is_open: bool) -> bool:
        return not is_open

    # ── Navbar clock ──────────────────────────────────────────────────────────
    @app.callback(
        Output("navbar-clock", "children"),
        Input("interval-live", "n_intervals"),
    )
    def update_clock(n_intervals: int) -> str:
        return "Updated " + datetime.now(tz=UTC).strftime("%H:%M:%S UTC")

    # ── Overview: KPI banner, zone cards, alerts, hospital loads ──────────────
    @app.callback(
        [
            Output("overview-kpi-banner", "children"),
            Output("overview-zone-cards", "children"),
            Output("overview-alerts-table", "children"),
            Output("overview-hospital-loads", "children"),
            Output("overview-fallback-notice", "children"),
        ],
        Input("interval-live", "n_intervals"),
    )
    def update_overview(n_intervals: int):
        summary, is_fallback = load_summary()

        kpi_banner = dbc.Row(
            [
                dbc.Col(pressure_card(summary.overall_pressure_level,
                                      summary.last_updated.strftime("as of %H:%M UTC")), xs=6, md=3),
                dbc.Col(hospitals_card(summary.hospitals_monitored), xs=6, md=3),
                dbc.Col(incidents_card(summary.active_incidents, summary.ambulance_logs_24h), xs=6, md=3),
                dbc.Col(fleet_card(summary.available_ambulances, summary.total_ambulances), xs=6, md=3),
            ],
            className="g-3",
        )

        notice = None
        if is_fallback:
            notice = dbc.Alert(
                "Record store unavailable. Showing fallback predictions.",
                color="warning",
                style={"fontSize": ".8rem", "padding": ".4rem .8rem", "marginTop": ".5rem"},
            )

        return (
            kpi_banner,
            dbc.Row([_zone_card(p) for p in summary.predictions], className="g-3"),
            _alerts_table(summary),
            _hospital_loads(summary),
            notice,
        )
