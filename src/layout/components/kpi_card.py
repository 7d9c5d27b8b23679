"""
src/layout/components/kpi_card.py
──────────────────────────────────
Overview banner cards: overall pressure, hospitals, incidents, fleet.

All cards share kpi_card(); the helpers below pick the value color from
the summary numbers so callbacks only pass counts.
"""
from dash import html

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"

OK = "#2ea44f"
WARN = "#e8a020"
ALARM = "#da3633"
INFO = "#58a6ff"

PRESSURE_COLORS = {
    "CRITICAL": ALARM,
    "WARNING": WARN,
    "NORMAL": OK,
    "NO DATA": MUTED,
}


def kpi_card(
    label: str,
    value: str,
    color: str = "#c9d1d9",
    sub_label: str = "",
    border_color: str = BORDER,
) -> html.Div:
    """
    Banner card: uppercase label, large value, optional caption.

    Args:
        label: Metric name
        value: Formatted value
        color: Value color
        sub_label: Caption under the value
        border_color: Card border, set to the value color for level cards
    """
    rows = [
        html.Div(label, style={"fontSize": ".68rem", "color": MUTED, "textTransform": "uppercase", "letterSpacing": ".06em"}),
        html.Div(value, style={"fontSize": "1.4rem", "fontWeight": "700", "color": color, "lineHeight": "1.2", "marginTop": "2px"}),
    ]
    if sub_label:
        rows.append(html.Div(sub_label, style={"fontSize": ".68rem", "color": MUTED, "marginTop": "2px"}))

    return html.Div(
        rows,
        style={
            "backgroundColor": CARD_BG,
            "border": f"1px solid {border_color}",
            "borderRadius": "8px",
            "padding": "14px 16px",
            "height": "100%",
        },
    )


def pressure_card(level: str, sub_label: str = "") -> html.Div:
    color = PRESSURE_COLORS.get(level, MUTED)
    return kpi_card("Overall Pressure", level, color, sub_label=sub_label, border_color=color)


def hospitals_card(count: int) -> html.Div:
    return kpi_card("Hospitals Monitored", str(count), INFO if count else MUTED)


def incidents_card(incidents: int, ambulance_logs: int) -> html.Div:
    """Accidents in the last 24 h, with the ambulance log count as caption."""
    return kpi_card(
        "Active Incidents (24h)",
        str(incidents),
        WARN if incidents else OK,
        sub_label=f"{ambulance_logs} ambulance logs",
    )


def fleet_card(available: int, total: int) -> html.Div:
    if total == 0:
        color = MUTED
    elif available == 0:
        color = ALARM
    elif available / total < 0.2:
        color = WARN
    else:
        color = OK
    return kpi_card("Available Ambulances", f"{available}/{total}", color)


def mini_kpi(label: str, value, color: str = "#c9d1d9") -> html.Div:
    """Label over value, for use inside zone cards. `value` may be a component."""
    return html.Div([
        html.Div(label, style={"fontSize": ".62rem", "color": MUTED, "textTransform": "uppercase"}),
        html.Div(value, style={"fontSize": ".85rem", "fontWeight": "700", "color": color}),
    ])
