"""
src/layout/main.py
───────────────────
Root layout: routing, live refresh, acknowledged-alert store, navbar,
page container and footer.
"""
from dash import dcc, html

from config.settings import settings
from config.zones import ZONES
from src.layout.navbar import create_navbar

BG = "#0d1117"
TEXT = "#c9d1d9"
MUTED = "#8b949e"
BORDER = "#30363d"


def _footer() -> html.Footer:
    refresh_s = settings.UPDATE_INTERVAL_MS // 1000
    parts = [
        "Zone Risk Monitor",
        " · ".join(zone.value for zone in ZONES),
        f"Refresh every {refresh_s}s",
        "Simulated data",
    ]
    return html.Footer(
        " │ ".join(parts),
        style={
            "textAlign": "center",
            "padding": ".7rem",
            "fontSize": ".72rem",
            "color": MUTED,
            "borderTop": f"1px solid {BORDER}",
            "marginTop": "2rem",
        },
    )


def create_layout() -> html.Div:
    return html.Div(
        [
            # Acknowledged alert ids; never sent back to the store
            dcc.Store(id="store-ack-alerts", data=[], storage_type="session"),
            dcc.Location(id="url", refresh=False),
            dcc.Interval(id="interval-live", interval=settings.UPDATE_INTERVAL_MS, n_intervals=0),

            create_navbar(),
            html.Div(id="page-content", style={"minHeight": "calc(100vh - 60px)"}),
            _footer(),
        ],
        style={"backgroundColor": BG, "minHeight": "100vh", "color": TEXT},
    )
