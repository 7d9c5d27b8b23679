"""
src/layout/components/alert_badge.py
──────────────────────────────────────
Alert severity and risk-level badge components.
"""

from dash import html

from config.alerts import RISK_COLORS, SEVERITY_COLORS, SEVERITY_LABELS

MUTED = "#8b949e"


def _badge(label: str, color: str) -> html.Span:
    return html.Span(
        label,
        style={
            "fontSize": ".65rem",
            "fontWeight": "700",
            "color": color,
            "border": f"1px solid {color}",
            "borderRadius": "4px",
            "padding": "1px 7px",
            "whiteSpace": "nowrap",
        },
    )


def alert_badge(severity: str) -> html.Span:
    """Inline alert severity badge (CRITICAL / WARNING / INFO)."""
    color = SEVERITY_COLORS.get(severity, MUTED)
    return _badge(SEVERITY_LABELS.get(severity, severity.capitalize()), color)


def risk_badge(level: str, prefix: str = "") -> html.Span:
    """Inline Low / Medium / High badge, optionally prefixed ("ED High")."""
    color = RISK_COLORS.get(level, MUTED)
    return _badge(f"{prefix} {level}".strip(), color)
