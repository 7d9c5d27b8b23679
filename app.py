"""
app.py
──────
Zone Risk Monitor: Application Entry Point.

Startup sequence:
  1. Configure logging (console + rotating file)
  2. Initialize SQLite DB and seed with simulated history
  3. Create Dash app with DARKLY bootstrap theme
  4. Register all callbacks
  5. Run dev server (or expose `server` for gunicorn in production)
"""
import dash
import dash_bootstrap_components as dbc

from config.settings import settings
from src.data.store import initialize_db
from src.layout.main import create_layout
from src.logging_setup import get_logger, setup_logging

# ── 1. Logging ────────────────────────────────────────────────────────────────
setup_logging()
logger = get_logger("app")

# ── 2. Seed database on startup ───────────────────────────────────────────────
logger.info("Initializing database and seeding simulation data...")
initialize_db()
logger.info("Database ready.")

# ── 3. Dash app ───────────────────────────────────────────────────────────────
app = dash.Dash(
    __name__,
    external_stylesheets=[dbc.themes.DARKLY],
    suppress_callback_exceptions=True,
    meta_tags=[{"name": "viewport", "content": "width=device-width, initial-scale=1"}],
    title="Zone Risk Monitor",
)

server = app.server  # gunicorn entry point
app.layout = create_layout()

# ── 4. Register callbacks ─────────────────────────────────────────────────────
from src.callbacks import alerts, navigation, trends

navigation.register(app)
alerts.register(app)
trends.register(app)

# ── 5. Run ────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    app.run(
        debug=settings.DEBUG,
        host=settings.HOST,
        port=settings.PORT,
    )
