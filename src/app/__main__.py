"""Run the service with ``python -m src.app``."""

from src.app.api.http.app import run

run()
