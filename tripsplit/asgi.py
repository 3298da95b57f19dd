from __future__ import annotations

from tripsplit.engine import build_app
from tripsplit.logger import setup_logger

setup_logger()

app = build_app()
