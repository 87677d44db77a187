"""Root conftest — shared test configuration."""

import os

# Deterministic settings regardless of the developer's .env
os.environ.setdefault("TOTAL_BUDGET", "2000")
os.environ.setdefault("LOG_FORMAT", "text")
