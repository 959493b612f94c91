"""Root conftest — shared test configuration."""

import os

# Human-readable logs and no .env surprises during tests
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
