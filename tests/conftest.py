"""Root conftest — shared test configuration."""

import os

# Ensure tests never touch a real database or run in production mode
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DATABASE_CREATE_SCHEMA", "false")
