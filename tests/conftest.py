"""Root conftest — shared test configuration."""

import os

# Ensure tests don't accidentally use real credentials or databases
os.environ.setdefault("CLOUDINARY_API_SECRET", "test-secret")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
