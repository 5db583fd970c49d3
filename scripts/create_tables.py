"""
create_tables.py: idempotent table creation script.
Run this before starting the service against a fresh database (any
APP_ENV other than "development" skips table creation at startup).
Safe to run multiple times (create_all only creates missing tables).

Usage:
    python scripts/create_tables.py
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Ensure the project root is on the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from review_service.config import settings
from review_service.database import engine
from review_service.models import Base  # noqa: F401  (registers models)


async def main() -> None:
    """Create the reviews and comments tables."""
    print(f"Creating tables on {engine.url.render_as_string(hide_password=True)} ...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("  ✓ All tables created")
    print(f"\nDone. Start the API with `uvicorn review_service.main:app` (env={settings.app_env}).")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
