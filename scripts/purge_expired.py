#!/usr/bin/env python3
"""
Brokerage Back-Office - Expired Auth Row Purge

Deletes expired sessions and used or expired password-reset tokens.
Request handling only ignores such rows; schedule this from cron.

Usage:
    python scripts/purge_expired.py
"""

import asyncio
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from brokerage.auth.maintenance import purge_expired
from brokerage.config import configure_logging, settings
from brokerage.database import get_engine, get_session_factory, init_db


console = Console()


async def main() -> None:
    configure_logging()

    engine = get_engine(settings.DATABASE_URL)
    init_db(engine)
    session_factory = get_session_factory(engine)

    try:
        with session_factory() as db:
            result = await purge_expired(db)
    finally:
        engine.dispose()

    table = Table(title="Purged rows")
    table.add_column("Table", style="cyan")
    table.add_column("Deleted", style="green", justify="right")
    table.add_row("sessions", str(result["sessions"]))
    table.add_row("password_reset_tokens", str(result["reset_tokens"]))
    console.print(table)


if __name__ == "__main__":
    asyncio.run(main())
