# tools/smoke_check.py
"""
Log in against a running backend and print what the client would show.

Usage:
    python -m tools.smoke_check dr1364 secret
    JOURNAL_API_BASE_URL=http://localhost:8080 python -m tools.smoke_check anna pw
    python -m tools.smoke_check anna pw --session-file .anna_session.json

Without --session-file the session is kept in memory and dropped at the end.
With it, the session is written to that file and kept for the next run
(one file per user).
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from journal_api.config import get_settings, setup_logging
from journal_api.context import ClientContext
from journal_api.errors import ApiError
from journal_api.storage import JsonFileStorage, MemoryStorage


async def smoke(username: str, password: str, session_file: Optional[Path] = None) -> int:
    storage = JsonFileStorage(session_file) if session_file else MemoryStorage()
    ctx = ClientContext.open(get_settings(), storage=storage)
    keep = session_file is not None
    try:
        me = None
        cached = ctx.session.current_user() if keep else None
        if cached is not None and cached.username == username:
            me = await ctx.auth.me()
        if me is None:
            result = await ctx.auth.login(username, password)
            ctx.session.start(result)
            me = result.user
            print(f"✅ Logged in as {me.username} ({me.role.value})")
        else:
            ctx.session.save_user(me)
            print(f"✅ Reused session for {me.username} ({me.role.value})")

        contacts = await ctx.messages.get_contacts()
        print(f"   contacts: {len(contacts)}")

        if not me.is_clinical:
            record = await ctx.journal.get_my_record()
            print(f"   notes: {len(record.notes)}  diagnoses: {len(record.conditions)}")

        if not keep:
            await ctx.auth.logout()
        return 0
    except ApiError as e:
        print(f"❌ {e.__class__.__name__}: {str(e) or '(no message)'}")
        return 1
    finally:
        if not keep:
            ctx.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("username")
    parser.add_argument("password")
    parser.add_argument(
        "--session-file",
        type=Path,
        default=None,
        help="keep the session in this JSON file between runs",
    )
    args = parser.parse_args(argv)
    setup_logging(get_settings().log_level)
    return asyncio.run(smoke(args.username, args.password, args.session_file))


if __name__ == "__main__":
    sys.exit(main())
