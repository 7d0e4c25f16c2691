from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _bootstrap_import_path() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from catch_chronicles.database import SessionLocal  # noqa: E402
from catch_chronicles.models.user import User  # noqa: E402
from catch_chronicles.services.context import UserContext  # noqa: E402
from catch_chronicles.services.statistics import compute_statistics  # noqa: E402
from catch_chronicles.services.trip_service import load_trips_with_catches  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print the dashboard statistics of one angler as JSON.")
    parser.add_argument("--email", required=True, help="Account email")
    args = parser.parse_args(argv)

    with SessionLocal() as db:
        user = db.query(User).filter(User.email == args.email.strip()).first()
        if user is None:
            sys.stderr.write(f"no user with email={args.email}\n")
            return 1
        ctx = UserContext(user_id=user.id, email=user.email)
        stats = compute_statistics(load_trips_with_catches(db, ctx))

    print(stats.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
