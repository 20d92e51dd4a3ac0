"""CI helper to validate Alembic migrations on a clean database.

Runs upgrade -> downgrade -> upgrade so both directions of every revision are exercised.

Usage:
    python scripts/check_migrations.py
"""

import os
from pathlib import Path

from sqlalchemy.engine import make_url

from projecthub.core.database.migrations import downgrade, upgrade


def main() -> None:
    temp_db = Path(".alembic_ci.db")
    os.environ.setdefault("APP_ENV", "test")

    db_url = os.getenv("ALEMBIC_DATABASE_URL") or f"sqlite:///{temp_db}"
    is_sqlite = make_url(db_url).drivername.startswith("sqlite")

    # Ensure a clean slate for file-based SQLite only (not used for PG)
    if is_sqlite:
        temp_db.unlink(missing_ok=True)

    upgrade("head", url=db_url)
    downgrade("base", url=db_url)
    upgrade("head", url=db_url)
    print(f"[check_migrations] OK against {make_url(db_url).drivername}")

    if is_sqlite:
        temp_db.unlink(missing_ok=True)


if __name__ == "__main__":
    main()
