"""Programmatic Alembic entry points shared by ``run_migrations.py`` and the CI check."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Iterator, Optional

from alembic import command
from alembic.config import Config

from projecthub.core.config.settings import BASE_DIR

logger = logging.getLogger(__name__)

ALEMBIC_INI = BASE_DIR / "alembic.ini"


def alembic_config() -> Config:
    return Config(str(ALEMBIC_INI))


@contextmanager
def _database_url(url: Optional[str]) -> Iterator[None]:
    """Point ``alembic/env.py`` at ``url`` for the duration of the block."""
    if url is None:
        yield
        return
    previous = os.environ.get("ALEMBIC_DATABASE_URL")
    os.environ["ALEMBIC_DATABASE_URL"] = url
    try:
        yield
    finally:
        if previous is None:
            os.environ.pop("ALEMBIC_DATABASE_URL", None)
        else:
            os.environ["ALEMBIC_DATABASE_URL"] = previous


def upgrade(revision: str = "head", url: Optional[str] = None) -> None:
    logger.info(f"Upgrading database schema to {revision}")
    with _database_url(url):
        command.upgrade(alembic_config(), revision)


def downgrade(revision: str = "base", url: Optional[str] = None) -> None:
    logger.info(f"Downgrading database schema to {revision}")
    with _database_url(url):
        command.downgrade(alembic_config(), revision)
