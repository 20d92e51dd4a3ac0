# run_migrations.py
from projecthub.core.config import settings
from projecthub.core.database.migrations import upgrade
from projecthub.core.logging_config import setup_logging

if __name__ == "__main__":
    setup_logging(log_level=settings.log_level, app_name=settings.app_name)
    upgrade("head")
