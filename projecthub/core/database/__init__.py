"""Core database access helpers.

Provides the engine + SessionLocal for app use, plus a `get_db` dependency that
guarantees cleanup.
"""

from projecthub.models.base import Base

from .session import SessionLocal, build_engine, engine, get_db

__all__ = ["Base", "SessionLocal", "engine", "get_db", "build_engine"]
