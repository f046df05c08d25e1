"""
SQLAlchemy engine & session factory for the durable storage medium.

Store operations are synchronous, so this uses the plain (non-async) engine.
"""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from timeclock.core.config import settings


def build_engine(url: str):
    engine_args: dict = {
        "echo": False,
        "pool_pre_ping": True,
    }

    if url.startswith("sqlite"):
        engine_args["connect_args"] = {"check_same_thread": False}
        # In-memory SQLite must share one connection or every session sees an empty DB
        if url in ("sqlite://", "sqlite:///:memory:"):
            engine_args["poolclass"] = StaticPool

    return create_engine(url, **engine_args)


engine = build_engine(settings.DATABASE_URL)

session_factory = sessionmaker(
    engine,
    class_=Session,
    expire_on_commit=False,
)
