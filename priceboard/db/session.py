"""Database engine helpers."""

from __future__ import annotations

import functools
import os

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url


DEFAULT_DATABASE_URL = "sqlite:///priceboard.db"


def create_engine_from_env() -> Engine:
    """Create an engine using the DATABASE_URL environment variable."""
    url = os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL)
    return engine_for_url(url)


@functools.lru_cache(maxsize=4)
def engine_for_url(url: str) -> Engine:
    connect_args = {}
    if make_url(url).get_backend_name() == "sqlite":
        # API handlers and the threadpool share connections
        connect_args["check_same_thread"] = False
    return create_engine(url, pool_pre_ping=True, future=True, connect_args=connect_args)
