# projectflow/core/db.py
from __future__ import annotations

from functools import lru_cache

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from projectflow.core.config import settings


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    url = settings.database_url
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
    else:
        # bounded collaborator calls: no statement may hang a request forever
        connect_args = {"options": f"-c statement_timeout={settings.db_statement_timeout_ms}"}

    return create_engine(url, future=True, pool_pre_ping=True, connect_args=connect_args)


@lru_cache(maxsize=1)
def get_sessionmaker() -> sessionmaker[Session]:
    return sessionmaker(
        bind=get_engine(),
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )


def get_db():
    db = get_sessionmaker()()
    try:
        yield db
    finally:
        db.close()
