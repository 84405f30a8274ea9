from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.schema import MetaData

from contenttypes.infra.settings import settings

# Deterministic constraint/index names
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def _engine_options(db_url: str, *, echo: bool) -> dict[str, Any]:
    """Build create_engine() keyword arguments appropriate for the backend.

    SQLite gets no pool sizing (in-memory databases use a singleton pool that
    rejects it) and is allowed to cross threads; server databases get the
    configured pool and connect timeout.
    """
    options: dict[str, Any] = {"echo": echo, "future": True}
    if db_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        return options

    options.update(
        pool_pre_ping=True,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_timeout=settings.pool_timeout,
    )
    if "postgresql" in db_url:
        options["connect_args"] = {"connect_timeout": settings.connect_timeout}
    return options


engine = create_engine(
    settings.database_url,
    **_engine_options(settings.database_url, echo=settings.echo_sql),
)


@event.listens_for(engine, "connect")
def _set_search_path(dbapi_conn, _):
    if engine.dialect.name != "postgresql":
        return
    with dbapi_conn.cursor() as cur:
        cur.execute("SET search_path TO public")


SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
)


def get_engine(db_url: str | None = None) -> Engine:
    """Get or create a database engine.

    Returns the global engine when ``db_url`` is omitted or matches the configured
    ``settings.database_url``, to avoid unnecessary engine creation.
    """
    if not db_url or db_url == settings.database_url:
        return engine
    return create_engine(db_url, **_engine_options(db_url, echo=False))
