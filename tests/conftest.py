"""
Global test configuration for contenttypes.

Every test runs against its own in-memory SQLite database. The module-level
SessionLocal is swapped for one bound to that database, so CLI commands that open
``uow.session()`` see the same data as the fixtures.
"""

import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure the project src directory is importable without relying on external environment.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from contenttypes.domain import entities  # noqa: E402,F401  # registers tables
from contenttypes.infra import db as db_module  # noqa: E402
from contenttypes.infra.logging import configure_logging  # noqa: E402
from contenttypes.infra.uow import UnitOfWork  # noqa: E402


def pytest_configure(config):
    # Route structlog through stdlib logging so caplog sees service events
    configure_logging(install_handler=False)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    db_module.Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(autouse=True)
def session_factory(monkeypatch, engine):
    """Point the module-level SessionLocal at the per-test database."""
    TestSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    monkeypatch.setattr(db_module, "SessionLocal", TestSessionLocal)
    return TestSessionLocal


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def uow(db_session):
    return UnitOfWork(db_session)
