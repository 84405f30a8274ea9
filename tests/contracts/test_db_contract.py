"""DB CLI Contract Tests."""

from unittest.mock import patch

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool
from typer.testing import CliRunner

from contenttypes.cli.main import app

pytestmark = pytest.mark.contract

runner = CliRunner()


def test_db_init_creates_tables():
    empty = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    with patch("contenttypes.cli.commands.db.get_engine", return_value=empty) as get_engine:
        res = runner.invoke(app, ["db", "init", "--database-url", "sqlite:///ignored.db"])

    assert res.exit_code == 0, res.output
    get_engine.assert_called_once_with("sqlite:///ignored.db")
    assert "Database initialized: content, content_types, media, media_types" in res.stdout
    assert set(inspect(empty).get_table_names()) == {"content", "content_types", "media", "media_types"}
    empty.dispose()


def test_db_init_is_idempotent(engine):
    with patch("contenttypes.cli.commands.db.get_engine", return_value=engine):
        first = runner.invoke(app, ["db", "init"])
        second = runner.invoke(app, ["db", "init"])

    assert first.exit_code == 0
    assert second.exit_code == 0


def test_db_init_reports_engine_errors():
    with patch("contenttypes.cli.commands.db.get_engine", side_effect=RuntimeError("no driver")):
        res = runner.invoke(app, ["db", "init"])

    assert res.exit_code == 1
    assert "Error initializing database: no driver" in res.output
