"""Schema CLI Contract Tests."""

import pytest
from typer.testing import CliRunner

from contenttypes.cli.main import app
from contenttypes.domain.entities import ContentType
from contenttypes.infra.settings import settings

pytestmark = pytest.mark.contract

runner = CliRunner()


@pytest.fixture(autouse=True)
def strict_schema(monkeypatch):
    monkeypatch.setattr(settings, "use_legacy_xml_schema", False)


@pytest.fixture
def seeded(session_factory):
    db = session_factory()
    db.add_all(
        [
            ContentType(alias="news-item", name="News item", parent_id=-1),
            ContentType(alias="blog post", name="Blog post", parent_id=-1),
        ]
    )
    db.commit()
    db.close()


def test_schema_dtd(seeded):
    res = runner.invoke(app, ["schema", "dtd"])

    assert res.exit_code == 0
    assert res.stdout == (
        "<!DOCTYPE root [ \n"
        "<!ELEMENT newsItem ANY>\n"
        "<!ATTLIST newsItem id ID #REQUIRED>\n"
        "]>\n"
    )


def test_schema_dtd_body_only(seeded):
    res = runner.invoke(app, ["schema", "dtd", "--body-only"])

    assert res.exit_code == 0
    assert res.stdout == "<!ELEMENT newsItem ANY>\n<!ATTLIST newsItem id ID #REQUIRED>\n"


def test_schema_dtd_empty_store():
    res = runner.invoke(app, ["schema", "dtd"])

    assert res.exit_code == 0
    assert res.stdout == "<!DOCTYPE root [ \n]>\n"


def test_schema_dtd_legacy(seeded, monkeypatch):
    monkeypatch.setattr(settings, "use_legacy_xml_schema", True)

    res = runner.invoke(app, ["schema", "dtd", "--body-only"])

    assert res.exit_code == 0
    assert res.stdout == "<!ELEMENT node ANY> <!ATTLIST node id ID #REQUIRED>  <!ELEMENT data ANY>\n"
