"""Tests for DTD generation on the content type service."""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from contenttypes.domain.entities import ContentType
from contenttypes.infra.settings import settings
from contenttypes.usecases import content_type_service as service_module
from contenttypes.usecases.content_type_service import LEGACY_SCHEMA_BODY, build_content_type_service


@pytest.fixture
def service(db_session):
    return build_content_type_service(db_session)


@pytest.fixture(autouse=True)
def strict_schema(monkeypatch):
    monkeypatch.setattr(settings, "use_legacy_xml_schema", False)


def _seed(service, *aliases):
    service.save_content_types([ContentType(alias=a, name=a, parent_id=-1) for a in aliases])


class TestSchemaBody:
    def test_one_element_and_attlist_per_safe_alias(self, service):
        _seed(service, "news", "blog post")

        body = service.generate_schema_body()

        assert body.splitlines() == [
            "<!ELEMENT news ANY>",
            "<!ATTLIST news id ID #REQUIRED>",
        ]

    def test_follows_get_all_order_and_camel_cases(self, service):
        _seed(service, "Page", "news-item", "gallery_image")

        body = service.generate_schema_body()

        assert body.splitlines() == [
            "<!ELEMENT page ANY>",
            "<!ATTLIST page id ID #REQUIRED>",
            "<!ELEMENT newsItem ANY>",
            "<!ATTLIST newsItem id ID #REQUIRED>",
            "<!ELEMENT galleryImage ANY>",
            "<!ATTLIST galleryImage id ID #REQUIRED>",
        ]

    def test_empty_store_gives_empty_body(self, service):
        assert service.generate_schema_body() == ""

    def test_legacy_flag_returns_fixed_declaration(self, service, monkeypatch):
        _seed(service, "news")
        monkeypatch.setattr(settings, "use_legacy_xml_schema", True)

        assert service.generate_schema_body() == LEGACY_SCHEMA_BODY + "\n"

    def test_flag_is_read_at_generation_time(self, service, monkeypatch):
        _seed(service, "news")
        strict = service.generate_schema_body()

        monkeypatch.setattr(settings, "use_legacy_xml_schema", True)

        assert service.generate_schema_body() != strict

    def test_failure_keeps_partial_output(self, service):
        _seed(service, "news", "page", "blog")

        with patch.object(service_module, "to_safe_alias", side_effect=["news", RuntimeError("bad alias")]):
            body = service.generate_schema_body()

        assert body.splitlines() == [
            "<!ELEMENT news ANY>",
            "<!ATTLIST news id ID #REQUIRED>",
        ]

    def test_repository_failure_is_swallowed(self, service):
        with patch.object(service, "get_all_content_types", side_effect=RuntimeError("db down")):
            assert service.generate_schema_body() == ""

    def test_failure_is_logged(self, service, caplog):
        with patch.object(service, "get_all_content_types", side_effect=RuntimeError("db down")):
            service.generate_schema_body()

        assert "dtd_schema_body_failed" in caplog.text

    def test_database_failure_rolls_back_and_service_stays_usable(self, service, db_session):
        failure = OperationalError("SELECT content_types", {}, Exception("connection reset"))
        db_session.add(ContentType(alias="draft", name="Draft", parent_id=-1))

        with patch.object(service._unit_of_work, "rollback", wraps=service._unit_of_work.rollback) as rollback:
            with patch.object(service, "get_all_content_types", side_effect=failure):
                assert service.generate_schema_body() == ""

        rollback.assert_called_once_with()
        assert not db_session.new

        service.save_content_type(ContentType(alias="news", name="News", parent_id=-1))
        assert [ct.alias for ct in service.get_all_content_types()] == ["news"]
        assert service.generate_schema_body().splitlines()[0] == "<!ELEMENT news ANY>"

    def test_non_database_failure_does_not_roll_back(self, service):
        with patch.object(service._unit_of_work, "rollback") as rollback:
            with patch.object(service_module, "to_safe_alias", side_effect=RuntimeError("bad alias")):
                _seed(service, "news")
                service.generate_schema_body()

        rollback.assert_not_called()


class TestDtd:
    def test_wraps_body_in_doctype(self, service):
        _seed(service, "news")

        dtd = service.generate_dtd()

        assert dtd == (
            "<!DOCTYPE root [ \n"
            "<!ELEMENT news ANY>\n"
            "<!ATTLIST news id ID #REQUIRED>\n"
            "]>"
        )

    def test_wrapper_survives_body_failure(self, service):
        with patch.object(service, "get_all_content_types", side_effect=RuntimeError("db down")):
            dtd = service.generate_dtd()

        assert dtd.startswith("<!DOCTYPE root [ ")
        assert dtd.endswith("]>")
        assert dtd.splitlines() == ["<!DOCTYPE root [ ", "]>"]

    def test_legacy_dtd(self, service, monkeypatch):
        monkeypatch.setattr(settings, "use_legacy_xml_schema", True)

        dtd = service.generate_dtd()

        assert dtd.splitlines() == ["<!DOCTYPE root [ ", LEGACY_SCHEMA_BODY, "]>"]
