import pytest
import typer

from contenttypes.cli.router import CliRouter


def test_register_adds_group_to_root_app():
    root = typer.Typer()
    router = CliRouter(root)

    router.register("schema", typer.Typer(), help_text="Schema operations")

    assert [group.name for group in root.registered_groups] == ["schema"]


def test_register_rejects_duplicate_name():
    router = CliRouter(typer.Typer())
    router.register("db", typer.Typer())

    with pytest.raises(ValueError, match="already registered"):
        router.register("db", typer.Typer())
