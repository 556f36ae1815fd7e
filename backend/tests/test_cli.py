"""
Tests for the management CLI.
"""

import pytest
from typer.testing import CliRunner

from cli import app
from pos_api.services.domain import TableService, UserService
from tests.conftest import file_session_factory, make_settings


runner = CliRunner()


@pytest.fixture
def db_url(tmp_path):
    path = tmp_path / "cli.db"
    factory, engine = file_session_factory(path)
    engine.dispose()
    return f"sqlite:///{path}"


class TestCliCommands:

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "BuffetPOS" in result.output

    def test_init_db(self, tmp_path):
        result = runner.invoke(app, ["init-db", "--database-url", f"sqlite:///{tmp_path / 'new.db'}"])
        assert result.exit_code == 0
        assert (tmp_path / "new.db").exists()

    def test_create_manager(self, db_url):
        result = runner.invoke(
            app,
            ["create-user", "boss@test.com", "--name", "Boss", "--role", "Manager", "--database-url", db_url],
            input="supersecret\nsupersecret\n",
        )
        assert result.exit_code == 0, result.output
        assert "Manager" in result.output

    def test_create_duplicate_user_fails(self, db_url):
        args = ["create-user", "boss@test.com", "--name", "Boss", "--database-url", db_url]
        runner.invoke(app, args, input="supersecret\nsupersecret\n")

        result = runner.invoke(app, args, input="supersecret\nsupersecret\n")
        assert result.exit_code == 1
        assert "Email already exists" in result.output

    def test_list_tables(self, tmp_path):
        factory, engine = file_session_factory(tmp_path / "tables.db")
        try:
            with factory() as db:
                TableService(db).add("Window", 2)
        finally:
            engine.dispose()

        result = runner.invoke(
            app, ["list-tables", "--database-url", f"sqlite:///{tmp_path / 'tables.db'}"]
        )
        assert result.exit_code == 0
        assert "Window" in result.output
        assert "Free" in result.output


class TestUserServiceForCli:

    def test_create_user_with_any_role(self, db_session):
        user = UserService(db_session, make_settings()).create_user(
            "Boss", "Boss@Test.com", "supersecret", "Manager"
        )
        assert user.role == "Manager"
        assert user.email == "boss@test.com"
