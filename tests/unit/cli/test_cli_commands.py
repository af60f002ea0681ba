"""
Tests for CLI commands — add, update, delete, list, search, show, config.

Используем Typer CliRunner для тестирования команд без реального терминала.
"""

import json
from unittest.mock import patch

import pytest
from peewee import OperationalError
from typer.testing import CliRunner

from notes_core import __version__
from notes_core.cli.app import app


runner = CliRunner()


@pytest.fixture
def invoke(db_path):
    """Вызов CLI с временной базой данных."""

    def _invoke(*args, input=None):
        return runner.invoke(app, ["--db-path", str(db_path), *args], input=input)

    return _invoke


@pytest.fixture
def invoke_json(invoke):
    """Вызов CLI в режиме --json, возвращает (result, разобранный JSON)."""

    def _invoke(*args):
        result = invoke("--json", *args)
        data = json.loads(result.stdout) if result.exit_code == 0 else None
        return result, data

    return _invoke


class TestCliApp:
    """Тесты основного CLI приложения."""

    def test_version_option(self):
        """--version показывает версию."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_help_option(self):
        """--help показывает справку со списком команд."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("add", "list", "search", "delete"):
            assert command in result.stdout

    def test_unknown_command(self):
        """Неизвестная команда возвращает ошибку."""
        result = runner.invoke(app, ["unknown-command"])
        assert result.exit_code != 0

    def test_db_path_from_env(self, db_path, monkeypatch):
        """NOTES_DB_PATH задаёт базу без опции --db-path."""
        monkeypatch.setenv("NOTES_DB_PATH", str(db_path))

        result = runner.invoke(app, ["add", "Из env", "текст"])

        assert result.exit_code == 0
        assert db_path.exists()


class TestAddCommand:
    """Тесты команды add."""

    def test_add_json(self, invoke_json):
        """add --json возвращает созданную заметку."""
        result, data = invoke_json("add", "Покупки", "молоко", "--tag", "дом")

        assert result.exit_code == 0
        assert data == {"id": 1, "title": "Покупки", "content": "молоко", "tags": ["дом"]}

    def test_add_rich_output(self, invoke):
        result = invoke("add", "Покупки", "молоко [2 шт]")

        assert result.exit_code == 0
        assert "Заметка добавлена" in result.stdout
        assert "молоко [2 шт]" in result.stdout

    def test_add_empty_title(self, invoke, invoke_json):
        """Пустой заголовок: предупреждение и код 1, заметка не создана."""
        result = invoke("add", "", "текст")

        assert result.exit_code == 1
        assert "Ничего не изменено" in result.stdout

        _, notes = invoke_json("list")
        assert notes == []

    def test_add_reparents_tag(self, invoke_json):
        """Повторный тег переезжает к новой заметке (политика по умолчанию)."""
        invoke_json("add", "first", "c", "-t", "дом")
        invoke_json("add", "second", "c", "-t", "дом")

        _, notes = invoke_json("list")

        assert [n["tags"] for n in notes] == [[], ["дом"]]


class TestListAndShow:
    """Тесты команд list и show."""

    def test_list_empty(self, invoke):
        result = invoke("list")
        assert result.exit_code == 0
        assert "Заметок пока нет" in result.stdout

    def test_list_table(self, invoke):
        invoke("add", "Первая", "текст", "-t", "дом")
        invoke("add", "Вторая", "текст")

        result = invoke("list")

        assert result.exit_code == 0
        assert "Первая" in result.stdout
        assert "Вторая" in result.stdout
        assert "дом" in result.stdout

    def test_list_json_ascending(self, invoke, invoke_json):
        for title in ("b", "a", "c"):
            invoke("add", title, "x")

        _, notes = invoke_json("list")

        assert [n["id"] for n in notes] == [1, 2, 3]
        assert [n["title"] for n in notes] == ["b", "a", "c"]

    def test_show(self, invoke, invoke_json):
        invoke("add", "Заметка", "полный текст", "-t", "дом")

        result, note = invoke_json("show", "1")

        assert result.exit_code == 0
        assert note["content"] == "полный текст"

    def test_show_missing(self, invoke):
        result = invoke("show", "42")
        assert result.exit_code == 1
        assert "Заметка 42 не найдена" in result.stdout


class TestUpdateCommand:
    """Тесты команды update."""

    def test_update_keeps_tags(self, invoke, invoke_json):
        invoke("add", "old", "old", "-t", "дом")

        result, note = invoke_json("update", "1", "new", "new content")

        assert result.exit_code == 0
        assert note == {"id": 1, "title": "new", "content": "new content", "tags": ["дом"]}

    def test_update_missing(self, invoke):
        result = invoke("update", "7", "t", "c")
        assert result.exit_code == 1


class TestDeleteCommand:
    """Тесты команды delete."""

    def test_delete_with_yes(self, invoke, invoke_json):
        invoke("add", "t", "c", "-t", "дом")

        result = invoke("delete", "1", "--yes")

        assert result.exit_code == 0
        _, found = invoke_json("search", "дом")
        assert found["count"] == 0

    def test_delete_confirmed(self, invoke, invoke_json):
        invoke("add", "t", "c")

        result = invoke("delete", "1", input="y\n")

        assert result.exit_code == 0
        assert invoke_json("list")[1] == []

    def test_delete_cancelled(self, invoke, invoke_json):
        """Отказ в подтверждении ничего не удаляет."""
        invoke("add", "t", "c")

        result = invoke("delete", "1", input="n\n")

        assert result.exit_code == 1
        assert len(invoke_json("list")[1]) == 1

    def test_delete_missing(self, invoke):
        result = invoke("delete", "3", "-y")
        assert result.exit_code == 1


class TestSearchCommand:
    """Тесты команды search."""

    def test_search_json(self, invoke, invoke_json):
        invoke("add", "Learning Python", "c")
        invoke("add", "Misc", "c", "-t", "Python")
        invoke("add", "Rust", "c")

        result, data = invoke_json("search", "Python")

        assert result.exit_code == 0
        assert data["count"] == 2
        assert [n["id"] for n in data["results"]] == [1, 2]

    def test_search_nothing_found(self, invoke):
        invoke("add", "Rust", "c")

        result = invoke("search", "Python")

        assert result.exit_code == 0
        assert "Ничего не найдено" in result.stdout


class TestBracketedText:
    """Квадратные скобки в тексте пользователя выводятся как есть."""

    def test_list_with_brackets(self, invoke):
        """Заголовок вида [/x] не ломает таблицу list."""
        invoke("add", "fix [/x] bug", "[bold]c", "-t", "[red]")

        result = invoke("list")

        assert result.exit_code == 0
        assert "fix [/x] bug" in result.stdout
        assert "[red]" in result.stdout

    def test_search_with_brackets(self, invoke):
        """Поисковый запрос со скобками отображается в заголовке результата."""
        invoke("add", "fix [/x] bug", "c")

        result = invoke("search", "[/x]")

        assert result.exit_code == 0
        assert "fix [/x] bug" in result.stdout
        assert "[/x]" in result.stdout

    def test_search_nothing_found_with_brackets(self, invoke):
        result = invoke("search", "[/nothing]")

        assert result.exit_code == 0
        assert "Ничего не найдено" in result.stdout
        assert "[/nothing]" in result.stdout

    def test_show_with_brackets(self, invoke):
        invoke("add", "[/x]", "[/y] текст")

        result = invoke("show", "1")

        assert result.exit_code == 0
        assert "[/y] текст" in result.stdout


class TestErrors:
    """Непредвиденные сбои дают код 2."""

    def test_unreachable_database(self, tmp_path):
        bad_path = tmp_path / "missing" / "notes.db"

        result = runner.invoke(app, ["--db-path", str(bad_path), "list"])

        assert result.exit_code == 2

    def test_store_failure(self, invoke):
        with patch(
            "notes_core.infrastructure.storage.peewee.gateway.PeeweeNoteGateway.insert_note",
            side_effect=OperationalError("disk I/O error"),
        ):
            result = invoke("add", "t", "c")

        assert result.exit_code == 2


class TestConfigCommand:
    """Тесты команды config."""

    def test_config_show_table(self, invoke, db_path):
        result = invoke("config", "show")

        assert result.exit_code == 0
        assert "database.path" in result.stdout
        assert "tags.reuse" in result.stdout

    def test_config_show_json(self, invoke_json, db_path):
        result, data = invoke_json("config", "show")

        assert result.exit_code == 0
        assert data["source"] is None
        assert data["config"]["database"]["path"] == str(db_path)
        assert data["config"]["tags"]["reuse"] == "reparent"

    def test_config_show_reads_toml(self, tmp_path):
        (tmp_path / "notes.toml").write_text('[tags]\nreuse = "fresh"\n', encoding="utf-8")

        result = runner.invoke(app, ["--json", "config", "show"])
        data = json.loads(result.stdout)

        assert data["source"] == str(tmp_path / "notes.toml")
        assert data["config"]["tags"]["reuse"] == "fresh"

    def test_config_does_not_open_database(self, invoke, db_path):
        """config show не создаёт файл базы."""
        invoke("config", "show")
        assert not db_path.exists()
