"""
Конфигурация pytest для тестов Notes Core.

Определяет фикстуры для:
- Временной базы данных (новый файл на каждый тест)
- Шлюза и сервиса поверх неё
- Сброса глобальной конфигурации между тестами
"""

import tempfile
from pathlib import Path

import pytest

from notes_core import NoteService, PeeweeNoteGateway, init_peewee_database
from notes_core.config import reset_config


@pytest.fixture(autouse=True)
def reset_global_config(monkeypatch, tmp_path):
    """Изолирует тест от notes.toml, .env и переменных NOTES_*.

    Рабочая директория переносится во временную, чтобы поиск notes.toml
    вверх по дереву не находил файлы разработчика.
    """
    for var in ("NOTES_DB_PATH", "NOTES_TAG_REUSE", "NOTES_LOG_LEVEL", "NOTES_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)

    reset_config()
    yield
    reset_config()


@pytest.fixture
def db_path():
    """
    Путь к временному файлу базы данных.

    Scope: function - каждый тест получает чистую базу.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "notes.db"


@pytest.fixture
def gateway(db_path):
    """Шлюз поверх временной базы. Закрывается после теста."""
    gw = PeeweeNoteGateway(init_peewee_database(db_path))
    yield gw
    gw.close()


@pytest.fixture
def service(gateway):
    """NoteService с политикой тегов по умолчанию (reparent)."""
    return NoteService(gateway)


@pytest.fixture
def fresh_service(gateway):
    """NoteService, который всегда создаёт новый тег."""
    return NoteService(gateway, tag_reuse="fresh")
