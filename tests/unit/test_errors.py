"""Тесты таксономии ошибок."""

import sqlite3

import pytest

from notes_core.errors import (
    NotesError,
    NotFoundError,
    OperationFailed,
    StoreConnectionError,
    ValidationError,
)


class TestHierarchy:
    """Все ошибки наследуют NotesError и подходящий встроенный тип."""

    @pytest.mark.parametrize(
        "error, builtin",
        [
            (ValidationError("title"), ValueError),
            (NotFoundError(3), LookupError),
            (StoreConnectionError("down"), ConnectionError),
        ],
    )
    def test_builtin_bases(self, error, builtin):
        assert isinstance(error, NotesError)
        assert isinstance(error, builtin)

    def test_operation_failed_is_notes_error(self):
        assert isinstance(OperationFailed("add_note", RuntimeError("x")), NotesError)


class TestAttributes:
    """Атрибуты и сообщения ошибок."""

    def test_validation_error_field(self):
        """ValidationError помнит поле и строит сообщение по умолчанию."""
        error = ValidationError("content")
        assert error.field == "content"
        assert "content" in str(error)

    def test_validation_error_custom_message(self):
        error = ValidationError("title", "Заголовок обязателен")
        assert str(error) == "Заголовок обязателен"

    def test_not_found_message(self):
        error = NotFoundError(42)
        assert error.note_id == 42
        assert str(error) == "Заметка 42 не найдена"

    def test_store_connection_error_path(self):
        error = StoreConnectionError("недоступна", db_path="/x/notes.db")
        assert error.db_path == "/x/notes.db"

    def test_operation_failed_keeps_cause(self):
        """OperationFailed хранит имя операции и исходное исключение."""
        cause = sqlite3.IntegrityError("UNIQUE constraint failed")
        error = OperationFailed("add_note", cause)

        assert error.operation == "add_note"
        assert error.cause is cause
        assert "add_note" in str(error)
        assert "UNIQUE" in str(error)
