"""Типизированные ошибки Notes Core.

Классы:
    NotesError
        Базовое исключение пакета.
    ValidationError
        Пустое обязательное поле; хранилище не трогали.
    NotFoundError
        Заметка с указанным id не существует.
    StoreConnectionError
        Хранилище недоступно при открытии сессии.
    OperationFailed
        Любой другой сбой хранилища (после отката транзакции).

Оболочка различает две группы: ValidationError и NotFoundError означают
"ничего не произошло", остальные означают непредвиденный сбой.
"""

from typing import Optional


class NotesError(Exception):
    """Базовое исключение для всех ошибок Notes Core."""

    pass


class ValidationError(NotesError, ValueError):
    """Обязательное поле пустое.

    Attributes:
        field: Имя поля ("title" или "content").
    """

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"Поле '{field}' не может быть пустым")


class NotFoundError(NotesError, LookupError):
    """Операция ссылается на несуществующую заметку.

    Attributes:
        note_id: Запрошенный идентификатор.
    """

    def __init__(self, note_id: int):
        self.note_id = note_id
        super().__init__(f"Заметка {note_id} не найдена")


class StoreConnectionError(NotesError, ConnectionError):
    """Не удалось открыть сессию с хранилищем.

    Attributes:
        db_path: Путь к базе данных (если известен).
    """

    def __init__(self, message: str, db_path: Optional[str] = None):
        self.db_path = db_path
        super().__init__(message)


class OperationFailed(NotesError):
    """Сбой хранилища внутри операции сервиса.

    Транзакция к моменту выброса уже откачена.

    Attributes:
        operation: Имя операции сервиса (add_note, delete_note, ...).
        cause: Исходное исключение хранилища.

    Example:
        >>> try:
        ...     service.add_note("t", "c")
        ... except OperationFailed as e:
        ...     print(e.operation, type(e.cause).__name__)
    """

    def __init__(self, operation: str, cause: BaseException):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Операция {operation} не выполнена: {cause}")


__all__ = [
    "NotesError",
    "ValidationError",
    "NotFoundError",
    "StoreConnectionError",
    "OperationFailed",
]
