"""Инициализация SQLite базы для заметок.

Классы:
    NotesDatabase
        SqliteExtDatabase с трассировкой SQL на уровне TRACE.

Функции:
    init_peewee_database
        Создаёт настроенный (но ещё не подключённый) экземпляр БД.
"""

import sqlite3
from pathlib import Path

from playhouse.sqlite_ext import SqliteExtDatabase

from notes_core.utils.logger import get_current_config, get_logger

logger = get_logger(__name__)

IN_MEMORY: str = ":memory:"


class NotesDatabase(SqliteExtDatabase):
    """SQLite база заметок.

    Для каждого нового соединения включает трассировку SQL, если
    консоль или файл логов настроены на уровень TRACE.
    """

    @property
    def is_in_memory(self) -> bool:
        """База живёт только пока открыто соединение."""
        return self.database == IN_MEMORY

    def _add_conn_hooks(self, conn: sqlite3.Connection) -> None:
        super()._add_conn_hooks(conn)

        log_config = get_current_config()
        trace_enabled = log_config.level == "TRACE" or (
            log_config.log_file is not None and log_config.file_level == "TRACE"
        )
        if trace_enabled:
            conn.set_trace_callback(lambda sql: logger.trace("SQL", sql=sql))


def init_peewee_database(db_path: str | Path) -> NotesDatabase:
    """Создаёт экземпляр БД.

    Подключение не открывается: шлюз открывает его на каждую сессию,
    чтобы недоступность файла проявлялась как StoreConnectionError.

    Args:
        db_path: Путь к файлу БД или ":memory:".

    Returns:
        Настроенный экземпляр NotesDatabase.
    """
    logger.info("Initializing database", path=str(db_path))

    return NotesDatabase(
        str(db_path),
        pragmas={
            "journal_mode": "wal",
            "foreign_keys": 1,
            "synchronous": 1,  # NORMAL
            "busy_timeout": 5000,
        },
    )
