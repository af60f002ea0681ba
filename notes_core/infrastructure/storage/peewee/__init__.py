"""Реализация хранилища для Peewee + SQLite.

Модули:
    engine
        Инициализация SQLite.
    models
        Внутренние ORM модели.
    gateway
        Реализация BaseNoteGateway.
"""

from notes_core.infrastructure.storage.peewee.engine import (
    NotesDatabase,
    init_peewee_database,
)
from notes_core.infrastructure.storage.peewee.gateway import PeeweeNoteGateway

__all__ = [
    "NotesDatabase",
    "PeeweeNoteGateway",
    "init_peewee_database",
]
