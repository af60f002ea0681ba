"""Адаптеры хранилища заметок.

Модули:
    peewee
        Реализация BaseNoteGateway для SQLite + Peewee.
"""

from notes_core.infrastructure.storage.peewee import (
    NotesDatabase,
    PeeweeNoteGateway,
    init_peewee_database,
)

__all__ = [
    "NotesDatabase",
    "PeeweeNoteGateway",
    "init_peewee_database",
]
