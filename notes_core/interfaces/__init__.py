"""Контракты слоёв Notes Core.

Классы:
    BaseNoteGateway
        ABC шлюза хранилища.
    Session
        Дескриптор сессии.
    NoteQuery, TagQuery
        Предикаты выборки.
"""

from notes_core.interfaces.gateway import (
    BaseNoteGateway,
    NoteQuery,
    QuerySpec,
    Session,
    TagQuery,
)

__all__ = [
    "BaseNoteGateway",
    "NoteQuery",
    "QuerySpec",
    "Session",
    "TagQuery",
]
