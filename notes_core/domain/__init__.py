"""Доменный слой с чистыми объектами данных (DTO).

Классы:
    Note
        Заметка с заголовком, текстом и тегами.
    Tag
        Тег, принадлежащий одной заметке.
"""

from notes_core.domain.note import Note, Tag

__all__ = [
    "Note",
    "Tag",
]
