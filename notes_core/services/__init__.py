"""Сервисы бизнес-логики.

Классы:
    NoteService
        Операции над заметками и тегами.
"""

from notes_core.services.note_service import NoteService

__all__ = [
    "NoteService",
]
