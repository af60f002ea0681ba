"""Notes Core - локальная записная книжка на SQLite.

Архитектура:
    Domain: Чистые DTO (Note, Tag).
    Interfaces: Контракт шлюза хранилища (BaseNoteGateway, NoteQuery, TagQuery).
    Infrastructure: Peewee + SQLite (PeeweeNoteGateway, init_peewee_database).
    Services: Бизнес-операции (NoteService).
    CLI: Typer-оболочка `notes`.

Пример:
    >>> from notes_core import NoteService, PeeweeNoteGateway, init_peewee_database
    >>>
    >>> gateway = PeeweeNoteGateway(init_peewee_database("notes.db"))
    >>> service = NoteService(gateway)
    >>> note = service.add_note("Идея", "Переписать заметки на SQLite", "проекты")
    >>> service.search_notes("проекты")
    >>> gateway.close()
"""

__version__ = "0.3.0"

from notes_core.domain import Note, Tag
from notes_core.errors import (
    NotesError,
    NotFoundError,
    OperationFailed,
    StoreConnectionError,
    ValidationError,
)
from notes_core.interfaces import BaseNoteGateway, NoteQuery, Session, TagQuery
from notes_core.infrastructure.storage import (
    NotesDatabase,
    PeeweeNoteGateway,
    init_peewee_database,
)
from notes_core.services import NoteService

__all__ = [
    "__version__",
    # Domain
    "Note",
    "Tag",
    # Errors
    "NotesError",
    "NotFoundError",
    "OperationFailed",
    "StoreConnectionError",
    "ValidationError",
    # Interfaces
    "BaseNoteGateway",
    "NoteQuery",
    "Session",
    "TagQuery",
    # Infrastructure
    "NotesDatabase",
    "PeeweeNoteGateway",
    "init_peewee_database",
    # Services
    "NoteService",
]
