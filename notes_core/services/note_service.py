"""Сервис заметок.

Бизнес-операции над заметками и тегами. Каждая операция выполняется в
одной единице работы шлюза.

Классы:
    NoteService
        add/update/delete/list/search/get поверх BaseNoteGateway.
"""

import sqlite3
from typing import Callable, Optional, TypeVar

from peewee import PeeweeException

from notes_core.config import TagReusePolicy
from notes_core.domain import Note
from notes_core.errors import NotesError, NotFoundError, OperationFailed, ValidationError
from notes_core.interfaces import BaseNoteGateway, NoteQuery, Session, TagQuery
from notes_core.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# Сбои хранилища, которые сервис превращает в OperationFailed
STORE_ERRORS = (PeeweeException, sqlite3.Error)


class NoteService:
    """Сервис заметок.

    Валидация выполняется до обращения к хранилищу. Ошибки хранилища
    откатывают транзакцию (это делает шлюз) и пробрасываются наружу как
    OperationFailed. Повторов нет.

    Примеры использования:
        >>> gateway = PeeweeNoteGateway(init_peewee_database("notes.db"))
        >>> service = NoteService(gateway)
        >>> note = service.add_note("Покупки", "молоко, хлеб", "дом")
        >>> service.search_notes("дом")
        [Note(id=1, title='Покупки', tags=['дом'])]

    Attributes:
        gateway: Шлюз хранилища.
        tag_reuse: Политика для существующего тега ("reparent" или "fresh").
    """

    def __init__(
        self,
        gateway: BaseNoteGateway,
        tag_reuse: TagReusePolicy = "reparent",
    ):
        if tag_reuse not in ("reparent", "fresh"):
            raise ValueError(f"Неизвестная политика тегов: {tag_reuse}")
        self.gateway = gateway
        self.tag_reuse = tag_reuse

    def _run(self, operation: str, body: Callable[[Session], T]) -> T:
        """Выполняет body в единице работы и приводит ошибки к таксономии."""
        try:
            return self.gateway.scoped_transaction(body)
        except NotesError:
            raise
        except STORE_ERRORS as e:
            logger.error_with_context(e, "Store operation failed", operation=operation)
            raise OperationFailed(operation, e) from e

    def _get(self, session: Session, note_id: int) -> Note:
        notes = self.gateway.query(session, NoteQuery(note_id=note_id))
        if not notes:
            raise NotFoundError(note_id)
        return notes[0]

    def add_note(self, title: str, content: str, tag_title: Optional[str] = "") -> Note:
        """Создаёт заметку и, если задан tag_title, её тег.

        Существующий тег с тем же заголовком (точное совпадение, первый по id)
        при политике "reparent" переносится к новой заметке, при "fresh"
        игнорируется и создаётся новый.

        Args:
            title: Заголовок (не пустой).
            content: Текст (не пустой).
            tag_title: Заголовок тега; пустой означает "без тега".

        Returns:
            Созданная заметка с назначенным id и тегами.

        Raises:
            ValidationError: Пустой заголовок или текст.
            OperationFailed: Сбой хранилища.
        """
        if not title:
            raise ValidationError("title", "Заголовок и текст не могут быть пустыми")
        if not content:
            raise ValidationError("content", "Заголовок и текст не могут быть пустыми")

        tag_title = tag_title or ""

        def body(session: Session) -> Note:
            existing = (
                self.gateway.query(session, TagQuery(title=tag_title))
                if tag_title
                else []
            )

            note = self.gateway.insert_note(session, title, content)
            log = logger.bind(note_id=note.id, tx_id=session.id)

            if existing and self.tag_reuse == "reparent":
                tag = existing[0]
                self.gateway.reassign_tag(session, tag.id, note.id)
                log.info(
                    "Existing tag moved to new note",
                    tag_id=tag.id,
                    previous_note_id=tag.note_id,
                )
            elif tag_title:
                self.gateway.insert_tag(session, note.id, tag_title)

            return self._get(session, note.id)

        note = self._run("add_note", body)
        logger.info("Note added", note_id=note.id, tags=note.tag_titles)
        return note

    def update_note(self, note_id: int, new_title: str, new_content: str) -> Note:
        """Перезаписывает заголовок и текст; теги не трогает.

        Raises:
            NotFoundError: Заметки нет.
            OperationFailed: Сбой хранилища.
        """

        def body(session: Session) -> Note:
            self._get(session, note_id)
            self.gateway.update_note(session, note_id, new_title, new_content)
            return self._get(session, note_id)

        note = self._run("update_note", body)
        logger.info("Note updated", note_id=note_id)
        return note

    def delete_note(self, note_id: int) -> None:
        """Удаляет заметку и все её теги.

        Raises:
            NotFoundError: Заметки нет.
            OperationFailed: Сбой хранилища.
        """

        def body(session: Session) -> int:
            self._get(session, note_id)
            return self.gateway.delete_note(session, note_id)

        tags_removed = self._run("delete_note", body)
        logger.info("Note deleted", note_id=note_id, tags_removed=tags_removed)

    def get_note(self, note_id: int) -> Note:
        """Заметка по id.

        Raises:
            NotFoundError: Заметки нет.
        """
        return self._run("get_note", lambda session: self._get(session, note_id))

    def list_all_notes(self) -> list[Note]:
        """Все заметки по возрастанию id."""
        return self._run(
            "list_all_notes",
            lambda session: self.gateway.query(session, NoteQuery()),
        )

    def count_notes(self) -> int:
        return self._run(
            "count_notes",
            lambda session: self.gateway.count(session, NoteQuery()),
        )

    def search_notes(self, term: str) -> list[Note]:
        """Заметки, чей заголовок содержит term, плюс заметки с тегом term.

        Подстрока ищется с учётом регистра, тег сравнивается точно.
        Пустой term находит все заметки. Результат по возрастанию id,
        без дублей; пустой список, если ничего не найдено.
        """
        if not term:
            spec = NoteQuery()
        else:
            spec = NoteQuery(title_contains=term, tag_title=term, match_any=True)

        notes = self._run("search_notes", lambda session: self.gateway.query(session, spec))
        logger.debug("Search finished", term=term, found=len(notes))
        return notes
