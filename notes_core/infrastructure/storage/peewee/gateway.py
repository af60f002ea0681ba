"""Реализация BaseNoteGateway для Peewee + SQLite.

Классы:
    PeeweeNoteGateway
        Единицы работы, выборки и мутации над таблицами notes/tags.
"""

import itertools
import operator
import sqlite3
import threading
import time
from contextlib import contextmanager
from functools import reduce
from typing import Iterator

from peewee import PeeweeException, fn, prefetch

from notes_core.domain import Note, Tag
from notes_core.errors import StoreConnectionError
from notes_core.interfaces import (
    BaseNoteGateway,
    NoteQuery,
    QuerySpec,
    Session,
    TagQuery,
)
from notes_core.infrastructure.storage.peewee.engine import NotesDatabase
from notes_core.infrastructure.storage.peewee.models import NoteModel, TagModel
from notes_core.utils.logger import get_logger

logger = get_logger(__name__)

MODELS = [NoteModel, TagModel]

_UNIT_OF_WORK_LOCK = threading.RLock()


class PeeweeNoteGateway(BaseNoteGateway):
    """Шлюз хранилища заметок на SQLite.

    Каждая единица работы берёт свою сессию: открывает соединение,
    выполняется внутри db.atomic() и закрывает соединение на выходе.
    In-memory база держит одно соединение до close(), иначе данные
    пропадут вместе с ним.

    Модели NoteModel/TagModel общие для процесса, поэтому к базе шлюза
    они привязываются только на время единицы работы (db.bind_ctx).
    Единицы работы всех шлюзов сериализуются одним RLock'ом: две
    транзакции никогда не делят одну сессию или одну привязку моделей.

    Attributes:
        db: Экземпляр NotesDatabase.
    """

    def __init__(self, database: NotesDatabase):
        """Создаёт таблицы (если их ещё нет).

        Args:
            database: Экземпляр из init_peewee_database().

        Raises:
            StoreConnectionError: Файл БД не открывается.
        """
        self.db = database
        self._lock = _UNIT_OF_WORK_LOCK
        self._closed = False
        self._session_ids = itertools.count(1)

        if self.db.is_in_memory:
            self._connect()

        self._create_tables()

        logger.debug("PeeweeNoteGateway initialized", path=str(self.db.database))

    def _create_tables(self) -> None:
        with self.transaction():
            self.db.create_tables(MODELS, safe=True)

    def _connect(self) -> bool:
        """Открывает соединение, если оно ещё не открыто.

        Returns:
            True, если соединение открыто этим вызовом.
        """
        try:
            return self.db.connect(reuse_if_open=True)
        except (PeeweeException, sqlite3.Error) as e:
            logger.error(
                "Database unreachable",
                path=str(self.db.database),
                error_type=type(e).__name__,
            )
            raise StoreConnectionError(
                f"Не удалось открыть базу данных {self.db.database}: {e}",
                db_path=str(self.db.database),
            ) from e

    # === Сессии и единицы работы ===

    def open_session(self) -> Session:
        if self._closed:
            raise StoreConnectionError(
                "Хранилище уже закрыто", db_path=str(self.db.database)
            )

        opened = self._connect()
        return Session(
            id=f"tx-{next(self._session_ids)}",
            handle=self.db,
            owns_connection=opened and not self.db.is_in_memory,
        )

    def release_session(self, session: Session) -> None:
        if not session.active:
            return
        session.active = False
        if session.owns_connection and not self.db.is_closed():
            self.db.close()

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        with self._lock:
            session = self.open_session()
            log = logger.bind(tx_id=session.id)
            start_time = time.perf_counter()
            try:
                with self.db.bind_ctx(MODELS), self.db.atomic():
                    log.debug("Transaction started")
                    yield session
                log.debug(
                    "Transaction committed",
                    latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
                )
            except Exception as e:
                log.debug("Transaction rolled back", error_type=type(e).__name__)
                raise
            finally:
                self.release_session(session)

    # === Чтение ===

    def query(self, session: Session, spec: QuerySpec) -> list:
        self._ensure_active(session)

        if isinstance(spec, NoteQuery):
            tags = TagModel.select().order_by(TagModel.id)
            models = prefetch(self._select_notes(spec), tags)
            return [self._model_to_note(model) for model in models]

        if isinstance(spec, TagQuery):
            return [self._model_to_tag(model) for model in self._select_tags(spec)]

        raise TypeError(f"Неизвестный тип запроса: {type(spec).__name__}")

    def count(self, session: Session, spec: QuerySpec) -> int:
        self._ensure_active(session)

        if isinstance(spec, NoteQuery):
            return self._select_notes(spec).count()
        if isinstance(spec, TagQuery):
            return self._select_tags(spec).count()

        raise TypeError(f"Неизвестный тип запроса: {type(spec).__name__}")

    def _select_notes(self, spec: NoteQuery):
        conditions = []

        if spec.note_id is not None:
            conditions.append(NoteModel.id == spec.note_id)

        if spec.title_contains is not None:
            # instr вместо LIKE: регистр учитывается, % и _ не служат шаблонами
            conditions.append(fn.INSTR(NoteModel.title, spec.title_contains) > 0)

        if spec.tag_title is not None:
            owners = TagModel.select(TagModel.note).where(
                TagModel.title == spec.tag_title
            )
            conditions.append(NoteModel.id.in_(owners))

        query = NoteModel.select().order_by(NoteModel.id)
        if conditions:
            combine = operator.or_ if spec.match_any else operator.and_
            query = query.where(reduce(combine, conditions))
        return query

    def _select_tags(self, spec: TagQuery):
        query = TagModel.select().order_by(TagModel.id)
        if spec.title is not None:
            query = query.where(TagModel.title == spec.title)
        if spec.note_id is not None:
            query = query.where(TagModel.note == spec.note_id)
        return query

    # === Мутации ===

    def insert_note(self, session: Session, title: str, content: str) -> Note:
        self._ensure_active(session)
        model = NoteModel.create(title=title, content=content)
        logger.debug("Note row inserted", note_id=model.id, tx_id=session.id)
        return self._model_to_note(model, with_tags=False)

    def insert_tag(self, session: Session, note_id: int, title: str) -> Tag:
        self._ensure_active(session)
        model = TagModel.create(note=note_id, title=title)
        logger.debug(
            "Tag row inserted", note_id=note_id, tag_id=model.id, tx_id=session.id
        )
        return self._model_to_tag(model)

    def reassign_tag(self, session: Session, tag_id: int, note_id: int) -> int:
        self._ensure_active(session)
        updated = (
            TagModel.update(note=note_id).where(TagModel.id == tag_id).execute()
        )
        logger.debug(
            "Tag row reassigned", note_id=note_id, tag_id=tag_id, tx_id=session.id
        )
        return updated

    def update_note(
        self, session: Session, note_id: int, title: str, content: str
    ) -> int:
        self._ensure_active(session)
        return (
            NoteModel.update(title=title, content=content)
            .where(NoteModel.id == note_id)
            .execute()
        )

    def delete_note(self, session: Session, note_id: int) -> int:
        self._ensure_active(session)

        # Теги удаляются явно в той же транзакции; FK CASCADE остаётся в схеме
        tags_removed = TagModel.delete().where(TagModel.note == note_id).execute()
        NoteModel.delete().where(NoteModel.id == note_id).execute()

        logger.debug(
            "Note row deleted",
            note_id=note_id,
            tags_removed=tags_removed,
            tx_id=session.id,
        )
        return tags_removed

    # === Жизненный цикл ===

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            if not self.db.is_closed():
                self.db.close()
        logger.debug("PeeweeNoteGateway closed", path=str(self.db.database))

    @property
    def is_closed(self) -> bool:
        return self._closed

    # === Преобразование ORM -> DTO ===

    @staticmethod
    def _ensure_active(session: Session) -> None:
        if not session.active:
            raise RuntimeError(f"Сессия {session.id} уже освобождена")

    def _model_to_note(self, model: NoteModel, with_tags: bool = True) -> Note:
        tags = [self._model_to_tag(tag) for tag in model.tags] if with_tags else []
        return Note(
            id=model.id,
            title=model.title,
            content=model.content,
            tags=tags,
        )

    @staticmethod
    def _model_to_tag(model: TagModel) -> Tag:
        return Tag(id=model.id, title=model.title, note_id=model.note_id)
