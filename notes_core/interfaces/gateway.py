"""Интерфейс шлюза хранилища заметок.

Классы:
    Session
        Дескриптор открытой сессии с хранилищем.
    NoteQuery
        Предикаты выборки заметок.
    TagQuery
        Предикаты выборки тегов.
    BaseNoteGateway
        ABC для шлюзов хранилища (единицы работы, запросы, мутации).
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional, TypeVar, Union

from notes_core.domain import Note, Tag

T = TypeVar("T")


@dataclass
class Session:
    """Открытая сессия с хранилищем.

    Attributes:
        id: Метка сессии для логов ("tx-3").
        handle: Объект соединения конкретного бэкенда.
        owns_connection: Сессия сама открыла соединение и закроет его.
        active: False после освобождения сессии.
    """

    id: str
    handle: Any
    owns_connection: bool = False
    active: bool = True


@dataclass(frozen=True)
class NoteQuery:
    """Выборка заметок.

    Заданные (не None) предикаты объединяются через AND, а при
    match_any=True через OR. Без предикатов выбираются все заметки.

    Attributes:
        note_id: Точный идентификатор.
        title_contains: Подстрока заголовка (с учётом регистра).
        tag_title: Точный заголовок одного из тегов заметки.
        match_any: Объединять предикаты через OR.
    """

    note_id: Optional[int] = None
    title_contains: Optional[str] = None
    tag_title: Optional[str] = None
    match_any: bool = False


@dataclass(frozen=True)
class TagQuery:
    """Выборка тегов.

    Attributes:
        title: Точный заголовок (с учётом регистра).
        note_id: ID заметки-владельца.
    """

    title: Optional[str] = None
    note_id: Optional[int] = None


QuerySpec = Union[NoteQuery, TagQuery]


class BaseNoteGateway(ABC):
    """Контракт шлюза хранилища.

    Все чтения и записи происходят внутри сессии, полученной из
    transaction() / scoped_transaction(). Наружу отдаются только DTO
    (Note, Tag), ORM-объекты не покидают шлюз.
    """

    @abstractmethod
    def open_session(self) -> Session:
        """Открывает сессию.

        Raises:
            StoreConnectionError: Хранилище недоступно или шлюз закрыт.
        """
        raise NotImplementedError

    @abstractmethod
    def release_session(self, session: Session) -> None:
        """Освобождает сессию. Повторный вызов ничего не делает."""
        raise NotImplementedError

    @abstractmethod
    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Единица работы: commit при выходе, rollback при исключении.

        Сессия освобождается на любом пути выхода.
        """
        raise NotImplementedError

    def scoped_transaction(self, body: Callable[[Session], T]) -> T:
        """Выполняет body(session) в единице работы и возвращает результат.

        Исключение из body откатывает транзакцию и пробрасывается как есть.
        """
        with self.transaction() as session:
            return body(session)

    @abstractmethod
    def query(self, session: Session, spec: QuerySpec) -> list:
        """Чтение по предикатам.

        Returns:
            list[Note] для NoteQuery, list[Tag] для TagQuery, по возрастанию id.
            Пустой список, если ничего не найдено.
        """
        raise NotImplementedError

    @abstractmethod
    def count(self, session: Session, spec: QuerySpec) -> int:
        """Число записей, подходящих под предикаты."""
        raise NotImplementedError

    @abstractmethod
    def insert_note(self, session: Session, title: str, content: str) -> Note:
        """Создаёт заметку без тегов и возвращает её с присвоенным id."""
        raise NotImplementedError

    @abstractmethod
    def insert_tag(self, session: Session, note_id: int, title: str) -> Tag:
        """Создаёт тег, привязанный к заметке note_id."""
        raise NotImplementedError

    @abstractmethod
    def reassign_tag(self, session: Session, tag_id: int, note_id: int) -> int:
        """Переносит тег к другой заметке. Возвращает число изменённых строк."""
        raise NotImplementedError

    @abstractmethod
    def update_note(
        self, session: Session, note_id: int, title: str, content: str
    ) -> int:
        """Перезаписывает заголовок и текст. Возвращает число изменённых строк."""
        raise NotImplementedError

    @abstractmethod
    def delete_note(self, session: Session, note_id: int) -> int:
        """Удаляет теги заметки, затем саму заметку.

        Returns:
            Количество удалённых тегов.
        """
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """Освобождает ресурсы. Идемпотентен."""
        raise NotImplementedError
