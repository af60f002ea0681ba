"""Модели заметки и тега (чистые DTO).

Классы:
    Tag
        Тег, принадлежащий ровно одной заметке.
    Note
        Заметка с упорядоченным списком своих тегов.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Tag:
    """Тег заметки (дочерний объект).

    Не привязан к ORM. Ссылка на заметку служит только для навигации,
    владельцем тега всегда является заметка.

    Attributes:
        title: Текст тега (пустой тег не сохраняется).
        id: Идентификатор (заполняется хранилищем).
        note_id: ID заметки-владельца.
    """

    title: str
    id: Optional[int] = None
    note_id: Optional[int] = None

    def __repr__(self) -> str:
        return f"Tag(id={self.id}, title='{self.title}', note={self.note_id})"


@dataclass
class Note:
    """Заметка (родительский объект).

    Attributes:
        title: Заголовок.
        content: Текст заметки.
        tags: Теги в порядке добавления.
        id: Идентификатор (назначается хранилищем, не меняется).
    """

    title: str
    content: str
    tags: list[Tag] = field(default_factory=list)
    id: Optional[int] = None

    @property
    def tag_titles(self) -> list[str]:
        """Заголовки тегов в порядке добавления."""
        return [tag.title for tag in self.tags]

    def has_tag(self, title: str) -> bool:
        """Есть ли у заметки тег с точно таким заголовком."""
        return any(tag.title == title for tag in self.tags)

    def __repr__(self) -> str:
        title = self.title[:40] + "..." if len(self.title) > 40 else self.title
        return f"Note(id={self.id}, title='{title}', tags={self.tag_titles})"
