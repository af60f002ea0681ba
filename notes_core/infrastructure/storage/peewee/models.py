"""Внутренние ORM модели для Peewee (скрыты от внешнего API).

Классы:
    BaseModel
        Базовая модель без привязки к БД.
    NoteModel
        Таблица notes.
    TagModel
        Таблица tags, ссылается на заметку-владельца.
"""

from peewee import ForeignKeyField, Model, TextField
from playhouse.sqlite_ext import AutoIncrementField


class BaseModel(Model):
    """Базовая модель (без привязки к конкретной БД).

    База данных устанавливается в шлюзе через _meta.database.
    """

    class Meta:
        database = None


class NoteModel(BaseModel):
    """Заметка.

    AUTOINCREMENT гарантирует, что id удалённой заметки не будет выдан снова.

    Attributes:
        id: Идентификатор, назначается SQLite.
        title: Заголовок.
        content: Текст.
    """

    id = AutoIncrementField()
    title = TextField()
    content = TextField()

    class Meta:
        table_name = "notes"


class TagModel(BaseModel):
    """Тег, принадлежащий одной заметке.

    Attributes:
        id: Идентификатор, назначается SQLite.
        title: Текст тега.
        note: Заметка-владелец (ON DELETE CASCADE).
    """

    id = AutoIncrementField()
    title = TextField(index=True)
    note = ForeignKeyField(
        NoteModel,
        backref="tags",
        on_delete="CASCADE",
        index=True,
    )

    class Meta:
        table_name = "tags"
