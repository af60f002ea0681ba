"""Тесты DTO Note и Tag."""

from notes_core.domain import Note, Tag


class TestNote:
    """Тесты заметки."""

    def test_defaults(self):
        """Новая заметка без id и без тегов."""
        note = Note(title="Покупки", content="молоко")
        assert note.id is None
        assert note.tags == []
        assert note.tag_titles == []

    def test_tags_not_shared_between_instances(self):
        """Список тегов у каждой заметки свой."""
        first = Note(title="a", content="b")
        second = Note(title="c", content="d")
        first.tags.append(Tag(title="дом"))

        assert second.tags == []

    def test_tag_titles_keep_order(self):
        """tag_titles сохраняет порядок тегов."""
        note = Note(
            title="t",
            content="c",
            tags=[Tag(title="дом", id=2), Tag(title="работа", id=5)],
        )
        assert note.tag_titles == ["дом", "работа"]

    def test_has_tag_exact_match(self):
        """has_tag сравнивает заголовок точно, с учётом регистра."""
        note = Note(title="t", content="c", tags=[Tag(title="Дом")])
        assert note.has_tag("Дом")
        assert not note.has_tag("дом")
        assert not note.has_tag("До")

    def test_repr_truncates_long_title(self):
        """Длинный заголовок обрезается в repr."""
        note = Note(title="x" * 100, content="c", id=1)
        text = repr(note)
        assert "id=1" in text
        assert "x" * 40 + "..." in text


class TestTag:
    """Тесты тега."""

    def test_repr(self):
        """repr показывает id, заголовок и владельца."""
        assert repr(Tag(title="дом", id=3, note_id=7)) == "Tag(id=3, title='дом', note=7)"

    def test_equality_by_value(self):
        """Теги сравниваются по значению полей."""
        assert Tag(title="a", id=1, note_id=2) == Tag(title="a", id=1, note_id=2)
