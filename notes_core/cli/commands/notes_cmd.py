"""Команды работы с заметками.

Usage:
    notes add "Заголовок" "Текст" --tag работа
    notes update 3 "Новый заголовок" "Новый текст"
    notes delete 3 --yes
    notes list
    notes search работа
    notes show 3
"""

import json
from contextlib import contextmanager
from typing import Iterator

import typer
from pydantic import ValidationError as SettingsValidationError
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from notes_core.cli.console import console
from notes_core.domain import Note
from notes_core.errors import (
    NotFoundError,
    OperationFailed,
    StoreConnectionError,
    ValidationError,
)
from notes_core.utils.logger import get_logger

logger = get_logger(__name__)

# Коды выхода: 1 если ничего не изменилось, 2 при сбое хранилища
EXIT_NOTHING_HAPPENED = 1
EXIT_FAILURE = 2


@contextmanager
def report_errors() -> Iterator[None]:
    """Переводит ошибки сервиса в сообщение пользователю и код выхода."""
    try:
        yield
    except (ValidationError, NotFoundError) as e:
        console.print(
            Panel(f"[yellow]{escape(str(e))}[/yellow]", title="⚠️ Ничего не изменено")
        )
        raise typer.Exit(EXIT_NOTHING_HAPPENED)
    except SettingsValidationError as e:
        console.print(f"[red]❌ Ошибка загрузки конфигурации: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_NOTHING_HAPPENED)
    except (OperationFailed, StoreConnectionError) as e:
        logger.error_with_context(e, "Command failed", include_traceback=False)
        console.print(
            Panel(f"[red]{escape(str(e))}[/red]", title="❌ Непредвиденная ошибка")
        )
        raise typer.Exit(EXIT_FAILURE)


def _note_to_dict(note: Note) -> dict:
    return {
        "id": note.id,
        "title": note.title,
        "content": note.content,
        "tags": note.tag_titles,
    }


def _print_json(data: object) -> None:
    console.print_json(json.dumps(data, ensure_ascii=False))


def _render_note(note: Note, title: str) -> None:
    tags = ", ".join(note.tag_titles) or "нет"
    # Text вместо markup: пользовательский текст может содержать [скобки]
    body = Text.assemble(
        (note.title, "bold"),
        "\n\n",
        note.content,
        "\n\n",
        (f"Теги: {tags}", "dim"),
    )
    console.print(Panel(body, title=f"{escape(title)} (id={note.id})"))


def _render_table(notes: list[Note], title: str) -> None:
    table = Table(title=escape(title), show_header=True, header_style="bold magenta")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Заголовок", style="cyan")
    table.add_column("Теги")
    table.add_column("Текст", overflow="fold")

    for note in notes:
        preview = note.content if len(note.content) <= 60 else note.content[:60] + "..."
        table.add_row(
            str(note.id),
            Text(note.title),
            Text(", ".join(note.tag_titles)),
            Text(preview),
        )

    console.print(table)


def add(
    title: str = typer.Argument(..., help="Заголовок заметки"),
    content: str = typer.Argument(..., help="Текст заметки"),
    tag: str = typer.Option("", "--tag", "-t", help="Тег заметки"),
) -> None:
    """Добавить заметку."""
    from notes_core.cli.app import get_cli_context

    cli_ctx = get_cli_context()

    with report_errors():
        note = cli_ctx.get_service().add_note(title, content, tag)

    if cli_ctx.json_output:
        _print_json(_note_to_dict(note))
    else:
        _render_note(note, "✅ Заметка добавлена")


def update(
    note_id: int = typer.Argument(..., help="ID заметки"),
    title: str = typer.Argument(..., help="Новый заголовок"),
    content: str = typer.Argument(..., help="Новый текст"),
) -> None:
    """Изменить заголовок и текст заметки (теги не меняются)."""
    from notes_core.cli.app import get_cli_context

    cli_ctx = get_cli_context()

    with report_errors():
        note = cli_ctx.get_service().update_note(note_id, title, content)

    if cli_ctx.json_output:
        _print_json(_note_to_dict(note))
    else:
        _render_note(note, "✅ Заметка обновлена")


def delete(
    note_id: int = typer.Argument(..., help="ID заметки"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Не спрашивать подтверждение"),
) -> None:
    """Удалить заметку вместе с её тегами."""
    from notes_core.cli.app import get_cli_context

    cli_ctx = get_cli_context()

    if not yes and not typer.confirm(f"Удалить заметку {note_id}?"):
        console.print("[dim]Отменено[/dim]")
        raise typer.Exit(EXIT_NOTHING_HAPPENED)

    with report_errors():
        cli_ctx.get_service().delete_note(note_id)

    if cli_ctx.json_output:
        _print_json({"deleted": note_id})
    else:
        console.print(f"[green]🗑️  Заметка {note_id} удалена[/green]")


def list_notes() -> None:
    """Показать все заметки."""
    from notes_core.cli.app import get_cli_context

    cli_ctx = get_cli_context()

    with report_errors():
        notes = cli_ctx.get_service().list_all_notes()

    if cli_ctx.json_output:
        _print_json([_note_to_dict(note) for note in notes])
        return

    if not notes:
        console.print(Panel("[yellow]Заметок пока нет[/yellow]", title="📒 Заметки"))
        return

    _render_table(notes, f"📒 Заметки: {len(notes)}")


def search(
    term: str = typer.Argument(..., help="Подстрока заголовка или точный тег"),
) -> None:
    """Найти заметки по подстроке заголовка или по тегу."""
    from notes_core.cli.app import get_cli_context

    cli_ctx = get_cli_context()

    with report_errors():
        notes = cli_ctx.get_service().search_notes(term)

    if cli_ctx.json_output:
        _print_json(
            {
                "term": term,
                "count": len(notes),
                "results": [_note_to_dict(note) for note in notes],
            }
        )
        return

    if not notes:
        console.print(
            Panel("[yellow]Ничего не найдено[/yellow]", title=f"🔍 Поиск: {escape(term)}")
        )
        return

    _render_table(notes, f"🔍 Поиск: {term}, найдено {len(notes)}")


def show(
    note_id: int = typer.Argument(..., help="ID заметки"),
) -> None:
    """Показать заметку целиком."""
    from notes_core.cli.app import get_cli_context

    cli_ctx = get_cli_context()

    with report_errors():
        note = cli_ctx.get_service().get_note(note_id)

    if cli_ctx.json_output:
        _print_json(_note_to_dict(note))
    else:
        _render_note(note, "📝 Заметка")
