"""Typer приложение — главный CLI.

Определяет глобальные опции и монтирует команды.

Attributes:
    app: Главное Typer приложение.
"""

from pathlib import Path
from typing import Optional

import typer

from notes_core.cli.context import CLIContext

app = typer.Typer(
    name="notes",
    help="📝 Notes Core CLI — заметки и теги в локальной SQLite.",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


_cli_context: Optional[CLIContext] = None


def get_cli_context() -> CLIContext:
    """Получить текущий CLI контекст.

    Returns:
        CLIContext с настройками из глобальных опций (или дефолтный,
        если команда вызвана в обход callback).
    """
    if _cli_context is None:
        return CLIContext()
    return _cli_context


def version_callback(value: bool) -> None:
    """Показать версию и выйти."""
    if value:
        from notes_core import __version__

        typer.echo(f"Notes Core CLI v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    db_path: Optional[Path] = typer.Option(
        None,
        "--db-path",
        "-d",
        help="Путь к SQLite базе данных.",
        envvar="NOTES_DB_PATH",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Уровень логирования: TRACE, DEBUG, INFO, WARNING, ERROR.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Вывод в формате JSON (для скриптов).",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Показать версию и выйти.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """📝 Notes Core CLI — заметки и теги в локальной SQLite."""
    global _cli_context

    _cli_context = CLIContext(
        db_path=db_path,
        log_level=log_level,
        json_output=json_output,
    )

    ctx.obj = _cli_context
    ctx.call_on_close(_cli_context.close)


# === Монтирование команд ===

from notes_core.cli.commands import config_cmd, notes_cmd

app.command("add")(notes_cmd.add)
app.command("update")(notes_cmd.update)
app.command("delete")(notes_cmd.delete)
app.command("list")(notes_cmd.list_notes)
app.command("search")(notes_cmd.search)
app.command("show")(notes_cmd.show)

app.add_typer(config_cmd.app, name="config")


__all__ = ["app", "get_cli_context"]
