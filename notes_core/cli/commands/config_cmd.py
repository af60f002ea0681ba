"""Команда config — просмотр конфигурации.

Usage:
    notes config show
    notes --json config show
"""

import json

import typer
from pydantic import ValidationError as SettingsValidationError
from rich.markup import escape
from rich.table import Table

from notes_core.cli.app import get_cli_context
from notes_core.cli.console import console
from notes_core.config import find_config_file

app = typer.Typer(
    help="⚙️ Просмотр конфигурации.",
)


@app.command("show")
def show() -> None:
    """Показать текущую конфигурацию."""
    cli_ctx = get_cli_context()

    try:
        config = cli_ctx.get_config()
    except SettingsValidationError as e:
        console.print(f"[red]❌ Ошибка загрузки конфигурации: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    toml_path = find_config_file()

    if cli_ctx.json_output:
        data = {
            "source": str(toml_path) if toml_path else None,
            "config": config.to_toml_dict(),
        }
        console.print_json(json.dumps(data, ensure_ascii=False))
        return

    source = escape(str(toml_path)) if toml_path else "[dim]defaults + environment[/dim]"
    console.print("\n[bold]⚙️  Текущая конфигурация[/bold]")
    console.print(f"[dim]Источник: {source}[/dim]\n")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Настройка", style="cyan")
    table.add_column("Значение")

    table.add_row("database.path", escape(str(config.db_path)))
    table.add_row("tags.reuse", config.tag_reuse)
    table.add_row("logging.level", config.log_level)
    table.add_row(
        "logging.file",
        escape(str(config.log_file)) if config.log_file else "[dim]not set[/dim]",
    )

    console.print(table)
