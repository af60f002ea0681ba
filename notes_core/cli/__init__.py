"""Notes Core CLI.

Functions:
    main: Точка входа CLI.

Example:
    $ notes --help
    $ notes add "Покупки" "Молоко, хлеб" --tag дом
    $ notes search дом
"""

from notes_core.cli.app import app


def main() -> None:
    """Точка входа для CLI."""
    app()


__all__ = ["main", "app"]
