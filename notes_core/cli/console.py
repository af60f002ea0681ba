"""Rich Console для CLI.

Attributes:
    console: Общий Console для вывода всех команд (stdout).
"""

from rich.console import Console

console = Console()

__all__ = ["console"]
