"""CLI Context — контейнер зависимостей для команд.

Сервис и шлюз создаются лениво, поэтому --help и config show не
открывают базу данных.

Classes:
    CLIContext: Контейнер с ленивой загрузкой NoteService.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, TYPE_CHECKING

from rich.console import Console

from notes_core.cli.console import console as default_console
from notes_core.config import NotesConfig, get_config

if TYPE_CHECKING:
    from notes_core.infrastructure.storage import PeeweeNoteGateway
    from notes_core.services import NoteService


@dataclass
class CLIContext:
    """Контейнер зависимостей для CLI команд.

    Attributes:
        db_path: Override пути к БД из CLI.
        log_level: Override уровня логирования из CLI.
        json_output: Режим JSON вывода (для скриптов).
        console: Rich Console для вывода.

    Example:
        >>> ctx = CLIContext(db_path=Path("/tmp/notes.db"))
        >>> service = ctx.get_service()  # БД открывается только здесь
        >>> ctx.close()
    """

    db_path: Optional[Path] = None
    log_level: Optional[str] = None
    json_output: bool = False
    console: Console = field(default_factory=lambda: default_console)

    _config: Optional[NotesConfig] = field(default=None, init=False, repr=False)
    _gateway: Optional["PeeweeNoteGateway"] = field(default=None, init=False, repr=False)
    _service: Optional["NoteService"] = field(default=None, init=False, repr=False)
    _logging_configured: bool = field(default=False, init=False, repr=False)

    def get_config(self) -> NotesConfig:
        """Загрузить конфигурацию (CLI override'ы имеют приоритет)."""
        if self._config is None:
            overrides = {}
            if self.db_path:
                overrides["db_path"] = self.db_path
            if self.log_level:
                overrides["log_level"] = self.log_level

            self._config = get_config(**overrides)
        return self._config

    def get_service(self) -> "NoteService":
        """Получить или создать NoteService.

        Raises:
            StoreConnectionError: База данных недоступна.
        """
        if self._service is None:
            config = self.get_config()
            self._ensure_logging(config)
            self._service = self._build_service(config)
        return self._service

    def _ensure_logging(self, config: NotesConfig) -> None:
        if self._logging_configured:
            return

        from notes_core.utils.logger import setup_logging

        setup_logging(config.to_logging_config())
        self._logging_configured = True

    def _build_service(self, config: NotesConfig) -> "NoteService":
        from notes_core.infrastructure.storage import (
            PeeweeNoteGateway,
            init_peewee_database,
        )
        from notes_core.services import NoteService

        self._gateway = PeeweeNoteGateway(init_peewee_database(config.db_path))
        return NoteService(self._gateway, tag_reuse=config.tag_reuse)

    def close(self) -> None:
        """Закрыть шлюз, если он был открыт."""
        if self._gateway is not None:
            self._gateway.close()


__all__ = ["CLIContext"]
