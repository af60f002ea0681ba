"""Семантическое логирование Notes Core.

Функции:
    get_logger(name: str) -> SemanticLogger
        Логгер для модуля (при первом вызове настраивает систему с дефолтами).

    setup_logging(config: LoggingConfig | None = None) -> None
        Настроить хендлеры корневого логгера notes_core.

Классы:
    SemanticLogger
        Адаптер с bind() и error_with_context().

    LoggingConfig
        Pydantic-настройки с чтением NOTES_LOG_* из окружения.

Example:
    >>> from notes_core.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.bind(note_id=3).info("Note deleted", tags_removed=1)
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import LoggingConfig
from .filters import SensitiveDataFilter
from .formatters import FileFormatter
from .levels import TRACE, install_trace_level
from .logger import SemanticLogger

install_trace_level()

_logging_configured: bool = False
_current_config: LoggingConfig | None = None

ROOT_LOGGER_NAME: str = "notes_core"


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Настраивает логирование пакета.

    - RichHandler в stderr (stdout остаётся чистым для --json вывода CLI)
    - FileHandler, если задан log_file
    - SensitiveDataFilter на оба хендлера

    Повторный вызов заменяет ранее установленные хендлеры.

    Args:
        config: Конфигурация логирования. Если None, используются дефолты.
    """
    global _logging_configured, _current_config

    config = config or LoggingConfig()
    _current_config = config

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    # Уровень фильтруют хендлеры
    root_logger.setLevel(TRACE)

    sensitive_filter = SensitiveDataFilter() if config.redact_secrets else None

    console_handler = RichHandler(
        level=logging.getLevelName(config.level),
        console=Console(stderr=True),
        show_time=True,
        show_level=False,  # уровень уже выражен эмодзи в сообщении
        show_path=config.show_path,
        rich_tracebacks=True,
        markup=False,  # иначе [7/tx-3] читается как тег стиля
    )
    if sensitive_filter:
        console_handler.addFilter(sensitive_filter)
    root_logger.addHandler(console_handler)

    if config.log_file:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(config.log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.getLevelName(config.file_level))
        file_handler.setFormatter(FileFormatter(json_context=config.json_format))
        if sensitive_filter:
            file_handler.addFilter(sensitive_filter)
        root_logger.addHandler(file_handler)

    root_logger.propagate = False

    _logging_configured = True


def get_logger(name: str) -> SemanticLogger:
    """Получить логгер для модуля.

    Args:
        name: Имя модуля (обычно __name__).

    Returns:
        SemanticLogger с поддержкой контекста.
    """
    if not _logging_configured:
        setup_logging()

    return SemanticLogger(name)


def get_current_config() -> LoggingConfig:
    """Активная конфигурация логирования (или дефолтная)."""
    return _current_config or LoggingConfig()


__all__ = [
    "TRACE",
    "get_logger",
    "setup_logging",
    "get_current_config",
    "SemanticLogger",
    "LoggingConfig",
    "FileFormatter",
    "SensitiveDataFilter",
]
