"""Конфигурация системы логирования.

Классы:
    LoggingConfig
        Pydantic-модель настроек логирования с чтением из env.

Environment Variables:
    NOTES_LOG_LEVEL: Уровень консольного вывода (DEBUG/INFO/WARNING/ERROR).
    NOTES_LOG_FILE_LEVEL: Уровень файлового вывода.
    NOTES_LOG_SHOW_PATH: Показывать путь к модулю (true/false).

Поля с алиасом (file, json, redact) читаются без префикса, поэтому
в CLI путь к файлу логов задаётся через NotesConfig (NOTES_LOG_FILE).
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseSettings):
    """Настройки логирования.

    Значение из кода важнее переменной окружения, переменная окружения
    важнее значения по умолчанию.

    Attributes:
        level: Минимальный уровень для консоли.
        file_level: Минимальный уровень для файла.
        log_file: Путь к файлу логов (None = только консоль).
        json_format: Писать дополнительный контекст в файл как JSON.
        show_path: Показывать модуль и строку в консоли.
        redact_secrets: Маскировать токены и пароли в сообщениях.

    Example:
        >>> config = LoggingConfig(level="DEBUG", log_file="/tmp/notes.log")
    """

    level: LogLevel = Field(
        default="INFO",
        description="Минимальный уровень для консольного вывода",
    )

    file_level: LogLevel = Field(
        default="DEBUG",
        description="Минимальный уровень для файлового вывода",
    )

    log_file: Path | None = Field(
        default=None,
        alias="file",
        description="Путь к файлу логов (None = только консоль)",
    )

    json_format: bool = Field(
        default=False,
        alias="json",
        description="Использовать JSON для контекста в файле",
    )

    show_path: bool = Field(
        default=False,
        description="Показывать путь к модулю в выводе",
    )

    redact_secrets: bool = Field(
        default=True,
        alias="redact",
        description="Маскировать токены и пароли в логах",
    )

    model_config = SettingsConfigDict(
        env_prefix="NOTES_LOG_",
        env_file=None,
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )
