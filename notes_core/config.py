"""Единая конфигурация Notes Core.

Загружает настройки из (в порядке приоритета):
1. CLI аргументы (переданные как kwargs)
2. Environment variables (NOTES_*)
3. .env в текущей директории
4. notes.toml в текущей или родительских директориях
5. Default values

Классы:
    NotesConfig
        Pydantic Settings с поддержкой TOML и env variables.

Функции:
    get_config
        Получить конфигурацию с возможными override'ами.
    reset_config
        Сбросить закэшированную конфигурацию.
    find_config_file
        Найти notes.toml вверх по дереву директорий.

Example:
    >>> from notes_core.config import get_config
    >>> config = get_config(db_path="/tmp/notes.db", tag_reuse="fresh")
"""

import tomllib
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from notes_core.utils.logger import LoggingConfig, get_logger

logger = get_logger(__name__)


LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
TagReusePolicy = Literal["reparent", "fresh"]

CONFIG_FILE_NAME: str = "notes.toml"

# (секция, ключ) в TOML -> поле конфига
_TOML_MAPPING: dict[tuple[str, str], str] = {
    ("database", "path"): "db_path",
    ("tags", "reuse"): "tag_reuse",
    ("logging", "level"): "log_level",
    ("logging", "file"): "log_file",
}


def find_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Найти notes.toml в текущей или родительских директориях.

    Args:
        start_dir: Начальная директория поиска (по умолчанию cwd).

    Returns:
        Path к notes.toml или None, если не найден.
    """
    current = start_dir or Path.cwd()

    for _ in range(10):
        config_path = current / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_toml(path: Path) -> dict[str, Any]:
    """Загружает notes.toml и выравнивает секции в плоские поля.

    [database]
    path = "notes.db"

    превращается в {"db_path": "notes.db"}. Плоские ключи тоже принимаются.
    Битый файл логируется и игнорируется.
    """
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to load TOML", path=str(path), error=str(e))
        return {}

    flat: dict[str, Any] = {}

    for (section, key), field_name in _TOML_MAPPING.items():
        if isinstance(raw.get(section), dict) and key in raw[section]:
            flat[field_name] = raw[section][key]

    for field_name in _TOML_MAPPING.values():
        if field_name in raw:
            flat[field_name] = raw[field_name]

    return flat


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Источник настроек из notes.toml (самый низкий приоритет после дефолтов)."""

    def __init__(self, settings_cls: type[BaseSettings], path: Optional[Path]):
        super().__init__(settings_cls)
        self.path = path

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        if self.path is None:
            return {}
        data = load_toml(self.path)
        logger.debug("Loaded config from TOML", path=str(self.path))
        return data


class NotesConfig(BaseSettings):
    """Конфигурация Notes Core.

    Attributes:
        db_path: Путь к SQLite базе данных (или ":memory:").
        tag_reuse: Что делать с уже существующим тегом при добавлении заметки:
            "reparent" переносит тег к новой заметке (исходная его теряет),
            "fresh" всегда создаёт новый тег.
        log_level: Уровень консольного логирования.
        log_file: Путь к файлу логов.

    Environment Variables:
        NOTES_DB_PATH, NOTES_TAG_REUSE, NOTES_LOG_LEVEL, NOTES_LOG_FILE.
    """

    # === Database ===
    db_path: Path = Field(
        default=Path("notes.db"),
        description="Путь к SQLite базе данных",
    )

    # === Tags ===
    tag_reuse: TagReusePolicy = Field(
        default="reparent",
        description="Политика для существующего тега при добавлении заметки",
    )

    # === Logging ===
    log_level: LogLevel = Field(
        default="WARNING",
        description="Уровень логирования",
    )

    log_file: Optional[Path] = Field(
        default=None,
        description="Путь к файлу логов (None = только консоль)",
    )

    # === Validators ===
    @field_validator("db_path", mode="before")
    @classmethod
    def validate_db_path(cls, v: Any) -> Path:
        """Преобразует строку в Path, раскрывает ~."""
        if v is None or v == "":
            return Path("notes.db")
        return Path(v).expanduser()

    @field_validator("log_file", mode="before")
    @classmethod
    def validate_log_file(cls, v: Any) -> Optional[Path]:
        if v is None or v == "":
            return None
        return Path(v).expanduser()

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @model_validator(mode="after")
    def log_config_source(self) -> "NotesConfig":
        logger.debug(
            "Config loaded",
            db_path=str(self.db_path),
            tag_reuse=self.tag_reuse,
            log_level=self.log_level,
        )
        return self

    model_config = SettingsConfigDict(
        env_prefix="NOTES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlSettingsSource(settings_cls, find_config_file()),
        )

    # === Utility Methods ===

    def to_logging_config(self) -> LoggingConfig:
        return LoggingConfig(level=self.log_level, log_file=self.log_file)

    def to_toml_dict(self) -> dict:
        """Вложенная структура для записи в notes.toml."""
        return {
            "database": {"path": str(self.db_path)},
            "tags": {"reuse": self.tag_reuse},
            "logging": {
                "level": self.log_level,
                **({"file": str(self.log_file)} if self.log_file else {}),
            },
        }


# === Global Config Accessor ===

_config: Optional[NotesConfig] = None


def get_config(**overrides: Any) -> NotesConfig:
    """Получить конфигурацию с возможными override'ами.

    Без override'ов возвращает закэшированный экземпляр.
    С override'ами всегда создаёт новый.

    Args:
        **overrides: CLI аргументы для переопределения.
    """
    global _config

    if overrides or _config is None:
        _config = NotesConfig(**overrides)

    return _config


def reset_config() -> None:
    """Сбросить глобальный конфиг (для тестов)."""
    global _config
    _config = None


__all__ = [
    "NotesConfig",
    "get_config",
    "reset_config",
    "find_config_file",
    "load_toml",
    "LogLevel",
    "TagReusePolicy",
]
