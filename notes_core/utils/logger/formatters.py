"""Форматтеры логирования с эмодзи модулей.

Классы:
    FileFormatter
        Подробный построчный формат для файла логов.

Функции:
    get_module_emoji
        Эмодзи по имени логгера.
"""

import json
import logging
from datetime import datetime
from typing import Any

from .levels import TRACE

# Компонент имени логгера -> эмодзи. Поиск идёт с конца имени.
EMOJI_MAP: dict[str, str] = {
    # Хранилище
    "storage": "💾",
    "peewee": "💾",
    "gateway": "💾",
    "engine": "🗄️",
    "models": "🗄️",
    # Бизнес-логика
    "services": "📝",
    "note_service": "📝",
    "search": "🔍",
    # Оболочка
    "cli": "🖥️",
    "commands": "🖥️",
    "config": "⚙️",
}

LEVEL_EMOJI: dict[int, str] = {
    logging.CRITICAL: "💀",
    logging.ERROR: "❌",
    logging.WARNING: "⚠️",
    logging.INFO: "",  # Для INFO используем эмодзи модуля
    logging.DEBUG: "🔧",
    TRACE: "🔬",
}

FALLBACK_EMOJI: str = "📌"

# Ключи контекста, которые выводятся префиксом перед сообщением
CONTEXT_ID_KEYS: tuple[str, ...] = (
    "note_id",
    "tag_id",
    "tx_id",
)

_STANDARD_FIELDS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
    }
)


def get_module_emoji(logger_name: str) -> str:
    """Определяет эмодзи по имени логгера.

    Args:
        logger_name: Полное имя логгера (например, notes_core.services.note_service).

    Returns:
        Эмодзи самого специфичного совпавшего компонента или FALLBACK_EMOJI.
    """
    for part in reversed(logger_name.lower().split(".")):
        if part in EMOJI_MAP:
            return EMOJI_MAP[part]
    return FALLBACK_EMOJI


def format_extra_context(record: logging.LogRecord) -> dict[str, Any]:
    """Извлекает пользовательский контекст записи (без стандартных полей)."""
    context_fields = set(CONTEXT_ID_KEYS)
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_FIELDS
        and key not in context_fields
        and not key.startswith("_")
    }


class FileFormatter(logging.Formatter):
    """Подробный форматтер для файла.

    Формат: 2026-01-05 14:20:02 | NOTE_SERVICE | INFO | 📝 [7] Note added | title=...
    """

    def __init__(self, json_context: bool = False) -> None:
        super().__init__()
        self.json_context = json_context

    def format(self, record: logging.LogRecord) -> str:
        time_str = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        module = record.name.split(".")[-1].upper()

        # Эмодзи и префикс контекста уже вставлены в сообщение SemanticLogger
        parts = [time_str, module, record.levelname, record.getMessage()]

        extra = format_extra_context(record)
        if extra:
            if self.json_context:
                parts.append(json.dumps(extra, ensure_ascii=False, default=str))
            else:
                parts.append(" ".join(f"{k}={v}" for k, v in extra.items()))

        result = " | ".join(parts)

        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)

        return result
