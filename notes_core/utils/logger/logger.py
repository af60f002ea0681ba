"""Семантический логгер с привязкой контекста.

Классы:
    SemanticLogger
        Адаптер над logging.Logger с bind() и error_with_context().
"""

from __future__ import annotations

import logging
import traceback
from typing import Any

from .levels import TRACE
from .formatters import CONTEXT_ID_KEYS, LEVEL_EMOJI, get_module_emoji


class SemanticLogger:
    """Адаптер для структурированного логирования.

    Контекст передаётся именованными аргументами и попадает в extra записи.
    Ключи из CONTEXT_ID_KEYS дополнительно выводятся префиксом сообщения.

    Attributes:
        name: Имя логгера.

    Example:
        >>> log = SemanticLogger("notes_core.services").bind(note_id=7)
        >>> log.info("Note updated")  # -> 📝 [7] Note updated
    """

    def __init__(self, name: str, context: dict[str, Any] | None = None) -> None:
        self.name = name
        self._logger = logging.getLogger(name)
        self._context: dict[str, Any] = context or {}

    def bind(self, **context: Any) -> SemanticLogger:
        """Возвращает новый логгер с объединённым контекстом.

        Example:
            >>> tx_log = logger.bind(tx_id="tx-3")
            >>> tx_log.bind(note_id=7).debug("Note row deleted")  # -> [7/tx-3]
        """
        return SemanticLogger(self.name, {**self._context, **context})

    def _log(self, level: int, msg: str, **context: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return

        extra = {**self._context, **context}

        # RichHandler не вызывает наш форматтер, поэтому префикс идёт в само сообщение
        context_ids = [
            str(extra[key]) for key in CONTEXT_ID_KEYS if extra.get(key) is not None
        ]
        context_prefix = f"[{'/'.join(context_ids)}] " if context_ids else ""

        emoji = LEVEL_EMOJI.get(level, "") or get_module_emoji(self.name)

        self._logger.log(level, f"{emoji} {context_prefix}{msg}", extra=extra)

    def trace(self, msg: str, **context: Any) -> None:
        """TRACE (5): SQL и параметры запросов."""
        self._log(TRACE, msg, **context)

    def debug(self, msg: str, **context: Any) -> None:
        """DEBUG (10): границы транзакций, технические детали."""
        self._log(logging.DEBUG, msg, **context)

    def info(self, msg: str, **context: Any) -> None:
        """INFO (20): бизнес-события (заметка создана, удалена)."""
        self._log(logging.INFO, msg, **context)

    def warning(self, msg: str, **context: Any) -> None:
        self._log(logging.WARNING, msg, **context)

    def error(self, msg: str, **context: Any) -> None:
        self._log(logging.ERROR, msg, **context)

    def critical(self, msg: str, **context: Any) -> None:
        self._log(logging.CRITICAL, msg, **context)

    def error_with_context(
        self,
        exc: BaseException,
        msg: str | None = None,
        *,
        include_traceback: bool = True,
        **context: Any,
    ) -> None:
        """Логирует исключение вместе с его типом, текстом и причиной.

        Args:
            exc: Исключение.
            msg: Сообщение (по умолчанию str(exc)).
            include_traceback: Добавить traceback в контекст.
            **context: Дополнительный контекст.
        """
        error_context: dict[str, Any] = {
            "exception_type": type(exc).__name__,
            "exception_msg": str(exc),
            **context,
        }

        cause = exc.__cause__
        if cause is not None:
            error_context["cause_type"] = type(cause).__name__
            error_context["cause_msg"] = str(cause)

        if include_traceback:
            error_context["traceback"] = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            )

        self.error(msg or str(exc), **error_context)

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    @property
    def level(self) -> int:
        """Эффективный уровень обёрнутого логгера."""
        return self._logger.getEffectiveLevel()
