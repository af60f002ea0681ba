"""Уровень TRACE для дампов SQL.

Ниже DEBUG: сюда попадает каждый SQL-запрос, который SQLite отдаёт в
trace callback соединения. Включается только явно (log_level = "TRACE").

Константы:
    TRACE: int
        Значение уровня (5).
"""

import logging

TRACE: int = 5
TRACE_NAME: str = "TRACE"


def _trace(self: logging.Logger, message: str, *args, **kwargs) -> None:
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)


def install_trace_level() -> None:
    """Добавляет имя уровня и метод Logger.trace(). Идемпотентна."""
    if logging.getLevelName(TRACE) == TRACE_NAME and hasattr(logging.Logger, "trace"):
        return

    logging.addLevelName(TRACE, TRACE_NAME)
    logging.Logger.trace = _trace  # type: ignore[attr-defined]


install_trace_level()
