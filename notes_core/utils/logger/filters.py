"""Фильтр секретов для логов.

Заметки пишет пользователь, поэтому в заголовок или текст легко попадают
токены и пароли. Фильтр вычищает их до того, как запись уйдёт в хендлер.

Классы:
    SensitiveDataFilter
        Маскирует токены и пароли в сообщении и аргументах записи.
"""

import logging
import re
from typing import Pattern

SENSITIVE_PATTERNS: list[Pattern[str]] = [
    re.compile(r"AIza[0-9A-Za-z_-]{35}"),  # Google API Key
    re.compile(r"sk-[0-9a-zA-Z_-]{20,}"),  # OpenAI-подобные ключи
    re.compile(r"gh[pousr]_[0-9A-Za-z]{36,}"),  # GitHub tokens
    re.compile(r"(?i)bearer\s+[a-zA-Z0-9._-]{20,}"),
    re.compile(r"(?i)(password|passwd|pwd)\s*[=:]\s*\S+"),
]

REDACTED: str = "***REDACTED***"


class SensitiveDataFilter(logging.Filter):
    """Заменяет найденные секреты на ***REDACTED***.

    Запись никогда не отбрасывается, только модифицируется.

    Attributes:
        patterns: Скомпилированные regex-паттерны.
        redacted: Строка замены.
    """

    def __init__(
        self,
        patterns: list[Pattern[str]] | None = None,
        redacted: str = REDACTED,
        name: str = "",
    ) -> None:
        super().__init__(name)
        self.patterns = patterns or SENSITIVE_PATTERNS
        self.redacted = redacted

    def _redact_string(self, text: str) -> str:
        for pattern in self.patterns:
            text = pattern.sub(self.redacted, text)
        return text

    def _redact_value(self, value: object) -> object:
        """Рекурсивно маскирует строки внутри dict/list/tuple."""
        if isinstance(value, str):
            return self._redact_string(value)
        if isinstance(value, dict):
            return {k: self._redact_value(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return type(value)(self._redact_value(item) for item in value)
        return value

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self._redact_string(record.msg)

        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._redact_value(v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._redact_value(arg) for arg in record.args)

        # Контекст из SemanticLogger лежит прямо в атрибутах записи
        for key in ("title", "content", "tag_title", "term"):
            value = getattr(record, key, None)
            if isinstance(value, str):
                setattr(record, key, self._redact_string(value))

        return True
