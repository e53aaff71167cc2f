"""
Structured logging with key=value and JSON output support.

[Logger][interlang.core.logger.Logger] wraps a standard ``logging.Logger``
and attaches keyword arguments to each record, so workflow code logs event
names with context instead of formatted sentences:

```text
info relations relations_replaced page_id=3 removed=1 inserted=3
```

Values containing spaces, equals signs or quotes are escaped and wrapped in
double quotes; long values are truncated.

[StructuredFormatter][interlang.core.logger.StructuredFormatter] reads the
attached ``structured_kv`` extra field and renders it. Installed on the root
handler by [setup_logging()][interlang.core.logger.setup_logging], it also
formats the plain ``logging.getLogger(__name__)`` calls of the pure
``models``, ``utils`` and ``i18n`` layers with the same prefix.

Examples:
    ```python
    from interlang.core.logger import Logger

    logger = Logger("groups")
    logger.info("site_groups_saved", groups=2, sites=5)
    # Output: site_groups_saved groups=2 sites=5

    json_logger = Logger("groups", json_output=True)
    json_logger.info("site_groups_saved", groups=2)
    # Output: {"timestamp": "...", "level": "info", "service": "groups", ...}
    ```
"""

from __future__ import annotations

import datetime
import json
import logging
from typing import Any, ClassVar


def _truncate(value: Any, max_value_length: int | None) -> str:
    text = str(value)
    if max_value_length and len(text) > max_value_length:
        return text[:max_value_length] + f"...<truncated {len(text) - max_value_length} chars>"
    return text


def format_kv_pairs(
    kwargs: dict[str, Any],
    max_value_length: int | None = 1000,
    prefix: str = " ",
) -> str:
    """Format a dictionary as space-separated key=value pairs.

    Args:
        kwargs: Key-value pairs to format.
        max_value_length: Maximum characters per value before truncation.
            Pass None to disable truncation.
        prefix: String prepended to the output (default: single space).

    Returns:
        Formatted string, e.g. ``' page_id=3 slug="my site"'``, or an empty
        string if *kwargs* is empty.
    """
    if not kwargs:
        return ""

    parts = []
    for key, value in kwargs.items():
        text = _truncate(value, max_value_length)
        if not text or any(char in text for char in " =\"'"):
            escaped = text.replace("\\", "\\\\").replace('"', '\\"')
            parts.append(f'{key}="{escaped}"')
        else:
            parts.append(f"{key}={text}")
    return prefix + " ".join(parts)


class StructuredFormatter(logging.Formatter):
    """Formats every record as ``level name message key=value ...``.

    Records without ``structured_kv`` (plain ``logging.getLogger()`` calls)
    are emitted with the same prefix and no trailing pairs.
    """

    def format(self, record: logging.LogRecord) -> str:
        base = f"{record.levelname.lower()} {record.name} {record.getMessage()}"
        extra: dict[str, Any] = getattr(record, "structured_kv", {})
        if extra:
            base += format_kv_pairs(extra)
        if record.exc_info:
            base += "\n" + self.formatException(record.exc_info)
        return base


def setup_logging(level: str = "INFO") -> None:
    """Install a [StructuredFormatter][interlang.core.logger.StructuredFormatter] on the root logger.

    Args:
        level: Standard level name (``DEBUG``, ``INFO``, ...).
    """
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper()))


class Logger:
    """Structured logger that appends keyword arguments as extra fields.

    All public methods mirror the standard logging API with an added
    ``**kwargs`` parameter.

    Examples:
        ```python
        logger = Logger("display")
        logger.warning("display_policy_reset", site="blog-fr", value="site_bogus")
        # Output: display_policy_reset site=blog-fr value=site_bogus
        ```
    """

    _DEFAULT_MAX_VALUE_LENGTH: ClassVar[int] = 1000

    def __init__(
        self,
        name: str,
        *,
        json_output: bool = False,
        max_value_length: int | None = None,
    ) -> None:
        """Initialize a structured logger.

        Args:
            name: Logger name, typically the workflow or module name.
            json_output: If True, emit JSON objects instead of key=value pairs.
            max_value_length: Maximum character length for individual values
                before truncation. Defaults to 1000.
        """
        if max_value_length is None:
            max_value_length = self._DEFAULT_MAX_VALUE_LENGTH
        self._logger = logging.getLogger(name)
        self._json_output = json_output
        self._max_value_length = max_value_length

    @property
    def name(self) -> str:
        """Name of the wrapped stdlib logger."""
        return self._logger.name

    def _format_json(self, msg: str, level: str, kwargs: dict[str, Any]) -> str:
        record = {
            "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
            "level": level,
            "service": self._logger.name,
            "message": msg,
            **kwargs,
        }
        return json.dumps(record, default=str)

    def _make_extra(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        if not kwargs:
            return {}
        # numbers keep their type
        truncated = {
            key: value if isinstance(value, int | float) else _truncate(value, self._max_value_length)
            for key, value in kwargs.items()
        }
        return {"structured_kv": truncated}

    def _log(self, level: int, msg: str, kwargs: dict[str, Any], *, exc_info: bool = False) -> None:
        if not self._logger.isEnabledFor(level):
            return
        if self._json_output:
            name = "error" if exc_info else logging.getLevelName(level).lower()
            self._logger.log(level, self._format_json(msg, name, kwargs), exc_info=exc_info)
        else:
            self._logger.log(level, msg, extra=self._make_extra(kwargs), exc_info=exc_info)

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log a DEBUG level message with optional key=value pairs."""
        self._log(logging.DEBUG, msg, kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log an INFO level message with optional key=value pairs."""
        self._log(logging.INFO, msg, kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log a WARNING level message with optional key=value pairs."""
        self._log(logging.WARNING, msg, kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log an ERROR level message with optional key=value pairs."""
        self._log(logging.ERROR, msg, kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log an ERROR level message with the current traceback."""
        self._log(logging.ERROR, msg, kwargs, exc_info=True)
