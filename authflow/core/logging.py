"""Logging for authflow.

A thin layer over the standard library: ``ContextualLogger`` carries
key/value context (provider name, flow step) and an optional message prefix,
and ``LoggerConfigurator`` installs a text handler on the package logger.

Usage:
    from authflow.core.logging import logger

    flow_logger = logger.with_prefix("OAuth1: ").with_context(provider="twitter")
    flow_logger.info("Requesting temporary credentials")
"""

import logging
import sys
from typing import Any, MutableMapping, Optional

from authflow.core.config import settings

LOGGER_NAME = "authflow"

_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys() | {"message", "asctime"}
)


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter that attaches structured context to every record."""

    def __init__(
        self,
        logger: logging.Logger,
        extra: Optional[dict[str, Any]] = None,
        prefix: str = "",
    ) -> None:
        """Wrap ``logger`` with the given context and prefix."""
        super().__init__(logger, dict(extra or {}))
        self.prefix = prefix

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, Any]:
        """Prepend the prefix and merge context into ``extra``."""
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        if self.prefix:
            msg = f"{self.prefix}{msg}"
        return msg, kwargs

    def with_context(self, **context: Any) -> "ContextualLogger":
        """Return a new logger with additional context fields."""
        return ContextualLogger(self.logger, {**self.extra, **context}, self.prefix)

    def with_prefix(self, prefix: str) -> "ContextualLogger":
        """Return a new logger whose messages start with ``prefix``."""
        return ContextualLogger(self.logger, dict(self.extra), f"{self.prefix}{prefix}")


class TextFormatter(logging.Formatter):
    """Human-readable format with context appended as ``key=value`` pairs."""

    def __init__(self) -> None:
        """Use the package default layout."""
        super().__init__("%(asctime)s %(levelname)-8s %(name)s %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        """Render the message and append context."""
        line = super().format(record)
        context = {
            k: v
            for k, v in record.__dict__.items()
            if k not in _RESERVED_ATTRS and not k.startswith("_")
        }
        if context:
            line += " " + " ".join(f"{k}={v}" for k, v in sorted(context.items()))
        return line


class LoggerConfigurator:
    """Installs handlers on the package logger."""

    @staticmethod
    def configure(level: Optional[str] = None) -> None:
        """Configure the ``authflow`` logger.

        Args:
            level: Log level name; defaults to ``settings.LOG_LEVEL``.
        """
        level = level or settings.LOG_LEVEL.value

        base = logging.getLogger(LOGGER_NAME)
        base.setLevel(level)
        for handler in list(base.handlers):
            base.removeHandler(handler)

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(TextFormatter())
        base.addHandler(handler)
        base.propagate = False


logger = ContextualLogger(logging.getLogger(LOGGER_NAME))
