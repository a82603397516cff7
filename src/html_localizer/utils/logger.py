"""Logging setup and document-aware loggers for the HTML localizer."""

import logging
import sys
from typing import Any, Dict, MutableMapping, Optional, Tuple

from html_localizer.core.constants import LogLevels

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class StructuredLogger:
    """Configures the root logger once per process."""

    _initialized = False

    @classmethod
    def setup_logging(cls, level: str = LogLevels.INFO,
                      format_string: Optional[str] = None,
                      date_format: Optional[str] = None):
        """
        Send log records to stdout at ``level``.

        Later calls are ignored until ``reset()``.
        """
        if cls._initialized:
            return

        logging.basicConfig(
            level=getattr(logging, level.upper(), logging.INFO),
            format=format_string or DEFAULT_FORMAT,
            datefmt=date_format or DEFAULT_DATE_FORMAT,
            stream=sys.stdout
        )
        cls._initialized = True

    @classmethod
    def reset(cls):
        """Drop the root handlers so the next ``setup_logging`` applies again."""
        cls._initialized = False
        logging.root.handlers.clear()


class ContextLogger(logging.LoggerAdapter):
    """Appends ``key=value`` context, such as the document and culture, to every message."""

    def __init__(self, logger: logging.Logger, context: Optional[Dict[str, Any]] = None):
        super().__init__(logger, dict(context or {}))

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        if not self.extra:
            return msg, kwargs

        context = " | ".join(f"{key}={value}" for key, value in self.extra.items())
        return f"{msg} [{context}]", kwargs

    def with_context(self, **context) -> 'ContextLogger':
        return ContextLogger(self.logger, {**self.extra, **context})

    def for_document(self, path: Optional[str], culture: Optional[str] = None) -> 'ContextLogger':
        """Logger tagged with a document path and, while rendering, the culture."""
        context = {}
        if path:
            context['document'] = path
        if culture is not None:
            context['culture'] = culture or 'invariant'
        return self.with_context(**context)


def get_logger(name: str) -> ContextLogger:
    """Logger for a module, typically called with ``__name__``."""
    return ContextLogger(logging.getLogger(name))


def setup_logging(level: str = LogLevels.INFO,
                  format_string: Optional[str] = None,
                  date_format: Optional[str] = None):
    StructuredLogger.setup_logging(level, format_string, date_format)
