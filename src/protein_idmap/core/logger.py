"""Structured logging setup shared by the library and the command line.

Every module obtains its logger through :class:`UnifiedLogger` so that the
annotation stages emit events with the same processors, renderer and bound
context (``run_id``, ``stage``, ``component``).
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, MutableMapping, Sequence
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Any, Final, cast

import structlog
from structlog.contextvars import (
    bind_contextvars,
    clear_contextvars,
    get_contextvars,
    unbind_contextvars,
)
from structlog.stdlib import BoundLogger

__all__ = [
    "LogFormat",
    "LogConfig",
    "DEFAULT_LOG_LEVEL",
    "configure_logging",
    "get_logger",
    "UnifiedLogger",
]


class LogFormat(str, Enum):
    """Supported output formats for the renderer."""

    JSON = "json"
    KEY_VALUE = "key_value"


DEFAULT_LOG_LEVEL = logging.INFO

_DEFAULT_LOGGER_NAME: Final[str] = "protein_idmap"

_KEY_ORDER: Sequence[str] = (
    "timestamp",
    "level",
    "run_id",
    "stage",
    "component",
    "command",
    "message",
)


@dataclass(frozen=True, slots=True)
class LogConfig:
    """User configurable logging parameters."""

    level: int | str = DEFAULT_LOG_LEVEL
    format: LogFormat = LogFormat.KEY_VALUE
    redact_fields: Sequence[str] = ("password", "token")


def _coerce_log_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    mapped = logging.getLevelNamesMapping().get(level.upper())
    if mapped is None:
        raise ValueError(f"Unsupported log level: {level}")
    return mapped


def _redact_sensitive_values(
    _: Any,
    __: str,
    event_dict: MutableMapping[str, Any],
    *,
    redact_fields: Iterable[str],
) -> MutableMapping[str, Any]:
    for field in redact_fields:
        if field in event_dict:
            event_dict[field] = "***REDACTED***"
    return event_dict


def _shared_processors(config: LogConfig) -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.processors.EventRenamer("message"),
        partial(_redact_sensitive_values, redact_fields=config.redact_fields),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer_for(format: LogFormat) -> Any:
    if format is LogFormat.KEY_VALUE:
        return structlog.processors.KeyValueRenderer(
            key_order=_KEY_ORDER,
            sort_keys=False,
            drop_missing=True,
        )
    return structlog.processors.JSONRenderer(sort_keys=True, ensure_ascii=False)


def configure_logging(config: LogConfig | None = None) -> None:
    """Initialise stdlib logging and structlog from ``config``."""

    cfg = config or LogConfig()
    shared_processors = _shared_processors(cfg)

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer_for(cfg.format),
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    logging.basicConfig(handlers=[handler], level=_coerce_log_level(cfg.level), force=True)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = _DEFAULT_LOGGER_NAME) -> BoundLogger:
    """Return a bound logger for ``name``."""

    return cast(BoundLogger, structlog.get_logger(name))


class UnifiedLogger:
    """Facade that exposes a minimal logging API."""

    @staticmethod
    def configure(config: LogConfig | None = None) -> None:
        configure_logging(config)

    @staticmethod
    def get(name: str | None = None) -> BoundLogger:
        return get_logger(name or _DEFAULT_LOGGER_NAME)

    @staticmethod
    def bind(**context: Any) -> None:
        """Bind context that is included with all subsequent log events."""

        bind_contextvars(**context)

    @staticmethod
    def reset() -> None:
        clear_contextvars()

    @staticmethod
    def scoped(**context: Any) -> AbstractContextManager[None]:
        """Return a context manager that temporarily overrides bound context."""

        @contextmanager
        def _scope() -> Iterator[None]:
            existing: Mapping[str, Any] = get_contextvars()
            previous = {key: existing[key] for key in context if key in existing}
            bind_contextvars(**context)
            try:
                yield None
            finally:
                unbind_contextvars(*context.keys())
                if previous:
                    bind_contextvars(**previous)

        return _scope()

    @staticmethod
    def stage(stage: str, **context: Any) -> AbstractContextManager[None]:
        """Shortcut for temporarily binding the ``stage`` context field."""

        return UnifiedLogger.scoped(stage=stage, **context)
