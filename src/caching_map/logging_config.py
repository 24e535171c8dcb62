"""Logging configuration for caching_map.

CachingMap emits debug events for every probe, cache hit and invalidation,
bound to the map's name. Applications that want to see them call
``configure_logging`` once at startup, before creating any CachingMap.
"""

from __future__ import annotations

import logging

import structlog

from caching_map.config import CachingMapSettings
from caching_map.config import get_settings


def configure_logging(settings: CachingMapSettings | None = None) -> None:
    """Configure structlog from the given settings (environment by default)."""
    settings = settings or get_settings()

    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
