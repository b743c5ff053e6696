"""
Structured logging for the skill-belief engine.

The inference service logs through structlog; the numeric modules
(updater, decay, uncertainty) log through the standard library. Both end
up in one stream once ``setup_logging`` has run: JSON in production,
a colored console elsewhere.

Per-skill context is bound with ``log_context`` so every record emitted
while a belief is being inferred carries the ``skill_id``.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from structlog.types import Processor

from src.config.settings import get_settings

# Modules whose DEBUG output is per-signal and too chatty for production
ENGINE_LOGGER = "src.skill_belief"


def setup_logging(log_level: str | None = None) -> None:
    """
    Configure structured logging for callers embedding the engine.

    Args:
        log_level: Overrides ``Settings.log_level`` when given.

    Usage:
        setup_logging()
        service = SkillBeliefService()
        service.infer_belief("react", signals)  # logs "Belief inferred" at DEBUG
    """
    settings = get_settings()
    level = log_level or settings.log_level

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.is_production:
        renderer: Processor = structlog.processors.JSONRenderer()
        shared_processors.append(structlog.processors.format_exc_info)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
    )

    engine_level = logging.INFO if settings.is_production else logging.NOTSET
    logging.getLogger(ENGINE_LOGGER).setLevel(engine_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger (defaults to the root logger name)."""
    return structlog.get_logger(name)


@contextmanager
def log_context(**kwargs) -> Iterator[None]:
    """
    Bind context fields for the duration of a block.

    Fields are removed again on exit, so concurrent or nested inferences
    never leak each other's ``skill_id``.

    Args:
        **kwargs: Key-value pairs to bind
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield
