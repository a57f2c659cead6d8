"""
structlog setup for idea-graph.

Every log line emitted while an import is in flight carries the import's
trace_id and, when the caller supplied one, its project_id. Both live in
context variables so concurrent imports on one event loop stay separate.

Console rendering is the default. The HTTP service switches to JSON lines
through LOG_JSON.
"""

import logging
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Generator

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from .config import config

_trace_id: ContextVar[str | None] = ContextVar('idea_graph_trace_id', default=None)
_project_id: ContextVar[str | None] = ContextVar('idea_graph_project_id', default=None)

_IMPORT_KEYS: tuple[tuple[str, ContextVar[str | None]], ...] = (
    ('trace_id', _trace_id),
    ('project_id', _project_id),
)


def get_trace_id() -> str | None:
    return _trace_id.get()


def get_project_id() -> str | None:
    return _project_id.get()


def add_context_info(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Copy the active import's identifiers onto the event."""
    for key, var in _IMPORT_KEYS:
        value = var.get()
        if value:
            event_dict[key] = value
    return event_dict


def _renderer(json_output: bool) -> list[Processor]:
    if json_output:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]


def configure_logging(
    json_output: bool = False,
    log_level: str | None = None,
) -> None:
    """
    (Re)configure structlog and the root stdlib logger.

    Args:
        json_output: Emit one JSON object per line instead of console text.
        log_level: Level name; falls back to LOG_LEVEL from the environment.
    """
    level = getattr(logging, (log_level or config.LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(format='%(message)s', stream=sys.stdout, level=level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_context_info,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt='iso', utc=True),
            structlog.processors.StackInfoRenderer(),
            *_renderer(json_output),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


@contextmanager
def logging_context(
    trace_id: str | None = None,
    project_id: str | None = None,
) -> Generator[None, None, None]:
    """
    Scope trace_id / project_id to one import.

    Values left as None inherit whatever the enclosing scope set. Both are
    restored on exit, including when the body raises.
    """
    tokens = []
    if trace_id is not None:
        tokens.append((_trace_id, _trace_id.set(trace_id)))
    if project_id is not None:
        tokens.append((_project_id, _project_id.set(project_id)))
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


class PipelineTimer:
    """
    Wall-clock durations for the stages of one import, in milliseconds.

        timer = PipelineTimer()
        with timer.stage('parse'):
            ...
        timer.summary()  # {'total_ms': ..., 'stages': {'parse': ...}}
    """

    def __init__(self):
        self.started = time.perf_counter()
        self.stages: dict[str, float] = {}

    @contextmanager
    def stage(self, name: str) -> Generator[None, None, None]:
        began = time.perf_counter()
        try:
            yield
        finally:
            self.stages[name] = (time.perf_counter() - began) * 1000

    def record(self, name: str, duration_ms: float) -> None:
        self.stages[name] = duration_ms

    @property
    def total_ms(self) -> float:
        return (time.perf_counter() - self.started) * 1000

    def summary(self) -> dict[str, Any]:
        return {
            'total_ms': round(self.total_ms, 2),
            'stages': {name: round(ms, 2) for name, ms in self.stages.items()},
        }


configure_logging(json_output=False)
