"""Utilities for tracing the progress of a load."""

from collections import defaultdict
from collections.abc import Generator
import contextvars
from contextlib import contextmanager
from dataclasses import dataclass, field
import logging
from time import perf_counter

_LOGGER = logging.getLogger(__name__)

# No public API
__all__: list[str] = []


trace: contextvars.ContextVar[list[str]] = contextvars.ContextVar("trace")


@dataclass
class TraceCollector:
    """Accumulates elapsed time per traced name."""

    timings: dict[str, float] = field(default_factory=lambda: defaultdict(float))
    counts: dict[str, int] = field(default_factory=lambda: defaultdict(int))

    def add(self, name: str, duration: float) -> None:
        self.timings[name] += duration
        self.counts[name] += 1


_collector: contextvars.ContextVar[TraceCollector | None] = contextvars.ContextVar(
    "collector", default=None
)


@contextmanager
def get_trace_collector() -> Generator[TraceCollector, None, None]:
    """Collect the timings of every trace_context entered within this block."""
    collector = TraceCollector()
    token = _collector.set(collector)
    try:
        yield collector
    finally:
        _collector.reset(token)


@contextmanager
def trace_context(name: str) -> Generator[None, None, None]:
    """Log entering and leaving a named step with the time spent in it."""
    stack = trace.get([])
    token = trace.set(stack + [name])
    label = " > ".join(stack + [name])
    t1 = perf_counter()
    _LOGGER.debug("[Trace] > %s", label)
    try:
        yield
    finally:
        elapsed = perf_counter() - t1
        trace.reset(token)
        if (collector := _collector.get()) is not None:
            collector.add(name, elapsed)
        _LOGGER.debug("[Trace] < %s (%0.2fs)", label, elapsed)
