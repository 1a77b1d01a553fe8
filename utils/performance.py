"""Timing helpers for the comparison steps."""
from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Generator, List

from utils.logging import logger


@dataclass
class Timing:
    name: str
    duration: float
    metadata: dict = field(default_factory=dict)


@contextmanager
def track_time(name: str, sink: List[Timing] | None = None, **metadata) -> Generator[Timing, None, None]:
    """Context manager to track execution time.

    Finished timings are appended to ``sink`` when one is given.
    """
    timing = Timing(name=name, duration=0, metadata=metadata)
    start = time.perf_counter()
    try:
        yield timing
    finally:
        timing.duration = time.perf_counter() - start
        if sink is not None:
            sink.append(timing)
        logger.debug("Timing: %s took %.3f seconds", name, timing.duration)


def summarize_timings(timings: List[Timing]) -> Dict[str, float]:
    """Collapse timings into ``{name: seconds}``; repeated names are summed."""
    summary: Dict[str, float] = {}
    for timing in timings:
        summary[timing.name] = summary.get(timing.name, 0.0) + timing.duration
    return summary
