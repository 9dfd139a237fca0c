"""Opt-in timing hooks, switched on with ``SIGFRACTAL_DEBUG=1``."""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from typing import Callable, Iterator

logger = logging.getLogger(__name__)

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


DEBUG_SIGFRACTAL = _env_flag("SIGFRACTAL_DEBUG")


def debug_enabled() -> bool:
    return DEBUG_SIGFRACTAL


def set_debug(enabled: bool) -> None:
    """Toggle timing output at runtime, overriding the environment."""
    global DEBUG_SIGFRACTAL
    DEBUG_SIGFRACTAL = bool(enabled)


@contextmanager
def time_block(label: str, *, emitter: Callable[[str], None] | None = None) -> Iterator[None]:
    """
    Report the wall time spent inside the block as ``"<label> took N ms"``.

    Disabled by default, in which case the block runs untouched. Reports go to
    ``emitter`` when given, otherwise to this module's logger at DEBUG level.
    """
    if not DEBUG_SIGFRACTAL:
        yield
        return

    emit = emitter if emitter is not None else logger.debug
    t0 = time.perf_counter()
    try:
        yield
    finally:
        emit(f"{label} took {(time.perf_counter() - t0) * 1e3:.3f} ms")
