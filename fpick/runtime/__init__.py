"""Runtime orchestration: the background channel, the event loop, and bootstrap.

Entry points are imported lazily to keep ``fpick.runtime.background`` free of
import cycles with the action layer.
"""

from __future__ import annotations


def run_picker(*args, **kwargs):
    """Lazily import the session entrypoint."""
    from .app import run_picker as _run_picker

    return _run_picker(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import the loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


__all__ = ["run_main_loop", "run_picker"]
