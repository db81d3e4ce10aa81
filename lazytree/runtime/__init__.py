"""Public runtime orchestration entry points.

This package groups the interactive session bootstrap (`run_browser`) and
the viewport, window-buffer, and loop pieces it wires together.
"""

from __future__ import annotations


def run_browser(*args, **kwargs):
    """Lazily import the session entrypoint to keep package imports lightweight."""
    from .app import run_browser as _run_browser

    return _run_browser(*args, **kwargs)


__all__ = [
    "run_browser",
]
