"""Runtime configuration assembled from CLI arguments and the environment.

fpick keeps no config file; everything the session needs is captured once in
an immutable ``AppConfig``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .filesystem import PathMode
from .highlight import DEFAULT_STYLE

DEFAULT_TICK_SECONDS = 5.0
DEFAULT_PAGER = "less -R"
DEFAULT_TTY_PATH = "/dev/tty"


@dataclass(frozen=True)
class AppConfig:
    start_dir: str
    path_mode: PathMode | None = None
    duplicate_to_stderr: bool = False
    tick_seconds: float = DEFAULT_TICK_SECONDS
    no_color: bool = False
    view_style: str = DEFAULT_STYLE
    pager_command: str = DEFAULT_PAGER
    tty_path: str = DEFAULT_TTY_PATH


def _env_flag(environ: Mapping[str, str], name: str) -> bool:
    value = environ.get(name, "").strip().lower()
    return value not in {"", "0", "false", "no", "off"}


def no_color_requested(environ: Mapping[str, str] | None = None) -> bool:
    """``NO_COLOR`` disables colors when set to any non-empty value."""
    environ = os.environ if environ is None else environ
    return bool(environ.get("NO_COLOR"))


def debug_requested(environ: Mapping[str, str] | None = None) -> bool:
    environ = os.environ if environ is None else environ
    return _env_flag(environ, "FPICK_DEBUG")


def config_from_environment(
    start_dir: str,
    path_mode: PathMode | None = None,
    duplicate_to_stderr: bool = False,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """Build the session config, reading pager/style/color from ``environ``."""
    environ = os.environ if environ is None else environ
    pager = environ.get("PAGER", "").strip() or DEFAULT_PAGER
    style = environ.get("FPICK_STYLE", "").strip() or DEFAULT_STYLE
    return AppConfig(
        start_dir=start_dir,
        path_mode=path_mode,
        duplicate_to_stderr=duplicate_to_stderr,
        no_color=no_color_requested(environ),
        view_style=style,
        pager_command=pager,
    )


__all__ = [
    "DEFAULT_PAGER",
    "DEFAULT_TICK_SECONDS",
    "DEFAULT_TTY_PATH",
    "AppConfig",
    "config_from_environment",
    "debug_requested",
    "no_color_requested",
]
