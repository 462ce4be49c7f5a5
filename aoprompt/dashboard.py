"""Dashboard process helpers shared by the CLI and service mode."""

from __future__ import annotations

import importlib.util
import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from .config import CONFIG_PATH_ENV
from .logging import get_logger

WEB_PACKAGE = "ao_web"
WEB_PACKAGE_DESCRIPTOR = "package.json"
DEFAULT_TERMINAL_PORT = "3001"
DEFAULT_DIRECT_TERMINAL_PORT = "3003"

_logger = get_logger("dashboard")


def build_dashboard_env(
    port: int,
    config_path: str | None = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Return the environment for spawning the dashboard process.

    The dashboard reads the same config file as the CLI and exposes the
    terminal ports to its client bundle under the ``NEXT_PUBLIC_`` prefix.
    """
    env = dict(os.environ if environ is None else environ)
    if config_path:
        env[CONFIG_PATH_ENV] = config_path
    env["PORT"] = str(port)
    env["NEXT_PUBLIC_TERMINAL_PORT"] = env.get("TERMINAL_PORT", DEFAULT_TERMINAL_PORT)
    env["NEXT_PUBLIC_DIRECT_TERMINAL_PORT"] = env.get("DIRECT_TERMINAL_PORT", DEFAULT_DIRECT_TERMINAL_PORT)
    return env


def find_web_dir(search_from: Path | None = None) -> Path:
    """Locate the dashboard web package directory.

    An installed ``ao_web`` package wins; otherwise the sibling checkouts
    ``<root>/web`` and ``<root>/packages/web`` are probed for a package
    descriptor, falling back to the first candidate.
    """
    spec = importlib.util.find_spec(WEB_PACKAGE)
    if spec is not None:
        if spec.origin:
            return Path(spec.origin).resolve().parent
        if spec.submodule_search_locations:
            return Path(list(spec.submodule_search_locations)[0]).resolve()

    base = (search_from or Path(__file__).resolve().parent).parent
    candidates = [
        (base / "web").resolve(),
        (base / "packages" / "web").resolve(),
    ]
    for candidate in candidates:
        if (candidate / WEB_PACKAGE_DESCRIPTOR).exists():
            return candidate
    _logger.debug("No web package found; defaulting to %s", candidates[0])
    return candidates[0]


__all__ = ["build_dashboard_env", "find_web_dir"]
