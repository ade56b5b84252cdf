"""Logging configuration for pricing scripts and entry points.

Pricing modules never call `basicConfig`; they log through
`logger = logging.getLogger(__name__)`, at DEBUG for per-call diagnostics
(lattice probability, Monte Carlo standard error). Scripts call
`setup_logging(...)` exactly once.

The console handler injects `record.shortname` (last dotted component of the
logger name), so console formats may use `%(shortname)s`, e.g. `monte_carlo`
instead of `option_pricer.options.models.monte_carlo`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping


class _ShortNameFilter(logging.Filter):
    """Inject `record.shortname` without touching `record.name`."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.shortname = record.name.rsplit(".", 1)[-1]
        return True


class _ColorFormatter(logging.Formatter):
    """Color the level name only; meant for the console handler."""

    _RESET = "\033[0m"
    _LEVEL_COLOR: dict[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self._LEVEL_COLOR.get(record.levelno)
        if not color:
            return super().format(record)

        original = record.levelname
        record.levelname = f"{color}{original}{self._RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def coerce_level(level: int | str) -> int:
    """Coerce a level given as int, digit string or name (case-insensitive)."""
    if isinstance(level, int):
        return level

    name = str(level).strip().upper()
    if not name:
        raise ValueError("Empty logging level")
    if name.isdigit():
        return int(name)

    levels = logging.getLevelNamesMapping()
    if name == "WARN":
        name = "WARNING"
    try:
        return levels[name]
    except KeyError as e:
        raise ValueError(f"Unknown logging level: {level!r}") from e


def setup_logging(
    level: int | str = "INFO",
    *,
    fmt_console: str = "%(asctime)s %(levelname)s %(name)s - %(message)s",
    fmt_file: str = "%(asctime)s %(levelname)s %(name)s - %(message)s",
    datefmt: str = "%Y-%m-%d %H:%M:%S",
    log_file: str | Path | None = None,
    module_levels: Mapping[str, int | str] | None = None,
    colored: bool = False,
    capture_warnings: bool = True,
) -> None:
    """Configure the root logger.

    Parameters
    - level: Root log level (int or string, e.g. logging.INFO or "INFO").
    - fmt_console: Console format; may use `%(shortname)s`.
    - fmt_file: File format, used only when `log_file` is given.
    - log_file: Optional log file; parent directories are created.
    - module_levels: Per-logger overrides, e.g.
      `{"option_pricer.options.models": "DEBUG"}`.
    - colored: ANSI-colored level names on the console.
    - capture_warnings: Route `warnings` (e.g. numpy overflow) to logging.

    Uses `force=True` so repeated calls replace handlers instead of stacking.
    """
    handlers: list[logging.Handler] = []

    console = logging.StreamHandler()
    console.addFilter(_ShortNameFilter())
    formatter_cls = _ColorFormatter if colored else logging.Formatter
    console.setFormatter(formatter_cls(fmt=fmt_console, datefmt=datefmt))
    handlers.append(console)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(fmt=fmt_file, datefmt=datefmt))
        handlers.append(file_handler)

    logging.basicConfig(level=coerce_level(level), handlers=handlers, force=True)
    logging.captureWarnings(capture_warnings)

    for name, lvl in (module_levels or {}).items():
        logging.getLogger(name).setLevel(coerce_level(lvl))
