from __future__ import annotations

from typing import Any, Mapping

from option_pricer.cli.config import resolve_path
from option_pricer.utils.logging_config import setup_logging


DEFAULT_LOGGING: dict[str, Any] = {
    "level": "INFO",
    "format": "%(asctime)s %(levelname)s %(shortname)s - %(message)s",
    "file": None,
    "color": True,
    "module_levels": None,
}


def add_logging_args(parser) -> None:
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (e.g., INFO, DEBUG).",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional log file path.",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        default=None,
        help="Console log format string.",
    )
    parser.add_argument(
        "--color",
        dest="log_color",
        action="store_true",
        help="Enable colored console logs.",
    )
    parser.add_argument(
        "--no-color",
        dest="log_color",
        action="store_false",
        help="Disable colored console logs.",
    )
    parser.set_defaults(log_color=None)


def logging_overrides_from_args(args) -> dict[str, Any]:
    """Collect logging flags that were explicitly set on the command line."""
    overrides: dict[str, Any] = {}
    if args.log_level:
        overrides["level"] = args.log_level
    if args.log_file:
        overrides["file"] = args.log_file
    if args.log_format:
        overrides["format"] = args.log_format
    if args.log_color is not None:
        overrides["color"] = args.log_color
    return overrides


def _normalize_logging_config(
    config: Mapping[str, Any] | None
) -> dict[str, Any]:
    merged = dict(DEFAULT_LOGGING)
    if not config:
        return merged

    for key in ("level", "format", "file", "color", "module_levels"):
        if key in config and config[key] is not None:
            merged[key] = config[key]

    return merged


def setup_logging_from_config(config: Mapping[str, Any] | None) -> None:
    log_cfg = _normalize_logging_config(config)
    setup_logging(
        log_cfg["level"],
        fmt_console=log_cfg["format"],
        log_file=resolve_path(log_cfg["file"]),
        colored=log_cfg["color"],
        module_levels=log_cfg["module_levels"],
    )
