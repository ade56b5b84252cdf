from .config import (
    add_config_arg,
    build_config,
    deep_merge,
    load_yaml_config,
    pricing_inputs_from_config,
    resolve_path,
)
from .logging import (
    DEFAULT_LOGGING,
    add_logging_args,
    logging_overrides_from_args,
    setup_logging_from_config,
)

__all__ = [
    "DEFAULT_LOGGING",
    "add_config_arg",
    "add_logging_args",
    "build_config",
    "deep_merge",
    "load_yaml_config",
    "logging_overrides_from_args",
    "pricing_inputs_from_config",
    "resolve_path",
    "setup_logging_from_config",
]
