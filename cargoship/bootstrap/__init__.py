"""
bootstrap/ - Bootstrap Layer

Configuration loading, logging setup and the command-line entry point.
"""

from .config import (
    LimitsConfig,
    LoggingConfig,
    CargoshipConfig,
    load_config,
    get_config,
    reset_config,
)

from .entrypoints import (
    setup_logging,
    build_parser,
    cli_main,
    main,
)

__all__ = [
    # Config
    "LimitsConfig",
    "LoggingConfig",
    "CargoshipConfig",
    "load_config",
    "get_config",
    "reset_config",
    # Entrypoints
    "setup_logging",
    "build_parser",
    "cli_main",
    "main",
]
