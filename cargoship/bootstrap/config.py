"""
bootstrap/config.py - Application configuration

Provides configuration loading from files, environment variables, and defaults.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from pathlib import Path
import os
import json
import logging

from ..containers.models import (
    DEFAULT_TARE_DIVISOR,
    DEFAULT_HAZARDOUS_FILL_RATIO,
    DEFAULT_SAFE_FILL_RATIO,
    DEFAULT_GAS_RESIDUAL_RATIO,
)
from ..errors import InvalidParameterError

logger = logging.getLogger("bootstrap.config")


@dataclass
class LimitsConfig:
    """Fill limits and weight ratios applied to new containers."""

    hazardous_fill_ratio: float = DEFAULT_HAZARDOUS_FILL_RATIO
    safe_fill_ratio: float = DEFAULT_SAFE_FILL_RATIO
    gas_residual_ratio: float = DEFAULT_GAS_RESIDUAL_RATIO
    tare_divisor: float = DEFAULT_TARE_DIVISOR

    @classmethod
    def from_env(cls) -> "LimitsConfig":
        return cls(
            hazardous_fill_ratio=float(os.getenv(
                "CARGOSHIP_HAZARDOUS_FILL_RATIO", str(DEFAULT_HAZARDOUS_FILL_RATIO))),
            safe_fill_ratio=float(os.getenv(
                "CARGOSHIP_SAFE_FILL_RATIO", str(DEFAULT_SAFE_FILL_RATIO))),
            gas_residual_ratio=float(os.getenv(
                "CARGOSHIP_GAS_RESIDUAL_RATIO", str(DEFAULT_GAS_RESIDUAL_RATIO))),
            tare_divisor=float(os.getenv(
                "CARGOSHIP_TARE_DIVISOR", str(DEFAULT_TARE_DIVISOR))),
        )

    def validate(self) -> None:
        """Raise InvalidParameterError for out-of-range limits."""
        for name in ("hazardous_fill_ratio", "safe_fill_ratio"):
            value = getattr(self, name)
            if not 0 < value <= 1:
                raise InvalidParameterError(name, value, "must be in (0, 1]")
        if not 0 <= self.gas_residual_ratio <= 1:
            raise InvalidParameterError(
                "gas_residual_ratio", self.gas_residual_ratio, "must be in [0, 1]")
        if self.tare_divisor <= 0:
            raise InvalidParameterError("tare_divisor", self.tare_divisor, "must be positive")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hazardous_fill_ratio": self.hazardous_fill_ratio,
            "safe_fill_ratio": self.safe_fill_ratio,
            "gas_residual_ratio": self.gas_residual_ratio,
            "tare_divisor": self.tare_divisor,
        }


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("CARGOSHIP_LOG_LEVEL", "INFO"),
            format=os.getenv("CARGOSHIP_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            log_file=os.getenv("CARGOSHIP_LOG_FILE"),
            json_logs=os.getenv("CARGOSHIP_JSON_LOGS", "false").lower() == "true",
        )


@dataclass
class CargoshipConfig:
    """Root configuration."""

    environment: str = "development"
    debug: bool = False
    version: str = "1.0.0"

    limits: LimitsConfig = field(default_factory=LimitsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Additional settings
    settings: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "CargoshipConfig":
        """Create configuration from environment variables."""
        return cls(
            environment=os.getenv("CARGOSHIP_ENVIRONMENT", "development"),
            debug=os.getenv("CARGOSHIP_DEBUG", "false").lower() == "true",
            limits=LimitsConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def from_file(cls, filepath: str) -> "CargoshipConfig":
        """Load configuration from JSON file."""
        path = Path(filepath)
        if not path.exists():
            logger.warning(f"Config file not found: {filepath}, using defaults")
            return cls.from_env()

        with open(path) as f:
            data = json.load(f)

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "CargoshipConfig":
        """Create config from dictionary, on top of environment values."""
        config = cls.from_env()

        if "environment" in data:
            config.environment = data["environment"]
        if "debug" in data:
            config.debug = data["debug"]

        if "limits" in data:
            for key, value in data["limits"].items():
                if hasattr(config.limits, key):
                    setattr(config.limits, key, float(value))

        if "logging" in data:
            for key, value in data["logging"].items():
                if hasattr(config.logging, key):
                    setattr(config.logging, key, value)

        if "settings" in data:
            config.settings.update(data["settings"])

        config.limits.validate()
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Serialize config to dictionary."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "version": self.version,
            "limits": self.limits.to_dict(),
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
                "json_logs": self.logging.json_logs,
            },
            "settings": dict(self.settings),
        }


# Global config instance
_config: Optional[CargoshipConfig] = None


def load_config(filepath: str = None) -> CargoshipConfig:
    """
    Load configuration from file or environment.

    Args:
        filepath: Optional path to JSON config file

    Returns:
        CargoshipConfig instance
    """
    global _config

    if filepath:
        _config = CargoshipConfig.from_file(filepath)
    else:
        default_paths = [
            "./cargoship.json",
            "./config/cargoship.json",
            os.path.expanduser("~/.cargoship/config.json"),
        ]

        for path in default_paths:
            if Path(path).exists():
                logger.info(f"Loading config from: {path}")
                _config = CargoshipConfig.from_file(path)
                return _config

        _config = CargoshipConfig.from_env()

    logger.info(f"Configuration loaded: environment={_config.environment}")
    return _config


def get_config() -> CargoshipConfig:
    """Get current configuration, loading if needed."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the cached configuration."""
    global _config
    _config = None
