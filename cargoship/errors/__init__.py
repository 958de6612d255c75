"""
errors/ - Error Taxonomy

Structured exceptions raised by container, ship and manifest operations.
"""

from .taxonomy import (
    ErrorSeverity,
    ErrorCategory,
    ErrorCode,
    CargoError,
    InvalidParameterError,
    InvalidLoadError,
    OverfillError,
    CapacityExceededError,
    ContainerCountExceededError,
    WeightLimitExceededError,
    ContainerAlreadyAdmittedError,
    ManifestError,
)

__all__ = [
    "ErrorSeverity",
    "ErrorCategory",
    "ErrorCode",
    "CargoError",
    "InvalidParameterError",
    "InvalidLoadError",
    "OverfillError",
    "CapacityExceededError",
    "ContainerCountExceededError",
    "WeightLimitExceededError",
    "ContainerAlreadyAdmittedError",
    "ManifestError",
]
