"""
errors/taxonomy.py - Error classification system

Structured exceptions for container and ship operations. Every error
carries a code, category and severity so callers (and the manifest runner)
can report failures without parsing messages.
"""

from __future__ import annotations
from typing import Any, Dict, Optional
from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories."""
    # Parameter errors (1xxx)
    PARAMETER = "parameter"

    # Load errors (2xxx)
    LOAD = "load"

    # Capacity errors (3xxx)
    CAPACITY = "capacity"

    # Membership errors (4xxx)
    MEMBERSHIP = "membership"

    # Manifest errors (5xxx)
    MANIFEST = "manifest"


class ErrorCode(Enum):
    """Specific error codes."""

    # Parameter (1xxx)
    PAR_INVALID = 1001

    # Load (2xxx)
    LOD_NEGATIVE = 2001
    LOD_OVERFILL = 2002

    # Capacity (3xxx)
    CAP_EXCEEDED = 3001
    CAP_COUNT = 3002
    CAP_WEIGHT = 3003

    # Membership (4xxx)
    MEM_ALREADY_ADMITTED = 4001

    # Manifest (5xxx)
    MAN_INVALID = 5001


# =============================================================================
# BASE ERROR CLASS
# =============================================================================

class CargoError(Exception):
    """
    Base class for cargo errors.

    Provides structured error information with:
    - Error code for programmatic handling
    - Human-readable message
    - Recovery hint for the operator
    - Detailed context for debugging
    """

    code: ErrorCode = ErrorCode.PAR_INVALID
    category: ErrorCategory = ErrorCategory.PARAMETER
    severity: ErrorSeverity = ErrorSeverity.ERROR

    def __init__(
        self,
        message: str = "",
        *,
        source_id: str = "",
        recovery_hint: str = "",
        details: Optional[Dict[str, Any]] = None,
        **kwargs,
    ):
        self.message = message or self.__class__.__doc__ or "Cargo error"
        self.source_id = source_id
        self.recovery_hint = recovery_hint
        self.details = details or {}
        self.details.update(kwargs)

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "error": self.__class__.__name__,
            "code": self.code.value,
            "category": self.category.value,
            "severity": self.severity.value,
            "message": self.message,
            "source_id": self.source_id,
            "recovery_hint": self.recovery_hint,
            "details": self.details,
        }

    def __str__(self) -> str:
        parts = [f"[{self.code.name}] {self.message}"]
        if self.source_id:
            parts.append(f"(source: {self.source_id})")
        if self.recovery_hint:
            parts.append(f"Hint: {self.recovery_hint}")
        return " ".join(parts)


# =============================================================================
# SPECIFIC ERROR TYPES
# =============================================================================

class InvalidParameterError(CargoError):
    """Invalid construction or configuration parameter."""

    code = ErrorCode.PAR_INVALID
    category = ErrorCategory.PARAMETER

    def __init__(self, param: str, value: Any, reason: str = "", **kwargs):
        message = f"Invalid value for {param}: {value!r}"
        if reason:
            message += f" ({reason})"
        self.param = param
        self.value = value
        super().__init__(message, param=param, value=value, **kwargs)


class InvalidLoadError(CargoError):
    """Load amount must be non-negative."""

    code = ErrorCode.LOD_NEGATIVE
    category = ErrorCategory.LOAD

    def __init__(self, amount: float, source_id: str = "", **kwargs):
        self.amount = amount
        super().__init__(
            f"Load amount must be non-negative, got {amount}",
            source_id=source_id,
            amount=amount,
            **kwargs,
        )


class OverfillError(CargoError):
    """Load would exceed the container's maximum payload."""

    code = ErrorCode.LOD_OVERFILL
    category = ErrorCategory.LOAD

    def __init__(
        self,
        source_id: str,
        current_load: float,
        amount: float,
        max_payload: float,
        **kwargs,
    ):
        self.current_load = current_load
        self.amount = amount
        self.max_payload = max_payload
        super().__init__(
            f"Exceeded max payload: {current_load} + {amount} > {max_payload}",
            source_id=source_id,
            recovery_hint="Unload the container or load a smaller amount.",
            current_load=current_load,
            amount=amount,
            max_payload=max_payload,
            **kwargs,
        )


class CapacityExceededError(CargoError):
    """Ship cannot take more containers or weight exceeded."""

    code = ErrorCode.CAP_EXCEEDED
    category = ErrorCategory.CAPACITY


class ContainerCountExceededError(CapacityExceededError):
    """Ship roster is full."""

    code = ErrorCode.CAP_COUNT

    def __init__(self, ship_name: str, container_id: str, max_containers: int, **kwargs):
        self.ship_name = ship_name
        self.max_containers = max_containers
        super().__init__(
            f"Ship {ship_name} cannot take more containers (max {max_containers})",
            source_id=container_id,
            recovery_hint="Remove a container or use another ship.",
            ship=ship_name,
            max_containers=max_containers,
            **kwargs,
        )


class WeightLimitExceededError(CapacityExceededError):
    """Admitting the container would exceed the ship's maximum weight."""

    code = ErrorCode.CAP_WEIGHT

    def __init__(
        self,
        ship_name: str,
        container_id: str,
        current_weight: float,
        container_weight: float,
        max_weight: float,
        **kwargs,
    ):
        self.ship_name = ship_name
        self.current_weight = current_weight
        self.container_weight = container_weight
        self.max_weight = max_weight
        super().__init__(
            f"Ship {ship_name} weight exceeded: "
            f"{current_weight} + {container_weight} > {max_weight}",
            source_id=container_id,
            recovery_hint="Unload cargo from the container or remove another container.",
            ship=ship_name,
            current_weight=current_weight,
            container_weight=container_weight,
            max_weight=max_weight,
            **kwargs,
        )


class ContainerAlreadyAdmittedError(CargoError):
    """Container is already on a ship's roster."""

    code = ErrorCode.MEM_ALREADY_ADMITTED
    category = ErrorCategory.MEMBERSHIP

    def __init__(self, container_id: str, ship_name: str, **kwargs):
        self.ship_name = ship_name
        super().__init__(
            f"Container {container_id} is already aboard {ship_name}",
            source_id=container_id,
            recovery_hint=f"Remove the container from {ship_name} first.",
            ship=ship_name,
            **kwargs,
        )


class ManifestError(CargoError):
    """Voyage manifest could not be parsed or validated."""

    code = ErrorCode.MAN_INVALID
    category = ErrorCategory.MANIFEST
