"""
containers/models.py - Cargo container models

Container base class and the three cargo variants. Each variant applies its
own load/unload policy on top of the generic payload check; liquid and gas
containers can raise hazard notifications through an injected sink.

Weights are derived on every access:
    base_weight  = max_payload / tare_divisor   (tare_divisor defaults to 10)
    total_weight = base_weight + current_load
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, TYPE_CHECKING
import logging
import math
import threading

from ..core.utils import format_quantity
from ..errors import InvalidLoadError, InvalidParameterError, OverfillError
from .hazard import HazardSink, console_hazard_sink, dispatch_hazard
from .identity import SerialAllocator, default_allocator

if TYPE_CHECKING:
    from ..ship.models import ContainerShip

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_TARE_DIVISOR = 10.0
DEFAULT_HAZARDOUS_FILL_RATIO = 0.5   # Hazardous liquid: half of max payload
DEFAULT_SAFE_FILL_RATIO = 0.9        # Non-hazardous liquid
DEFAULT_GAS_RESIDUAL_RATIO = 0.05    # Gas left behind after unloading

OVERFILL_HAZARD_MESSAGE = "Attempted overfill in hazardous conditions."


# =============================================================================
# ENUMERATIONS
# =============================================================================

class ContainerKind(Enum):
    """Types of cargo containers."""
    LIQUID = "liquid"
    GAS = "gas"
    REFRIGERATED = "refrigerated"

    @property
    def type_code(self) -> str:
        """Single-letter code used in serial numbers."""
        return KIND_TYPE_CODES[self]


KIND_TYPE_CODES = {
    ContainerKind.LIQUID: "L",
    ContainerKind.GAS: "G",
    ContainerKind.REFRIGERATED: "C",
}


# =============================================================================
# VALIDATION
# =============================================================================

def _require_number(param: str, value: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidParameterError(param, value, "must be a number")


def _require_positive(param: str, value: float) -> float:
    value = _require_number(param, value)
    if not math.isfinite(value) or value <= 0:
        raise InvalidParameterError(param, value, "must be positive")
    return value


def _require_ratio(param: str, value: float, allow_zero: bool = False) -> float:
    value = _require_number(param, value)
    lower_ok = value >= 0 if allow_zero else value > 0
    if not (lower_ok and value <= 1):
        bounds = "[0, 1]" if allow_zero else "(0, 1]"
        raise InvalidParameterError(param, value, f"must be in {bounds}")
    return value


# =============================================================================
# SNAPSHOT
# =============================================================================

@dataclass(frozen=True)
class ContainerSnapshot:
    """Point-in-time view of a container's load and derived weights."""
    serial_number: str
    kind: ContainerKind
    current_load: float
    max_payload: float
    base_weight: float
    total_weight: float

    @property
    def fill_fraction(self) -> float:
        """Current load as a fraction of max payload."""
        return self.current_load / self.max_payload

    def describe(self) -> str:
        """Single-line description used in ship reports."""
        return (
            f"Container {self.serial_number}, "
            f"Load: {format_quantity(self.current_load)}/{format_quantity(self.max_payload)}, "
            f"BaseWeight: {format_quantity(self.base_weight)}, "
            f"TotalWeight: {format_quantity(self.total_weight)}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "serial_number": self.serial_number,
            "kind": self.kind.value,
            "current_load": round(self.current_load, 3),
            "max_payload": round(self.max_payload, 3),
            "base_weight": round(self.base_weight, 3),
            "total_weight": round(self.total_weight, 3),
            "fill_percent": round(self.fill_fraction * 100, 1),
        }


# =============================================================================
# CONTAINER BASE
# =============================================================================

class Container(ABC):
    """
    Base cargo container.

    Holds the load state and enforces the generic overfill rule. The serial
    number is allocated once, at construction.
    """

    kind: ClassVar[ContainerKind]

    def __init__(
        self,
        max_payload: float,
        *,
        allocator: Optional[SerialAllocator] = None,
        tare_divisor: float = DEFAULT_TARE_DIVISOR,
    ):
        self._max_payload = _require_positive("max_payload", max_payload)
        self._tare_divisor = _require_positive("tare_divisor", tare_divisor)
        self._current_load = 0.0
        self._ship: Optional["ContainerShip"] = None
        self._lock = threading.RLock()
        self._serial_number = (allocator or default_allocator).allocate(self.kind.type_code)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def serial_number(self) -> str:
        return self._serial_number

    @property
    def max_payload(self) -> float:
        return self._max_payload

    @property
    def current_load(self) -> float:
        return self._current_load

    @property
    def base_weight(self) -> float:
        """Tare weight of the empty container."""
        return self._max_payload / self._tare_divisor

    @property
    def total_weight(self) -> float:
        """Tare plus cargo, recomputed from the current load."""
        return self.base_weight + self._current_load

    @property
    def ship(self) -> Optional["ContainerShip"]:
        """Ship this container is aboard, if any."""
        return self._ship

    @property
    def is_aboard(self) -> bool:
        return self._ship is not None

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def load(self, amount: float) -> None:
        """
        Add cargo.

        Raises:
            InvalidLoadError: amount is negative
            OverfillError: load would exceed max payload
        """
        amount = self._check_amount(amount)
        with self._lock:
            if self._current_load + amount > self._max_payload:
                raise OverfillError(
                    source_id=self._serial_number,
                    current_load=self._current_load,
                    amount=amount,
                    max_payload=self._max_payload,
                )
            self._current_load += amount
        logger.debug(f"{self._serial_number}: loaded {amount}, now {self._current_load}")

    def unload(self) -> None:
        """Empty the container."""
        with self._lock:
            self._current_load = 0.0
        logger.debug(f"{self._serial_number}: unloaded")

    def _check_amount(self, amount: float) -> float:
        try:
            amount = float(amount)
        except (TypeError, ValueError):
            raise InvalidLoadError(amount, source_id=self._serial_number)
        if math.isnan(amount) or amount < 0:
            raise InvalidLoadError(amount, source_id=self._serial_number)
        return amount

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def snapshot(self) -> ContainerSnapshot:
        """Capture load and derived weights without changing state."""
        with self._lock:
            return ContainerSnapshot(
                serial_number=self._serial_number,
                kind=self.kind,
                current_load=self._current_load,
                max_payload=self._max_payload,
                base_weight=self.base_weight,
                total_weight=self.total_weight,
            )

    def describe(self) -> str:
        return self.snapshot().describe()

    @abstractmethod
    def cargo_attributes(self) -> Dict[str, Any]:
        """Kind-specific attributes for serialization."""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize container."""
        data = self.snapshot().to_dict()
        data["ship"] = self._ship.name if self._ship is not None else None
        data["attributes"] = self.cargo_attributes()
        return data

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(serial_number={self._serial_number!r}, "
            f"current_load={self._current_load}, max_payload={self._max_payload})"
        )


# =============================================================================
# HAZARD NOTIFICATION
# =============================================================================

class HazardNotifying:
    """Mixin giving a container a hazard sink and notify_hazard()."""

    _serial_number: str
    _hazard_sink: HazardSink

    def _init_hazard(self, hazard_sink: Optional[HazardSink]) -> None:
        self._hazard_sink = hazard_sink or console_hazard_sink

    @property
    def hazard_sink(self) -> HazardSink:
        return self._hazard_sink

    def notify_hazard(self, message: str) -> None:
        """Emit a hazard notification tagged with this container's serial."""
        dispatch_hazard(self._hazard_sink, message, self._serial_number)


# =============================================================================
# VARIANTS
# =============================================================================

class LiquidContainer(HazardNotifying, Container):
    """
    Liquid cargo container.

    Fill is capped below max payload: hazardous cargo at 50%, other cargo at
    90%. A load past the cap is not applied and raises a hazard notification
    instead of an error.
    """

    kind = ContainerKind.LIQUID

    def __init__(
        self,
        max_payload: float,
        is_hazardous: bool,
        *,
        allocator: Optional[SerialAllocator] = None,
        hazard_sink: Optional[HazardSink] = None,
        tare_divisor: float = DEFAULT_TARE_DIVISOR,
        hazardous_fill_ratio: float = DEFAULT_HAZARDOUS_FILL_RATIO,
        safe_fill_ratio: float = DEFAULT_SAFE_FILL_RATIO,
    ):
        self._is_hazardous = bool(is_hazardous)
        self._hazardous_fill_ratio = _require_ratio("hazardous_fill_ratio", hazardous_fill_ratio)
        self._safe_fill_ratio = _require_ratio("safe_fill_ratio", safe_fill_ratio)
        self._init_hazard(hazard_sink)
        super().__init__(max_payload, allocator=allocator, tare_divisor=tare_divisor)

    @property
    def is_hazardous(self) -> bool:
        return self._is_hazardous

    @property
    def fill_limit(self) -> float:
        """Highest load this container accepts."""
        ratio = self._hazardous_fill_ratio if self._is_hazardous else self._safe_fill_ratio
        return self._max_payload * ratio

    def load(self, amount: float) -> None:
        amount = self._check_amount(amount)
        with self._lock:
            if self._current_load + amount > self.fill_limit:
                self.notify_hazard(OVERFILL_HAZARD_MESSAGE)
                return
            super().load(amount)

    def cargo_attributes(self) -> Dict[str, Any]:
        return {
            "is_hazardous": self._is_hazardous,
            "fill_limit": round(self.fill_limit, 3),
        }


class GasContainer(HazardNotifying, Container):
    """
    Gas cargo container.

    Unloading leaves 5% of the load behind. Pressure is recorded but no
    rule depends on it.
    """

    kind = ContainerKind.GAS

    def __init__(
        self,
        max_payload: float,
        pressure: float,
        *,
        allocator: Optional[SerialAllocator] = None,
        hazard_sink: Optional[HazardSink] = None,
        tare_divisor: float = DEFAULT_TARE_DIVISOR,
        residual_ratio: float = DEFAULT_GAS_RESIDUAL_RATIO,
    ):
        self._pressure = _require_number("pressure", pressure)
        self._residual_ratio = _require_ratio("residual_ratio", residual_ratio, allow_zero=True)
        self._init_hazard(hazard_sink)
        super().__init__(max_payload, allocator=allocator, tare_divisor=tare_divisor)

    @property
    def pressure(self) -> float:
        return self._pressure

    @property
    def residual_ratio(self) -> float:
        return self._residual_ratio

    def unload(self) -> None:
        with self._lock:
            self._current_load = self._current_load * self._residual_ratio
        logger.debug(f"{self._serial_number}: unloaded, residual {self._current_load}")

    def cargo_attributes(self) -> Dict[str, Any]:
        return {"pressure": self._pressure}


class RefrigeratedContainer(Container):
    """Refrigerated cargo container. Product and temperature are informational."""

    kind = ContainerKind.REFRIGERATED

    def __init__(
        self,
        max_payload: float,
        product_type: str,
        temperature: float,
        *,
        allocator: Optional[SerialAllocator] = None,
        tare_divisor: float = DEFAULT_TARE_DIVISOR,
    ):
        self._product_type = product_type
        self._temperature = _require_number("temperature", temperature)
        super().__init__(max_payload, allocator=allocator, tare_divisor=tare_divisor)

    @property
    def product_type(self) -> str:
        return self._product_type

    @property
    def temperature(self) -> float:
        return self._temperature

    def cargo_attributes(self) -> Dict[str, Any]:
        return {
            "product_type": self._product_type,
            "temperature": self._temperature,
        }
