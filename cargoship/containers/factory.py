"""
containers/factory.py - Container factory

Builds containers that share one serial allocator, one hazard sink and one
set of limits. Give each factory its own allocator to get an independent,
deterministic serial sequence.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Optional, TYPE_CHECKING
import logging

from ..errors import InvalidParameterError
from .hazard import HazardSink, console_hazard_sink
from .identity import SerialAllocator, default_allocator
from .models import (
    Container, ContainerKind,
    LiquidContainer, GasContainer, RefrigeratedContainer,
)

if TYPE_CHECKING:
    from ..bootstrap.config import LimitsConfig

logger = logging.getLogger(__name__)


class ContainerFactory:
    """Creates containers of every kind from a shared configuration."""

    def __init__(
        self,
        allocator: Optional[SerialAllocator] = None,
        hazard_sink: Optional[HazardSink] = None,
        limits: Optional["LimitsConfig"] = None,
    ):
        if limits is None:
            from ..bootstrap.config import LimitsConfig
            limits = LimitsConfig()
        limits.validate()

        self.allocator = allocator or default_allocator
        self.hazard_sink = hazard_sink or console_hazard_sink
        self.limits = limits

        self._builders: Dict[ContainerKind, Callable[..., Container]] = {
            ContainerKind.LIQUID: self.liquid,
            ContainerKind.GAS: self.gas,
            ContainerKind.REFRIGERATED: self.refrigerated,
        }

    def liquid(self, max_payload: float, is_hazardous: bool) -> LiquidContainer:
        """Create a liquid container."""
        return LiquidContainer(
            max_payload,
            is_hazardous,
            allocator=self.allocator,
            hazard_sink=self.hazard_sink,
            tare_divisor=self.limits.tare_divisor,
            hazardous_fill_ratio=self.limits.hazardous_fill_ratio,
            safe_fill_ratio=self.limits.safe_fill_ratio,
        )

    def gas(self, max_payload: float, pressure: float) -> GasContainer:
        """Create a gas container."""
        return GasContainer(
            max_payload,
            pressure,
            allocator=self.allocator,
            hazard_sink=self.hazard_sink,
            tare_divisor=self.limits.tare_divisor,
            residual_ratio=self.limits.gas_residual_ratio,
        )

    def refrigerated(
        self,
        max_payload: float,
        product_type: str,
        temperature: float,
    ) -> RefrigeratedContainer:
        """Create a refrigerated container."""
        return RefrigeratedContainer(
            max_payload,
            product_type,
            temperature,
            allocator=self.allocator,
            tare_divisor=self.limits.tare_divisor,
        )

    def create(self, kind: ContainerKind, **params: Any) -> Container:
        """
        Create a container of the given kind.

        Args:
            kind: Container kind (enum or its string value)
            **params: Constructor parameters for that kind

        Returns:
            New container
        """
        if not isinstance(kind, ContainerKind):
            try:
                kind = ContainerKind(kind)
            except ValueError:
                raise InvalidParameterError("kind", kind, "unknown container kind")

        try:
            container = self._builders[kind](**params)
        except TypeError as e:
            raise InvalidParameterError("params", params, str(e))

        logger.debug(f"Created {kind.value} container {container.serial_number}")
        return container
