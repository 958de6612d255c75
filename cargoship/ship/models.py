"""
ship/models.py - Container ship

A ship admits containers while its roster has a free slot and the fresh
aggregate weight stays within its maximum. It also keeps a cached running
total (sum_weight) that is adjusted at admit/remove time with each
container's weight at that moment; if a container's load changes while
aboard, the cached total drifts from the fresh one.
"""

from __future__ import annotations
from typing import Any, Dict, Iterator, List, Optional, Tuple
import logging
import math
import threading

from ..containers.models import Container
from ..errors import (
    InvalidParameterError,
    ContainerCountExceededError,
    WeightLimitExceededError,
    ContainerAlreadyAdmittedError,
)
from .report import ReportSink, ShipReport

logger = logging.getLogger(__name__)


class ContainerShip:
    """Ship with a bounded roster of containers."""

    def __init__(self, name: str, max_containers: int, max_weight: float):
        if not isinstance(name, str) or not name.strip():
            raise InvalidParameterError("name", name, "must be a non-empty string")
        if isinstance(max_containers, bool) or not isinstance(max_containers, int) or max_containers < 0:
            raise InvalidParameterError("max_containers", max_containers, "must be a non-negative integer")
        try:
            max_weight = float(max_weight)
        except (TypeError, ValueError):
            raise InvalidParameterError("max_weight", max_weight, "must be a number")
        if not math.isfinite(max_weight) or max_weight <= 0:
            raise InvalidParameterError("max_weight", max_weight, "must be positive")

        self._name = name
        self._max_containers = max_containers
        self._max_weight = max_weight

        self._containers: List[Container] = []
        self._sum_weight = 0.0
        self._lock = threading.RLock()

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def max_containers(self) -> int:
        return self._max_containers

    @property
    def max_weight(self) -> float:
        return self._max_weight

    # -------------------------------------------------------------------------
    # Roster
    # -------------------------------------------------------------------------

    @property
    def containers(self) -> Tuple[Container, ...]:
        """Admitted containers in admission order."""
        with self._lock:
            return tuple(self._containers)

    @property
    def container_count(self) -> int:
        return len(self._containers)

    @property
    def available_slots(self) -> int:
        return self._max_containers - len(self._containers)

    def __len__(self) -> int:
        return len(self._containers)

    def __iter__(self) -> Iterator[Container]:
        return iter(self.containers)

    def __contains__(self, container: object) -> bool:
        with self._lock:
            return any(c is container for c in self._containers)

    def get_container(self, serial_number: str) -> Optional[Container]:
        """Find an admitted container by serial number."""
        with self._lock:
            for container in self._containers:
                if container.serial_number == serial_number:
                    return container
        return None

    # -------------------------------------------------------------------------
    # Weights
    # -------------------------------------------------------------------------

    @property
    def sum_weight(self) -> float:
        """Cached running total maintained by admit/remove."""
        return self._sum_weight

    def total_weight(self) -> float:
        """Fresh sum of every admitted container's total weight."""
        with self._lock:
            return sum(c.total_weight for c in self._containers)

    @property
    def weight_drift(self) -> float:
        """Cached total minus fresh total."""
        with self._lock:
            return self._sum_weight - self.total_weight()

    def available_weight(self) -> float:
        """Weight that can still be admitted."""
        return self._max_weight - self.total_weight()

    def utilization_percent(self) -> float:
        return self.total_weight() / self._max_weight * 100

    # -------------------------------------------------------------------------
    # Admission
    # -------------------------------------------------------------------------

    def can_admit(self, container: Container) -> bool:
        """Check admission rules without raising."""
        with self._lock:
            if container.ship is not None:
                return False
            if len(self._containers) >= self._max_containers:
                return False
            return self.total_weight() + container.total_weight <= self._max_weight

    def admit(self, container: Container) -> None:
        """
        Add a container to the roster.

        Raises:
            ContainerAlreadyAdmittedError: container is aboard a ship
            ContainerCountExceededError: roster is full
            WeightLimitExceededError: fresh total plus container exceeds max weight
        """
        with self._lock:
            if container.ship is not None:
                logger.warning(
                    f"{self._name}: rejected {container.serial_number}, "
                    f"already aboard {container.ship.name}"
                )
                raise ContainerAlreadyAdmittedError(container.serial_number, container.ship.name)

            if len(self._containers) >= self._max_containers:
                logger.warning(f"{self._name}: rejected {container.serial_number}, roster full")
                raise ContainerCountExceededError(
                    self._name, container.serial_number, self._max_containers,
                )

            current = self.total_weight()
            container_weight = container.total_weight
            if current + container_weight > self._max_weight:
                logger.warning(
                    f"{self._name}: rejected {container.serial_number}, "
                    f"weight {current} + {container_weight} > {self._max_weight}"
                )
                raise WeightLimitExceededError(
                    self._name,
                    container.serial_number,
                    current_weight=current,
                    container_weight=container_weight,
                    max_weight=self._max_weight,
                )

            self._containers.append(container)
            self._sum_weight += container_weight
            container._ship = self

        logger.info(
            f"{self._name}: admitted {container.serial_number} "
            f"({len(self._containers)}/{self._max_containers})"
        )

    def remove(self, container: Container) -> bool:
        """
        Remove a container from the roster.

        The cached total is reduced by the container's current weight.
        Returns False (and changes nothing) if the container is not aboard.
        """
        with self._lock:
            for index, candidate in enumerate(self._containers):
                if candidate is container:
                    del self._containers[index]
                    break
            else:
                logger.debug(f"{self._name}: {container.serial_number} not aboard, nothing removed")
                return False

            self._sum_weight -= container.total_weight
            container._ship = None

        logger.info(f"{self._name}: removed {container.serial_number}")
        return True

    # -------------------------------------------------------------------------
    # Reporting
    # -------------------------------------------------------------------------

    def report(self) -> ShipReport:
        """Build a report from fresh container snapshots."""
        with self._lock:
            return ShipReport(
                ship_name=self._name,
                max_containers=self._max_containers,
                max_weight=self._max_weight,
                containers=[c.snapshot() for c in self._containers],
                cached_weight=self._sum_weight,
            )

    def print_report(self, sink: Optional[ReportSink] = None) -> ShipReport:
        """Write the report lines to a sink (default: print)."""
        report = self.report()
        report.write(sink)
        return report

    def to_dict(self) -> Dict[str, Any]:
        """Serialize ship."""
        with self._lock:
            return {
                "name": self._name,
                "max_containers": self._max_containers,
                "max_weight": round(self._max_weight, 3),
                "container_count": len(self._containers),
                "sum_weight": round(self._sum_weight, 3),
                "total_weight": round(self.total_weight(), 3),
                "containers": [c.serial_number for c in self._containers],
            }

    def __repr__(self) -> str:
        return (
            f"ContainerShip(name={self._name!r}, containers={len(self._containers)}/"
            f"{self._max_containers}, max_weight={self._max_weight})"
        )
