"""
ship/report.py - Ship loading report

Plain-text ship report: a header with the capacity configuration, one line
per container, and a summary with the freshly computed payload and
utilization.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from ..containers.models import ContainerSnapshot
from ..core.utils import format_quantity

ReportSink = Callable[[str], None]


@dataclass
class ShipReport:
    """
    Snapshot of a ship's roster and weights.

    total_weight is summed from the container snapshots; cached_weight is
    the ship's incrementally maintained figure and may differ from it.
    """
    ship_name: str
    max_containers: int
    max_weight: float
    containers: List[ContainerSnapshot] = field(default_factory=list)
    cached_weight: float = 0.0

    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total_weight(self) -> float:
        return sum(c.total_weight for c in self.containers)

    @property
    def utilization_percent(self) -> float:
        """Total weight as a percentage of max weight."""
        return self.total_weight / self.max_weight * 100

    @property
    def container_count(self) -> int:
        return len(self.containers)

    @property
    def header_line(self) -> str:
        return (
            f"Ship: {self.ship_name}, Max Containers: {self.max_containers}, "
            f"Max Weight: {format_quantity(self.max_weight)} Tons,"
        )

    @property
    def summary_line(self) -> str:
        return (
            f"SHIP: {self.ship_name}: Current Payload: "
            f"{format_quantity(self.total_weight)} Tons, "
            f"Capacity: {self.utilization_percent:.2f}%"
        )

    def lines(self) -> List[str]:
        """Report lines in output order."""
        return (
            [self.header_line]
            + [c.describe() for c in self.containers]
            + [self.summary_line]
        )

    def render(self) -> str:
        return "\n".join(self.lines())

    def write(self, sink: Optional[ReportSink] = None) -> None:
        """Write each report line to the sink (default: print)."""
        sink = sink or print
        for line in self.lines():
            sink(line)

    def to_dict(self, include_timestamps: bool = True) -> Dict[str, Any]:
        """Serialize report."""
        data = {
            "ship_name": self.ship_name,
            "max_containers": self.max_containers,
            "max_weight": round(self.max_weight, 3),
            "container_count": self.container_count,
            "total_weight": round(self.total_weight, 3),
            "cached_weight": round(self.cached_weight, 3),
            "utilization_percent": round(self.utilization_percent, 2),
            "containers": [c.to_dict() for c in self.containers],
        }
        if include_timestamps:
            data["generated_at"] = self.generated_at.isoformat()
        return data

    def __str__(self) -> str:
        return self.render()
