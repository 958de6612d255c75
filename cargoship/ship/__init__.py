"""
Container Ship

Ship roster with count/weight admission checks and loading reports.
"""

from .models import (
    ContainerShip,
)

from .report import (
    ReportSink,
    ShipReport,
)

__all__ = [
    "ContainerShip",
    "ReportSink",
    "ShipReport",
]
