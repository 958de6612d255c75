"""
Cargo Containers

Container models, serial allocation, hazard notification and the
container factory.
"""

from .models import (
    # Enumerations
    ContainerKind,

    # Constants
    DEFAULT_TARE_DIVISOR,
    DEFAULT_HAZARDOUS_FILL_RATIO,
    DEFAULT_SAFE_FILL_RATIO,
    DEFAULT_GAS_RESIDUAL_RATIO,
    OVERFILL_HAZARD_MESSAGE,

    # Models
    ContainerSnapshot,
    Container,
    HazardNotifying,
    LiquidContainer,
    GasContainer,
    RefrigeratedContainer,
)

from .identity import (
    SerialAllocator,
    default_allocator,
    format_serial,
)

from .hazard import (
    HazardSink,
    HazardNotifier,
    HazardEvent,
    HazardRecorder,
    StreamHazardSink,
    console_hazard_sink,
    format_hazard,
)

from .factory import (
    ContainerFactory,
)

__all__ = [
    # Enumerations
    "ContainerKind",

    # Constants
    "DEFAULT_TARE_DIVISOR",
    "DEFAULT_HAZARDOUS_FILL_RATIO",
    "DEFAULT_SAFE_FILL_RATIO",
    "DEFAULT_GAS_RESIDUAL_RATIO",
    "OVERFILL_HAZARD_MESSAGE",

    # Models
    "ContainerSnapshot",
    "Container",
    "HazardNotifying",
    "LiquidContainer",
    "GasContainer",
    "RefrigeratedContainer",

    # Identity
    "SerialAllocator",
    "default_allocator",
    "format_serial",

    # Hazard
    "HazardSink",
    "HazardNotifier",
    "HazardEvent",
    "HazardRecorder",
    "StreamHazardSink",
    "console_hazard_sink",
    "format_hazard",

    # Factory
    "ContainerFactory",
]
