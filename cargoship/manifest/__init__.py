"""
Voyage Manifests

Declarative voyages (ships, containers, operations) and their execution.
"""

from .schemas import (
    ShipSpec,
    ContainerSpec,
    OperationAction,
    Operation,
    VoyageManifest,
    parse_manifest,
    load_manifest,
)

from .runner import (
    OperationOutcome,
    ManifestRunResult,
    ManifestRunner,
)

from .demo import (
    DEMO_MANIFEST,
    demo_manifest,
)

__all__ = [
    # Schemas
    "ShipSpec",
    "ContainerSpec",
    "OperationAction",
    "Operation",
    "VoyageManifest",
    "parse_manifest",
    "load_manifest",

    # Runner
    "OperationOutcome",
    "ManifestRunResult",
    "ManifestRunner",

    # Demo
    "DEMO_MANIFEST",
    "demo_manifest",
]
