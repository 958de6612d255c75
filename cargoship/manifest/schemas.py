"""
manifest/schemas.py - Voyage manifest models

Pydantic models for a voyage manifest: the ships, the containers, and the
ordered operations to run against them.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import json

from pydantic import BaseModel, Field, ValidationError, model_validator

from ..containers.models import ContainerKind
from ..errors import ManifestError


# =============================================================================
# Ship and Container Schemas
# =============================================================================


class ShipSpec(BaseModel):
    """A ship declared in the manifest."""

    name: str = Field(..., min_length=1, description="Ship name, unique in the manifest")
    max_containers: int = Field(..., ge=0, description="Roster capacity")
    max_weight: float = Field(..., gt=0, description="Maximum aggregate weight (tons)")


class ContainerSpec(BaseModel):
    """A container declared in the manifest."""

    key: str = Field(..., min_length=1, description="Handle used by operations")
    kind: ContainerKind = Field(..., description="liquid, gas or refrigerated")
    max_payload: float = Field(..., gt=0, description="Maximum payload (tons)")

    # Kind-specific
    hazardous: Optional[bool] = Field(None, description="Liquid: hazardous cargo")
    pressure: Optional[float] = Field(None, description="Gas: pressure")
    product_type: Optional[str] = Field(None, description="Refrigerated: product")
    temperature: Optional[float] = Field(None, description="Refrigerated: temperature")

    @model_validator(mode="after")
    def _check_kind_fields(self) -> "ContainerSpec":
        required = {
            ContainerKind.LIQUID: ["hazardous"],
            ContainerKind.GAS: ["pressure"],
            ContainerKind.REFRIGERATED: ["product_type", "temperature"],
        }[self.kind]
        missing = [name for name in required if getattr(self, name) is None]
        if missing:
            raise ValueError(
                f"{self.kind.value} container '{self.key}' requires: {', '.join(missing)}"
            )
        return self

    def build_params(self) -> Dict[str, Any]:
        """Constructor parameters for ContainerFactory.create()."""
        if self.kind == ContainerKind.LIQUID:
            return {"max_payload": self.max_payload, "is_hazardous": self.hazardous}
        if self.kind == ContainerKind.GAS:
            return {"max_payload": self.max_payload, "pressure": self.pressure}
        return {
            "max_payload": self.max_payload,
            "product_type": self.product_type,
            "temperature": self.temperature,
        }


# =============================================================================
# Operation Schemas
# =============================================================================


class OperationAction(str, Enum):
    """Operations a manifest can run."""

    LOAD = "load"
    UNLOAD = "unload"
    ADMIT = "admit"
    REMOVE = "remove"
    REPORT = "report"
    NOTIFY = "notify"


_REQUIRED_FIELDS = {
    OperationAction.LOAD: ["container", "amount"],
    OperationAction.UNLOAD: ["container"],
    OperationAction.ADMIT: ["container", "ship"],
    OperationAction.REMOVE: ["container", "ship"],
    OperationAction.REPORT: ["ship"],
    OperationAction.NOTIFY: ["container", "message"],
}


class Operation(BaseModel):
    """One step of the voyage."""

    action: OperationAction = Field(..., description="What to do")
    container: Optional[str] = Field(None, description="Container key")
    ship: Optional[str] = Field(None, description="Ship name")
    amount: Optional[float] = Field(None, ge=0, description="Load amount (tons)")
    message: Optional[str] = Field(None, description="Hazard message for notify")

    @model_validator(mode="after")
    def _check_required(self) -> "Operation":
        missing = [name for name in _REQUIRED_FIELDS[self.action] if getattr(self, name) is None]
        if missing:
            raise ValueError(f"'{self.action.value}' operation requires: {', '.join(missing)}")
        return self

    @property
    def target(self) -> str:
        """Human-readable target of the operation."""
        parts = [p for p in (self.container, self.ship) if p]
        return " -> ".join(parts)


# =============================================================================
# Manifest
# =============================================================================


class VoyageManifest(BaseModel):
    """Complete voyage: ships, containers and operations."""

    name: str = Field(default="voyage", description="Manifest name")
    ships: List[ShipSpec] = Field(default_factory=list)
    containers: List[ContainerSpec] = Field(default_factory=list)
    operations: List[Operation] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_references(self) -> "VoyageManifest":
        ship_names = [s.name for s in self.ships]
        duplicates = sorted({n for n in ship_names if ship_names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate ship names: {', '.join(duplicates)}")

        keys = [c.key for c in self.containers]
        duplicates = sorted({k for k in keys if keys.count(k) > 1})
        if duplicates:
            raise ValueError(f"Duplicate container keys: {', '.join(duplicates)}")

        kinds = {c.key: c.kind for c in self.containers}
        for index, op in enumerate(self.operations):
            if op.container is not None and op.container not in kinds:
                raise ValueError(f"Operation {index}: unknown container '{op.container}'")
            if op.ship is not None and op.ship not in ship_names:
                raise ValueError(f"Operation {index}: unknown ship '{op.ship}'")
            if op.action == OperationAction.NOTIFY and kinds[op.container] == ContainerKind.REFRIGERATED:
                raise ValueError(
                    f"Operation {index}: container '{op.container}' cannot raise hazard notifications"
                )
        return self


def parse_manifest(data: Dict[str, Any]) -> VoyageManifest:
    """
    Validate a manifest document.

    Raises:
        ManifestError: document does not match the schema
    """
    try:
        return VoyageManifest.model_validate(data)
    except ValidationError as e:
        raise ManifestError(
            f"Invalid manifest: {e.error_count()} validation error(s)",
            recovery_hint="Fix the listed fields and run again.",
            errors=[
                {"loc": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
                for err in e.errors()
            ],
        )


def load_manifest(filepath: Union[str, Path]) -> VoyageManifest:
    """
    Load and validate a manifest from a JSON file.

    Raises:
        ManifestError: file missing, not JSON, or invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise ManifestError(f"Manifest file not found: {filepath}")

    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ManifestError(f"Manifest is not valid JSON: {e}", path=str(path))

    if not isinstance(data, dict):
        raise ManifestError("Manifest must be a JSON object", path=str(path))

    return parse_manifest(data)
