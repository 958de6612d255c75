"""
manifest/runner.py - Voyage manifest execution

Builds the manifest's ships and containers, then runs its operations in
order. Each operation yields an OperationOutcome; cargo errors are captured
on the outcome instead of aborting the run, unless fail_fast is set.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING
import logging

from ..containers.factory import ContainerFactory
from ..containers.hazard import (
    HazardEvent, HazardNotifier, HazardRecorder, HazardSink, console_hazard_sink,
)
from ..containers.identity import SerialAllocator
from ..containers.models import Container
from ..core.utils import determinize_dict
from ..errors import CargoError, InvalidParameterError
from ..ship.models import ContainerShip
from ..ship.report import ReportSink, ShipReport
from .schemas import Operation, OperationAction, VoyageManifest

if TYPE_CHECKING:
    from ..bootstrap.config import LimitsConfig

logger = logging.getLogger(__name__)


@dataclass
class OperationOutcome:
    """Result of one manifest operation."""
    index: int
    action: OperationAction
    target: str
    success: bool = True
    error: Optional[Dict[str, Any]] = None
    hazards: List[HazardEvent] = field(default_factory=list)

    def to_dict(self, include_timestamps: bool = True) -> Dict[str, Any]:
        return {
            "index": self.index,
            "action": self.action.value,
            "target": self.target,
            "success": self.success,
            "error": self.error,
            "hazards": [h.to_dict(include_timestamps) for h in self.hazards],
        }


@dataclass
class ManifestRunResult:
    """Everything produced by running a manifest."""
    manifest_name: str
    ships: Dict[str, ContainerShip] = field(default_factory=dict)
    containers: Dict[str, Container] = field(default_factory=dict)
    outcomes: List[OperationOutcome] = field(default_factory=list)
    reports: List[ShipReport] = field(default_factory=list)
    hazards: List[HazardEvent] = field(default_factory=list)
    stopped_early: bool = False

    @property
    def failures(self) -> List[OperationOutcome]:
        return [o for o in self.outcomes if not o.success]

    @property
    def success(self) -> bool:
        return not self.failures and not self.stopped_early

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize run result.

        Keys are sorted and wall-clock timestamps are left out, so two runs of
        the same manifest serialize identically.
        """
        data = {
            "manifest": self.manifest_name,
            "success": self.success,
            "stopped_early": self.stopped_early,
            "failure_count": len(self.failures),
            "ships": {name: ship.to_dict() for name, ship in self.ships.items()},
            "containers": {key: c.to_dict() for key, c in self.containers.items()},
            "outcomes": [o.to_dict(include_timestamps=False) for o in self.outcomes],
            "reports": [r.to_dict(include_timestamps=False) for r in self.reports],
            "hazards": [h.to_dict(include_timestamps=False) for h in self.hazards],
        }
        return determinize_dict(data)


class ManifestRunner:
    """
    Executes voyage manifests.

    Every run gets its own serial allocator, so serials in a run start at 1
    and follow the manifest's container declaration order. Reports are
    written to report_sink as their step runs, so report and hazard lines
    interleave in voyage order; consecutive reports are separated by an
    empty line.
    """

    def __init__(
        self,
        limits: Optional["LimitsConfig"] = None,
        hazard_sink: Optional[HazardSink] = console_hazard_sink,
        fail_fast: bool = False,
        report_sink: Optional[ReportSink] = None,
    ):
        self.limits = limits
        self.hazard_sink = hazard_sink
        self.fail_fast = fail_fast
        self.report_sink = report_sink

        self._handlers: Dict[OperationAction, Callable[[Operation, ManifestRunResult], None]] = {
            OperationAction.LOAD: self._load,
            OperationAction.UNLOAD: self._unload,
            OperationAction.ADMIT: self._admit,
            OperationAction.REMOVE: self._remove,
            OperationAction.REPORT: self._report,
            OperationAction.NOTIFY: self._notify,
        }

    def run(self, manifest: VoyageManifest) -> ManifestRunResult:
        """Build the manifest's objects and execute its operations."""
        recorder = HazardRecorder(forward_to=self.hazard_sink)
        factory = ContainerFactory(
            allocator=SerialAllocator(),
            hazard_sink=recorder,
            limits=self.limits,
        )

        result = ManifestRunResult(manifest_name=manifest.name)

        for spec in manifest.ships:
            result.ships[spec.name] = ContainerShip(spec.name, spec.max_containers, spec.max_weight)

        for spec in manifest.containers:
            result.containers[spec.key] = factory.create(spec.kind, **spec.build_params())

        logger.info(
            f"Running manifest '{manifest.name}': {len(result.ships)} ship(s), "
            f"{len(result.containers)} container(s), {len(manifest.operations)} operation(s)"
        )

        for index, op in enumerate(manifest.operations):
            outcome = self._execute(index, op, result, recorder)
            result.outcomes.append(outcome)
            if not outcome.success and self.fail_fast:
                result.stopped_early = index < len(manifest.operations) - 1
                logger.warning(f"Stopping at operation {index} (fail_fast)")
                break

        result.hazards = recorder.events

        logger.info(
            f"Manifest '{manifest.name}' complete: {len(result.outcomes)} run, "
            f"{len(result.failures)} failed, {len(result.hazards)} hazard(s)"
        )
        return result

    def _execute(
        self,
        index: int,
        op: Operation,
        result: ManifestRunResult,
        recorder: HazardRecorder,
    ) -> OperationOutcome:
        outcome = OperationOutcome(index=index, action=op.action, target=op.target)
        hazards_before = recorder.event_count

        try:
            self._handlers[op.action](op, result)
        except CargoError as e:
            logger.warning(f"Operation {index} ({op.action.value} {op.target}) failed: {e.message}")
            outcome.success = False
            outcome.error = e.to_dict()

        outcome.hazards = recorder.events[hazards_before:]
        return outcome

    # -------------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------------

    def _load(self, op: Operation, result: ManifestRunResult) -> None:
        result.containers[op.container].load(op.amount)

    def _unload(self, op: Operation, result: ManifestRunResult) -> None:
        result.containers[op.container].unload()

    def _admit(self, op: Operation, result: ManifestRunResult) -> None:
        result.ships[op.ship].admit(result.containers[op.container])

    def _remove(self, op: Operation, result: ManifestRunResult) -> None:
        result.ships[op.ship].remove(result.containers[op.container])

    def _report(self, op: Operation, result: ManifestRunResult) -> None:
        report = result.ships[op.ship].report()
        if self.report_sink is not None:
            if result.reports:
                self.report_sink("")
            report.write(self.report_sink)
        result.reports.append(report)

    def _notify(self, op: Operation, result: ManifestRunResult) -> None:
        container = result.containers[op.container]
        if not isinstance(container, HazardNotifier):
            raise InvalidParameterError(
                "container", op.container, "has no hazard notification capability",
            )
        container.notify_hazard(op.message)
