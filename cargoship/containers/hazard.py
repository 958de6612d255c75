"""
containers/hazard.py - Hazard notification

Hazard notifications are delivered to an injected sink: a callable taking
(message, source_id). The default sink prints one line per notification.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Protocol, TextIO, runtime_checkable
import logging
import sys

logger = logging.getLogger(__name__)

HazardSink = Callable[[str, str], None]


def format_hazard(message: str, source_id: str) -> str:
    """Render a hazard line."""
    return f"[HAZARD] {message} - {source_id}"


@runtime_checkable
class HazardNotifier(Protocol):
    """Capability of containers that can raise hazard notifications."""

    def notify_hazard(self, message: str) -> None:
        """Emit a hazard notification tagged with the container's serial."""
        ...


def console_hazard_sink(message: str, source_id: str) -> None:
    """Default sink: write the hazard line to standard output."""
    print(format_hazard(message, source_id))


class StreamHazardSink:
    """Writes hazard lines to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    def __call__(self, message: str, source_id: str) -> None:
        stream = self._stream or sys.stdout
        stream.write(format_hazard(message, source_id) + "\n")


@dataclass
class HazardEvent:
    """A recorded hazard notification."""
    message: str
    source_id: str
    raised_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __str__(self) -> str:
        return format_hazard(self.message, self.source_id)

    def to_dict(self, include_timestamps: bool = True) -> Dict[str, Any]:
        data = {
            "message": self.message,
            "source_id": self.source_id,
        }
        if include_timestamps:
            data["raised_at"] = self.raised_at.isoformat()
        return data


class HazardRecorder:
    """
    Sink that keeps every notification it receives.

    Optionally forwards each notification to a downstream sink, so a
    recorder can sit in front of the console sink.
    """

    def __init__(self, forward_to: Optional[HazardSink] = None):
        self._forward_to = forward_to
        self._events: List[HazardEvent] = []

    def __call__(self, message: str, source_id: str) -> None:
        self._events.append(HazardEvent(message=message, source_id=source_id))
        if self._forward_to is not None:
            self._forward_to(message, source_id)

    @property
    def events(self) -> List[HazardEvent]:
        return list(self._events)

    @property
    def event_count(self) -> int:
        return len(self._events)

    def for_source(self, source_id: str) -> List[HazardEvent]:
        """Get events raised by one container."""
        return [e for e in self._events if e.source_id == source_id]

    def clear(self) -> None:
        self._events.clear()


def dispatch_hazard(sink: HazardSink, message: str, source_id: str) -> None:
    """Log a hazard and hand it to the sink."""
    logger.warning(f"Hazard from {source_id}: {message}")
    sink(message, source_id)
