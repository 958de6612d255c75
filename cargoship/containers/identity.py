"""
containers/identity.py - Container serial numbers

Serials have the form KON-<type code>-<n>. The sequence number comes from
a SerialAllocator shared by every container type it serves.
"""

from __future__ import annotations
import logging
import threading

logger = logging.getLogger(__name__)

SERIAL_PREFIX = "KON"


def format_serial(type_code: str, sequence: int) -> str:
    """Build a serial number string."""
    return f"{SERIAL_PREFIX}-{type_code}-{sequence}"


class SerialAllocator:
    """
    Issues strictly increasing sequence numbers.

    One allocator is shared across all container kinds, so a liquid
    container built after gas container KON-G-3 receives KON-L-4.
    """

    def __init__(self, start: int = 1):
        if start < 1:
            raise ValueError(f"start must be >= 1, got {start}")
        self._next = start
        self._lock = threading.Lock()

    @property
    def next_sequence(self) -> int:
        """Sequence number the next allocation will receive."""
        return self._next

    def allocate(self, type_code: str) -> str:
        """Allocate the next serial for the given type code."""
        with self._lock:
            sequence = self._next
            self._next += 1
        serial = format_serial(type_code, sequence)
        logger.debug(f"Allocated serial {serial}")
        return serial


# Process-wide allocator used when a container is built without one
default_allocator = SerialAllocator()
