"""
manifest/demo.py - Built-in demonstration voyage

Two ships. Bismark takes three hazardous liquid containers that were
filled and then emptied. Voyager takes a gas, a liquid and a refrigerated
container, which are loaded after boarding, so Voyager's cached weight
falls behind its fresh weight.
"""

from __future__ import annotations
from typing import Any, Dict, List

from .schemas import VoyageManifest, parse_manifest


def _bismark_liquids() -> List[Dict[str, Any]]:
    return [
        {"key": f"liq{i}", "kind": "liquid", "max_payload": 200, "hazardous": True}
        for i in range(1, 6)
    ]


DEMO_MANIFEST: Dict[str, Any] = {
    "name": "demo",
    "ships": [
        {"name": "Bismark", "max_containers": 5, "max_weight": 3000},
        {"name": "Voyager", "max_containers": 10, "max_weight": 500},
    ],
    "containers": _bismark_liquids() + [
        {"key": "gas", "kind": "gas", "max_payload": 100, "pressure": 5},
        {"key": "liquid", "kind": "liquid", "max_payload": 200, "hazardous": True},
        {"key": "fridge", "kind": "refrigerated", "max_payload": 150,
         "product_type": "Bananas", "temperature": -5},
    ],
    "operations": (
        [{"action": "load", "container": f"liq{i}", "amount": 100} for i in range(1, 6)]
        + [{"action": "unload", "container": f"liq{i}"} for i in range(1, 4)]
        + [{"action": "admit", "container": f"liq{i}", "ship": "Bismark"} for i in range(1, 4)]
        + [{"action": "report", "ship": "Bismark"}]
        + [{"action": "admit", "container": key, "ship": "Voyager"}
           for key in ("gas", "liquid", "fridge")]
        + [
            {"action": "load", "container": "liquid", "amount": 90},
            {"action": "load", "container": "gas", "amount": 80},
            {"action": "load", "container": "fridge", "amount": 140},
            {"action": "report", "ship": "Voyager"},
        ]
    ),
}


def demo_manifest() -> VoyageManifest:
    """Validated copy of the demo manifest."""
    return parse_manifest(DEMO_MANIFEST)
