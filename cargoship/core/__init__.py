"""
core/ - Shared helpers
"""

from .utils import format_quantity, determinize_dict

__all__ = [
    "format_quantity",
    "determinize_dict",
]
