"""Utility modules for Tinta.

Provides:
- logger: get_logger for namespaced diagnostics
"""

from tinta.utils.logger import get_logger

__all__ = [
    "get_logger",
]
