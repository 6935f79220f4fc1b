"""Merch Studio shared utilities"""

from .hashing import (
    canonicalize,
    fingerprint,
)

__all__ = [
    "canonicalize",
    "fingerprint",
]
