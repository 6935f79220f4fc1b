"""
Merch Studio Canonical Hashing
Single source of truth for fingerprints of drafts, variant matrices,
validation reports and publish payloads.
"""

import hashlib
import json
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel

# Fields that change between otherwise identical objects
VOLATILE_FIELDS = frozenset([
    "draft_id",
    "generation",
    "created_at",
    "updated_at",
    "generated_at",
    "published_at",
])


def _normalize(obj: Any, exclude_volatile: bool) -> Any:
    if isinstance(obj, BaseModel):
        obj = obj.model_dump(mode="python")
    if isinstance(obj, dict):
        return {
            str(k): _normalize(v, exclude_volatile)
            for k, v in sorted(obj.items(), key=lambda kv: str(kv[0]))
            if not (exclude_volatile and k in VOLATILE_FIELDS)
        }
    if isinstance(obj, (list, tuple)):
        return [_normalize(i, exclude_volatile) for i in obj]
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Decimal):
        # Money travels as its exact string form ("33.33")
        return str(obj)
    if isinstance(obj, float):
        return round(obj, 10)
    return obj


def canonicalize(obj: Any, exclude_volatile: bool = True) -> str:
    """
    Convert object (dict, list or pydantic model) to canonical JSON.
    Deterministic: same input always produces same output.
    """
    cleaned = _normalize(obj, exclude_volatile)
    return json.dumps(cleaned, sort_keys=True, separators=(",", ":"), ensure_ascii=True, default=str)


def fingerprint(obj: Any, exclude_volatile: bool = True) -> str:
    """
    THE canonical hash function for Merch Studio.
    Returns: "sha256:<64-char-hex>"
    """
    digest = hashlib.sha256(canonicalize(obj, exclude_volatile).encode("utf-8")).hexdigest()
    return f"sha256:{digest}"

