# src/adapters/base.py
"""
Shared coercion plumbing for recipe adapters.

Every adapter stores its payload as a plain dict tagged with the adapter id
under TAG_FIELD. When a stored value comes back (from YAML, from form state,
from anywhere) it goes through revive_or_default():

  - right tag        -> revive() rebuilds a well-typed payload field by field
  - missing/mismatch -> the adapter's default payload, silently

The list helpers below are the field-level repair rules reused by every
adapter so that "outputs", "inputs", "fluids" etc. are treated identically.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, is_dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, TypeVar

from ingredients.normalize import normalize_item, normalize_fluid, normalize_output
from ingredients.schema import ItemRef, FluidRef, OutputRef

logger = logging.getLogger(__name__)

TAG_FIELD = "__type"

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Tagging / reviving
# ---------------------------------------------------------------------------

def payload_to_dict(payload: Any) -> Dict[str, Any]:
    """Plain-dict (storage) form of a payload dataclass."""
    if is_dataclass(payload) and not isinstance(payload, type):
        return asdict(payload)
    if isinstance(payload, Mapping):
        return {k: v for k, v in payload.items() if k != TAG_FIELD}
    raise TypeError(f"Cannot convert {type(payload).__name__} to a payload dict")


def tag_payload(adapter_id: str, payload: Any) -> Dict[str, Any]:
    """Storage form tagged with its owning adapter id."""
    data = payload_to_dict(payload)
    return {TAG_FIELD: adapter_id, **data}


def revive_or_default(
    raw: Any,
    expected_tag: str,
    default_factory: Callable[[], T],
    revive: Callable[[Mapping[str, Any]], T],
    payload_type: Optional[Type[Any]] = None,
) -> T:
    """
    Rebuild a payload from a stored value, or fall back to the default.

    A live payload object of `payload_type` is re-validated through the same
    path as its stored form, so in-place edits get repaired too.
    """
    if payload_type is not None and isinstance(raw, payload_type):
        raw = tag_payload(expected_tag, raw)
    if not isinstance(raw, Mapping) or raw.get(TAG_FIELD) != expected_tag:
        found = raw.get(TAG_FIELD) if isinstance(raw, Mapping) else type(raw).__name__
        logger.debug("payload for %s replaced by defaults (found %r)", expected_tag, found)
        return default_factory()
    return revive(raw)


# ---------------------------------------------------------------------------
# Field-level repair helpers
# ---------------------------------------------------------------------------

def _as_list(value: Any) -> Optional[List[Any]]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return None


def coerce_slots(
    value: Any,
    limit: Optional[int] = None,
    min_len: int = 0,
    fallback: Optional[List[Optional[ItemRef]]] = None,
) -> List[Optional[ItemRef]]:
    """
    Item slots: keep positions, normalize each cell (bad cells -> None),
    truncate to `limit`, pad with None up to `min_len`.
    """
    items = _as_list(value)
    if items is None:
        slots = list(fallback) if fallback is not None else []
    else:
        if limit is not None:
            items = items[:limit]
        slots = [normalize_item(x) for x in items]
    while len(slots) < min_len:
        slots.append(None)
    return slots


def coerce_outputs(
    value: Any,
    fallback: Callable[[], List[OutputRef]],
    limit: Optional[int] = None,
    keep_empty: bool = True,
) -> List[OutputRef]:
    """
    Result lists: drop unusable entries. A non-list value (or, when
    keep_empty is False, an empty list) falls back to the defaults.
    """
    items = _as_list(value)
    if items is None or (not items and not keep_empty):
        return fallback()
    if limit is not None:
        items = items[:limit]
    return [o for o in (normalize_output(x) for x in items) if o is not None]


def coerce_fluid_slots(value: Any, limit: Optional[int] = None) -> List[Optional[FluidRef]]:
    items = _as_list(value)
    if items is None:
        return []
    if limit is not None:
        items = items[:limit]
    return [normalize_fluid(x) for x in items]


def coerce_positive_int(value: Any) -> Optional[int]:
    """Numbers clamp to >= 1; anything else means "unset"."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return max(1, int(value))


def coerce_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def coerce_recipe_id(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def coerce_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    return default


__all__ = [
    "TAG_FIELD",
    "payload_to_dict",
    "tag_payload",
    "revive_or_default",
    "coerce_slots",
    "coerce_outputs",
    "coerce_fluid_slots",
    "coerce_positive_int",
    "coerce_number",
    "coerce_recipe_id",
    "coerce_bool",
]
