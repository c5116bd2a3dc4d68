# src/ingredients/normalize.py
"""
Normalizers for loosely-typed recipe input.

Values arrive from form state or from a YAML round-trip, so every helper here
accepts "dict-ish" shapes (mappings, existing value objects, None) and either
returns a canonical value object or None. Nothing in this module raises on
malformed input.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any, Mapping, Optional

from .schema import ItemRef, FluidRef, OutputRef


DEFAULT_NAMESPACE = "shadoukube"

_UNSAFE_ID_CHARS = re.compile(r"[^a-z0-9/_\-.]")
_REPEATED_DASH = re.compile(r"-+")
_EDGE_SEPARATORS = re.compile(r"^[-.]+|[-.]+$")


# ---------------------------------------------------------------------------
# Field access helpers
# ---------------------------------------------------------------------------

def _field(raw: Any, name: str, default: Any = None) -> Any:
    """Read `name` from a mapping or an attribute-bearing object."""
    if isinstance(raw, Mapping):
        return raw.get(name, default)
    return getattr(raw, name, default)


def _clean_text(value: Any) -> Optional[str]:
    """Strip a text value; empty or non-string values become None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _at_least_one(value: Any) -> int:
    """Coerce a count-like value to an int >= 1 (non-numeric -> 1)."""
    if isinstance(value, bool):
        return 1
    if isinstance(value, float) and not math.isfinite(value):
        return 1
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return 1
    return max(1, number)


# ---------------------------------------------------------------------------
# Item / fluid / output normalization
# ---------------------------------------------------------------------------

def normalize_item(raw: Any) -> Optional[ItemRef]:
    """
    Normalize an item-like value into an ItemRef.

    Returns None when there is no usable id (missing, empty or whitespace).
    Count is clamped to >= 1, and a blank nbt collapses to None.
    """
    if raw is None:
        return None
    item_id = _clean_text(_field(raw, "id"))
    if item_id is None:
        return None
    return ItemRef(
        id=item_id,
        count=_at_least_one(_field(raw, "count", 1)),
        nbt=_clean_text(_field(raw, "nbt")),
    )


def normalize_fluid(raw: Any) -> Optional[FluidRef]:
    """Normalize a fluid-like value into a FluidRef (amount >= 1) or None."""
    if raw is None:
        return None
    fluid_id = _clean_text(_field(raw, "id"))
    if fluid_id is None:
        return None
    return FluidRef(id=fluid_id, amount=_at_least_one(_field(raw, "amount", 1)))


def normalize_output(raw: Any) -> Optional[OutputRef]:
    """
    Normalize an output-like value into an OutputRef.

    A numeric chance is kept verbatim (even out of range); anything else
    drops to None.
    """
    item = normalize_item(raw)
    if item is None:
        return None
    chance = _field(raw, "chance")
    if isinstance(chance, bool) or not isinstance(chance, (int, float)):
        chance = None
    elif isinstance(chance, float) and math.isnan(chance):
        chance = None
    else:
        try:
            chance = float(chance)
        except OverflowError:
            chance = None
    return OutputRef(id=item.id, count=item.count, nbt=item.nbt, chance=chance)


# ---------------------------------------------------------------------------
# Structured data text
# ---------------------------------------------------------------------------

def parse_structured_text(raw: Optional[str]) -> Any:
    """
    Parse user-supplied NBT / extra JSON text.

    Any failure yields None: this data is decoration, not a validated field.
    """
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Recipe identifiers
# ---------------------------------------------------------------------------

def normalize_id_suffix(raw: Any, namespace: str = DEFAULT_NAMESPACE) -> str:
    """
    Turn free text into a resource-location-safe recipe id path.

    "ShadouKube:Iron Seeds!!" -> "iron-seeds" (with namespace "shadoukube").
    Idempotent.
    """
    if not isinstance(raw, str):
        return ""
    text = raw.strip().lower()
    prefix = f"{namespace.lower()}:"
    if text.startswith(prefix):
        text = text[len(prefix):]
    text = _UNSAFE_ID_CHARS.sub("-", text)
    text = _REPEATED_DASH.sub("-", text)
    return _EDGE_SEPARATORS.sub("", text)


def namespaced_recipe_id(raw: Any, namespace: str = DEFAULT_NAMESPACE) -> Optional[str]:
    """Return "<namespace>:<suffix>", or None when the suffix normalizes to nothing."""
    suffix = normalize_id_suffix(raw, namespace)
    if not suffix:
        return None
    return f"{namespace}:{suffix}"


__all__ = [
    "DEFAULT_NAMESPACE",
    "normalize_item",
    "normalize_fluid",
    "normalize_output",
    "parse_structured_text",
    "normalize_id_suffix",
    "namespaced_recipe_id",
]
