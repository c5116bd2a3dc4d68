# ingredients package
# src/ingredients/__init__.py

"""
Canonical item / fluid / output values plus their normalizers and
serializers. Everything recipe adapters emit is built from these helpers.
"""

from .schema import ItemRef, FluidRef, OutputRef, TAG_PREFIX
from .normalize import (
    DEFAULT_NAMESPACE,
    normalize_item,
    normalize_fluid,
    normalize_output,
    parse_structured_text,
    normalize_id_suffix,
    namespaced_recipe_id,
)

__all__ = [
    "ItemRef",
    "FluidRef",
    "OutputRef",
    "TAG_PREFIX",
    "DEFAULT_NAMESPACE",
    "normalize_item",
    "normalize_fluid",
    "normalize_output",
    "parse_structured_text",
    "normalize_id_suffix",
    "namespaced_recipe_id",
]
