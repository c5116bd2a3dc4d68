# src/ingredients/schema.py

from dataclasses import dataclass
from typing import Optional


# ---------------------------------------------------------------------------
# Canonical value objects
# ---------------------------------------------------------------------------

TAG_PREFIX = "#"


@dataclass(frozen=True)
class ItemRef:
    """
    Canonical reference to an item stack or item tag.

    - id: namespaced id ("minecraft:iron_ingot") or tag ("#c:ingots/iron")
    - count: stack size, always >= 1 after normalization
    - nbt: optional structured-data text exactly as the user typed it
    """
    id: str
    count: int = 1
    nbt: Optional[str] = None

    @property
    def is_tag(self) -> bool:
        return self.id.startswith(TAG_PREFIX)


@dataclass(frozen=True)
class FluidRef:
    """Fluid stack: id + amount in millibuckets (>= 1)."""
    id: str
    amount: int = 1


@dataclass(frozen=True)
class OutputRef(ItemRef):
    """
    Recipe result with an optional roll chance.

    The chance is stored as given; serializers only honor it inside [0, 1).
    """
    chance: Optional[float] = None
