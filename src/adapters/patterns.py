# src/adapters/patterns.py
"""
Crafting-grid pattern inference.

Given a sparse grid of optional items, derive the minimal pattern rows and a
letter -> ingredient key, the way shaped crafting recipes expect them:

    [None,  stick, None ]        pattern: ["A", "A"]
    [None,  stick, None ]   ->   key:     {"A": 'minecraft:stick'}
    [None,  None,  None ]

Steps:
  1. Trim fully-empty outer rows/columns (bounding box).
  2. Scan the box row-major; each distinct (id, nbt) signature gets the next
     letter from A..I. Once the letters run out, every further new signature
     reuses the last letter (I). That saturation is intentional and keeps
     compiled output stable for very dense grids.
  3. Blank cells become a space in the pattern row.
  4. The key maps letters to the caller's serialization of one
     representative (count 1) item per signature.

The grid is never mutated and the result only depends on the grid.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ingredients.schema import ItemRef
from ingredients.serialize import item_to_script, item_to_json


PATTERN_LETTERS = "ABCDEFGHI"
EMPTY_PATTERN: Tuple[str, ...] = (" ", " ", " ")

Grid = Sequence[Sequence[Optional[ItemRef]]]
Signature = Tuple[str, str]


@dataclass(frozen=True)
class PatternResult:
    pattern: List[str]
    key: Dict[str, Any]


def _row_empty(grid: Grid, r: int) -> bool:
    return all(cell is None for cell in grid[r])


def _col_empty(grid: Grid, c: int) -> bool:
    return all(c >= len(row) or row[c] is None for row in grid)


def bounding_box(grid: Grid) -> Optional[Tuple[int, int, int, int]]:
    """
    Return (top, bottom, left, right), inclusive, of all non-empty cells, or
    None when the grid has no items at all.
    """
    rows = len(grid)
    cols = max((len(row) for row in grid), default=0)

    top, bottom = 0, rows - 1
    left, right = 0, cols - 1
    while top <= bottom and _row_empty(grid, top):
        top += 1
    while bottom >= top and _row_empty(grid, bottom):
        bottom -= 1
    while left <= right and _col_empty(grid, left):
        left += 1
    while right >= left and _col_empty(grid, right):
        right -= 1

    if top > bottom or left > right:
        return None
    return top, bottom, left, right


def _signature(cell: ItemRef) -> Signature:
    return (cell.id, cell.nbt or "")


def infer_pattern(
    grid: Grid,
    serialize: Callable[[ItemRef], Any] = item_to_script,
) -> PatternResult:
    """Derive pattern rows and letter key; see the module docstring."""
    box = bounding_box(grid)
    if box is None:
        return PatternResult(pattern=list(EMPTY_PATTERN), key={})
    top, bottom, left, right = box

    letters: Dict[Signature, str] = {}
    representatives: Dict[Signature, ItemRef] = {}
    pattern: List[str] = []

    for r in range(top, bottom + 1):
        row = grid[r]
        line = []
        for c in range(left, right + 1):
            cell = row[c] if c < len(row) else None
            if cell is None:
                line.append(" ")
                continue
            sig = _signature(cell)
            if sig not in letters:
                idx = min(len(letters), len(PATTERN_LETTERS) - 1)
                letters[sig] = PATTERN_LETTERS[idx]
                representatives[sig] = ItemRef(id=cell.id, count=1, nbt=cell.nbt)
            line.append(letters[sig])
        pattern.append("".join(line))

    key: Dict[str, Any] = {}
    for sig, letter in letters.items():
        key[letter] = serialize(representatives[sig])

    return PatternResult(pattern=pattern, key=key)


def infer_pattern_json(grid: Grid) -> PatternResult:
    """Same inference with JSON ingredient objects in the key."""
    return infer_pattern(grid, serialize=item_to_json)


def pattern_letters(pattern: Sequence[str]) -> List[str]:
    """Distinct non-space characters of a free-text pattern, in first-seen order."""
    seen: List[str] = []
    for line in pattern:
        for ch in line:
            if ch != " " and ch not in seen:
                seen.append(ch)
    return seen


__all__ = [
    "PATTERN_LETTERS",
    "EMPTY_PATTERN",
    "PatternResult",
    "bounding_box",
    "infer_pattern",
    "infer_pattern_json",
    "pattern_letters",
]
