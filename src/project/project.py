# src/project/project.py
"""
Recipe project: the ordered list of committed entries.

Committing is the only way an entry gets into a project:

  1. coerce the edited payload through its adapter,
  2. normalize the recipe id suffix (an empty suffix blocks the commit),
  3. run validation; any error-level message blocks the commit,
  4. deep-copy the payload, stamp recipe_id = "<namespace>:<suffix>",
  5. wrap it in a frozen ProjectEntry labelled with the adapter title.

Warnings never block. Duplicate recipe ids across entries are not detected.
"""

from __future__ import annotations

import copy
import logging
import uuid
from dataclasses import replace
from typing import Any, List, Optional, Sequence, Tuple

from adapters.registry import require_adapter
from adapters.schema import RecipeAdapter, ValidationMessage, error
from ingredients.normalize import DEFAULT_NAMESPACE, normalize_id_suffix

from .compiler import compile_project
from .schema import ProjectEntry, ProjectMeta

logger = logging.getLogger(__name__)


class CommitError(ValueError):
    """Raised when an edited payload cannot be committed."""

    def __init__(self, messages: Sequence[ValidationMessage]) -> None:
        self.messages: List[ValidationMessage] = list(messages)
        text = "; ".join(m.message for m in self.messages) or "commit refused"
        super().__init__(text)


def _new_entry_id() -> str:
    return uuid.uuid4().hex[:8]


def commit_entry(
    adapter: RecipeAdapter,
    payload: Any,
    id_suffix: str,
    namespace: str = DEFAULT_NAMESPACE,
) -> ProjectEntry:
    """Build an immutable ProjectEntry from an edited payload, or raise CommitError."""
    suffix = normalize_id_suffix(id_suffix, namespace)
    if not suffix:
        raise CommitError([error("Recipe id is empty (e.g. iron_nugget_from_mixing).")])

    coerced = adapter.coerce(payload)
    errors = [m for m in adapter.validate(coerced) if m.is_error]
    if errors:
        raise CommitError(errors)

    frozen_payload = replace(copy.deepcopy(coerced), recipe_id=f"{namespace}:{suffix}")
    entry = ProjectEntry(
        entry_id=_new_entry_id(),
        adapter_id=adapter.id,
        payload=frozen_payload,
        label=adapter.title,
    )
    logger.info("Committed %s as %s (entry %s)", adapter.id, frozen_payload.recipe_id, entry.entry_id)
    return entry


class RecipeProject:
    """
    Ordered, caller-owned collection of committed entries.

    Entries are immutable once added; the only mutations are commit/add and
    remove.
    """

    def __init__(
        self,
        namespace: str = DEFAULT_NAMESPACE,
        meta: Optional[ProjectMeta] = None,
        entries: Optional[Sequence[ProjectEntry]] = None,
    ) -> None:
        self.namespace = namespace
        self.meta = meta or ProjectMeta()
        self._entries: List[ProjectEntry] = list(entries or [])

    @property
    def entries(self) -> Tuple[ProjectEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def commit(self, adapter_id: str, payload: Any, id_suffix: str) -> ProjectEntry:
        adapter = require_adapter(adapter_id)
        entry = commit_entry(adapter, payload, id_suffix, self.namespace)
        self._entries.append(entry)
        return entry

    def add(self, entry: ProjectEntry) -> None:
        self._entries.append(entry)

    def remove(self, entry_id: str) -> bool:
        """Drop the entry with this id; False when nothing matched."""
        before = len(self._entries)
        self._entries = [e for e in self._entries if e.entry_id != entry_id]
        removed = len(self._entries) != before
        if removed:
            logger.info("Removed entry %s", entry_id)
        return removed

    def compile(self) -> str:
        return compile_project(self._entries, self.meta)


__all__ = ["CommitError", "commit_entry", "RecipeProject"]
