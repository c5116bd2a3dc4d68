# src/project/compiler.py
"""
Project compiler: fold committed entries into one KubeJS server script.

Output layout:

    // Auto-generated by KubeJS Recipe Builder
    // Platform: NeoForge | Minecraft 1.21.1 | KubeJS 2101.7.1-build.181
    // Place in: kubejs/server_scripts/recipes.js

    ServerEvents.recipes(event => {
      // --- Recipes ---
      <every line of every entry, commit order, indented two spaces>
    });

Entries are never sorted, merged or deduplicated.
"""

from __future__ import annotations

import logging
import textwrap
from typing import Iterable, List, Optional

from adapters.registry import get_adapter

from .schema import ProjectEntry, ProjectMeta

logger = logging.getLogger(__name__)

INDENT = "  "
SCRIPT_LOCATION = "kubejs/server_scripts/recipes.js"


def header_lines(meta: ProjectMeta) -> List[str]:
    return [
        "// Auto-generated by KubeJS Recipe Builder",
        f"// Platform: {meta.platform} | Minecraft {meta.minecraft_version} | KubeJS {meta.kubejs_version}",
        f"// Place in: {SCRIPT_LOCATION}",
        "",
    ]


def compile_entry(entry: ProjectEntry) -> List[str]:
    """
    Compiled lines for one entry, or [] when its adapter is unknown.

    The stored payload goes back through coerce() first, so entries built by
    hand (or loaded from disk) compile the same way as committed ones.
    """
    adapter = get_adapter(entry.adapter_id)
    if adapter is None:
        logger.warning("Skipping entry %s: unknown adapter %r", entry.entry_id, entry.adapter_id)
        return []
    return adapter.compile(adapter.coerce(entry.payload))


def compile_project(entries: Iterable[ProjectEntry], meta: Optional[ProjectMeta] = None) -> str:
    meta = meta or ProjectMeta()
    lines = header_lines(meta)
    lines.append("ServerEvents.recipes(event => {")
    lines.append(INDENT + "// --- Recipes ---")

    count = 0
    for entry in entries:
        for line in compile_entry(entry):
            lines.append(textwrap.indent(line, INDENT))
            count += 1

    lines.append("});")
    logger.info("Compiled %d recipe line(s) for %s %s", count, meta.platform, meta.minecraft_version)
    return "\n".join(lines) + "\n"


__all__ = ["header_lines", "compile_entry", "compile_project"]
