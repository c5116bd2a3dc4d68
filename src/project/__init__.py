# project package
# src/project/__init__.py

"""
Recipe project: committing edited payloads, compiling the KubeJS script,
configuration and YAML storage.
"""

from .schema import ProjectEntry, ProjectMeta
from .compiler import compile_project
from .project import CommitError, RecipeProject, commit_entry

__all__ = [
    "ProjectEntry",
    "ProjectMeta",
    "compile_project",
    "CommitError",
    "RecipeProject",
    "commit_entry",
]
