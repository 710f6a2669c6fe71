"""Project mapping and hierarchy."""

from .tree import (
    ProjectNode,
    build_project_tree,
    load_project_mapping,
    project_tree,
    root_projects,
)

__all__ = [
    "ProjectNode",
    "build_project_tree",
    "load_project_mapping",
    "project_tree",
    "root_projects",
]
