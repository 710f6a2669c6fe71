"""Project hierarchy derived from the project mapping file.

The mapping file (``projects.json`` in the tracker home) maps each project
name to a representative path inside that project, typically its tracker
config file. A project nested inside another project's directory is that
project's child::

    {
        "acme": "/src/acme/.tracker.json",
        "acme-web": "/src/acme/acme-web/.tracker.json"
    }

The tree is recomputed on every call; only the flat mapping is persisted.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePath

from ..errors import ProjectMappingError
from ..global_config import PROJECTS_FILENAME, tracker_home

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectNode:
    """A project and its position in the project forest."""

    name: str
    path: str | None = None
    parent: str | None = None
    children: frozenset[str] = field(default_factory=frozenset)


def load_project_mapping(home: Path | None = None) -> dict[str, str]:
    """Load the flat project name -> path mapping.

    Args:
        home: Tracker home directory. Defaults to the configured home.

    Returns:
        Mapping of project names to paths; empty if the file is missing or
        empty.

    Raises:
        ProjectMappingError: If the file cannot be read or is not a JSON
            object.
    """
    mapping_file = (home if home is not None else tracker_home()) / PROJECTS_FILENAME
    if not mapping_file.is_file() or mapping_file.stat().st_size == 0:
        logger.debug("No project mapping at %s", mapping_file)
        return {}

    try:
        data = json.loads(mapping_file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ProjectMappingError(f"Cannot read project mapping {mapping_file}: {e}") from e

    if not isinstance(data, dict):
        raise ProjectMappingError(
            f"Project mapping {mapping_file} must be a JSON object, "
            f"got {type(data).__name__}"
        )
    return {str(name): str(location) for name, location in data.items()}


def build_project_tree(mapping: Mapping[str, str]) -> dict[str, ProjectNode]:
    """Derive parent/child relations from project locations.

    A project's record directory sits two levels below its root, so the
    path components of the grandparent of each location are inspected.
    Each component named after another known project gets the current
    project as a child; the nearest such component becomes its parent.

    Args:
        mapping: Project name -> representative path.

    Returns:
        Project name -> ProjectNode, including every project in ``mapping``.
    """
    parents: dict[str, str | None] = {name: None for name in mapping}
    children: dict[str, set[str]] = {name: set() for name in mapping}

    for project, location in mapping.items():
        for part in PurePath(location).parent.parent.parts:
            if part == project or part not in mapping:
                continue
            parents[project] = part
            children[part].add(project)

    return {
        name: ProjectNode(
            name=name,
            path=mapping[name],
            parent=parents[name],
            children=frozenset(children[name]),
        )
        for name in mapping
    }


def project_tree(home: Path | None = None) -> dict[str, ProjectNode]:
    """Load the mapping from ``home`` and build the project tree."""
    return build_project_tree(load_project_mapping(home))


def root_projects(tree: Mapping[str, ProjectNode]) -> list[str]:
    """Return the sorted names of projects without a parent."""
    return sorted(name for name, node in tree.items() if node.parent is None)
