"""CLI command to display the project forest."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from rich.console import Console

from ...projects.tree import ProjectNode, project_tree, root_projects
from ..base import get_logger, handle_errors

logger = get_logger(__name__)

# Color by depth: roots, first level, second level, deeper
LEVEL_COLORS = ("bold cyan", "bold yellow", "bold blue", "bold green")


def render_project_tree(
    tree: Mapping[str, ProjectNode],
    console: Console | None = None,
    indent_str: str = "  ",
    show_paths: bool = False,
) -> None:
    """Render the project forest using Rich with indentation and colors.

    Args:
        tree: Project name -> ProjectNode.
        console: Rich Console instance (None to create new).
        indent_str: String to use for each indentation level.
        show_paths: If True, append each project's mapped path.
    """
    if console is None:
        console = Console()

    def _render(name: str, indent: int, seen: frozenset[str]) -> None:
        node = tree[name]
        color = LEVEL_COLORS[min(indent, len(LEVEL_COLORS) - 1)]
        label = f"{indent_str * indent}[{color}]{name}[/{color}]"
        if show_paths and node.path:
            label += f" [dim]— {node.path}[/dim]"
        console.print(label)

        for child in sorted(node.children):
            # Children set on a project nested below two known projects lists
            # it under both; only descend where it is the direct child.
            if child in seen or tree[child].parent != name:
                continue
            _render(child, indent + 1, seen | {child})

    for root in root_projects(tree):
        _render(root, 0, frozenset({root}))


def projects_command(home: Path | None = None, show_paths: bool = False) -> None:
    """Main entry point for the projects command."""
    with handle_errors("projects", logger=logger):
        tree = project_tree(home)

    if not tree:
        Console().print("[yellow]No projects configured.[/yellow]")
        return
    render_project_tree(tree, show_paths=show_paths)
