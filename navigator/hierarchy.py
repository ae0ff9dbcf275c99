"""
Nested hierarchy for list-style consumers.

Parents are resolved against the given (usually already filtered) list only,
so a project whose parent was filtered out becomes a root of the view.
"""

from typing import Dict, Iterator, List, Sequence, Tuple

from core.logging_config import log_performance
from .filtering import sort_key
from .models import Project, ProjectWithChildren


def _on_parent_cycle(project: Project, nodes: Dict[str, ProjectWithChildren]) -> bool:
    """True if following parent links inside ``nodes`` leads back to ``project``."""
    seen = set()
    current = project
    while current.parent_project and current.parent_project in nodes:
        parent_title = current.parent_project
        if parent_title == project.title:
            return True
        if parent_title in seen:
            return False
        seen.add(parent_title)
        current = nodes[parent_title].project
    return False


def _sort_recursively(nodes: List[ProjectWithChildren]) -> None:
    nodes.sort(key=lambda node: sort_key(node.project))
    for node in nodes:
        if node.children:
            _sort_recursively(node.children)


@log_performance('navigator.hierarchy')
def build_project_hierarchy(projects: Sequence[Project]) -> List[ProjectWithChildren]:
    """
    Nest ``projects`` under their parents and return the sorted roots.

    Every input project is wrapped exactly once. A project whose parent is
    not in ``projects`` is promoted to a root, as is every project on a
    parent cycle, so no project drops out of the forest.
    """
    nodes: Dict[str, ProjectWithChildren] = {
        project.title: ProjectWithChildren(project) for project in projects
    }
    roots: List[ProjectWithChildren] = []

    for project in projects:
        node = nodes[project.title]
        parent = nodes.get(project.parent_project) if project.parent_project else None
        if parent is not None and not _on_parent_cycle(project, nodes):
            parent.children.append(node)
        else:
            roots.append(node)

    _sort_recursively(roots)
    return roots


def count_nodes(roots: Sequence[ProjectWithChildren]) -> int:
    """Number of nodes in the forest, counted recursively."""
    return sum(1 + count_nodes(node.children) for node in roots)


def flatten_hierarchy(roots: Sequence[ProjectWithChildren], depth: int = 0) -> Iterator[Tuple[int, ProjectWithChildren]]:
    """Yield ``(depth, node)`` pairs in pre-order."""
    for node in roots:
        yield depth, node
        yield from flatten_hierarchy(node.children, depth + 1)
