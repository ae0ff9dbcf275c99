"""
Project graph construction and closure traversal.

The graph is keyed by project title. Parent links that do not resolve to a
known title are tolerated: the project simply becomes a root. Traversals keep
explicit visited sets because the content does not structurally forbid a
parent cycle.

Usage:
    from navigator.graph import build_project_graph, collect_focus_branch

    graph = build_project_graph(projects)
    branch = collect_focus_branch('Core', graph)
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Set

from .models import Project


@dataclass
class ProjectGraph:
    """Title-keyed lookup plus parent -> children adjacency."""
    by_title: Dict[str, Project] = field(default_factory=dict)
    children_by_title: Dict[str, List[str]] = field(default_factory=dict)

    def __contains__(self, title: object) -> bool:
        return title in self.by_title

    def __len__(self) -> int:
        return len(self.by_title)

    def children_of(self, title: str) -> List[str]:
        return self.children_by_title.get(title, [])

    def roots(self) -> List[str]:
        """Titles whose parent is absent or unresolved, in input order."""
        return [
            title for title, project in self.by_title.items()
            if not project.parent_project or project.parent_project not in self.by_title
        ]


def build_project_graph(projects: Iterable[Project]) -> ProjectGraph:
    """
    Build the title lookup and children adjacency for ``projects``.

    Children are listed in input order. Duplicate titles overwrite earlier
    entries; the content loader rejects them before they get here.
    """
    projects = list(projects)
    graph = ProjectGraph()

    for project in projects:
        graph.by_title[project.title] = project
        graph.children_by_title[project.title] = []

    for project in projects:
        if not project.parent_project:
            continue
        children = graph.children_by_title.get(project.parent_project)
        if children is not None:
            children.append(project.title)

    return graph


def collect_ancestor_titles(title: str, graph: ProjectGraph) -> FrozenSet[str]:
    """
    Strict ancestors of ``title``, walking ``parent_project`` upward.

    The walk ends at a project without a parent, at a parent name that is not
    in the graph (an unresolved parent is not an ancestor), or when a title
    repeats.
    """
    ancestors: Set[str] = set()
    current = graph.by_title.get(title)

    while current is not None and current.parent_project:
        parent_title = current.parent_project
        if parent_title in ancestors or parent_title == title or parent_title not in graph:
            break
        ancestors.add(parent_title)
        current = graph.by_title[parent_title]

    return frozenset(ancestors)


def collect_descendant_titles(title: str, graph: ProjectGraph) -> FrozenSet[str]:
    """Strict descendants of ``title`` (breadth-first over children)."""
    descendants: Set[str] = set()
    visited: Set[str] = {title}
    queue = deque([title])

    while queue:
        current = queue.popleft()
        for child in graph.children_of(current):
            if child in visited:
                continue
            visited.add(child)
            descendants.add(child)
            queue.append(child)

    return frozenset(descendants)


def collect_focus_branch(title: str, graph: ProjectGraph) -> FrozenSet[str]:
    """``title`` together with all its ancestors and descendants."""
    if title not in graph:
        return frozenset()
    return (
        frozenset([title])
        | collect_ancestor_titles(title, graph)
        | collect_descendant_titles(title, graph)
    )
