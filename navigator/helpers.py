"""
Navigator state helpers.

Pure functions behind the navigator controls: default filters, status
toggles, the focus selector options, related-project lookup and cross-link
edges between visible projects.
"""

from typing import AbstractSet, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from .filtering import title_collation_key
from .matching import normalize_query
from .models import (
    CATEGORY_ALL,
    PROJECT_STATUS_VALUES,
    FilterResult,
    NavigatorFilters,
    Project,
)


def default_filters(
    statuses: Optional[Iterable[str]] = None,
    category: str = CATEGORY_ALL,
) -> NavigatorFilters:
    """Filters with no query and no focus; all known statuses by default."""
    return NavigatorFilters(
        query="",
        statuses=frozenset(statuses if statuses is not None else PROJECT_STATUS_VALUES),
        category=category,
        focus_title=None,
    )


def toggle_status(statuses: AbstractSet[str], status: str) -> FrozenSet[str]:
    """
    Add or remove ``status``.

    Removing the last remaining status is a no-op; the status filter is never
    allowed to become empty.
    """
    current = frozenset(statuses)
    if status in current:
        if len(current) == 1:
            return current
        return current - {status}
    return current | {status}


def has_active_filters(filters: NavigatorFilters) -> bool:
    """True if ``filters`` narrows the view in any way."""
    return (
        bool(normalize_query(filters.query))
        or filters.category != CATEGORY_ALL
        or len(filters.statuses) != len(PROJECT_STATUS_VALUES)
        or bool(filters.focus_title)
    )


def focus_options(projects: Iterable[Project]) -> List[str]:
    """Every project title, collated case-insensitively, for the focus selector."""
    return sorted((project.title for project in projects), key=title_collation_key)


def build_title_lookup(projects: Iterable[Project]) -> Dict[str, Project]:
    return {project.title: project for project in projects}


def resolve_linked_projects(project: Project, lookup: Mapping[str, Project]) -> List[Project]:
    """Projects referenced by ``linked_projects``; dangling titles are skipped."""
    return [lookup[title] for title in project.linked_projects if title in lookup]


def linked_edges(visible_projects: Sequence[Project]) -> List[Tuple[str, str]]:
    """
    Cross-link edges ``(source, target)`` between visible projects.

    Edges whose target is not visible are dropped; repeated links are
    reported once.
    """
    visible_titles = {project.title for project in visible_projects}
    edges: List[Tuple[str, str]] = []
    seen: Set[Tuple[str, str]] = set()

    for project in visible_projects:
        for target in project.linked_projects:
            edge = (project.title, target)
            if target not in visible_titles or target == project.title or edge in seen:
                continue
            seen.add(edge)
            edges.append(edge)

    return edges


def expanded_titles(filters: NavigatorFilters, result: FilterResult) -> FrozenSet[str]:
    """
    Titles a list view should auto-expand.

    With an active query or focus every visible project is expanded so
    matches are not hidden inside collapsed parents; otherwise nothing is.
    """
    if not normalize_query(filters.query) and not filters.focus_title:
        return frozenset()
    return frozenset(project.title for project in result.visible_projects)
