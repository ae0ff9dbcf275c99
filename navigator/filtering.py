"""
Navigator filter orchestration.

Combines the category/status filter, query matching, ancestor/descendant
context expansion and focus-branch isolation into one ordered, deduplicated
list of visible projects.

Context rules:
- every visible match keeps its ancestors that pass the category/status filter
- a title/id ("primary") match also reveals its filtered-in descendants
- a tag/roadmap-only match never reveals descendants
- focusing keeps the path back to a visible root

Usage:
    from navigator.filtering import filter_projects_for_navigator
    from navigator.models import NavigatorFilters

    result = filter_projects_for_navigator(
        projects,
        NavigatorFilters(query='cli', statuses={'active'}, category='projects'),
    )
    print(result.visible_count, result.matched_count)
"""

import logging
import unicodedata
from typing import FrozenSet, Iterable, List, Sequence, Set, Tuple

from core.logging_config import log_performance
from .graph import (
    ProjectGraph,
    build_project_graph,
    collect_ancestor_titles,
    collect_descendant_titles,
    collect_focus_branch,
)
from .matching import matches_primary_query, matches_project_query, normalize_query
from .models import CATEGORY_ALL, FilterResult, NavigatorFilters, Project, ProjectStatus, ProjectType

logger = logging.getLogger(__name__)

TYPE_ORDER = {
    ProjectType.CATEGORY.value: 0,
    ProjectType.PROJECT.value: 1,
}
TYPE_ORDER_DEFAULT = 2


# =============================================================================
# Ordering
# =============================================================================

def title_collation_key(title: str) -> str:
    """
    Case- and accent-insensitive collation key for titles.

    Letters compare at base strength ('Émile' == 'emile'), but the result is
    code point order after folding, not the Unicode collation algorithm:
    punctuation and symbols are not moved ahead of digits and letters, so
    '~tools' sorts after 'alpha' and 'v1' before 'v_1'.
    """
    decomposed = unicodedata.normalize('NFKD', title)
    stripped = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def sort_key(project: Project) -> Tuple[int, str]:
    """Project type bucket first (category, project, other), then title."""
    return (
        TYPE_ORDER.get(project.project_type, TYPE_ORDER_DEFAULT),
        title_collation_key(project.title),
    )


def sort_projects(projects: Iterable[Project]) -> List[Project]:
    return sorted(projects, key=sort_key)


# =============================================================================
# Filtering
# =============================================================================

def is_candidate(project: Project, filters: NavigatorFilters) -> bool:
    """Category and status filter; unknown statuses never pass."""
    if filters.category != CATEGORY_ALL and project.category != filters.category:
        return False
    if not ProjectStatus.is_known(project.status):
        logger.debug(f"Excluding {project.title!r}: unknown status {project.status!r}")
        return False
    return project.status in filters.statuses


def _candidate_ancestors(
    titles: Iterable[str],
    graph: ProjectGraph,
    candidate_titles: FrozenSet[str],
) -> Set[str]:
    expanded: Set[str] = set()
    for title in titles:
        expanded |= collect_ancestor_titles(title, graph) & candidate_titles
    return expanded


def _candidate_descendants(
    titles: Iterable[str],
    graph: ProjectGraph,
    candidate_titles: FrozenSet[str],
) -> Set[str]:
    expanded: Set[str] = set()
    for title in titles:
        expanded |= collect_descendant_titles(title, graph) & candidate_titles
    return expanded


@log_performance('navigator.filtering')
def filter_projects_for_navigator(
    projects: Sequence[Project],
    filters: NavigatorFilters,
) -> FilterResult:
    """
    Compute the visible project list and counters for ``filters``.

    Args:
        projects: Full project collection
        filters: Query, allowed statuses, category selector and focus title

    Returns:
        FilterResult with visible projects sorted by type then title
    """
    if not projects:
        return FilterResult()

    graph = build_project_graph(projects)
    query = normalize_query(filters.query)

    candidates = [project for project in projects if is_candidate(project, filters)]
    candidate_titles = frozenset(project.title for project in candidates)

    matched: Set[str] = set()
    primary_matched: Set[str] = set()
    for project in candidates:
        if query and not matches_project_query(project, query):
            continue
        matched.add(project.title)
        if query and matches_primary_query(project, query):
            primary_matched.add(project.title)

    if query:
        seed = primary_matched if primary_matched else matched
        visible = set(seed)
        visible |= _candidate_ancestors(seed, graph, candidate_titles)
        if primary_matched:
            visible |= _candidate_descendants(primary_matched, graph, candidate_titles)
    else:
        visible = set(candidate_titles)

    focus_count = 0
    focus_title = filters.focus_title
    if focus_title and focus_title in graph:
        branch = collect_focus_branch(focus_title, graph)
        focused = visible & branch
        focus_count = len(focused)
        visible = focused | _candidate_ancestors(focused, graph, candidate_titles)
    elif focus_title:
        logger.debug(f"Focus title {focus_title!r} not found; ignoring focus")

    visible_projects = tuple(sort_projects(
        project for project in projects if project.title in visible
    ))

    logger.debug(
        f"Navigator filter: {len(visible_projects)}/{len(projects)} visible",
        extra={
            'candidate_count': len(candidates),
            'matched_count': len(matched),
            'primary_matched_count': len(primary_matched),
            'focus_count': focus_count,
        }
    )

    return FilterResult(
        visible_projects=visible_projects,
        matched_count=len(matched) if query else len(candidates),
        primary_matched_count=len(primary_matched) if query else len(candidates),
        visible_count=len(visible_projects),
        total_count=len(projects),
        focus_count=focus_count,
    )
