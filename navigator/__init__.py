"""
Project Navigator Engine

Filters a flat project collection for the projects navigator and nests it
into a hierarchy:
- Graph: title-keyed lookup and parent -> children adjacency
- Closures: ancestors, descendants and focus branches
- Matching: substring search over project text
- Filtering: category/status filter, query context, focus isolation
- Hierarchy: nested tree for list-style views

Usage:
    from navigator import NavigatorFilters, filter_projects_for_navigator, build_project_hierarchy

    result = filter_projects_for_navigator(projects, NavigatorFilters(query='cli'))
    roots = build_project_hierarchy(result.visible_projects)
"""

from .models import (
    CATEGORY_ALL,
    PROJECT_CATEGORY_VALUES,
    PROJECT_STATUS_VALUES,
    FilterResult,
    NavigatorFilters,
    Project,
    ProjectCategory,
    ProjectLang,
    ProjectStatus,
    ProjectType,
    ProjectWithChildren,
    ReleaseStatus,
    RoadmapEntry,
)
from .graph import (
    ProjectGraph,
    build_project_graph,
    collect_ancestor_titles,
    collect_descendant_titles,
    collect_focus_branch,
)
from .matching import matches_primary_query, matches_project_query, normalize_query
from .filtering import filter_projects_for_navigator, sort_key, sort_projects
from .hierarchy import build_project_hierarchy, count_nodes, flatten_hierarchy
from .helpers import (
    default_filters,
    expanded_titles,
    focus_options,
    has_active_filters,
    linked_edges,
    resolve_linked_projects,
    toggle_status,
)

__all__ = [
    'CATEGORY_ALL',
    'PROJECT_CATEGORY_VALUES',
    'PROJECT_STATUS_VALUES',
    'FilterResult',
    'NavigatorFilters',
    'Project',
    'ProjectCategory',
    'ProjectLang',
    'ProjectStatus',
    'ProjectType',
    'ProjectWithChildren',
    'ReleaseStatus',
    'RoadmapEntry',
    'ProjectGraph',
    'build_project_graph',
    'collect_ancestor_titles',
    'collect_descendant_titles',
    'collect_focus_branch',
    'matches_primary_query',
    'matches_project_query',
    'normalize_query',
    'filter_projects_for_navigator',
    'sort_key',
    'sort_projects',
    'build_project_hierarchy',
    'count_nodes',
    'flatten_hierarchy',
    'default_filters',
    'expanded_titles',
    'focus_options',
    'has_active_filters',
    'linked_edges',
    'resolve_linked_projects',
    'toggle_status',
]
