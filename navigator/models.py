"""
Data models for the project navigator.

Projects are immutable records supplied by the content loader. Every
structure derived from them (graphs, filter results, hierarchies) is rebuilt
per call and never shared across calls.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, FrozenSet, List, Optional, Tuple


# =============================================================================
# Enums
# =============================================================================

class ProjectStatus(Enum):
    """Known project lifecycle statuses."""
    ACTIVE = "active"
    MAINTENANCE = "maintenance"
    COMPLETED = "completed"
    ARCHIVED = "archived"

    @classmethod
    def is_known(cls, value: Optional[str]) -> bool:
        return value in _STATUS_VALUES


class ProjectCategory(Enum):
    """Top-level section a project belongs to."""
    PROJECTS = "projects"
    CONTRIBUTING = "contributing"


class ProjectType(Enum):
    """Node kind; also drives sort order (categories first)."""
    CATEGORY = "category"
    PROJECT = "project"
    CONTRIBUTION = "contribution"


class ReleaseStatus(Enum):
    """Roadmap milestone state."""
    RELEASE = "release"
    DEV = "dev"
    CLOSE = "close"


class ProjectLang(Enum):
    JA = "ja"
    EN = "en"


_STATUS_VALUES = frozenset(status.value for status in ProjectStatus)

PROJECT_STATUS_VALUES: Tuple[str, ...] = tuple(status.value for status in ProjectStatus)
PROJECT_CATEGORY_VALUES: Tuple[str, ...] = tuple(category.value for category in ProjectCategory)

# Category selector accepting every project
CATEGORY_ALL = "all"


# =============================================================================
# Project Records
# =============================================================================

@dataclass(frozen=True)
class RoadmapEntry:
    """A roadmap milestone."""
    version: str
    release_status: str
    items: Tuple[str, ...] = ()

    def search_terms(self) -> List[str]:
        return [self.version, self.release_status, *self.items]

    def to_dict(self) -> dict:
        return {
            'version': self.version,
            'releaseStatus': self.release_status,
            'items': list(self.items),
        }


@dataclass(frozen=True)
class Project:
    """
    A project record as loaded from content.

    ``title`` is the graph key: ``parent_project`` and ``linked_projects``
    reference other projects by title, not by id.
    """
    id: str
    title: str
    description: str = ""
    status: str = ProjectStatus.ACTIVE.value
    tags: Tuple[str, ...] = ()
    category: Optional[str] = None
    project_type: Optional[str] = ProjectType.PROJECT.value
    version: Optional[str] = None
    parent_project: Optional[str] = None
    roadmap: Tuple[RoadmapEntry, ...] = ()
    linked_projects: Tuple[str, ...] = ()
    link: Optional[str] = None
    github: Optional[str] = None
    image: Optional[str] = None
    featured: bool = False
    lang: str = ProjectLang.JA.value

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'status': self.status,
            'tags': list(self.tags),
            'category': self.category,
            'projectType': self.project_type,
            'version': self.version,
            'parentProject': self.parent_project,
            'roadmap': [entry.to_dict() for entry in self.roadmap],
            'linkedProjects': list(self.linked_projects),
            'link': self.link,
            'github': self.github,
            'image': self.image,
            'featured': self.featured,
            'lang': self.lang,
        }


@dataclass
class ProjectWithChildren:
    """A project node in a nested hierarchy."""
    project: Project
    children: List['ProjectWithChildren'] = field(default_factory=list)

    @property
    def title(self) -> str:
        return self.project.title

    @property
    def project_type(self) -> Optional[str]:
        return self.project.project_type

    def to_dict(self) -> dict:
        data = self.project.to_dict()
        data['children'] = [child.to_dict() for child in self.children]
        return data


# =============================================================================
# Filters and Results
# =============================================================================

@dataclass(frozen=True)
class NavigatorFilters:
    """
    Navigator filter state.

    Frozen and hashable so callers can memoize results keyed by
    (collection, filters).
    """
    query: str = ""
    statuses: FrozenSet[str] = frozenset(PROJECT_STATUS_VALUES)
    category: str = CATEGORY_ALL
    focus_title: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.statuses, frozenset):
            object.__setattr__(self, 'statuses', frozenset(self.statuses))

    def with_changes(self, **changes: Any) -> 'NavigatorFilters':
        return replace(self, **changes)

    def reset(self) -> 'NavigatorFilters':
        return NavigatorFilters()

    def to_dict(self) -> dict:
        return {
            'query': self.query,
            'statuses': sorted(self.statuses),
            'category': self.category,
            'focusTitle': self.focus_title,
        }


@dataclass(frozen=True)
class FilterResult:
    """Visible projects plus navigator counters."""
    visible_projects: Tuple[Project, ...] = ()
    matched_count: int = 0
    primary_matched_count: int = 0
    visible_count: int = 0
    total_count: int = 0
    focus_count: int = 0

    @property
    def visible_titles(self) -> List[str]:
        return [project.title for project in self.visible_projects]

    def to_dict(self) -> dict:
        return {
            'visibleProjects': [project.to_dict() for project in self.visible_projects],
            'matchedCount': self.matched_count,
            'primaryMatchedCount': self.primary_matched_count,
            'visibleCount': self.visible_count,
            'totalCount': self.total_count,
            'focusCount': self.focus_count,
        }
