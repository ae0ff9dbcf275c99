"""
Free-text query matching for project records.

Matching is plain substring containment over a lower-cased haystack; there is
no tokenization, stemming or fuzzy matching.
"""

from .models import Project


def normalize_query(query: str) -> str:
    """Trim and lower-case a raw query."""
    return (query or "").strip().lower()


def roadmap_text(project: Project) -> str:
    """Every milestone's version, release status and items, space-joined."""
    return " ".join(term for entry in project.roadmap for term in entry.search_terms())


def project_search_text(project: Project) -> str:
    """Lower-cased haystack searched by ``matches_project_query``."""
    parts = [
        project.title,
        project.description,
        project.version or "",
        project.project_type or "",
        project.category or "",
        *project.tags,
        roadmap_text(project),
    ]
    return " ".join(parts).lower()


def matches_project_query(project: Project, query: str) -> bool:
    """
    True if ``query`` occurs anywhere in the project's searchable text.

    An empty (or blank) query matches every project.
    """
    normalized = normalize_query(query)
    if not normalized:
        return True
    return normalized in project_search_text(project)


def matches_primary_query(project: Project, query: str) -> bool:
    """
    True if ``query`` occurs in the title or id.

    This is the stronger signal used to seed visibility and to reveal a
    matched node's subtree. An empty query never counts as a primary match.
    """
    normalized = normalize_query(query)
    if not normalized:
        return False
    return normalized in project.title.lower() or normalized in project.id.lower()
