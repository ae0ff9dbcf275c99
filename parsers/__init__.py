"""
Content parsers for the project navigator.

Usage:
    from parsers import load_projects

    projects = load_projects('content/projects', lang='en')
"""

from .content_parser import ProjectContentParser, load_projects

__all__ = [
    'ProjectContentParser',
    'load_projects',
]
