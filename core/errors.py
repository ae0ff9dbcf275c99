"""
Project Navigator Error Types

Provides:
- A base exception carrying a machine-readable error type and details
- Ingestion errors (invalid records, duplicate titles, missing content)
- Configuration errors

The filter/graph engine never raises for malformed relational data; these
exceptions are only raised while loading content or configuration.

Usage:
    from core.errors import DuplicateTitleError, NavigatorError

    try:
        projects = load_projects(path)
    except NavigatorError as e:
        print(json.dumps(e.to_dict()))
"""


# =============================================================================
# Custom Exceptions
# =============================================================================

class NavigatorError(Exception):
    """Base exception for project navigator errors."""

    error_type = 'internal_error'
    message = 'An unexpected error occurred'

    def __init__(self, message=None, **kwargs):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.details = kwargs

    def to_dict(self):
        return {
            'error': self.error_type,
            'message': self.message,
            'details': self.details
        }


class ValidationError(NavigatorError):
    """A project record failed schema validation."""
    error_type = 'validation_error'
    message = 'Invalid project record'


class DuplicateTitleError(ValidationError):
    """Two project records share the same title (the graph key)."""
    error_type = 'duplicate_title'
    message = 'Duplicate project title'


class ContentNotFoundError(NavigatorError):
    """Content path does not exist or holds no project records."""
    error_type = 'content_not_found'
    message = 'Project content not found'


class ConfigurationError(NavigatorError):
    """Configuration issue."""
    error_type = 'configuration_error'
    message = 'Navigator configuration error'
