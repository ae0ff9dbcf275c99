"""
Parser for project content collections.

Handles multiple formats:
- A directory of Markdown files with YAML front matter (id = file stem)
- A single YAML file holding a list of records (or ``projects: [...]``)
- A single JSON file with the same shape

Front matter uses the content schema's camelCase keys:

    ---
    title: Core
    description: Core libraries
    projectType: category
    category: projects
    status: active
    tags: [python, cli]
    parentProject: Tools
    roadmap:
      - version: "1.0"
        releaseStatus: release
        items: [Initial release]
    ---

Records are validated here, at ingestion: required fields, enum fields and
title uniqueness. Unknown statuses are kept (and excluded later by the
navigator filter) unless ``strict_status`` is set.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import yaml

from core.errors import ContentNotFoundError, DuplicateTitleError, ValidationError
from core.logging_config import get_logger
from navigator.models import (
    Project,
    ProjectCategory,
    ProjectLang,
    ProjectStatus,
    ProjectType,
    ReleaseStatus,
    RoadmapEntry,
)

logger = get_logger(__name__)

MARKDOWN_SUFFIXES = ('.md', '.mdx', '.markdown')
YAML_SUFFIXES = ('.yaml', '.yml')
JSON_SUFFIXES = ('.json',)

FRONT_MATTER_DELIMITER = '---'


def _enum_values(enum_cls) -> Tuple[str, ...]:
    return tuple(member.value for member in enum_cls)


class ProjectContentParser:
    """
    Load and validate a project collection.

    Args:
        path: Content directory or a single YAML/JSON file
        strict_status: Reject unknown statuses instead of keeping them
        lang: Only keep records in this language (``ja`` / ``en``)
    """

    def __init__(
        self,
        path: Union[str, Path],
        strict_status: bool = False,
        lang: Optional[str] = None,
    ):
        self.path = Path(path)
        self.strict_status = strict_status
        self.lang = lang

        if lang is not None and lang not in _enum_values(ProjectLang):
            raise ValidationError("Unknown lang filter", lang=lang)

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def parse(self) -> List[Project]:
        """
        Parse every record under ``path``.

        Returns:
            Projects in source order (sorted file names for directories)

        Raises:
            ContentNotFoundError: path missing
            ValidationError: malformed record
            DuplicateTitleError: two records share a title
        """
        if not self.path.exists():
            raise ContentNotFoundError("Content path does not exist", path=str(self.path))

        records = list(self._read_records())
        projects = [self.build_project(record, source) for record, source in records]

        if self.lang is not None:
            projects = [project for project in projects if project.lang == self.lang]

        self._check_unique_titles(projects)
        self._warn_dangling_references(projects)

        logger.info(f"Loaded {len(projects)} projects from {self.path}")
        return projects

    def build_project(self, record: Dict[str, Any], source: str) -> Project:
        """Validate one raw record and build a Project from it."""
        if not isinstance(record, dict):
            raise ValidationError("Project record must be a mapping", source=source)

        title = self._required_str(record, 'title', source)
        description = self._required_str(record, 'description', source)
        project_id = str(record.get('id') or source)

        status = record.get('status', ProjectStatus.ACTIVE.value)
        if not isinstance(status, str):
            raise ValidationError("status must be a string", source=source, value=status)
        if not ProjectStatus.is_known(status):
            if self.strict_status:
                raise ValidationError(
                    "Unknown status",
                    source=source,
                    value=status,
                    allowed=list(_enum_values(ProjectStatus)),
                )
            logger.warning(f"{source}: unknown status {status!r}; project will be hidden by the navigator")

        project_type = self._optional_enum(record, 'projectType', ProjectType, source,
                                           default=ProjectType.PROJECT.value)
        category = self._optional_enum(record, 'category', ProjectCategory, source)
        lang = self._optional_enum(record, 'lang', ProjectLang, source, default=ProjectLang.JA.value)

        return Project(
            id=project_id,
            title=title,
            description=description,
            status=status,
            tags=self._str_list(record, 'tags', source),
            category=category,
            project_type=project_type,
            version=self._optional_str(record, 'version', source),
            parent_project=self._optional_str(record, 'parentProject', source),
            roadmap=self._roadmap(record.get('roadmap'), source),
            linked_projects=self._str_list(record, 'linkedProjects', source),
            link=self._optional_str(record, 'link', source),
            github=self._optional_str(record, 'github', source),
            image=self._optional_str(record, 'image', source),
            featured=self._optional_bool(record, 'featured', source),
            lang=lang,
        )

    # -------------------------------------------------------------------------
    # Readers
    # -------------------------------------------------------------------------

    def _read_records(self) -> Iterable[Tuple[Dict[str, Any], str]]:
        if self.path.is_dir():
            files = sorted(
                p for p in self.path.rglob('*')
                if p.is_file() and p.suffix.lower() in MARKDOWN_SUFFIXES
            )
            if not files:
                raise ContentNotFoundError("No Markdown project files found", path=str(self.path))
            for file_path in files:
                slug = file_path.relative_to(self.path).with_suffix('').as_posix()
                yield self._read_front_matter(file_path), slug
            return

        suffix = self.path.suffix.lower()
        if suffix in MARKDOWN_SUFFIXES:
            yield self._read_front_matter(self.path), self.path.stem
            return

        if suffix in YAML_SUFFIXES:
            data = self._load_yaml(self.path.read_text(encoding='utf-8'), str(self.path))
        elif suffix in JSON_SUFFIXES:
            try:
                data = json.loads(self.path.read_text(encoding='utf-8'))
            except json.JSONDecodeError as e:
                raise ValidationError("Invalid JSON content", path=str(self.path), reason=str(e))
        else:
            raise ValidationError("Unsupported content file type", path=str(self.path))

        if isinstance(data, dict) and 'projects' in data:
            data = data['projects']
        if not isinstance(data, list):
            raise ValidationError("Content file must hold a list of projects", path=str(self.path))

        for index, record in enumerate(data):
            default_id = f"{self.path.stem}-{index}"
            source = str(record.get('id') or default_id) if isinstance(record, dict) else default_id
            yield record, source

    def _read_front_matter(self, file_path: Path) -> Dict[str, Any]:
        text = file_path.read_text(encoding='utf-8')
        lines = text.splitlines()

        if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
            raise ValidationError("Missing front matter", path=str(file_path))

        for end, line in enumerate(lines[1:], start=1):
            if line.strip() == FRONT_MATTER_DELIMITER:
                break
        else:
            raise ValidationError("Unterminated front matter", path=str(file_path))

        data = self._load_yaml('\n'.join(lines[1:end]), str(file_path))
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValidationError("Front matter must be a mapping", path=str(file_path))
        return data

    @staticmethod
    def _load_yaml(text: str, origin: str) -> Any:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValidationError("Invalid YAML", path=origin, reason=str(e))

    # -------------------------------------------------------------------------
    # Field validation
    # -------------------------------------------------------------------------

    @staticmethod
    def _required_str(record: Dict[str, Any], key: str, source: str) -> str:
        value = record.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"Missing required field '{key}'", source=source)
        return value

    @staticmethod
    def _optional_str(record: Dict[str, Any], key: str, source: str) -> Optional[str]:
        value = record.get(key)
        if value is None or value == '':
            return None
        # YAML reads bare versions like 1.10 as floats and drops digits
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            raise ValidationError(
                f"'{key}' must be a string (quote it in YAML)", source=source, value=value
            )
        if not isinstance(value, str):
            raise ValidationError(f"'{key}' must be a string", source=source, value=value)
        return value

    @staticmethod
    def _optional_bool(record: Dict[str, Any], key: str, source: str, default: bool = False) -> bool:
        value = record.get(key)
        if value is None:
            return default
        if not isinstance(value, bool):
            raise ValidationError(f"'{key}' must be true or false", source=source, value=value)
        return value

    @staticmethod
    def _str_list(record: Dict[str, Any], key: str, source: str) -> Tuple[str, ...]:
        value = record.get(key)
        if value is None:
            return ()
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ValidationError(f"'{key}' must be a list of strings", source=source)
        return tuple(value)

    @staticmethod
    def _optional_enum(record, key, enum_cls, source, default=None) -> Optional[str]:
        value = record.get(key)
        if value is None:
            return default
        allowed = _enum_values(enum_cls)
        if value not in allowed:
            raise ValidationError(f"Invalid {key}", source=source, value=value, allowed=list(allowed))
        return value

    def _roadmap(self, raw: Any, source: str) -> Tuple[RoadmapEntry, ...]:
        if raw is None:
            return ()
        if not isinstance(raw, list):
            raise ValidationError("'roadmap' must be a list", source=source)

        entries = []
        for entry in raw:
            if not isinstance(entry, dict):
                raise ValidationError("Roadmap entries must be mappings", source=source)
            version = self._optional_str(entry, 'version', source)
            if version is None:
                raise ValidationError("Roadmap entry missing 'version'", source=source)
            release_status = self._optional_enum(entry, 'releaseStatus', ReleaseStatus, source)
            if release_status is None:
                raise ValidationError("Roadmap entry missing 'releaseStatus'", source=source, version=version)
            entries.append(RoadmapEntry(
                version=version,
                release_status=release_status,
                items=self._str_list(entry, 'items', source),
            ))
        return tuple(entries)

    # -------------------------------------------------------------------------
    # Collection checks
    # -------------------------------------------------------------------------

    @staticmethod
    def _check_unique_titles(projects: List[Project]):
        seen: Dict[str, str] = {}
        for project in projects:
            if project.title in seen:
                raise DuplicateTitleError(
                    f"Duplicate project title: {project.title}",
                    title=project.title,
                    ids=[seen[project.title], project.id],
                )
            seen[project.title] = project.id

    @staticmethod
    def _warn_dangling_references(projects: List[Project]):
        titles = {project.title for project in projects}
        for project in projects:
            if project.parent_project and project.parent_project not in titles:
                logger.warning(
                    f"{project.id}: parent '{project.parent_project}' not found; shown as a root"
                )
            for linked in project.linked_projects:
                if linked not in titles:
                    logger.debug(f"{project.id}: linked project '{linked}' not found")


def load_projects(
    path: Union[str, Path],
    strict_status: bool = False,
    lang: Optional[str] = None,
) -> List[Project]:
    """Convenience wrapper around ``ProjectContentParser.parse``."""
    return ProjectContentParser(path, strict_status=strict_status, lang=lang).parse()
