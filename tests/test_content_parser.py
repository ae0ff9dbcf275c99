"""
Tests for Project Content Parsing

Tests front matter / YAML / JSON ingestion and record validation.
"""

import json
import logging
import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from core.errors import ContentNotFoundError, DuplicateTitleError, ValidationError
from parsers.content_parser import ProjectContentParser, load_projects


def write_markdown(directory: Path, name: str, front_matter: str, body: str = "Body text\n"):
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"---\n{front_matter.strip()}\n---\n{body}", encoding='utf-8')
    return path


@pytest.fixture
def content_dir(tmp_path):
    """A small content collection of Markdown files."""
    root = tmp_path / "projects"
    write_markdown(root, "open-source.md", """
title: Open Source
description: Personal open source work
projectType: category
category: projects
""")
    write_markdown(root, "navigator.md", """
title: Navigator
description: Filterable project tree
category: projects
parentProject: Open Source
version: "1.2"
tags: [python, graph]
linkedProjects: [Upstream Fix]
roadmap:
  - version: "1.2.0"
    releaseStatus: release
    items: [Focus mode]
  - version: "2.0.0"
    releaseStatus: dev
""")
    write_markdown(root, "en/upstream-fix.md", """
title: Upstream Fix
description: A merged bugfix
projectType: contribution
category: contributing
status: completed
lang: en
""")
    return root


class TestMarkdownCollection:

    def test_loads_all_files(self, content_dir):
        projects = load_projects(content_dir)
        assert sorted(p.title for p in projects) == ['Navigator', 'Open Source', 'Upstream Fix']

    def test_id_is_relative_slug(self, content_dir):
        ids = {p.title: p.id for p in load_projects(content_dir)}
        assert ids['Navigator'] == 'navigator'
        assert ids['Upstream Fix'] == 'en/upstream-fix'

    def test_fields_mapped(self, content_dir):
        navigator = {p.title: p for p in load_projects(content_dir)}['Navigator']

        assert navigator.parent_project == 'Open Source'
        assert navigator.tags == ('python', 'graph')
        assert navigator.linked_projects == ('Upstream Fix',)
        assert navigator.version == '1.2'
        assert navigator.roadmap[0].release_status == 'release'
        assert navigator.roadmap[0].items == ('Focus mode',)
        assert navigator.roadmap[1].items == ()

    def test_schema_defaults(self, content_dir):
        open_source = {p.title: p for p in load_projects(content_dir)}['Open Source']

        assert open_source.status == 'active'
        assert open_source.tags == ()
        assert open_source.featured is False
        assert open_source.lang == 'ja'
        navigator = {p.title: p for p in load_projects(content_dir)}['Navigator']
        assert navigator.project_type == 'project'

    def test_lang_filter(self, content_dir):
        projects = load_projects(content_dir, lang='en')
        assert [p.title for p in projects] == ['Upstream Fix']

    def test_invalid_lang_filter(self, content_dir):
        with pytest.raises(ValidationError):
            ProjectContentParser(content_dir, lang='fr')

    def test_missing_front_matter(self, tmp_path):
        (tmp_path / "broken.md").write_text("no front matter\n", encoding='utf-8')
        with pytest.raises(ValidationError):
            load_projects(tmp_path)

    def test_unterminated_front_matter(self, tmp_path):
        (tmp_path / "broken.md").write_text("---\ntitle: X\n", encoding='utf-8')
        with pytest.raises(ValidationError):
            load_projects(tmp_path)

    def test_empty_directory(self, tmp_path):
        with pytest.raises(ContentNotFoundError):
            load_projects(tmp_path)

    def test_missing_path(self, tmp_path):
        with pytest.raises(ContentNotFoundError):
            load_projects(tmp_path / "nope")


class TestDataFiles:

    def test_yaml_list(self, tmp_path):
        path = tmp_path / "projects.yaml"
        path.write_text(
            "- id: core\n  title: Core\n  description: Core libs\n"
            "- title: Sub\n  description: Sub project\n  parentProject: Core\n",
            encoding='utf-8',
        )
        projects = load_projects(path)

        assert [p.id for p in projects] == ['core', 'projects-1']
        assert projects[1].parent_project == 'Core'

    def test_json_with_projects_key(self, tmp_path):
        path = tmp_path / "projects.json"
        path.write_text(json.dumps({'projects': [
            {'id': 'a', 'title': 'A', 'description': 'first', 'status': 'archived'},
        ]}), encoding='utf-8')

        projects = load_projects(path)
        assert projects[0].status == 'archived'

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "projects.json"
        path.write_text("{not json", encoding='utf-8')
        with pytest.raises(ValidationError):
            load_projects(path)

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "projects.txt"
        path.write_text("x", encoding='utf-8')
        with pytest.raises(ValidationError):
            load_projects(path)

    def test_non_list_content(self, tmp_path):
        path = tmp_path / "projects.yaml"
        path.write_text("title: Lonely\n", encoding='utf-8')
        with pytest.raises(ValidationError):
            load_projects(path)


class TestRecordValidation:

    @pytest.fixture
    def parser(self, tmp_path):
        return ProjectContentParser(tmp_path)

    def test_requires_title(self, parser):
        with pytest.raises(ValidationError) as exc:
            parser.build_project({'description': 'x'}, 'src')
        assert exc.value.details['source'] == 'src'

    def test_requires_description(self, parser):
        with pytest.raises(ValidationError):
            parser.build_project({'title': 'X'}, 'src')

    @pytest.mark.parametrize('field,value', [
        ('projectType', 'library'),
        ('category', 'hobby'),
        ('lang', 'fr'),
        ('tags', 'python'),
        ('tags', [1, 2]),
        ('parentProject', ['A']),
        ('roadmap', {'version': '1'}),
        ('roadmap', [{'version': '1', 'releaseStatus': 'beta'}]),
        ('roadmap', [{'releaseStatus': 'dev'}]),
        ('roadmap', [{'version': '1'}]),
    ])
    def test_invalid_fields(self, parser, field, value):
        record = {'title': 'X', 'description': 'x', field: value}
        with pytest.raises(ValidationError):
            parser.build_project(record, 'src')

    def test_unquoted_version_rejected(self, tmp_path):
        path = tmp_path / "projects.yaml"
        path.write_text("- title: A\n  description: d\n  version: 1.10\n", encoding='utf-8')

        with pytest.raises(ValidationError) as exc:
            load_projects(path)
        assert 'quote it in YAML' in exc.value.message

    def test_unquoted_roadmap_version_rejected(self, tmp_path):
        path = tmp_path / "projects.yaml"
        path.write_text(
            "- title: A\n  description: d\n  version: '1.10'\n"
            "  roadmap:\n    - {version: 2.20, releaseStatus: dev}\n",
            encoding='utf-8',
        )
        with pytest.raises(ValidationError):
            load_projects(path)

    def test_quoted_versions_kept_verbatim(self, tmp_path):
        path = tmp_path / "projects.yaml"
        path.write_text(
            "- title: A\n  description: d\n  version: '1.10'\n"
            "  roadmap:\n    - {version: '2.20', releaseStatus: dev}\n",
            encoding='utf-8',
        )
        project = load_projects(path)[0]

        assert project.version == '1.10'
        assert project.roadmap[0].version == '2.20'

    @pytest.mark.parametrize('value', ['false', 'true', 0, 1])
    def test_featured_must_be_boolean(self, parser, value):
        with pytest.raises(ValidationError):
            parser.build_project({'title': 'X', 'description': 'x', 'featured': value}, 'src')

    def test_featured_boolean_kept(self, parser):
        project = parser.build_project({'title': 'X', 'description': 'x', 'featured': True}, 'src')
        assert project.featured is True

    def test_unknown_status_kept_with_warning(self, parser, caplog):
        with caplog.at_level(logging.WARNING):
            project = parser.build_project({'title': 'X', 'description': 'x', 'status': 'deprecated'}, 'src')
        assert project.status == 'deprecated'
        assert 'unknown status' in caplog.text

    def test_unknown_status_rejected_when_strict(self, tmp_path):
        parser = ProjectContentParser(tmp_path, strict_status=True)
        with pytest.raises(ValidationError):
            parser.build_project({'title': 'X', 'description': 'x', 'status': 'deprecated'}, 'src')

    def test_duplicate_titles_rejected(self, tmp_path):
        write_markdown(tmp_path, "a.md", "title: Same\ndescription: one")
        write_markdown(tmp_path, "b.md", "title: Same\ndescription: two")

        with pytest.raises(DuplicateTitleError) as exc:
            load_projects(tmp_path)
        assert exc.value.details['ids'] == ['a', 'b']
        assert exc.value.to_dict()['error'] == 'duplicate_title'

    def test_duplicate_titles_in_other_lang_ignored(self, tmp_path):
        write_markdown(tmp_path, "ja.md", "title: Same\ndescription: one\nlang: ja")
        write_markdown(tmp_path, "en.md", "title: Same\ndescription: two\nlang: en")

        assert [p.id for p in load_projects(tmp_path, lang='en')] == ['en']
