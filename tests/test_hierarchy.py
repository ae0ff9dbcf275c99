"""
Tests for Hierarchy Building
"""

import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from navigator.filtering import filter_projects_for_navigator
from navigator.hierarchy import build_project_hierarchy, count_nodes, flatten_hierarchy
from navigator.models import NavigatorFilters, ProjectWithChildren
from tests.fixtures.sample_projects import make_project, sample_projects


def titles(nodes):
    return [node.title for node in nodes]


class TestBuildProjectHierarchy:

    @pytest.fixture
    def roots(self):
        return build_project_hierarchy(sample_projects())

    def test_roots_sorted(self, roots):
        """Categories come first, then projects; orphans are roots."""
        assert titles(roots) == ['Contributions', 'Open Source', 'Ghost Child']

    def test_children_sorted_recursively(self, roots):
        open_source = roots[1]
        assert titles(open_source.children) == ['Deprecated Tool', 'Legacy Site', 'Navigator']
        navigator = open_source.children[2]
        assert titles(navigator.children) == ['Navigator CLI', 'Navigator Docs']

    def test_every_project_wrapped_once(self, roots):
        projects = sample_projects()
        assert count_nodes(roots) == len(projects)
        flat = [node.title for _, node in flatten_hierarchy(roots)]
        assert sorted(flat) == sorted(p.title for p in projects)

    def test_nodes_wrap_projects(self, roots):
        assert isinstance(roots[0], ProjectWithChildren)
        assert roots[0].project.category == 'contributing'

    def test_orphan_is_root(self):
        roots = build_project_hierarchy([make_project('Orphan', parent_project='Ghost')])
        assert titles(roots) == ['Orphan']
        assert roots[0].children == []

    def test_parent_outside_input_promotes_to_root(self):
        """Parents are resolved against the given list, not the full collection."""
        projects = [p for p in sample_projects() if p.title in ('Navigator CLI', 'Navigator Docs')]
        roots = build_project_hierarchy(projects)
        assert titles(roots) == ['Navigator CLI', 'Navigator Docs']

    def test_filtered_view(self):
        result = filter_projects_for_navigator(sample_projects(), NavigatorFilters(query='cli'))
        roots = build_project_hierarchy(result.visible_projects)

        assert [(depth, node.title) for depth, node in flatten_hierarchy(roots)] == [
            (0, 'Open Source'),
            (1, 'Navigator'),
            (2, 'Navigator CLI'),
        ]

    def test_parent_cycle_keeps_every_node(self):
        projects = [
            make_project('A', parent_project='B'),
            make_project('B', parent_project='A'),
            make_project('C', parent_project='A'),
            make_project('Self', parent_project='Self'),
        ]
        roots = build_project_hierarchy(projects)

        assert count_nodes(roots) == 4
        assert titles(roots) == ['A', 'B', 'Self']
        assert titles(roots[0].children) == ['C']

    def test_empty_input(self):
        assert build_project_hierarchy([]) == []
        assert count_nodes([]) == 0

    def test_to_dict_nests_children(self):
        roots = build_project_hierarchy([
            make_project('Parent', project_type='category'),
            make_project('Child', parent_project='Parent'),
        ])
        data = roots[0].to_dict()
        assert data['title'] == 'Parent'
        assert [child['title'] for child in data['children']] == ['Child']
        assert data['children'][0]['children'] == []
