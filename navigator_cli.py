#!/usr/bin/env python3
"""
Project Navigator CLI

Loads a project content collection, applies navigator filters and prints the
visible hierarchy.

Usage:
    # Whole collection as a tree
    python navigator_cli.py content/projects

    # Search and focus
    python navigator_cli.py content/projects --query cli --focus Core

    # Narrow by status / category, JSON output
    python navigator_cli.py projects.yaml --status active --status maintenance \\
        --category projects --json

    # Titles available for --focus
    python navigator_cli.py content/projects --list-focus
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from core.config import get_config
from core.errors import NavigatorError
from core.logging_config import get_logger, setup_logging
from navigator import (
    CATEGORY_ALL,
    PROJECT_CATEGORY_VALUES,
    PROJECT_STATUS_VALUES,
    NavigatorFilters,
    build_project_hierarchy,
    filter_projects_for_navigator,
    flatten_hierarchy,
    focus_options,
    has_active_filters,
    linked_edges,
)
from parsers import load_projects

logger = get_logger('cli')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Project Navigator")
    parser.add_argument('content', nargs='?',
                        help="Content directory or YAML/JSON file (default: config content_path)")
    parser.add_argument('--config', type=Path,
                        help="Path to navigator.yaml")
    parser.add_argument('--query', '-q', default='',
                        help="Search text (title, description, tags, roadmap)")
    parser.add_argument('--status', '-s', action='append', choices=PROJECT_STATUS_VALUES,
                        help="Allowed status (repeatable, default: config default_statuses)")
    parser.add_argument('--category', '-c',
                        choices=(CATEGORY_ALL,) + PROJECT_CATEGORY_VALUES,
                        help="Category selector (default: config default_category)")
    parser.add_argument('--focus', '-f',
                        help="Isolate the branch around this project title")
    parser.add_argument('--lang', choices=['ja', 'en'],
                        help="Only load projects in this language")
    parser.add_argument('--json', action='store_true',
                        help="Print the filter result and hierarchy as JSON")
    parser.add_argument('--links', action='store_true',
                        help="Also list cross-links between visible projects")
    parser.add_argument('--list-focus', action='store_true',
                        help="Print titles accepted by --focus and exit")
    parser.add_argument('--log-level',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help="Override configured log level")
    return parser


def print_tree(result, roots, filters: NavigatorFilters, show_links: bool):
    print("=" * 60)
    print("Projects Navigator")
    print("=" * 60)
    print(f"Visible: {result.visible_count}/{result.total_count}   "
          f"Matched: {result.matched_count}   "
          f"Primary: {result.primary_matched_count}", end='')
    if filters.focus_title:
        print(f"   Focus nodes: {result.focus_count}", end='')
    print()
    print()

    if not roots:
        print("No projects match current filters.")
        return

    for depth, node in flatten_hierarchy(roots):
        project = node.project
        version = f" v{project.version}" if project.version else ""
        print(f"{'  ' * depth}- {project.title}{version} [{project.status}]")

    if show_links:
        edges = linked_edges(result.visible_projects)
        print()
        print(f"Linked edges: {len(edges)}")
        for source, target in edges:
            print(f"  {source} -> {target}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = get_config(args.config)
        setup_logging(level=args.log_level or config.log_level, json_format=config.json_logs)

        content = args.content or config.content_path
        if content is None:
            print("Error: no content path given and none configured", file=sys.stderr)
            return 2

        projects = load_projects(
            content,
            strict_status=config.strict_status,
            lang=args.lang or config.lang,
        )
    except NavigatorError as e:
        logger.error(f"{e.error_type}: {e.message}", extra={'details': e.details})
        print(json.dumps(e.to_dict(), ensure_ascii=False), file=sys.stderr)
        return 1

    if args.list_focus:
        for title in focus_options(projects):
            print(title)
        return 0

    filters = NavigatorFilters(
        query=args.query,
        statuses=frozenset(args.status) if args.status else config.default_statuses,
        category=args.category or config.default_category,
        focus_title=args.focus,
    )
    if not has_active_filters(filters):
        logger.debug("No active filters; showing the full collection")

    result = filter_projects_for_navigator(projects, filters)
    roots = build_project_hierarchy(result.visible_projects)

    if args.json:
        payload = result.to_dict()
        payload['filters'] = filters.to_dict()
        payload['hierarchy'] = [node.to_dict() for node in roots]
        if args.links:
            payload['linkedEdges'] = [list(edge) for edge in linked_edges(result.visible_projects)]
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print_tree(result, roots, filters, args.links)

    return 0


if __name__ == '__main__':
    sys.exit(main())
