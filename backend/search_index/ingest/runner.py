from __future__ import annotations
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from ..config import PROJECT_ROOT, resolve_paths
from ..indexing.indexer import run
from ..utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the project search index (data/search/search_index.json)")
    parser.add_argument("--root", default=str(PROJECT_ROOT), help="Base directory holding data/")
    parser.add_argument("--projects-dir", default=None, help="Override data/projects")
    parser.add_argument("--out", default=None, help="Override data/search/search_index.json")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only report warnings and errors")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING if args.quiet else logging.INFO)

    projects_dir, index_path = resolve_paths(Path(args.root))
    if args.projects_dir:
        projects_dir = Path(args.projects_dir)
    if args.out:
        index_path = Path(args.out)

    try:
        run(projects_dir, index_path)
    except OSError as e:
        logger.error("Cannot write index to %s: %s", index_path, e)
        return 1
    return 0
