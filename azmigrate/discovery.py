"""File enumeration for project analysis."""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Iterable
from pathlib import Path

from .models import ProjectAnalysisContext

logger = logging.getLogger("azmigrate.discovery")

# Build output, package caches and VCS metadata never hold project sources
SKIP_DIRS: set[str] = {
    ".git",
    ".hg",
    ".svn",
    ".vs",
    ".idea",
    ".vscode",
    "bin",
    "obj",
    "node_modules",
    "packages",
    "TestResults",
}

PROJECT_FILE_PATTERN = "*.csproj"
SOURCE_FILE_PATTERN = "*.cs"
PROPERTIES_FILE_PATTERNS = ("*.properties", "*.props", "*.targets")


def find_files(root: Path, patterns: str | Iterable[str]) -> list[Path]:
    """Recursively list files under ``root`` whose names match any glob, sorted."""
    if isinstance(patterns, str):
        patterns = (patterns,)
    patterns = tuple(patterns)
    root = Path(root)

    files: list[Path] = []
    for item in sorted(root.rglob("*")):
        if not item.is_file():
            continue
        if set(item.relative_to(root).parts[:-1]) & SKIP_DIRS:
            continue
        if any(fnmatch.fnmatchcase(item.name.lower(), p) for p in patterns):
            files.append(item)
    return files


def build_context(project_path: Path) -> ProjectAnalysisContext:
    """Collect the project and source files under a root directory."""
    project_path = Path(project_path)
    project_files = find_files(project_path, PROJECT_FILE_PATTERN)
    source_files = find_files(project_path, SOURCE_FILE_PATTERN)
    logger.info(
        "Discovered %d project files and %d source files under %s",
        len(project_files), len(source_files), project_path,
    )
    return ProjectAnalysisContext(
        project_path=project_path,
        project_files=tuple(project_files),
        source_files=tuple(source_files),
    )
