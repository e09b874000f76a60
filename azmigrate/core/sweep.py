"""Quick presence check for Application Insights SDK references.

Independent of the strategy machinery: it only answers "is the SDK used
here?" and names up to MAX_LISTED_FILES files where it is.
"""

from __future__ import annotations

import logging
from pathlib import Path

from azmigrate.detection import (
    SDK_PACKAGE_MARKERS,
    SDK_SOURCE_MARKERS,
    contains_any,
    has_track_calls,
    read_text,
)
from azmigrate.discovery import (
    PROJECT_FILE_PATTERN,
    PROPERTIES_FILE_PATTERNS,
    SOURCE_FILE_PATTERN,
    find_files,
)

logger = logging.getLogger("azmigrate.sweep")

MAX_LISTED_FILES = 10
TRUNCATION_MARKER = f"... and more (limited to first {MAX_LISTED_FILES} findings)"

PROJECT_FILE_SUFFIXES = {".csproj", ".properties", ".props", ".targets"}
PROPERTIES_MARKERS = ("ApplicationInsights", "InstrumentationKey", "APPINSIGHTS_")


def _source_uses_sdk(content: str) -> bool:
    return contains_any(content, SDK_SOURCE_MARKERS) or has_track_calls(content)


def check_file(path: Path) -> str:
    """Check a single project, properties or C# file."""
    suffix = path.suffix.lower()
    content = read_text(path)

    if suffix in PROJECT_FILE_SUFFIXES and contains_any(content, SDK_PACKAGE_MARKERS):
        return (
            "Application Insights SDK detected in the project file. "
            "Migration to Azure Monitor OpenTelemetry Distro is recommended."
        )
    if suffix == ".cs" and _source_uses_sdk(content):
        return (
            "Application Insights SDK usage detected in the C# file. "
            "Migration to Azure Monitor OpenTelemetry Distro is recommended."
        )
    return f"No Application Insights SDK usage detected in the {suffix} file."


def sweep_directory(root: Path) -> list[str]:
    """List files referencing the SDK: project files, then C# files, then properties files.

    At most MAX_LISTED_FILES entries are returned, followed by
    TRUNCATION_MARKER when the cap is reached.
    """
    hits: list[str] = []
    categories = (
        ("Project file", (PROJECT_FILE_PATTERN,), lambda c: contains_any(c, SDK_PACKAGE_MARKERS)),
        ("C# file", (SOURCE_FILE_PATTERN,), _source_uses_sdk),
        ("Properties file", PROPERTIES_FILE_PATTERNS, lambda c: contains_any(c, PROPERTIES_MARKERS)),
    )
    for label, patterns, uses_sdk in categories:
        for pattern in patterns:
            for path in find_files(root, pattern):
                if not uses_sdk(read_text(path)):
                    continue
                hits.append(f"{label}: {path.name}")
                if len(hits) >= MAX_LISTED_FILES:
                    logger.debug("Sweep of %s stopped at %d files", root, MAX_LISTED_FILES)
                    return hits + [TRUNCATION_MARKER]
    return hits


def check_directory(root: Path) -> str:
    hits = sweep_directory(root)
    if not hits:
        return "No Application Insights SDK usage detected in the directory."
    return (
        "Application Insights SDK usage detected in the directory.\n"
        "Files with Application Insights references:\n- "
        + "\n- ".join(hits)
        + "\n\nRun the analyze_project tool for detailed findings and migration suggestions."
    )


def check_for_app_insights(path: str | Path) -> str:
    """Check a file or directory for SDK references and describe the result."""
    target = Path(path)
    if target.is_file():
        return check_file(target)
    if target.is_dir():
        return check_directory(target)
    return f"Error: The file or directory {path} does not exist."
