"""Text and regex matching primitives shared by every migration strategy.

Detection is deliberately shallow: substring containment or a regex search
over the full text of a file. Nothing here parses C#.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from functools import lru_cache
from pathlib import Path

from .models import DetectionPattern, ProjectAnalysisContext

logger = logging.getLogger("azmigrate.detection")

# Calls such as telemetry.TrackEvent("x") or client.TrackPageView(...)
TRACK_METHOD_RE = re.compile(r"\.Track(Event|Exception|Request|Dependency|Metric|Trace|PageView)\(")

# Package references that mark a project as using the classic SDK
SDK_PACKAGE_MARKERS: tuple[str, ...] = (
    "Microsoft.ApplicationInsights",
    "ApplicationInsights.AspNetCore",
)

# Source-level markers of SDK usage (in addition to TRACK_METHOD_RE)
SDK_SOURCE_MARKERS: tuple[str, ...] = (
    "Microsoft.ApplicationInsights",
    "TelemetryClient",
    "ApplicationInsightsServiceOptions",
    "AddApplicationInsightsTelemetry",
)


def read_text(path: Path) -> str:
    """Read a file as text, returning "" if it cannot be read."""
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("Failed to read %s: %s", path, e)
        return ""


def contains_any(content: str, needles: Iterable[str]) -> bool:
    return any(needle in content for needle in needles)


def has_track_calls(content: str) -> bool:
    return TRACK_METHOD_RE.search(content) is not None


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern | None:
    try:
        return re.compile(pattern)
    except re.error as e:
        logger.warning("Invalid detection regex %r: %s", pattern, e)
        return None


def content_matches(content: str, pattern: str, is_regex: bool = False) -> bool:
    """Substring containment, or a regex search when ``is_regex`` is set."""
    if not is_regex:
        return pattern in content
    compiled = _compile(pattern)
    return compiled is not None and compiled.search(content) is not None


def wildcard_to_regex(glob: str) -> str:
    """Translate a ``*``/``?`` file-name glob into an anchored regex."""
    return "^" + re.escape(glob).replace(r"\*", ".*").replace(r"\?", ".") + "$"


def file_name_matches(path: Path, glob: str) -> bool:
    if not glob:
        return True
    return re.match(wildcard_to_regex(glob), Path(path).name) is not None


def any_file_matches(files: Iterable[Path], pattern: DetectionPattern) -> bool:
    """True if any eligible file's content satisfies the pattern."""
    for path in files:
        if not file_name_matches(path, pattern.file_name):
            continue
        if content_matches(read_text(path), pattern.pattern, pattern.is_regex):
            return True
    return False


def scan_indicators(context: ProjectAnalysisContext, indicators: Iterable[str]) -> list[str]:
    """Record where each indicator string occurs.

    Project files are scanned first and every matching one is recorded.
    Source files are only consulted for indicators no project file
    contains, and only the first matching source file is recorded.
    """
    findings: list[str] = []
    for indicator in indicators:
        found = False
        for path in context.project_files:
            if indicator in read_text(path):
                findings.append(f"Found '{indicator}' in {Path(path).name}")
                found = True
        if found:
            continue
        for path in context.source_files:
            if indicator in read_text(path):
                findings.append(f"Found '{indicator}' in {Path(path).name}")
                break
    return findings
