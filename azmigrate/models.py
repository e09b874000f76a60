"""Core data models for azmigrate."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .errors import RuleParseError

NO_USAGE_MESSAGE = "No Application Insights SDK usage detected in the provided project path."


class FileCategory(str, Enum):
    """Which file list a detection pattern is evaluated against."""

    PROJECT = "csproj"
    SOURCE = "cs"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> FileCategory:
        value = (value or "").strip().lower().lstrip(".")
        for member in cls:
            if member.value == value:
                return member
        return cls.OTHER


def _lower_keys(d: dict) -> dict:
    """Normalize mapping keys so rule files are read case-insensitively."""
    return {str(k).replace("_", "").lower(): v for k, v in d.items()}


def _str_list(data: dict, key: str, source: str) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise RuleParseError(f"Field '{key}' must be a list of strings", file_path=source)
    return tuple(value)


def _optional_str(data: dict, key: str, source: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise RuleParseError(f"Field '{key}' must be a string", file_path=source)
    return value


# ── Rule Models ──
@dataclass(frozen=True)
class DetectionPattern:
    file_type: FileCategory
    pattern: str
    is_regex: bool = False
    file_name: str = ""  # optional glob, e.g. "Program.cs" or "*.csproj"

    @classmethod
    def from_dict(cls, d: dict, source: str = "") -> DetectionPattern:
        if not isinstance(d, dict):
            raise RuleParseError("Detection pattern must be a mapping", file_path=source)
        data = _lower_keys(d)

        is_regex = data.get("isregex")
        if is_regex is None:
            is_regex = False
        elif not isinstance(is_regex, bool):
            raise RuleParseError("Detection pattern 'isRegex' must be true or false", file_path=source)

        return cls(
            file_type=FileCategory.parse(_optional_str(data, "filetype", source)),
            pattern=_optional_str(data, "pattern", source),
            is_regex=is_regex,
            file_name=_optional_str(data, "filename", source),
        )

    def to_dict(self) -> dict:
        return {
            "fileType": self.file_type.value,
            "pattern": self.pattern,
            "isRegex": self.is_regex,
            "fileName": self.file_name,
        }


@dataclass(frozen=True)
class MigrationRule:
    """Detection patterns and migration content for one application archetype."""

    app_type: str
    detection_patterns: tuple[DetectionPattern, ...] = ()
    app_insights_indicators: tuple[str, ...] = ()
    migration_suggestions: tuple[str, ...] = ()
    migration_steps: tuple[str, ...] = ()
    sample_code: str = ""

    @classmethod
    def from_dict(cls, d: object, source: str = "") -> MigrationRule:
        if not isinstance(d, dict):
            raise RuleParseError("Rule definition must be a mapping", file_path=source)
        data = _lower_keys(d)

        app_type = data.get("apptype")
        if not isinstance(app_type, str) or not app_type.strip():
            raise RuleParseError("Rule definition must have an 'appType' field", file_path=source)

        patterns = data.get("detectionpatterns") or []
        if not isinstance(patterns, list):
            raise RuleParseError("Field 'detectionPatterns' must be a list", file_path=source)

        sample_code = data.get("samplecode") or ""
        if not isinstance(sample_code, str):
            raise RuleParseError("Field 'sampleCode' must be a string", file_path=source)

        return cls(
            app_type=app_type,
            detection_patterns=tuple(DetectionPattern.from_dict(p, source) for p in patterns),
            app_insights_indicators=_str_list(data, "appinsightsindicators", source),
            migration_suggestions=_str_list(data, "migrationsuggestions", source),
            migration_steps=_str_list(data, "migrationsteps", source),
            sample_code=sample_code,
        )

    def to_dict(self) -> dict:
        return {
            "appType": self.app_type,
            "detectionPatterns": [p.to_dict() for p in self.detection_patterns],
            "appInsightsIndicators": list(self.app_insights_indicators),
            "migrationSuggestions": list(self.migration_suggestions),
            "migrationSteps": list(self.migration_steps),
            "sampleCode": self.sample_code,
        }


# ── Analysis Models ──
@dataclass(frozen=True)
class ProjectAnalysisContext:
    """Files found under a project root. Read-only input to every strategy."""

    project_path: Path
    project_files: tuple[Path, ...] = ()
    source_files: tuple[Path, ...] = ()

    def files_for(self, category: FileCategory) -> tuple[Path, ...]:
        if category is FileCategory.PROJECT:
            return self.project_files
        if category is FileCategory.SOURCE:
            return self.source_files
        return ()


@dataclass
class MigrationReport:
    """Findings, suggestions, steps and sample code for one analysis run."""

    findings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    migration_steps: str = ""
    sample_code: str = ""

    @property
    def has_app_insights_references(self) -> bool:
        return len(self.findings) > 0

    def deduplicate_suggestions(self) -> None:
        """Drop repeated suggestions, keeping the first occurrence of each."""
        self.suggestions = list(dict.fromkeys(self.suggestions))

    def render(self) -> str:
        if not self.findings:
            return NO_USAGE_MESSAGE

        lines = ["## Application Insights SDK Detection Results", ""]

        lines.append("### Findings:")
        lines.extend(f"- {finding}" for finding in self.findings)

        lines.extend(["", "### Migration Suggestions:"])
        lines.extend(f"- {suggestion}" for suggestion in self.suggestions)

        lines.extend(["", "### Migration Steps:", self.migration_steps])

        if self.sample_code:
            lines.extend(["", "### Sample Code:", self.sample_code])

        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()
