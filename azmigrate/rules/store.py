"""Loading and saving migration rule files.

Rule files are YAML documents, one rule per file. Files with a
.json suffix are read and written as JSON instead.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

import yaml

from azmigrate.errors import RuleFileNotFoundError, RuleParseError, RuleSaveError
from azmigrate.models import DetectionPattern, FileCategory, MigrationRule

logger = logging.getLogger("azmigrate.rules")

RULE_FILE_SUFFIXES = (".yaml", ".yml", ".json")
DEFAULT_RULE_SUFFIX = ".yaml"


def is_rule_file_name(name: str) -> bool:
    return name.lower().endswith(RULE_FILE_SUFFIXES)


def safe_rule_file_name(app_type: str) -> str:
    """Derive a rule file name from an app type, e.g. "Azure Functions" -> "azure_functions.yaml"."""
    return re.sub(r"[^\w\-]", "_", app_type.lower()) + DEFAULT_RULE_SUFFIX


def template_rule(app_type: str) -> MigrationRule:
    """A starter rule for a custom archetype, meant to be edited by hand."""
    return MigrationRule(
        app_type=app_type,
        detection_patterns=(
            DetectionPattern(
                file_type=FileCategory.PROJECT,
                pattern="YourDetectionPattern",
                is_regex=False,
            ),
        ),
        app_insights_indicators=("Microsoft.ApplicationInsights", "TelemetryClient"),
        migration_suggestions=(f"Custom migration suggestion for {app_type}",),
        migration_steps=(
            f"1. Migration step 1 for {app_type}",
            f"2. Migration step 2 for {app_type}",
        ),
        sample_code=f"```csharp\n// Sample migration code for {app_type}\n```",
    )


def parse_rule(text: str, source: str = "") -> MigrationRule:
    """Decode rule text; ``source`` names the file and selects JSON by suffix."""
    try:
        if source.lower().endswith(".json"):
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise RuleParseError(f"Failed to parse rule from {source}: {e}", file_path=source) from e
    if data is None:
        raise RuleParseError(f"Failed to parse rule from {source}: empty document", file_path=source)
    return MigrationRule.from_dict(data, source=source)


class RuleStore:
    """Reads and writes rule files in a single directory."""

    def __init__(self, rules_dir: Path):
        self.rules_dir = Path(rules_dir)

    def rule_files(self) -> list[Path]:
        if not self.rules_dir.is_dir():
            return []
        return sorted(
            p for p in self.rules_dir.iterdir()
            if p.is_file() and is_rule_file_name(p.name)
        )

    def load_all(self) -> list[MigrationRule]:
        """Load every rule in the directory, skipping files that fail to parse."""
        rules: list[MigrationRule] = []
        for path in self.rule_files():
            try:
                rules.append(self.load_one(path))
            except (RuleParseError, OSError) as e:
                logger.warning("Error loading rule from %s: %s", path, e)
        logger.debug("Loaded %d rules from %s", len(rules), self.rules_dir)
        return rules

    def load_one(self, path: Path) -> MigrationRule:
        """Load a single rule file.

        Raises:
            RuleFileNotFoundError: If the file does not exist.
            RuleParseError: If the content is not a valid rule.
        """
        path = Path(path)
        if not path.is_file():
            raise RuleFileNotFoundError(str(path))
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise RuleParseError(f"Rule file {path} is not UTF-8 text: {e}", file_path=str(path)) from e
        return parse_rule(text, source=str(path))

    def save(self, rule: MigrationRule, file_name: str) -> Path:
        """Write a rule into the rules directory, replacing any existing file.

        Raises:
            RuleSaveError: If the directory or file cannot be written.
        """
        path = self.rules_dir / Path(file_name).name
        try:
            self.rules_dir.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                if path.suffix.lower() == ".json":
                    json.dump(rule.to_dict(), f, indent=2, ensure_ascii=False)
                else:
                    yaml.safe_dump(
                        rule.to_dict(),
                        f,
                        default_flow_style=False,
                        sort_keys=False,
                        allow_unicode=True,
                    )
        except OSError as e:
            raise RuleSaveError(str(e), file_path=str(path)) from e
        logger.info("Rule '%s' saved to %s", rule.app_type, path)
        return path
