"""Strategy driven entirely by a migration rule file."""

from __future__ import annotations

from azmigrate.detection import any_file_matches, scan_indicators
from azmigrate.models import MigrationReport, MigrationRule, ProjectAnalysisContext


class RuleBasedMigrationStrategy:
    """Wraps one immutable MigrationRule.

    The project matches when any detection pattern matches a file in the
    list its file type selects. Patterns for other file types never match.
    """

    def __init__(self, rule: MigrationRule):
        if rule is None:
            raise TypeError("rule must not be None")
        self._rule = rule

    @property
    def rule(self) -> MigrationRule:
        return self._rule

    @property
    def app_type_name(self) -> str:
        return self._rule.app_type

    def can_handle(self, context: ProjectAnalysisContext) -> bool:
        return any(
            any_file_matches(context.files_for(pattern.file_type), pattern)
            for pattern in self._rule.detection_patterns
        )

    def generate_sample_code(self) -> str:
        return self._rule.sample_code

    def generate_migration(self, context: ProjectAnalysisContext) -> MigrationReport:
        report = MigrationReport(
            findings=scan_indicators(context, self._rule.app_insights_indicators),
            suggestions=list(self._rule.migration_suggestions),
            migration_steps="\n\n".join(self._rule.migration_steps),
            sample_code=self._rule.sample_code,
        )
        report.deduplicate_suggestions()
        return report

    def __repr__(self) -> str:
        return f"RuleBasedMigrationStrategy(app_type_name={self.app_type_name!r})"
