"""Migration strategy protocol and the shared base for compiled-in strategies."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from azmigrate.detection import (
    SDK_PACKAGE_MARKERS,
    contains_any,
    has_track_calls,
    read_text,
)
from azmigrate.models import MigrationReport, ProjectAnalysisContext

# Files where the SDK is usually wired into the host
STARTUP_FILE_NAMES = {"startup.cs", "program.cs"}

GENERIC_MIGRATION_STEPS = "\n".join([
    "1. Add the Azure Monitor OpenTelemetry package appropriate for your app type",
    "   - For ASP.NET Core: Azure.Monitor.OpenTelemetry.AspNetCore",
    "   - For ASP.NET, console, WorkerService: Azure.Monitor.OpenTelemetry.Exporter",
    "",
    "2. In your Program.cs file, add and configure OpenTelemetry with Azure Monitor:",
    "   - Import the Azure.Monitor.OpenTelemetry namespace",
    "   - Call services.AddOpenTelemetry().UseAzureMonitor()",
    "",
    "3. For custom operations tracking, replace TelemetryClient with ActivitySource:",
    "   - Create a new ActivitySource",
    "   - Use StartActivity() instead of StartOperation()",
    "",
    "4. Be aware that by March 31, 2025, support for instrumentation key ingestion "
    "will end. You should transition to connection strings.",
    "",
])

# Connection string used in every canned sample
SAMPLE_CONNECTION_STRING = (
    "InstrumentationKey=00000000-0000-0000-0000-000000000000;"
    "IngestionEndpoint=https://regionname.in.applicationinsights.azure.com/"
)


@runtime_checkable
class MigrationStrategy(Protocol):
    """Protocol that all migration strategies must satisfy."""

    @property
    def app_type_name(self) -> str: ...

    def can_handle(self, context: ProjectAnalysisContext) -> bool: ...
    def generate_migration(self, context: ProjectAnalysisContext) -> MigrationReport: ...
    def generate_sample_code(self) -> str: ...


class BaseMigrationStrategy:
    """Generic SDK detection shared by the compiled-in archetypes.

    Subclasses supply the archetype heuristic, extra suggestions and the
    sample code; the scan and the step checklist are common.
    """

    app_type_name: str = ""
    suggestions: tuple[str, ...] = ()

    def can_handle(self, context: ProjectAnalysisContext) -> bool:
        raise NotImplementedError

    def generate_sample_code(self) -> str:
        raise NotImplementedError

    def generate_migration(self, context: ProjectAnalysisContext) -> MigrationReport:
        report = MigrationReport()
        self._analyze_project_files(context, report)
        self._analyze_source_files(context, report)
        report.suggestions.extend(self.suggestions)
        report.deduplicate_suggestions()
        report.migration_steps = GENERIC_MIGRATION_STEPS
        report.sample_code = self.generate_sample_code()
        return report

    def _analyze_project_files(self, context: ProjectAnalysisContext, report: MigrationReport) -> None:
        for path in context.project_files:
            if contains_any(read_text(path), SDK_PACKAGE_MARKERS):
                report.findings.append(f"Found Application Insights SDK reference in {Path(path).name}")
                report.suggestions.append(
                    "Replace all Application Insights SDK packages with latest version "
                    "of Azure.Monitor.OpenTelemetry.AspNetCore package"
                )

    def _analyze_source_files(self, context: ProjectAnalysisContext, report: MigrationReport) -> None:
        for path in context.source_files:
            name = Path(path).name
            content = read_text(path)

            if "TelemetryClient" in content:
                report.findings.append(f"Found TelemetryClient usage in {name}")
                report.suggestions.append("Replace TelemetryClient with ActivitySource for tracking operations")

            if "Microsoft.ApplicationInsights" in content:
                report.findings.append(f"Found Microsoft.ApplicationInsights namespace in {name}")

            if has_track_calls(content):
                report.findings.append(f"Found Track methods in {name}")
                report.suggestions.append("Replace Track methods with OpenTelemetry equivalents")

            if name.lower() in STARTUP_FILE_NAMES and "AddApplicationInsightsTelemetry" in content:
                report.findings.append(f"Found AddApplicationInsightsTelemetry in {name}")
                report.suggestions.append(
                    "Replace AddApplicationInsightsTelemetry with AddOpenTelemetry().UseAzureMonitor()"
                )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(app_type_name={self.app_type_name!r})"
