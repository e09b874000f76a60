"""Tests for the compiled-in and rule-based migration strategies."""

import pytest

from samples import CONSOLE_CSPROJ, TRACKING_SOURCE, WEB_CSPROJ, WORKER_CSPROJ

from azmigrate.discovery import build_context
from azmigrate.models import MigrationRule
from azmigrate.strategies import (
    AspNetCoreMigrationStrategy,
    ConsoleMigrationStrategy,
    MigrationStrategy,
    RuleBasedMigrationStrategy,
    WorkerServiceMigrationStrategy,
    builtin_strategies,
)
from azmigrate.strategies.base import GENERIC_MIGRATION_STEPS, SAMPLE_CONNECTION_STRING


class TestProtocol:
    def test_builtins_satisfy_protocol(self):
        for strategy in builtin_strategies():
            assert isinstance(strategy, MigrationStrategy)

    def test_rule_based_satisfies_protocol(self, functions_rule):
        strategy = RuleBasedMigrationStrategy(MigrationRule.from_dict(functions_rule))
        assert isinstance(strategy, MigrationStrategy)

    def test_builtin_order(self):
        names = [s.app_type_name for s in builtin_strategies()]
        assert names == ["ASP.NET Core", "Console", "Worker Service"]


class TestAspNetCore:
    def test_claims_web_project(self, make_project):
        root = make_project({"Web.csproj": WEB_CSPROJ})
        assert AspNetCoreMigrationStrategy().can_handle(build_context(root))

    def test_ignores_console_project(self, make_project):
        root = make_project({"Tool.csproj": CONSOLE_CSPROJ})
        assert not AspNetCoreMigrationStrategy().can_handle(build_context(root))

    def test_manifest_only_project(self, make_project):
        root = make_project({"Web.csproj": WEB_CSPROJ})
        report = AspNetCoreMigrationStrategy().generate_migration(build_context(root))

        assert report.findings == ["Found Application Insights SDK reference in Web.csproj"]
        assert report.suggestions[0].startswith("Replace all Application Insights SDK packages")
        assert "Use Azure.Monitor.OpenTelemetry.AspNetCore package" in report.suggestions
        assert report.migration_steps == GENERIC_MIGRATION_STEPS

    def test_startup_registration_is_reported(self, make_project):
        root = make_project({
            "Web.csproj": WEB_CSPROJ,
            "Program.cs": "builder.Services.AddApplicationInsightsTelemetry();\n",
        })
        report = AspNetCoreMigrationStrategy().generate_migration(build_context(root))
        assert "Found AddApplicationInsightsTelemetry in Program.cs" in report.findings

    def test_registration_outside_startup_files_is_not_reported(self, make_project):
        root = make_project({
            "Web.csproj": WEB_CSPROJ,
            "Extensions.cs": "services.AddApplicationInsightsTelemetry();\n",
        })
        report = AspNetCoreMigrationStrategy().generate_migration(build_context(root))
        assert not any("AddApplicationInsightsTelemetry in" in f for f in report.findings)

    def test_sample_code_uses_distro(self):
        code = AspNetCoreMigrationStrategy().generate_sample_code()
        assert code.startswith("```csharp")
        assert "UseAzureMonitor" in code
        assert SAMPLE_CONNECTION_STRING in code


class TestConsole:
    def test_claims_exe_project(self, make_project):
        root = make_project({"Tool.csproj": CONSOLE_CSPROJ})
        assert ConsoleMigrationStrategy().can_handle(build_context(root))

    def test_windows_service_is_not_console(self, make_project):
        root = make_project({
            "Svc.csproj": CONSOLE_CSPROJ.replace(
                "</ItemGroup>",
                '<PackageReference Include="Microsoft.Extensions.Hosting.WindowsServices" />\n</ItemGroup>',
            ),
        })
        assert not ConsoleMigrationStrategy().can_handle(build_context(root))

    def test_track_calls_in_source(self, make_project):
        root = make_project({"Tool.csproj": CONSOLE_CSPROJ, "Orders.cs": TRACKING_SOURCE})
        report = ConsoleMigrationStrategy().generate_migration(build_context(root))

        assert "Found TelemetryClient usage in Orders.cs" in report.findings
        assert "Found Microsoft.ApplicationInsights namespace in Orders.cs" in report.findings
        assert "Found Track methods in Orders.cs" in report.findings
        assert "Replace Track methods with OpenTelemetry equivalents" in report.suggestions
        assert "Replace TelemetryClient with ActivitySource for tracking operations" in report.suggestions

    def test_suggestions_are_unique(self, make_project):
        root = make_project({
            "Tool.csproj": CONSOLE_CSPROJ,
            "A.cs": TRACKING_SOURCE,
            "B.cs": TRACKING_SOURCE,
        })
        report = ConsoleMigrationStrategy().generate_migration(build_context(root))
        assert len(report.suggestions) == len(set(report.suggestions))
        assert report.findings.count("Found Track methods in A.cs") == 1
        assert "Found Track methods in B.cs" in report.findings


class TestWorkerService:
    def test_claims_windows_service_project(self, make_project):
        root = make_project({"Svc.csproj": WORKER_CSPROJ})
        assert WorkerServiceMigrationStrategy().can_handle(build_context(root))

    def test_claims_hosted_service_source(self, make_project):
        root = make_project({"Worker.cs": "public class Worker : IHostedService { }\n"})
        assert WorkerServiceMigrationStrategy().can_handle(build_context(root))

    def test_background_service_in_web_app_is_ignored(self, make_project):
        root = make_project({
            "Job.cs": "using Microsoft.AspNetCore.Builder;\nclass Job : BackgroundService { }\n",
        })
        assert not WorkerServiceMigrationStrategy().can_handle(build_context(root))

    def test_worker_suggestions_follow_scan_suggestions(self, make_project):
        root = make_project({"Svc.csproj": WORKER_CSPROJ})
        report = WorkerServiceMigrationStrategy().generate_migration(build_context(root))
        assert report.suggestions[-1] == "Use ActivitySource in your BackgroundService implementations"


class TestRuleBased:
    @pytest.fixture
    def strategy(self, functions_rule):
        return RuleBasedMigrationStrategy(MigrationRule.from_dict(functions_rule))

    def test_rejects_missing_rule(self):
        with pytest.raises(TypeError):
            RuleBasedMigrationStrategy(None)

    def test_name_and_sample_code_come_from_rule(self, strategy):
        assert strategy.app_type_name == "Azure Functions"
        assert strategy.generate_sample_code() == strategy.rule.sample_code

    def test_can_handle_project_pattern(self, strategy, make_project):
        root = make_project({"Fn.csproj": '<PackageReference Include="Microsoft.NET.Sdk.Functions" />'})
        assert strategy.can_handle(build_context(root))

    def test_pattern_only_looks_at_its_file_type(self, strategy, make_project):
        root = make_project({"Note.cs": "// Microsoft.NET.Sdk.Functions"})
        assert not strategy.can_handle(build_context(root))

    def test_other_file_type_never_matches(self, make_project):
        rule = MigrationRule.from_dict({
            "appType": "Config",
            "detectionPatterns": [{"fileType": "json", "pattern": "{"}],
        })
        root = make_project({"App.csproj": "{", "appsettings.json": "{"})
        assert not RuleBasedMigrationStrategy(rule).can_handle(build_context(root))

    def test_regex_pattern_with_file_name(self, make_project):
        rule = MigrationRule.from_dict({
            "appType": "Startup Only",
            "detectionPatterns": [
                {"fileType": "cs", "pattern": r"Add\w+Telemetry\(", "isRegex": True, "fileName": "Startup.cs"},
            ],
        })
        strategy = RuleBasedMigrationStrategy(rule)
        assert not strategy.can_handle(build_context(make_project(
            {"Other.cs": "AddApplicationInsightsTelemetry()"}, name="a")))
        assert strategy.can_handle(build_context(make_project(
            {"Startup.cs": "AddApplicationInsightsTelemetry()"}, name="b")))

    def test_generate_migration(self, strategy, make_project):
        root = make_project({
            "Fn.csproj": "Microsoft.NET.Sdk.Functions Microsoft.ApplicationInsights",
            "Fn.cs": "TelemetryClient client;",
        })
        report = strategy.generate_migration(build_context(root))

        assert report.findings == [
            "Found 'Microsoft.ApplicationInsights' in Fn.csproj",
            "Found 'TelemetryClient' in Fn.cs",
        ]
        assert report.suggestions == [
            "Use Microsoft.Azure.Functions.Worker.OpenTelemetry",
            "Remove APPINSIGHTS_INSTRUMENTATIONKEY from app settings",
        ]
        assert report.migration_steps == "1. Add the worker package\n\n2. Call UseAzureMonitor()"
        assert report.sample_code == strategy.rule.sample_code
