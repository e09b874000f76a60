"""Tests for the azmigrate command line."""

import yaml
from typer.testing import CliRunner

from samples import CONSOLE_CSPROJ, TRACKING_SOURCE, WEB_CSPROJ

from azmigrate.cli import app

runner = CliRunner()


class TestAnalyzeCommand:
    def test_reports_findings(self, make_project):
        root = make_project({"Tool.csproj": CONSOLE_CSPROJ, "Orders.cs": TRACKING_SOURCE})
        result = runner.invoke(app, ["--plain", "analyze", str(root)])
        assert result.exit_code == 0
        assert "Detected app type: Console" in result.output
        assert "### Findings:" in result.output
        assert "Found Track methods in Orders.cs" in result.output

    def test_clean_project(self, make_project):
        result = runner.invoke(app, ["--plain", "analyze", str(make_project({}))])
        assert result.exit_code == 0
        assert "No Application Insights SDK usage detected" in result.output

    def test_missing_directory(self, tmp_path):
        result = runner.invoke(app, ["analyze", str(tmp_path / "missing")])
        assert result.exit_code == 2
        assert "Error:" in result.output

    def test_rich_output(self, make_project):
        root = make_project({"Web.csproj": WEB_CSPROJ})
        result = runner.invoke(app, ["analyze", str(root)])
        assert result.exit_code == 0
        assert "ASP.NET Core" in result.output
        assert "Migration Report" in result.output


class TestCheckCommand:
    def test_directory(self, make_project):
        root = make_project({"Web.csproj": WEB_CSPROJ})
        result = runner.invoke(app, ["--plain", "check", str(root)])
        assert result.exit_code == 0
        assert "- Project file: Web.csproj" in result.output

    def test_missing_path(self, tmp_path):
        result = runner.invoke(app, ["--plain", "check", str(tmp_path / "nope")])
        assert result.exit_code == 1
        assert "Error: The file or directory" in result.output


class TestCodeAndTypes:
    def test_code_for_known_type(self):
        result = runner.invoke(app, ["--plain", "code", "worker service"])
        assert result.exit_code == 0
        assert "BackgroundService" in result.output

    def test_code_for_unknown_type(self):
        result = runner.invoke(app, ["code", "NoSuchType"])
        assert result.exit_code == 4
        assert "NoSuchType" in result.output

    def test_types_plain(self, write_rule, functions_rule):
        write_rule(functions_rule, "functions.yaml")
        result = runner.invoke(app, ["--plain", "types"])
        assert result.exit_code == 0
        assert result.output.strip() == (
            "Supported application types for migration: "
            "Azure Functions, ASP.NET Core, Console, Worker Service"
        )

    def test_types_table(self, write_rule, functions_rule):
        write_rule(functions_rule, "functions.yaml")
        result = runner.invoke(app, ["types"])
        assert result.exit_code == 0
        assert "rule file" in result.output
        assert "built-in" in result.output

    def test_rules_dir_option(self, tmp_path, functions_rule):
        custom = tmp_path / "custom-rules"
        custom.mkdir()
        (custom / "fn.yaml").write_text(yaml.safe_dump(functions_rule))
        result = runner.invoke(app, ["--plain", "--rules-dir", str(custom), "types"])
        assert "Azure Functions" in result.output


class TestRuleCommands:
    def test_create_default_location(self, rules_dir):
        result = runner.invoke(app, ["--plain", "rule", "create", "Azure Functions"])
        assert result.exit_code == 0
        assert "Migration rule template created" in result.output
        assert (rules_dir / "azure_functions.yaml").is_file()

    def test_create_custom_path(self, tmp_path):
        target = tmp_path / "out" / "blazor.json"
        result = runner.invoke(app, ["--plain", "rule", "create", "Blazor", "--path", str(target)])
        assert result.exit_code == 0
        assert target.is_file()

    def test_create_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        result = runner.invoke(
            app, ["--plain", "rule", "create", "Blazor", "-p", str(blocker / "x" / "b.yaml")],
        )
        assert result.exit_code == 1
        assert "Error creating migration rule" in result.output

    def test_list(self, write_rule, functions_rule):
        write_rule(functions_rule, "functions.yaml")
        result = runner.invoke(app, ["rule", "list"])
        assert result.exit_code == 0
        assert "functions.yaml" in result.output

    def test_list_empty(self):
        result = runner.invoke(app, ["rule", "list"])
        assert result.exit_code == 0
        assert "No rule files" in result.output

    def test_show(self, write_rule, functions_rule):
        path = write_rule(functions_rule, "functions.yaml")
        result = runner.invoke(app, ["--plain", "rule", "show", str(path)])
        assert result.exit_code == 0
        assert "appType: Azure Functions" in result.output

    def test_show_missing(self, rules_dir):
        result = runner.invoke(app, ["rule", "show", str(rules_dir / "gone.yaml")])
        assert result.exit_code == 2
        assert "Rule file not found" in result.output


class TestConfigCommands:
    def test_init_and_show(self):
        result = runner.invoke(app, ["config", "init"])
        assert result.exit_code == 0
        assert "Created" in result.output

        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "Config Sources" in result.output
        assert "default_app_type" in result.output

    def test_init_twice_fails(self):
        runner.invoke(app, ["config", "init"])
        result = runner.invoke(app, ["config", "init"])
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_set_known_key(self, isolated_env):
        result = runner.invoke(app, ["config", "set", "rules.plugins", "false"])
        assert result.exit_code == 0
        config_file = isolated_env / ".config" / "azmigrate" / "config.toml"
        assert "plugins = false" in config_file.read_text()

    def test_set_unknown_key(self):
        result = runner.invoke(app, ["config", "set", "rules.colour", "blue"])
        assert result.exit_code == 1
        assert "Unknown config key" in result.output
