"""Shared fixtures for azmigrate tests."""
import textwrap

import pytest
import yaml
from pathlib import Path


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep every test away from the real home directory and config files.

    HOME points at a temp directory, the working directory is a fresh
    temp directory (no .azmigrate.toml), and AZMIGRATE_RULES_DIR points
    at an empty rules directory.
    """
    home = tmp_path / "home"
    home.mkdir()
    workdir = tmp_path / "work"
    workdir.mkdir()
    rules = tmp_path / "rules"
    rules.mkdir()

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.setenv("AZMIGRATE_RULES_DIR", str(rules))
    monkeypatch.setenv("AZMIGRATE_PLUGINS", "false")
    for var in ("AZMIGRATE_DEFAULT_APP_TYPE", "AZMIGRATE_PLAIN", "AZMIGRATE_DEBUG"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(workdir)

    from azmigrate.core.config_service import reset_config_service
    from azmigrate.mcp.server import reset_service
    from azmigrate import ui

    reset_config_service()
    reset_service()
    yield home
    reset_config_service()
    reset_service()
    ui.set_plain_mode(False)


@pytest.fixture
def rules_dir(tmp_path):
    """The rules directory AZMIGRATE_RULES_DIR points at."""
    return tmp_path / "rules"


@pytest.fixture
def make_project(tmp_path):
    """Factory that writes a project tree from a {relative path: content} dict."""
    def _make(files: dict, name: str = "project") -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content))
        return root
    return _make


@pytest.fixture
def write_rule(rules_dir):
    """Factory that writes a rule dict as YAML into the rules directory."""
    def _write(data: dict, file_name: str) -> Path:
        path = rules_dir / file_name
        with open(path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        return path
    return _write


@pytest.fixture
def functions_rule():
    """A data-driven rule for Azure Functions projects."""
    return {
        "appType": "Azure Functions",
        "detectionPatterns": [
            {"fileType": "csproj", "pattern": "Microsoft.NET.Sdk.Functions", "isRegex": False},
        ],
        "appInsightsIndicators": ["Microsoft.ApplicationInsights", "TelemetryClient"],
        "migrationSuggestions": [
            "Use Microsoft.Azure.Functions.Worker.OpenTelemetry",
            "Remove APPINSIGHTS_INSTRUMENTATIONKEY from app settings",
            "Use Microsoft.Azure.Functions.Worker.OpenTelemetry",
        ],
        "migrationSteps": ["1. Add the worker package", "2. Call UseAzureMonitor()"],
        "sampleCode": "```csharp\n// Functions sample\n```",
    }


