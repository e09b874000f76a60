"""ASP.NET Core web application archetype."""

from __future__ import annotations

from azmigrate.detection import contains_any, read_text
from azmigrate.models import ProjectAnalysisContext

from .base import SAMPLE_CONNECTION_STRING, BaseMigrationStrategy

ASPNETCORE_MARKERS = (
    "Microsoft.AspNetCore.App",
    "Microsoft.AspNetCore.Mvc",
    "<TargetFramework>net",
)

SAMPLE_CODE = f"""```csharp
// Program.cs
using Azure.Monitor.OpenTelemetry.AspNetCore;

var builder = WebApplication.CreateBuilder(args);

// Add Azure Monitor OpenTelemetry
builder.Services.AddOpenTelemetry().UseAzureMonitor(options => {{
    // Connection string can be specified in code, appsettings.json, or environment variables
    options.ConnectionString = "{SAMPLE_CONNECTION_STRING}";
}});

// Sample for custom operations tracking
using System.Diagnostics;

public class MyService {{
    private readonly ActivitySource _activitySource = new ActivitySource("MyCompany.MyApp");

    public void DoSomething() {{
        // Start a new activity (replaces TelemetryClient.StartOperation)
        using var activity = _activitySource.StartActivity("CustomOperation");
        activity?.SetTag("customProperty", "value");

        // Your code here

        // Activity stops automatically when disposed
    }}
}}
```"""


class AspNetCoreMigrationStrategy(BaseMigrationStrategy):
    """Web apps hosted on ASP.NET Core.

    Also the fallback archetype when nothing else matches.
    """

    app_type_name = "ASP.NET Core"
    suggestions = (
        "Replace AddApplicationInsightsTelemetry() with AddOpenTelemetry().UseAzureMonitor()",
        "Use Azure.Monitor.OpenTelemetry.AspNetCore package",
    )

    def can_handle(self, context: ProjectAnalysisContext) -> bool:
        return any(contains_any(read_text(path), ASPNETCORE_MARKERS) for path in context.project_files)

    def generate_sample_code(self) -> str:
        return SAMPLE_CODE
