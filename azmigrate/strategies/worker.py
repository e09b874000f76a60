"""Worker Service (long-running hosted service) archetype."""

from __future__ import annotations

from azmigrate.detection import read_text
from azmigrate.models import ProjectAnalysisContext

from .base import SAMPLE_CONNECTION_STRING, BaseMigrationStrategy

SAMPLE_CODE = f"""```csharp
// Program.cs
using Microsoft.Extensions.Hosting;
using Microsoft.Extensions.DependencyInjection;
using Azure.Monitor.OpenTelemetry.Exporter;
using OpenTelemetry;
using OpenTelemetry.Trace;
using OpenTelemetry.Resources;
using System.Diagnostics;

var builder = Host.CreateApplicationBuilder(args);

// Register your worker services
builder.Services.AddHostedService<Worker>();

// Add Azure Monitor OpenTelemetry
builder.Services.AddOpenTelemetry()
    .WithTracing(builder => builder
        .SetResourceBuilder(ResourceBuilder.CreateDefault().AddService("MyWorkerService"))
        .AddSource("MyWorkerService")
        .AddAzureMonitorTraceExporter(options => {{
            options.ConnectionString = "{SAMPLE_CONNECTION_STRING}";
        }}));

var host = builder.Build();
await host.RunAsync();

// Worker.cs
public class Worker : BackgroundService
{{
    private readonly ActivitySource _activitySource;
    private readonly ILogger<Worker> _logger;

    public Worker(ILogger<Worker> logger)
    {{
        _logger = logger;
        _activitySource = new ActivitySource("MyWorkerService");
    }}

    protected override async Task ExecuteAsync(CancellationToken stoppingToken)
    {{
        while (!stoppingToken.IsCancellationRequested)
        {{
            using (var activity = _activitySource.StartActivity("WorkerOperation"))
            {{
                activity?.SetTag("executionTime", DateTime.UtcNow);
                _logger.LogInformation("Worker running at: {{time}}", DateTimeOffset.Now);

                try
                {{
                    // Do work here
                    await Task.Delay(1000, stoppingToken);
                }}
                catch (Exception ex)
                {{
                    activity?.SetStatus(ActivityStatusCode.Error, ex.Message);
                    activity?.RecordException(ex);
                    _logger.LogError(ex, "Error executing worker task");
                }}
            }}
        }}
    }}
}}
```"""


def _is_windows_service_project(content: str) -> bool:
    return "Microsoft.Extensions.Hosting" in content and "Microsoft.Extensions.Hosting.WindowsServices" in content


def _has_hosted_service(content: str) -> bool:
    # A BackgroundService in an ASP.NET Core file belongs to the web app
    return "IHostedService" in content or (
        "BackgroundService" in content and "Microsoft.AspNetCore" not in content
    )


class WorkerServiceMigrationStrategy(BaseMigrationStrategy):
    app_type_name = "Worker Service"
    suggestions = (
        "Use Azure.Monitor.OpenTelemetry.Exporter package for Worker Services",
        "Configure OpenTelemetry in Program.cs with AddOpenTelemetry().WithTracing()",
        "Use ActivitySource in your BackgroundService implementations",
    )

    def can_handle(self, context: ProjectAnalysisContext) -> bool:
        if any(_is_windows_service_project(read_text(path)) for path in context.project_files):
            return True
        return any(_has_hosted_service(read_text(path)) for path in context.source_files)

    def generate_sample_code(self) -> str:
        return SAMPLE_CODE
