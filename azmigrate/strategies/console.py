"""Console (headless executable) archetype."""

from __future__ import annotations

from azmigrate.detection import read_text
from azmigrate.models import ProjectAnalysisContext

from .base import SAMPLE_CONNECTION_STRING, BaseMigrationStrategy

SAMPLE_CODE = f"""```csharp
// Program.cs
using OpenTelemetry;
using OpenTelemetry.Resources;
using OpenTelemetry.Trace;
using Azure.Monitor.OpenTelemetry.Exporter;
using System.Diagnostics;

// Define your ActivitySource
var myActivitySource = new ActivitySource("MyCompany.MyApp");

// Configure OpenTelemetry
using var tracerProvider = Sdk.CreateTracerProviderBuilder()
    .SetResourceBuilder(ResourceBuilder.CreateDefault().AddService("MyServiceName"))
    .AddSource(myActivitySource.Name)
    .AddAzureMonitorTraceExporter(options => {{
        options.ConnectionString = "{SAMPLE_CONNECTION_STRING}";
    }})
    .Build();

// Your application code
using (var activity = myActivitySource.StartActivity("SampleOperation"))
{{
    activity?.SetTag("customDimension", "value");
    // Your code here
}}
```"""


def _is_console_project(content: str) -> bool:
    return (
        "<OutputType>Exe</OutputType>" in content
        and "Microsoft.AspNetCore" not in content
        and "Microsoft.Extensions.Hosting.WindowsServices" not in content
    )


class ConsoleMigrationStrategy(BaseMigrationStrategy):
    app_type_name = "Console"
    suggestions = (
        "Use the OpenTelemetry SDK with Azure.Monitor.OpenTelemetry.Exporter package",
        "Initialize OpenTelemetry with TracerProvider in your Program.cs",
    )

    def can_handle(self, context: ProjectAnalysisContext) -> bool:
        return any(_is_console_project(read_text(path)) for path in context.project_files)

    def generate_sample_code(self) -> str:
        return SAMPLE_CODE
