"""azmigrate: Application Insights SDK to Azure Monitor OpenTelemetry migration assistant."""

__version__ = "0.1.0"
