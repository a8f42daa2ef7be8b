"""CLI entry point for openapi-analyzer."""

from pathlib import Path

import click
from pydantic import ValidationError

from openapi_analyzer.config import Settings
from openapi_analyzer.errors import AnalysisError
from openapi_analyzer.logs import setup_logging
from openapi_analyzer.server import build_analyzer, run_server

METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH"]


def _settings(ctx: click.Context, **overrides) -> Settings:
    try:
        return ctx.obj.with_overrides(**overrides)
    except ValidationError as e:
        raise click.UsageError(str(e)) from e


def _emit(result: str) -> None:
    """Print a tool result; ``Error:`` results exit with status 1."""
    click.echo(result)
    if result.startswith("Error:"):
        raise SystemExit(1)


@click.group()
@click.option("--log-level", default=None, help="Logging level (default: INFO or OPENAPI_ANALYZER_LOG_LEVEL).")
@click.option("--log-file", default=None, type=click.Path(path_type=Path), help="Also write logs to this file.")
@click.pass_context
def main(ctx: click.Context, log_level: str | None, log_file: Path | None):
    """OpenAPI Analyzer: discover and call REST API endpoints."""
    try:
        settings = Settings.from_env().with_overrides(
            log_level=log_level,
            log_file=str(log_file) if log_file else None,
        )
    except ValidationError as e:
        raise click.UsageError(str(e)) from e
    setup_logging(settings.log_level, settings.log_file)
    ctx.obj = settings


@main.command()
@click.option("--transport", default=None, type=click.Choice(["stdio", "sse", "http"]), help="MCP transport.")
@click.option("--host", default=None, help="Bind address for sse/http transports.")
@click.option("--port", default=None, type=int, help="Port for sse/http transports.")
@click.pass_context
def serve(ctx: click.Context, transport: str | None, host: str | None, port: int | None):
    """Run the MCP server exposing the analyzer tools."""
    settings = _settings(ctx, transport=transport, host=host, port=port)
    run_server(settings)


@main.command()
@click.argument("domain")
@click.option("--spec-file", default=None, type=click.Path(exists=True, path_type=Path), help="Use a local OpenAPI file instead of discovering one.")
@click.pass_context
def spec(ctx: click.Context, domain: str, spec_file: Path | None):
    """Summarize the OpenAPI specification served by DOMAIN."""
    analyzer = build_analyzer(ctx.obj)
    try:
        document = analyzer.locator.load_file(spec_file) if spec_file else None
    except AnalysisError as e:
        _emit(f"Error: {e}")
        return
    _emit(analyzer.get_api_specification(domain, document=document))


@main.command()
@click.argument("domain")
@click.argument("path")
@click.option("-X", "--method", default="GET", type=click.Choice(METHODS, case_sensitive=False), help="HTTP method.")
@click.option("--spec-file", default=None, type=click.Path(exists=True, path_type=Path), help="Use a local OpenAPI file instead of discovering one.")
@click.pass_context
def analyze(ctx: click.Context, domain: str, path: str, method: str, spec_file: Path | None):
    """Describe the parameters and body of METHOD PATH on DOMAIN."""
    analyzer = build_analyzer(ctx.obj)
    try:
        document = analyzer.locator.load_file(spec_file) if spec_file else None
    except AnalysisError as e:
        _emit(f"Error: {e}")
        return
    _emit(analyzer.analyze_endpoint(domain, path, method, document=document))


@main.command()
@click.argument("domain")
@click.argument("path")
@click.option("-X", "--method", default="GET", type=click.Choice(METHODS, case_sensitive=False), help="HTTP method.")
@click.option("--query", default=None, help='Query parameters as JSON, e.g. \'{"limit": "10"}\'.')
@click.option("--body", default=None, help="Request body as JSON.")
@click.option("--header", "headers", default=None, help="Headers as JSON.")
@click.pass_context
def call(ctx: click.Context, domain: str, path: str, method: str, query: str | None, body: str | None, headers: str | None):
    """Analyze METHOD PATH on DOMAIN, then call it."""
    analyzer = build_analyzer(ctx.obj)
    _emit(analyzer.analyze_and_call(domain, path, method, query, body, headers))


@main.command()
@click.argument("url")
@click.option("-X", "--method", default="GET", type=click.Choice(METHODS, case_sensitive=False), help="HTTP method.")
@click.option("--query", default=None, help="Query parameters as JSON.")
@click.option("--body", default=None, help="Request body as JSON.")
@click.option("--header", "headers", default=None, help="Headers as JSON.")
@click.pass_context
def request(ctx: click.Context, url: str, method: str, query: str | None, body: str | None, headers: str | None):
    """Make a plain HTTP request to URL."""
    analyzer = build_analyzer(ctx.obj)
    _emit(analyzer.make_request(url, method, query, body, headers))
