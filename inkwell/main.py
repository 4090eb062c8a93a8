"""
inkwell — CLI entrypoint.

Usage:
    inkwell build [ROOT]
    inkwell preview [ROOT]
    inkwell publish [ROOT]
    inkwell convert SOURCE [TARGET]
"""

from __future__ import annotations

import json
import os
import sys

import click

from inkwell import __version__
from inkwell.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="inkwell")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """inkwell — an elegant static blog generator."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("INK_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("INK_LOG_FILE"),
        log_file_level=os.environ.get("INK_LOG_FILE_LEVEL"),
        quiet_third_party=not debug,
    )


def _fail(message: str) -> None:
    click.secho(f"❌ {message}", fg="red")
    sys.exit(1)


@cli.command()
@click.argument("root", required=False)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def build(ctx: click.Context, root: str | None, as_json: bool) -> None:
    """Generate blog to public folder."""
    from inkwell.core.use_cases.build import run_build

    result = run_build(root)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        _fail(result.error)

    report = result.report
    assert report is not None
    if not ctx.obj.get("quiet"):
        click.secho(
            f"✅ Built {len(report.articles)} articles, copied {report.copied} files "
            f"({report.duration_ms}ms)",
            fg="green",
        )


@cli.command()
@click.argument("root", required=False)
@click.option("--host", default="0.0.0.0", help="Bind address.")
@click.option("--port", "-p", default=None, type=int, help="Port number (default: build.port).")
@click.pass_context
def preview(ctx: click.Context, root: str | None, host: str, port: int | None) -> None:
    """Run in server mode to preview blog."""
    from inkwell.core.use_cases.preview import PreviewResult, run_preview

    def announce(ready: PreviewResult) -> None:
        click.echo()
        click.secho("⚡ inkwell preview", bold=True)
        click.echo(f"   Open {ready.url} to preview")
        click.echo(f"   Watching {ready.watched_dirs} directories")
        click.echo()

    result = run_preview(root, host=host, port=port, on_ready=announce)
    if result.error:
        _fail(result.error)


@cli.command()
@click.argument("root", required=False)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def publish(ctx: click.Context, root: str | None, as_json: bool) -> None:
    """Generate blog to public folder and publish."""
    from inkwell.core.use_cases.publish import run_site_publish

    output: list[str] = []
    sink = output.append if as_json else click.echo
    result = run_site_publish(root, sink=sink)

    if as_json:
        click.echo(json.dumps({**result.to_dict(), "output": output}, indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        _fail(result.error)

    if not ctx.obj.get("quiet"):
        click.secho("✅ Published", fg="green")


@cli.command()
@click.argument("source")
@click.argument("target", required=False, default=".")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def convert(ctx: click.Context, source: str, target: str, as_json: bool) -> None:
    """Convert Jekyll/Hexo post format to inkwell format."""
    from inkwell.core.use_cases.convert import run_convert

    outcome = run_convert(source, target)

    if as_json:
        click.echo(json.dumps(outcome.to_dict(), indent=2))
        sys.exit(1 if outcome.error else 0)

    if outcome.error:
        _fail(outcome.error)

    result = outcome.result
    assert result is not None

    if ctx.obj.get("verbose"):
        for path in result.converted:
            click.echo(f"   ✓ {path}")
    for failure in result.failures:
        click.secho(f"   ⚠️  {failure.path}: {failure.error}", fg="yellow")

    click.echo(f"\nConvert finish, total {result.count} articles")


if __name__ == "__main__":
    cli()
