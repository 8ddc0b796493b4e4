"""
componentgen - CLI entrypoint.

Usage:
    componentgen ./WitchcraftForBeginners-DesignPackage
    componentgen ./SmartHomeWizards --single hero.md
    componentgen ./Site --single hero.md --iterate "Make the CTA button larger"

Environment:
    V0_API_KEY - Your v0 API key from https://v0.dev/chat/settings/keys
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import click

from componentgen import __version__
from componentgen.core.config import settings
from componentgen.core.exceptions import ComponentGenError
from componentgen.environments.v0 import V0Client
from componentgen.generation import BatchOutcome, GenerationResult, RunConfig, create_runner
from componentgen.monitoring.logger import configure_logging

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _print_summary(outcome: BatchOutcome) -> None:
    manifest = outcome.manifest
    click.echo()
    click.echo("─" * 50)
    click.secho("Generation Complete!", bold=True)
    click.secho(f"  ✓ Successful: {manifest.successful}", fg="green")
    click.secho(f"  ✗ Failed: {manifest.failed}", fg="red" if manifest.failed else None)
    click.echo()
    click.echo(f"Manifest saved to: {outcome.manifest_path}")

    if outcome.demos:
        click.echo()
        click.secho("Live Demos:", fg="cyan")
        for result in outcome.demos:
            click.echo(f"  {result.name}: {result.demo_url}")


def _print_single(result: GenerationResult) -> None:
    if result.has_content:
        click.secho(f"✓ Generated {result.filename}", fg="green")
    else:
        click.secho(f"✗ Failed to generate {result.name}: {result.error}", fg="red")
        if result.available_files:
            click.echo(f"  Available files: {', '.join(result.available_files)}")
    if result.demo_url:
        click.echo(f"  Demo: {result.demo_url}")
    if result.chat_url:
        click.echo(f"  Chat: {result.chat_url}")


@click.command()
@click.version_option(version=__version__, prog_name="componentgen")
@click.argument("package_path", type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "--single",
    "single",
    metavar="PROMPT_FILE",
    default=None,
    help="Generate only this prompt file (e.g. hero.md).",
)
@click.option(
    "--iterate",
    metavar="TEXT",
    default=None,
    help="Follow-up instruction sent in the same chat (with --single).",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level (default: LOG_LEVEL or INFO).",
)
def cli(
    package_path: Path,
    single: Optional[str],
    iterate: Optional[str],
    log_level: Optional[str],
) -> None:
    """Generate v0 components from the prompts of a design package."""
    if iterate and not single:
        raise click.UsageError("--iterate can only be used together with --single")

    if not settings.V0_API_KEY:
        click.secho("Error: V0_API_KEY environment variable not set", fg="red", err=True)
        click.echo("Get your API key from: https://v0.dev/chat/settings/keys", err=True)
        sys.exit(1)

    configure_logging(log_level or settings.LOG_LEVEL)

    config = RunConfig.from_settings(settings)
    runner = create_runner(config, V0Client(api_key=settings.V0_API_KEY))

    try:
        if single:
            result = asyncio.run(runner.run_single(package_path, single, iterate=iterate))
        else:
            outcome = asyncio.run(runner.run(package_path))
    except (ComponentGenError, OSError) as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    if single:
        _print_single(result)
        if not result.success:
            sys.exit(1)
    else:
        _print_summary(outcome)


if __name__ == "__main__":
    cli()
