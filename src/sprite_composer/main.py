# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides commands for composing character sprites and dumping character metadata

from pathlib import Path

import asyncclick as click
from rich.console import Console
from rich.panel import Panel

from sprite_composer.config import get_config
from sprite_composer.core.metadata import CharacterMetadataService
from sprite_composer.core.pipeline import SpriteCompositionService
from sprite_composer.extraction.base import ExtractionError
from sprite_composer.utils.logging import (
    LoggingMode,
    configure_logging,
    create_smart_progress,
    get_logging_status,
    with_pipeline_context,
)
from sprite_composer.utils.rich_tables import (
    create_failures_table,
    create_logging_status_table,
    create_run_summary_table,
    print_rich_table,
)

console = Console()


@click.command()
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the composed PNGs (default: ./output)",
)
@click.option("--concurrency", type=click.IntRange(min=1), default=None, help="Characters composed at the same time")
@click.pass_context
async def compose(ctx, output_dir: Path | None, concurrency: int | None):
    """
    🎨 Compose every listed character's sprite layers into one PNG each.
    """
    await _compose_async(output_dir, concurrency, ctx.obj["json_output"])


async def _compose_async(output_dir: Path | None, concurrency: int | None, json_output: bool):
    """Run the image pipeline with optional rich display."""
    config = get_config()
    final_output_dir = output_dir or config.output_dir

    with with_pipeline_context("sprites", output_dir=str(final_output_dir)) as logger:
        logger.info("Starting sprite composition")

        service = SpriteCompositionService(output_dir=final_output_dir, concurrency=concurrency)

        try:
            if json_output:
                summary = await service.run()
            else:
                console.print(Panel.fit("🎨 [bold cyan]Sprite Composer[/bold cyan] 🎨", border_style="magenta"))
                _, _, tracker = create_smart_progress(console)
                with tracker:
                    summary = await service.run(progress_callback=tracker)
        except ExtractionError as e:
            logger.error("Could not load character listing", error=str(e))
            raise click.ClickException(str(e)) from e
        finally:
            await service.close()

        logger.info(
            "Sprite composition complete",
            composed=summary.characters_composed,
            failed=summary.characters_failed,
        )

        if json_output:
            click.echo(summary.model_dump_json(indent=2))
            return

        print_rich_table(console, create_run_summary_table(summary, str(final_output_dir)))
        if summary.failures:
            print_rich_table(console, create_failures_table(summary))


@click.command()
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON file for the character records (default: ./characters.json)",
)
@click.pass_context
async def metadata(ctx, output_path: Path | None):
    """
    📜 Scrape every character's attribute table and save it as JSON.

    The JSON document is also echoed to standard output.
    """
    await _metadata_async(output_path, ctx.obj["json_output"])


async def _metadata_async(output_path: Path | None, json_output: bool):
    config = get_config()
    final_output_path = output_path or config.metadata_path

    with with_pipeline_context("metadata", output_path=str(final_output_path)) as logger:
        service = CharacterMetadataService()

        try:
            records, text = await service.run(final_output_path)
        except ExtractionError as e:
            logger.error("Could not load character listing", error=str(e))
            raise click.ClickException(str(e)) from e
        finally:
            await service.close()

        click.echo(text)
        if not json_output:
            console.print(f"[green]💾 Saved {len(records)} characters to {final_output_path}[/green]")


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    config = get_config()
    mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE

    # Use config defaults when CLI parameters are not provided
    final_log_level = log_level or config.log_level
    final_log_file = log_file or (str(config.log_file) if config.log_file else None)

    configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    print_rich_table(console, create_logging_status_table(status))


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output structured JSON logs instead of rich interface")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    🧩 Sprite Composer - layered wiki sprites to PNG

    Scrapes the character listing of the wiki, composes each character's
    positioned image layers into a single PNG, and dumps character metadata.
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    _initialize_logging(json, log_level, log_file)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


app.add_command(compose)
app.add_command(metadata)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
