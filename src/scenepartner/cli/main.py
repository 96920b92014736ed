"""Main CLI entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from scenepartner import __version__
from scenepartner.cli.commands import context_command, parse_command, rehearse_command
from scenepartner.cli.formatters import JsonFormatter
from scenepartner.cli.utils import CLIHandler
from scenepartner.config import (
    configure_logging,
    get_logger,
    get_settings,
    get_settings_for_cli,
    set_settings,
)

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="scenepartner",
    help="Parse screenplays and rehearse them with an AI scene partner",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="parse")(parse_command)
app.command(name="context")(context_command)
app.command(name="rehearse")(rehearse_command)


@app.command()
def version(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show ScenePartner version."""
    if json_output:
        print(JsonFormatter().format({"name": "ScenePartner", "version": __version__}))
    else:
        console.print(f"ScenePartner v{__version__}")


@app.command(name="config")
def show_config(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show the effective configuration after all sources are merged."""
    settings = get_settings()
    data = settings.model_dump(mode="json")
    if json_output:
        print(JsonFormatter().format(data))
        return

    table = Table(title="ScenePartner Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in data.items():
        table.add_row(key, str(value))
    console.print(table)


@app.callback()
def main_callback(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file (YAML, TOML, or JSON)",
            envvar="SCENEPARTNER_CONFIG",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging (INFO level)"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure global options."""
    overrides: dict[str, object] = {}
    if debug:
        overrides.update(log_level="DEBUG", debug=True)
    elif verbose:
        overrides["log_level"] = "INFO"

    if not config and not overrides:
        return

    try:
        settings = get_settings_for_cli(config_file=config, cli_overrides=overrides)
    except Exception as e:
        CLIHandler(console).handle_error(e)
        return

    set_settings(settings)
    configure_logging(settings)
    logger.debug("Settings loaded", config_file=str(config) if config else None)


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
