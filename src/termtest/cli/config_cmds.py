# src/termtest/cli/config_cmds.py

from pathlib import Path

import click
import structlog
from rich.pretty import pretty_repr

from termtest.cli.utils import logging_options, setup_logging_from_context
from termtest.config import load_config
from termtest.exceptions import ConfigurationError
from termtest.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.config")


@click.group(name="config")
def config_cli():
    """Commands for inspecting and validating configuration."""
    pass


@config_cli.command(name="show")
@click.option(
    "-c",
    "--config-path",
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    default=Path("termtest.toml"),
    show_default=True,
    envvar="TERMTEST_CONF",
    help="Path to the termtest configuration file (env var TERMTEST_CONF).",
    show_envvar=True,
)
@logging_options
@click.pass_context
def show_config(ctx: click.Context, config_path: Path, **kwargs):
    """Load, validate, and display the configuration."""
    setup_logging_from_context(
        ctx,
        local_log_level=kwargs.get("log_level"),
        local_log_file=kwargs.get("log_file"),
        local_json_logs=kwargs.get("json_logs"),
    )
    log.info("Executing 'config show' command", config_path=str(config_path))

    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        log.error("Failed to load or validate configuration", error=str(e))
        click.echo(f"Error: Configuration problem in '{config_path}':\n{e}", err=True)
        ctx.exit(1)

    # The config file level applies unless a CLI option or env var set one.
    setup_logging_from_context(
        ctx,
        local_log_level=kwargs.get("log_level"),
        local_log_file=kwargs.get("log_file"),
        local_json_logs=kwargs.get("json_logs"),
        default_log_level=config.global_config.log_level,
    )

    if not config.worker.url:
        log.warning("No worker url configured; every test will need its own url.")

    # Generate a rich-formatted string and echo it for testability.
    click.echo(pretty_repr(config, expand_all=True))

# 🔼⚙️
