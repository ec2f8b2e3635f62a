# src/termtest/cli/list_cmds.py

import asyncio
from collections.abc import Sequence
from pathlib import Path

import click
import structlog
from rich.console import Console

from termtest.cli.utils import logging_options, setup_logging_from_context
from termtest.config import TermtestConfig, load_config
from termtest.declaration.models import RegisteredTest
from termtest.exceptions import ConfigurationError, TestLoadError
from termtest.runtime.loader import TestFileLoader, discover_test_files
from termtest.state import TestState
from termtest.telemetry import StructLogger
from termtest.ui.dashboard import Dashboard
from termtest.ui.output import FrameWriter, LiveFrameWriter, make_frame_writer

log: StructLogger = structlog.get_logger("cli.list")


async def _render_declared(tests: Sequence[RegisteredTest], config: TermtestConfig, writer: FrameWriter) -> None:
    """Shows every declared test as pending in a single final frame."""
    dashboard = Dashboard(writer, settings=config.render, model=config.dashboard.model)
    dashboard.set_registered_tests(tests)
    for test in tests:
        dashboard.update_test_state(test.id, TestState())
    dashboard.finish()
    # Let the scheduled redraw run.
    await asyncio.sleep(0)


@click.command(name="list")
@click.argument(
    "paths",
    nargs=-1,
    type=click.Path(exists=True, path_type=Path),
)
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
def list_cli(ctx: click.Context, paths: tuple[Path, ...], config_path: Path, **kwargs):
    """Load test files and show the declared test tree."""
    setup_logging_from_context(
        ctx,
        local_log_level=kwargs.get("log_level"),
        local_log_file=kwargs.get("log_file"),
        local_json_logs=kwargs.get("json_logs"),
    )

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

    search_paths = list(paths) or [Path.cwd()]
    files = discover_test_files(search_paths, config.dashboard.test_pattern)
    if not files:
        click.echo(f"No test files found matching '{config.dashboard.test_pattern}'.", err=True)
        ctx.exit(1)

    loader = TestFileLoader(config.worker, root=Path.cwd())
    try:
        suite = loader.load(files)
    except TestLoadError as e:
        click.echo(f"Error: {e}", err=True)
        if e.details is not None:
            click.echo(f"  {type(e.details).__name__}: {e.details}", err=True)
        ctx.exit(1)

    tests = suite.tests
    log.info("Declared tests loaded", files=len(suite.files), tests=len(tests))
    writer = make_frame_writer(Console())
    if isinstance(writer, LiveFrameWriter):
        # Keep log lines out of the frame that is redrawn in place.
        setup_logging_from_context(
            ctx,
            local_log_level=kwargs.get("log_level"),
            local_log_file=kwargs.get("log_file"),
            local_json_logs=kwargs.get("json_logs"),
            default_log_level=config.global_config.log_level,
            file_only=True,
        )
    asyncio.run(_render_declared(tests, config, writer))

# 🔼⚙️
