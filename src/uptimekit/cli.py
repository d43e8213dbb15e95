"""CLI interface for uptimekit"""

import json
import logging
from pathlib import Path
from typing import Optional

import click

from uptimekit.infrastructure.config.config_manager import ConfigManager, ConfigurationError
from uptimekit.infrastructure.errors import APIError, describe_error
from uptimekit.infrastructure.redaction import redact, redact_json
from uptimekit.infrastructure.uptimerobot.client import UptimeRobotClient

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    logging.getLogger().setLevel(level)
    # urllib3 connection chatter
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def _die(message: str, verbose: bool = False, exc: Optional[Exception] = None) -> None:
    """Exit with a user-friendly error message"""
    if exc is not None:
        logger.error(message, exc_info=verbose)
    else:
        logger.error(message)
    raise click.ClickException(message)


def _create_client(ctx) -> UptimeRobotClient:
    """Create API client from config

    Args:
        ctx: Click context holding the config path and verbosity

    Returns:
        UptimeRobotClient instance
    """
    verbose = ctx.obj.get("verbose", False)
    try:
        config_manager = ConfigManager(config_path=ctx.obj.get("config_path"))
        return UptimeRobotClient.from_config(config_manager.config)
    except (ConfigurationError, ValueError) as e:
        _die(describe_error(e), verbose=verbose, exc=e)


def _echo_model(model) -> None:
    """Print a model as indented JSON with secrets redacted"""
    data = redact(json.loads(model.model_dump_json(by_alias=True)))
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


RESOURCE_CHOICE = click.Choice(list(UptimeRobotClient.RESOURCES), case_sensitive=False)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose (DEBUG) logging")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to .uptimekit.yml config file",
)
@click.pass_context
def cli(ctx, verbose: bool, config: Path):
    """uptimekit - resilient UptimeRobot API client"""
    ctx.ensure_object(dict)
    setup_logging(verbose)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose


@cli.command()
@click.argument("resource", type=RESOURCE_CHOICE)
@click.argument("resource_id", type=int)
@click.pass_context
def get(ctx, resource: str, resource_id: int):
    """Print a resource as JSON.

    RESOURCE: monitor, psp, integration or maintenance-window
    """
    verbose = ctx.obj.get("verbose", False)
    try:
        client = _create_client(ctx)
        _echo_model(client.resource(resource).get(resource_id))
    except click.ClickException:
        raise
    except Exception as e:
        _die(f"Fatal error: {describe_error(e)}", verbose=verbose, exc=e)


@cli.command("list-monitors")
@click.pass_context
def list_monitors(ctx):
    """List monitors with their status"""
    verbose = ctx.obj.get("verbose", False)
    try:
        client = _create_client(ctx)
        monitors = client.monitors.list()
    except click.ClickException:
        raise
    except Exception as e:
        _die(f"Fatal error: {describe_error(e)}", verbose=verbose, exc=e)

    for monitor in monitors:
        click.echo(f"{monitor.id}\t{monitor.status or '-'}\t{monitor.name}")
    click.echo(f"\n{len(monitors)} monitors")


@cli.command()
@click.argument("resource", type=RESOURCE_CHOICE)
@click.argument("resource_id", type=int)
@click.option("--wait", is_flag=True, help="Wait until the API reports the resource gone")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    help="Seconds to wait for confirmation (default: polling.delete_timeout)",
)
@click.pass_context
def delete(ctx, resource: str, resource_id: int, wait: bool, timeout: Optional[float]):
    """Delete a resource.

    RESOURCE: monitor, psp, integration or maintenance-window
    """
    verbose = ctx.obj.get("verbose", False)
    try:
        client = _create_client(ctx)
        api = client.resource(resource)
        api.delete(resource_id)
        if wait:
            api.wait_deleted(resource_id, timeout=timeout)
    except click.ClickException:
        raise
    except APIError as e:
        _die(describe_error(e), verbose=verbose, exc=e)

    click.echo(f"Deleted {resource} {resource_id}")


@cli.command()
@click.argument("resource_id", type=int)
@click.pass_context
def pause(ctx, resource_id: int):
    """Pause a monitor"""
    verbose = ctx.obj.get("verbose", False)
    try:
        _create_client(ctx).monitors.pause(resource_id)
    except click.ClickException:
        raise
    except APIError as e:
        _die(describe_error(e), verbose=verbose, exc=e)
    click.echo(f"Paused monitor {resource_id}")


@cli.command()
@click.argument("resource_id", type=int)
@click.pass_context
def start(ctx, resource_id: int):
    """Start (resume) a monitor"""
    verbose = ctx.obj.get("verbose", False)
    try:
        _create_client(ctx).monitors.start(resource_id)
    except click.ClickException:
        raise
    except APIError as e:
        _die(describe_error(e), verbose=verbose, exc=e)
    click.echo(f"Started monitor {resource_id}")


@cli.command("redact")
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--max-bytes",
    type=int,
    default=0,
    show_default=True,
    help="Clip output to this many bytes (0 disables clipping)",
)
def redact_file(file_path: Path, max_bytes: int):
    """Print a JSON file with secrets redacted.

    FILE_PATH: JSON file to redact
    """
    click.echo(redact_json(file_path.read_bytes(), max_bytes))


def main():
    """Main entry point"""
    cli(obj={})


if __name__ == "__main__":
    main()
