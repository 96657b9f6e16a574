"""CLI entry point for the message service and viewer."""

import asyncio
import dataclasses
import json
import sys

import click

from techcrush.config import ConfigError, config_to_dict, load_config
from techcrush.logs import setup_logging
from techcrush.models import Loaded
from techcrush.render import render
from techcrush.viewer import MessageViewer


STYLES = {
    "heading": {"bold": True},
    "subtitle": {"dim": True},
    "loading": {"fg": "blue"},
    "error": {"fg": "red"},
    "message": {"fg": "magenta", "bold": True},
    "hint": {"dim": True},
}


def _resolve_config(config_path, host=None, port=None):
    try:
        cfg = load_config(config_path)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    overrides = {}
    if host:
        overrides["host"] = host
    if port:
        overrides["port"] = port
    return dataclasses.replace(cfg, **overrides)


def _echo_lines(lines):
    for line in lines:
        click.secho(line.text, **STYLES.get(line.style, {}))


config_option = click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a config file (YAML or JSON). Falls back to TECHCRUSH_CONFIG.",
)
host_option = click.option("--host", default=None, help="Override the configured host.")
port_option = click.option(
    "--port",
    default=None,
    type=click.IntRange(1, 65535),
    help="Override the configured port.",
)


@click.group()
def main():
    """TechCrush -- serve one message and view it from the terminal."""


@main.command()
@config_option
@host_option
@port_option
def serve(config_path, host, port):
    """Run the message service."""
    cfg = _resolve_config(config_path, host, port)

    from message_service.app import run

    run(cfg)


@main.command()
@config_option
@host_option
@port_option
def view(config_path, host, port):
    """Fetch the message once and print the page."""
    cfg = _resolve_config(config_path, host, port)
    setup_logging(cfg.log_level, cfg.log_format)

    async def _view():
        viewer = MessageViewer(cfg)
        viewer.mount()
        # Heading, subtitle and the loading branch while the fetch is outstanding.
        _echo_lines(render(viewer.state, cfg)[:3])
        try:
            return await viewer.settle()
        finally:
            viewer.unmount()

    state = asyncio.run(_view())
    # The settled branch and the footer complete the page.
    _echo_lines(render(state, cfg)[2:])
    if not isinstance(state, Loaded):
        sys.exit(1)


@main.command("config")
@config_option
def show_config(config_path):
    """Print the resolved configuration as JSON."""
    cfg = _resolve_config(config_path)
    click.echo(json.dumps(config_to_dict(cfg), indent=2))


if __name__ == "__main__":
    main()
