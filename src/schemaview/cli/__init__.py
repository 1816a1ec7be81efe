from __future__ import annotations

import logging
from functools import partial

import click

from schemaview.cli.output import (
    display_example,
    display_links,
    display_loader_error,
    display_recently_viewed,
    display_trail,
)
from schemaview.config import ConfigError, ViewerConfig
from schemaview.core.errors import LoaderError, NoNavigationTarget
from schemaview.core.loaders import fetch_text
from schemaview.core.version import SCHEMAVIEW_VERSION
from schemaview.generation import Stage
from schemaview.loaders import DocumentLoader
from schemaview.navigation import link_to
from schemaview.recently_viewed import FileRecentlyViewed
from schemaview.view import Session

__all__ = ["schemaview"]

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
LOG_FORMAT = "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"
STAGE_CHOICE = click.Choice([stage.value for stage in Stage])


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option(
    "--config-file",
    "config_file",
    help="The path to `schemaview.toml` file to use for configuration",
    metavar="PATH",
    type=str,
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log resolution and loading details")
@click.version_option(SCHEMAVIEW_VERSION, prog_name="schemaview")
@click.pass_context
def schemaview(ctx: click.Context, config_file: str | None, verbose: bool) -> None:
    """Browse JSON Schema documents and synthesize examples for them."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)
    try:
        if config_file is not None:
            config = ViewerConfig.from_path(config_file)
        else:
            config = ViewerConfig.discover()
    except FileNotFoundError:
        click.secho(f"Failed to load configuration file from {config_file}", fg="red", bold=True)
        click.echo("\nThe configuration file does not exist")
        ctx.exit(1)
    except ConfigError as exc:
        click.secho(
            f"Failed to load configuration file{f' from {config_file}' if config_file else ''}", fg="red", bold=True
        )
        click.echo(f"\nThe loaded configuration is incorrect\n\n{exc}")
        ctx.exit(1)
    ctx.obj = config


def _make_session(config: ViewerConfig, stage: str | None) -> Session:
    return Session(
        DocumentLoader(partial(fetch_text, timeout=config.request_timeout)),
        base_path=config.base_path,
        stage=Stage(stage) if stage is not None else config.stage,
        recently_viewed=FileRecentlyViewed(config.recently_viewed.path, limit=config.recently_viewed.limit),
    )


def _open(ctx: click.Context, session: Session, location: str) -> None:
    try:
        session.open(location)
    except LoaderError as exc:
        display_loader_error(exc)
        ctx.exit(1)


@schemaview.command(short_help="Show a schema node and an example value for it")
@click.argument("location", type=str)
@click.argument("references", nargs=-1, type=str)
@click.option("--stage", type=STAGE_CHOICE, default=None, help="Which read-only / write-only properties to include")
@click.pass_context
def show(ctx: click.Context, location: str, references: tuple[str, ...], stage: str | None) -> None:
    """Load the schema at LOCATION and show the node reached by following REFERENCES (e.g. `#/definitions/user`)."""
    session = _make_session(ctx.obj, stage)
    _open(ctx, session, location)
    try:
        view = session.view(link_to(session.base_path, references))
    except NoNavigationTarget as exc:
        click.secho(f"Error: {exc}", fg="red", bold=True)
        ctx.exit(1)
    display_trail(view.trail)
    display_example(view.example)


@schemaview.command(short_help="List the definitions of a schema")
@click.argument("location", type=str)
@click.pass_context
def links(ctx: click.Context, location: str) -> None:
    """List named definitions of the schema at LOCATION together with their references."""
    session = _make_session(ctx.obj, None)
    _open(ctx, session, location)
    display_links(session.links())


@schemaview.command(short_help="List recently viewed schemas")
@click.pass_obj
def recent(config: ViewerConfig) -> None:
    store = FileRecentlyViewed(config.recently_viewed.path, limit=config.recently_viewed.limit)
    display_recently_viewed(store.links())
