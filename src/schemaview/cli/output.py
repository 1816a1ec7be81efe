from __future__ import annotations

import click

from schemaview.core import json
from schemaview.core.errors import LoaderError, LoaderErrorKind
from schemaview.generation import GeneratedValue, GenerationResult
from schemaview.navigation import PathElement
from schemaview.recently_viewed import RecentlyViewedLink

HEADER_SEPARATOR = "━"
BREADCRUMB_SEPARATOR = " › "
VERIFY_LOCATION_SUGGESTION = "Verify that the URL or file path points to a JSON Schema document."

LOADER_ERROR_SUGGESTIONS = {
    LoaderErrorKind.CONNECTION_SSL: "Bypass SSL verification or check the certificate of the server.",
    LoaderErrorKind.CONNECTION_OTHER: VERIFY_LOCATION_SUGGESTION,
    LoaderErrorKind.NETWORK_OTHER: VERIFY_LOCATION_SUGGESTION,
    LoaderErrorKind.HTTP_NOT_FOUND: VERIFY_LOCATION_SUGGESTION,
    LoaderErrorKind.FILE_NOT_FOUND: VERIFY_LOCATION_SUGGESTION,
    LoaderErrorKind.SYNTAX_ERROR: "Ensure the document is valid JSON or YAML.",
    LoaderErrorKind.UNEXPECTED_CONTENT: "A JSON Schema document is either an object or a boolean.",
}


def display_section_name(title: str) -> None:
    click.secho(title, bold=True)
    click.secho(HEADER_SEPARATOR * len(title), bold=True)


def display_loader_error(error: LoaderError) -> None:
    click.secho("Schema load failed", fg="red", bold=True)
    click.echo()
    click.echo(f"Error: {error}")
    for extra in error.extras:
        click.echo(f"    {extra}")
    suggestion = LOADER_ERROR_SUGGESTIONS.get(error.kind)
    if suggestion is not None:
        click.echo(f"\n{click.style('Tip:', bold=True, fg='green')} {suggestion}")


def display_trail(trail: list[PathElement]) -> None:
    click.echo(BREADCRUMB_SEPARATOR.join(click.style(element.title, bold=True) for element in trail))
    click.secho(trail[-1].reference, dim=True)


def display_example(result: GenerationResult) -> None:
    click.echo()
    display_section_name("Example")
    if isinstance(result, GeneratedValue):
        click.echo(json.dumps(result.value, indent=True))
        return
    if result.partial is not None:
        click.echo(json.dumps(result.partial, indent=True))
    click.echo()
    click.secho("Example generation partially failed:", fg="yellow", bold=True)
    for error in result.errors:
        click.secho(f"  - {error}", fg="yellow")


def display_links(links: list[PathElement]) -> None:
    if not links:
        click.echo("No definitions found")
        return
    width = max(len(link.title) for link in links)
    for link in links:
        click.echo(f"{link.title.ljust(width)}  {link.reference}")


def display_recently_viewed(links: list[RecentlyViewedLink]) -> None:
    display_section_name("Recently viewed")
    if not links:
        click.echo("Nothing viewed yet")
        return
    for link in links:
        click.echo(f"{click.style(link.title, bold=True)}  {link.location}")
