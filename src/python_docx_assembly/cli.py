"""Command-line interface for python-docx-assembly.

Provides commands for inspecting, restyling and creating Word documents from the terminal.
"""

from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer

from . import Document, __version__
from .style_map import load_style_map, merge_style_maps, parse_map_option

app = typer.Typer(
    name="docx-assembly",
    help="Inspect, restyle and assemble Word documents from the command line.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"docx-assembly version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Inspect, restyle and assemble Word documents from the command line."""
    pass


@app.command()
def info(
    file: Annotated[Path, typer.Argument(help="Path to the .docx file")],
) -> None:
    """Show document information."""
    try:
        with Document(file) as doc:
            geometry = doc.section_geometry.to_inches()
            typer.echo(f"File: {file}")
            typer.echo(f"Elements: {len(doc)}")
            typer.echo(f"Styles: {len(doc.styles)}")
            typer.echo(f"Headers: {len(doc.headers)}")
            typer.echo(f"Footers: {len(doc.footers)}")
            typer.echo(f"Bookmarks: {len(doc.bookmark_names())}")
            typer.echo(f"Page: {geometry.page_width:g} x {geometry.page_height:g} in")
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def styles(
    file: Annotated[Path, typer.Argument(help="Path to the .docx file")],
    style_type: Annotated[
        str | None,
        typer.Option("--type", "-t", help="Only list one type (paragraph, character, table, numbering)"),
    ] = None,
) -> None:
    """List the styles of a document."""
    try:
        with Document(file) as doc:
            for style in doc.styles_info():
                if style_type and style.style_type.value != style_type:
                    continue
                default = " (default)" if style.is_default else ""
                typer.echo(f"{style.style_type.value}\t{style.style_id}\t{style.name}{default}")
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def bookmarks(
    file: Annotated[Path, typer.Argument(help="Path to the .docx file")],
) -> None:
    """List bookmark names of a document."""
    try:
        with Document(file) as doc:
            for name in doc.bookmark_names():
                typer.echo(name)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def properties(
    file: Annotated[Path, typer.Argument(help="Path to the .docx file")],
) -> None:
    """Show core document properties."""
    try:
        with Document(file) as doc:
            for name, value in doc.doc_properties().items():
                typer.echo(f"{name}: {value}")
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("set-properties")
def set_properties(
    file: Annotated[Path, typer.Argument(help="Path to the .docx file")],
    title: Annotated[str | None, typer.Option("--title", help="Document title")] = None,
    subject: Annotated[str | None, typer.Option("--subject", help="Document subject")] = None,
    creator: Annotated[str | None, typer.Option("--creator", help="Document creator")] = None,
    description: Annotated[
        str | None, typer.Option("--description", help="Document description")
    ] = None,
    created: Annotated[
        datetime | None, typer.Option("--created", help="Creation timestamp (ISO 8601)")
    ] = None,
    author: Annotated[
        str | None, typer.Option("--author", help="Identity recorded as last modifier")
    ] = None,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
) -> None:
    """Set core document properties."""
    try:
        with Document(file, author=author) as doc:
            doc.set_doc_properties(
                title=title,
                subject=subject,
                creator=creator,
                description=description,
                created=created,
            )
            output_path = output or file
            doc.save(output_path)
        typer.echo(f"Updated properties and saved to {output_path}")
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("remap-styles")
def remap_styles(
    file: Annotated[Path, typer.Argument(help="Path to the .docx file")],
    mapping: Annotated[
        list[str] | None,
        typer.Option("--map", "-m", help="Mapping 'to=from1,from2' (repeatable)"),
    ] = None,
    map_file: Annotated[
        Path | None, typer.Option("--map-file", help="YAML file of destination -> sources")
    ] = None,
    author: Annotated[
        str | None, typer.Option("--author", help="Identity recorded as last modifier")
    ] = None,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
) -> None:
    """Replace paragraph styles with other paragraph styles."""
    if not mapping and not map_file:
        typer.echo("Error: Must specify --map or --map-file", err=True)
        raise typer.Exit(1)

    try:
        maps = [load_style_map(map_file)] if map_file else []
        maps += [parse_map_option(option) for option in mapping or []]
        style_map = merge_style_maps(*maps)

        with Document(file, author=author) as doc:
            doc.change_styles(style_map)
            output_path = output or file
            doc.save(output_path)
        typer.echo(f"Remapped {len(style_map)} style(s) and saved to {output_path}")
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def new(
    output: Annotated[Path, typer.Argument(help="Path of the .docx file to create")],
    title: Annotated[str | None, typer.Option("--title", help="Document title")] = None,
    template: Annotated[
        Path | None, typer.Option("--template", help="Template .docx to start from")
    ] = None,
    author: Annotated[
        str | None, typer.Option("--author", help="Identity recorded as last modifier")
    ] = None,
) -> None:
    """Create a new document from the template."""
    try:
        with Document(author=author, template=template) as doc:
            if title:
                doc.set_doc_properties(title=title)
            doc.save(output)
        typer.echo(f"Created {output}")
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
