"""Typer-based command line interface for xml_json."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from ..config import ConverterConfig, load_config
from ..converter import XmlJsonConverter, convert_file
from ..domain import DocumentFormat, is_error_node
from ..errors import ConversionError
from ..json_codec import encode_json

app = typer.Typer(help="Convert documents between XML, JSON and CSV.")


@app.command()
def convert(
    source: Path = typer.Argument(..., help="Input file (.xml, .json or .csv)."),
    target: Path = typer.Argument(..., help="Output file (.xml, .json or .csv)."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to a YAML configuration file."),
    root_tag: Optional[str] = typer.Option(
        None,
        "--root-tag",
        "-r",
        help="Document element tag when writing XML. Overrides config setting.",
    ),
    delimiter: Optional[str] = typer.Option(
        None,
        "--delimiter",
        "-d",
        help="CSV field delimiter. Overrides config setting.",
    ),
    no_header: bool = typer.Option(
        False,
        "--no-header",
        help="Treat the first CSV line as data rather than column names.",
    ),
    pretty: bool = typer.Option(False, "--pretty", "-p", help="Indent XML and JSON output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log conversion details."),
) -> None:
    """Convert SOURCE into TARGET, picking formats from the file extensions."""

    _configure_logging(verbose)
    config_obj = _build_config(config, delimiter, no_header, pretty)

    try:
        result = convert_file(source, target, config=config_obj, root_tag=root_tag)
    except (ConversionError, ValueError) as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    if not result.success:
        for error in result.errors:
            typer.secho(f"ERROR: {error}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    typer.secho(
        f"✓ {result.source_format.value} -> {result.target_format.value}: {target}",
        fg=typer.colors.GREEN,
    )


@app.command()
def show(
    source: Path = typer.Argument(..., help="Input file (.xml, .json or .csv)."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to a YAML configuration file."),
) -> None:
    """Print the generic structure decoded from SOURCE as indented JSON."""

    config_obj = _build_config(config, None, False, False)
    converter = XmlJsonConverter(config_obj)

    try:
        source_format = DocumentFormat.from_suffix(source.suffix)
        converter.load(source_format, source)
        node = converter.decode(source_format)
    except (ConversionError, ValueError) as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    if source_format is DocumentFormat.XML and converter.root_tag:
        typer.echo(f"# root: <{converter.root_tag}>")
    typer.echo(encode_json(node, indent=2))
    if is_error_node(node):
        raise typer.Exit(code=1)


def _build_config(
    config: Optional[Path],
    delimiter: Optional[str],
    no_header: bool,
    pretty: bool,
) -> ConverterConfig:
    try:
        config_obj = load_config(config) if config else ConverterConfig()
    except (OSError, ValueError) as e:
        typer.secho(f"ERROR: Cannot load config {config}: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    # Priority: CLI > config file > defaults
    if delimiter:
        delimiter = "\t" if delimiter == "\\t" else delimiter
        if len(delimiter) != 1:
            typer.secho(f"ERROR: --delimiter must be a single character, got {delimiter!r}", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        config_obj.csv.delimiter = delimiter
    if no_header:
        config_obj.csv.has_header = False
    if pretty:
        config_obj.xml.pretty_print = True
        config_obj.json.indent = 2
    return config_obj


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


__all__ = ["app", "convert", "show"]
