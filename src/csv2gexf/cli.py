"""Command line entry point for CSV to GEXF conversion."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from csv2gexf.config import configure_logging
from csv2gexf.convert import convert as run_conversion
from csv2gexf.errors import GraphConversionError
from csv2gexf.graph.writer import to_string
from csv2gexf.ingest.models import load_config

app = typer.Typer(help="Convert node and edge CSV tables into a GEXF graph document")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    configure_logging(verbose)


@app.command()
def convert(
    config_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON conversion config"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the GEXF document here instead of saveAs"),
) -> None:
    """Run the conversion described by CONFIG_PATH."""
    try:
        config = load_config(config_path)
        if output is not None:
            config = config.model_copy(update={"save_as": output})
        result = run_conversion(config)
    except (GraphConversionError, ValidationError) as exc:
        typer.secho(f"Conversion failed: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if isinstance(result, Path):
        typer.secho(f"GEXF document written to {result}", fg=typer.colors.GREEN, err=True)
    else:
        typer.secho(
            f"Graph constructed with {result.number_of_nodes()} nodes and {result.number_of_edges()} edges.",
            fg=typer.colors.GREEN,
            err=True,
        )
        typer.echo(to_string(result), nl=False)


if __name__ == "__main__":  # pragma: no cover
    app()
