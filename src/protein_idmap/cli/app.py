"""Typer application exposing the annotation pipeline."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, cast

import typer

from protein_idmap.config import load_config, parse_set_overrides
from protein_idmap.config.models import MartConfig
from protein_idmap.core.exceptions import ConfigurationError, ProteinIdMapError, ServiceError
from protein_idmap.core.logger import LogConfig, LogFormat, UnifiedLogger
from protein_idmap.pipeline import build_config, convert_protein_ids
from protein_idmap.sources.biomart.client import BioMartClient

__all__ = ["EXIT_CONFIGURATION", "EXIT_FAILURE", "EXIT_SERVICE", "app", "run"]

EXIT_FAILURE = 1
EXIT_CONFIGURATION = 2
EXIT_SERVICE = 3

T = TypeVar("T")

app = typer.Typer(
    name="protein-idmap",
    help="Convert protein identifiers of tabular proteomics data to gene symbols.",
    add_completion=False,
)


def _configure_logging(command: str, verbose: bool, log_format: LogFormat) -> None:
    UnifiedLogger.configure(LogConfig(level="DEBUG" if verbose else "INFO", format=log_format))
    UnifiedLogger.bind(command=command)


def _guarded(action: Callable[[], T]) -> T:
    """Run ``action`` and translate library errors into exit codes."""

    try:
        return action()
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=EXIT_CONFIGURATION) from exc
    except ServiceError as exc:
        typer.echo(f"Error: annotation service failed: {exc}", err=True)
        raise typer.Exit(code=EXIT_SERVICE) from exc
    except ProteinIdMapError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=EXIT_FAILURE) from exc


@app.command("convert")
def convert(
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Tab-separated input table."),
    column: str | None = typer.Option(None, "--column", "-c", help="Column with protein identifiers."),
    species: str | None = typer.Option(None, help="BioMart dataset, e.g. mmusculus_gene_ensembl."),
    host: str | None = typer.Option(None, help="Ensembl host, e.g. dec2017.archive.ensembl.org."),
    mart: str | None = typer.Option(None, help="BioMart mart name."),
    source_attribute: str | None = typer.Option(None, "--from", help="Type of the original identifiers."),
    target_attribute: str | None = typer.Option(None, "--to", help="Type of the converted identifiers."),
    separator: str | None = typer.Option(None, help="Separator between identifiers of shared peptides."),
    copy_unconverted: bool | None = typer.Option(
        None,
        "--copy-unconverted/--drop-unconverted",
        help="Copy identifiers that cannot be converted.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging and database version report."),
    config: Path | None = typer.Option(None, "--config", exists=True, dir_okay=False, help="YAML settings file."),
    set_overrides: list[str] | None = typer.Option(None, "--set", help="Override a setting, KEY=VALUE."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output path (default: <input>_annotated)."),
    log_format: LogFormat = typer.Option(LogFormat.KEY_VALUE, "--log-format", case_sensitive=False),
) -> None:
    """Annotate INPUT_PATH and write the table with the converted identifiers first."""

    _configure_logging("convert", verbose, log_format)

    def _run() -> Path:
        base = load_config(config, cli_overrides=parse_set_overrides(set_overrides or []))
        settings = build_config(
            base,
            column_name=column,
            species=species,
            host=host,
            mart=mart,
            source_attribute=source_attribute,
            target_attribute=target_attribute,
            separator=separator,
            copy_unconverted=copy_unconverted,
            verbose=verbose or None,
        )
        written = convert_protein_ids(input_path, config=settings, output_path=output)
        return cast(Path, written)

    written = _guarded(_run)
    typer.echo(str(written))


@app.command("marts")
def list_marts(
    host: str = typer.Option(MartConfig().host, help="Ensembl host."),
    log_format: LogFormat = typer.Option(LogFormat.KEY_VALUE, "--log-format", case_sensitive=False),
) -> None:
    """List the marts offered by HOST with their versions."""

    _configure_logging("marts", False, log_format)

    def _run() -> list[Any]:
        client = BioMartClient(MartConfig(host=host))
        try:
            return client.list_marts()
        finally:
            client.close()

    for info in _guarded(_run):
        typer.echo(f"{info.name}\t{info.display_name}")


@app.command("datasets")
def list_datasets(
    host: str = typer.Option(MartConfig().host, help="Ensembl host."),
    mart: str = typer.Option(MartConfig().mart, help="BioMart mart name."),
    log_format: LogFormat = typer.Option(LogFormat.KEY_VALUE, "--log-format", case_sensitive=False),
) -> None:
    """List the datasets of MART with their versions."""

    _configure_logging("datasets", False, log_format)

    def _run() -> list[Any]:
        client = BioMartClient(MartConfig(host=host, mart=mart))
        try:
            return client.list_datasets()
        finally:
            client.close()

    for info in _guarded(_run):
        typer.echo(f"{info.name}\t{info.version or ''}\t{info.description}")


def run() -> None:
    """Console script entry point."""

    app()
