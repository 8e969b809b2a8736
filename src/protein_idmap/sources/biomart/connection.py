"""Connections to a BioMart dataset and the lookup capability they provide."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from pathlib import Path

import requests

from protein_idmap.config.models import HTTPClientConfig, MartConfig
from protein_idmap.core.exceptions import ConfigurationError
from protein_idmap.core.logger import UnifiedLogger
from protein_idmap.mapping.resolver import MappingPair

from .client import BioMartClient
from .parser import DatasetInfo, MartInfo

__all__ = ["MartConnection", "load_mart", "version_report_path", "write_version_report"]

logger = UnifiedLogger.get(__name__)


@dataclass(slots=True)
class MartConnection:
    """Handle on one dataset of one mart, usable as a ``Lookup`` callable."""

    client: BioMartClient
    species: str
    mart: str
    host: str
    dataset_version: str | None = None
    mart_version: str | None = None

    def __call__(
        self,
        source_attribute: str,
        target_attribute: str,
        keys: Sequence[str],
    ) -> list[MappingPair]:
        return self.lookup(source_attribute, target_attribute, keys)

    def lookup(
        self,
        source_attribute: str,
        target_attribute: str,
        keys: Sequence[str],
    ) -> list[MappingPair]:
        """Return ``(key, value)`` pairs for ``keys`` filtered on ``source_attribute``."""

        rows = self.client.query(
            self.species,
            attributes=(source_attribute, target_attribute),
            filter_name=source_attribute,
            values=keys,
        )
        return [(row[0], row[1]) for row in rows]

    def close(self) -> None:
        self.client.close()


def load_mart(
    species: str = "hsapiens_gene_ensembl",
    host: str = "https://www.ensembl.org",
    mart: str = "ENSEMBL_MART_ENSEMBL",
    *,
    verbose: bool = False,
    http: HTTPClientConfig | None = None,
    session: requests.Session | None = None,
    report_dir: Path | None = None,
    today: date | None = None,
    virtual_schema: str | None = None,
) -> MartConnection:
    """Connect to ``species`` in ``mart`` on ``host`` and record the versions used.

    With ``verbose`` a ``<date>_<species>_Ensembl_Version.txt`` report is
    written to ``report_dir`` (the working directory by default). Queries use
    the virtual schema the registry lists for ``mart`` unless
    ``virtual_schema`` is given.
    """

    mart_config = MartConfig(species=species, host=host, mart=mart, virtual_schema=virtual_schema)
    client = BioMartClient(mart_config, http, session=session)
    try:
        mart_info, dataset_info = _describe(client, mart_config)
        if mart_config.virtual_schema is None:
            client.mart = mart_config.model_copy(update={"virtual_schema": mart_info.virtual_schema})

        connection = MartConnection(
            client=client,
            species=mart_config.species,
            mart=mart_config.mart,
            host=mart_config.host,
            dataset_version=dataset_info.version,
            mart_version=mart_info.display_name,
        )
        logger.info(
            "mart_connected",
            host=connection.host,
            mart=connection.mart,
            species=connection.species,
            virtual_schema=client.mart.virtual_schema,
            dataset_version=connection.dataset_version,
            mart_version=connection.mart_version,
        )
        if verbose:
            write_version_report(connection, directory=report_dir, today=today)
    except Exception:
        client.close()
        raise
    return connection


def _describe(client: BioMartClient, mart_config: MartConfig) -> tuple[MartInfo, DatasetInfo]:
    marts = {info.name: info for info in client.list_marts()}
    mart_info = marts.get(mart_config.mart)
    if mart_info is None:
        raise ConfigurationError(
            f"Mart {mart_config.mart!r} is not available on {client.url}. "
            f"Available marts: {', '.join(sorted(marts))}"
        )

    datasets = {info.name: info for info in client.list_datasets(mart_config.mart)}
    dataset_info = datasets.get(mart_config.species)
    if dataset_info is None:
        raise ConfigurationError(
            f"Dataset {mart_config.species!r} is not available in mart {mart_config.mart!r}"
        )
    return mart_info, dataset_info


def version_report_path(species: str, *, directory: Path | None = None, today: date | None = None) -> Path:
    stamp = (today or date.today()).isoformat()
    return (directory or Path.cwd()) / f"{stamp}_{species}_Ensembl_Version.txt"


def write_version_report(
    connection: MartConnection,
    *,
    directory: Path | None = None,
    today: date | None = None,
) -> Path:
    """Write the provenance report of ``connection`` and return its path."""

    day = today or date.today()
    path = version_report_path(connection.species, directory=directory, today=day)
    lines = [
        f"Species: {connection.species}",
        f"Host: {connection.host}",
        f"Date: {day.isoformat()}",
        f"Dataset: {connection.dataset_version or ''}",
        f"Version: {connection.mart_version or ''}",
    ]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info("mart_version_report_written", path=str(path))
    return path
