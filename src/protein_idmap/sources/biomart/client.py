"""Client for the BioMart ``martservice`` endpoint."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

import requests

from protein_idmap.config.models import HTTPClientConfig, MartConfig
from protein_idmap.core.api_client import UnifiedAPIClient
from protein_idmap.core.logger import UnifiedLogger

from .parser import DatasetInfo, MartInfo, parse_datasets, parse_query_rows, parse_registry
from .request import build_query_xml, service_url

__all__ = ["BioMartClient"]

logger = UnifiedLogger.get(__name__)


def _chunked(values: Sequence[str], size: int) -> Iterator[Sequence[str]]:
    for start in range(0, len(values), size):
        yield values[start : start + size]


class BioMartClient:
    """Registry listings and attribute queries against one BioMart host."""

    def __init__(
        self,
        mart: MartConfig | None = None,
        http: HTTPClientConfig | None = None,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self.mart = mart or MartConfig()
        self.http = http or HTTPClientConfig()
        self.url = service_url(self.mart.host, self.mart.path)
        self.api = UnifiedAPIClient(self.http, base_url=self.url, name="biomart", session=session)

    def close(self) -> None:
        self.api.close()

    def list_marts(self) -> list[MartInfo]:
        text = self.api.request_text("GET", self.url, params={"type": "registry"})
        return parse_registry(text)

    def list_datasets(self, mart: str | None = None) -> list[DatasetInfo]:
        text = self.api.request_text(
            "GET",
            self.url,
            params={"type": "datasets", "mart": mart or self.mart.mart},
        )
        return parse_datasets(text)

    def query(
        self,
        dataset: str,
        *,
        attributes: Sequence[str],
        filter_name: str,
        values: Sequence[str],
    ) -> list[tuple[str, ...]]:
        """Return attribute rows for ``values``, batching large filters.

        Rows of successive batches are concatenated in batch order.
        """

        rows: list[tuple[str, ...]] = []
        for batch in _chunked(list(values), self.http.batch_size):
            query = build_query_xml(
                dataset,
                attributes=attributes,
                filter_name=filter_name,
                values=batch,
                virtual_schema=self.mart.virtual_schema or "default",
            )
            text = self.api.request_text("POST", self.url, data={"query": query})
            batch_rows = parse_query_rows(text, columns=len(attributes))
            logger.debug(
                "biomart.query.batch",
                dataset=dataset,
                filter=filter_name,
                values=len(batch),
                rows=len(batch_rows),
            )
            rows.extend(batch_rows)
        return rows
