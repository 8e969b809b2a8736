"""HTTP client used by service adapters."""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any
from urllib.parse import urljoin
from uuid import uuid4

import requests
from requests import Response
from requests.exceptions import RequestException

from protein_idmap.config.models import HTTPClientConfig
from protein_idmap.core.exceptions import ServiceError
from protein_idmap.core.logger import UnifiedLogger

__all__ = ["UnifiedAPIClient"]


class UnifiedAPIClient:
    """Thin ``requests`` wrapper with timeouts and structured request logging.

    Transport failures and HTTP error statuses are raised as
    :class:`~protein_idmap.core.exceptions.ServiceError`; the client does
    not retry.
    """

    def __init__(
        self,
        config: HTTPClientConfig,
        *,
        base_url: str | None = None,
        name: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config
        self.base_url = base_url.rstrip("/") if base_url else ""
        self.name = name or "default"
        self._session = session or requests.Session()
        self._session.headers.update(dict(config.headers))
        self._timeout = self._derive_timeout(config)
        self._logger = UnifiedLogger.get(__name__).bind(
            component="http_client",
            http_client=self.name,
        )

    @staticmethod
    def _derive_timeout(config: HTTPClientConfig) -> tuple[float, float]:
        connect = min(config.connect_timeout_sec, config.timeout_sec)
        return (connect, config.timeout_sec)

    def close(self) -> None:
        self._session.close()

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, Any] | None = None,
        data: Any | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Response:
        url = self._resolve_url(endpoint)
        request_id = str(uuid4())
        start = time.perf_counter()
        try:
            response = self._session.request(
                method,
                url,
                params=params,
                data=data,
                headers=dict(headers) if headers else None,
                timeout=self._timeout,
            )
        except RequestException as exc:
            self._logger.error(
                "http.request.exception",
                endpoint=url,
                duration_ms=(time.perf_counter() - start) * 1000,
                request_id=request_id,
                error=str(exc),
            )
            raise ServiceError(f"Request to {url} failed: {exc}", url=url) from exc

        duration_ms = (time.perf_counter() - start) * 1000
        if response.status_code >= 400:
            self._logger.error(
                "http.request.failed",
                endpoint=url,
                duration_ms=duration_ms,
                status_code=response.status_code,
                request_id=request_id,
            )
            raise ServiceError(
                f"Request to {url} returned status {response.status_code}",
                url=url,
                status_code=response.status_code,
            )

        self._logger.info(
            "http.request.completed",
            endpoint=url,
            duration_ms=duration_ms,
            status_code=response.status_code,
            request_id=request_id,
        )
        return response

    def request_text(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, Any] | None = None,
        data: Any | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> str:
        response = self.request(method, endpoint, params=params, data=data, headers=headers)
        return response.text

    def _resolve_url(self, endpoint: str) -> str:
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        if not self.base_url:
            return endpoint
        return urljoin(self.base_url + "/", endpoint.lstrip("/"))
