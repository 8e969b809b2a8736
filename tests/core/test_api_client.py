"""Unit tests for UnifiedAPIClient with HTTP mocking."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from protein_idmap.config.models import HTTPClientConfig
from protein_idmap.core.api_client import UnifiedAPIClient
from protein_idmap.core.exceptions import ServiceError


@pytest.mark.unit
class TestUnifiedAPIClient:
    """Test suite for UnifiedAPIClient."""

    def test_init(self):
        config = HTTPClientConfig()
        client = UnifiedAPIClient(config=config, session=MagicMock())

        assert client.config == config
        assert client.name == "default"
        assert client.base_url == ""

    def test_init_with_custom_name_and_base_url(self):
        client = UnifiedAPIClient(
            config=HTTPClientConfig(),
            base_url="https://www.ensembl.org/biomart/martservice/",
            name="biomart",
            session=MagicMock(),
        )

        assert client.base_url == "https://www.ensembl.org/biomart/martservice"
        assert client.name == "biomart"

    def test_default_headers_applied_to_session(self):
        session = MagicMock()
        session.headers = {}
        UnifiedAPIClient(config=HTTPClientConfig(headers={"X-Test": "1"}), session=session)

        assert session.headers == {"X-Test": "1"}

    def test_request_passes_timeout_and_payload(self, response_factory):
        session = MagicMock()
        session.request.return_value = response_factory("ok")
        config = HTTPClientConfig(timeout_sec=30.0, connect_timeout_sec=5.0)
        client = UnifiedAPIClient(config=config, base_url="https://api.example.com", session=session)

        text = client.request_text("POST", "/martservice", data={"query": "<Query/>"})

        assert text == "ok"
        method, url = session.request.call_args[0]
        kwargs = session.request.call_args[1]
        assert method == "POST"
        assert url == "https://api.example.com/martservice"
        assert kwargs["data"] == {"query": "<Query/>"}
        assert kwargs["timeout"] == (5.0, 30.0)

    def test_connect_timeout_capped_by_total(self, response_factory):
        session = MagicMock()
        session.request.return_value = response_factory("ok")
        config = HTTPClientConfig(timeout_sec=2.0, connect_timeout_sec=15.0)
        client = UnifiedAPIClient(config=config, session=session)

        client.request("GET", "https://api.example.com")

        assert session.request.call_args[1]["timeout"] == (2.0, 2.0)

    def test_request_with_absolute_url(self, response_factory):
        session = MagicMock()
        session.request.return_value = response_factory("ok")
        client = UnifiedAPIClient(config=HTTPClientConfig(), base_url="https://api.example.com", session=session)

        client.request("GET", "https://other.example.com/items")

        _, url = session.request.call_args[0]
        assert url == "https://other.example.com/items"

    def test_error_status_raises_service_error(self, response_factory):
        session = MagicMock()
        session.request.return_value = response_factory("down", status_code=503)
        client = UnifiedAPIClient(config=HTTPClientConfig(), base_url="https://api.example.com", session=session)

        with pytest.raises(ServiceError) as exc_info:
            client.request("GET", "/martservice")

        assert exc_info.value.status_code == 503
        assert exc_info.value.url == "https://api.example.com/martservice"
        session.request.assert_called_once()

    def test_transport_error_raises_service_error_without_retry(self):
        session = MagicMock()
        session.request.side_effect = requests.exceptions.ConnectionError("unreachable")
        client = UnifiedAPIClient(config=HTTPClientConfig(), session=session)

        with pytest.raises(ServiceError, match="unreachable"):
            client.request("GET", "https://api.example.com")

        assert session.request.call_count == 1
