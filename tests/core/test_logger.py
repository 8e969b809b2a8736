"""Tests for the structured logging facade."""

from __future__ import annotations

import json
import logging

import pytest
from structlog.contextvars import get_contextvars

from protein_idmap.core.logger import LogConfig, LogFormat, UnifiedLogger, _coerce_log_level


@pytest.mark.unit
def test_scoped_context_is_restored():
    UnifiedLogger.bind(run_id="outer")

    with UnifiedLogger.scoped(run_id="inner", component="annotate"):
        assert get_contextvars()["run_id"] == "inner"
        with UnifiedLogger.stage("merge"):
            assert get_contextvars()["stage"] == "merge"
        assert "stage" not in get_contextvars()

    assert get_contextvars() == {"run_id": "outer"}


@pytest.mark.unit
def test_coerce_log_level():
    assert _coerce_log_level("debug") == logging.DEBUG
    assert _coerce_log_level(logging.WARNING) == logging.WARNING
    with pytest.raises(ValueError, match="Unsupported log level"):
        _coerce_log_level("chatty")


@pytest.mark.unit
def test_json_output_includes_bound_context(capsys):
    UnifiedLogger.configure(LogConfig(level="INFO", format=LogFormat.JSON))
    logger = UnifiedLogger.get("protein_idmap.tests")

    with UnifiedLogger.scoped(run_id="run-1"):
        logger.info("mapping_collapsed", keys=3, token="secret")

    line = capsys.readouterr().err.strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["message"] == "mapping_collapsed"
    assert payload["run_id"] == "run-1"
    assert payload["keys"] == 3
    assert payload["token"] == "***REDACTED***"
    assert payload["level"] == "info"
