"""
Tests for structured error logging
"""
import logging

from utils.error_logger import ErrorLogger


def test_log_error_returns_record(caplog):
    error_logger = ErrorLogger("ChiaTestLedger")

    with caplog.at_level(logging.ERROR):
        record = error_logger.log_error(
            "run_request_failed",
            "Container runtime rejected the run request",
            {"image": "chia:v1"},
            RuntimeError("no such image")
        )

    assert record["component"] == "ChiaTestLedger"
    assert record["error_type"] == "run_request_failed"
    assert record["details"] == {"image": "chia:v1"}
    assert record["exception"] == {"type": "RuntimeError", "message": "no such image"}
    assert "[ChiaTestLedger] run_request_failed: Container runtime rejected the run request" in caplog.messages
    assert "Exception: RuntimeError: no such image" in caplog.messages


def test_log_error_without_details():
    record = ErrorLogger("FlaskAPI").log_error("ledger_stop_failed", "Failed to stop test ledger")

    assert record["details"] == {}
    assert "exception" not in record


def test_log_warning_uses_given_logger(caplog):
    log = logging.getLogger("chia-test-ledger")
    error_logger = ErrorLogger("ChiaTestLedger", log)

    with caplog.at_level(logging.WARNING, logger="chia-test-ledger"):
        error_logger.log_warning("Failed to stream container logs", exception=ValueError("closed"))

    assert caplog.records[0].name == "chia-test-ledger"
    assert caplog.messages[0] == "[ChiaTestLedger] Failed to stream container logs (ValueError: closed)"
