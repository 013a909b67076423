"""
Tests for forwarding container output into a logger
"""
import logging

from docker.errors import APIError

from conftest import make_container
from containers.container_logs import stream_logs


def test_lines_are_reassembled_across_chunks(caplog):
    container = make_container()
    container.logs.return_value = iter([b"first li", b"ne\nsecond line\r\nthird"])
    log = logging.getLogger("test-container-logs")

    with caplog.at_level(logging.INFO, logger="test-container-logs"):
        stream_logs(container, "[chia:v1]", log).join(timeout=5)

    assert caplog.messages == ["[chia:v1] first line", "[chia:v1] second line", "[chia:v1] third"]


def test_characters_split_across_chunks_are_kept(caplog):
    container = make_container()
    container.logs.return_value = iter([b"bl\xc3\xb6ck \xe2\x9c", b"\x93\n", b"tail \xe2"])
    log = logging.getLogger("test-container-logs")

    with caplog.at_level(logging.INFO, logger="test-container-logs"):
        stream_logs(container, "[t]", log).join(timeout=5)

    assert caplog.messages == ["[t] bl\u00f6ck \u2713", "[t] tail \ufffd"]


def test_stream_error_ends_pump_with_warning(caplog):
    def broken_stream():
        yield b"block 1\n"
        raise APIError("connection reset")

    container = make_container()
    container.logs.return_value = broken_stream()
    log = logging.getLogger("test-container-logs")

    with caplog.at_level(logging.INFO):
        thread = stream_logs(container, "[chia:v1]", log)
        thread.join(timeout=5)

    assert not thread.is_alive()
    assert "[chia:v1] block 1" in caplog.messages
    assert any("log stream closed with error" in message for message in caplog.messages)


def test_pump_thread_is_daemon():
    container = make_container()
    container.logs.return_value = iter([])

    thread = stream_logs(container, "[chia:v1]", logging.getLogger("test-container-logs"))
    thread.join(timeout=5)

    assert thread.daemon
