#!/usr/bin/env python3
"""
Forward container output into a Python logger
"""
import codecs
import logging
import threading

from docker.errors import DockerException
from docker.models.containers import Container
from requests.exceptions import RequestException

logger = logging.getLogger(__name__)


def stream_logs(container: Container, tag: str, log: logging.Logger) -> threading.Thread:
    """
    Follow the combined stdout/stderr of a container on a daemon thread.

    Attaching to the log stream happens on the calling thread so attach
    errors reach the caller; errors while the stream is being read are
    logged as warnings and end the thread. The stream ends on its own once
    the container stops.

    Returns:
        The started pump thread
    """
    stream = container.logs(stream=True, follow=True, stdout=True, stderr=True)

    def _pump():
        # Multi-byte characters can be split across frames
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        pending = ""
        try:
            for chunk in stream:
                text = pending + decoder.decode(chunk)
                *lines, pending = text.split("\n")
                for line in lines:
                    log.info(f"{tag} {line.rstrip()}")
            pending += decoder.decode(b"", final=True)
            if pending:
                log.info(f"{tag} {pending.rstrip()}")
        except (DockerException, RequestException) as e:
            logger.warning(f"{tag} log stream closed with error: {e}")

    thread = threading.Thread(target=_pump, name=f"container-logs-{container.short_id}", daemon=True)
    thread.start()
    return thread
