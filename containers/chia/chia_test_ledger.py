#!/usr/bin/env python3
"""
Containerized Chia ledger for integration tests using Docker

Launches one chia-all-in-one container, blocks until the container's own
health check reports healthy and tears it down again. The health wait is
unbounded unless health_check_timeout is set; a caller that abandons an
unbounded wait leaves the container running until stop()/destroy().
"""
import docker
import itertools
import time
import logging
import threading
from typing import Optional, Dict, Any, List, Union

from docker import DockerClient
from docker.errors import DockerException, NotFound
from docker.models.containers import Container
from pydantic import ValidationError
from requests.exceptions import RequestException

from containers.chia.options import ChiaTestLedgerOptions, resolve_log_level
from containers.container_logs import stream_logs
from containers.errors import (
    ChiaTestLedgerError,
    ConfigurationError,
    ContainerNotFoundError,
    HealthCheckError,
    HealthCheckTimeoutError,
    NoContainerError,
    NoNetworkError,
    NotStartedError,
    RunRequestError,
)
from containers.ledger_state import LedgerState, Ready, Starting, Stopped, Unstarted, container_of
from utils.error_logger import ErrorLogger

logger = logging.getLogger(__name__)

HEALTHY_SUFFIX = "(healthy)"
LOG_LABEL = "chia-test-ledger"

# Errors the Docker SDK surfaces when the daemon rejects a call or is unreachable
RUNTIME_ERRORS = (DockerException, RequestException)

_handle_numbers = itertools.count(1)


class ChiaTestLedger:
    CLASS_NAME = "ChiaTestLedger"

    def __init__(
        self,
        image_name: Optional[str] = None,
        image_version: Optional[str] = None,
        env_vars: Optional[List[str]] = None,
        emit_container_logs: Optional[bool] = None,
        log_level: Optional[Union[int, str]] = None,
        health_check_interval: Optional[float] = None,
        health_check_timeout: Optional[float] = None,
        docker_client: Optional[DockerClient] = None,
    ):
        given = {
            "image_name": image_name,
            "image_version": image_version,
            "env_vars": env_vars,
            "emit_container_logs": emit_container_logs,
            "log_level": log_level,
            "health_check_interval": health_check_interval,
            "health_check_timeout": health_check_timeout,
        }
        try:
            self.options = ChiaTestLedgerOptions(**{k: v for k, v in given.items() if v is not None})
        except ValidationError as e:
            raise ConfigurationError(f"{self.CLASS_NAME}#__init__() invalid options: {e}") from e

        self.image_name = self.options.image_name
        self.image_version = self.options.image_version
        self.env_vars = list(self.options.env_vars)
        self.emit_container_logs = self.options.emit_container_logs
        self.health_check_interval = self.options.health_check_interval
        self.health_check_timeout = self.options.health_check_timeout

        # Child logger per handle so each keeps its own level
        self.log = logging.getLogger(LOG_LABEL).getChild(str(next(_handle_numbers)))
        self.log.setLevel(resolve_log_level(self.options.log_level))
        self.error_logger = ErrorLogger(self.CLASS_NAME, self.log)

        self._docker_client = docker_client
        self._state: LedgerState = Unstarted()
        self._log_thread: Optional[threading.Thread] = None

    @property
    def docker_client(self) -> DockerClient:
        if self._docker_client is None:
            self._docker_client = docker.from_env()
        return self._docker_client

    @property
    def state(self) -> LedgerState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return isinstance(self._state, Ready)

    def get_container_image_name(self) -> str:
        return f"{self.image_name}:{self.image_version}"

    def get_container_id(self) -> str:
        container = container_of(self._state)
        if container is None or not container.id:
            raise NotStartedError(f"{self.CLASS_NAME}.get_container_id() container not started, no container id recorded")
        return container.id

    def get_container(self) -> Container:
        container = container_of(self._state)
        if container is None:
            raise NoContainerError(f"{self.CLASS_NAME}.get_container() container not set on this instance yet.")
        return container

    def start(self) -> Container:
        """Start the ledger container and block until it reports healthy"""
        image_fqn = self.get_container_image_name()

        if container_of(self._state) is not None:
            self._remove_previous_container()

        logger.info(f"Starting Chia test ledger container from {image_fqn}")
        try:
            container = self.docker_client.containers.run(
                image_fqn,
                command=None,
                detach=True,
                user="root",
                ports={"22/tcp": None},  # ssh server
                publish_all_ports=True,
                privileged=True,
                environment=self.env_vars,
            )
        except RUNTIME_ERRORS as e:
            self.error_logger.log_error(
                "run_request_failed",
                "Container runtime rejected the run request",
                {"image": image_fqn},
                e
            )
            raise RunRequestError(f"{self.CLASS_NAME}.start() failed to run {image_fqn}: {e}") from e

        self._state = Starting(container)
        logger.info(f"Container {container.short_id} started, waiting for it to become healthy")

        if self.emit_container_logs:
            self._start_log_stream(container)

        try:
            self._wait_for_healthy(container.id)
        except HealthCheckTimeoutError:
            self._discard_container(container)
            self._state = Unstarted()
            raise

        self._state = Ready(container)
        logger.info(f"Chia test ledger {container.short_id} is healthy")
        return container

    def stop(self) -> None:
        container = self._require_container("stop")
        logger.info(f"Stopping Chia test ledger container {container.short_id}")
        container.stop()
        self._state = Stopped(container)

    def destroy(self) -> None:
        """Remove the container, forcing removal if it was not stopped first"""
        container = self._require_container("destroy")
        logger.info(f"Removing Chia test ledger container {container.short_id}")
        if isinstance(self._state, Stopped):
            container.remove()
        else:
            container.remove(force=True)
        self._state = Unstarted()
        self._log_thread = None

    def get_container_ip_address(self, network_name: Optional[str] = None) -> str:
        """
        IP address of the container on one of its networks.

        Without network_name this is the first network in the order the
        runtime lists them, which is what callers rely on for single-network
        containers.
        """
        container_info = self._get_container_info()
        networks: Dict[str, Any] = (container_info.get("NetworkSettings") or {}).get("Networks") or {}

        if not networks:
            raise NoNetworkError(f"{self.CLASS_NAME}.get_container_ip_address() container not connected to any networks")

        if network_name is None:
            network_name = next(iter(networks))
        elif network_name not in networks:
            raise NoNetworkError(
                f"{self.CLASS_NAME}.get_container_ip_address() container not connected to network {network_name!r}, "
                f"found: {', '.join(networks)}"
            )
        return networks[network_name]["IPAddress"]

    def get_public_port(self, private_port: int, protocol: str = "tcp") -> int:
        """Host port the runtime assigned to a published container port"""
        container_info = self._get_container_info()
        for port in container_info.get("Ports") or []:
            if port.get("PrivatePort") == private_port and port.get("Type", "tcp") == protocol and port.get("PublicPort"):
                return int(port["PublicPort"])
        raise NoNetworkError(f"{self.CLASS_NAME}.get_public_port() port {private_port}/{protocol} is not published")

    def _require_container(self, operation: str) -> Container:
        container = container_of(self._state)
        if container is None:
            raise NoContainerError(f"{self.CLASS_NAME}.{operation}() Container was never created, nothing to {operation}.")
        return container

    def _remove_previous_container(self):
        """Stop and remove the container from an earlier start()"""
        container = container_of(self._state)
        logger.info(f"Removing previous Chia test ledger container {container.short_id}")
        self._discard_container(container)
        self._state = Unstarted()

    def _discard_container(self, container: Container):
        """Stop then remove a container, logging failures instead of raising"""
        for verb, action in (("stop", container.stop), ("remove", container.remove)):
            try:
                action()
            except NotFound:
                return
            except RUNTIME_ERRORS as e:
                self.error_logger.log_warning(
                    f"Failed to {verb} container",
                    {"container_id": container.id},
                    e
                )

    def _start_log_stream(self, container: Container):
        tag = f"[{self.get_container_image_name()}]"
        try:
            self._log_thread = stream_logs(container, tag, self.log)
        except RUNTIME_ERRORS as e:
            # Readiness detection goes on without the logs
            self.error_logger.log_warning(
                "Failed to stream container logs",
                {"container_id": container.id, "image": self.get_container_image_name()},
                e
            )

    def _wait_for_healthy(self, container_id: str):
        deadline = None
        if self.health_check_timeout is not None:
            deadline = time.monotonic() + self.health_check_timeout

        attempts = 0
        while True:
            attempts += 1
            try:
                container_info = self._get_container_info(container_id)
            except (ContainerNotFoundError, *RUNTIME_ERRORS) as e:
                self.error_logger.log_error(
                    "health_check_failed",
                    "Failed to query container status",
                    {"container_id": container_id, "attempt": attempts},
                    e
                )
                raise HealthCheckError(f"{self.CLASS_NAME}.start() health check failed: {e}") from e

            status = container_info.get("Status") or ""
            self.log.debug(f"ContainerInfo.Status={status!r}")
            self.log.debug(f"ContainerInfo.State={container_info.get('State')!r}")
            if status.endswith(HEALTHY_SUFFIX):
                logger.info(f"Container healthy after {attempts} status checks")
                return

            delay = self.health_check_interval
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    self.error_logger.log_error(
                        "health_check_timeout",
                        "Container did not become healthy in time",
                        {"container_id": container_id, "timeout": self.health_check_timeout, "last_status": status}
                    )
                    raise HealthCheckTimeoutError(
                        f"{self.CLASS_NAME}.start() container {container_id} not healthy after {self.health_check_timeout}s"
                    )
                # Never sleep past the deadline
                delay = min(delay, remaining)

            time.sleep(delay)

    def _get_container_info(self, container_id: Optional[str] = None) -> Dict[str, Any]:
        """Entry for this container in the runtime's list of running containers"""
        container_id = container_id or self.get_container_id()
        container_infos = self.docker_client.api.containers(filters={"id": container_id})
        for container_info in container_infos:
            if container_info.get("Id") == container_id:
                return container_info
        raise ContainerNotFoundError(f'{self.CLASS_NAME}._get_container_info() no container with ID "{container_id}"')

    def __enter__(self) -> "ChiaTestLedger":
        try:
            self.start()
        except ChiaTestLedgerError:
            self._teardown()
            raise
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self._teardown()
        return False

    def _teardown(self):
        container = container_of(self._state)
        if container is not None:
            self._discard_container(container)
            self._state = Unstarted()
