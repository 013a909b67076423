"""
Live test against a Docker daemon

Pulls and runs the chia-all-in-one image, so it only runs when
CHIA_LEDGER_INTEGRATION=1 is set and Docker is reachable.
"""
import ipaddress
import os

import docker
import pytest
from docker.errors import DockerException
from requests.exceptions import RequestException

from containers.chia.chia_test_ledger import ChiaTestLedger
from containers.errors import NotStartedError


@pytest.fixture(scope="module")
def docker_client():
    if os.getenv("CHIA_LEDGER_INTEGRATION") != "1":
        pytest.skip("CHIA_LEDGER_INTEGRATION=1 not set")
    try:
        client = docker.from_env()
        client.ping()
    except (DockerException, RequestException):
        pytest.skip("Docker not available")
    return client


def test_chia_test_ledger_lifecycle(docker_client):
    ledger = ChiaTestLedger(docker_client=docker_client, health_check_timeout=600)

    with ledger:
        assert ledger.is_ready
        container_id = ledger.get_container_id()
        assert container_id == ledger.get_container().id
        ipaddress.ip_address(ledger.get_container_ip_address())
        assert ledger.get_public_port(22) > 0

    with pytest.raises(NotStartedError):
        ledger.get_container_id()
