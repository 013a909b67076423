"""
Pytest configuration and fixtures for the Chia test ledger tests.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add the repository root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

CONTAINER_ID = "4f1c2e9a7b3d5e6f8091a2b3c4d5e6f708192a3b4c5d6e7f8091a2b3c4d5e6f7"


def make_container_info(status="Up 2 seconds (health: starting)", container_id=CONTAINER_ID, networks=None, ports=None):
    """Entry shaped like one item of the Engine API container listing."""
    return {
        "Id": container_id,
        "Status": status,
        "State": "running",
        "Ports": ports if ports is not None else [],
        "NetworkSettings": {
            "Networks": networks if networks is not None else {"bridge": {"IPAddress": "172.17.0.2"}}
        },
    }


def make_container(container_id=CONTAINER_ID):
    container = MagicMock()
    container.id = container_id
    container.short_id = container_id[:12]
    return container


@pytest.fixture
def container():
    return make_container()


@pytest.fixture
def mock_docker_client(container):
    """Docker client whose container is healthy on the first status query."""
    client = MagicMock()
    client.containers.run.return_value = container
    client.api.containers.return_value = [make_container_info(status="Up 5 seconds (healthy)")]
    return client
