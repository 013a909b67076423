#!/usr/bin/env python3
"""
Lifecycle states of a container-backed test ledger

Only the states that hold a live container carry the reference, so a ledger
can never have a container id without a container (or the other way round).
"""
from dataclasses import dataclass
from typing import Optional, Union

from docker.models.containers import Container


@dataclass(frozen=True)
class Unstarted:
    """No container: never started, destroyed, or timed out and cleaned up."""

    name = "unstarted"


@dataclass(frozen=True)
class Starting:
    """Run request accepted, waiting for the health check to pass."""

    container: Container
    name = "starting"


@dataclass(frozen=True)
class Ready:
    """Container reported healthy."""

    container: Container
    name = "ready"


@dataclass(frozen=True)
class Stopped:
    """Container stopped but not yet removed."""

    container: Container
    name = "stopped"


LedgerState = Union[Unstarted, Starting, Ready, Stopped]


def container_of(state: LedgerState) -> Optional[Container]:
    """Return the container held by a state, if any"""
    return getattr(state, "container", None)
