#!/usr/bin/env python3
"""
Errors raised by container-backed test ledgers
"""


class ChiaTestLedgerError(Exception):
    """Base class for every test ledger failure."""


class ConfigurationError(ChiaTestLedgerError):
    """Construction options are missing or invalid."""


class RunRequestError(ChiaTestLedgerError):
    """The container runtime rejected the run request."""


class HealthCheckError(ChiaTestLedgerError):
    """Querying the container status failed while waiting for it to become healthy."""


class HealthCheckTimeoutError(HealthCheckError):
    """The container did not report healthy before the configured deadline."""


class NotStartedError(ChiaTestLedgerError):
    """The operation needs a started container and there is none."""


class NoContainerError(NotStartedError):
    """No container reference is held, so there is nothing to stop or remove."""


class NoNetworkError(ChiaTestLedgerError):
    """The container is not attached to a (matching) network or port."""


class ContainerNotFoundError(ChiaTestLedgerError):
    """The runtime does not list a container with the recorded id."""
