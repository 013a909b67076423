"""
Tests for the tagged lifecycle states
"""
import dataclasses

import pytest

from conftest import make_container
from containers.ledger_state import Ready, Starting, Stopped, Unstarted, container_of


def test_only_live_states_hold_a_container():
    container = make_container()

    assert container_of(Unstarted()) is None
    assert container_of(Starting(container)) is container
    assert container_of(Ready(container)) is container
    assert container_of(Stopped(container)) is container


def test_state_names():
    container = make_container()

    assert [state.name for state in (Unstarted(), Starting(container), Ready(container), Stopped(container))] == [
        "unstarted", "starting", "ready", "stopped"
    ]


def test_states_are_immutable():
    state = Ready(make_container())

    with pytest.raises(dataclasses.FrozenInstanceError):
        state.container = make_container("other")
