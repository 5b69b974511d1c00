# smallfsm/tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import List

import pytest

from smallfsm.core.state_machine import StateMachine
from smallfsm.tests.utils import RecordingLogger


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "stress: mark test as a stress test")
    config.addinivalue_line("markers", "property: mark test as a property-based test")


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def calls() -> List[str]:
    """Shared list that hooks and callbacks append to, to assert ordering."""
    return []


@pytest.fixture
def make_machine():
    """Factory creating state machines that are closed after the test."""
    machines = []

    def _factory(**kwargs) -> StateMachine:
        machine = StateMachine(**kwargs)
        machines.append(machine)
        return machine

    yield _factory
    for machine in machines:
        machine.close()
