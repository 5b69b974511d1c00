# smallfsm/tests/utils.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from enum import Enum, auto
from typing import List


class State(Enum):
    steam = auto()
    water = auto()
    ice = auto()


class Event(Enum):
    freeze = auto()
    melt = auto()
    evaporate = auto()
    condense = auto()


class RecordingLogger:
    """A test logger that captures log_transition calls for verification."""

    def __init__(self) -> None:
        self.logs: List[str] = []

    def log_transition(self, event: str, from_state: str, to_state: str) -> None:
        self.logs.append(f"[{event}] {from_state} -> {to_state}")

    def clear(self) -> None:
        self.logs.clear()
