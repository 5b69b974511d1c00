# smallfsm/core/events.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, TypeVar

S = TypeVar("S", bound=Enum)
E = TypeVar("E", bound=Enum)


def label_of(value: Any) -> str:
    """
    Return the human-readable label of a state or event value.

    Enum members are labelled by their member name (``State.ice`` -> ``"ice"``);
    any other value falls back to ``str(value)``.
    """
    if isinstance(value, Enum):
        return value.name
    return str(value)


class TransitionEvent(Generic[S, E]):
    """
    Details a transition that occurred. Instances are emitted on the transition
    notifier once per successful ``fire`` and are immutable value objects.
    """

    __slots__ = ("_previous_state", "_new_state", "_event")

    def __init__(self, previous_state: S, new_state: S, event: E) -> None:
        """
        :param previous_state: The state the machine left.
        :param new_state: The state the machine entered.
        :param event: The event that triggered the transition.
        """
        object.__setattr__(self, "_previous_state", previous_state)
        object.__setattr__(self, "_new_state", new_state)
        object.__setattr__(self, "_event", event)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def previous_state(self) -> S:
        """The state before the transition."""
        return self._previous_state

    @property
    def new_state(self) -> S:
        """The state after the transition."""
        return self._new_state

    @property
    def event(self) -> E:
        """The event that triggered the transition."""
        return self._event

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransitionEvent):
            return NotImplemented
        return (self._previous_state, self._new_state, self._event) == (
            other._previous_state,
            other._new_state,
            other._event,
        )

    def __hash__(self) -> int:
        return hash((self._previous_state, self._new_state, self._event))

    def __repr__(self) -> str:
        return (
            f"TransitionEvent(previous_state={self._previous_state!r}, "
            f"new_state={self._new_state!r}, event={self._event!r})"
        )
