# smallfsm/core/transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Generic, Iterable, Iterator, Mapping, Optional, Tuple, TypeVar

from smallfsm.core.errors import ConfigurationError

S = TypeVar("S", bound=Enum)
E = TypeVar("E", bound=Enum)

Guard = Callable[[], bool]
Callback = Callable[[], None]


class Transition(Generic[S, E]):
    """
    Represents a transition to a new state. A transition is declared as one of
    the candidates of a source state in the transition table; it names its
    target state, the event that triggers it, an optional guard and an optional
    callback invoked after the transition has been performed.
    """

    __slots__ = ("_state", "_event", "_guard", "_on_transition")

    def __init__(
        self,
        state: S,
        event: E,
        guard: Optional[Guard] = None,
        on_transition: Optional[Callback] = None,
    ) -> None:
        """
        :param state: The state to transition to.
        :param event: The event that triggers the transition.
        :param guard: Optional predicate; only an explicit ``False`` blocks the transition.
        :param on_transition: Optional callback run after the new state has been entered.
        """
        object.__setattr__(self, "_state", state)
        object.__setattr__(self, "_event", event)
        object.__setattr__(self, "_guard", guard)
        object.__setattr__(self, "_on_transition", on_transition)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def state(self) -> S:
        """The target state of the transition."""
        return self._state

    @property
    def event(self) -> E:
        """The event that triggers the transition."""
        return self._event

    @property
    def guard(self) -> Optional[Guard]:
        return self._guard

    @property
    def on_transition(self) -> Optional[Callback]:
        return self._on_transition

    def matches(self, event: E) -> bool:
        """Whether this transition is triggered by ``event``."""
        return self._event == event

    def evaluate_guard(self) -> bool:
        """
        Evaluate the guard, if any.

        :return: False only if the guard returned exactly ``False``; True otherwise,
                 including when no guard is set.
        """
        return _GuardEvaluator().evaluate(self._guard)

    def run_callback(self) -> None:
        """Invoke the post-transition callback, if any."""
        if self._on_transition is not None:
            self._on_transition()

    def __repr__(self) -> str:
        return f"Transition(state={self._state!r}, event={self._event!r})"


# Shorthand version of Transition.
Tx = Transition


class _GuardEvaluator:
    """
    Internal helper to evaluate an optional guard. A missing guard and a guard
    returning anything other than ``False`` both pass.
    """

    def evaluate(self, guard: Optional[Guard]) -> bool:
        if guard is None:
            return True
        return guard() is not False


class TransitionTable(Mapping[S, Tuple[Transition[S, E], ...]]):
    """
    An immutable mapping from a source state to its ordered candidate
    transitions. Declaration order is evaluation order; several candidates of
    the same source may share a triggering event to express guarded
    alternatives.

    The table does not check completeness. A state without an entry, or
    without a candidate for some event, simply never transitions on it.
    """

    def __init__(self, transitions: Optional[Mapping[S, Iterable[Transition[S, E]]]] = None) -> None:
        """
        Copy and freeze the caller's mapping.

        :param transitions: Mapping of source state to an iterable of Transition.
        :raises ConfigurationError: If an entry is not iterable or holds a non-Transition.
        """
        frozen = {}
        for source, candidates in (transitions or {}).items():
            try:
                candidates = tuple(candidates)
            except TypeError:
                raise ConfigurationError(f"Transitions for state {source!r} must be an iterable of Transition")
            for candidate in candidates:
                if not isinstance(candidate, Transition):
                    raise ConfigurationError(f"Invalid transition {candidate!r} declared for state {source!r}")
            frozen[source] = candidates
        self._table = MappingProxyType(frozen)

    def __getitem__(self, state: S) -> Tuple[Transition[S, E], ...]:
        return self._table[state]

    def __iter__(self) -> Iterator[S]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def candidates(self, state: S) -> Tuple[Transition[S, E], ...]:
        """
        Return the declared transitions of ``state``, or an empty tuple.
        """
        return self._table.get(state, ())

    def select(self, state: S, event: E) -> Optional[Transition[S, E]]:
        """
        Find the transition ``event`` triggers from ``state``.

        Candidates are scanned in declaration order; the first whose event
        matches and whose guard does not return ``False`` is selected. Guards of
        later candidates are not evaluated.

        :return: The selected transition, or None.
        """
        for transition in self.candidates(state):
            if not transition.matches(event):
                continue
            if not transition.evaluate_guard():
                continue
            return transition
        return None

    def __repr__(self) -> str:
        return f"TransitionTable({dict(self._table)!r})"
