"""Finite state machine governing the message construction process."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

from ..primitives.exceptions import IllegalTransitionError

if TYPE_CHECKING:
    from collections.abc import Mapping


class AssemblyState(str, Enum):
    """Lifecycle states of a message aggregate."""

    IDLE = "IDLE"
    AWAITING_PART_1 = "AWAITING_PART_1"
    AWAITING_PART_2 = "AWAITING_PART_2"
    FINALIZED = "FINALIZED"


class AssemblyAction(str, Enum):
    """Actions that trigger a state transition."""

    START = "START"
    ACQUIRE = "ACQUIRE"


class FiniteStateMachine:
    """Pure transition table.

    Holds no mutable state, so one instance can be shared freely::

        IDLE            --START-->   AWAITING_PART_1
        AWAITING_PART_1 --ACQUIRE--> AWAITING_PART_2
        AWAITING_PART_2 --ACQUIRE--> FINALIZED

    Any pair missing from the table raises :class:`IllegalTransitionError`.
    """

    def __init__(
        self,
        transitions: Mapping[tuple[AssemblyState, AssemblyAction], AssemblyState],
        *,
        initial: AssemblyState,
        terminal: AssemblyState,
    ) -> None:
        self._transitions = MappingProxyType(dict(transitions))
        self.initial = initial
        self.terminal = terminal

    @property
    def transitions(
        self,
    ) -> Mapping[tuple[AssemblyState, AssemblyAction], AssemblyState]:
        return self._transitions

    def transition(
        self, current_state: AssemblyState, action: AssemblyAction
    ) -> AssemblyState:
        """Return the state reached by applying *action* to *current_state*."""
        next_state = self._transitions.get((current_state, action))
        if next_state is None:
            raise IllegalTransitionError(current_state, action)
        return next_state

    def is_terminal(self, state: AssemblyState) -> bool:
        return state == self.terminal

    def allowed_actions(self, state: AssemblyState) -> list[AssemblyAction]:
        """Return the actions accepted in *state* (debugging utility)."""
        return [action for (source, action) in self._transitions if source == state]

    def action_count(self, action: AssemblyAction) -> int:
        """Number of transitions in the table triggered by *action*."""
        return sum(1 for (_, a) in self._transitions if a == action)


ASSEMBLY_FSM = FiniteStateMachine(
    {
        (AssemblyState.IDLE, AssemblyAction.START): AssemblyState.AWAITING_PART_1,
        (
            AssemblyState.AWAITING_PART_1,
            AssemblyAction.ACQUIRE,
        ): AssemblyState.AWAITING_PART_2,
        (
            AssemblyState.AWAITING_PART_2,
            AssemblyAction.ACQUIRE,
        ): AssemblyState.FINALIZED,
    },
    initial=AssemblyState.IDLE,
    terminal=AssemblyState.FINALIZED,
)
