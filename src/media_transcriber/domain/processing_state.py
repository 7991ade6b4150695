"""Ordered state contract every pipeline entry point follows."""

import logging
from collections.abc import Callable

from media_transcriber.exceptions import IllegalStateTransitionError

from .models import ProcessingState, ProcessingStatus, StateChange

logger = logging.getLogger(__name__)

StateListener = Callable[[ProcessingStatus], None]

_TRANSITIONS: dict[ProcessingState, frozenset[ProcessingState]] = {
    ProcessingState.IDLE: frozenset(
        {ProcessingState.DOWNLOADING, ProcessingState.EXTRACTING}
    ),
    ProcessingState.DOWNLOADING: frozenset({ProcessingState.TRANSCRIBING}),
    ProcessingState.EXTRACTING: frozenset({ProcessingState.TRANSCRIBING}),
    ProcessingState.TRANSCRIBING: frozenset({ProcessingState.COMPLETE}),
    ProcessingState.COMPLETE: frozenset(),
    ProcessingState.ERROR: frozenset(),
}

_TERMINAL = frozenset({ProcessingState.COMPLETE, ProcessingState.ERROR})


class ProcessingTracker:
    """
    Records the states of a single request lifecycle.

    Legal path: idle -> downloading | extracting -> transcribing -> complete.
    Any non-terminal state may fail into error. No state is entered twice.
    """

    def __init__(self, listeners: list[StateListener] | None = None):
        self._state = ProcessingState.IDLE
        self._history = [StateChange(state=ProcessingState.IDLE)]
        self._message: str | None = None
        self._detail: str | None = None
        self._listeners = list(listeners or [])

    @property
    def state(self) -> ProcessingState:
        return self._state

    @property
    def is_terminal(self) -> bool:
        return self._state in _TERMINAL

    def subscribe(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def advance(self, state: ProcessingState) -> None:
        """
        Moves to the next non-error state.

        Raises:
            IllegalStateTransitionError: If the move breaks the ordering.
        """
        if state not in _TRANSITIONS[self._state]:
            raise IllegalStateTransitionError(self._state.value, state.value)
        self._enter(state)

    def fail(self, message: str, detail: str | None = None) -> None:
        """
        Moves to the terminal error state with a human-readable message.

        Raises:
            IllegalStateTransitionError: If the tracker already finished.
        """
        if self.is_terminal:
            raise IllegalStateTransitionError(
                self._state.value, ProcessingState.ERROR.value
            )
        self._message = message
        self._detail = detail
        self._enter(ProcessingState.ERROR)

    def snapshot(self) -> ProcessingStatus:
        return ProcessingStatus(
            state=self._state,
            message=self._message,
            detail=self._detail,
            history=list(self._history),
        )

    def _enter(self, state: ProcessingState) -> None:
        previous = self._state
        self._state = state
        self._history.append(StateChange(state=state))
        logger.info(
            "Processing state changed",
            extra={"from_state": previous.value, "to_state": state.value},
        )
        status = self.snapshot()
        for listener in self._listeners:
            listener(status)
