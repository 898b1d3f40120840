"""States, the state machine that drives them and the registry that holds them."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, ClassVar, Optional

from .events import EVENT_POOL_SIZE, Event, EventType

MAX_STATES = 10

ErrorHandler = Callable[[int, str], object]

_log = logging.getLogger(__name__)


class State(ABC):
    """One mode of the device.

    Subclasses set ``ID`` to a unique identifier and ``name`` to a readable
    name, and decide in ``handle_event`` whether they handled an event.
    """

    ID: ClassVar[int] = 0
    name: ClassVar[str] = ""

    def on_enter(self) -> None:
        """Called when the machine enters this state; logs the entry."""
        _log.debug("enter %s", self.name)

    def on_exit(self) -> None:
        """Called when the machine leaves this state; logs the exit."""
        _log.debug("exit %s", self.name)

    @abstractmethod
    def handle_event(self, machine: "StateMachine", event: Event) -> bool:
        """Process ``event``; return whether it was handled."""


class StateMachine:
    """Runs the current state, switches between states and pools events."""

    def __init__(self) -> None:
        self._current: Optional[State] = None
        self._previous: Optional[State] = None
        self._error_state: Optional[State] = None
        self._error_handler: Optional[ErrorHandler] = None
        self._handling = False
        self._events = [Event() for _ in range(EVENT_POOL_SIZE)]
        self.reset()

    @property
    def current_state(self) -> Optional[State]:
        """The active state, or None before ``init``."""
        return self._current

    @property
    def previous_state(self) -> Optional[State]:
        """The state active before the last change, if any."""
        return self._previous

    @property
    def error_state(self) -> Optional[State]:
        """The state switched to by ``handle_error``, if any."""
        return self._error_state

    def init(self, initial_state: State, error_state: Optional[State] = None) -> None:
        """Start in ``initial_state``, remembering ``error_state`` for errors."""
        if initial_state is None:
            raise ValueError("an initial state is required")
        self._current = initial_state
        self._error_state = error_state
        initial_state.on_enter()

    def handle_event(self, event: Optional[Event]) -> bool:
        """Pass ``event`` to the current state and return whether it was handled.

        Returns False when there is no current state or no event, and for an
        event raised while another is still being handled.
        """
        if self._current is None or event is None or self._handling:
            return False
        self._handling = True
        try:
            return bool(self._current.handle_event(self, event))
        finally:
            self._handling = False

    def change_state(self, new_state: Optional[State]) -> bool:
        """Leave the current state and enter ``new_state``.

        Returns False, changing nothing, when ``new_state`` is None or is
        already the current state.
        """
        if new_state is None or new_state is self._current:
            return False
        if self._current is not None:
            self._current.on_exit()
        self._previous = self._current
        self._current = new_state
        new_state.on_enter()
        return True

    def go_to_previous_state(self) -> bool:
        """Return to the state active before the last change, if there was one."""
        if self._previous is None:
            return False
        return self.change_state(self._previous)

    def set_error_handler(self, handler: Optional[ErrorHandler]) -> None:
        """Install a callable taking an error code and a message."""
        self._error_handler = handler

    def handle_error(self, code: int, message: str) -> None:
        """Report an error to the handler and switch to the error state."""
        if self._error_handler is not None:
            self._error_handler(code, message)
        if self._error_state is not None and self._current is not self._error_state:
            self.change_state(self._error_state)

    def get_event(self, event_type: EventType) -> Optional[Event]:
        """Take a free event from the pool, typed ``event_type``; None if all are in use."""
        event = next((candidate for candidate in self._events if not candidate.in_use), None)
        if event is not None:
            event.type = event_type
            event.in_use = True
        return event

    def recycle_event(self, event: Optional[Event]) -> None:
        """Give ``event`` back to the pool."""
        if event is not None:
            event.in_use = False

    def reset(self) -> None:
        """Free every pooled event and clear its type."""
        for event in self._events:
            event.type = EventType.NONE
            event.in_use = False


class StateManager:
    """Registry of states by ID, shared through ``get_instance``.

    State IDs from 1 to ``MAX_STATES - 1`` can be registered.
    """

    _instance: ClassVar[Optional["StateManager"]] = None

    def __init__(self) -> None:
        self._states: dict[int, State] = {}

    @classmethod
    def get_instance(cls) -> "StateManager":
        """Return the shared manager, creating it on first use."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def release_instance(cls) -> None:
        """Drop the shared manager and every state it holds."""
        cls._instance = None

    def register_state(self, state: State) -> None:
        """Register ``state`` under its ID, replacing any state with that ID."""
        if state is None:
            raise ValueError("a state is required")
        state_id = state.ID
        if not 1 <= state_id < MAX_STATES:
            raise ValueError(f"state ID {state_id} is outside 1..{MAX_STATES - 1}")
        self._states[state_id] = state
        _log.info("add state : %s,%d", state.name, state_id)

    def get_state(self, index: int) -> Optional[State]:
        """Return the state registered under ID ``index``, or None."""
        return self._states.get(index)

    def state_count(self) -> int:
        """Return how many states are registered."""
        return len(self._states)