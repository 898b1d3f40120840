import pytest

from sam2695.events import EVENT_POOL_SIZE, Event, EventType
from sam2695.machine import MAX_STATES, State, StateMachine, StateManager


class RecordingState(State):
    ID = 1
    name = "Recording"

    def __init__(self, log, label, handled=True):
        self.log = log
        self.label = label
        self.handled = handled
        self.events = []

    def on_enter(self):
        self.log.append(("enter", self.label))

    def on_exit(self):
        self.log.append(("exit", self.label))

    def handle_event(self, machine, event):
        self.events.append(event.type)
        return self.handled


class SecondState(RecordingState):
    ID = 2
    name = "Second"


class OutOfRangeState(RecordingState):
    ID = 100
    name = "Error"


class ReentrantState(State):
    ID = 3
    name = "Reentrant"

    def __init__(self):
        self.inner_results = []

    def handle_event(self, machine, event):
        self.inner_results.append(machine.handle_event(event))
        return True


@pytest.fixture
def manager():
    StateManager.release_instance()
    yield StateManager.get_instance()
    StateManager.release_instance()


def test_init_enters_initial_state():
    log = []
    machine = StateMachine()
    first = RecordingState(log, "a")
    machine.init(first, None)
    assert machine.current_state is first
    assert log == [("enter", "a")]


def test_init_requires_initial_state():
    machine = StateMachine()
    with pytest.raises(ValueError):
        machine.init(None, None)
    assert machine.current_state is None


def test_handle_event_without_state_or_event():
    machine = StateMachine()
    assert machine.handle_event(Event(EventType.A_PRESSED)) is False
    machine.init(RecordingState([], "a"), None)
    assert machine.handle_event(None) is False


def test_handle_event_delegates_to_current_state():
    state = RecordingState([], "a", handled=False)
    machine = StateMachine()
    machine.init(state, None)
    assert machine.handle_event(Event(EventType.B_PRESSED)) is False
    state.handled = True
    assert machine.handle_event(Event(EventType.C_LONG_PRESSED)) is True
    assert state.events == [EventType.B_PRESSED, EventType.C_LONG_PRESSED]


def test_reentrant_event_is_refused():
    state = ReentrantState()
    machine = StateMachine()
    machine.init(state, None)
    assert machine.handle_event(Event(EventType.A_PRESSED)) is True
    assert state.inner_results == [False]
    assert machine.handle_event(Event(EventType.A_PRESSED)) is True


def test_change_state_order_and_previous():
    log = []
    machine = StateMachine()
    first = RecordingState(log, "a")
    second = SecondState(log, "b")
    machine.init(first, None)
    assert machine.change_state(second) is True
    assert log == [("enter", "a"), ("exit", "a"), ("enter", "b")]
    assert machine.current_state is second
    assert machine.previous_state is first


def test_change_state_to_same_or_none_does_nothing():
    log = []
    machine = StateMachine()
    first = RecordingState(log, "a")
    machine.init(first, None)
    assert machine.change_state(first) is False
    assert machine.change_state(None) is False
    assert log == [("enter", "a")]


def test_go_to_previous_state():
    log = []
    machine = StateMachine()
    first = RecordingState(log, "a")
    second = SecondState(log, "b")
    machine.init(first, None)
    assert machine.go_to_previous_state() is False
    machine.change_state(second)
    assert machine.go_to_previous_state() is True
    assert machine.current_state is first
    assert machine.previous_state is second


def test_handle_error_calls_handler_and_switches():
    log = []
    reports = []
    machine = StateMachine()
    first = RecordingState(log, "a")
    error = OutOfRangeState(log, "err")
    machine.init(first, error)
    machine.set_error_handler(lambda code, message: reports.append((code, message)))
    machine.handle_error(7, "broken")
    assert reports == [(7, "broken")]
    assert machine.current_state is error
    machine.handle_error(8, "again")
    assert log.count(("enter", "err")) == 1
    assert reports[-1] == (8, "again")


def test_handle_error_without_error_state_stays():
    machine = StateMachine()
    first = RecordingState([], "a")
    machine.init(first, None)
    machine.handle_error(1, "no handler")
    assert machine.current_state is first


def test_event_pool_exhausts_and_recycles():
    machine = StateMachine()
    events = [machine.get_event(EventType.A_PRESSED) for _ in range(EVENT_POOL_SIZE)]
    assert all(event.in_use and event.type is EventType.A_PRESSED for event in events)
    assert len({id(event) for event in events}) == EVENT_POOL_SIZE
    assert machine.get_event(EventType.B_PRESSED) is None
    machine.recycle_event(events[1])
    reused = machine.get_event(EventType.D_LONG_PRESSED)
    assert reused is events[1]
    assert reused.type is EventType.D_LONG_PRESSED


def test_pool_holds_three_events():
    machine = StateMachine()
    taken = [machine.get_event(EventType.A_PRESSED) for _ in range(3)]
    assert all(event is not None for event in taken)
    assert machine.get_event(EventType.A_PRESSED) is None


def test_reset_frees_pool():
    machine = StateMachine()
    taken = [machine.get_event(EventType.C_PRESSED) for _ in range(EVENT_POOL_SIZE)]
    machine.reset()
    assert all(not event.in_use and event.type is EventType.NONE for event in taken)
    assert machine.get_event(EventType.A_PRESSED) is taken[0]


def test_recycle_none_is_harmless():
    machine = StateMachine()
    machine.recycle_event(None)
    assert machine.get_event(EventType.A_PRESSED).in_use is True


def test_manager_is_shared(manager):
    assert StateManager.get_instance() is manager
    StateManager.release_instance()
    assert StateManager.get_instance() is not manager


def test_register_and_get_state(manager):
    first = RecordingState([], "a")
    second = SecondState([], "b")
    manager.register_state(first)
    manager.register_state(second)
    assert manager.get_state(1) is first
    assert manager.get_state(2) is second
    assert manager.get_state(5) is None
    assert manager.state_count() == 2


def test_register_replaces_same_id(manager):
    first = RecordingState([], "a")
    replacement = RecordingState([], "z")
    manager.register_state(first)
    manager.register_state(replacement)
    assert manager.get_state(1) is replacement
    assert manager.state_count() == 1


def test_register_rejects_out_of_range(manager):
    with pytest.raises(ValueError):
        manager.register_state(OutOfRangeState([], "err"))
    with pytest.raises(ValueError):
        manager.register_state(None)
    assert manager.state_count() == 0


def test_get_state_out_of_range(manager):
    manager.register_state(RecordingState([], "a"))
    assert manager.get_state(-1) is None
    assert manager.get_state(MAX_STATES) is None
    assert manager.get_state(10) is None
    assert manager.get_state(0) is None