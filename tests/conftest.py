import pytest

from calcstate.core.context import CalculatorContext
from calcstate.core.event_bus import EventBus
from calcstate.core.events import EventType
from calcstate.core.key_dispatcher import KeyDispatcher


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def context(bus):
    return CalculatorContext(bus=bus)


@pytest.fixture
def dispatcher(context):
    return KeyDispatcher(context)


@pytest.fixture
def state_changes(bus):
    """Collect STATE_CHANGED payloads published while the test runs."""
    received = []
    bus.subscribe(EventType.STATE_CHANGED, lambda event: received.append(event.data))
    return received
