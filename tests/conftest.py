from __future__ import annotations

from collections.abc import Iterator

import pytest

from abattler.events import reset_event_bus_for_testing


@pytest.fixture(autouse=True)
def fresh_event_bus() -> Iterator[None]:
    """Give every test its own event bus."""
    reset_event_bus_for_testing()
    yield
    reset_event_bus_for_testing()
