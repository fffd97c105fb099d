"""Shared fixtures for the test suite."""

import pytest

from src.core.controller import RunController
from src.core.store import ResultStore


class ManualTicker:
    """Stand-in for RepeatingTimer that only fires when told to."""

    instances: list = []

    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.started = False
        self.cancelled = False
        ManualTicker.instances.append(self)

    def start(self):
        self.started = True
        self.live_at_start = [
            t for t in ManualTicker.instances
            if t is not self and t.started and not t.cancelled
        ]

    def cancel(self):
        self.cancelled = True

    def fire(self, times=1):
        for _ in range(times):
            if not self.cancelled:
                self.callback()


@pytest.fixture
def tickers():
    ManualTicker.instances = []
    return ManualTicker.instances


@pytest.fixture
def controller(tickers):
    ctrl = RunController(store=ResultStore(), ticker_factory=ManualTicker)
    yield ctrl
    ctrl.close()
