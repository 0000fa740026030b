import asyncio

import pytest

from starquery.config import Environment, StarQueryConfig, set_config


@pytest.fixture(autouse=True)
def testing_config():
    """Give every test a fresh testing configuration"""
    config = StarQueryConfig.for_environment(Environment.TESTING)
    set_config(config)
    yield config
    set_config(None)


class FetchRecorder:
    """Async fetch function that records calls and can be held open"""

    def __init__(self, result=None, error=None, hold=False):
        self.result = result
        self.error = error
        self.calls = []
        self.gate = asyncio.Event()
        if not hold:
            self.gate.set()

    async def __call__(self, params):
        self.calls.append(params)
        await self.gate.wait()
        if self.error is not None:
            raise self.error
        if callable(self.result):
            return self.result(len(self.calls))
        return self.result

    @property
    def call_count(self):
        return len(self.calls)

    def release(self):
        self.gate.set()


@pytest.fixture
def recorder():
    return FetchRecorder
