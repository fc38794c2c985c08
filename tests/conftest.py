import logging

import pytest

from typertrack import GeneratorContext


class FakeAnalytics:
    """Host SDK stand-in that records every call it receives."""

    def __init__(self):
        self.calls = []

    def _record(self, method, message):
        self.calls.append((method, message))
        return method

    def track(self, **message):
        return self._record("track", message)

    def screen(self, **message):
        return self._record("screen", message)

    def page(self, **message):
        return self._record("page", message)

    def identify(self, **message):
        return self._record("identify", message)

    def group(self, **message):
        return self._record("group", message)


@pytest.fixture
def context():
    return GeneratorContext(
        sdk="analytics-python",
        language="python",
        generator_version="1.0.0-beta.8",
        tracking_plan_id="trackingPlanId",
        tracking_plan_version="2",
    )


@pytest.fixture
def fake_analytics():
    return FakeAnalytics()


@pytest.fixture
def test_logger():
    """Create a logger for testing."""
    logger = logging.getLogger("test_logger")
    logger.setLevel(logging.DEBUG)
    return logger
