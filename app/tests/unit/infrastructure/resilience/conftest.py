"""Shared fixtures for resilience tests."""

import pytest

from infrastructure.operations import OperationResult


@pytest.fixture
def recorded_sleep():
    """Sleep replacement recording requested delays instead of waiting."""

    class RecordedSleep:
        def __init__(self):
            self.delays = []

        def __call__(self, seconds: float) -> None:
            self.delays.append(seconds)

    return RecordedSleep()


@pytest.fixture
def scripted_action():
    """Factory for actions replaying a scripted list of results.

    The last result repeats once the script is exhausted.
    """

    def _factory(*results: OperationResult):
        class ScriptedAction:
            def __init__(self):
                self.calls = 0

            def __call__(self) -> OperationResult:
                index = min(self.calls, len(results) - 1)
                self.calls += 1
                return results[index]

        return ScriptedAction()

    return _factory


@pytest.fixture
def network_error():
    return OperationResult.transient_error("connection reset", error_code="NETWORK")


@pytest.fixture
def permanent_error():
    return OperationResult.permanent_error("bad request", error_code="INVALID")
