# tests/test_retry.py
import pytest
from playwright.sync_api import Error as PWError, TimeoutError as PWTimeoutError

from zeit_sudoku.errors import InteractionError, RetryExhaustedError, TransientInteractionFailure
from zeit_sudoku.retry import retry


class Flaky:
    """Fails `failures` times with `exc`, then returns "ok"."""

    def __init__(self, failures, exc=TransientInteractionFailure("not interactable")):
        self.failures = failures
        self.exc = exc
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.exc
        return "ok"


@pytest.mark.parametrize("k,max_attempts", [(0, 1), (1, 2), (3, 10), (9, 10)])
def test_succeeds_after_k_failures(no_sleep, k, max_attempts):
    action = Flaky(k)
    assert retry(action, max_attempts=max_attempts, backoff=0.2) == "ok"
    assert action.calls == k + 1
    assert no_sleep == [0.2] * k


@pytest.mark.parametrize("k,max_attempts", [(1, 1), (3, 3), (10, 4)])
def test_exhausts_after_max_attempts(no_sleep, k, max_attempts):
    action = Flaky(k)
    with pytest.raises(RetryExhaustedError) as exc:
        retry(action, max_attempts=max_attempts, backoff=0.1)
    assert action.calls == max_attempts
    assert exc.value.attempts == max_attempts
    assert exc.value.__cause__ is action.exc
    assert isinstance(exc.value, InteractionError)
    # No sleep after the final attempt
    assert len(no_sleep) == max_attempts - 1


def test_playwright_errors_are_recoverable(no_sleep):
    action = Flaky(2, exc=PWTimeoutError("Timeout 500ms exceeded."))
    assert retry(action, max_attempts=3) == "ok"

    action = Flaky(1, exc=PWError("Element is not attached to the DOM"))
    assert retry(action, max_attempts=3) == "ok"


def test_other_errors_propagate_immediately(no_sleep):
    action = Flaky(5, exc=KeyError("bad config"))
    with pytest.raises(KeyError):
        retry(action, max_attempts=10)
    assert action.calls == 1
    assert no_sleep == []


def test_custom_recoverable_kinds(no_sleep):
    action = Flaky(2, exc=ConnectionError("reset"))
    assert retry(action, max_attempts=5, recoverable=(ConnectionError,)) == "ok"
    assert action.calls == 3


@pytest.mark.parametrize("kwargs", [{"max_attempts": 0}, {"max_attempts": -2}, {"backoff": -1}])
def test_malformed_configuration(kwargs):
    action = Flaky(0)
    with pytest.raises(ValueError):
        retry(action, **kwargs)
    assert action.calls == 0
