"""Tests für die einmalige Wiederholung."""

import pytest

from irmagi.errors import LinkTimeout, LinkUnavailable, ProtocolMismatch
from irmagi.retry import Result, with_retry


class Recorder:
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0
        self.reconnects = 0
        self.sleeps = []

    def operation(self):
        self.calls += 1
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def reconnect(self):
        self.reconnects += 1

    def sleep(self, seconds):
        self.sleeps.append(seconds)


def test_success_first_time():
    r = Recorder(["ok"])
    result = with_retry(r.operation, r.reconnect, sleep=r.sleep)
    assert result.ok
    assert result.value == "ok"
    assert result.attempts == 1
    assert r.reconnects == 0
    assert r.sleeps == []


def test_fail_once_then_succeed():
    r = Recorder([LinkTimeout("timeout"), 42])
    result = with_retry(r.operation, r.reconnect, sleep=r.sleep)
    assert result.unwrap() == 42
    assert result.attempts == 2
    assert r.calls == 2
    assert r.reconnects == 1
    assert r.sleeps == [1.0]


def test_double_failure_returns_second_error():
    first = LinkTimeout("first")
    second = ProtocolMismatch("second", "NG")
    r = Recorder([first, second, "never"])
    result = with_retry(r.operation, r.reconnect, cooldown=0.5, sleep=r.sleep)

    assert not result.ok
    assert result.error is second
    assert r.calls == 2
    assert r.sleeps == [0.5]
    with pytest.raises(ProtocolMismatch):
        result.unwrap()


def test_unavailable_is_not_retried():
    r = Recorder([LinkUnavailable("unplugged"), "never"])
    result = with_retry(r.operation, r.reconnect, sleep=r.sleep)
    assert isinstance(result.error, LinkUnavailable)
    assert r.calls == 1
    assert r.reconnects == 0
    assert r.sleeps == []


def test_failed_reconnect_is_reported():
    r = Recorder([LinkTimeout("timeout"), "never"])

    def reconnect():
        raise LinkUnavailable("unplugged")

    result = with_retry(r.operation, reconnect, sleep=r.sleep)
    assert isinstance(result.error, LinkUnavailable)
    assert r.calls == 1


def test_result_unwrap_none_value():
    assert Result(value=None).unwrap() is None
