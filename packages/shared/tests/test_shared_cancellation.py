import pytest

from shared.cancellation import CancellationToken, LatestRequestGuard, QueryCancelledError


def test_token_starts_live() -> None:
    token = CancellationToken()
    assert not token.cancelled
    token.raise_if_cancelled()


def test_cancelled_token_raises() -> None:
    token = CancellationToken()
    token.cancel()
    with pytest.raises(QueryCancelledError):
        token.raise_if_cancelled()


def test_guard_cancels_previous_token_on_issue() -> None:
    guard = LatestRequestGuard()
    first = guard.issue()
    second = guard.issue()

    assert first.cancelled
    assert not second.cancelled
    assert guard.current is second


def test_guard_cancel_all() -> None:
    guard = LatestRequestGuard()
    token = guard.issue()
    guard.cancel_all()
    assert token.cancelled
