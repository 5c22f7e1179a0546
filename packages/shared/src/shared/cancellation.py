from __future__ import annotations


class QueryCancelledError(Exception):
    """Raised when a superseded query tries to continue."""


class CancellationToken:
    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise QueryCancelledError("query was superseded by a newer request")


class LatestRequestGuard:
    """Issues tokens so that only the most recent request may commit its result."""

    def __init__(self) -> None:
        self._current: CancellationToken | None = None

    @property
    def current(self) -> CancellationToken | None:
        return self._current

    def issue(self) -> CancellationToken:
        if self._current is not None:
            self._current.cancel()
        self._current = CancellationToken()
        return self._current

    def cancel_all(self) -> None:
        if self._current is not None:
            self._current.cancel()
