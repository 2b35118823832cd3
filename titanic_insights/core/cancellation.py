"""Explicit cancellation signal threaded through every port call.

Callers create one CancellationToken per request and pass it to
``handle()``. Handlers forward the same token to every repository and
validator call, and each of those checks it before doing work.
"""

import asyncio


class CancellationToken:
    """Cooperative cancellation flag for a single request."""

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: str | None = None

    @classmethod
    def none(cls) -> "CancellationToken":
        """Return a fresh token for callers that never cancel."""
        return cls()

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation. Calling it again keeps the first reason."""
        if self._cancelled:
            return
        self._cancelled = True
        self._reason = reason

    def raise_if_cancelled(self) -> None:
        """Raise asyncio.CancelledError if cancellation was requested.

        Raises:
            asyncio.CancelledError: If cancel() has been called.
        """
        if self._cancelled:
            raise asyncio.CancelledError(self._reason or "operation cancelled")

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self._cancelled})"
