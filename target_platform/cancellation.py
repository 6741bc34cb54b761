"""Cooperative cancellation for long-running resolutions."""

import threading


class CancellationToken:
    """Flag polled by resolvers at fixed checkpoints.

    Cancelling never interrupts work in flight; the next checkpoint a resolver
    reaches returns an empty result instead.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Signal cancellation. Safe to call from any thread."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancelled})"
