"""Cooperative cancellation for long project scans."""

import threading
from typing import Optional


class GateCancelledError(Exception):
    """Raised when a gate run is cancelled from outside."""

    pass


def raise_if_cancelled(cancel_event: Optional[threading.Event]) -> None:
    """Stop the current scan if cancellation has been requested.

    Args:
        cancel_event: Event set by the caller to request cancellation

    Raises:
        GateCancelledError: If the event is set
    """
    if cancel_event is not None and cancel_event.is_set():
        raise GateCancelledError("Gate run cancelled")
