"""Invalidation signal for owner listing views."""

import logging
from typing import Awaitable, Callable, List, Optional

Listener = Callable[[str, str], Awaitable[None]]

DASHBOARD_PATH = "/dashboard"


class Revalidator:
    """Tells listing views that an owner's links changed.

    Listeners are awaited in registration order. A failing listener is
    logged; the mutation that triggered it has already been committed.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    async def revalidate(self, owner_id: str, path: str = DASHBOARD_PATH) -> None:
        self.logger.debug(f"Revalidating {path} for owner {owner_id}")
        for listener in self._listeners:
            try:
                await listener(owner_id, path)
            except Exception:
                self.logger.exception(f"Revalidation listener failed for {path}")
