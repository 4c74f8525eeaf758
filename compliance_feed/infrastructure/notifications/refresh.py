"""Single-subscriber signal asking the presentation layer to recompute the feed."""

from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)

RefreshListener = Callable[[], None]


class RefreshSignal:
    """Publish/subscribe channel with room for exactly one listener.

    Registering a listener silently replaces the previous one. Every
    successful store mutation calls :meth:`notify` once after persistence.
    """

    capacity = 1

    def __init__(self) -> None:
        self._listener: RefreshListener | None = None

    @property
    def has_listener(self) -> bool:
        return self._listener is not None

    @property
    def listener(self) -> RefreshListener | None:
        return self._listener

    def register(self, listener: RefreshListener) -> None:
        """Make ``listener`` the only subscriber."""

        if self._listener is not None and self._listener is not listener:
            logger.debug("Replacing the registered refresh listener")
        self._listener = listener

    def unregister(self, listener: RefreshListener) -> bool:
        """Remove ``listener`` if it is still the registered one."""

        if self._listener is not listener:
            return False
        self._listener = None
        return True

    def notify(self) -> None:
        """Invoke the registered listener, if any."""

        listener = self._listener
        if listener is None:
            return
        try:
            listener()
        except Exception:
            logger.exception("Refresh listener failed")


__all__ = ["RefreshListener", "RefreshSignal"]
