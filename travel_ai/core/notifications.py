"""Side-channel for user-visible failure messages."""
from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import List, Optional, Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def notify(self, message: str) -> None:
        ...


class LogNotifier:
    """Default notifier: failures only reach the logs."""

    def notify(self, message: str) -> None:
        logger.warning("User notification: %s", message)


_banner_messages: ContextVar[Optional[List[str]]] = ContextVar("banner_messages", default=None)


class BannerNotifier:
    """Collect messages for the current request so they can be shown as a banner.

    Call :meth:`start` at the beginning of a request (each asyncio task has its
    own context) and :meth:`messages` once the work is done. Messages emitted
    outside a started context are only logged.
    """

    def start(self) -> List[str]:
        messages: List[str] = []
        _banner_messages.set(messages)
        return messages

    def messages(self) -> List[str]:
        return list(_banner_messages.get() or [])

    def notify(self, message: str) -> None:
        logger.warning("User notification: %s", message)
        messages = _banner_messages.get()
        if messages is not None:
            messages.append(message)
