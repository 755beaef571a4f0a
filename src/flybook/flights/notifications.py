"""Timed, queueable notifications.

Each notification goes CREATED (visible) -> FADING (hidden) -> REMOVED.
The queue owns one cancellable timer handle per entry. Timers run on a
scheduler with an asyncio-style ``call_later(delay, callback, *args)``;
by default, the running event loop.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from flybook.config import DEFAULT_DWELL, DEFAULT_GRACE

logger = logging.getLogger(__name__)


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class NotificationState(str, Enum):
    CREATED = "created"
    FADING = "fading"
    REMOVED = "removed"


@dataclass
class Notification:
    id: str
    title: str
    kind: NotificationKind
    description: Optional[str] = None
    state: NotificationState = NotificationState.CREATED
    timer: Any = field(default=None, repr=False, compare=False)

    @property
    def visible(self) -> bool:
        return self.state is NotificationState.CREATED


Listener = Callable[[List[Notification]], None]


class NotificationQueue:
    """Active notifications keyed by id, in insertion order."""

    def __init__(
        self,
        dwell: float = DEFAULT_DWELL,
        grace: float = DEFAULT_GRACE,
        scheduler=None,
    ):
        self.dwell = dwell
        self.grace = grace
        self._scheduler = scheduler
        self._entries: Dict[str, Notification] = {}
        self._listeners: List[Listener] = []

    def _get_scheduler(self):
        if self._scheduler is not None:
            return self._scheduler
        return asyncio.get_running_loop()

    def add_listener(self, listener: Listener) -> None:
        """Register a callback invoked with the active notifications on every change."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        snapshot = self.active()
        for listener in self._listeners:
            listener(snapshot)

    def enqueue(
        self,
        title: str,
        description: Optional[str] = None,
        kind: NotificationKind = NotificationKind.INFO,
    ) -> str:
        """Add a visible notification and start its dwell timer. Returns its id."""
        kind = NotificationKind(kind)
        notification = Notification(
            id=uuid.uuid4().hex,
            title=title,
            kind=kind,
            description=description,
        )
        notification.timer = self._get_scheduler().call_later(
            self.dwell, self._fade, notification.id
        )
        self._entries[notification.id] = notification
        logger.debug("Notification %s (%s): %s", notification.id, kind.value, title)
        self._notify()
        return notification.id

    def dismiss(self, notification_id: str) -> None:
        """Skip the remaining dwell; the entry is removed after the grace delay.

        Unknown or already-removed ids are ignored.
        """
        notification = self._entries.get(notification_id)
        if notification is None or notification.state is not NotificationState.CREATED:
            return
        notification.timer.cancel()
        self._fade(notification_id)

    def _fade(self, notification_id: str) -> None:
        notification = self._entries.get(notification_id)
        if notification is None:
            return
        notification.state = NotificationState.FADING
        notification.timer = self._get_scheduler().call_later(
            self.grace, self._remove, notification_id
        )
        self._notify()

    def _remove(self, notification_id: str) -> None:
        notification = self._entries.pop(notification_id, None)
        if notification is None:
            return
        notification.state = NotificationState.REMOVED
        notification.timer = None
        self._notify()

    def get(self, notification_id: str) -> Optional[Notification]:
        return self._entries.get(notification_id)

    def active(self) -> List[Notification]:
        """Notifications not yet removed, in insertion order."""
        return list(self._entries.values())

    def clear(self) -> None:
        """Cancel every timer and drop all notifications."""
        for notification in self._entries.values():
            if notification.timer is not None:
                notification.timer.cancel()
            notification.state = NotificationState.REMOVED
            notification.timer = None
        self._entries.clear()
        self._notify()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, notification_id: str) -> bool:
        return notification_id in self._entries
