# core/common/app_context.py
"""
Global runtime context & session owner for RAMSToolPy.

Holds the signed-in user and notifies subscribers about login/logout so
features (signature dialog, audit logger) can react without importing
each other.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Literal, Optional

from core.models.user import User

logger = logging.getLogger(__name__)

SessionEventType = Literal["login", "logout", "user_changed"]


@dataclass(frozen=True, slots=True)
class UserSessionEvent:
    """One session change, delivered to subscribers."""

    type: SessionEventType
    old_user: Optional[User]
    new_user: Optional[User]
    reason: str
    ts_utc: datetime


SessionCallback = Callable[[UserSessionEvent], None]


class AppContext:
    """Central runtime context (no GUI state)."""

    current_user: Optional[User] = None

    _session_subscribers: list[SessionCallback] = []

    # ---------- Session ----------------------------------------------
    @classmethod
    def get_current_user(cls) -> Optional[User]:
        return cls.current_user

    @classmethod
    def set_current_user(cls, user: Optional[User], *, reason: str = "login") -> None:
        old = cls.current_user
        cls.current_user = user
        if old is None and user is not None:
            ev_type: SessionEventType = "login"
        elif user is None:
            ev_type = "logout"
        else:
            ev_type = "user_changed"
        if old is None and user is None:
            return
        cls._emit(UserSessionEvent(
            type=ev_type,
            old_user=old,
            new_user=user,
            reason=reason,
            ts_utc=datetime.now(timezone.utc),
        ))

    @classmethod
    def clear_current_user(cls, *, reason: str = "logout") -> None:
        cls.set_current_user(None, reason=reason)

    @classmethod
    def subscribe_user_session(cls, callback: SessionCallback) -> None:
        if callback not in cls._session_subscribers:
            cls._session_subscribers.append(callback)

    @classmethod
    def unsubscribe_user_session(cls, callback: SessionCallback) -> None:
        if callback in cls._session_subscribers:
            cls._session_subscribers.remove(callback)

    @classmethod
    def _emit(cls, event: UserSessionEvent) -> None:
        logger.debug("Session event %s (%s)", event.type, event.reason)
        for cb in list(cls._session_subscribers):
            cb(event)
