from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import MutableMapping, Optional

from .model import PublicUser, Session

SESSION_KEY = "portal_session"


@dataclass(frozen=True)
class ClientSessionState:
    user: PublicUser
    token: str
    last_checked_at: float


class ClientSession:
    """The browser-held {user, token} pair.

    Lives in the signed Flask cookie session. `load` runs on every request,
    `store` after login and `clear` on logout or when the server reports the
    token as replaced. `needs_check` throttles server validation.
    """

    def __init__(self, storage: MutableMapping, *, check_interval: int = 10):
        self._storage = storage
        self._check_interval = int(check_interval)

    def load(self) -> Optional[ClientSessionState]:
        raw = self._storage.get(SESSION_KEY)
        if not raw:
            return None
        try:
            return ClientSessionState(
                user=PublicUser.from_dict(raw["user"]),
                token=str(raw["token"]),
                last_checked_at=float(raw.get("last_checked_at", 0)),
            )
        except (KeyError, TypeError, ValueError):
            # Corrupted cookie content: drop it rather than fail every request.
            self.clear()
            return None

    def store(self, session: Session) -> None:
        self._storage[SESSION_KEY] = {
            "user": session.user.to_dict(),
            "token": session.token,
            "last_checked_at": session.issued_at.timestamp(),
        }

    def clear(self) -> None:
        self._storage.pop(SESSION_KEY, None)

    def needs_check(self, state: ClientSessionState, now: datetime) -> bool:
        return now.timestamp() - state.last_checked_at >= self._check_interval

    def mark_checked(self, now: datetime) -> None:
        raw = self._storage.get(SESSION_KEY)
        if raw:
            raw = dict(raw)
            raw["last_checked_at"] = now.timestamp()
            self._storage[SESSION_KEY] = raw
