import logging
from dataclasses import dataclass
from typing import Callable, Optional

from utils.app_config import AppConfig

logger = logging.getLogger(__name__)

# reasons passed to listeners when a session ends
LOGOUT = "logout"
EXPIRED = "expired"


@dataclass(frozen=True)
class User:
    username: str


class Session:
    """Authenticated user plus bearer token, persisted across restarts.

    Constructed once at startup and passed to whatever needs it. Listeners
    registered with on_end() are told when the session goes away so the
    window can return to the login screen.
    """

    def __init__(self, config: AppConfig):
        self._config = config
        self._user: Optional[User] = None
        self._token: Optional[str] = None
        self._end_listeners: list[Callable[[str], None]] = []

    @property
    def user(self) -> Optional[User]:
        return self._user

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None and bool(self._token)

    def restore(self) -> bool:
        """Read persisted credentials; both token and username must be present."""
        stored = self._config.load()
        token, username = stored.get("token"), stored.get("username")
        if token and username:
            self._token = token
            self._user = User(username)
            logger.info("Session restored", extra={"username": username})
            return True
        return False

    def start(self, token: str, username: str) -> None:
        self._token = token
        self._user = User(username)
        self._config.update(token=token, username=username)
        logger.info("Session started", extra={"username": username})

    def clear(self) -> None:
        """Logout: forget credentials and tell listeners."""
        self._end(LOGOUT)

    def expire(self) -> None:
        """The backend rejected our token."""
        logger.warning("Session rejected by backend")
        self._end(EXPIRED)

    def on_end(self, listener: Callable[[str], None]) -> None:
        self._end_listeners.append(listener)

    def _end(self, reason: str) -> None:
        had_session = self.is_authenticated
        self._token = None
        self._user = None
        self._config.update(token=None, username=None)
        if had_session:
            for listener in list(self._end_listeners):
                listener(reason)
