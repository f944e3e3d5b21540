"""Shared application state (injected into routes)."""
import logging
import threading
import time
import uuid
from typing import Callable, Dict, List, Optional

from rentalplayer.config import SESSION_TTL_SEC
from rentalplayer.core.rental_client import RentalClient
from rentalplayer.core.session_controller import SessionController

logger = logging.getLogger(__name__)


class AppState:
    """Open page views, keyed by session id.

    A page view that is not touched for ttl_sec is treated as navigated away
    and closed on the next access or sweep.
    """

    def __init__(
        self,
        client_factory: Callable[[], RentalClient] = RentalClient,
        controller_factory: Callable[..., SessionController] = SessionController,
        ttl_sec: float = SESSION_TTL_SEC,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client_factory = client_factory
        self._controller_factory = controller_factory
        self._ttl_sec = ttl_sec
        self._clock = clock
        self._client: RentalClient | None = None
        self._sessions: Dict[str, SessionController] = {}
        self._last_seen: Dict[str, float] = {}
        self._lock = threading.Lock()

    @property
    def client(self) -> RentalClient:
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    def create_session(self, tag_id: Optional[str]) -> tuple[str, SessionController]:
        """Open a page view for tag_id. The caller runs mount()."""
        self.evict_expired()
        session_id = str(uuid.uuid4())
        controller = self._controller_factory(tag_id, self.client)
        with self._lock:
            self._sessions[session_id] = controller
            self._last_seen[session_id] = self._clock()
        logger.info("Session %s opened (tag %s)", session_id, tag_id)
        return session_id, controller

    def get_session(self, session_id: str) -> SessionController | None:
        self.evict_expired()
        with self._lock:
            controller = self._sessions.get(session_id)
            if controller is not None:
                self._last_seen[session_id] = self._clock()
            return controller

    def list_sessions(self) -> List[str]:
        with self._lock:
            return list(self._sessions)

    def discard_session(self, session_id: str) -> bool:
        """Tear down and forget a page view. Returns True if it existed."""
        with self._lock:
            controller = self._sessions.pop(session_id, None)
            self._last_seen.pop(session_id, None)
        if controller is None:
            return False
        controller.close()
        logger.info("Session %s discarded", session_id)
        return True

    def evict_expired(self) -> List[str]:
        """Close page views idle longer than the TTL, or already closed. Returns their ids."""
        now = self._clock()
        with self._lock:
            expired = [
                session_id
                for session_id, controller in self._sessions.items()
                if controller.closed or now - self._last_seen[session_id] > self._ttl_sec
            ]
        for session_id in expired:
            logger.info("Session %s idle for over %.0fs, evicting", session_id, self._ttl_sec)
            self.discard_session(session_id)
        return expired

    def close_all(self) -> None:
        for session_id in self.list_sessions():
            self.discard_session(session_id)


_state = AppState()


def get_state() -> AppState:
    return _state
