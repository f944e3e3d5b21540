"""Rental session state machine: authorize, start, play, count down, expire, rent again."""
import dataclasses
import logging
import math
import threading
import time
from typing import Callable, Optional

from rentalplayer.config import DEFAULT_DURATION_HOURS, TICK_SECONDS, VIDEO_URL
from rentalplayer.core.countdown import Countdown
from rentalplayer.core.rental_client import RentalClient, RentalServiceError
from rentalplayer.core.screen import derive_screen, lifecycle, render
from rentalplayer.models.rental import RegistrationResponse, StartRentalResponse
from rentalplayer.models.screen import Screen, ScreenView
from rentalplayer.models.session import SessionRecord

logger = logging.getLogger(__name__)

MS_PER_HOUR = 1000 * 60 * 60

NO_RENTAL_ID = "No rental ID found"
REGISTER_FAILED = "Failed to check rental status. Please try again."
START_FAILED = "Failed to start rental. Please try again."
PLAYBACK_FAILED = "Failed to play video. Please try again."


class ActionNotAvailable(Exception):
    """The requested action is not offered in the current state."""

    def __init__(self, action: str, screen: Screen) -> None:
        super().__init__(f"{action} is not available on the {screen.value} screen")
        self.action = action
        self.screen = screen


def _now_ms() -> float:
    return time.time() * 1000


class SessionController:
    """Owns one SessionRecord and every transition on it.

    Transitions run to completion under a lock. Network calls are made with
    the lock released and their results applied afterwards; once close() has
    been called, late results and ticks are dropped without touching state.
    The countdown runs exactly while the rental is active and the session
    is open.
    """

    def __init__(
        self,
        tag_id: Optional[str],
        client: RentalClient,
        *,
        video_url: str = VIDEO_URL,
        tick_seconds: float = TICK_SECONDS,
        countdown_factory: Callable[..., Countdown] = Countdown,
        clock: Callable[[], float] = _now_ms,
    ) -> None:
        self._record = SessionRecord(tag_id=tag_id or None)
        self._client = client
        self._video_url = video_url
        self._tick_seconds = tick_seconds
        self._countdown_factory = countdown_factory
        self._clock = clock
        self._lock = threading.Lock()
        self._countdown: Optional[Countdown] = None
        self._registering = False
        self._closed = False

    @property
    def tag_id(self) -> Optional[str]:
        return self._record.tag_id

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> SessionRecord:
        """Copy of the current record."""
        with self._lock:
            return dataclasses.replace(self._record)

    @property
    def screen(self) -> Screen:
        return derive_screen(self.snapshot())

    def view(self) -> ScreenView:
        return self.current()[1]

    def current(self) -> tuple[SessionRecord, ScreenView]:
        """Record and its rendered view, both from one snapshot."""
        record = self.snapshot()
        return record, render(record, self._video_url)

    # --- registration -----------------------------------------------------

    def mount(self) -> None:
        """Run the registration check once per session. Later calls are no-ops."""
        with self._lock:
            r = self._record
            if self._closed or not r.tag_id or r.auth_checked or r.authorized or self._registering:
                return
            self._registering = True
            r.loading = True
            tag_id = r.tag_id

        result: Optional[RegistrationResponse] = None
        try:
            result = self._client.register(tag_id)
        except RentalServiceError as e:
            logger.warning("Registration for %s failed: %s", tag_id, e)

        with self._lock:
            self._registering = False
            if self._closed:
                logger.info("Session %s closed, dropping registration result", tag_id)
                return
            r = self._record
            if result is None:
                r.error = REGISTER_FAILED
            elif result.success:
                self._apply_registration(result)
            else:
                r.error = result.message or REGISTER_FAILED
                logger.info("Registration rejected for %s: %s", tag_id, r.error)
            r.loading = False
            r.auth_checked = True
            self._sync_countdown()

    def _apply_registration(self, result: RegistrationResponse) -> None:
        r = self._record
        r.authorized = True
        data = result.data
        if data is not None and data.start_time:
            duration = data.duration_hours or DEFAULT_DURATION_HOURS
            elapsed = (self._clock() - data.start_time) / MS_PER_HOUR
            if elapsed < duration:
                # A start time in the future never yields more than the full window
                remaining = min(math.floor(duration - elapsed), math.floor(duration))
                r.rental_active = True
                r.rental_ended = False
                r.hours_remaining = max(0, remaining)
                logger.info("Tag %s has an active rental, %d hours left", r.tag_id, r.hours_remaining)
                return
        # No prior rental, or it expired before this page view: offer a fresh start
        r.rental_active = False
        r.rental_ended = False
        logger.info("Tag %s authorized, no active rental", r.tag_id)

    # --- user actions -----------------------------------------------------

    def start_rental(self) -> None:
        """Ask the backend to start a rental window for this tag."""
        with self._lock:
            r = self._record
            if self._closed:
                raise ActionNotAvailable("start_rental", derive_screen(r))
            if not r.tag_id:
                r.error = NO_RENTAL_ID
                return
            self._require(
                "start_rental",
                not r.loading and r.authorized and lifecycle(r) == Screen.IDLE,
            )
            r.loading = True
            tag_id = r.tag_id

        result: Optional[StartRentalResponse] = None
        try:
            result = self._client.start(tag_id)
        except RentalServiceError as e:
            logger.warning("Start rental for %s failed: %s", tag_id, e)

        with self._lock:
            if self._closed:
                logger.info("Session %s closed, dropping start result", tag_id)
                return
            r = self._record
            if result is None:
                r.error = START_FAILED
            elif result.success:
                r.rental_active = True
                r.rental_ended = False
                if result.hours_remaining is None:
                    r.hours_remaining = DEFAULT_DURATION_HOURS
                else:
                    r.hours_remaining = max(0, math.floor(result.hours_remaining))
                r.error = None
                logger.info("Rental started for %s, %d hours", tag_id, r.hours_remaining)
            else:
                r.error = result.message or START_FAILED
                logger.info("Start rental rejected for %s: %s", tag_id, r.error)
            r.loading = False
            self._sync_countdown()

    def play(self) -> None:
        """Mount the playback surface."""
        with self._lock:
            r = self._record
            self._require("play", derive_screen(r) == Screen.ACTIVE and not r.video_visible)
            r.video_visible = True
            logger.info("Playback opened for %s", r.tag_id)

    def close_video(self) -> None:
        """Unmount the playback surface; the rental keeps counting down."""
        with self._lock:
            r = self._record
            self._require("close_video", r.video_visible)
            r.video_visible = False
            logger.info("Playback closed for %s", r.tag_id)

    def rent_again(self) -> None:
        """Return an ended rental to the start screen. No network call."""
        with self._lock:
            r = self._record
            self._require(
                "rent_again",
                not r.loading and r.authorized and lifecycle(r) == Screen.ENDED,
            )
            r.rental_active = False
            r.video_visible = False
            r.rental_ended = False
            r.hours_remaining = DEFAULT_DURATION_HOURS
            r.error = None
            self._sync_countdown()
            logger.info("Rent again for %s", r.tag_id)

    def report_playback_error(self, detail: Optional[str] = None) -> None:
        """The playback surface failed; replace it with an error."""
        with self._lock:
            r = self._record
            self._require("playback_error", r.video_visible)
            logger.warning("Player error for %s: %s", r.tag_id, detail)
            r.video_visible = False
            r.error = PLAYBACK_FAILED

    # --- countdown --------------------------------------------------------

    def tick(self) -> None:
        """One rental hour has passed."""
        with self._lock:
            self._tick_locked()

    def _on_countdown(self, countdown: Countdown) -> None:
        with self._lock:
            if countdown is not self._countdown:
                return
            self._tick_locked()

    def _tick_locked(self) -> None:
        r = self._record
        if self._closed or not (r.authorized and r.rental_active):
            return
        r.hours_remaining = max(r.hours_remaining - 1, 0)
        logger.debug("Tick for %s: %d hours left", r.tag_id, r.hours_remaining)
        if r.hours_remaining == 0:
            r.rental_active = False
            r.video_visible = False
            r.rental_ended = True
            logger.info("Rental ended for %s", r.tag_id)
            self._sync_countdown()

    def _sync_countdown(self) -> None:
        r = self._record
        should_run = not self._closed and r.authorized and r.rental_active
        if should_run and self._countdown is None:
            self._countdown = self._countdown_factory(self._tick_seconds, self._on_countdown)
            self._countdown.start()
        elif not should_run and self._countdown is not None:
            self._countdown.cancel()
            self._countdown = None

    # --- teardown ---------------------------------------------------------

    def close(self) -> None:
        """Tear down: stop the countdown and ignore anything still in flight."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._sync_countdown()
            logger.info("Session for %s closed", self._record.tag_id)

    def _require(self, action: str, allowed: bool) -> None:
        if self._closed or not allowed:
            raise ActionNotAvailable(action, derive_screen(self._record))
