"""Tests for the threaded Countdown and its use by SessionController."""
import threading
import time

from fakes import FakeRentalClient, registered, started
from rentalplayer.core.countdown import Countdown
from rentalplayer.core.session_controller import SessionController
from rentalplayer.models.screen import Screen


def _wait_for(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return False


def test_countdown_ticks_until_cancelled():
    ticks = []
    three = threading.Event()

    def on_tick(handle):
        ticks.append(handle)
        if len(ticks) >= 3:
            three.set()

    countdown = Countdown(0.01, on_tick)
    countdown.start()
    assert three.wait(timeout=2.0)
    countdown.cancel()
    count = len(ticks)
    time.sleep(0.05)

    assert not countdown.running
    # At most one tick that had already woken up
    assert len(ticks) <= count + 1
    assert all(handle is countdown for handle in ticks)


def test_cancel_from_inside_tick():
    ticks = []

    def on_tick(handle):
        ticks.append(1)
        handle.cancel()

    countdown = Countdown(0.01, on_tick)
    countdown.start()
    assert _wait_for(lambda: ticks)
    time.sleep(0.05)

    assert ticks == [1]
    assert not countdown.running


def test_start_twice_runs_one_thread():
    ticks = []
    countdown = Countdown(0.01, lambda handle: ticks.append(1))
    countdown.start()
    first = countdown._thread
    countdown.start()

    assert countdown._thread is first
    countdown.cancel()


def test_controller_ends_rental_with_real_countdown():
    client = FakeRentalClient(register_result=registered(), start_result=started(3))
    controller = SessionController("tag-1", client, tick_seconds=0.05)
    controller.mount()
    controller.start_rental()
    controller.play()

    assert _wait_for(lambda: controller.screen == Screen.ENDED)
    time.sleep(0.05)
    record = controller.snapshot()
    assert record.hours_remaining == 0
    assert record.video_visible is False
    controller.close()
