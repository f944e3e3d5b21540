import functools

import pytest

from fakes import NOW_MS, FakeCountdown, FakeRentalClient, registered, started
from rentalplayer.core.session_controller import SessionController

VIDEO_URL = "https://cdn.example/stream.m3u8"


@pytest.fixture(autouse=True)
def _reset_countdowns():
    FakeCountdown.instances.clear()
    yield
    FakeCountdown.instances.clear()


@pytest.fixture
def fake_client():
    return FakeRentalClient(register_result=registered(), start_result=started())


@pytest.fixture
def controller_factory():
    """SessionController with fake countdown and fixed clock; called as (tag_id, client)."""
    return functools.partial(
        SessionController,
        video_url=VIDEO_URL,
        tick_seconds=3600,
        countdown_factory=FakeCountdown,
        clock=lambda: NOW_MS,
    )


@pytest.fixture
def make_controller(controller_factory, fake_client):
    def _make(tag_id="tag-123", client=None):
        return controller_factory(tag_id, client or fake_client)
    return _make
