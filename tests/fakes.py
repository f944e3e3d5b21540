"""Fakes for the rental backend and countdown."""
from rentalplayer.models.rental import RegistrationResponse, RentalData, StartRentalResponse

NOW_MS = 1_700_000_000_000
HOUR_MS = 60 * 60 * 1000


class FakeRentalClient:
    """Returns canned responses (or raises) and records every call."""

    def __init__(self, register_result=None, start_result=None):
        self.register_result = register_result
        self.start_result = start_result
        self.register_calls = []
        self.start_calls = []

    def register(self, tag_id):
        self.register_calls.append(tag_id)
        if isinstance(self.register_result, Exception):
            raise self.register_result
        return self.register_result

    def start(self, tag_id):
        self.start_calls.append(tag_id)
        if isinstance(self.start_result, Exception):
            raise self.start_result
        return self.start_result


class FakeCountdown:
    """Countdown stand-in that only ticks when fire() is called."""

    instances = []

    def __init__(self, interval_sec, on_tick):
        self.interval_sec = interval_sec
        self._on_tick = on_tick
        self.started = False
        self.cancelled = False
        FakeCountdown.instances.append(self)

    @property
    def running(self):
        return self.started and not self.cancelled

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self._on_tick(self)


def registered(start_time=None, duration_hours=None):
    data = None
    if start_time is not None or duration_hours is not None:
        data = RentalData(start_time=start_time, duration_hours=duration_hours)
    return RegistrationResponse(success=True, data=data)


def started(hours_remaining=24):
    return StartRentalResponse(success=True, hours_remaining=hours_remaining)
