"""Core services: rental backend client, countdown, session state machine."""
from rentalplayer.core.countdown import Countdown
from rentalplayer.core.rental_client import RentalClient, RentalServiceError
from rentalplayer.core.session_controller import ActionNotAvailable, SessionController

__all__ = [
    "ActionNotAvailable",
    "Countdown",
    "RentalClient",
    "RentalServiceError",
    "SessionController",
]
