"""Data models for the rental session, backend responses, and screens."""
from rentalplayer.models.rental import RegistrationResponse, RentalData, StartRentalResponse
from rentalplayer.models.screen import Action, PlaybackSurface, Screen, ScreenView
from rentalplayer.models.session import SessionRecord

__all__ = [
    "Action",
    "PlaybackSurface",
    "RegistrationResponse",
    "RentalData",
    "Screen",
    "ScreenView",
    "SessionRecord",
    "StartRentalResponse",
]
