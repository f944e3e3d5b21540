"""Screens, user actions, and the playback surface description."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Screen(Enum):
    """What the page shows; exactly one at a time."""
    LOADING = "loading"
    ERROR = "error"
    AUTHORIZING = "authorizing"
    IDLE = "idle"
    ACTIVE = "active"
    ENDED = "ended"


class Action(Enum):
    """User affordances."""
    START_RENTAL = "start_rental"
    PLAY = "play"
    RENT_AGAIN = "rent_again"
    CLOSE_VIDEO = "close_video"


@dataclass
class PlaybackSurface:
    """Video element settings: HLS stream, muted autoplay, anonymous CORS."""
    url: str
    autoplay: bool = True
    muted: bool = True  # browsers block unmuted autoplay
    controls: bool = True
    force_hls: bool = True
    cross_origin: str = "anonymous"
    closable: bool = True


@dataclass
class ScreenView:
    """Rendered screen: heading/message, the single offered button, optional video."""
    screen: Screen
    heading: Optional[str] = None
    message: Optional[str] = None
    action: Optional[Action] = None
    button_label: Optional[str] = None
    hours_label: Optional[str] = None
    playback: Optional[PlaybackSurface] = None
