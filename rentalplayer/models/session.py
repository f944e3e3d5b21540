"""Per-page-view rental session state."""
from dataclasses import dataclass
from typing import Optional

from rentalplayer.config import DEFAULT_DURATION_HOURS


@dataclass
class SessionRecord:
    """In-memory state of one page view. Mutated only by SessionController."""
    tag_id: Optional[str]
    authorized: bool = False
    auth_checked: bool = False
    rental_active: bool = False
    rental_ended: bool = False
    hours_remaining: int = DEFAULT_DURATION_HOURS
    error: Optional[str] = None
    loading: bool = False
    video_visible: bool = False
