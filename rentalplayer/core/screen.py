"""Map a session record to the screen the page shows. Pure functions, no I/O."""
from typing import Optional

from rentalplayer.models.screen import Action, PlaybackSurface, Screen, ScreenView
from rentalplayer.models.session import SessionRecord

BUTTON_LABELS = {
    Action.START_RENTAL: "Start Rental",
    Action.PLAY: "Play",
    Action.RENT_AGAIN: "Rent Again",
    Action.CLOSE_VIDEO: "X",
}


def lifecycle(record: SessionRecord) -> Screen:
    """Rental lifecycle only (IDLE, ACTIVE or ENDED), ignoring loading/error/auth."""
    if record.rental_active:
        return Screen.ACTIVE
    if record.rental_ended:
        return Screen.ENDED
    return Screen.IDLE


def derive_screen(record: SessionRecord) -> Screen:
    """Loading > Error > Authorizing > rental lifecycle."""
    if record.loading:
        return Screen.LOADING
    if record.error:
        return Screen.ERROR
    if not record.authorized:
        return Screen.AUTHORIZING
    return lifecycle(record)


def offered_action(record: SessionRecord) -> Optional[Action]:
    """The single button currently on screen, or None."""
    screen = derive_screen(record)
    if screen == Screen.IDLE:
        return Action.START_RENTAL
    if screen == Screen.ACTIVE:
        return Action.CLOSE_VIDEO if record.video_visible else Action.PLAY
    if screen == Screen.ENDED:
        return Action.RENT_AGAIN
    return None


def render(record: SessionRecord, video_url: str) -> ScreenView:
    """Build the full view for a record."""
    screen = derive_screen(record)
    if screen == Screen.LOADING:
        return ScreenView(screen=screen, heading="Loading...")
    if screen == Screen.ERROR:
        return ScreenView(screen=screen, heading="Error", message=record.error)
    if screen == Screen.AUTHORIZING:
        return ScreenView(screen=screen, heading="Authorizing...")

    action = offered_action(record)
    view = ScreenView(screen=screen, action=action, button_label=BUTTON_LABELS[action])
    if screen == Screen.ACTIVE:
        if record.video_visible:
            view.playback = PlaybackSurface(url=video_url)
        else:
            view.hours_label = f"{record.hours_remaining} Hours Remaining"
    return view
