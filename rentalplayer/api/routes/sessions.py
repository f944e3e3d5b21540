"""Page-view sessions: open with ?nfctagid=, act on the offered button, close."""
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import BaseModel

from rentalplayer.api.state import AppState, get_state
from rentalplayer.config import TAG_QUERY_PARAM
from rentalplayer.core.session_controller import ActionNotAvailable, SessionController
from rentalplayer.models.screen import PlaybackSurface, ScreenView
from rentalplayer.models.session import SessionRecord

router = APIRouter()


def _playback_to_dict(p: PlaybackSurface) -> dict:
    return {
        "url": p.url,
        "autoplay": p.autoplay,
        "muted": p.muted,
        "controls": p.controls,
        "force_hls": p.force_hls,
        "cross_origin": p.cross_origin,
        "closable": p.closable,
    }


def _record_to_dict(r: SessionRecord) -> dict:
    return {
        "tag_id": r.tag_id,
        "authorized": r.authorized,
        "auth_checked": r.auth_checked,
        "rental_active": r.rental_active,
        "rental_ended": r.rental_ended,
        "hours_remaining": r.hours_remaining,
        "error": r.error,
        "loading": r.loading,
        "video_visible": r.video_visible,
    }


def _view_to_dict(session_id: str, view: ScreenView, record: SessionRecord) -> dict:
    return {
        "session_id": session_id,
        "screen": view.screen.value,
        "heading": view.heading,
        "message": view.message,
        "action": view.action.value if view.action else None,
        "button_label": view.button_label,
        "hours_label": view.hours_label,
        "playback": _playback_to_dict(view.playback) if view.playback else None,
        "state": _record_to_dict(record),
    }


def _respond(session_id: str, controller: SessionController) -> dict:
    record, view = controller.current()
    return _view_to_dict(session_id, view, record)


def _get_controller(session_id: str, state: AppState) -> SessionController:
    controller = state.get_session(session_id)
    if controller is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return controller


def _run_action(session_id: str, state: AppState, action) -> dict:
    controller = _get_controller(session_id, state)
    try:
        action(controller)
    except ActionNotAvailable as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _respond(session_id, controller)


@router.post("")
def open_session(
    tag_id: Optional[str] = Query(None, alias=TAG_QUERY_PARAM),
    state: AppState = Depends(get_state),
):
    """Open a page view for the tag in ?nfctagid= and run the registration check."""
    session_id, controller = state.create_session(tag_id)
    controller.mount()
    return _respond(session_id, controller)


@router.get("/{session_id}")
def get_session(session_id: str, state: AppState = Depends(get_state)):
    """Return the current screen."""
    return _respond(session_id, _get_controller(session_id, state))


@router.post("/{session_id}/start")
def start_rental(session_id: str, state: AppState = Depends(get_state)):
    """Start Rental button."""
    return _run_action(session_id, state, lambda c: c.start_rental())


@router.post("/{session_id}/play")
def play(session_id: str, state: AppState = Depends(get_state)):
    """Play button: mount the playback surface."""
    return _run_action(session_id, state, lambda c: c.play())


@router.post("/{session_id}/close-video")
def close_video(session_id: str, state: AppState = Depends(get_state)):
    """Close (X) control on the playback surface."""
    return _run_action(session_id, state, lambda c: c.close_video())


@router.post("/{session_id}/rent-again")
def rent_again(session_id: str, state: AppState = Depends(get_state)):
    """Rent Again button."""
    return _run_action(session_id, state, lambda c: c.rent_again())


class PlaybackErrorBody(BaseModel):
    detail: Optional[str] = None


@router.post("/{session_id}/playback-error")
def playback_error(
    session_id: str,
    body: PlaybackErrorBody | None = Body(None),
    state: AppState = Depends(get_state),
):
    """Reported by the playback surface when the stream fails."""
    detail = body.detail if body else None
    return _run_action(session_id, state, lambda c: c.report_playback_error(detail))


@router.delete("/{session_id}")
def close_session(session_id: str, state: AppState = Depends(get_state)):
    """Page view closed: stop the countdown and drop the session."""
    if not state.discard_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"ok": True}
