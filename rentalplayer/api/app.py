"""FastAPI app, CORS, and route registration."""
import logging
import threading
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(name)s: %(message)s",
)

from rentalplayer.api.state import AppState, get_state
from rentalplayer.api.routes import sessions
from rentalplayer.config import SESSION_SWEEP_INTERVAL_SEC

__all__ = ["app", "AppState", "get_state"]

_state = get_state()


def _session_sweep_loop(stop_event: threading.Event) -> None:
    """Background loop: close page views that went idle without a DELETE."""
    while not stop_event.wait(timeout=SESSION_SWEEP_INTERVAL_SEC):
        try:
            _state.evict_expired()
        except Exception as e:
            logging.getLogger(__name__).warning("Session sweep: %s", e)


@asynccontextmanager
async def lifespan(app: FastAPI):
    _sweep_stop = threading.Event()
    _sweep_thread = threading.Thread(
        target=_session_sweep_loop,
        args=(_sweep_stop,),
        daemon=True,
    )
    _sweep_thread.start()
    logging.getLogger(__name__).info(
        "Session sweep thread started (interval %.1fs)", SESSION_SWEEP_INTERVAL_SEC
    )

    yield

    _sweep_stop.set()
    _sweep_thread.join(timeout=5.0)
    # Page views do not outlive the server; stop their countdowns
    _state.close_all()


app = FastAPI(
    title="Rental Player API",
    description="Rental session controller for NFC-tag video rentals",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(sessions.router, prefix="/api/sessions", tags=["sessions"])


@app.get("/api/health")
def health():
    return {"ok": True}
