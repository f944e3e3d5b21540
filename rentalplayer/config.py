"""Configuration: env, rental service endpoints, video stream, countdown period."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of rentalplayer package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so RENTAL_REGISTER_URL etc. are set
load_dotenv(BASE_DIR / ".env")

# API
API_HOST = os.getenv("RENTAL_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("RENTAL_API_PORT", "8000"))

# Rental backend (two JSON POST endpoints)
REGISTER_URL = os.getenv(
    "RENTAL_REGISTER_URL",
    "https://k8vt6n911b.execute-api.us-east-1.amazonaws.com/default/registerRental",
)
START_URL = os.getenv(
    "RENTAL_START_URL",
    "https://gzrcpz0sxj.execute-api.us-east-1.amazonaws.com/default/startRental",
)
# JSON key the backend expects the tag identifier under
TAG_FIELD = os.getenv("RENTAL_TAG_FIELD", "tagId")
HTTP_TIMEOUT_SEC = float(os.getenv("RENTAL_HTTP_TIMEOUT_SEC", "10"))

# HLS stream shown once Play is pressed
VIDEO_URL = os.getenv(
    "RENTAL_VIDEO_URL",
    "https://d2tsu3r8qeqtsh.cloudfront.net/greengoldsample.m3u8",
)

# Query parameter carrying the tag identifier
TAG_QUERY_PARAM = "nfctagid"

# Rental window when the backend omits one; also what Rent Again resets to
DEFAULT_DURATION_HOURS = 24
# One countdown tick = one rental hour
TICK_SECONDS = float(os.getenv("RENTAL_TICK_SECONDS", "3600"))

# Page views not touched for this long are closed (browsers rarely send DELETE)
SESSION_TTL_SEC = float(os.getenv("RENTAL_SESSION_TTL_SEC", "1800"))
SESSION_SWEEP_INTERVAL_SEC = float(os.getenv("RENTAL_SESSION_SWEEP_INTERVAL_SEC", "60"))
