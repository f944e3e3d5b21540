"""Entry: start API server."""
import logging
import uvicorn

from rentalplayer.config import API_HOST, API_PORT

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(name)s: %(message)s")
    uvicorn.run(
        "rentalplayer.api.app:app",
        host=API_HOST,
        port=API_PORT,
    )
