"""HTTP client for the rental backend: registerRental and startRental."""
import logging
from typing import Optional

import requests
from pydantic import ValidationError

from rentalplayer.config import HTTP_TIMEOUT_SEC, REGISTER_URL, START_URL, TAG_FIELD
from rentalplayer.models.rental import RegistrationResponse, StartRentalResponse

logger = logging.getLogger(__name__)


class RentalServiceError(Exception):
    """Transport failure, failing HTTP status, or unparseable response."""


class RentalClient:
    """POSTs the tag identifier as JSON and parses the reply."""

    def __init__(
        self,
        register_url: str = REGISTER_URL,
        start_url: str = START_URL,
        tag_field: str = TAG_FIELD,
        timeout: float = HTTP_TIMEOUT_SEC,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.register_url = register_url
        self.start_url = start_url
        self.tag_field = tag_field
        self.timeout = timeout
        self._session = session or requests.Session()

    def _post(self, url: str, tag_id: str, check_status: bool) -> dict:
        try:
            response = self._session.post(
                url,
                json={self.tag_field: tag_id},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("POST %s failed: %s", url, e)
            raise RentalServiceError(str(e)) from e
        if check_status and not response.ok:
            logger.warning("POST %s returned HTTP %s", url, response.status_code)
            raise RentalServiceError(f"HTTP error! status: {response.status_code}")
        try:
            return response.json()
        except ValueError as e:
            logger.warning("POST %s returned invalid JSON: %s", url, e)
            raise RentalServiceError("invalid JSON response") from e

    def register(self, tag_id: str) -> RegistrationResponse:
        """Check the tag with the backend. Rejection is reported in the body, not the status."""
        body = self._post(self.register_url, tag_id, check_status=False)
        try:
            return RegistrationResponse.model_validate(body)
        except ValidationError as e:
            raise RentalServiceError(f"unexpected registration response: {e}") from e

    def start(self, tag_id: str) -> StartRentalResponse:
        """Start a new rental window. Any non-2xx status is a failure."""
        body = self._post(self.start_url, tag_id, check_status=True)
        try:
            return StartRentalResponse.model_validate(body)
        except ValidationError as e:
            raise RentalServiceError(f"unexpected start response: {e}") from e
