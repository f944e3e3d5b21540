"""Tests for RentalClient request/response handling."""
from unittest.mock import MagicMock

import pytest
import requests

from rentalplayer.core.rental_client import RentalClient, RentalServiceError


def _response(status=200, body=None, invalid_json=False):
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    if invalid_json:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = body
    return response


def _client(response=None, error=None, tag_field="tagId"):
    session = MagicMock()
    if error is not None:
        session.post.side_effect = error
    else:
        session.post.return_value = response
    client = RentalClient(
        register_url="https://api.example/registerRental",
        start_url="https://api.example/startRental",
        tag_field=tag_field,
        timeout=3,
        session=session,
    )
    return client, session


class TestRegister:

    def test_posts_tag_id_as_json(self):
        client, session = _client(_response(body={"success": True}))
        client.register("tag-9")

        session.post.assert_called_once_with(
            "https://api.example/registerRental",
            json={"tagId": "tag-9"},
            timeout=3,
        )

    def test_tag_field_is_configurable(self):
        client, session = _client(_response(body={"success": True}), tag_field="nfctagid")
        client.register("tag-9")

        assert session.post.call_args.kwargs["json"] == {"nfctagid": "tag-9"}

    def test_parses_prior_rental(self):
        body = {"success": True, "data": {"startTime": 1700000000000, "durationHours": 48}}
        client, _ = _client(_response(body=body))
        result = client.register("tag-9")

        assert result.success is True
        assert result.data.start_time == 1700000000000
        assert result.data.duration_hours == 48

    def test_rejection_body_is_returned_even_with_error_status(self):
        client, _ = _client(_response(status=403, body={"success": False, "message": "Unknown tag"}))
        result = client.register("tag-9")

        assert result.success is False
        assert result.message == "Unknown tag"

    def test_transport_error_raises(self):
        client, _ = _client(error=requests.ConnectionError("refused"))

        with pytest.raises(RentalServiceError):
            client.register("tag-9")

    def test_invalid_json_raises(self):
        client, _ = _client(_response(invalid_json=True))

        with pytest.raises(RentalServiceError):
            client.register("tag-9")

    def test_missing_success_field_raises(self):
        client, _ = _client(_response(body={"message": "hi"}))

        with pytest.raises(RentalServiceError):
            client.register("tag-9")


class TestStart:

    def test_parses_hours_remaining(self):
        client, session = _client(_response(body={"success": True, "hoursRemaining": 24}))
        result = client.start("tag-9")

        assert result.success is True
        assert result.hours_remaining == 24
        assert session.post.call_args.args[0] == "https://api.example/startRental"

    def test_non_2xx_raises_even_with_body(self):
        client, _ = _client(_response(status=500, body={"success": False, "message": "down"}))

        with pytest.raises(RentalServiceError) as exc_info:
            client.start("tag-9")
        assert "500" in str(exc_info.value)

    def test_timeout_raises(self):
        client, _ = _client(error=requests.Timeout("slow"))

        with pytest.raises(RentalServiceError):
            client.start("tag-9")
