"""Unit tests for solar_sizing_model.leads.cms_client.

All HTTP calls are mocked with unittest.mock.patch on ``requests.request``.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from solar_sizing_model.leads.cms_client import PayloadAPIError, PayloadClient
from solar_sizing_model.leads.validation import LeadFormData


def _resp(status=200, json_body=None, reason="OK"):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = status < 400
    resp.reason = reason
    resp.json.return_value = json_body if json_body is not None else {}
    return resp


@pytest.fixture
def lead():
    return LeadFormData("สมชาย ใจดี", "081-234-5678", "somchai@example.com")


@pytest.fixture
def client():
    return PayloadClient(base_url="http://cms.test", max_retries=3, backoff_factor=0)


class TestSubmitLead:
    @patch("requests.request")
    def test_success(self, mock_request, client, lead):
        mock_request.return_value = _resp(
            201, {"doc": {"id": "abc"}, "message": "created"}, "Created"
        )

        doc = client.submit_lead(lead)

        assert doc == {"id": "abc"}
        args, kwargs = mock_request.call_args
        assert args == ("POST", "http://cms.test/api/leads")
        assert kwargs["json"] == {
            "fullName": "สมชาย ใจดี",
            "phone": "0812345678",
            "email": "somchai@example.com",
        }
        assert kwargs["headers"]["Content-Type"] == "application/json"

    @patch("requests.request")
    def test_body_without_doc(self, mock_request, client, lead):
        mock_request.return_value = _resp(200, {"id": "xyz"})
        assert client.submit_lead(lead) == {"id": "xyz"}

    @patch("requests.request")
    def test_non_json_success(self, mock_request, client, lead):
        resp = _resp(200)
        resp.json.side_effect = ValueError("no json")
        mock_request.return_value = resp
        with pytest.raises(PayloadAPIError, match="non-JSON"):
            client.submit_lead(lead)


class TestRetries:
    @patch("time.sleep")
    @patch("requests.request")
    def test_retries_server_error_then_succeeds(self, mock_request, mock_sleep, client, lead):
        mock_request.side_effect = [
            _resp(503, reason="Service Unavailable"),
            _resp(201, {"doc": {"id": "abc"}}),
        ]
        assert client.submit_lead(lead) == {"id": "abc"}
        assert mock_request.call_count == 2

    @patch("time.sleep")
    @patch("requests.request")
    def test_gives_up_after_max_retries(self, mock_request, mock_sleep, client, lead):
        mock_request.return_value = _resp(500, reason="Internal Server Error")
        with pytest.raises(PayloadAPIError, match="API Error: 500") as exc_info:
            client.submit_lead(lead)
        assert exc_info.value.status_code == 500
        assert mock_request.call_count == 3
        assert mock_sleep.call_count == 2

    @patch("time.sleep")
    @patch("requests.request")
    def test_timeouts_become_network_error(self, mock_request, mock_sleep, client, lead):
        mock_request.side_effect = requests.Timeout("slow")
        with pytest.raises(PayloadAPIError, match="Network error") as exc_info:
            client.submit_lead(lead)
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, requests.Timeout)
        assert mock_request.call_count == 3

    @patch("time.sleep")
    @patch("requests.request")
    def test_connection_error_then_success(self, mock_request, mock_sleep, client, lead):
        mock_request.side_effect = [
            requests.ConnectionError("refused"),
            _resp(201, {"doc": {"id": "abc"}}),
        ]
        assert client.submit_lead(lead)["id"] == "abc"

    @patch("requests.request")
    def test_client_error_not_retried(self, mock_request, client, lead):
        mock_request.return_value = _resp(
            400,
            {"errors": [{"message": "Phone invalid"}, {"message": "Email taken"}]},
            "Bad Request",
        )
        with pytest.raises(PayloadAPIError) as exc_info:
            client.submit_lead(lead)
        assert str(exc_info.value) == "Phone invalid, Email taken"
        assert exc_info.value.status_code == 400
        assert len(exc_info.value.errors) == 2
        assert mock_request.call_count == 1

    @patch("time.sleep")
    @patch("requests.request")
    def test_other_request_errors_not_retried(self, mock_request, mock_sleep, client, lead):
        mock_request.side_effect = requests.exceptions.ChunkedEncodingError("cut off")
        with pytest.raises(PayloadAPIError, match="Network error: cut off") as exc_info:
            client.submit_lead(lead)
        assert isinstance(exc_info.value.__cause__, requests.exceptions.ChunkedEncodingError)
        assert mock_request.call_count == 1
        mock_sleep.assert_not_called()

    @patch("requests.request")
    def test_invalid_schema(self, mock_request, client, lead):
        mock_request.side_effect = requests.exceptions.InvalidSchema(
            "No connection adapters were found"
        )
        with pytest.raises(PayloadAPIError, match="No connection adapters") as exc_info:
            client.submit_lead(lead)
        assert exc_info.value.status_code is None

    @patch("requests.request")
    def test_client_error_without_body(self, mock_request, client, lead):
        resp = _resp(403, reason="Forbidden")
        resp.json.side_effect = ValueError("no json")
        mock_request.return_value = resp
        with pytest.raises(PayloadAPIError, match="API Error: 403 Forbidden"):
            client.submit_lead(lead)


class TestBaseUrl:
    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("PAYLOAD_API_URL", "http://env-cms:3001/")
        assert PayloadClient().base_url == "http://env-cms:3001/"

    def test_missing(self, monkeypatch, lead):
        monkeypatch.delenv("PAYLOAD_API_URL", raising=False)
        with pytest.raises(PayloadAPIError, match="PAYLOAD_API_URL"):
            PayloadClient().submit_lead(lead)

    @patch("requests.request")
    def test_get_lead_url(self, mock_request, client):
        mock_request.return_value = _resp(200, {"id": "abc"})
        assert client.get_lead("abc") == {"id": "abc"}
        assert mock_request.call_args.args == ("GET", "http://cms.test/api/leads/abc")

