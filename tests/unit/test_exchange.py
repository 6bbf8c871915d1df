"""
Unit tests for the custom token exchange.

requests.post is patched; no test here touches the network.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from fbtoken.sdk.exceptions import ExchangeError, MissingApiKeyError
from fbtoken.sdk.exchange import SIGN_IN_WITH_CUSTOM_TOKEN_URL, exchange_custom_token


def _response(status_code, json_body=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    if json_body is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = json_body
    response.text = text
    return response


SUCCESS_BODY = {
    "kind": "identitytoolkit#VerifyCustomTokenResponse",
    "idToken": "id-token",
    "refreshToken": "refresh-token",
    "expiresIn": "3600",
    "localId": "user-123",
    "isNewUser": False,
}


@pytest.mark.parametrize("api_key", [None, ""])
def test_missing_api_key_makes_no_request(api_key):
    with patch("fbtoken.sdk.exchange.requests.post") as mock_post:
        with pytest.raises(MissingApiKeyError, match="FIREBASE_API_KEY"):
            exchange_custom_token("custom-token", api_key)

    mock_post.assert_not_called()


def test_success_returns_body_unmodified():
    with patch("fbtoken.sdk.exchange.requests.post", return_value=_response(200, SUCCESS_BODY)) as mock_post:
        result = exchange_custom_token("custom-token", "AIzaTest")

    assert result == SUCCESS_BODY
    args, kwargs = mock_post.call_args
    assert args[0] == SIGN_IN_WITH_CUSTOM_TOKEN_URL
    assert kwargs["params"] == {"key": "AIzaTest"}
    assert kwargs["json"] == {"token": "custom-token", "returnSecureToken": True}
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert "timeout" not in kwargs


def test_error_message_extracted_from_body():
    body = {"error": {"code": 400, "message": "INVALID_CUSTOM_TOKEN", "errors": []}}

    with patch("fbtoken.sdk.exchange.requests.post", return_value=_response(400, body)):
        with pytest.raises(ExchangeError) as exc_info:
            exchange_custom_token("bad-token", "AIzaTest")

    assert str(exc_info.value) == "INVALID_CUSTOM_TOKEN"
    assert exc_info.value.status_code == 400
    assert exc_info.value.body == body


def test_error_without_message_uses_whole_body():
    body = {"unexpected": "shape"}

    with patch("fbtoken.sdk.exchange.requests.post", return_value=_response(500, body)):
        with pytest.raises(ExchangeError) as exc_info:
            exchange_custom_token("custom-token", "AIzaTest")

    assert str(exc_info.value) == '{"unexpected": "shape"}'


def test_error_with_non_json_body_uses_text():
    with patch("fbtoken.sdk.exchange.requests.post", return_value=_response(502, text="Bad Gateway")):
        with pytest.raises(ExchangeError, match="Bad Gateway"):
            exchange_custom_token("custom-token", "AIzaTest")


def test_transport_failure_wrapped():
    with patch("fbtoken.sdk.exchange.requests.post", side_effect=requests.ConnectionError("connection refused")):
        with pytest.raises(ExchangeError, match="connection refused"):
            exchange_custom_token("custom-token", "AIzaTest")


def test_uses_given_session():
    session = MagicMock()
    session.post.return_value = _response(200, SUCCESS_BODY)

    with patch("fbtoken.sdk.exchange.requests.post") as mock_post:
        assert exchange_custom_token("custom-token", "AIzaTest", session=session) == SUCCESS_BODY

    session.post.assert_called_once()
    mock_post.assert_not_called()
