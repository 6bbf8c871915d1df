"""Exchange a Firebase custom token for an ID/refresh token pair."""

import json
import logging

import requests

from .exceptions import MissingApiKeyError, ExchangeError
from .timing import time_external_call

logger = logging.getLogger(__name__)

SIGN_IN_WITH_CUSTOM_TOKEN_URL = "https://identitytoolkit.googleapis.com/v1/accounts:signInWithCustomToken"


def _error_message(response):
    """Pull error.message out of an Identity Toolkit error body."""
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}", None
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return error["message"], data
    return json.dumps(data), data


@time_external_call
def exchange_custom_token(custom_token: str, api_key: str, session=None) -> dict:
    """
    Exchange a custom token via accounts:signInWithCustomToken.

    Args:
        custom_token: Token minted by the Admin SDK
        api_key: Firebase Web API key for the project
        session: Optional requests session (defaults to the requests module)

    Returns:
        The parsed response body (idToken, refreshToken, expiresIn, localId, ...)

    Raises:
        MissingApiKeyError: If api_key is empty; no request is made
        ExchangeError: On transport failure or a non-success HTTP status
    """
    if not api_key:
        raise MissingApiKeyError(
            "Need Firebase Web API key to exchange custom token for ID token (FIREBASE_API_KEY or --apiKey)"
        )

    http = session or requests
    body = {
        "token": custom_token,
        "returnSecureToken": True,
    }
    logger.debug(f"POST {SIGN_IN_WITH_CUSTOM_TOKEN_URL}")
    try:
        response = http.post(
            SIGN_IN_WITH_CUSTOM_TOKEN_URL,
            params={"key": api_key},
            json=body,
            headers={"Content-Type": "application/json"},
        )
    except requests.RequestException as e:
        raise ExchangeError(str(e)) from e

    if not response.ok:
        message, data = _error_message(response)
        logger.debug(f"Token exchange failed with status {response.status_code}: {message}")
        raise ExchangeError(message, status_code=response.status_code, body=data)

    try:
        return response.json()
    except ValueError as e:
        raise ExchangeError(f"Invalid JSON in exchange response: {e}", status_code=response.status_code) from e
