"""Service account discovery for the Firebase Admin SDK.

Resolution order:
1. An explicit path (flag, cache, or prompt)
2. GOOGLE_APPLICATION_CREDENTIALS, handed to Application Default Credentials
3. The first service account JSON found in the auto-detect directory
"""

import os
import json
import logging
from pathlib import Path
from typing import Any, Optional, Tuple

from firebase_admin import credentials
from google.auth.exceptions import GoogleAuthError

from .exceptions import (
    CredentialNotFoundError,
    InvalidCredentialError,
    CredentialDirectoryMissingError,
    NoCredentialCandidateError,
)

logger = logging.getLogger(__name__)

ADC_ENV_VAR = "GOOGLE_APPLICATION_CREDENTIALS"

# Fields every service account key file carries
REQUIRED_FIELDS = ("client_email", "private_key")


def is_service_account(data: Any) -> bool:
    """Check whether parsed JSON looks like a service account key."""
    return isinstance(data, dict) and all(data.get(field) for field in REQUIRED_FIELDS)


def load_service_account(path) -> dict:
    """
    Read and validate a service account JSON file.

    Args:
        path: Path to the key file, relative paths resolved against the cwd

    Returns:
        The parsed key file contents

    Raises:
        CredentialNotFoundError: If the file does not exist
        InvalidCredentialError: If the file is unreadable, not JSON, or lacks
            client_email/private_key
    """
    full_path = Path(path).expanduser().resolve()
    if not full_path.is_file():
        raise CredentialNotFoundError(full_path)

    try:
        with open(full_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidCredentialError(f"Service account file is not valid JSON: {full_path} ({e})") from e
    except OSError as e:
        raise InvalidCredentialError(f"Could not read service account file {full_path}: {e}") from e

    if not is_service_account(data):
        missing = [f for f in REQUIRED_FIELDS if not (isinstance(data, dict) and data.get(f))]
        raise InvalidCredentialError(
            f"Service account file {full_path} is missing required field(s): {', '.join(missing)}"
        )
    return data


def find_service_account(directory) -> Optional[Path]:
    """
    Find the first service account JSON file in a directory.

    Files are visited in directory-listing order. Unparsable files and files
    lacking client_email or private_key are skipped.

    Raises:
        CredentialDirectoryMissingError: If the directory does not exist
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise CredentialDirectoryMissingError(
            "No service account provided. Pass --serviceAccount or set "
            f"{ADC_ENV_VAR}, or put a service account JSON into {directory}/"
        )

    for name in os.listdir(directory):
        if not name.endswith('.json'):
            continue
        candidate = directory / name
        try:
            with open(candidate, 'r', encoding='utf-8') as f:
                content = json.load(f)
        except (OSError, ValueError) as e:
            logger.debug(f"Skipping {candidate}: {e}")
            continue
        if is_service_account(content):
            logger.debug(f"Service account candidate selected: {candidate}")
            return candidate
        logger.debug(f"Skipping {candidate}: not a service account key")
    return None


def resolve_credential(service_account_path=None, search_dir=None) -> Tuple[Any, str]:
    """
    Build a Firebase Admin credential.

    Args:
        service_account_path: Explicit key file path (highest priority)
        search_dir: Auto-detect directory, defaults to ./.firebase

    Returns:
        Tuple of (credential object, source description)

    Raises:
        ConfigurationError subclasses describing why no credential was found
    """
    if service_account_path:
        data = load_service_account(service_account_path)
        full_path = Path(service_account_path).expanduser().resolve()
        return credentials.Certificate(data), f"Service account file: {full_path}"

    adc_path = os.getenv(ADC_ENV_VAR)
    if adc_path:
        credential = credentials.ApplicationDefault()
        # ApplicationDefault reads the key file lazily; load it now so a bad path fails here
        try:
            credential.get_credential()
        except GoogleAuthError as e:
            raise InvalidCredentialError(
                f"Could not load Application Default Credentials from {ADC_ENV_VAR}={adc_path}: {e}"
            ) from e
        return credential, f"Application Default Credentials ({ADC_ENV_VAR}={adc_path})"

    if search_dir is None:
        search_dir = Path.cwd() / ".firebase"
    picked = find_service_account(search_dir)
    if picked is None:
        raise NoCredentialCandidateError(
            f"No service account found. Place a service account JSON in {search_dir}/ "
            f"or pass --serviceAccount or set {ADC_ENV_VAR} env var."
        )
    return credentials.Certificate(load_service_account(picked)), f"Auto-detected service account: {picked}"
