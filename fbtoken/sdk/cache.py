import os
import json
import base64
import binascii
import logging
from datetime import datetime

logger = logging.getLogger(__name__)

CACHE_FILE_NAME = '.token-helper-cache'
CACHE_FILE_MODE = 0o600

# Runtime tokens that must never reach disk
SECRET_FIELDS = (
    'idToken', 'refreshToken', 'customToken',
    'id_token', 'refresh_token', 'custom_token',
)

SETUP_FIELDS = ('uid', 'service_account', 'api_key', 'project_id', 'timestamp')


def encode_setup(data):
    """Serialize a setup dict to base64-wrapped JSON."""
    return base64.b64encode(json.dumps(data).encode('utf-8')).decode('ascii')


def decode_setup(raw):
    """Inverse of encode_setup. Returns None for anything malformed."""
    try:
        decoded = base64.b64decode(raw.strip(), validate=True).decode('utf-8')
        data = json.loads(decoded)
    except (binascii.Error, UnicodeDecodeError, ValueError, AttributeError) as e:
        logger.debug(f"Discarding malformed setup cache: {e}")
        return None
    if not isinstance(data, dict):
        return None
    return data


def strip_secrets(data):
    """Return a copy of data without any runtime token fields."""
    return {k: v for k, v in data.items() if k not in SECRET_FIELDS}


class SetupCache:
    """Best-effort store for the last run's non-secret setup fields."""

    def __init__(self, path=None):
        self.path = os.path.abspath(path or CACHE_FILE_NAME)

    def read(self):
        """Load the cached setup, or None if missing, empty or undecodable."""
        if not os.path.exists(self.path):
            logger.debug(f"Setup cache {self.path} not found.")
            return None
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = f.read().strip()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Could not read setup cache {self.path}: {e}")
            return None
        if not raw:
            return None
        return decode_setup(raw)

    def write(self, data):
        """Persist setup fields. Failures are logged and ignored."""
        safe = strip_secrets(data)
        safe.setdefault('timestamp', datetime.now().isoformat())
        try:
            payload = encode_setup(safe)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CACHE_FILE_MODE)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(payload)
            # O_CREAT mode does not apply to a file that already existed
            os.chmod(self.path, CACHE_FILE_MODE)
            logger.debug(f"Setup cache saved to {self.path}.")
        except (OSError, TypeError, ValueError) as e:
            logger.debug(f"Could not write setup cache {self.path}: {e}")
