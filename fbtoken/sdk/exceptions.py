class FbTokenError(Exception):
    """Base class for all fbtoken exceptions."""
    pass

class ConfigurationError(FbTokenError):
    """Base class for local setup problems (credentials, API key)."""
    pass

class CredentialNotFoundError(ConfigurationError):
    """Raised when an explicit service account path does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Service account file not found: {path}")

class InvalidCredentialError(ConfigurationError):
    """Raised when a service account file is unreadable or lacks required fields."""
    pass

class CredentialDirectoryMissingError(ConfigurationError):
    """Raised when the auto-detect directory does not exist."""
    pass

class NoCredentialCandidateError(ConfigurationError):
    """Raised when the auto-detect directory holds no service account JSON."""
    pass

class MissingApiKeyError(ConfigurationError):
    """Raised when the token exchange is attempted without a Web API key."""
    pass

class AdminInitError(FbTokenError):
    """Raised when the Firebase Admin app cannot be initialized."""
    pass

class MintError(FbTokenError):
    """Raised when the Admin SDK fails to create a custom token."""
    pass

class ExchangeError(FbTokenError):
    """Raised when the custom token exchange call fails."""

    def __init__(self, message, status_code=None, body=None):
        self.status_code = status_code
        self.body = body
        super().__init__(message)
