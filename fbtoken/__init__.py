"""fbtoken - Firebase token helper.

Namespace package containing:
- fbtoken.sdk: Credential discovery, custom token minting and token exchange
- fbtoken.cli: Command-line interface
"""

__version__ = "0.1.0"
