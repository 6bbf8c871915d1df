"""fbtoken SDK - Core library for minting and exchanging Firebase tokens.

This SDK has no console output of its own. It can be used by:
- The fbtoken CLI
- Test fixtures that need a real Firebase ID token

Example usage:
    from fbtoken.sdk import credentials, admin, exchange

    credential, source = credentials.resolve_credential("key.json")
    client = admin.AdminClient(credential)
    result = exchange.exchange_custom_token(client.mint("some-uid"), api_key)
    print(result["idToken"])
"""

from . import config
from . import credentials
from . import cache
from . import admin
from . import exchange

__all__ = ["config", "credentials", "cache", "admin", "exchange"]
