"""
palytt_client - typed RPC client for the Palytt food-discovery backend.
"""

__version__ = "0.1.0"
__logo__ = "🍜"

from palytt_client.auth import AnonymousAuth, StaticTokenAuth, TokenProviderAuth
from palytt_client.client import TRPCClient
from palytt_client.config import ClientConfig
from palytt_client.errors import APIError, ErrorKind
from palytt_client.procedures import REGISTRY
from palytt_client.transport import APIClient, HttpMethod

__all__ = [
    "APIClient",
    "APIError",
    "AnonymousAuth",
    "ClientConfig",
    "ErrorKind",
    "HttpMethod",
    "REGISTRY",
    "StaticTokenAuth",
    "TRPCClient",
    "TokenProviderAuth",
    "__logo__",
    "__version__",
]
