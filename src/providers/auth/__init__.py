"""Server-side credential providers."""

from src.providers.auth.apple_developer_token import AppleDeveloperTokenSigner

__all__ = ["AppleDeveloperTokenSigner"]
