"""Core protocols for dependency injection.

Available protocols:
    TokenProvider: Source of the GitHub access token
    AuthenticatedTransfer: Asset id lookup and binary transfer capability

Usage:
    from gh_private_release.core.protocols import AuthenticatedTransfer

"""

from .transfer import AuthenticatedTransfer, TokenProvider

__all__ = [
    "AuthenticatedTransfer",
    "TokenProvider",
]
