"""
Client module for the Dwolla API.

Provides the request-building client and bearer token handling.
"""

from .http_client import DwollaClient
from .auth import AppTokenProvider

__all__ = ["DwollaClient", "AppTokenProvider"]
