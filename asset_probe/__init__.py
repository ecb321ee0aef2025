"""
Asset Probe - Diagnostics for the local asset-management API

A small set of command-line checks that hit a running asset-management
server: a single-shot endpoint probe, a login + stats check, and a
category hierarchy creation check.
"""

__version__ = "1.0.0"

from .probe import ApiProbe
from .client import AssetApiClient
from .checks import StatsCheck, HierarchyCheck
from .exceptions import ApiError, AuthenticationError, ApiConnectionError

__all__ = [
    "ApiProbe",
    "AssetApiClient",
    "StatsCheck",
    "HierarchyCheck",
    "ApiError",
    "AuthenticationError",
    "ApiConnectionError"
]
