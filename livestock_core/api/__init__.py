"""
Backend API Module
HTTP client adapter and REST gateways for the livestock backend
"""

from .http_client import APIConfig, ApiClient
from .gateways import RESOURCES, ResourceGateway, AuthGateway, create_gateways

__all__ = [
    "APIConfig",
    "ApiClient",
    "RESOURCES",
    "ResourceGateway",
    "AuthGateway",
    "create_gateways",
]
