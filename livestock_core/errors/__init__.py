# =============================================================================
# livestock_core/errors/__init__.py
# Centralized Error Handling for the Livestock Client Core
# =============================================================================

from .exceptions import (
    LivestockError,
    NetworkError,
    ApiError,
    ApiValidationError,
    AuthenticationError,
    NotFoundError,
    ServerError,
    StorageError,
    DataValidationError,
    ConfigurationError,
    failure_detail,
)

from .messages import user_message_for

__all__ = [
    # Exceptions
    "LivestockError",
    "NetworkError",
    "ApiError",
    "ApiValidationError",
    "AuthenticationError",
    "NotFoundError",
    "ServerError",
    "StorageError",
    "DataValidationError",
    "ConfigurationError",
    "failure_detail",
    # Messages
    "user_message_for",
]
