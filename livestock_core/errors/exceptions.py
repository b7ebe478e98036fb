# =============================================================================
# livestock_core/errors/exceptions.py
# Custom Exception Hierarchy for the Livestock Client Core
# =============================================================================

from typing import Optional, Dict, Any


class LivestockError(Exception):
    """
    Base exception for all livestock client errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (e.g., "API_404")
        details: Additional context as a dictionary
        recoverable: Whether the error can be recovered from
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = True,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "LS_000"
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        base = f"[{self.code}] {self.message}"
        if self.details:
            base += f" | Details: {self.details}"
        return base

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
        }


# =============================================================================
# TRANSPORT / API EXCEPTIONS
# =============================================================================

class NetworkError(LivestockError):
    """Raised when no response was received (connection refused, timeout, DNS)"""

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        url: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if method:
            details["method"] = method
        if url:
            details["url"] = url

        super().__init__(
            message=message,
            code="NET_001",
            details=details,
            **kwargs,
        )


class ApiError(LivestockError):
    """
    Raised when the backend answered with a non-success status.

    ``payload`` holds the decoded response body (or its raw text), which is
    what the stores surface as their ``error`` value.
    """

    default_code = "API_000"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None,
        method: Optional[str] = None,
        url: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        code = kwargs.pop("code", self.default_code)
        if status_code is not None:
            details["status_code"] = status_code
        if method:
            details["method"] = method
        if url:
            details["url"] = url

        super().__init__(
            message=message,
            code=code,
            details=details,
            **kwargs,
        )
        self.status_code = status_code
        self.payload = payload


class ApiValidationError(ApiError):
    """Raised on 400/422 responses carrying structured field errors"""

    default_code = "API_400"

    @property
    def field_errors(self) -> Dict[str, Any]:
        if isinstance(self.payload, dict):
            return self.payload
        return {}


class AuthenticationError(ApiError):
    """Raised on 401 responses that survived the refresh attempt"""

    default_code = "AUTH_001"


class NotFoundError(ApiError):
    """Raised on 404 responses"""

    default_code = "API_404"


class ServerError(ApiError):
    """Raised on 5xx responses"""

    default_code = "API_500"


# =============================================================================
# LOCAL EXCEPTIONS
# =============================================================================

class StorageError(LivestockError):
    """Raised when durable local storage cannot be read or written"""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        path: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if key:
            details["key"] = key
        if path:
            details["path"] = path

        super().__init__(
            message=message,
            code="STORE_001",
            details=details,
            **kwargs,
        )


class DataValidationError(LivestockError):
    """Raised when a payload fails client-side validation checks"""

    def __init__(
        self,
        message: str,
        resource: Optional[str] = None,
        field_errors: Optional[Dict[str, str]] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if field_errors:
            details["field_errors"] = field_errors

        super().__init__(
            message=message,
            code="DATA_001",
            details=details,
            **kwargs,
        )
        self.field_errors = field_errors or {}


class ConfigurationError(LivestockError):
    """Raised when configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        expected_type: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if config_key:
            details["config_key"] = config_key
        if expected_type:
            details["expected_type"] = expected_type

        super().__init__(
            message=message,
            code="CONFIG_001",
            details=details,
            recoverable=False,
            **kwargs,
        )


def failure_detail(error: Exception, default: Any = None) -> Any:
    """
    Return the value a store should record as its ``error``.

    The backend's response body wins; without one, ``default`` is used, and
    without a default the exception message.
    """
    payload = getattr(error, "payload", None)
    if payload not in (None, "", {}):
        return payload
    if default is not None:
        return default
    if isinstance(error, LivestockError):
        return error.message
    return str(error)
