# =============================================================================
# livestock_core/services/base_service.py
# Base Service Class with Common Functionality
# =============================================================================

from __future__ import annotations
from abc import ABC
from typing import Optional, Dict, Any
from dataclasses import dataclass

from livestock_core.logging import get_logger, LogContext
from livestock_core.errors import LivestockError, failure_detail, user_message_for


@dataclass
class ServiceResult:
    """
    Standard result container for store and service operations.

    ``error`` holds the failure detail recorded by the store (the backend's
    response body when there was one); ``message`` is the text for an
    inline alert, e.g. ``st.error(result.message)``.
    """
    success: bool
    data: Optional[Any] = None
    error: Optional[Any] = None
    error_code: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    message: Optional[str] = None

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls, data: Any = None, metadata: Dict[str, Any] = None) -> ServiceResult:
        """Create a successful result"""
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def fail(
        cls,
        error: Any,
        error_code: str = "UNKNOWN",
        metadata: Dict[str, Any] = None,
        message: Optional[str] = None,
    ) -> ServiceResult:
        """Create a failed result"""
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            metadata=metadata,
            message=message,
        )

    @classmethod
    def from_exception(cls, e: Exception, default: Any = None) -> ServiceResult:
        """Create a failed result from an exception"""
        if isinstance(e, LivestockError):
            return cls(
                success=False,
                error=failure_detail(e, default),
                error_code=e.code,
                metadata=e.details,
                message=user_message_for(e),
            )
        return cls(
            success=False,
            error=str(e),
            error_code="EXCEPTION",
            message=user_message_for(e),
        )


class BaseService(ABC):
    """
    Abstract base class for stores and services.

    Provides a class-named logger and timed operation logging.

    Usage:
        class AnimalsStore(BaseService):
            def fetch_all(self) -> ServiceResult:
                with self.log_operation("animals: fetch_all"):
                    ...
    """

    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)

    def log_operation(self, operation: str) -> LogContext:
        """
        Create a logging context for an operation.

        Usage:
            with self.log_operation("Logging in"):
                gateway.login(credentials)
        """
        return LogContext(self.logger, operation)
