# =============================================================================
# livestock_core/errors/messages.py
# Inline alert text for failed operations
# =============================================================================

from .exceptions import LivestockError, ApiValidationError, NotFoundError


def user_message_for(error: Exception) -> str:
    """Build the inline-alert text shown for an error."""
    if isinstance(error, NotFoundError):
        return "Entity not found"
    if isinstance(error, ApiValidationError) and error.field_errors:
        parts = []
        for field_name, problems in error.field_errors.items():
            if isinstance(problems, (list, tuple)):
                problems = " ".join(str(p) for p in problems)
            parts.append(f"{field_name}: {problems}")
        return "; ".join(parts)
    if isinstance(error, LivestockError):
        return error.message
    return str(error)
