"""Custom exception classes for the Signoff API."""


class SignoffError(Exception):
    """Base exception for Signoff."""

    def __init__(self, code: str, message: str, details=None, status_code: int = 500):
        self.code = code
        self.message = message
        self.details = details
        self.status_code = status_code
        super().__init__(message)


class ValidationError(SignoffError):
    """Malformed threshold or request input."""

    def __init__(self, message: str, details=None):
        super().__init__("VALIDATION_ERROR", message, details, status_code=400)


class NotFoundError(SignoffError):
    """Referenced organization, threshold or request does not exist."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            "NOT_FOUND",
            f"{resource} '{resource_id}' not found",
            details={"resource": resource, "resource_id": resource_id},
            status_code=404,
        )


class AuthenticationError(SignoffError):
    """No authenticated caller identity available."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__("AUTHENTICATION_ERROR", message, status_code=401)


class AuthorizationError(SignoffError):
    """Insufficient permissions."""

    def __init__(self, message: str = "Insufficient role"):
        super().__init__("AUTHORIZATION_ERROR", message, status_code=403)


class InvalidStateTransitionError(SignoffError):
    """Decision not allowed in the request's current state."""

    def __init__(self, message: str, details=None):
        super().__init__("INVALID_STATE_TRANSITION", message, details, status_code=409)


class ConcurrentDecisionError(SignoffError):
    """The request changed between read and conditional write."""

    def __init__(self, approval_request_id: str):
        super().__init__(
            "CONCURRENT_MODIFICATION",
            f"Approval request '{approval_request_id}' was modified concurrently",
            details={"approval_request_id": approval_request_id},
            status_code=409,
        )


class StorageError(SignoffError):
    """Opaque failure from the persistence layer."""

    def __init__(self, message: str):
        super().__init__("STORAGE_ERROR", message, status_code=500)
