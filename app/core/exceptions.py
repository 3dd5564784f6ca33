"""
Error taxonomy for profile operations.

Helper operations raise these internally and convert them into declined
results (success=False, error=<message>) before returning. Routes map a
declined result back to an HTTP status through ``status_code``.
"""


class ProfileServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ProfileServiceError):
    """Bad input detected before any network call (file type, size)."""
    status_code = 400


class AuthenticationError(ProfileServiceError):
    """No resolved identity for the caller."""
    status_code = 401


class BackendError(ProfileServiceError):
    """Failure reported by the relational store or the object store."""
    status_code = 502


NOT_AUTHENTICATED_MESSAGE = "User not authenticated"
