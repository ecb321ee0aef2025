from typing import Optional


class ApiError(Exception):
    """Base exception for asset API errors."""
    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


class AuthenticationError(ApiError):
    """Raised when login is rejected or yields no token."""
    pass


class ApiConnectionError(ApiError):
    """Raised when the server cannot be reached."""
    pass
