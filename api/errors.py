"""
Application errors.

Routes let these propagate; handlers in main.py turn them into the JSON
error envelope with a user-safe message.
"""


class ServiceUnavailableError(Exception):
    """A required service (AI gateway, Supabase) is not configured."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UpstreamServiceError(Exception):
    """An external service answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class FileRejected(Exception):
    """A single uploaded file failed validation (400) or could not be stored (500)."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)
