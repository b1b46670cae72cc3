"""Domain failures raised by the service layers.

Each failure carries the HTTP status it maps to; the handlers registered in
``todo_api.main`` turn them into the ``{success, error, message}`` envelope.
"""
from fastapi import status


class TodoAPIError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(TodoAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Validation Error"


class AuthenticationError(TodoAPIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Not Authenticated"


class NotAuthorizedError(TodoAPIError):
    # Reported as 401, same as a failed authentication
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Not Authorized"


class NotFoundError(TodoAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not Found"


class StoreUnavailableError(Exception):
    """The record store is not configured or cannot be reached."""
