from rest_framework import status


class ServiceError(Exception):
    """Base class for domain errors raised by service functions.

    Views translate these into ``{"detail": message}`` responses using ``status_code``.
    """

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "", status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
