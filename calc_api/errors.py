# calc_api/errors.py
# Each error kind carries the HTTP status it maps to and the client message.

from fastapi import status

INVALID_BODY = "Invalid body parameter"
USER_NOT_FOUND = "User not found"
GENERIC_FAILURE = "An error occurred"


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = GENERIC_FAILURE

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = INVALID_BODY


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = USER_NOT_FOUND


class StoreError(AppError):
    pass
