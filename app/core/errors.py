from fastapi import status


class ModerationError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InputValidationError(ModerationError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthorizationError(ModerationError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ModerationError):
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(ModerationError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
