from starlette import status

from app.response import CustomHTTPException


class RequestValidationError(CustomHTTPException):
    def __init__(self, message: str = "Invalid Request", **errors):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            message=message,
            error_code="VALIDATION_ERROR",
            errors=errors or None,
        )


class UnauthenticatedError(CustomHTTPException):
    def __init__(self, message: str = "Could not validate credentials", **kwargs):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            message=message,
            headers={"WWW-Authenticate": "Bearer"},
            **kwargs
        )


class PermissionDeniedError(CustomHTTPException):
    def __init__(self, message: str = "Not Authorized"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            message=message,
            error_code="INSUFFICIENT_PERMISSIONS",
        )


class NotFoundError(CustomHTTPException):
    def __init__(self, kind: str, identifier=None, message: str | None = None):
        if message is None:
            message = f"{kind} with ID {identifier} not found"
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            message=message,
            error_code="NOT_FOUND",
        )


class ConflictError(CustomHTTPException):
    def __init__(self, message: str, errors: dict | None = None):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            message=message,
            error_code="CONFLICT",
            errors=errors,
        )


class UpstreamError(CustomHTTPException):
    """A data-access or storage failure reported without partial results."""

    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=message,
            error_code="UPSTREAM_FAILURE",
        )
