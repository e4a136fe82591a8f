# flashfit/core/errors.py
from fastapi import HTTPException, status


class ValidationError(HTTPException):
    def __init__(self, detail: str = "Validation failed", errors: list[dict] | None = None):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
        self.errors = errors or []


class ConflictError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class AuthError(HTTPException):
    def __init__(self, detail: str = "Could not validate user"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
