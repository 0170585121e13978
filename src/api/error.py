from fastapi import status
from libs.result import Error

from src.app.errors import ErrorKind, kind_of

STATUS_BY_KIND = {
    ErrorKind.validation: status.HTTP_400_BAD_REQUEST,
    ErrorKind.authentication: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.conflict: status.HTTP_409_CONFLICT,
    ErrorKind.not_found: status.HTTP_404_NOT_FOUND,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(error: Error) -> None:
    """Raise the HTTP exception matching the error's kind"""
    kind = kind_of(error)
    if kind == ErrorKind.internal:
        raise ServerError(error)
    raise ClientError(error, status_code=STATUS_BY_KIND[kind])
