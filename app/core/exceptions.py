# app/core/exceptions.py
from fastapi import HTTPException, status

from app.shared.lifecycle.results import ErrorCode, LifecycleError, Result

HTTP_STATUS_BY_CODE = {
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_TRANSITION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
}


class LifecycleHTTPException(HTTPException):
    """HTTPException con el detalle en formato ErrorResponse"""

    def __init__(self, error: LifecycleError):
        self.error = error
        detail = {"success": False, **error.to_dict()}
        super().__init__(status_code=HTTP_STATUS_BY_CODE[error.code], detail=detail)


def raise_for_result(result: Result) -> Result:
    """Convertir un Result fallido en la respuesta HTTP correspondiente"""
    if result.failed:
        raise LifecycleHTTPException(result.error)
    return result
