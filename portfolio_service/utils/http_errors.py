# utils/http_errors.py

from fastapi import HTTPException

from .exceptions import PortfolioServiceError


def to_http_exception(error: PortfolioServiceError) -> HTTPException:
    """Map a domain error onto an HTTPException with the same message"""
    return HTTPException(status_code=error.status_code, detail=error.message)
