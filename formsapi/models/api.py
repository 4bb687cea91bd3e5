from typing import Any, List, Optional

from pydantic import BaseModel

from formsapi.models.form import FieldError


class ApiResponse(BaseModel):
    success: bool
    data: Optional[Any] = None
    message: Optional[str] = None
    error: Optional[str] = None
    errors: Optional[List[FieldError]] = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class Page(BaseModel):
    items: List[Any]
    pagination: Pagination


def success(data: Any = None, message: Optional[str] = None) -> ApiResponse:
    return ApiResponse(success=True, data=data, message=message)


def failure(message: str, error: Optional[str] = None, errors: Optional[List[FieldError]] = None) -> ApiResponse:
    return ApiResponse(success=False, message=message, error=error, errors=errors)
