"""
Response envelope

Every endpoint answers with {success, code, message, data}; `code` mirrors
the HTTP status. List endpoints put a page object in `data`.
"""
from typing import Any, Generic, Iterable, Optional, Type, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class ResponseModel(BaseModel, Generic[T]):
    success: bool = True
    code: int = 200
    message: str = "OK"
    data: Optional[T] = None


class PagedData(BaseModel, Generic[T]):
    items: list[T]
    total: int
    page: int
    page_size: int
    pages: int


class PagedResponseModel(BaseModel, Generic[T]):
    success: bool = True
    code: int = 200
    message: str = "OK"
    data: Optional[PagedData[T]] = None


DictResponse = ResponseModel[dict]
MessageResponse = ResponseModel[None]


def _plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump()
    return value


def success_response(data: Any = None, message: str = "OK", code: int = 200) -> dict:
    return {"success": True, "code": code, "message": message, "data": _plain(data)}


def error_response(message: str = "Request failed", code: int = 400, data: Any = None) -> dict:
    return {"success": False, "code": code, "message": message, "data": _plain(data)}


def page_count(total: int, page_size: int) -> int:
    if page_size <= 0:
        return 0
    return -(-total // page_size)


def paged_response(
    rows: Iterable[Any],
    total: int,
    page: int,
    page_size: int,
    schema: Optional[Type[BaseModel]] = None,
    message: str = "OK",
) -> dict:
    """
    Page envelope

    Args:
        rows: table rows, or already serialized items when no schema is given
        total: row count across all pages
        schema: response schema each row is validated into
    """
    if schema is not None:
        items = [schema.model_validate(row).model_dump() for row in rows]
    else:
        items = [_plain(row) for row in rows]
    return success_response(
        data=PagedData[Any](
            items=items,
            total=total,
            page=page,
            page_size=page_size,
            pages=page_count(total, page_size),
        ),
        message=message,
    )
