"""Shared pagination schema for list endpoints."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PageResponse(BaseModel, Generic[T]):
    """Standard paginated response: page content plus page/total metadata."""

    content: list[T]
    total_elements: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
    page_size: int = Field(..., ge=1)
    page_number: int = Field(..., ge=0)
    first: bool
    last: bool
