from typing import Optional, TypeVar, Generic

from pydantic import BaseModel, Field


class PageMetaDto(BaseModel):
    """
    Pagination metadata returned with paginated responses
    """

    page: int = Field(..., description="Current page number")
    page_size: int = Field(..., description="Items per page")
    item_count: int = Field(..., description="Total items matching filters")
    page_count: int = Field(..., description="Total number of pages")
    has_previous_page: bool = Field(..., description="Whether there is a previous page")
    has_next_page: bool = Field(..., description="Whether there is a next page")


T = TypeVar("T")


class ResponseCommon(BaseModel, Generic[T]):
    """
    Standard API response wrapper
    """

    code: int = Field(default=200, description="HTTP status code")
    success: bool = Field(default=True, description="Whether request was successful")
    message: str = Field(default="SUCCESSFULLY", description="Response message")
    data: Optional[T] = Field(default=None, description="Response data")
