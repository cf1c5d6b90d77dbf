"""API response schemas"""

import math
from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelResponse(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class APIResponse(BaseModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None

    @classmethod
    def ok(cls, data: T = None, message: str = "Success"):
        return cls(success=True, message=message, data=data)


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, pages=math.ceil(total / limit) if limit else 0)


class NewsArticleResponse(CamelResponse):
    id: str
    title: str
    short_description: Optional[str] = None
    description: str
    category: str
    slug: Optional[str] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    video_file_url: Optional[str] = None
    is_published: bool
    created_at: datetime
    updated_at: datetime


class NewsListResponse(BaseModel):
    news: List[NewsArticleResponse]
    pagination: Pagination


class CategoryResponse(CamelResponse):
    id: str
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CategoryListResponse(BaseModel):
    categories: List[CategoryResponse]
    pagination: Pagination


class MarqueeResponse(CamelResponse):
    id: str
    content: str
    type: str
    is_active: bool
    order: int
    created_at: datetime
    updated_at: datetime


class AdminResponse(CamelResponse):
    id: str
    name: str
    email: str
    role: str


class LoginResponse(BaseModel):
    token: str
    admin: AdminResponse


class UploadedImageResponse(BaseModel):
    url: str
    filename: str
