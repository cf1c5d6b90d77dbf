"""API request schemas"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..models.marquee import MarqueeType

# Applies to the stored HTML, after inline images are moved out
MAX_DESCRIPTION_LENGTH = 1_000_000


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class CategoryRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=200)

    @field_validator("description", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        return _blank_to_none(value)


class MarqueeCreateRequest(CamelModel):
    content: str = Field(..., min_length=1, max_length=300)
    type: MarqueeType
    is_active: bool = True
    order: int = Field(0, ge=0)


class MarqueeUpdateRequest(CamelModel):
    content: Optional[str] = Field(None, min_length=1, max_length=300)
    type: Optional[MarqueeType] = None
    is_active: Optional[bool] = None
    order: Optional[int] = Field(None, ge=0)


class ArticleCreateFields(CamelModel):
    """Text fields of the article multipart form"""
    title: str = Field(..., min_length=1, max_length=200)
    short_description: Optional[str] = Field(None, max_length=500)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, max_length=50)
    slug: Optional[str] = Field(None, max_length=200)
    video_url: Optional[str] = Field(None, max_length=1000)
    is_published: bool = False

    @field_validator("short_description", "slug", "video_url", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        return _blank_to_none(value)


class ArticleUpdateFields(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    short_description: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1, max_length=50)
    slug: Optional[str] = Field(None, max_length=200)
    video_url: Optional[str] = Field(None, max_length=1000)
    is_published: Optional[bool] = None
    remove_image: bool = False
    remove_video_file: bool = False

    @field_validator("short_description", "slug", "video_url", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        return _blank_to_none(value)
