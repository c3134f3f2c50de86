import math
from datetime import datetime
from typing import Any, Literal

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

MAX_COMMENT_LENGTH = 1000
# Ids are stored in signed 64-bit integer columns.
MAX_ID = 2**63 - 1


# --- Envelope ---

class Pagination(BaseModel):
    page: StrictInt = Field(ge=1)
    page_size: StrictInt = Field(ge=1, le=100)
    total: StrictInt = Field(ge=0)
    page_count: StrictInt = Field(ge=0)

    @classmethod
    def build(cls, page: int, page_size: int, total: int) -> "Pagination":
        return cls(
            page=page,
            page_size=page_size,
            total=total,
            page_count=math.ceil(total / page_size) if total > 0 else 0,
        )


class Envelope(BaseModel):
    """Wire wrapper every service returns; ``data`` stays untyped until decoded."""

    status: Literal["success", "error", "ok"]
    data: Any = None
    error: str | None = None
    pagination: Pagination | None = None


def envelope(data: Any = None, pagination: Pagination | None = None, status: str = "success") -> dict:
    """Serialise a success envelope, omitting absent fields."""
    body: dict[str, Any] = {"status": status, "data": data, "pagination": pagination}
    return jsonable_encoder(body, exclude_none=True)


# --- Article ---

class Article(BaseModel):
    id: StrictInt = Field(gt=0)
    title: StrictStr
    body: StrictStr
    created_at: datetime


# --- Comment ---

class CommentCreate(BaseModel):
    news_id: StrictInt = Field(gt=0, le=MAX_ID)
    parent_id: StrictInt | None = Field(None, gt=0, le=MAX_ID)
    text: str = Field(min_length=1, max_length=MAX_COMMENT_LENGTH)


class Comment(BaseModel):
    id: StrictInt = Field(gt=0)
    news_id: StrictInt = Field(gt=0)
    parent_id: StrictInt | None = Field(None, gt=0)
    text: StrictStr
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


# --- Moderation ---

class CheckRequest(BaseModel):
    text: str


# --- Gateway aggregate ---

class AggregatedView(BaseModel):
    article: Article
    comments: list[Comment] = []
