import re
import uuid

from fastapi import Query, Request

from newsgate.deadline import Deadline
from newsgate.schemas import MAX_ID

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# Largest page whose offset still fits a 64-bit column.
MAX_PAGE = MAX_ID // MAX_PAGE_SIZE

_INT_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)


def parse_int(raw: str | None) -> int | None:
    """
    Strict decimal parse: ASCII digits with an optional sign, nothing else
    (no whitespace, no ``_`` separators) and within the signed 64-bit range.
    Anything else is treated as absent.
    """
    if raw is None or not _INT_PATTERN.fullmatch(raw):
        return None
    value = int(raw)
    if not -MAX_ID - 1 <= value <= MAX_ID:
        return None
    return value


def parse_id(raw: str | None) -> int | None:
    """Parse a resource id; only positive values are ids."""
    value = parse_int(raw)
    return value if value is not None and value >= 1 else None


def clamp_page(raw: str | None) -> int:
    page = parse_int(raw)
    return page if page is not None and 1 <= page <= MAX_PAGE else 1


def clamp_page_size(
    raw: str | None,
    default: int = DEFAULT_PAGE_SIZE,
    maximum: int = MAX_PAGE_SIZE,
) -> int:
    """Out-of-range sizes fall back to *default* rather than to the nearest bound."""
    size = parse_int(raw)
    if size is None or size < 1 or size > maximum:
        return default
    return size


class PaginationParams:
    """
    Reusable FastAPI dependency that parses pagination query parameters.

    Query values are read as raw strings so that malformed input degrades
    to the defaults instead of failing validation:

    page:
        1-based page number; anything below 1 or unparsable becomes 1.
    page_size:
        Items per page; anything outside ``[1, MAX_PAGE_SIZE]`` or
        unparsable becomes ``DEFAULT_PAGE_SIZE``.  Both limits come from
        the serving app's settings.
    """

    def __init__(
        self,
        request: Request,
        page: str | None = Query(None, description="Page number (1-based)."),
        page_size: str | None = Query(None, description="Items per page (1-100)."),
    ) -> None:
        settings = request.app.state.settings
        self.page = clamp_page(page)
        self.page_size = clamp_page_size(
            page_size, settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def get_correlation_id(request: Request) -> str:
    """Request id assigned by ``RequestContextMiddleware`` (or a fresh one)."""
    request_id = request.scope.get("state", {}).get("request_id")
    return request_id or request.headers.get("x-request-id") or uuid.uuid4().hex


def get_deadline(request: Request) -> Deadline:
    return Deadline.after(request.app.state.settings.REQUEST_TIMEOUT)
