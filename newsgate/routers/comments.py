from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from newsgate.database import get_db
from newsgate.dependencies import clamp_page, clamp_page_size, parse_id
from newsgate.schemas import CommentCreate, Pagination, envelope
from newsgate.services import comment_service

router = APIRouter(prefix="/comments", tags=["comments"])

PARENT_MISSING = "parent_id does not reference an existing comment"


@router.post("", status_code=201)
async def create_comment(data: CommentCreate, db: AsyncSession = Depends(get_db)):
    try:
        comment = await comment_service.create_comment(db, data)
    except IntegrityError:
        # Parent deleted between the existence check and the insert.
        raise HTTPException(status_code=400, detail=PARENT_MISSING)
    if comment is None:
        raise HTTPException(status_code=400, detail=PARENT_MISSING)
    return envelope(comment)


@router.get("")
async def list_comments(
    request: Request,
    news_id: str | None = Query(None),
    page: str | None = Query(None),
    page_size: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    if news_id is None:
        raise HTTPException(status_code=400, detail="news_id query parameter is required")
    parsed_id = parse_id(news_id)
    if parsed_id is None:
        raise HTTPException(status_code=400, detail="Invalid news_id")

    # Without page parameters the full list is returned, unpaginated.
    if page is None and page_size is None:
        comments, _ = await comment_service.list_comments(db, parsed_id)
        return envelope(comments)

    settings = request.app.state.settings
    current_page = clamp_page(page)
    size = clamp_page_size(page_size, settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
    comments, total = await comment_service.list_comments(db, parsed_id, current_page, size)
    return envelope(comments, Pagination.build(current_page, size, total))


@router.delete("/{comment_id}")
async def delete_comment(comment_id: str, db: AsyncSession = Depends(get_db)):
    parsed_id = parse_id(comment_id)
    if parsed_id is None:
        raise HTTPException(status_code=400, detail="Invalid comment ID")
    if not await comment_service.delete_comment(db, parsed_id):
        raise HTTPException(status_code=404, detail="Comment not found")
    return envelope(f"Comment {parsed_id} deleted")
