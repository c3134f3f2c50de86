"""
Comment service — persistence for the comment store.

Comments form a forest per article through the self-referencing
``parent_id`` column.  The store never rebuilds that forest; readers get a
flat list ordered newest first.

The parent existence check and the INSERT run in the caller's single
transaction, and ``parent_id`` is a real foreign key, so a parent deleted
between the check and the insert surfaces as an ``IntegrityError`` rather
than as a dangling reference.
"""
from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from newsgate.models import Comment
from newsgate.schemas import CommentCreate


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def _comment_to_dict(comment: Comment) -> dict:
    return {
        "id": comment.id,
        "news_id": comment.news_id,
        "parent_id": comment.parent_id,
        "text": comment.text,
        "created_at": comment.created_at.isoformat() if comment.created_at else None,
    }


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def parent_exists(db: AsyncSession, parent_id: int) -> bool:
    result = await db.execute(select(Comment.id).where(Comment.id == parent_id))
    return result.scalar_one_or_none() is not None


async def create_comment(db: AsyncSession, data: CommentCreate) -> dict | None:
    """
    Insert a new comment and return its serialised form, including the
    server-assigned ``id`` and ``created_at``.

    Returns None when ``parent_id`` is set but references no comment.
    """
    if data.parent_id is not None and not await parent_exists(db, data.parent_id):
        return None

    comment = Comment(news_id=data.news_id, parent_id=data.parent_id, text=data.text)
    db.add(comment)
    await db.flush()
    # created_at is filled in by the database default.
    await db.refresh(comment)
    return _comment_to_dict(comment)


async def list_comments(
    db: AsyncSession,
    news_id: int,
    page: int | None = None,
    page_size: int | None = None,
) -> tuple[list[dict], int]:
    """
    Return ``(comments, total)`` for *news_id*, newest first.

    When *page_size* is None every comment is returned; otherwise the
    result is limited to the requested page.
    """
    count_q = select(func.count()).select_from(Comment).where(Comment.news_id == news_id)
    total: int = (await db.execute(count_q)).scalar_one()

    q = (
        select(Comment)
        .where(Comment.news_id == news_id)
        .order_by(desc(Comment.created_at), desc(Comment.id))
    )
    if page_size is not None:
        q = q.offset(((page or 1) - 1) * page_size).limit(page_size)

    result = await db.execute(q)
    return [_comment_to_dict(c) for c in result.scalars().all()], total


async def delete_comment(db: AsyncSession, comment_id: int) -> bool:
    """Delete *comment_id*; returns False when it does not exist."""
    result = await db.execute(select(Comment).where(Comment.id == comment_id))
    comment = result.scalar_one_or_none()
    if comment is None:
        return False

    await db.delete(comment)
    await db.flush()
    return True
