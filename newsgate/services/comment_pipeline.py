"""
Comment pipeline — the gateway's two-step write: moderate, then persist.

The steps run strictly in sequence and nothing is compensated.  If the
store fails after moderation passed, the comment is simply lost; the
moderator is stateless so there is nothing to undo there.

Failure kinds the caller can tell apart:

- ``ContentRejected``: the moderator blocked the text (nothing persisted).
- ``DownstreamUnavailable("moderator", ...)``: the text could not be checked.
- ``DownstreamUnavailable("comment-store", ...)``: checked, but not stored.
- ``ClientInputError`` / ``NotFound``: relayed store rejection (e.g. unknown parent).
"""
import logging

from newsgate.clients import DownstreamClients
from newsgate.deadline import Deadline
from newsgate.schemas import Comment, CommentCreate

logger = logging.getLogger(__name__)


async def create_comment(
    clients: DownstreamClients,
    payload: CommentCreate,
    *,
    correlation_id: str,
    deadline: Deadline,
) -> Comment:
    """Moderate *payload* and, only if it passes, persist it in the comment store."""
    await clients.moderator.check(payload.text, correlation_id=correlation_id, deadline=deadline)
    logger.debug("[%s] comment for article %d passed moderation", correlation_id, payload.news_id)

    comment = await clients.comments.create_comment(
        payload, correlation_id=correlation_id, deadline=deadline
    )
    logger.info(
        "[%s] comment %d stored for article %d", correlation_id, comment.id, comment.news_id
    )
    return comment
