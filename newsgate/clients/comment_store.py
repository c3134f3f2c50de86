"""Comment Store HTTP client."""
from pydantic import TypeAdapter

from newsgate.clients.base import ServiceClient
from newsgate.deadline import Deadline
from newsgate.schemas import Comment, CommentCreate

_COMMENT = TypeAdapter(Comment)
_COMMENTS = TypeAdapter(list[Comment])


class CommentStoreClient(ServiceClient):
    service_name = "comment-store"

    async def list_comments(
        self, news_id: int, *, correlation_id: str, deadline: Deadline
    ) -> list[Comment]:
        """
        Fetch every comment attached to *news_id*.

        No page parameters are sent, which asks the store for the full,
        unpaginated list in its own (newest first) order.
        """
        response = await self._send(
            "GET",
            "/comments",
            params={"news_id": news_id},
            correlation_id=correlation_id,
            deadline=deadline,
        )
        envelope = self._envelope(response)
        return self._decode_list(envelope.data, _COMMENTS, "comment list")

    async def create_comment(
        self, payload: CommentCreate, *, correlation_id: str, deadline: Deadline
    ) -> Comment:
        response = await self._send(
            "POST",
            "/comments",
            json=payload.model_dump(exclude_none=True),
            correlation_id=correlation_id,
            deadline=deadline,
        )
        envelope = self._envelope(response)
        return self._decode(envelope.data, _COMMENT, "created comment")
