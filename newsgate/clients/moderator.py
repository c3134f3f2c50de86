"""Moderator HTTP client."""
from pydantic import ValidationError

from newsgate.clients.base import ServiceClient
from newsgate.deadline import Deadline
from newsgate.errors import ContentRejected, DownstreamUnavailable
from newsgate.schemas import Envelope


class ModeratorClient(ServiceClient):
    """
    Unlike the other collaborators, any non-2xx answer here is a verdict
    ("blocked"), not an outage.  Only transport failures, timeouts and an
    unreadable 2xx body count as ``DownstreamUnavailable``.
    """

    service_name = "moderator"

    async def check(self, text: str, *, correlation_id: str, deadline: Deadline) -> None:
        """Return normally when *text* is clean; raise ``ContentRejected`` otherwise."""
        response = await self._send(
            "POST", "/check", json={"text": text}, correlation_id=correlation_id, deadline=deadline
        )
        if not response.is_success:
            raise ContentRejected()

        try:
            envelope = Envelope.model_validate_json(response.content)
        except ValidationError as exc:
            raise DownstreamUnavailable(self.service_name, "malformed response envelope") from exc
        if envelope.status == "error":
            raise ContentRejected()
