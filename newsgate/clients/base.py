"""
Shared plumbing for the gateway's downstream HTTP clients.

Each collaborator gets one ``ServiceClient`` subclass wrapping its own
``httpx.AsyncClient``.  The base class owns the three concerns every call
shares:

- Deadlines: a call runs under ``asyncio.wait_for`` with the smaller of
  the per-call timeout and what is left of the request's ``Deadline``.
  An expired call is abandoned and reported as ``DownstreamUnavailable``.
- Status mapping: 404 becomes ``NotFound``, other 4xx become
  ``ClientInputError`` (the collaborator's message is relayed), anything
  else non-2xx is ``DownstreamUnavailable``.
- Reconciliation: the body must parse as an ``Envelope`` and its ``data``
  must validate strictly against the expected model.  Any mismatch is a
  ``DownstreamUnavailable``; a half-populated object never escapes.
"""
import asyncio
import logging
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from newsgate.deadline import Deadline
from newsgate.errors import ClientInputError, DownstreamUnavailable, NotFound
from newsgate.schemas import Envelope

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ServiceClient:
    service_name: str = "downstream"

    def __init__(self, http_client: httpx.AsyncClient, call_timeout: float) -> None:
        self._client = http_client
        self.call_timeout = call_timeout

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _send(
        self,
        method: str,
        path: str,
        *,
        correlation_id: str,
        deadline: Deadline,
        params: dict | None = None,
        json: Any = None,
    ) -> httpx.Response:
        timeout = deadline.budget(self.call_timeout)
        if timeout <= 0:
            raise DownstreamUnavailable(self.service_name, "request deadline exceeded")

        logger.debug(
            "[%s] -> %s %s %s (timeout %.2fs)",
            correlation_id, self.service_name, method, path, timeout,
        )
        try:
            response = await asyncio.wait_for(
                self._client.request(
                    method,
                    path,
                    params=params,
                    json=json,
                    headers={"X-Request-ID": correlation_id},
                ),
                timeout=timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            raise DownstreamUnavailable(
                self.service_name, f"timed out after {timeout:.2f}s"
            ) from exc
        except httpx.HTTPError as exc:
            raise DownstreamUnavailable(self.service_name, f"transport error: {exc}") from exc

        logger.debug(
            "[%s] <- %s %s %s %d",
            correlation_id, self.service_name, method, path, response.status_code,
        )
        return response

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Best-effort human message from an error response body."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
            return body["error"]
        return response.text.strip() or f"HTTP {response.status_code}"

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        status = response.status_code
        message = self._error_message(response)
        if status == 404:
            raise NotFound(message)
        if 400 <= status < 500:
            raise ClientInputError(message)
        raise DownstreamUnavailable(self.service_name, f"HTTP {status}: {message}")

    def _envelope(self, response: httpx.Response) -> Envelope:
        self._raise_for_status(response)
        try:
            envelope = Envelope.model_validate_json(response.content)
        except ValidationError as exc:
            raise DownstreamUnavailable(self.service_name, "malformed response envelope") from exc
        if envelope.status == "error":
            raise DownstreamUnavailable(
                self.service_name, envelope.error or "error status in a successful response"
            )
        return envelope

    def _decode(self, data: Any, shape: TypeAdapter[T], what: str) -> T:
        if data is None:
            raise DownstreamUnavailable(self.service_name, f"response is missing {what}")
        try:
            return shape.validate_python(data)
        except ValidationError as exc:
            raise DownstreamUnavailable(
                self.service_name, f"malformed {what} ({exc.error_count()} invalid field(s))"
            ) from exc

    def _decode_list(self, data: Any, shape: TypeAdapter[list[T]], what: str) -> list[T]:
        """Like ``_decode`` but an absent ``data`` field means an empty list."""
        if data is None:
            return []
        return self._decode(data, shape, what)
