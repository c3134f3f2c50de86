"""
Downstream clients used by the gateway, one per collaborator.

``build_clients`` is the only place that knows collaborator base URLs and
timeouts; everything else receives a ``DownstreamClients`` bundle.
"""
from dataclasses import dataclass

import httpx

from newsgate.clients.comment_store import CommentStoreClient
from newsgate.clients.moderator import ModeratorClient
from newsgate.clients.news_source import NewsSourceClient
from newsgate.config import GatewaySettings


@dataclass
class DownstreamClients:
    news: NewsSourceClient
    comments: CommentStoreClient
    moderator: ModeratorClient

    async def aclose(self) -> None:
        for client in (self.news, self.comments, self.moderator):
            await client.aclose()


def build_clients(
    settings: GatewaySettings,
    *,
    news_transport: httpx.AsyncBaseTransport | None = None,
    comment_transport: httpx.AsyncBaseTransport | None = None,
    moderator_transport: httpx.AsyncBaseTransport | None = None,
) -> DownstreamClients:
    """
    Build one connection pool per collaborator.

    Transports may be injected to route a collaborator somewhere other
    than the network (an in-process ASGI app, a mock).
    """

    def _http(base_url: str, transport: httpx.AsyncBaseTransport | None) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=base_url,
            transport=transport,
            timeout=settings.DOWNSTREAM_TIMEOUT,
        )

    timeout = settings.DOWNSTREAM_TIMEOUT
    return DownstreamClients(
        news=NewsSourceClient(_http(settings.NEWS_SOURCE_URL, news_transport), timeout),
        comments=CommentStoreClient(_http(settings.COMMENT_STORE_URL, comment_transport), timeout),
        moderator=ModeratorClient(_http(settings.MODERATOR_URL, moderator_transport), timeout),
    )


__all__ = [
    "CommentStoreClient",
    "DownstreamClients",
    "ModeratorClient",
    "NewsSourceClient",
    "build_clients",
]
