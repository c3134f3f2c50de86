"""News Source HTTP client."""
from pydantic import TypeAdapter

from newsgate.clients.base import ServiceClient
from newsgate.deadline import Deadline
from newsgate.schemas import Article, Pagination

_ARTICLE = TypeAdapter(Article)
_ARTICLES = TypeAdapter(list[Article])


class NewsSourceClient(ServiceClient):
    service_name = "news-source"

    async def list_articles(
        self,
        page: int,
        page_size: int,
        search: str | None,
        *,
        correlation_id: str,
        deadline: Deadline,
    ) -> tuple[list[Article], Pagination | None]:
        """Fetch one catalog page; the pagination block is relayed as-is."""
        params: dict = {"page": page, "page_size": page_size}
        if search:
            params["search"] = search

        response = await self._send(
            "GET", "/news", params=params, correlation_id=correlation_id, deadline=deadline
        )
        envelope = self._envelope(response)
        return self._decode_list(envelope.data, _ARTICLES, "article list"), envelope.pagination

    async def get_article(
        self, article_id: int, *, correlation_id: str, deadline: Deadline
    ) -> Article:
        response = await self._send(
            "GET", f"/news/{article_id}", correlation_id=correlation_id, deadline=deadline
        )
        envelope = self._envelope(response)
        return self._decode(envelope.data, _ARTICLE, "article")
