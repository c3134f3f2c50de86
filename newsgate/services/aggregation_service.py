"""
Aggregation service — the gateway's read paths.

Design notes
------------
- ``get_article_view`` fans out to the news source and the comment store
  at once and joins both outcomes.  The join is all-or-nothing: an
  ``AggregatedView`` is only built when both sides produced valid data.
- Both outcomes are inspected before deciding which error to raise, so a
  failure is always attributed to the collaborator that produced it.
- ``list_articles`` is a pure proxy: the news source owns filtering and
  pagination totals and the gateway relays them unchanged.
"""
import asyncio
import logging

from newsgate.clients import DownstreamClients
from newsgate.deadline import Deadline
from newsgate.errors import ClientInputError, DownstreamUnavailable, GatewayError
from newsgate.schemas import AggregatedView, Article, Pagination

logger = logging.getLogger(__name__)


def _join_failure(failures: dict[str, GatewayError]) -> GatewayError:
    """Pick the error that represents a failed fan-out."""
    if len(failures) == 1:
        return next(iter(failures.values()))
    if any(exc.status_code >= 500 for exc in failures.values()):
        return DownstreamUnavailable(
            "+".join(failures),
            "; ".join(exc.message for exc in failures.values()),
        )
    # Both sides rejected the request itself (e.g. 404s); report the article side.
    return failures["news-source"]


async def get_article_view(
    clients: DownstreamClients,
    article_id: int,
    *,
    correlation_id: str,
    deadline: Deadline,
) -> AggregatedView:
    """
    Return one article together with all of its comments.

    Both downstream calls are in flight before either is awaited; each is
    bounded by its own timeout nested inside *deadline*.
    """
    article_task = asyncio.create_task(
        clients.news.get_article(article_id, correlation_id=correlation_id, deadline=deadline)
    )
    comments_task = asyncio.create_task(
        clients.comments.list_comments(article_id, correlation_id=correlation_id, deadline=deadline)
    )
    article, comments = await asyncio.gather(article_task, comments_task, return_exceptions=True)

    failures: dict[str, GatewayError] = {}
    for service, outcome in (("news-source", article), ("comment-store", comments)):
        if isinstance(outcome, GatewayError):
            logger.warning(
                "[%s] article %d: %s failed: %s",
                correlation_id, article_id, service, outcome.message,
            )
            failures[service] = outcome
        elif isinstance(outcome, BaseException):
            raise outcome
    if failures:
        raise _join_failure(failures)

    if article.id != article_id:
        raise DownstreamUnavailable("news-source", f"returned article {article.id} for {article_id}")
    stray = [c.id for c in comments if c.news_id != article_id]
    if stray:
        raise DownstreamUnavailable(
            "comment-store", f"returned comments {stray} that belong to another article"
        )

    logger.debug("[%s] article %d joined with %d comment(s)", correlation_id, article_id, len(comments))
    return AggregatedView(article=article, comments=comments)


async def list_articles(
    clients: DownstreamClients,
    page: int,
    page_size: int,
    search: str | None,
    *,
    correlation_id: str,
    deadline: Deadline,
    max_search_length: int = 100,
) -> tuple[list[Article], Pagination | None]:
    """Forward an already-clamped page request to the news source."""
    if search and len(search) > max_search_length:
        raise ClientInputError("Search query too long")

    return await clients.news.list_articles(
        page, page_size, search or None, correlation_id=correlation_id, deadline=deadline
    )
