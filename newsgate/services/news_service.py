"""
News service — the fixed article catalog served by the news source.

Search is a case-insensitive substring match on title or body; pagination
is applied after filtering so totals always describe the filtered set.
"""
from datetime import datetime, timezone

from newsgate.schemas import Article, Pagination

CATALOG: tuple[Article, ...] = (
    Article(
        id=1,
        title="News 1",
        body="This is the body of the first news item",
        created_at=datetime(2023, 1, 15, 10, 30, tzinfo=timezone.utc),
    ),
    Article(
        id=2,
        title="News 2",
        body="This is the body of the second news item",
        created_at=datetime(2023, 1, 16, 14, 45, tzinfo=timezone.utc),
    ),
    Article(
        id=3,
        title="News 3",
        body="This is the body of the third news item",
        created_at=datetime(2023, 1, 17, 9, 20, tzinfo=timezone.utc),
    ),
    Article(
        id=4,
        title="News 4",
        body="This is the body of the fourth news item",
        created_at=datetime(2023, 1, 18, 16, 10, tzinfo=timezone.utc),
    ),
    Article(
        id=5,
        title="News 5",
        body="This is the body of the fifth news item",
        created_at=datetime(2023, 1, 19, 11, 5, tzinfo=timezone.utc),
    ),
)


def _matches(article: Article, needle: str) -> bool:
    return needle in article.title.lower() or needle in article.body.lower()


def search_articles(
    page: int,
    page_size: int,
    search: str | None = None,
    catalog: tuple[Article, ...] = CATALOG,
) -> tuple[list[Article], Pagination]:
    needle = (search or "").strip().lower()
    filtered = [a for a in catalog if _matches(a, needle)] if needle else list(catalog)

    start = min((page - 1) * page_size, len(filtered))
    items = filtered[start:start + page_size]
    return items, Pagination.build(page, page_size, len(filtered))


def get_article(article_id: int, catalog: tuple[Article, ...] = CATALOG) -> Article | None:
    return next((a for a in catalog if a.id == article_id), None)
