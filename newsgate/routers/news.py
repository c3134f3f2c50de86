from fastapi import APIRouter, Depends, HTTPException, Query

from newsgate.dependencies import PaginationParams, parse_id
from newsgate.schemas import envelope
from newsgate.services import news_service

router = APIRouter(prefix="/news", tags=["news"])


@router.get("")
async def list_news(
    pagination: PaginationParams = Depends(),
    search: str | None = Query(None),
):
    articles, page_info = news_service.search_articles(
        pagination.page, pagination.page_size, search
    )
    return envelope(articles, page_info)


@router.get("/{news_id}")
async def get_news(news_id: str):
    article_id = parse_id(news_id)
    if article_id is None:
        raise HTTPException(status_code=400, detail="Invalid news ID")
    article = news_service.get_article(article_id)
    if article is None:
        raise HTTPException(status_code=404, detail="News not found")
    return envelope(article)
