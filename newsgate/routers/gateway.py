from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse

from newsgate.clients import DownstreamClients
from newsgate.deadline import Deadline
from newsgate.dependencies import PaginationParams, get_correlation_id, get_deadline, parse_id
from newsgate.errors import ClientInputError
from newsgate.schemas import CommentCreate, envelope
from newsgate.services import aggregation_service, comment_pipeline

router = APIRouter(tags=["gateway"])


def get_clients(request: Request) -> DownstreamClients:
    return request.app.state.clients


@router.get("/", response_class=PlainTextResponse)
async def home():
    return "API Gateway OK"


@router.get("/news")
async def list_news(
    request: Request,
    pagination: PaginationParams = Depends(),
    search: str | None = Query(None),
    clients: DownstreamClients = Depends(get_clients),
    correlation_id: str = Depends(get_correlation_id),
    deadline: Deadline = Depends(get_deadline),
):
    articles, page_info = await aggregation_service.list_articles(
        clients,
        pagination.page,
        pagination.page_size,
        search,
        correlation_id=correlation_id,
        deadline=deadline,
        max_search_length=request.app.state.settings.MAX_SEARCH_LENGTH,
    )
    return envelope(articles, page_info)


@router.get("/news/{news_id}")
async def get_news(
    news_id: str,
    clients: DownstreamClients = Depends(get_clients),
    correlation_id: str = Depends(get_correlation_id),
    deadline: Deadline = Depends(get_deadline),
):
    article_id = parse_id(news_id)
    if article_id is None:
        raise ClientInputError("Invalid news ID")

    view = await aggregation_service.get_article_view(
        clients, article_id, correlation_id=correlation_id, deadline=deadline
    )
    return envelope(view)


@router.post("/comment")
async def create_comment(
    data: CommentCreate,
    clients: DownstreamClients = Depends(get_clients),
    correlation_id: str = Depends(get_correlation_id),
    deadline: Deadline = Depends(get_deadline),
):
    comment = await comment_pipeline.create_comment(
        clients, data, correlation_id=correlation_id, deadline=deadline
    )
    return envelope(comment)
