import logging

from fastapi import APIRouter, HTTPException, Request

from newsgate.schemas import CheckRequest, envelope
from newsgate.services.moderation_service import Moderator

router = APIRouter(tags=["moderation"])
logger = logging.getLogger(__name__)


@router.post("/check")
async def check_text(data: CheckRequest, request: Request):
    moderator: Moderator = request.app.state.moderator
    term = moderator.find_banned(data.text)
    if term is not None:
        logger.info("Rejected text containing banned term %r", term)
        raise HTTPException(status_code=400, detail="Text contains forbidden terms")
    return envelope("Text passed moderation")
