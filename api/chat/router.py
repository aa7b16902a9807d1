import logging

from fastapi import APIRouter, HTTPException
from api.chat.schemas import ChatRequest, ChatResponse, ErrorResponse
from gemini_chat import RelayError
from .service import relay_chat

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def chat(request: ChatRequest) -> ChatResponse:
    try:
        return relay_chat(request)
    except RelayError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    except Exception as exc:
        logger.exception("Server error while relaying chat message")
        raise HTTPException(status_code=500, detail="Internal server error") from exc
