"""AI assistant chat endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from orthosim.common.pagination import OffsetPaginationParams, offset_pagination_params
from orthosim.core.dependencies import get_current_user
from orthosim.db.session import get_db
from orthosim.models.user import User
from orthosim.schemas.chat import ChatLogResponse, ChatRequest, ChatResponse
from orthosim.services import assistant

router = APIRouter(tags=["Chat"])


@router.post(
    "",
    response_model=ChatResponse,
    summary="Ask the assistant",
    description="Send a question to the orthopedic-education assistant. The exchange is logged.",
)
async def send_message(
    request_data: ChatRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ChatResponse:
    log = await assistant.record_exchange(db, current_user.id, request_data.message, request_data.category)
    return ChatResponse(response=log.response, timestamp=log.timestamp)


@router.get("", response_model=list[ChatLogResponse], summary="Chat history")
async def chat_history(
    pagination: OffsetPaginationParams = Depends(offset_pagination_params),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[ChatLogResponse]:
    logs = assistant.chat_history(db, current_user.id, pagination.limit, pagination.offset)
    return [ChatLogResponse.model_validate(log) for log in logs]
