"""AI assistant backed by the Gemini generateContent REST API."""

from __future__ import annotations

import logging
from uuid import UUID

import httpx
from sqlalchemy.orm import Session

from orthosim.core.config import settings
from orthosim.models.chat import AIChatLog

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an AI assistant specialized in orthopedic surgery education, \
particularly intramedullary nailing of the tibia. You help medical students and surgical \
residents learn surgical techniques, understand anatomy, and improve their skills. Provide \
accurate, educational, and helpful responses related to:

1. Orthopedic surgery procedures
2. Surgical anatomy
3. Medical terminology
4. Surgical techniques and best practices
5. Post-operative care
6. Complications and their management

Always emphasize the importance of proper training, supervision, and following established \
medical protocols. If asked about non-medical topics, politely redirect the conversation back \
to medical education."""

GENERATION_CONFIG = {
    "temperature": 0.7,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 1024,
}

NOT_CONFIGURED_REPLY = (
    "I'm an AI assistant designed to help with orthopedic surgery education. However, the AI "
    "service is currently not configured. Please contact your system administrator or consult "
    "your mentor for assistance with surgical questions."
)
UNAVAILABLE_REPLY = (
    "I'm currently experiencing technical difficulties connecting to the AI service. Please try "
    "again later, or consult your mentor for immediate assistance with surgical questions."
)
EMPTY_REPLY = (
    "I apologize, but I couldn't generate a response at this time. "
    "Please try rephrasing your question."
)


def build_payload(message: str) -> dict:
    full_prompt = f"{SYSTEM_PROMPT}\n\n---\n\nUser Question: {message}"
    return {
        "contents": [{"role": "user", "parts": [{"text": full_prompt}]}],
        "generationConfig": GENERATION_CONFIG,
    }


def _extract_text(data: dict) -> str | None:
    try:
        return data["candidates"][0]["content"]["parts"][0]["text"] or None
    except (KeyError, IndexError, TypeError):
        return None


async def generate_reply(message: str, transport: httpx.AsyncBaseTransport | None = None) -> str:
    """
    Ask Gemini for an answer. Never raises: configuration gaps and upstream
    failures turn into fixed fallback replies.
    """
    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY is not configured", extra={"event": "assistant_unconfigured"})
        return NOT_CONFIGURED_REPLY

    try:
        async with httpx.AsyncClient(
            timeout=settings.GEMINI_TIMEOUT_SECONDS, transport=transport
        ) as client:
            resp = await client.post(
                settings.GEMINI_API_URL,
                params={"key": settings.GEMINI_API_KEY},
                json=build_payload(message),
            )
            resp.raise_for_status()
            data = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error(
            "Gemini request failed",
            extra={"event": "assistant_upstream_error", "error": str(e)},
        )
        return UNAVAILABLE_REPLY

    return _extract_text(data) or EMPTY_REPLY


async def record_exchange(db: Session, user_id: UUID, message: str, category: str) -> AIChatLog:
    """Answer a message and store the prompt/response pair."""
    reply = await generate_reply(message)
    log = AIChatLog(user_id=user_id, prompt=message, response=reply, category=category or "general")
    db.add(log)
    db.commit()
    db.refresh(log)
    return log


def chat_history(db: Session, user_id: UUID, limit: int, offset: int) -> list[AIChatLog]:
    return (
        db.query(AIChatLog)
        .filter(AIChatLog.user_id == user_id)
        .order_by(AIChatLog.timestamp.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
