"""AI assistant conversation log."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from orthosim.db.base import Base, utcnow


class AIChatLog(Base):
    """One prompt/response exchange with the AI assistant."""

    __tablename__ = "ai_chat_logs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    prompt = Column(Text, nullable=False)
    response = Column(Text, nullable=False)
    category = Column(String(64), nullable=False, default="general")
    rating = Column(Integer, nullable=True)
    timestamp = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    user = relationship("User", back_populates="chat_logs")
