"""API v1 router - includes all v1 endpoints."""

from fastapi import APIRouter

from orthosim.api.v1.endpoints import auth, chat, feedback, health, mentor, trainee

api_router = APIRouter()

api_router.include_router(health.router, prefix="", tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(mentor.router, prefix="/mentor", tags=["Mentor"])
api_router.include_router(trainee.router, prefix="/trainee", tags=["Trainee"])
api_router.include_router(chat.router, prefix="/trainee/chat", tags=["Chat"])
api_router.include_router(feedback.router, prefix="/feedback", tags=["Feedback"])
