"""
Feedback API route.
"""

from fastapi import APIRouter, Depends, Request

import structlog

from contentcast.api.dependencies import get_storage
from contentcast.api.schemas.content import FeedbackRequest, FeedbackResponse
from contentcast.storage import Storage

router = APIRouter(tags=["Feedback"])
logger = structlog.get_logger(__name__)


@router.post("", response_model=FeedbackResponse, summary="Send Feedback")
async def submit_feedback(
    body: FeedbackRequest,
    request: Request,
    storage: Storage = Depends(get_storage)
):
    feedback = await storage.create_feedback(
        type=body.type,
        message=body.message,
        user_agent=request.headers.get("user-agent", "Unknown"),
    )
    await storage.commit()

    logger.info("Feedback received", type=feedback.type, preview=feedback.message[:50])

    return FeedbackResponse(message="Feedback received successfully", id=feedback.id)
