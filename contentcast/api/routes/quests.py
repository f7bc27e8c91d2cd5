"""
Quest API routes.
Handles quest completion and the per-user quest status view.
"""

from datetime import datetime
from typing import Callable, Optional

from fastapi import APIRouter, Depends, Path

import structlog

from contentcast.api.dependencies import get_storage, get_clock
from contentcast.api.schemas.quest import (
    QuestCompleteRequest, QuestCompleteResponse, QuestRecordFields,
    QuestStatusResponse, DailyQuestState, BonusQuestState
)
from contentcast.models import UserQuest
from contentcast.services.quest_service import get_quest_service
from contentcast.storage import Storage

router = APIRouter(tags=["Quests"])
logger = structlog.get_logger(__name__)


def _record_fields(record: Optional[UserQuest]) -> dict:
    if record is None:
        return {}
    return QuestRecordFields.model_validate(record).model_dump()


@router.post(
    "/complete",
    response_model=QuestCompleteResponse,
    summary="Complete Quest",
    description="Credit a quest completion; 429 while the quest is on cooldown"
)
async def complete_quest(
    request: QuestCompleteRequest,
    storage: Storage = Depends(get_storage),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    quest_service = await get_quest_service(storage, clock)
    quest, points = await quest_service.complete_quest(request.user_id, request.quest_type)

    logger.info(
        "Quest completed",
        user_id=request.user_id,
        quest_type=request.quest_type,
        points=str(points)
    )

    return QuestCompleteResponse(
        quest=QuestRecordFields.model_validate(quest),
        points_earned=float(points)
    )


@router.get(
    "/user/{user_id}",
    response_model=QuestStatusResponse,
    summary="Get Quest Status",
    description="Total points, streak and per-quest eligibility for a user"
)
async def get_quest_status(
    user_id: str = Path(..., description="User ID"),
    storage: Storage = Depends(get_storage),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    quest_service = await get_quest_service(storage, clock)
    status = await quest_service.get_quest_status(user_id)

    quests = {
        quest_type: DailyQuestState(
            **_record_fields(state["record"]),
            can_complete=state["can_complete"],
            time_until_next=state["time_until_next"],
        )
        for quest_type, state in status["quests"].items()
    }

    bonus_quests = {}
    for quest_type, state in status["bonus_quests"].items():
        fields = _record_fields(state["record"])
        fields["is_completed"] = state["is_completed"]
        bonus_quests[quest_type] = BonusQuestState(**fields, can_complete=state["can_complete"])

    return QuestStatusResponse(
        total_points=float(status["total_points"]),
        current_streak=status["current_streak"],
        daily_cast_count=status["daily_cast_count"],
        quests=quests,
        bonus_quests=bonus_quests,
    )
