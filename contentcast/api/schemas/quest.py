"""
Quest ledger schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional

from pydantic import Field, field_serializer

from .common import CamelModel


class QuestRecordFields(CamelModel):
    """Columns of a quest record; all empty when the user has no record yet."""
    id: Optional[str] = None
    user_id: Optional[str] = None
    quest_type: Optional[str] = None
    last_completed_at: Optional[datetime] = None
    total_points: Optional[Decimal] = None
    completion_count: Optional[int] = None
    is_one_time: Optional[bool] = None
    is_completed: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("total_points")
    def serialize_points(self, value: Optional[Decimal]) -> Optional[str]:
        if value is None:
            return None
        return f"{Decimal(value):.2f}"


class QuestCompleteRequest(CamelModel):
    user_id: str = Field(min_length=1)
    quest_type: str = Field(min_length=1)


class QuestCompleteResponse(CamelModel):
    success: bool = True
    quest: QuestRecordFields
    points_earned: float


class DailyQuestState(QuestRecordFields):
    can_complete: bool
    time_until_next: int = Field(description="Milliseconds until the cooldown ends")


class BonusQuestState(QuestRecordFields):
    can_complete: bool
    is_completed: bool = False


class QuestStatusResponse(CamelModel):
    total_points: float
    current_streak: int
    daily_cast_count: int
    quests: Dict[str, DailyQuestState]
    bonus_quests: Dict[str, BonusQuestState]
