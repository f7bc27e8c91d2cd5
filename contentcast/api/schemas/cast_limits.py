from pydantic import Field

from .common import CamelModel


class CastLimitResponse(CamelModel):
    date: str = Field(description="Ledger day, YYYY-MM-DD")
    count: int
    remaining: int
    max_daily_casts: int
    can_cast: bool
    limit_reached: bool
    reset_in: int = Field(description="Seconds until the next daily reset")
