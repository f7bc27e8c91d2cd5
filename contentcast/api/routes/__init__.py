"""API routes package."""

from . import users, drafts, content, farcaster, quests, sbt, leaderboards, cast_limits, feedback

__all__ = [
    "users", "drafts", "content", "farcaster", "quests", "sbt",
    "leaderboards", "cast_limits", "feedback",
]
