"""
ContentCast Backend Application

Backend service for the ContentCast mini-app that provides:
- AI-assisted cast drafting with stock imagery
- Daily quests, streaks and per-day cast limits
- Points leaderboard and soulbound badge bookkeeping
- REST API consumed by the mini-app client
"""

__version__ = "0.1.0"
__author__ = "ContentCast Team"
