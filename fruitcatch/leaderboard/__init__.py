"""
排行榜模块
Leaderboard Module
"""
from .leaderboard_entry import (
    LeaderboardEntry, LeaderboardPolicy, SubmitOutcome, validate_submission, MAX_USERNAME_LENGTH
)
from .leaderboard_store import LeaderboardStore
from .score_submitter import ScoreSubmitter, SubmissionStatus
from .http_client import HttpScoreClient

__all__ = [
    'LeaderboardEntry',
    'LeaderboardPolicy',
    'SubmitOutcome',
    'validate_submission',
    'MAX_USERNAME_LENGTH',
    'LeaderboardStore',
    'ScoreSubmitter',
    'SubmissionStatus',
    'HttpScoreClient'
]
