"""Pydantic models."""

from govaudit.models.error import ErrorDetail
from govaudit.models.governance import (
    AuditOutcome,
    AuditSummary,
    Repository,
    Team,
    TeamIndex,
    UserLookup,
)

__all__ = [
    "AuditOutcome",
    "AuditSummary",
    "ErrorDetail",
    "Repository",
    "Team",
    "TeamIndex",
    "UserLookup",
]
