"""Governance configuration models: teams, repositories, and audit outcomes."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _dedupe(values: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


def _login(value: object) -> object:
    # YAML reads unquoted numeric logins and team names as ints
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


class Team(BaseModel):
    """A governance team. ``formation`` teams derive membership from other teams."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    members: tuple[str, ...] = ()
    maintainers: tuple[str, ...] = ()
    parent: Optional[str] = None
    formation: tuple[str, ...] = ()

    @field_validator("name", "parent", mode="before")
    @classmethod
    def _stringify_name(cls, value: object) -> object:
        return _login(value)

    @field_validator("members", "maintainers", "formation", mode="before")
    @classmethod
    def _stringify_names(cls, value: object) -> object:
        if isinstance(value, (list, tuple)):
            return [_login(item) for item in value]
        return value

    @field_validator("members", "maintainers")
    @classmethod
    def _unique_identities(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return _dedupe(value)

    @property
    def is_formation(self) -> bool:
        return len(self.formation) > 0


class Repository(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    external_collaborators: dict[str, str] = Field(default_factory=dict)

    @field_validator("external_collaborators", mode="before")
    @classmethod
    def _stringify_permissions(cls, value: object) -> object:
        if isinstance(value, dict):
            return {str(k): str(v) for k, v in value.items()}
        return value


class TeamIndex(BaseModel):
    """Graph builder output: teams keyed by name in configuration order."""

    model_config = ConfigDict(frozen=True)

    organization: Optional[str] = None
    teams: dict[str, Team] = Field(default_factory=dict)
    repositories: tuple[Repository, ...] = ()

    def get(self, name: str) -> Optional[Team]:
        return self.teams.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.teams

    def __len__(self) -> int:
        return len(self.teams)


class UserLookup(BaseModel):
    """Identity directory lookup result. ``login`` is the canonical login when found."""

    login: str
    found: bool


class AuditSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    teams_audited: int = Field(ge=0, alias="teamsAudited")
    members_audited: int = Field(ge=0, alias="membersAudited")
    organization: Optional[str] = None


class AuditOutcome(BaseModel):
    """Single outcome signal for a run: a summary on success, one failure otherwise."""

    ok: bool
    summary: Optional[AuditSummary] = None
    error_code: Optional[str] = None
    message: Optional[str] = None
