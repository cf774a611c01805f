"""Graph builder: parsed governance config mapping -> indexed teams and repositories."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError

from govaudit.models.governance import Repository, Team, TeamIndex
from govaudit.services.errors import MalformedConfigError


def _sequence(raw: Mapping[str, Any], key: str) -> list[Any]:
    if key not in raw:
        raise MalformedConfigError(f"Governance config is missing '{key}'")
    value = raw[key]
    if not isinstance(value, list):
        raise MalformedConfigError(f"Governance config '{key}' must be a list, got {type(value).__name__}")
    return value


def _team_from_record(position: int, record: Any) -> Team:
    if not isinstance(record, Mapping):
        raise MalformedConfigError(f"teams[{position}] must be a mapping")
    name = record.get("name")
    label = name if isinstance(name, str) and name else f"teams[{position}]"
    try:
        return Team(
            name=name,
            members=record.get("members") or (),
            maintainers=record.get("maintainers") or (),
            parent=record.get("parent") or None,
            formation=record.get("formation") or (),
        )
    except ValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        raise MalformedConfigError(f"Team {label} has invalid fields: {', '.join(fields)}") from exc


def _repository_from_record(position: int, record: Any) -> Repository:
    if not isinstance(record, Mapping):
        raise MalformedConfigError(f"repositories[{position}] must be a mapping")
    name = record.get("name")
    label = name if isinstance(name, str) and name else f"repositories[{position}]"
    collaborators = record.get("external_collaborators") or {}
    if not isinstance(collaborators, Mapping):
        raise MalformedConfigError(f"Repository {label} external_collaborators must be a mapping")
    try:
        return Repository(name=name or "", external_collaborators=dict(collaborators))
    except ValidationError as exc:
        raise MalformedConfigError(f"Repository {label} is malformed") from exc


def build_team_index(raw: Any) -> TeamIndex:
    """Index teams by name and collect repositories. Pure: no network or filesystem access."""
    if not isinstance(raw, Mapping):
        raise MalformedConfigError("Governance config root must be a mapping")

    team_records = _sequence(raw, "teams")
    repository_records = _sequence(raw, "repositories")

    teams: dict[str, Team] = {}
    for position, record in enumerate(team_records):
        team = _team_from_record(position, record)
        if team.name in teams:
            raise MalformedConfigError(f"Duplicate team name {team.name}")
        teams[team.name] = team

    repositories = tuple(
        _repository_from_record(position, record) for position, record in enumerate(repository_records)
    )

    organization = raw.get("organization")
    if organization is not None and not isinstance(organization, str):
        raise MalformedConfigError("Governance config 'organization' must be a string")

    return TeamIndex(organization=organization or None, teams=teams, repositories=repositories)
