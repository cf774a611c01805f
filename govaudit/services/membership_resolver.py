"""Membership resolver: effective membership of a team, expanding formation teams.

Results are memoized per resolver instance, so one audit run sees a single
consistent answer for every team. A team that is revisited while its own
resolution is still in progress raises ``CyclicReferenceError``.
"""

from __future__ import annotations

import logging

from govaudit.models.governance import Team, TeamIndex
from govaudit.services.errors import CyclicReferenceError, UnknownTeamReferenceError

log = logging.getLogger(__name__)


class MembershipResolver:
    def __init__(self, index: TeamIndex) -> None:
        self._index = index
        self._resolved: dict[str, frozenset[str]] = {}
        self._resolving: set[str] = set()

    @property
    def index(self) -> TeamIndex:
        return self._index

    def team(self, name: str, referenced_by: str | None = None) -> Team:
        found = self._index.get(name)
        if found is None:
            raise UnknownTeamReferenceError(name, referenced_by=referenced_by)
        return found

    def resolve(self, team_name: str, referenced_by: str | None = None) -> frozenset[str]:
        cached = self._resolved.get(team_name)
        if cached is not None:
            return cached
        if team_name in self._resolving:
            raise CyclicReferenceError(team_name)

        team = self.team(team_name, referenced_by=referenced_by)
        self._resolving.add(team_name)
        try:
            if team.is_formation:
                members: set[str] = set()
                for component in team.formation:
                    members |= self.resolve(component, referenced_by=team_name)
                result = frozenset(members)
            else:
                result = frozenset(team.members) | frozenset(team.maintainers)
        finally:
            self._resolving.discard(team_name)

        self._resolved[team_name] = result
        log.debug("resolved team %s: %d identities", team_name, len(result))
        return result

    def resolved_count(self) -> int:
        return len(self._resolved)
