"""Structural invariants over the resolved team graph.

Teams are checked in configuration order. For each team the checks run as
maintainer presence, then member/maintainer disjointness, then parent
containment along the whole ancestor chain. The first violation is raised.
"""

from __future__ import annotations

import logging

from govaudit.models.governance import Team
from govaudit.services.errors import (
    CyclicReferenceError,
    DuplicateMaintainerMemberError,
    MissingMaintainerError,
    ParentContainmentViolationError,
    UnknownParentError,
)
from govaudit.services.membership_resolver import MembershipResolver

log = logging.getLogger(__name__)


def check_maintainer_presence(team: Team) -> None:
    if not team.is_formation and not team.maintainers:
        raise MissingMaintainerError(team.name)


def check_disjointness(team: Team) -> None:
    if not team.maintainers:
        return
    overlap = set(team.members) & set(team.maintainers)
    if overlap:
        raise DuplicateMaintainerMemberError(team.name, overlap)


def check_parent_containment(team: Team, resolver: MembershipResolver) -> None:
    """Every ancestor must contain the effective membership of its child."""
    current = team
    visited = {team.name}
    while current.parent:
        if current.parent in visited:
            raise CyclicReferenceError(current.parent)
        parent = resolver.index.get(current.parent)
        if parent is None:
            raise UnknownParentError(current.name, current.parent)

        child_members = resolver.resolve(current.name)
        parent_members = resolver.resolve(parent.name)
        missing = sorted(child_members - parent_members)
        if missing:
            raise ParentContainmentViolationError(current.name, parent.name, missing[0])

        visited.add(parent.name)
        current = parent


def check_team(team: Team, resolver: MembershipResolver) -> None:
    check_maintainer_presence(team)
    check_disjointness(team)
    check_parent_containment(team, resolver)
    # formation references and cycles surface even for teams without a parent
    resolver.resolve(team.name)


def check_invariants(resolver: MembershipResolver) -> int:
    """Check every team; returns the number of teams checked."""
    checked = 0
    for team in resolver.index.teams.values():
        check_team(team, resolver)
        checked += 1
        log.debug("team %s passed structural checks", team.name)
    return checked
