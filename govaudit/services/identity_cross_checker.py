"""Cross-check governance identities against the identity directory.

Lookups are issued one identity at a time, in a fixed order, and the first
disagreement is raised. The org member list is fetched once up front and used
as a snapshot for the whole loop.
"""

from __future__ import annotations

import logging

from govaudit.adapters.identity_directory import IdentityDirectory
from govaudit.models.governance import TeamIndex
from govaudit.services.errors import (
    IdentityCaseMismatchError,
    MalformedConfigError,
    NotOrgMemberError,
    UnknownIdentityError,
)

log = logging.getLogger(__name__)


def governance_members(index: TeamIndex) -> list[str]:
    """Team members then maintainers, team by team in configuration order, each once."""
    ordered: dict[str, None] = {}
    for team in index.teams.values():
        for identity in (*team.members, *team.maintainers):
            ordered.setdefault(identity, None)
    return list(ordered)


def external_collaborators(index: TeamIndex) -> list[str]:
    ordered: dict[str, None] = {}
    for repo in index.repositories:
        for identity in repo.external_collaborators:
            ordered.setdefault(identity, None)
    return list(ordered)


def governance_identities(index: TeamIndex) -> tuple[list[str], set[str]]:
    """Ordered union of governance members and collaborators, plus the member subset."""
    members = governance_members(index)
    union = list(dict.fromkeys([*members, *external_collaborators(index)]))
    return union, set(members)


def cross_check_identities(index: TeamIndex, directory: IdentityDirectory) -> int:
    """Validate every identity; returns how many distinct identities were audited."""
    organization = index.organization
    if not organization:
        raise MalformedConfigError("Governance config 'organization' is required to audit org membership")

    identities, members = governance_identities(index)
    org_members = set(directory.list_org_members(organization))
    log.info("organization %s snapshot: %d members", organization, len(org_members))

    for identity in identities:
        found = directory.lookup_user(identity)
        log.debug("looked up %s: found=%s login=%s", identity, found.found, found.login)
        if not found.found:
            raise UnknownIdentityError(identity)
        if found.login != identity:
            raise IdentityCaseMismatchError(identity, found.login)
        if identity in members and identity not in org_members:
            raise NotOrgMemberError(identity, organization)

    return len(identities)
