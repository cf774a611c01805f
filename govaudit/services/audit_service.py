"""Governance audit run: build the team graph, check invariants, cross-check identities.

Every stage is fail-fast; the first ``GovernanceAuditError`` ends the run.
Directory transport errors are not caught here.
"""

from __future__ import annotations

import logging
from typing import Any

from govaudit.adapters.identity_directory import GitHubIdentityDirectory, IdentityDirectory
from govaudit.models.governance import AuditOutcome, AuditSummary
from govaudit.services.audit_settings import AuditSettings
from govaudit.services.errors import GovernanceAuditError
from govaudit.services.github_client import GitHubClient
from govaudit.services.graph_builder import build_team_index
from govaudit.services.identity_cross_checker import cross_check_identities
from govaudit.services.invariant_checker import check_invariants
from govaudit.services.membership_resolver import MembershipResolver

log = logging.getLogger(__name__)


def run_audit(raw_config: Any, directory: IdentityDirectory) -> AuditSummary:
    index = build_team_index(raw_config)
    log.info(
        "auditing %d teams and %d repositories for %s",
        len(index),
        len(index.repositories),
        index.organization or "<no organization>",
    )
    resolver = MembershipResolver(index)
    teams_audited = check_invariants(resolver)
    members_audited = cross_check_identities(index, directory)
    summary = AuditSummary(
        teams_audited=teams_audited,
        members_audited=members_audited,
        organization=index.organization,
    )
    log.info("Audited %d members across %d teams successfully", members_audited, teams_audited)
    return summary


def evaluate(raw_config: Any, directory: IdentityDirectory) -> AuditOutcome:
    try:
        summary = run_audit(raw_config, directory)
    except GovernanceAuditError as exc:
        return AuditOutcome(ok=False, error_code=exc.code, message=str(exc))
    return AuditOutcome(ok=True, summary=summary)


def directory_from_settings(settings: AuditSettings) -> GitHubIdentityDirectory:
    client = GitHubClient(
        token=settings.github_token,
        base_url=settings.github_api_url,
        timeout=settings.request_timeout,
    )
    return GitHubIdentityDirectory(client)
