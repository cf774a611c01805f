"""Governance audit failure taxonomy.

Every failure carries a stable ``code`` plus the offending names as attributes.
``str(err)`` is the one-line message reported to the pipeline.
"""

from __future__ import annotations

from typing import Iterable


class GovernanceAuditError(Exception):
    code = "governance_audit_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MalformedConfigError(GovernanceAuditError):
    code = "malformed_config"


class ConfigNotFoundError(MalformedConfigError):
    code = "config_not_found"

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"{path} not found")


# --- graph integrity ---


class GraphIntegrityError(GovernanceAuditError):
    code = "graph_integrity"


class UnknownTeamReferenceError(GraphIntegrityError):
    code = "unknown_team_reference"

    def __init__(self, team_name: str, referenced_by: str | None = None) -> None:
        self.team_name = team_name
        self.referenced_by = referenced_by
        if referenced_by:
            message = f"Team {referenced_by} references unknown team {team_name}"
        else:
            message = f"Unknown team {team_name}"
        super().__init__(message)


class UnknownParentError(GraphIntegrityError):
    code = "unknown_parent"

    def __init__(self, team_name: str, parent_name: str) -> None:
        self.team_name = team_name
        self.parent_name = parent_name
        super().__init__(f"Team {team_name} has unknown parent {parent_name}")


class CyclicReferenceError(GraphIntegrityError):
    code = "cyclic_reference"

    def __init__(self, team_name: str) -> None:
        self.team_name = team_name
        super().__init__(f"Team {team_name} is part of a reference cycle")


# --- structural invariants ---


class InvariantViolationError(GovernanceAuditError):
    code = "invariant_violation"


class MissingMaintainerError(InvariantViolationError):
    code = "missing_maintainer"

    def __init__(self, team_name: str) -> None:
        self.team_name = team_name
        super().__init__(f"Team {team_name} has no maintainers")


class DuplicateMaintainerMemberError(InvariantViolationError):
    code = "duplicate_maintainer_member"

    def __init__(self, team_name: str, offending: Iterable[str]) -> None:
        self.team_name = team_name
        self.offending = sorted(offending)
        names = ", ".join(self.offending)
        super().__init__(f"Team {team_name} lists {names} as both member and maintainer")


class ParentContainmentViolationError(InvariantViolationError):
    code = "parent_containment_violation"

    def __init__(self, child_team: str, parent_team: str, identity: str) -> None:
        self.child_team = child_team
        self.parent_team = parent_team
        self.identity = identity
        super().__init__(
            f"{identity} is in team {child_team} but not in its parent team {parent_team}"
        )


# --- identity directory disagreements ---


class IdentityDirectoryError(GovernanceAuditError):
    code = "identity_directory"


class UnknownIdentityError(IdentityDirectoryError):
    code = "unknown_identity"

    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(f"No user with login {identity} exists on GitHub")


class IdentityCaseMismatchError(IdentityDirectoryError):
    code = "identity_case_mismatch"

    def __init__(self, identity: str, canonical_login: str) -> None:
        self.identity = identity
        self.canonical_login = canonical_login
        super().__init__(f"Governance member {identity} does not match GitHub login {canonical_login}")


class NotOrgMemberError(IdentityDirectoryError):
    code = "not_org_member"

    def __init__(self, identity: str, organization: str) -> None:
        self.identity = identity
        self.organization = organization
        super().__init__(f"Governance member {identity} is not a member of the {organization} organization")
