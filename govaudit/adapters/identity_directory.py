"""IdentityDirectory abstraction + GitHub and in-memory backends.

The audit core only needs two capabilities: look a login up (and learn its
canonical casing), and list every member of an organization.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Protocol

from govaudit.models.governance import UserLookup
from govaudit.services.github_client import GitHubClient

log = logging.getLogger(__name__)


class IdentityDirectory(Protocol):
    """Protocol for identity directories. Implementations: GitHubIdentityDirectory, InMemoryIdentityDirectory."""

    def lookup_user(self, login: str) -> UserLookup:
        ...

    def list_org_members(self, org: str) -> list[str]:
        """Complete member login list for the organization (already paginated)."""
        ...


class GitHubIdentityDirectory:
    def __init__(self, client: Optional[GitHubClient] = None) -> None:
        self._client = client or GitHubClient()

    def lookup_user(self, login: str) -> UserLookup:
        user = self._client.get_user(login)
        if user is None:
            return UserLookup(login=login, found=False)
        canonical = str(user.get("login") or "")
        return UserLookup(login=canonical, found=bool(canonical))

    def list_org_members(self, org: str) -> list[str]:
        members = self._client.list_org_members(org)
        logins = [str(m.get("login")) for m in members if isinstance(m, dict) and m.get("login")]
        log.debug("GitHub org %s lists %d members", org, len(logins))
        return logins


class InMemoryIdentityDirectory:
    """Directory backed by a fixed login registry. GitHub logins match case-insensitively."""

    def __init__(
        self,
        users: Iterable[str] = (),
        org_members: Optional[dict[str, Iterable[str]]] = None,
    ) -> None:
        self._users: dict[str, str] = {}
        for login in users:
            self._users[login.lower()] = login
        self._org_members: dict[str, list[str]] = {
            org: list(members) for org, members in (org_members or {}).items()
        }
        self.calls: list[tuple[str, str]] = []

    def add_user(self, login: str, orgs: Iterable[str] = ()) -> None:
        self._users[login.lower()] = login
        for org in orgs:
            self._org_members.setdefault(org, []).append(login)

    def lookup_user(self, login: str) -> UserLookup:
        self.calls.append(("lookup_user", login))
        canonical = self._users.get(login.lower())
        if canonical is None:
            return UserLookup(login=login, found=False)
        return UserLookup(login=canonical, found=True)

    def list_org_members(self, org: str) -> list[str]:
        self.calls.append(("list_org_members", org))
        return list(self._org_members.get(org, []))
