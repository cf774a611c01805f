"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from govaudit.adapters.identity_directory import InMemoryIdentityDirectory  # noqa: E402
from governance_factories import ORG  # noqa: E402


@pytest.fixture(autouse=True)
def _clear_github_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # Keep settings deterministic regardless of the developer's shell.
    for key in (
        "GITHUB_TOKEN",
        "GH_TOKEN",
        "GITHUB_API_URL",
        "GITHUB_WORKSPACE",
        "GOVERNANCE_CONFIG_FILE",
        "GOVERNANCE_AUDIT_TIMEOUT",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def directory() -> InMemoryIdentityDirectory:
    """Directory where every login used across the tests exists and belongs to the org."""
    logins = ["alice", "bob", "carol", "dave", "erin", "frank", "grace", "heidi"]
    return InMemoryIdentityDirectory(users=logins, org_members={ORG: logins})
