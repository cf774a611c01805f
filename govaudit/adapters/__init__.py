"""Adapters for external identity directories — GitHub, in-memory."""

from govaudit.adapters.identity_directory import (
    GitHubIdentityDirectory,
    IdentityDirectory,
    InMemoryIdentityDirectory,
)

__all__ = ["GitHubIdentityDirectory", "IdentityDirectory", "InMemoryIdentityDirectory"]
