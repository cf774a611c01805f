"""Audit run settings: GitHub credentials and where the governance file lives."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_CONFIG_FILENAME = "config.yaml"
DEFAULT_TIMEOUT_SECONDS = 20.0


def _env(name: str) -> str:
    return os.getenv(name, "").strip()


def _timeout_from_env() -> float:
    raw = _env("GOVERNANCE_AUDIT_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS
    return value if value > 0 else DEFAULT_TIMEOUT_SECONDS


class AuditSettings(BaseModel):
    github_token: Optional[str] = None
    github_api_url: str = DEFAULT_API_URL
    workspace: Path = Field(default_factory=Path.cwd)
    config_filename: str = DEFAULT_CONFIG_FILENAME
    request_timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)

    @property
    def config_path(self) -> Path:
        return self.workspace / self.config_filename

    @classmethod
    def from_env(cls) -> "AuditSettings":
        workspace = _env("GITHUB_WORKSPACE")
        return cls(
            github_token=_env("GITHUB_TOKEN") or _env("GH_TOKEN") or None,
            github_api_url=_env("GITHUB_API_URL") or DEFAULT_API_URL,
            workspace=Path(workspace) if workspace else Path.cwd(),
            config_filename=_env("GOVERNANCE_CONFIG_FILE") or DEFAULT_CONFIG_FILENAME,
            request_timeout=_timeout_from_env(),
        )
