#!/usr/bin/env python3
"""Audit the governance config (teams, maintainers, collaborators) against GitHub.

Usage:
  python scripts/audit_governance.py [--config PATH] [--workspace DIR] [--org-override ORG] [--json] [-v]

Notes:
- Default config path is $GITHUB_WORKSPACE/config.yaml (or ./config.yaml)
- Token comes from GITHUB_TOKEN / GH_TOKEN (a .env file next to the project is honored)
- Exit 0 on success, 1 on a governance violation, 2 when GitHub cannot be reached
- Failures are printed as GitHub Actions ::error:: annotations
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import httpx
from dotenv import load_dotenv

_root_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _root_dir not in sys.path:
    sys.path.insert(0, _root_dir)

from govaudit.adapters.identity_directory import IdentityDirectory
from govaudit.models.governance import AuditOutcome
from govaudit.services import audit_service
from govaudit.services.audit_settings import AuditSettings
from govaudit.services.config_source import load_config_file
from govaudit.services.errors import GovernanceAuditError
from govaudit.services.github_client import GitHubAPIError

EXIT_OK = 0
EXIT_VIOLATION = 1
EXIT_TRANSPORT = 2

log = logging.getLogger("audit_governance")


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Audit governance config against GitHub")
    ap.add_argument("--config", default=None, help="Path to governance YAML (default: <workspace>/config.yaml)")
    ap.add_argument("--workspace", default=None, help="Directory holding the config (default: $GITHUB_WORKSPACE)")
    ap.add_argument("--org-override", default=None, help="Audit against this organization instead of the config's")
    ap.add_argument("--json", action="store_true", help="Print the outcome as JSON")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap.parse_args(argv)


def _settings(args: argparse.Namespace) -> AuditSettings:
    settings = AuditSettings.from_env()
    if args.workspace:
        settings = settings.model_copy(update={"workspace": Path(args.workspace)})
    return settings


def _report(outcome: AuditOutcome, as_json: bool) -> None:
    if as_json:
        print(json.dumps(outcome.model_dump(mode="json", by_alias=True), sort_keys=True))
        return
    if outcome.ok and outcome.summary is not None:
        print(
            f"Audited {outcome.summary.members_audited} members across "
            f"{outcome.summary.teams_audited} teams successfully"
        )
    else:
        print(f"::error::{outcome.message}")


def run(args: argparse.Namespace, directory: Optional[IdentityDirectory] = None) -> int:
    settings = _settings(args)
    config_path = Path(args.config) if args.config else settings.config_path

    try:
        raw = load_config_file(config_path)
    except GovernanceAuditError as exc:
        _report(AuditOutcome(ok=False, error_code=exc.code, message=str(exc)), args.json)
        return EXIT_VIOLATION

    if args.org_override:
        raw = {**raw, "organization": args.org_override}

    if directory is None:
        directory = audit_service.directory_from_settings(settings)

    log.info("auditing %s", config_path)
    try:
        outcome = audit_service.evaluate(raw, directory)
    except (GitHubAPIError, httpx.HTTPError) as exc:
        print(f"::error::GitHub API request failed: {exc}")
        return EXIT_TRANSPORT

    _report(outcome, args.json)
    return EXIT_OK if outcome.ok else EXIT_VIOLATION


def main(argv: Optional[list[str]] = None) -> int:
    load_dotenv(os.path.join(_root_dir, ".env"))
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
