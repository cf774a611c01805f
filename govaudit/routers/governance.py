"""Governance audit API route."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse

from govaudit.adapters.identity_directory import IdentityDirectory
from govaudit.models.error import ErrorDetail
from govaudit.models.governance import AuditOutcome
from govaudit.services import audit_service
from govaudit.services.audit_settings import AuditSettings
from govaudit.services.github_client import GitHubAPIError

router = APIRouter()
log = logging.getLogger(__name__)


def get_identity_directory() -> IdentityDirectory:
    return audit_service.directory_from_settings(AuditSettings.from_env())


@router.post(
    "/governance/audit",
    response_model=AuditOutcome,
    responses={
        422: {"model": AuditOutcome, "description": "Governance violation or malformed config"},
        502: {"model": ErrorDetail},
    },
)
def audit_governance(
    config: Any = Body(...),
    directory: IdentityDirectory = Depends(get_identity_directory),
):
    try:
        outcome = audit_service.evaluate(config, directory)
    except (GitHubAPIError, httpx.HTTPError) as exc:
        log.warning("identity directory request failed: %s", exc)
        raise HTTPException(status_code=502, detail=f"GitHub API request failed: {exc}")
    if not outcome.ok:
        return JSONResponse(status_code=422, content=outcome.model_dump(mode="json", by_alias=True))
    return outcome
