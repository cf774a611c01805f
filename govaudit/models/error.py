"""Error response schema for 502 responses. 422 audit failures return an AuditOutcome."""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Simple error response: single top-level field detail (string). No extra keys."""

    detail: str
