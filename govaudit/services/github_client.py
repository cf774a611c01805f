"""GitHub API client for identity lookups.

REST wrapper with:
- optional token auth (passed in explicitly; see AuditSettings)
- rate-limit handling (sleep until reset when exhausted)
- basic ETag conditional requests + in-memory response cache
"""

from __future__ import annotations

import time
from typing import Any, Optional
from urllib.parse import quote

import httpx


class GitHubAPIError(RuntimeError):
    def __init__(self, status_code: int, url: str, body: str = "") -> None:
        super().__init__(f"GitHub API error {status_code} for {url}: {body[:200]}")
        self.status_code = status_code
        self.url = url


class GitHubClient:
    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = "https://api.github.com",
        user_agent: str = "governance-audit/1.0",
        timeout: float = 20.0,
    ) -> None:
        self._token = (token or "").strip() or None
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": user_agent,
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self._token:
            self._headers["Authorization"] = f"Bearer {self._token}"

        # Per-run caches
        self._etag_by_url: dict[str, str] = {}
        self._json_cache_by_url: dict[str, Any] = {}

    def _sleep_for_rate_limit_if_needed(self, r: httpx.Response) -> None:
        remaining = r.headers.get("X-RateLimit-Remaining")
        reset = r.headers.get("X-RateLimit-Reset")
        try:
            rem_i = int(remaining) if remaining is not None else None
            reset_i = int(reset) if reset is not None else None
        except ValueError:
            rem_i, reset_i = None, None

        if rem_i == 0 and reset_i:
            now = int(time.time())
            delay = max(0, reset_i - now) + 1
            time.sleep(delay)

    def _request(self, method: str, url: str, headers: dict[str, str] | None = None) -> httpx.Response:
        h = dict(self._headers)
        if headers:
            h.update(headers)
        with httpx.Client(timeout=self._timeout, headers=h) as client:
            r = client.request(method, url)
        self._sleep_for_rate_limit_if_needed(r)

        # If 403 is rate-limit, back off until reset then retry once.
        if r.status_code == 403 and r.headers.get("X-RateLimit-Remaining") == "0":
            self._sleep_for_rate_limit_if_needed(r)
            with httpx.Client(timeout=self._timeout, headers=h) as client:
                r = client.request(method, url)
        return r

    def get_json(self, path: str) -> Any:
        """GET JSON for a path or full URL. Uses ETag conditional requests when possible."""
        url = path if path.startswith("http") else f"{self._base_url}{path}"

        extra_headers: dict[str, str] = {}
        etag = self._etag_by_url.get(url)
        if etag:
            extra_headers["If-None-Match"] = etag

        r = self._request("GET", url, headers=extra_headers)

        if r.status_code == 304:
            if url in self._json_cache_by_url:
                return self._json_cache_by_url[url]
            # If cache was lost, retry without condition.
            r = self._request("GET", url, headers={})

        if r.status_code >= 400:
            raise GitHubAPIError(r.status_code, url, r.text)

        new_etag = r.headers.get("ETag")
        if new_etag:
            self._etag_by_url[url] = new_etag

        data = r.json()
        self._json_cache_by_url[url] = data
        return data

    def get_user(self, login: str) -> Optional[dict]:
        """Fetch a user by login. Returns None when GitHub answers 404."""
        try:
            data = self.get_json(f"/users/{quote(login, safe='')}")
        except GitHubAPIError as exc:
            if exc.status_code == 404:
                return None
            raise
        return data if isinstance(data, dict) else None

    def list_org_members(self, org: str, per_page: int = 100, max_pages: Optional[int] = None) -> list[dict]:
        """List organization members, following pages until a short or empty page."""
        out: list[dict] = []
        page = 1
        while max_pages is None or page <= max_pages:
            data = self.get_json(f"/orgs/{quote(org, safe='')}/members?per_page={per_page}&page={page}")
            if not isinstance(data, list):
                break
            out.extend(data)
            if len(data) < per_page:
                break
            page += 1
        return out
