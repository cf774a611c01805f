"""Tests for GitHub API client.

Validates rate limiting, ETag caching, error handling, user lookup, and org member pagination.
Uses mocked HTTP responses (respx) to avoid real GitHub API calls.
"""

import time
from unittest.mock import patch

import pytest
import respx
from httpx import Response

from govaudit.services.github_client import GitHubAPIError, GitHubClient


@respx.mock
def test_github_client_basic_get():
    """Client should make basic GET request with proper headers."""
    respx.get("https://api.github.com/users/alice").mock(
        return_value=Response(200, json={"login": "alice", "id": 1})
    )

    client = GitHubClient()
    data = client.get_user("alice")

    assert data["login"] == "alice"
    assert len(respx.calls) == 1
    request = respx.calls[0].request
    assert "user-agent" in request.headers
    assert "accept" in request.headers
    assert "authorization" not in request.headers


@respx.mock
def test_github_client_with_token_auth():
    """Client should include Bearer token when configured."""
    route = respx.get("https://api.github.com/users/alice").mock(
        return_value=Response(200, json={"login": "alice"})
    )

    client = GitHubClient(token="test-token-123")
    client.get_user("alice")

    request = route.calls[0].request
    assert request.headers["authorization"] == "Bearer test-token-123"


@respx.mock
def test_github_client_blank_token_is_ignored():
    route = respx.get("https://api.github.com/users/alice").mock(
        return_value=Response(200, json={"login": "alice"})
    )

    GitHubClient(token="   ").get_user("alice")

    assert "authorization" not in route.calls[0].request.headers


@respx.mock
def test_github_client_etag_caching():
    """Client should use ETag for conditional requests and cache responses."""
    route = respx.get("https://api.github.com/users/alice").mock(
        return_value=Response(200, json={"login": "alice", "id": 1}, headers={"ETag": '"abc123"'})
    )

    client = GitHubClient()
    data1 = client.get_user("alice")
    assert data1["id"] == 1

    route.mock(return_value=Response(304, json={}))

    data2 = client.get_user("alice")
    assert data2["id"] == 1  # From cache

    assert len(route.calls) == 2
    second_request = route.calls[1].request
    assert second_request.headers["if-none-match"] == '"abc123"'


@respx.mock
def test_github_client_304_with_lost_cache():
    """Client should retry without condition if cache is lost after 304."""
    route = respx.get("https://api.github.com/users/alice")
    route.mock(
        side_effect=[
            Response(200, json={"login": "alice", "id": 1}, headers={"ETag": '"abc123"'}),
            Response(304, json={}),
            Response(200, json={"login": "alice", "id": 2}),
        ]
    )

    client = GitHubClient()
    client.get_user("alice")

    client._json_cache_by_url.clear()

    data = client.get_user("alice")
    assert data["id"] == 2
    assert len(route.calls) == 3


@respx.mock
def test_github_client_rate_limit_exhausted():
    """Client should sleep and retry when rate limit exhausted (403)."""
    route = respx.get("https://api.github.com/users/alice")
    route.mock(
        side_effect=[
            Response(
                403,
                json={"message": "API rate limit exceeded"},
                headers={
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": str(int(time.time()) + 2),
                },
            ),
            Response(200, json={"login": "alice"}),
        ]
    )

    client = GitHubClient()

    with patch("time.sleep") as mock_sleep:
        data = client.get_user("alice")

        assert mock_sleep.called
        assert data["login"] == "alice"
        assert len(route.calls) == 2


@respx.mock
def test_github_client_rate_limit_remaining_zero():
    """Client should sleep when rate limit remaining is 0."""
    respx.get("https://api.github.com/users/alice").mock(
        return_value=Response(
            200,
            json={"login": "alice"},
            headers={
                "X-RateLimit-Remaining": "0",
                "X-RateLimit-Reset": str(int(time.time()) + 1),
            },
        )
    )

    client = GitHubClient()

    with patch("time.sleep") as mock_sleep:
        client.get_user("alice")

        assert mock_sleep.called
        assert mock_sleep.call_args[0][0] > 0


@respx.mock
def test_github_client_rate_limit_headers_missing():
    """Client should handle missing rate limit headers gracefully."""
    respx.get("https://api.github.com/users/alice").mock(return_value=Response(200, json={"login": "alice"}))

    with patch("time.sleep") as mock_sleep:
        data = GitHubClient().get_user("alice")

    assert data["login"] == "alice"
    assert not mock_sleep.called


@respx.mock
def test_get_user_returns_none_for_404():
    respx.get("https://api.github.com/users/ghost").mock(return_value=Response(404, json={"message": "Not Found"}))

    assert GitHubClient().get_user("ghost") is None


@respx.mock
def test_github_client_error_handling():
    """Client should raise GitHubAPIError for other 4xx/5xx responses."""
    respx.get("https://api.github.com/users/alice").mock(return_value=Response(500, text="boom"))

    client = GitHubClient()

    with pytest.raises(GitHubAPIError) as exc_info:
        client.get_user("alice")

    assert exc_info.value.status_code == 500
    assert "GitHub API error 500" in str(exc_info.value)
    assert isinstance(exc_info.value, RuntimeError)


@respx.mock
def test_list_org_members_follows_pages_until_short_page():
    route = respx.get("https://api.github.com/orgs/acme/members")
    route.mock(
        side_effect=[
            Response(200, json=[{"login": f"user{i}"} for i in range(100)]),
            Response(200, json=[{"login": f"user{i}"} for i in range(100, 200)]),
            Response(200, json=[{"login": f"user{i}"} for i in range(200, 230)]),
        ]
    )

    members = GitHubClient().list_org_members("acme")

    assert len(members) == 230
    assert members[-1]["login"] == "user229"
    assert len(route.calls) == 3
    assert route.calls[2].request.url.params["page"] == "3"
    assert route.calls[2].request.url.params["per_page"] == "100"


@respx.mock
def test_list_org_members_stops_on_empty_page():
    route = respx.get("https://api.github.com/orgs/acme/members")
    route.mock(
        side_effect=[
            Response(200, json=[{"login": f"user{i}"} for i in range(100)]),
            Response(200, json=[]),
        ]
    )

    members = GitHubClient().list_org_members("acme")

    assert len(members) == 100
    assert len(route.calls) == 2


@respx.mock
def test_list_org_members_respects_max_pages():
    route = respx.get("https://api.github.com/orgs/acme/members")
    route.mock(return_value=Response(200, json=[{"login": f"user{i}"} for i in range(100)]))

    members = GitHubClient().list_org_members("acme", max_pages=2)

    assert len(members) == 200
    assert len(route.calls) == 2


@respx.mock
def test_list_org_members_non_list_response():
    """Client should handle non-list responses in pagination gracefully."""
    respx.get("https://api.github.com/orgs/acme/members").mock(
        return_value=Response(200, json={"message": "Some error"})
    )

    assert GitHubClient().list_org_members("acme") == []


@respx.mock
def test_github_client_custom_base_url():
    """Client should support custom base URL (e.g., GitHub Enterprise)."""
    respx.get("https://github.enterprise.com/api/v3/users/alice").mock(
        return_value=Response(200, json={"login": "alice"})
    )

    client = GitHubClient(base_url="https://github.enterprise.com/api/v3/")
    data = client.get_user("alice")

    assert data["login"] == "alice"


@respx.mock
def test_github_client_get_json_with_full_url():
    """Client should handle full URLs in addition to paths."""
    respx.get("https://api.github.com/users/alice").mock(return_value=Response(200, json={"login": "alice"}))

    data = GitHubClient().get_json("https://api.github.com/users/alice")

    assert data["login"] == "alice"
