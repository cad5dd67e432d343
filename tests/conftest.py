"""Shared fixtures: a recording fake of LinearClient and environment isolation."""

from typing import Any, NamedTuple

import pytest

from linearis.observability import clear_trace_context


class Call(NamedTuple):
    query: str
    variables: dict[str, Any]
    operation: str


class FakeClient:
    """Stands in for LinearClient: replays queued responses and records requests.

    A queued Exception instance is raised instead of returned.
    """

    def __init__(self, *responses: Any):
        self.responses = list(responses)
        self.calls: list[Call] = []
        self.api_token = "lin_api_test"
        self.files: dict[str, bytes] = {}

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return None

    async def request(self, query, variables=None, operation="query Linear"):
        self.calls.append(Call(query, dict(variables or {}), operation))
        if not self.responses:
            raise AssertionError(f"unexpected request: {operation}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def fetch(self, url, operation="download file"):
        self.calls.append(Call("GET", {"url": url}, operation))
        return self.files[url]

    @property
    def last(self) -> Call:
        return self.calls[-1]


@pytest.fixture
def fake_client():
    """Factory: ``fake_client(response1, response2, ...)``."""
    return FakeClient


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    """Keep real tokens, .env files and trace context out of tests."""
    monkeypatch.chdir(tmp_path)
    for name in ("LINEAR_API_TOKEN", "LINEAR_API_KEY", "LINEAR_API_URL", "LINEARIS_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    yield
    clear_trace_context()


TEAM_ID = "11111111-1111-1111-1111-111111111111"
OTHER_TEAM_ID = "22222222-2222-2222-2222-222222222222"
PROJECT_ID = "33333333-3333-3333-3333-333333333333"
ISSUE_ID = "44444444-4444-4444-4444-444444444444"
LABEL_ID = "55555555-5555-5555-5555-555555555555"
USER_ID = "66666666-6666-6666-6666-666666666666"
CYCLE_ID = "77777777-7777-7777-7777-777777777777"
MILESTONE_ID = "88888888-8888-8888-8888-888888888888"
STATE_ID = "99999999-9999-9999-9999-999999999999"


def make_team(team_id=TEAM_ID, key="ENG", name="Engineering"):
    return {
        "id": team_id,
        "key": key,
        "name": name,
        "states": {
            "nodes": [
                {"id": STATE_ID, "name": "In Progress", "type": "started"},
                {"id": "state-done", "name": "Done", "type": "completed"},
            ]
        },
    }


def make_issue(issue_id=ISSUE_ID, identifier="ENG-123", **overrides):
    issue = {
        "id": issue_id,
        "identifier": identifier,
        "title": "Fix login",
        "description": "",
        "priority": 2,
        "createdAt": "2025-01-02T03:04:05Z",
        "updatedAt": "2025-01-02T03:04:05.123456+00:00",
        "state": {"id": STATE_ID, "name": "In Progress"},
        "team": {"id": TEAM_ID, "key": "ENG", "name": "Engineering"},
        "labels": {"nodes": []},
        "children": {"nodes": []},
    }
    issue.update(overrides)
    return issue
