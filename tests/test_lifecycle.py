"""create -> list -> delete against an in-memory Linear workspace."""

import itertools

import pytest

from conftest import TEAM_ID, make_issue
from linearis.payload import IssueCreateArgs
from linearis.services import IssuesService


class InMemoryLinear:
    """Answers the issue create/list/delete documents from a dict of issues."""

    def __init__(self):
        self.issues = {}
        self._numbers = itertools.count(1)

    async def request(self, query, variables=None, operation="query Linear"):
        variables = variables or {}
        if "mutation CreateIssue" in query:
            number = next(self._numbers)
            issue = make_issue(
                issue_id=f"00000000-0000-0000-0000-{number:012d}",
                identifier=f"ENG-{number}",
                title=variables["input"]["title"],
            )
            self.issues[issue["id"]] = issue
            return {"issueCreate": {"success": True, "issue": issue}}
        if "query GetIssues" in query:
            return {"issues": {"nodes": list(self.issues.values())[: variables["first"]]}}
        if "mutation DeleteIssue" in query:
            removed = self.issues.pop(variables["id"], None)
            return {"issueDelete": {"success": removed is not None}}
        raise AssertionError(f"unexpected request: {operation}")


@pytest.mark.asyncio
async def test_created_issue_is_listed_until_deleted():
    service = IssuesService(InMemoryLinear())

    created = await service.create(IssueCreateArgs.build(title="Round trip", team=TEAM_ID))
    listed = await service.list()
    assert created["id"] in [issue["id"] for issue in listed]

    await service.delete(created["id"])
    listed = await service.list()
    assert created["id"] not in [issue["id"] for issue in listed]
