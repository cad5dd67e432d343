"""Tests for project, document, attachment, cycle, milestone and workspace services."""

import pytest

from conftest import ISSUE_ID, OTHER_TEAM_ID, PROJECT_ID, TEAM_ID, USER_ID, make_team
from linearis.errors import (
    AmbiguousMatchError,
    FileWriteError,
    LinearisError,
    NotFoundError,
    ValidationError,
)
from linearis.payload import (
    DocumentCreateArgs,
    MilestoneCreateArgs,
    MilestoneUpdateArgs,
    ProjectCreateArgs,
    ProjectUpdateArgs,
)
from linearis.services import (
    AttachmentsService,
    CommentsService,
    CyclesService,
    DocumentsService,
    EmbedsService,
    LabelsService,
    MilestonesService,
    ProjectsService,
    UsersService,
)

DOCUMENT = {
    "id": "doc-1",
    "title": "Release plan",
    "url": "https://linear.app/acme/document/release-plan-0f3a2b1c9d8e",
    "slugId": "0f3a2b1c9d8e",
    "createdAt": "2025-01-02T03:04:05Z",
}


class TestProjects:
    @pytest.mark.asyncio
    async def test_read_skips_zero_connections(self, fake_client):
        client = fake_client({"project": {"id": PROJECT_ID, "name": "Apollo"}})

        await ProjectsService(client).get(PROJECT_ID, milestones_first=0, issues_first=10)

        assert client.last.variables == {
            "id": PROJECT_ID,
            "milestonesFirst": None,
            "issuesFirst": 10,
            "skipMilestones": True,
            "skipIssues": False,
        }

    @pytest.mark.asyncio
    async def test_create_resolves_team_and_lead(self, fake_client):
        client = fake_client(
            {"teams": {"nodes": [make_team()]}},
            {"users": {"nodes": [{"id": USER_ID, "name": "Ada"}]}},
            {"projectCreate": {"success": True, "project": {"id": PROJECT_ID, "name": "Apollo"}}},
        )
        args = ProjectCreateArgs.build(name="Apollo", team="ENG", lead="Ada", target_date="2025-06-30")

        result = await ProjectsService(client).create(args)

        assert result["id"] == PROJECT_ID
        assert client.last.variables["input"] == {
            "name": "Apollo",
            "leadId": USER_ID,
            "targetDate": "2025-06-30",
            "teamIds": [TEAM_ID],
        }

    @pytest.mark.asyncio
    async def test_update_clears_lead(self, fake_client):
        client = fake_client(
            {"projects": {"nodes": [{"id": PROJECT_ID, "name": "Apollo"}]}},
            {"projectUpdate": {"success": True, "project": {"id": PROJECT_ID, "name": "Apollo"}}},
        )
        args = ProjectUpdateArgs.build(id="Apollo", lead=None)

        await ProjectsService(client).update(args)

        assert client.last.variables == {"id": PROJECT_ID, "input": {"leadId": None}}

    @pytest.mark.asyncio
    async def test_archive(self, fake_client):
        client = fake_client({"projectArchive": {"success": True}})
        assert await ProjectsService(client).archive(PROJECT_ID) == {"archived": True, "id": PROJECT_ID}


class TestDocuments:
    @pytest.mark.asyncio
    async def test_create_resolves_project_and_team(self, fake_client):
        client = fake_client(
            {
                "projects": {"nodes": [{"id": PROJECT_ID, "name": "Apollo"}]},
                "teams": {"nodes": [make_team()]},
            },
            {"documentCreate": {"success": True, "document": DOCUMENT}},
        )
        args = DocumentCreateArgs.build(title="Release plan", project="Apollo", team="ENG")

        result = await DocumentsService(client).create(args)

        assert len(client.calls) == 2
        assert client.calls[0].variables == {"projectName": "Apollo", "teamRef": "ENG"}
        assert result["createdAt"] == "2025-01-02T03:04:05.000Z"
        assert client.last.variables["input"] == {
            "title": "Release plan",
            "projectId": PROJECT_ID,
            "teamId": TEAM_ID,
        }

    @pytest.mark.asyncio
    async def test_team_picks_among_same_named_projects(self, fake_client):
        client = fake_client(
            {
                "projects": {
                    "nodes": [
                        {"id": PROJECT_ID, "name": "Mobile", "teams": {"nodes": [{"id": TEAM_ID}]}},
                        {"id": "ops-mobile", "name": "Mobile", "teams": {"nodes": [{"id": OTHER_TEAM_ID}]}},
                    ]
                },
                "teams": {"nodes": [make_team()]},
            },
            {"documentCreate": {"success": True, "document": DOCUMENT}},
        )
        args = DocumentCreateArgs.build(title="T", project="Mobile", team="ENG")

        await DocumentsService(client).create(args)

        assert client.last.variables["input"]["projectId"] == PROJECT_ID

    @pytest.mark.asyncio
    async def test_same_named_projects_without_team_are_ambiguous(self, fake_client):
        client = fake_client(
            {
                "projects": {
                    "nodes": [
                        {"id": PROJECT_ID, "name": "Mobile", "teams": {"nodes": [{"id": TEAM_ID}]}},
                        {"id": "ops-mobile", "name": "Mobile", "teams": {"nodes": [{"id": OTHER_TEAM_ID}]}},
                    ]
                }
            }
        )

        with pytest.raises(AmbiguousMatchError):
            await DocumentsService(client).create(DocumentCreateArgs.build(title="T", project="Mobile"))
        assert len(client.calls) == 1

    @pytest.mark.asyncio
    async def test_attach_failure_names_document_and_retry(self, fake_client):
        client = fake_client(
            {"documentCreate": {"success": True, "document": DOCUMENT}},
            {"issues": {"nodes": []}},
        )
        args = DocumentCreateArgs.build(title="Release plan", team=TEAM_ID)

        with pytest.raises(LinearisError) as exc_info:
            await DocumentsService(client).create(args, attach_to="ENG-404")

        message = exc_info.value.message
        assert "doc-1" in message
        assert 'Issue "ENG-404" not found' in message
        assert "linearis attachments create --issue ENG-404" in message

    @pytest.mark.asyncio
    async def test_list_by_issue_uses_attachment_slugs(self, fake_client):
        client = fake_client(
            {
                "issue": {
                    "attachments": {
                        "nodes": [
                            {"id": "a1", "url": DOCUMENT["url"]},
                            {"id": "a2", "url": "https://github.com/acme/repo/pull/1"},
                        ]
                    }
                }
            },
            {"documents": {"nodes": [DOCUMENT]}},
        )

        result = await DocumentsService(client).list(issue=ISSUE_ID)

        assert [d["id"] for d in result] == ["doc-1"]
        assert client.last.variables == {"first": 50, "filter": {"slugId": {"in": ["0f3a2b1c9d8e"]}}}

    @pytest.mark.asyncio
    async def test_list_by_issue_without_documents(self, fake_client):
        client = fake_client({"issue": {"attachments": {"nodes": []}}})

        assert await DocumentsService(client).list(issue=ISSUE_ID) == []
        assert len(client.calls) == 1


class TestAttachments:
    @pytest.mark.asyncio
    async def test_list_unknown_issue(self, fake_client):
        client = fake_client({"issue": None})
        with pytest.raises(NotFoundError):
            await AttachmentsService(client).list(ISSUE_ID)

    @pytest.mark.asyncio
    async def test_delete(self, fake_client):
        client = fake_client({"attachmentDelete": {"success": True}})
        assert await AttachmentsService(client).delete("att-1") == {"deleted": True, "id": "att-1"}


class TestCycles:
    CYCLES = {
        "cycles": {
            "nodes": [
                {"id": f"c{n}", "name": f"Sprint {n}", "number": n, "isActive": n == 5}
                for n in range(1, 9)
            ]
        }
    }

    @pytest.mark.asyncio
    async def test_around_active_requires_team(self, fake_client):
        with pytest.raises(ValidationError):
            await CyclesService(fake_client()).list(around_active=1)

    @pytest.mark.asyncio
    async def test_around_active_window(self, fake_client):
        client = fake_client(self.CYCLES)

        result = await CyclesService(client).list(team=TEAM_ID, around_active=1)

        assert [c["number"] for c in result] == [4, 5, 6]
        assert client.last.variables["filter"] == {"team": {"id": {"eq": TEAM_ID}}}

    @pytest.mark.asyncio
    async def test_active_filter(self, fake_client):
        client = fake_client({"cycles": {"nodes": []}})

        await CyclesService(client).list(active=True)

        assert client.last.variables == {"first": 250, "filter": {"isActive": {"eq": True}}}


class TestMilestones:
    @pytest.mark.asyncio
    async def test_create_sets_project(self, fake_client):
        client = fake_client(
            {"projectMilestoneCreate": {"success": True, "projectMilestone": {"id": "m1", "name": "Beta"}}}
        )
        args = MilestoneCreateArgs.build(name="Beta", project=PROJECT_ID, target_date="2025-03-01")

        await MilestonesService(client).create(args)

        assert client.last.variables["input"] == {
            "name": "Beta",
            "targetDate": "2025-03-01",
            "projectId": PROJECT_ID,
        }

    @pytest.mark.asyncio
    async def test_update_by_name_resolves_globally(self, fake_client):
        client = fake_client(
            {"milestones": {"nodes": [{"id": "m1", "name": "Beta", "project": {"name": "Apollo"}}]}},
            {"projectMilestoneUpdate": {"success": True, "projectMilestone": {"id": "m1", "name": "GA"}}},
        )
        args = MilestoneUpdateArgs.build(id="Beta", name="GA", sort_order="2.5")

        await MilestonesService(client).update(args)

        assert client.last.variables == {"id": "m1", "input": {"name": "GA", "sortOrder": 2.5}}


class TestWorkspace:
    @pytest.mark.asyncio
    async def test_labels_for_team_include_workspace_labels(self, fake_client):
        client = fake_client({"issueLabels": {"nodes": [{"id": "l", "name": "Bug", "team": None}]}})

        result = await LabelsService(client).list(TEAM_ID)

        assert result == [{"id": "l", "name": "Bug", "scope": "workspace"}]
        assert client.last.variables["filter"] == {
            "or": [{"team": {"id": {"eq": TEAM_ID}}}, {"team": {"null": True}}]
        }

    @pytest.mark.asyncio
    async def test_active_users(self, fake_client):
        client = fake_client({"users": {"nodes": []}})
        await UsersService(client).list(active_only=True)
        assert client.last.variables == {"first": 250, "filter": {"active": {"eq": True}}}

    @pytest.mark.asyncio
    async def test_comment_on_identifier(self, fake_client):
        client = fake_client(
            {"issues": {"nodes": [{"id": ISSUE_ID}]}},
            {"commentCreate": {"success": True, "comment": {"id": "k", "body": "Done"}}},
        )

        result = await CommentsService(client).create("ENG-1", "Done")

        assert result["body"] == "Done"
        assert client.last.variables == {"input": {"issueId": ISSUE_ID, "body": "Done"}}


class TestEmbeds:
    URL = "https://uploads.linear.app/abc/def/screenshot.png"

    @pytest.mark.asyncio
    async def test_download_writes_file(self, fake_client, tmp_path):
        client = fake_client()
        client.files[self.URL] = b"png-bytes"

        result = await EmbedsService(client).download(self.URL)

        assert (tmp_path / "screenshot.png").read_bytes() == b"png-bytes"
        assert result == {"success": True, "filePath": "screenshot.png", "size": 9}

    @pytest.mark.asyncio
    async def test_existing_file_needs_overwrite(self, fake_client, tmp_path):
        (tmp_path / "out.png").write_bytes(b"old")
        client = fake_client()
        client.files[self.URL] = b"new"

        with pytest.raises(ValidationError):
            await EmbedsService(client).download(self.URL, "out.png")
        await EmbedsService(client).download(self.URL, "out.png", overwrite=True)

        assert (tmp_path / "out.png").read_bytes() == b"new"

    @pytest.mark.asyncio
    async def test_unwritable_target_is_a_linearis_error(self, fake_client, tmp_path):
        (tmp_path / "taken").write_text("a regular file")
        client = fake_client()
        client.files[self.URL] = b"png-bytes"

        with pytest.raises(FileWriteError) as exc_info:
            await EmbedsService(client).download(self.URL, "taken/shot.png")

        assert exc_info.value.to_dict()["error"].startswith('Failed to write "taken/shot.png"')

    @pytest.mark.asyncio
    async def test_rejects_other_hosts(self, fake_client):
        with pytest.raises(ValidationError):
            await EmbedsService(fake_client()).download("https://example.com/file.png")
