"""Tests for response reshaping."""

from datetime import UTC, datetime

from conftest import make_issue
from linearis.transform import (
    extract_document_slugs,
    extract_embeds,
    iso_timestamp,
    nodes,
    optional_nodes,
    transform_issue,
    transform_label,
    transform_project,
)


class TestTimestamps:
    def test_z_suffix_without_fraction(self):
        assert iso_timestamp("2025-01-02T03:04:05Z") == "2025-01-02T03:04:05.000Z"

    def test_offset_is_converted_to_utc(self):
        assert iso_timestamp("2025-01-02T05:04:05.500+02:00") == "2025-01-02T03:04:05.500Z"

    def test_microseconds_truncated_to_millis(self):
        assert iso_timestamp("2025-01-02T03:04:05.123456Z") == "2025-01-02T03:04:05.123Z"

    def test_epoch_millis(self):
        assert iso_timestamp(0) == "1970-01-01T00:00:00.000Z"

    def test_naive_datetime_treated_as_utc(self):
        assert iso_timestamp(datetime(2025, 1, 2, 3, 4, 5)) == "2025-01-02T03:04:05.000Z"

    def test_missing_defaults_to_now(self):
        assert iso_timestamp(None).endswith("Z")
        assert iso_timestamp(None, default_now=False) is None

    def test_unparseable_passes_through(self):
        assert iso_timestamp("soon") == "soon"


class TestConnections:
    def test_nodes(self):
        assert nodes({"nodes": [{"id": 1}]}) == [{"id": 1}]
        assert nodes(None) == []
        assert optional_nodes(None) is None
        assert optional_nodes({"nodes": []}) == []


class TestIssue:
    def test_absent_relationships_omitted(self):
        result = transform_issue(make_issue(assignee=None, project=None))
        assert "assignee" not in result
        assert "project" not in result
        assert "description" not in result
        assert result["state"] == {"id": make_issue()["state"]["id"], "name": "In Progress"}
        assert result["labels"] == []
        assert result["comments"] == []

    def test_timestamps_normalised(self):
        result = transform_issue(make_issue())
        assert result["createdAt"] == "2025-01-02T03:04:05.000Z"
        assert result["updatedAt"] == "2025-01-02T03:04:05.123Z"

    def test_relations_flattened(self):
        result = transform_issue(
            make_issue(
                parent={"id": "p", "identifier": "ENG-1", "title": "Parent"},
                children={"nodes": [{"id": "c", "identifier": "ENG-3", "title": "Child"}]},
                labels={"nodes": [{"id": "l", "name": "Bug"}]},
                projectMilestone={"id": "m", "name": "Beta", "targetDate": None},
                comments={"nodes": [{"id": "k", "body": "hi", "user": {"id": "u", "name": "Ada"}}]},
            )
        )
        assert result["parentIssue"]["identifier"] == "ENG-1"
        assert result["subIssues"] == [{"id": "c", "identifier": "ENG-3", "title": "Child"}]
        assert result["labels"] == [{"id": "l", "name": "Bug"}]
        assert result["projectMilestone"] == {"id": "m", "name": "Beta"}
        assert result["comments"][0]["user"] == {"id": "u", "name": "Ada"}

    def test_description_embeds(self):
        description = "See ![shot](https://uploads.linear.app/abc/shot.png) and [x](https://example.com/x)"
        result = transform_issue(make_issue(description=description))
        assert [e["url"] for e in result["embeds"]] == ["https://uploads.linear.app/abc/shot.png"]


class TestEmbeds:
    def test_expiry_one_hour_after_extraction(self):
        now = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)
        embeds = extract_embeds("[file.pdf](https://uploads.linear.app/a/b/file.pdf)", now=now)
        assert embeds == [
            {
                "label": "file.pdf",
                "url": "https://uploads.linear.app/a/b/file.pdf",
                "expiresAt": "2025-01-01T13:00:00.000Z",
            }
        ]

    def test_no_markdown(self):
        assert extract_embeds(None) == []
        assert extract_embeds("plain text") == []


class TestDocumentSlugs:
    def test_slugs_from_document_urls(self):
        urls = [
            "https://linear.app/acme/document/release-plan-0f3a2b1c9d8e",
            "https://linear.app/acme/issue/ENG-1",
            "https://example.com/document/foo-123",
            "https://linear.app/acme/document/release-plan-0f3a2b1c9d8e",
        ]
        assert extract_document_slugs(urls) == ["0f3a2b1c9d8e"]

    def test_malformed_urls_skipped(self):
        assert extract_document_slugs(["http://[::1", None, "not a url"]) == []


class TestOtherEntities:
    def test_label_scope(self):
        assert transform_label({"id": "1", "name": "Bug", "team": None})["scope"] == "workspace"
        team_label = transform_label(
            {"id": "2", "name": "Bug", "team": {"id": "t", "key": "ENG", "name": "Eng"}, "parent": {"id": "g", "name": "Type"}}
        )
        assert team_label["scope"] == "team"
        assert team_label["group"] == {"id": "g", "name": "Type"}

    def test_project_skipped_connections_stay_absent(self):
        project = transform_project(
            {"id": "p", "name": "Apollo", "teams": {"nodes": []}, "createdAt": "2025-01-02T03:04:05Z"}
        )
        assert "issues" not in project
        assert "projectMilestones" not in project
        assert project["createdAt"] == "2025-01-02T03:04:05.000Z"
