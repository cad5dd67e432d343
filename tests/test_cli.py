"""Tests for the click command layer."""

import json
import logging
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from conftest import FakeClient, ISSUE_ID, TEAM_ID, make_issue
from linearis import __version__
from linearis.cli import cli, main


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, client, *args):
    with patch("linearis.output.LinearClient", lambda config: client):
        return runner.invoke(cli, ["--api-token", "lin_api_test", *args])


class TestRootGroup:
    def test_bare_invocation_prints_help(self, runner):
        result = runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "issues" in result.stdout
        assert "project-milestones" in result.stdout

    def test_bare_group_prints_help(self, runner):
        result = runner.invoke(cli, ["issues"])
        assert result.exit_code == 0
        assert "create" in result.stdout
        assert "search" in result.stdout

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert __version__ in result.stdout

    def test_usage_lists_every_command(self, runner):
        result = runner.invoke(cli, ["usage"])
        assert result.exit_code == 0
        assert "linearis issues update" in result.stdout
        assert "linearis documents list" in result.stdout
        assert "linearis embeds download" in result.stdout


class TestCommands:
    def test_issues_list_prints_json(self, runner):
        client = FakeClient({"issues": {"nodes": [make_issue()]}})

        result = invoke(runner, client, "issues", "list", "-l", "5")

        assert result.exit_code == 0
        output = json.loads(result.stdout)
        assert output[0]["identifier"] == "ENG-123"
        assert client.last.variables == {"first": 5, "orderBy": "updatedAt"}

    def test_issues_create_passes_options(self, runner):
        client = FakeClient({"issueCreate": {"success": True, "issue": make_issue()}})

        result = invoke(
            runner, client, "issues", "create", "Fix login", "--team", TEAM_ID, "--priority", "2"
        )

        assert result.exit_code == 0
        assert client.last.variables["input"] == {"title": "Fix login", "teamId": TEAM_ID, "priority": 2}

    def test_issues_update_clear_flags(self, runner):
        client = FakeClient({"issueUpdate": {"success": True, "issue": make_issue()}})

        result = invoke(
            runner, client, "issues", "update", ISSUE_ID, "--clear-cycle", "--clear-parent-ticket"
        )

        assert result.exit_code == 0
        assert client.last.variables["input"] == {"cycleId": None, "parentId": None}

    def test_exclusive_flags_rejected_without_request(self, runner):
        client = FakeClient()

        result = invoke(runner, client, "issues", "update", ISSUE_ID, "--labels", "Bug", "--clear-labels")

        assert result.exit_code == 1
        assert json.loads(result.stdout) == {
            "error": "Cannot use --labels and --clear-labels together"
        }
        assert client.calls == []

    def test_invalid_limit(self, runner):
        result = invoke(runner, FakeClient(), "issues", "list", "-l", "zero")
        assert result.exit_code == 1
        assert "--limit" in json.loads(result.stdout)["error"]

    def test_not_found_is_json_error(self, runner):
        client = FakeClient({"issues": {"nodes": []}})

        result = invoke(runner, client, "issues", "read", "ENG-404")

        assert result.exit_code == 1
        assert json.loads(result.stdout) == {"error": 'Issue "ENG-404" not found'}

    def test_download_into_unwritable_path_is_json_error(self, runner, tmp_path):
        url = "https://uploads.linear.app/abc/def/shot.png"
        (tmp_path / "taken").write_text("a regular file")
        client = FakeClient()
        client.files[url] = b"png-bytes"

        result = invoke(runner, client, "embeds", "download", url, "-o", "taken/shot.png")

        assert result.exit_code == 1
        assert json.loads(result.stdout)["error"].startswith('Failed to write "taken/shot.png"')

    def test_missing_token(self, runner, monkeypatch, tmp_path):
        monkeypatch.setattr("linearis.config.TOKEN_FILE", tmp_path / "missing")

        result = runner.invoke(cli, ["teams", "list"])

        assert result.exit_code == 1
        assert "No API token found" in json.loads(result.stdout)["error"]

    def test_projects_read_skip_flags(self, runner):
        client = FakeClient({"project": {"id": "p", "name": "Apollo"}})

        result = invoke(
            runner,
            client,
            "projects",
            "read",
            "aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaaa",
            "--issues-first",
            "0",
        )

        assert result.exit_code == 0
        assert client.last.variables["skipIssues"] is True
        assert client.last.variables["skipMilestones"] is False


class TestMain:
    def test_click_usage_errors_become_json(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--api-token", "t", "issues", "create", "Title"])

        assert exc_info.value.code == 1
        error = json.loads(capsys.readouterr().out)["error"]
        assert "--team" in error
