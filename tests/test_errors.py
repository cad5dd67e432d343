"""Tests for error messages surfaced to users."""

from linearis.errors import (
    AmbiguousMatchError,
    LinearisError,
    NotFoundError,
    RemoteFailureError,
    TransportError,
)


class TestMessages:
    def test_not_found_names_entity_and_value(self):
        error = NotFoundError("Team", "ENG")
        assert error.message == 'Team "ENG" not found'
        assert error.to_dict() == {"error": 'Team "ENG" not found'}

    def test_not_found_with_hint(self):
        error = NotFoundError("Milestone", "Beta", "consider specifying --project")
        assert str(error) == 'Milestone "Beta" not found (consider specifying --project)'

    def test_ambiguous_lists_candidates(self):
        error = AmbiguousMatchError("Label", "Bug", ['"Bug" (team ENG)', '"Bug" (team OPS)'], "use the label ID")
        assert error.message == (
            'Multiple labels found matching "Bug". '
            'Candidates: "Bug" (team ENG), "Bug" (team OPS). Please use the label ID'
        )
        assert error.candidates == ['"Bug" (team ENG)', '"Bug" (team OPS)']

    def test_remote_failure(self):
        assert RemoteFailureError("delete issue", "ENG-1").message == "Failed to delete issue: ENG-1"
        assert RemoteFailureError("archive project").message == "Failed to archive project"

    def test_transport_error_keeps_status(self):
        error = TransportError('update issue "ENG-1"', "invalid token", 401)
        assert error.status_code == 401
        assert error.message == 'Failed to update issue "ENG-1": invalid token'
        assert isinstance(error, LinearisError)
