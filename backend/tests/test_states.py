"""Tests for the client-side remote check state model."""

import pytest

from jsvalidation.remote.states import RemoteCheckTracker, RemoteState


@pytest.fixture
def tracker():
    return RemoteCheckTracker()


class TestTransitions:
    def test_starts_pending(self, tracker):
        assert tracker.state("username", "unique") is RemoteState.PENDING

    def test_begin_moves_to_validating(self, tracker):
        tracker.begin("username", "unique", "ada")

        assert tracker.state("username", "unique") is RemoteState.VALIDATING

    @pytest.mark.parametrize("valid, expected", [(True, RemoteState.VALID), (False, RemoteState.INVALID)])
    def test_response_resolves(self, tracker, valid, expected):
        request_id = tracker.begin("username", "unique", "ada")

        assert tracker.resolve(request_id, valid) is True
        assert tracker.state("username", "unique") is expected

    def test_failure_moves_to_error(self, tracker):
        request_id = tracker.begin("username", "unique", "ada")

        assert tracker.fail(request_id) is True
        assert tracker.state("username", "unique") is RemoteState.ERROR

    def test_edit_after_error_returns_to_pending(self, tracker):
        request_id = tracker.begin("username", "unique", "ada")
        tracker.fail(request_id)

        tracker.edit("username", "ada2")

        assert tracker.state("username", "unique") is RemoteState.PENDING

    def test_error_is_not_retried_automatically(self, tracker):
        request_id = tracker.begin("username", "unique", "ada")
        tracker.fail(request_id)

        assert tracker.resolve(request_id, True) is False
        assert tracker.state("username", "unique") is RemoteState.ERROR

    def test_begin_after_error_needs_an_edit(self, tracker):
        request_id = tracker.begin("username", "unique", "ada")
        tracker.fail(request_id)

        assert tracker.begin("username", "unique", "ada") is None
        assert tracker.state("username", "unique") is RemoteState.ERROR

        tracker.edit("username", "ada")

        assert tracker.begin("username", "unique", "ada") is not None
        assert tracker.state("username", "unique") is RemoteState.VALIDATING

    @pytest.mark.parametrize("valid", [True, False])
    def test_settled_check_is_not_restarted(self, tracker, valid):
        request_id = tracker.begin("username", "unique", "ada")
        tracker.resolve(request_id, valid)

        assert tracker.begin("username", "unique", "ada") is None

    def test_one_request_in_flight_per_pair(self, tracker):
        first = tracker.begin("username", "unique", "ada")

        assert tracker.begin("username", "unique", "ada") is None
        assert tracker.resolve(first, True) is True


class TestOrdering:
    def test_stale_response_is_discarded(self, tracker):
        first = tracker.begin("username", "unique", "ad")
        tracker.edit("username", "ada")
        second = tracker.begin("username", "unique", "ada")

        assert tracker.resolve(first, False) is False
        assert tracker.state("username", "unique") is RemoteState.VALIDATING

        assert tracker.resolve(second, True) is True
        assert tracker.state("username", "unique") is RemoteState.VALID

    def test_edit_invalidates_in_flight_request(self, tracker):
        request_id = tracker.begin("username", "unique", "ada")
        tracker.edit("username", "bob")

        assert tracker.resolve(request_id, True) is False
        assert tracker.state("username", "unique") is RemoteState.PENDING

    def test_response_applies_once(self, tracker):
        request_id = tracker.begin("username", "unique", "ada")
        tracker.resolve(request_id, True)

        assert tracker.resolve(request_id, False) is False
        assert tracker.state("username", "unique") is RemoteState.VALID

    def test_unknown_request_is_ignored(self, tracker):
        assert tracker.resolve(999, True) is False
        assert tracker.fail(999) is False


class TestIsolation:
    def test_validating_field_does_not_affect_others(self, tracker):
        tracker.begin("username", "unique", "ada")
        code_request = tracker.begin("code", "exists", "X1")

        tracker.resolve(code_request, True)
        tracker.edit("email", "a@b.c")

        assert tracker.state("username", "unique") is RemoteState.VALIDATING
        assert tracker.state("code", "exists") is RemoteState.VALID

    def test_rules_on_same_field_are_tracked_separately(self, tracker):
        unique = tracker.begin("username", "unique", "ada")
        tracker.begin("username", "not_reserved", "ada")

        tracker.resolve(unique, True)

        assert tracker.state("username", "unique") is RemoteState.VALID
        assert tracker.state("username", "not_reserved") is RemoteState.VALIDATING
