"""Unit tests for failure-to-outcome translation."""

import pytest
from pydantic import ValidationError

from alumni_ballot.core.storage import MemoryTokenStorage
from alumni_ballot.lib.backend.errors import AuthenticationError, MalformedResponseError
from alumni_ballot.schemas.auth import LoginRequest
from alumni_ballot.schemas.common import View
from alumni_ballot.services.auth_service import CommitteeSession
from alumni_ballot.services.feedback import outcome_for_error, validation_messages


class TestOutcomeForError:
    def test_prefix(self) -> None:
        outcome = outcome_for_error(MalformedResponseError("Unexpected format"), prefix="Error: ")
        assert outcome.notice is not None
        assert outcome.notice.message == "Error: Unexpected format"
        assert outcome.redirect is None

    def test_authentication_without_session_does_not_redirect(self) -> None:
        outcome = outcome_for_error(AuthenticationError("Token expired", 401), prefix="Error: ")
        assert not outcome.ok
        assert outcome.notice is not None
        assert outcome.notice.message == "Error: Token expired"
        assert outcome.redirect is None

    def test_authentication_with_session_redirects_to_login(self) -> None:
        session = CommitteeSession(MemoryTokenStorage("opaque"))
        outcome = outcome_for_error(AuthenticationError("Token expired", 401), session)
        assert outcome.redirect is View.COMMITTEE_LOGIN

    def test_authentication_logs_out(self) -> None:
        storage = MemoryTokenStorage("opaque")
        session = CommitteeSession(storage)
        outcome_for_error(AuthenticationError("Token expired", 401), session)
        assert storage.get() is None


class TestValidationMessages:
    def test_field_prefixed_lines(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            LoginRequest(email="nope", surname="")
        lines = validation_messages(exc_info.value)
        assert len(lines) == 2
        assert lines[0].startswith("email: ")
        assert lines[1].startswith("surname: ")
