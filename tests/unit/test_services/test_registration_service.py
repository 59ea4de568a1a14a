"""Unit tests for the candidate registration service."""

from unittest.mock import AsyncMock

import pytest

from alumni_ballot.core.config import Settings
from alumni_ballot.lib.backend.errors import RejectedError
from alumni_ballot.schemas.common import NoticeLevel, View
from alumni_ballot.services.registration_service import (
    REGISTRATION_CLOSED,
    RegistrationForm,
    register_candidate,
    registration_view,
)


@pytest.fixture
def open_settings(settings: Settings) -> Settings:
    return settings.model_copy(update={"registration_open": True})


class TestRegistrationView:
    def test_closed_points_to_voting(self, settings: Settings) -> None:
        assert registration_view(settings) is View.VOTE

    def test_open_shows_form(self, open_settings: Settings) -> None:
        assert registration_view(open_settings) is View.REGISTER


class TestRegisterCandidate:
    @pytest.mark.asyncio
    async def test_closed_sends_nothing(self, settings: Settings) -> None:
        client = AsyncMock()
        form = RegistrationForm(name="Ada", email="ada@example.com", position="Chairman")

        outcome = await register_candidate(client, settings, form)

        assert not outcome.ok
        assert outcome.redirect is View.VOTE
        assert outcome.notice is not None
        assert outcome.notice.message == REGISTRATION_CLOSED
        client.register_candidate.assert_not_called()

    @pytest.mark.asyncio
    async def test_success_resets_form(self, open_settings: Settings) -> None:
        client = AsyncMock()
        form = RegistrationForm(name="Ada Obi", email="ada@example.com", position="Chairman")

        outcome = await register_candidate(client, open_settings, form)

        assert outcome.ok
        assert outcome.notice is not None
        assert outcome.notice.level is NoticeLevel.SUCCESS
        assert form == RegistrationForm()
        request = client.register_candidate.call_args.args[0]
        assert request.position == "Chairman"

    @pytest.mark.asyncio
    async def test_unknown_position_rejected_locally(self, open_settings: Settings) -> None:
        client = AsyncMock()
        form = RegistrationForm(name="Ada", email="ada@example.com", position="Mascot")

        outcome = await register_candidate(client, open_settings, form)

        assert not outcome.ok
        assert outcome.notice is not None
        assert "position" in outcome.notice.message
        client.register_candidate.assert_not_called()
        assert form.position == "Mascot"

    @pytest.mark.asyncio
    async def test_backend_error_keeps_form(self, open_settings: Settings) -> None:
        client = AsyncMock()
        client.register_candidate.side_effect = RejectedError("Email already registered", 409)
        form = RegistrationForm(name="Ada", email="ada@example.com", position="Chairman")

        outcome = await register_candidate(client, open_settings, form)

        assert not outcome.ok
        assert outcome.notice is not None
        assert outcome.notice.message == "Error: Email already registered"
        assert form.name == "Ada"
