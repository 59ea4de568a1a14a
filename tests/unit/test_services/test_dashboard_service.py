"""Unit tests for the committee dashboard service."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from alumni_ballot.core.storage import MemoryTokenStorage
from alumni_ballot.lib.backend.errors import AuthenticationError, AuthorizationError, NetworkError
from alumni_ballot.schemas.candidate import Candidate, CandidateGroup
from alumni_ballot.schemas.common import View
from alumni_ballot.services.auth_service import CommitteeSession
from alumni_ballot.services.dashboard_service import CommitteeDashboard

POSITIONS = ["Chairman", "Secretary 1"]


def _candidate(cid: str, position: str, votes: int = 0) -> Candidate:
    return Candidate(id=cid, name=f"Name {cid}", email=f"{cid}@example.com", position=position, vote_count=votes)


GROUPS: CandidateGroup = {
    "Secretary 1": [_candidate("s1", "Secretary 1", 0), _candidate("s2", "Secretary 1", 0)],
    "Chairman": [_candidate("c1", "Chairman", 3), _candidate("c2", "Chairman", 8)],
}


@pytest.fixture
def storage() -> MemoryTokenStorage:
    return MemoryTokenStorage("opaque-token")


@pytest.fixture
def session(storage: MemoryTokenStorage) -> CommitteeSession:
    return CommitteeSession(storage)


class TestOpen:
    @pytest.mark.asyncio
    async def test_requires_session(self) -> None:
        client = AsyncMock()
        dashboard = CommitteeDashboard(client, CommitteeSession(MemoryTokenStorage()), POSITIONS)

        outcome = await dashboard.open()

        assert not outcome.ok
        assert outcome.redirect is View.COMMITTEE_LOGIN
        client.fetch_committee_candidates.assert_not_called()

    @pytest.mark.asyncio
    async def test_loads_tallies(self, session: CommitteeSession) -> None:
        client = AsyncMock()
        client.fetch_committee_candidates.return_value = GROUPS
        dashboard = CommitteeDashboard(client, session, POSITIONS)

        outcome = await dashboard.open()

        assert outcome.ok
        assert list(dashboard.groups) == ["Chairman", "Secretary 1"]
        assert dashboard.summary.total_candidates == 4
        assert dashboard.summary.total_votes == 11
        assert dashboard.summary.total_positions == 2
        chairman, secretary = dashboard.results
        assert chairman.leader is not None
        assert chairman.leader.id == "c2"
        assert secretary.leader is None
        assert dashboard.last_updated is not None
        assert not dashboard.loading


class TestFailures:
    @pytest.mark.asyncio
    async def test_401_forces_logout(self, session: CommitteeSession, storage: MemoryTokenStorage) -> None:
        client = AsyncMock()
        client.fetch_committee_candidates.side_effect = AuthenticationError("Token expired", 401)
        dashboard = CommitteeDashboard(client, session, POSITIONS)

        outcome = await dashboard.open()

        assert outcome.redirect is View.COMMITTEE_LOGIN
        assert storage.get() is None
        assert not session.is_authenticated

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [NetworkError("Cannot connect"), AuthorizationError("Forbidden", 403)])
    async def test_other_failures_keep_session_and_data(
        self, session: CommitteeSession, storage: MemoryTokenStorage, error: Exception
    ) -> None:
        client = AsyncMock()
        client.fetch_committee_candidates.return_value = GROUPS
        dashboard = CommitteeDashboard(client, session, POSITIONS)
        await dashboard.open()

        client.fetch_committee_candidates.side_effect = error
        outcome = await dashboard.refresh()

        assert not outcome.ok
        assert outcome.redirect is None
        assert session.is_authenticated
        assert storage.get() == "opaque-token"
        assert dashboard.summary.total_votes == 11


class TestRefresh:
    @pytest.mark.asyncio
    async def test_refresh_does_not_set_loading(self, session: CommitteeSession) -> None:
        seen: list[tuple[bool, bool]] = []
        dashboard: CommitteeDashboard

        async def _fetch() -> CandidateGroup:
            seen.append((dashboard.loading, dashboard.refreshing))
            return GROUPS

        client = AsyncMock()
        client.fetch_committee_candidates.side_effect = _fetch
        dashboard = CommitteeDashboard(client, session, POSITIONS)

        await dashboard.refresh()
        await dashboard.fetch(show_loading=True)

        assert seen == [(False, True), (True, False)]
        assert not dashboard.loading
        assert not dashboard.refreshing

    @pytest.mark.asyncio
    async def test_stale_response_discarded(self, session: CommitteeSession) -> None:
        first_may_finish = asyncio.Event()
        old = {"Chairman": [_candidate("c1", "Chairman", 1)]}
        new = {"Chairman": [_candidate("c1", "Chairman", 9)]}
        calls = 0

        async def _fetch() -> CandidateGroup:
            nonlocal calls
            calls += 1
            if calls == 1:
                await first_may_finish.wait()
                return old
            return new

        client = AsyncMock()
        client.fetch_committee_candidates.side_effect = _fetch
        dashboard = CommitteeDashboard(client, session, POSITIONS)

        slow = asyncio.create_task(dashboard.refresh())
        await asyncio.sleep(0)
        await dashboard.refresh()
        first_may_finish.set()
        await slow

        assert dashboard.summary.total_votes == 9
