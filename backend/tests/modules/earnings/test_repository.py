"""Tests for the earnings repositories."""

import pytest
from unittest.mock import MagicMock
from datetime import datetime, timedelta, timezone

from postgrest.exceptions import APIError

from modules.earnings.models import NewClickGrant, NewWork, WorkUpdate
from modules.earnings.repository import ClickAdRepository, WorkRepository


def create_mock_grant_data(grant_id: str = "grant-1", **overrides) -> dict:
    now = datetime.now(timezone.utc)
    row = {
        "id": grant_id,
        "user_email": "user@example.com",
        "ad_id": "ad-1",
        "ad_name": "Watch ad 1",
        "token": "header.payload.signature",
        "expires_at": (now + timedelta(days=1)).isoformat(),
        "created_at": now.isoformat(),
    }
    row.update(overrides)
    return row


def new_grant() -> NewClickGrant:
    return NewClickGrant(
        user_email="user@example.com",
        ad_id="ad-1",
        ad_name="Watch ad 1",
        token="header.payload.signature",
        expires_at=datetime(2024, 1, 2, tzinfo=timezone.utc),
    )


@pytest.fixture
def mock_db():
    return MagicMock()


@pytest.fixture
def repository(mock_db):
    return ClickAdRepository(mock_db)


class TestClickAdRepository:
    def test_get(self, repository, mock_db):
        chain = mock_db.table.return_value.select.return_value.eq.return_value.eq.return_value.limit.return_value
        chain.execute.return_value = MagicMock(data=[create_mock_grant_data()])

        grant = repository.get("user@example.com", "ad-1")

        assert grant.ad_id == "ad-1"
        assert grant.token == "header.payload.signature"
        mock_db.table.assert_called_with("click_ads")

    def test_token_is_not_serialised(self, repository, mock_db):
        chain = mock_db.table.return_value.select.return_value.eq.return_value.eq.return_value.limit.return_value
        chain.execute.return_value = MagicMock(data=[create_mock_grant_data()])

        grant = repository.get("user@example.com", "ad-1")

        assert "token" not in grant.model_dump()

    def test_try_insert(self, repository, mock_db):
        mock_db.table.return_value.insert.return_value.execute.return_value = MagicMock(
            data=[create_mock_grant_data()]
        )

        grant = repository.try_insert(new_grant())

        inserted = mock_db.table.return_value.insert.call_args[0][0]
        assert inserted["expires_at"] == "2024-01-02T00:00:00+00:00"
        assert grant.id == "grant-1"

    def test_try_insert_conflict_returns_none(self, repository, mock_db):
        """A unique violation on (user_email, ad_id) means another grant holds the pair."""
        mock_db.table.return_value.insert.return_value.execute.side_effect = APIError(
            {"code": "23505", "message": "duplicate key value"}
        )
        assert repository.try_insert(new_grant()) is None

    def test_try_insert_other_errors_propagate(self, repository, mock_db):
        mock_db.table.return_value.insert.return_value.execute.side_effect = APIError(
            {"code": "42501", "message": "permission denied"}
        )
        with pytest.raises(APIError):
            repository.try_insert(new_grant())

    def test_delete_if_token_matches_on_token(self, repository, mock_db):
        delete = mock_db.table.return_value.delete.return_value
        delete.eq.return_value.eq.return_value.eq.return_value.execute.return_value = MagicMock(
            data=[create_mock_grant_data()]
        )

        assert repository.delete_if_token("user@example.com", "ad-1", "stale") is True
        delete.eq.return_value.eq.return_value.eq.assert_called_with("token", "stale")

    def test_delete_if_token_nothing_deleted(self, repository, mock_db):
        delete = mock_db.table.return_value.delete.return_value
        delete.eq.return_value.eq.return_value.eq.return_value.execute.return_value = MagicMock(data=[])

        assert repository.delete_if_token("user@example.com", "ad-1", "stale") is False

    def test_delete_expired(self, repository, mock_db):
        before = datetime(2024, 1, 2, tzinfo=timezone.utc)
        delete = mock_db.table.return_value.delete.return_value
        delete.lt.return_value.execute.return_value = MagicMock(
            data=[create_mock_grant_data("a"), create_mock_grant_data("b")]
        )

        assert repository.delete_expired(before) == 2
        delete.lt.assert_called_with("expires_at", before.isoformat())


class TestWorkRepository:
    def test_list_all(self, mock_db):
        mock_db.table.return_value.select.return_value.order.return_value.execute.return_value = MagicMock(
            data=[{"id": 1, "name": "Ad", "link": "https://ads.example.com"}]
        )

        works = WorkRepository(mock_db).list_all()

        assert works[0].id == "1"
        mock_db.table.assert_called_with("works")

    def test_get_by_id_missing(self, mock_db):
        chain = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        chain.execute.return_value = MagicMock(data=[])
        assert WorkRepository(mock_db).get_by_id("ad-1") is None

    def test_create(self, mock_db):
        mock_db.table.return_value.insert.return_value.execute.return_value = MagicMock(
            data=[{"id": "ad-9", "name": "New ad", "link": None}]
        )

        work = WorkRepository(mock_db).create(NewWork(name="New ad"))

        assert work.id == "ad-9"
        mock_db.table.return_value.insert.assert_called_with({"name": "New ad", "link": None})

    def test_update_missing(self, mock_db):
        mock_db.table.return_value.update.return_value.eq.return_value.execute.return_value = MagicMock(data=[])
        assert WorkRepository(mock_db).update("ad-1", WorkUpdate(name="Renamed")) is None
        mock_db.table.return_value.update.assert_called_with({"name": "Renamed"})

    def test_delete(self, mock_db):
        mock_db.table.return_value.delete.return_value.eq.return_value.execute.return_value = MagicMock(
            data=[{"id": "ad-1", "name": "Ad", "link": None}]
        )
        assert WorkRepository(mock_db).delete("ad-1") is True
