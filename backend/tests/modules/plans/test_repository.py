"""Tests for the plans repository."""

import pytest
from unittest.mock import MagicMock
from decimal import Decimal

from postgrest.exceptions import APIError

from modules.plans.models import NewPlan, PlanUpdate
from modules.plans.repository import PlanRepository


def create_mock_plan_data(plan_id: str = "plan-1", **overrides) -> dict:
    row = {
        "id": plan_id,
        "name": "Basic",
        "price": "60.00",
        "validity_days": 30,
        "per_click_reward": "5.0000",
        "description": None,
    }
    row.update(overrides)
    return row


@pytest.fixture
def mock_db():
    return MagicMock()


@pytest.fixture
def repository(mock_db):
    return PlanRepository(mock_db)


def test_get_by_id(repository, mock_db):
    mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value.execute.return_value = MagicMock(
        data=[create_mock_plan_data()]
    )

    plan = repository.get_by_id("plan-1")

    assert plan.price == Decimal("60.00")
    assert plan.per_click_reward == Decimal("5.0000")
    assert plan.validity_days == 30


def test_missing_reward_stays_none(repository, mock_db):
    mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value.execute.return_value = MagicMock(
        data=[create_mock_plan_data(per_click_reward=None)]
    )
    assert repository.get_by_id("plan-1").per_click_reward is None


def test_list_all_orders_by_price(repository, mock_db):
    mock_db.table.return_value.select.return_value.order.return_value.execute.return_value = MagicMock(
        data=[create_mock_plan_data("a"), create_mock_plan_data("b", price="90")]
    )

    plans = repository.list_all()

    assert [p.id for p in plans] == ["a", "b"]
    mock_db.table.return_value.select.return_value.order.assert_called_with("price")


def test_create_stores_decimals_as_strings(repository, mock_db):
    mock_db.table.return_value.insert.return_value.execute.return_value = MagicMock(
        data=[create_mock_plan_data("plan-new", name="Gold", price="250", per_click_reward="12.5")]
    )

    plan = repository.create(
        NewPlan(name="Gold", price=Decimal("250"), validity_days=30, per_click_reward=Decimal("12.5"))
    )

    assert plan.id == "plan-new"
    data = mock_db.table.return_value.insert.call_args[0][0]
    assert data["price"] == "250"
    assert data["per_click_reward"] == "12.5"
    assert data["validity_days"] == 30


def test_update_sends_only_set_fields(repository, mock_db):
    mock_db.table.return_value.update.return_value.eq.return_value.execute.return_value = MagicMock(
        data=[create_mock_plan_data(price="75")]
    )

    plan = repository.update("plan-1", PlanUpdate(price=Decimal("75")))

    assert plan.price == Decimal("75")
    mock_db.table.return_value.update.assert_called_with({"price": "75"})
    mock_db.table.return_value.update.return_value.eq.assert_called_with("id", "plan-1")


def test_update_missing_plan(repository, mock_db):
    mock_db.table.return_value.update.return_value.eq.return_value.execute.return_value = MagicMock(data=[])
    assert repository.update("plan-1", PlanUpdate(name="Renamed")) is None


def test_empty_update_reads_plan(repository, mock_db):
    mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value.execute.return_value = MagicMock(
        data=[create_mock_plan_data()]
    )

    plan = repository.update("plan-1", PlanUpdate())

    assert plan.id == "plan-1"
    mock_db.table.return_value.update.assert_not_called()


def test_delete(repository, mock_db):
    mock_db.table.return_value.delete.return_value.eq.return_value.execute.return_value = MagicMock(
        data=[create_mock_plan_data()]
    )
    assert repository.delete("plan-1") is True


def test_delete_malformed_id(repository, mock_db):
    mock_db.table.return_value.delete.return_value.eq.return_value.execute.side_effect = APIError(
        {"code": "22P02", "message": "invalid uuid"}
    )
    assert repository.delete("nope") is False
