"""
Plan repository for database access.
"""

from typing import Optional, Any

from postgrest.exceptions import APIError

from shared.database import INVALID_TEXT_REPRESENTATION
from shared.repository import BaseRepository
from .models import NewPlan, Plan, PlanUpdate

TABLE = "plans"


class PlanRepository(BaseRepository[Plan]):
    """Repository for the `plans` table."""

    def get_by_id(self, plan_id: str) -> Optional[Plan]:
        row = self._select_one(TABLE, "id", plan_id)
        return self._map_to_plan(row) if row else None

    def list_all(self) -> list[Plan]:
        result = self._db.table(TABLE).select("*").order("price").execute()
        return [self._map_to_plan(row) for row in result.data]

    def create(self, plan: NewPlan) -> Plan:
        data = {
            "name": plan.name,
            "price": str(plan.price),
            "validity_days": plan.validity_days,
            "per_click_reward": str(plan.per_click_reward),
            "description": plan.description,
        }
        result = self._db.table(TABLE).insert(data).execute()
        return self._map_to_plan(result.data[0])

    def update(self, plan_id: str, changes: PlanUpdate) -> Optional[Plan]:
        data = changes.model_dump(mode="json", exclude_unset=True)
        if not data:
            return self.get_by_id(plan_id)

        try:
            result = self._db.table(TABLE).update(data).eq("id", plan_id).execute()
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                return None
            raise
        if not result.data:
            return None
        return self._map_to_plan(result.data[0])

    def delete(self, plan_id: str) -> bool:
        try:
            result = self._db.table(TABLE).delete().eq("id", plan_id).execute()
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                return False
            raise
        return bool(result.data)

    def _map_to_plan(self, data: dict[str, Any]) -> Plan:
        """Map database row to Plan model."""
        reward = data.get("per_click_reward")
        return Plan(
            id=str(data["id"]),
            name=data["name"],
            price=self._decimal(data["price"]),
            validity_days=int(data.get("validity_days") or 1),
            per_click_reward=self._decimal(reward) if reward is not None else None,
            description=data.get("description"),
        )
