"""
Tests for the admin-only catalog and user management endpoints.
"""

from decimal import Decimal


NEW_PLAN = {"name": "Gold", "price": "500", "validity_days": 30, "per_click_reward": "20"}


class TestAdminLogin:
    def test_regular_user_cannot_use_admin_login(self, client, verified_user, test_password):
        response = client.post(
            "/api/auth/admin",
            json={"email": verified_user.email, "password": test_password},
        )
        assert response.status_code == 403

    def test_admin_login(self, client, admin_user, test_password):
        response = client.post(
            "/api/auth/admin",
            json={"email": admin_user.email, "password": test_password},
        )
        assert response.status_code == 200
        assert response.json()["user"]["role"] == "admin"
        assert response.headers["set-cookie"].startswith("accessToken=")


class TestPlanAdmin:
    def test_user_cannot_create(self, logged_in):
        assert logged_in.post("/api/plan", json=NEW_PLAN).status_code == 403

    def test_create_then_list(self, as_admin, plans):
        response = as_admin.post("/api/plan", json=NEW_PLAN)

        assert response.status_code == 201
        created = response.json()
        assert Decimal(created["price"]) == Decimal("500")
        assert plans.get_by_id(created["id"]).name == "Gold"
        listed = as_admin.get("/api/plan").json()["plans"]
        assert created["id"] in {p["id"] for p in listed}

    def test_invalid_plan_rejected(self, as_admin):
        response = as_admin.post("/api/plan", json={**NEW_PLAN, "price": "0"})
        assert response.status_code == 422

    def test_get(self, as_admin, basic_plan):
        response = as_admin.get(f"/api/plan/{basic_plan.id}")
        assert response.status_code == 200
        assert response.json()["name"] == "Basic"

    def test_update_keeps_other_fields(self, as_admin, plans, basic_plan):
        response = as_admin.put(f"/api/plan/{basic_plan.id}", json={"price": "75"})

        assert response.status_code == 200
        updated = plans.get_by_id(basic_plan.id)
        assert updated.price == Decimal("75")
        assert updated.per_click_reward == basic_plan.per_click_reward

    def test_update_missing(self, as_admin):
        response = as_admin.put("/api/plan/missing", json={"price": "75"})
        assert response.status_code == 404
        assert response.json()["error"] == "PLAN_NOT_FOUND"

    def test_delete(self, as_admin, plans, basic_plan):
        response = as_admin.delete(f"/api/plan/{basic_plan.id}")

        assert response.status_code == 200
        assert plans.get_by_id(basic_plan.id) is None
        assert as_admin.delete(f"/api/plan/{basic_plan.id}").status_code == 404

    def test_user_cannot_delete(self, logged_in, plans, basic_plan):
        assert logged_in.delete(f"/api/plan/{basic_plan.id}").status_code == 403
        assert plans.get_by_id(basic_plan.id) is not None


class TestWorkAdmin:
    def test_user_cannot_create(self, logged_in):
        assert logged_in.post("/api/work", json={"name": "Ad 3"}).status_code == 403

    def test_user_can_read_one(self, logged_in, work):
        response = logged_in.get(f"/api/work/{work.id}")
        assert response.status_code == 200
        assert response.json()["name"] == work.name

    def test_create_update_delete(self, as_admin, works):
        created = as_admin.post("/api/work", json={"name": "Ad 3", "link": "https://ads.example.com/3"})
        assert created.status_code == 201
        ad_id = created.json()["id"]

        renamed = as_admin.put(f"/api/work/{ad_id}", json={"name": "Ad three"})
        assert renamed.status_code == 200
        assert works.get_by_id(ad_id).name == "Ad three"
        assert works.get_by_id(ad_id).link == "https://ads.example.com/3"

        assert as_admin.delete(f"/api/work/{ad_id}").status_code == 200
        assert works.get_by_id(ad_id) is None

    def test_delete_missing(self, as_admin):
        response = as_admin.delete("/api/work/missing")
        assert response.status_code == 404


class TestUserAdmin:
    def test_list_requires_admin(self, logged_in):
        assert logged_in.get("/api/user/all").status_code == 403

    def test_list(self, as_admin, verified_user, admin_user):
        response = as_admin.get("/api/user/all")

        assert response.status_code == 200
        emails = {u["email"] for u in response.json()["users"]}
        assert emails == {verified_user.email, admin_user.email}
        assert all("password_hash" not in u for u in response.json()["users"])

    def test_user_reads_own_profile(self, logged_in, verified_user):
        response = logged_in.get(f"/api/user/{verified_user.id}")
        assert response.status_code == 200
        assert response.json()["user"]["email"] == verified_user.email

    def test_user_cannot_read_another(self, logged_in, admin_user):
        response = logged_in.get(f"/api/user/{admin_user.id}")
        assert response.status_code == 403
        assert response.json()["error"] == "INSUFFICIENT_PERMISSIONS"

    def test_admin_reads_any_profile(self, as_admin, verified_user):
        response = as_admin.get(f"/api/user/{verified_user.id}")
        assert response.status_code == 200
        assert Decimal(response.json()["user"]["balance"]) == Decimal("100")

    def test_unknown_user(self, as_admin):
        response = as_admin.get("/api/user/missing")
        assert response.status_code == 404
        assert response.json()["error"] == "USER_NOT_FOUND"

    def test_user_renames_self(self, logged_in, users, verified_user):
        response = logged_in.put(f"/api/user/{verified_user.id}", json={"name": "Renamed"})

        assert response.status_code == 200
        assert users.get_by_id(verified_user.id).name == "Renamed"
        assert users.get_by_id(verified_user.id).balance == Decimal("100")

    def test_user_cannot_rename_another(self, logged_in, users, admin_user):
        response = logged_in.put(f"/api/user/{admin_user.id}", json={"name": "Hijacked"})
        assert response.status_code == 403
        assert users.get_by_id(admin_user.id).name == admin_user.name

    def test_delete_requires_admin(self, logged_in, users, verified_user):
        assert logged_in.delete(f"/api/user/{verified_user.id}").status_code == 403
        assert users.get_by_id(verified_user.id) is not None

    def test_admin_deletes_user(self, as_admin, users, verified_user):
        response = as_admin.delete(f"/api/user/{verified_user.id}")

        assert response.status_code == 200
        assert users.get_by_id(verified_user.id) is None
        assert as_admin.delete(f"/api/user/{verified_user.id}").status_code == 404
