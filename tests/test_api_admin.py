"""HTTP tests for /api/v1/admin/users: admin-only listing, role changes and deletion."""

import unittest

from app.models import ActivityLog, Role, Task, User

from support import ApiTestCase, session_token


class AdminTestCase(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin = self.make_user(name="Root Admin", email="root@example.com", role=Role.ADMIN)
        self.member = self.make_user(name="Mia Member", email="mia@example.com")
        self.login_as(self.admin)


class TestListAndGet(AdminTestCase):
    def test_list_users_without_password_hashes(self) -> None:
        resp = self.client.get("/api/v1/admin/users")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["pagination"]["total"], 2)
        self.assertEqual({u["email"] for u in body["users"]}, {"root@example.com", "mia@example.com"})
        for user in body["users"]:
            self.assertNotIn("password_hash", user)

    def test_pagination(self) -> None:
        body = self.client.get("/api/v1/admin/users", params={"page": 2, "limit": 1}).json()
        self.assertEqual(len(body["users"]), 1)
        self.assertEqual(body["pagination"]["total_pages"], 2)

    def test_get_user(self) -> None:
        resp = self.client.get(f"/api/v1/admin/users/{self.member.id}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["user"]["name"], "Mia Member")
        self.assertEqual(self.client.get("/api/v1/admin/users/999").status_code, 404)

    def test_member_is_forbidden(self) -> None:
        self.login_as(self.member)
        self.assertEqual(self.client.get("/api/v1/admin/users").status_code, 403)
        self.assertEqual(self.client.delete(f"/api/v1/admin/users/{self.admin.id}").status_code, 403)

    def test_anonymous_is_forbidden(self) -> None:
        self.client.cookies.clear()
        self.assertEqual(self.client.get("/api/v1/admin/users").status_code, 403)


class TestRoleChange(AdminTestCase):
    def test_promote_member(self) -> None:
        resp = self.client.patch(f"/api/v1/admin/users/{self.member.id}", json={"role": "admin"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["user"]["role"], "admin")
        self.assertEqual(self.reload(User, self.member.id).role, "admin")
        with self.session_factory() as fresh:
            entry = fresh.query(ActivityLog).filter(ActivityLog.user_id == self.admin.id).one()
        self.assertEqual(entry.entity_type, "user")
        self.assertEqual(entry.entity_id, self.member.id)

    def test_invalid_role_is_400(self) -> None:
        resp = self.client.patch(f"/api/v1/admin/users/{self.member.id}", json={"role": "owner"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.reload(User, self.member.id).role, "user")

    def test_missing_user_is_404(self) -> None:
        resp = self.client.patch("/api/v1/admin/users/999", json={"role": "admin"})
        self.assertEqual(resp.status_code, 404)

    def test_demoted_admin_loses_access_despite_token_role(self) -> None:
        other_admin = self.make_user(name="Ops", email="ops@example.com", role=Role.ADMIN)
        self.client.patch(f"/api/v1/admin/users/{other_admin.id}", json={"role": "user"})

        self.client.cookies.set("session", session_token(other_admin.id, "admin"))
        self.assertEqual(self.client.get("/api/v1/admin/users").status_code, 403)


class TestDelete(AdminTestCase):
    def test_cannot_delete_self(self) -> None:
        resp = self.client.delete(f"/api/v1/admin/users/{self.admin.id}")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Cannot delete your own account")
        self.assertIsNotNone(self.reload(User, self.admin.id))

    def test_delete_member_removes_tasks_and_session(self) -> None:
        self.db.add(Task(user_id=self.member.id, title="Member task"))
        self.db.commit()
        member_id = self.member.id

        resp = self.client.delete(f"/api/v1/admin/users/{member_id}")
        self.assertEqual(resp.status_code, 200)
        self.assertIsNone(self.reload(User, member_id))
        with self.session_factory() as fresh:
            self.assertEqual(fresh.query(Task).filter(Task.user_id == member_id).count(), 0)

        self.client.cookies.set("session", session_token(member_id))
        self.assertEqual(self.client.get("/api/v1/tasks").status_code, 401)

    def test_missing_user_is_404(self) -> None:
        self.assertEqual(self.client.delete("/api/v1/admin/users/999").status_code, 404)


if __name__ == "__main__":
    unittest.main()
