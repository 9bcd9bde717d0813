"""HTTP tests for auth, session cookies, profile management and role checks."""

import unittest

from fastapi.testclient import TestClient

from mindfulme.api.auth import requires
from mindfulme.core.errors import ForbiddenError
from mindfulme.core.policy import Role
from mindfulme.main import create_app
from mindfulme.models import User
from api_support import PASSWORD, ApiTestCase, make_settings


class TestRegisterAndLogin(ApiTestCase):
    def test_register_returns_tokens_and_sets_cookies(self) -> None:
        resp = self.client.post(
            "/api/auth/register",
            json={"email": "a@x.com", "password": PASSWORD, "displayName": "Alice"},
        )
        self.assertEqual(resp.status_code, 201)
        data = resp.json()
        self.assertEqual(data["tokenType"], "bearer")
        self.assertTrue(data["accessToken"])
        self.assertTrue(data["refreshToken"])
        self.assertEqual(data["user"]["email"], "a@x.com")
        self.assertEqual(data["user"]["displayName"], "Alice")
        self.assertEqual(data["user"]["role"], "individual")
        self.assertNotIn("passwordHash", data["user"])
        self.assertNotIn("password_hash", data["user"])

        cookies = " ".join(resp.headers.get_list("set-cookie")).lower()
        self.assertIn("access_token=", cookies)
        self.assertIn("refresh_token=", cookies)
        self.assertIn("httponly", cookies)
        self.assertIn("samesite=lax", cookies)
        # Cookie values are signed, not the raw tokens.
        self.assertNotIn(data["refreshToken"].lower(), cookies)

    def test_duplicate_email_is_409(self) -> None:
        self.register("a@x.com")
        resp = self.client.post(
            "/api/auth/register",
            json={"email": "a@x.com", "password": PASSWORD, "displayName": "Alice Again"},
        )
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json(), {"message": "User already exists"})

    def test_invalid_registration_is_400(self) -> None:
        resp = self.client.post(
            "/api/auth/register",
            json={"email": "a@x.com", "password": "short", "displayName": "Alice"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("Password", resp.json()["message"])

    def test_privileged_roles_need_valid_org_code(self) -> None:
        body = {"email": "m@x.com", "password": PASSWORD, "displayName": "Manager", "role": "manager"}
        self.assertEqual(self.client.post("/api/auth/register", json=body).status_code, 400)
        body["organizationCode"] = "WRONG-CODE"
        self.assertEqual(self.client.post("/api/auth/register", json=body).status_code, 403)
        self.storage.create_organization("Acme", "ACME-2026")
        body["organizationCode"] = "ACME-2026"
        resp = self.client.post("/api/auth/register", json=body)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["user"]["role"], "manager")
        self.assertIsNotNone(resp.json()["user"]["organizationId"])

    def test_login_failure_is_uniform_401(self) -> None:
        self.register("a@x.com")
        for email, password in (("a@x.com", "wrong-password"), ("nobody@x.com", PASSWORD)):
            resp = self.client.post("/api/auth/login", json={"email": email, "password": password})
            self.assertEqual(resp.status_code, 401)
            self.assertEqual(resp.json(), {"message": "Invalid email or password"})
            self.assertEqual(resp.headers.get("www-authenticate"), "Bearer")

    def test_register_login_then_journal_round_trip(self) -> None:
        self.register("a@x.com")
        login = self.client.post("/api/auth/login", json={"email": "a@x.com", "password": PASSWORD})
        self.assertEqual(login.status_code, 200)
        headers = self.bearer(login.json())

        created = self.client.post(
            "/api/journals",
            json={"content": "today was hard", "moodScore": 3},
            headers=headers,
        )
        self.assertEqual(created.status_code, 201, created.text)

        listed = self.client.get("/api/journals", headers=headers)
        self.assertEqual(listed.status_code, 200)
        entries = listed.json()
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0]["content"], "today was hard")
        self.assertEqual(entries[0]["moodScore"], 3)
        self.assertEqual(entries[0]["id"], created.json()["id"])


class TestSessionLifecycle(ApiTestCase):
    def test_refresh_rotates_and_logout_revokes(self) -> None:
        self.register("a@x.com")
        login = self.client.post("/api/auth/login", json={"email": "a@x.com", "password": PASSWORD})
        old_refresh = login.json()["refreshToken"]

        refreshed = self.client.post("/api/auth/refresh", json={"refreshToken": old_refresh})
        self.assertEqual(refreshed.status_code, 200)
        new_refresh = refreshed.json()["refreshToken"]
        self.assertNotEqual(new_refresh, old_refresh)

        logout = self.client.post("/api/auth/logout", json={"refreshToken": new_refresh})
        self.assertEqual(logout.status_code, 200)
        self.assertEqual(logout.json(), {"message": "Logged out successfully"})

        self.client.cookies.clear()
        for token in (old_refresh, new_refresh):
            resp = self.client.post("/api/auth/refresh", json={"refreshToken": token})
            self.assertEqual(resp.status_code, 401)
            self.assertIn("message", resp.json())

    def test_logout_is_idempotent(self) -> None:
        auth = self.register("a@x.com")
        for _ in range(2):
            resp = self.client.post("/api/auth/logout", json={"refreshToken": auth["refreshToken"]})
            self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.client.post("/api/auth/logout").status_code, 200)

    def test_cookie_session(self) -> None:
        resp = self.client.post(
            "/api/auth/register",
            json={"email": "c@x.com", "password": PASSWORD, "displayName": "Cookie"},
        )
        self.assertEqual(resp.status_code, 201)

        me = self.client.get("/api/auth/me")
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["email"], "c@x.com")

        refreshed = self.client.post("/api/auth/refresh")
        self.assertEqual(refreshed.status_code, 200)
        # The refresh cookie presented at registration is now spent.
        replay = self.client.post(
            "/api/auth/refresh", json={"refreshToken": resp.json()["refreshToken"]}
        )
        self.assertEqual(replay.status_code, 401)

    def test_missing_and_tampered_credentials(self) -> None:
        resp = self.client.get("/api/auth/me")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"message": "Access token required"})
        self.assertEqual(resp.headers.get("www-authenticate"), "Bearer")

        self.client.cookies.set("access_token", "not-a-signed-value")
        self.assertEqual(self.client.get("/api/auth/me").status_code, 401)
        self.client.cookies.clear()

        resp = self.client.get("/api/auth/me", headers={"Authorization": "Bearer abc.def.ghi"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"message": "Invalid token"})


class TestProfileAndAccount(ApiTestCase):
    def test_get_and_update_profile(self) -> None:
        headers = self.bearer(self.register("a@x.com", display_name="Alice"))
        resp = self.client.get("/api/user/profile", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["timezone"], "UTC")

        resp = self.client.put(
            "/api/user/profile",
            json={"displayName": "Alice B", "timezone": "Europe/Paris", "preferences": {"theme": "dark"}},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["displayName"], "Alice B")
        self.assertEqual(body["timezone"], "Europe/Paris")
        self.assertEqual(body["preferences"], {"theme": "dark"})
        self.assertEqual(body["email"], "a@x.com")

    def test_profile_email_conflict(self) -> None:
        self.register("taken@x.com")
        headers = self.bearer(self.register("a@x.com"))
        resp = self.client.put("/api/user/profile", json={"email": "taken@x.com"}, headers=headers)
        self.assertEqual(resp.status_code, 409)

    def test_change_password(self) -> None:
        headers = self.bearer(self.register("a@x.com"))
        resp = self.client.patch(
            "/api/user/password",
            json={"currentPassword": "wrong-password", "newPassword": "brand-new-pass"},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 401)
        resp = self.client.patch(
            "/api/user/password",
            json={"currentPassword": PASSWORD, "newPassword": "brand-new-pass"},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 200)
        old = self.client.post("/api/auth/login", json={"email": "a@x.com", "password": PASSWORD})
        self.assertEqual(old.status_code, 401)
        new = self.client.post("/api/auth/login", json={"email": "a@x.com", "password": "brand-new-pass"})
        self.assertEqual(new.status_code, 200)

    def test_delete_account_soft_disables(self) -> None:
        auth = self.register("a@x.com")
        resp = self.client.request(
            "DELETE", "/api/user/account", json={"password": PASSWORD}, headers=self.bearer(auth)
        )
        self.assertEqual(resp.status_code, 200)
        login = self.client.post("/api/auth/login", json={"email": "a@x.com", "password": PASSWORD})
        self.assertEqual(login.status_code, 401)
        self.assertEqual(self.client.get("/api/auth/me", headers=self.bearer(auth)).status_code, 401)
        # The row is kept, only disabled.
        self.assertIsNotNone(self.storage.get_user_by_email("a@x.com"))


class TestRoleChecks(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.storage.create_organization("Acme", "ACME-2026")

    def test_individual_is_forbidden_on_manager_and_admin_routes(self) -> None:
        headers = self.bearer(self.register("e@x.com", org_code="ACME-2026"))
        resp = self.client.get("/api/manager/metrics", headers=headers)
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json(), {"message": "Manager access required"})
        resp = self.client.get("/api/admin/users", headers=headers)
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json(), {"message": "Admin access required"})

    def test_role_dependency_passes_user_through(self) -> None:
        dependency = requires(Role.MANAGER)
        admin = User(email="a@x.com", role="admin")
        self.assertIs(dependency(admin), admin)
        with self.assertRaises(ForbiddenError):
            dependency(User(email="i@x.com", role="individual"))

    def test_admin_lists_users(self) -> None:
        self.register("e@x.com", org_code="ACME-2026")
        headers = self.bearer(self.register("admin@x.com", role="admin", org_code="ACME-2026"))
        resp = self.client.get("/api/admin/users", headers=headers)
        self.assertEqual(resp.status_code, 200)
        emails = sorted(u["email"] for u in resp.json()["users"])
        self.assertEqual(emails, ["admin@x.com", "e@x.com"])

    def test_manager_can_use_manager_routes_but_not_admin_routes(self) -> None:
        headers = self.bearer(self.register("m@x.com", role="manager", org_code="ACME-2026"))
        self.assertEqual(self.client.get("/api/manager/metrics", headers=headers).status_code, 200)
        self.assertEqual(self.client.get("/api/admin/users", headers=headers).status_code, 403)


class TestAuthDisabled(unittest.TestCase):
    def test_requests_run_as_dev_admin(self) -> None:
        app = create_app(make_settings(AUTH_ENABLED=False))
        with TestClient(app) as client:
            resp = client.get("/api/auth/me")
            self.assertEqual(resp.status_code, 200)
            self.assertEqual(resp.json()["role"], "admin")
            again = client.get("/api/auth/me")
            self.assertEqual(again.json()["id"], resp.json()["id"])


if __name__ == "__main__":
    unittest.main()
