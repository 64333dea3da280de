import unittest
from datetime import timedelta

from api_case import ApiTestCase
from clinic.auth.tokens import TokenService
from clinic.core.settings import Settings, settings
from clinic.main import create_app


class TestRegisterAndLogin(ApiTestCase):

    def test_register_defaults_to_staff(self):
        body = self.register(email="new@clinic.com")
        self.assertEqual(body["role"], "STAFF")
        self.assertEqual(body["email"], "new@clinic.com")
        self.assertTrue(body["token"])
        self.assertNotIn("password", body)
        self.assertNotIn("hashedPassword", body)

    def test_register_with_role(self):
        body = self.register(role="DOCTOR")
        self.assertEqual(body["role"], "DOCTOR")

    def test_register_duplicate_email(self):
        self.register(email="dup@clinic.com")
        resp = self.client.post("/auth/register", json={
            "name": "Other", "email": "dup@clinic.com", "password": "secret123",
        })
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["detail"], "Email already exists")

    def test_register_validation(self):
        bad_bodies = [
            {"name": "A", "email": "not-an-email", "password": "secret123"},
            {"name": "A", "email": "a@clinic.com", "password": "short"},
            {"name": "A", "email": "a@clinic.com", "password": "secret123", "role": "SURGEON"},
            {"email": "a@clinic.com", "password": "secret123"},
        ]
        for body in bad_bodies:
            resp = self.client.post("/auth/register", json=body)
            self.assertEqual(resp.status_code, 422, body)

    def test_login_success(self):
        self.register(role="NURSE", email="nurse@clinic.com", password="nurse123")
        resp = self.client.post("/auth/login", json={"email": "nurse@clinic.com", "password": "nurse123"})

        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["role"], "NURSE")

        me = self.client.get("/auth/me", headers=self.headers(body["token"]))
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["email"], "nurse@clinic.com")

    def test_wrong_password_and_unknown_email_look_the_same(self):
        self.register(email="known@clinic.com", password="right123")

        wrong = self.client.post("/auth/login", json={"email": "known@clinic.com", "password": "wrong123"})
        unknown = self.client.post("/auth/login", json={"email": "ghost@clinic.com", "password": "right123"})
        malformed = self.client.post("/auth/login", json={"email": "ghost", "password": "right123"})

        for resp in (wrong, unknown, malformed):
            self.assertEqual(resp.status_code, 401)
            self.assertEqual(resp.json(), {"detail": "Invalid credentials"})

    def test_login_with_mixed_case_email(self):
        body = self.register(role="DOCTOR", email="Dr.House@Clinic.COM")
        self.assertEqual(body["email"], "dr.house@clinic.com")

        for email in ("Dr.House@Clinic.COM", "dr.house@clinic.com", " DR.HOUSE@CLINIC.COM "):
            resp = self.client.post("/auth/login", json={"email": email, "password": "secret123"})
            self.assertEqual(resp.status_code, 200, email)
            self.assertEqual(resp.json()["id"], body["id"])

        resp = self.client.post("/auth/register", json={
            "name": "Copy", "email": "DR.HOUSE@clinic.com", "password": "secret123",
        })
        self.assertEqual(resp.status_code, 409)

    def test_deleted_user_cannot_login(self):
        admin = self.token_for("ADMIN")
        user = self.register(email="leaving@clinic.com")

        resp = self.client.delete(f"/users/{user['id']}", headers=self.headers(admin))
        self.assertEqual(resp.status_code, 200)

        resp = self.client.post("/auth/login", json={"email": "leaving@clinic.com", "password": "secret123"})
        self.assertEqual(resp.status_code, 401)

        # The address stays taken
        resp = self.client.post("/auth/register", json={
            "name": "Again", "email": "leaving@clinic.com", "password": "secret123",
        })
        self.assertEqual(resp.status_code, 409)


class TestAuthentication(ApiTestCase):

    def test_missing_token(self):
        resp = self.client.get("/patients")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.headers["www-authenticate"], "Bearer")

    def test_garbage_token(self):
        resp = self.client.get("/patients", headers=self.headers("garbage"))
        self.assertEqual(resp.status_code, 401)

    def test_expired_token(self):
        user = self.register(role="ADMIN")
        expired = TokenService(settings.JWT_SECRET, expires_delta=timedelta(seconds=-10))
        token = expired.issue(user["id"], user["email"], user["role"])

        resp = self.client.get("/patients", headers=self.headers(token))
        self.assertEqual(resp.status_code, 401)

    def test_unauthenticated_beats_forbidden(self):
        # STAFF could never delete a treatment, but without a token the answer is 401
        resp = self.client.delete("/treatments/anything")
        self.assertEqual(resp.status_code, 401)

    def test_forbidden_hides_missing_permission(self):
        nurse = self.token_for("NURSE")
        resp = self.client.post("/patients", json={"name": "X", "patientId": "P1"}, headers=self.headers(nurse))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json(), {"detail": "Forbidden resource"})

    def test_me_needs_only_authentication(self):
        staff = self.token_for("STAFF")
        resp = self.client.get("/auth/me", headers=self.headers(staff))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["role"], "STAFF")

    def test_role_trusted_from_token_by_default(self):
        admin = self.token_for("ADMIN")
        doctor = self.register(role="DOCTOR")

        self.client.delete(f"/users/{doctor['id']}", headers=self.headers(admin))

        # Stateless tokens stay valid until they expire
        resp = self.client.get("/patients", headers=self.headers(doctor["token"]))
        self.assertEqual(resp.status_code, 200)


class TestResolveRolePerRequest(ApiTestCase):

    def build_app(self):
        return create_app(Settings(JWT_SECRET=settings.JWT_SECRET, RESOLVE_ROLE_PER_REQUEST=True))

    def test_deleted_user_token_stops_working(self):
        admin = self.token_for("ADMIN")
        doctor = self.register(role="DOCTOR")
        self.client.delete(f"/users/{doctor['id']}", headers=self.headers(admin))

        resp = self.client.get("/patients", headers=self.headers(doctor["token"]))
        self.assertEqual(resp.status_code, 401)

        resp = self.client.get("/patients", headers=self.headers(admin))
        self.assertEqual(resp.status_code, 200)


class TestUsersApi(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.admin = self.token_for("ADMIN")

    def test_only_admin_manages_users(self):
        doctor = self.token_for("DOCTOR")
        resp = self.client.get("/users", headers=self.headers(doctor))
        self.assertEqual(resp.status_code, 403)

        resp = self.client.get("/users", headers=self.headers(self.admin))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()), 2)

    def test_admin_creates_user_without_token(self):
        resp = self.client.post("/users", json={
            "name": "Nurse Joy", "email": "joy@clinic.com", "password": "secret123", "role": "NURSE",
        }, headers=self.headers(self.admin))

        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["role"], "NURSE")
        self.assertNotIn("token", resp.json())

    def test_update_user(self):
        user = self.register(email="old@clinic.com")
        resp = self.client.patch(f"/users/{user['id']}", json={
            "name": "Renamed", "email": "new@clinic.com", "role": "ADMIN",
        }, headers=self.headers(self.admin))

        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["name"], "Renamed")
        self.assertEqual(body["email"], "new@clinic.com")
        # role is not updatable
        self.assertEqual(body["role"], "STAFF")

    def test_update_to_taken_email(self):
        self.register(email="taken@clinic.com")
        user = self.register()
        resp = self.client.patch(f"/users/{user['id']}", json={"email": "taken@clinic.com"}, headers=self.headers(self.admin))
        self.assertEqual(resp.status_code, 409)

    def test_updated_email_is_normalized(self):
        user = self.register(email="nurse.old@clinic.com")
        resp = self.client.patch(f"/users/{user['id']}", json={"email": "Nurse.New@Clinic.COM"},
                                 headers=self.headers(self.admin))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["email"], "nurse.new@clinic.com")

        resp = self.client.post("/auth/login", json={"email": "Nurse.New@Clinic.COM", "password": "secret123"})
        self.assertEqual(resp.status_code, 200)

    def test_deleted_user_is_hidden(self):
        user = self.register()
        self.client.delete(f"/users/{user['id']}", headers=self.headers(self.admin))

        resp = self.client.get(f"/users/{user['id']}", headers=self.headers(self.admin))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], f"User with ID {user['id']} not found")

        ids = [u["id"] for u in self.client.get("/users", headers=self.headers(self.admin)).json()]
        self.assertNotIn(user["id"], ids)


if __name__ == "__main__":
    unittest.main()
