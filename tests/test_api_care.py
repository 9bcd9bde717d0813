"""HTTP tests for therapists, appointments, courses, assessments, manager dashboards and organizations."""

import unittest

from api_support import ApiTestCase

ORG_CODE = "ACME-2026"


class OrgTestCase(ApiTestCase):
    """One organization with an admin, a manager and an employee; plus an outsider with no org."""

    def setUp(self) -> None:
        super().setUp()
        self.org = self.storage.create_organization("Acme", ORG_CODE)
        self.admin = self.bearer(self.register("admin@acme.com", role="admin", org_code=ORG_CODE))
        self.manager = self.bearer(self.register("manager@acme.com", role="manager", org_code=ORG_CODE))
        self.employee = self.bearer(self.register("dev@acme.com", org_code=ORG_CODE))
        self.outsider = self.bearer(self.register("solo@x.com"))


class TestTherapistsAndAppointments(OrgTestCase):
    def _therapist(self) -> dict:
        resp = self.client.post(
            "/api/therapists",
            json={"name": "Dr. Sarah Chen", "specialization": "Anxiety & Stress", "rating": 4.9},
            headers=self.admin,
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def test_admin_adds_therapist_others_cannot(self) -> None:
        therapist = self._therapist()
        self.assertEqual(therapist["availability"], {})
        resp = self.client.post("/api/therapists", json={"name": "Dr. No"}, headers=self.employee)
        self.assertEqual(resp.status_code, 403)

        listed = self.client.get("/api/therapists", headers=self.employee).json()
        self.assertEqual([t["id"] for t in listed], [therapist["id"]])
        one = self.client.get(f"/api/therapists/{therapist['id']}", headers=self.employee)
        self.assertEqual(one.json()["name"], "Dr. Sarah Chen")
        self.assertEqual(self.client.get("/api/therapists/missing", headers=self.employee).status_code, 404)

    def test_booking_lifecycle(self) -> None:
        therapist = self._therapist()
        resp = self.client.post(
            "/api/appointments",
            json={
                "therapistId": therapist["id"],
                "startTime": "2026-11-02T10:00:00Z",
                "endTime": "2026-11-02T11:00:00Z",
                "notes": "First session",
            },
            headers=self.employee,
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        appointment = resp.json()
        self.assertEqual(appointment["status"], "pending")
        path = f"/api/appointments/{appointment['id']}"

        self.assertEqual(len(self.client.get("/api/appointments", headers=self.employee).json()), 1)
        self.assertEqual(self.client.get("/api/appointments", headers=self.outsider).json(), [])
        self.assertEqual(self.client.get(path, headers=self.outsider).status_code, 404)

        updated = self.client.put(path, json={"status": "confirmed"}, headers=self.employee)
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["status"], "confirmed")
        self.assertEqual(updated.json()["notes"], "First session")

        bad = self.client.put(path, json={"status": "rescheduled"}, headers=self.employee)
        self.assertEqual(bad.status_code, 400)
        other = self.client.put(path, json={"status": "cancelled"}, headers=self.outsider)
        self.assertEqual(other.status_code, 404)

    def test_booking_unknown_therapist_is_404(self) -> None:
        resp = self.client.post("/api/appointments", json={"therapistId": "nope"}, headers=self.employee)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"message": "Therapist not found"})

    def test_end_before_start_rejected(self) -> None:
        therapist = self._therapist()
        resp = self.client.post(
            "/api/appointments",
            json={
                "therapistId": therapist["id"],
                "startTime": "2026-11-02T11:00:00Z",
                "endTime": "2026-11-02T10:00:00Z",
            },
            headers=self.employee,
        )
        self.assertEqual(resp.status_code, 400)

    def test_naive_time_is_read_as_utc_next_to_aware_time(self) -> None:
        therapist = self._therapist()
        ok = self.client.post(
            "/api/appointments",
            json={
                "therapistId": therapist["id"],
                "startTime": "2026-11-02T10:00:00Z",
                "endTime": "2026-11-02T11:00:00",
            },
            headers=self.employee,
        )
        self.assertEqual(ok.status_code, 201, ok.text)
        self.assertEqual(ok.json()["endTime"], "2026-11-02T11:00:00Z")

        reversed_window = self.client.post(
            "/api/appointments",
            json={
                "therapistId": therapist["id"],
                "startTime": "2026-11-02T10:00:00",
                "endTime": "2026-11-02T10:30:00+02:00",
            },
            headers=self.employee,
        )
        self.assertEqual(reversed_window.status_code, 400)
        self.assertIn("endTime must be after startTime", reversed_window.json()["message"])

    def test_offset_times_are_stored_as_utc(self) -> None:
        therapist = self._therapist()
        created = self.client.post(
            "/api/appointments",
            json={
                "therapistId": therapist["id"],
                "startTime": "2026-11-02T10:00:00+02:00",
                "endTime": "2026-11-02T11:00:00+02:00",
            },
            headers=self.employee,
        )
        self.assertEqual(created.status_code, 201, created.text)
        self.assertEqual(created.json()["startTime"], "2026-11-02T08:00:00Z")

        listed = self.client.get("/api/appointments", headers=self.employee).json()
        self.assertEqual(listed[0]["startTime"], "2026-11-02T08:00:00Z")
        self.assertEqual(listed[0]["endTime"], "2026-11-02T09:00:00Z")
        one = self.client.get(f"/api/appointments/{created.json()['id']}", headers=self.employee)
        self.assertEqual(one.json()["startTime"], "2026-11-02T08:00:00Z")

    def test_update_compares_mixed_times_against_stored_window(self) -> None:
        therapist = self._therapist()
        created = self.client.post(
            "/api/appointments",
            json={
                "therapistId": therapist["id"],
                "startTime": "2026-11-02T10:00:00Z",
                "endTime": "2026-11-02T11:00:00Z",
            },
            headers=self.employee,
        )
        path = f"/api/appointments/{created.json()['id']}"

        # 11:30+02:00 is 09:30Z, before the stored start.
        bad = self.client.put(path, json={"endTime": "2026-11-02T11:30:00+02:00"}, headers=self.employee)
        self.assertEqual(bad.status_code, 400)

        moved = self.client.put(path, json={"endTime": "2026-11-02T12:00:00"}, headers=self.employee)
        self.assertEqual(moved.status_code, 200, moved.text)
        self.assertEqual(moved.json()["endTime"], "2026-11-02T12:00:00Z")
        listed = self.client.get("/api/appointments", headers=self.employee).json()
        self.assertEqual(listed[0]["endTime"], "2026-11-02T12:00:00Z")


class TestCourses(OrgTestCase):
    def test_catalogue(self) -> None:
        resp = self.client.post(
            "/api/courses",
            json={"title": "Mindful Breathing Basics", "durationMinutes": 15, "difficulty": "Beginner"},
            headers=self.admin,
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        course = resp.json()
        self.assertEqual(course["durationMinutes"], 15)

        self.assertEqual(
            self.client.post("/api/courses", json={"title": "X"}, headers=self.manager).status_code, 403
        )
        self.assertEqual(len(self.client.get("/api/courses", headers=self.outsider).json()), 1)
        self.assertEqual(
            self.client.get(f"/api/courses/{course['id']}", headers=self.outsider).json()["title"],
            "Mindful Breathing Basics",
        )
        self.assertEqual(self.client.get("/api/courses/missing", headers=self.outsider).status_code, 404)


class TestAssessments(OrgTestCase):
    QUESTIONS = [
        {"id": "stress", "question": "Stress level?", "type": "scale", "category": "Stress Management"},
        {"id": "sleep", "question": "Sleep quality?", "type": "scale", "category": "Sleep & Rest"},
        {"id": "notes", "question": "Anything else?", "type": "text", "category": "General"},
    ]

    def _create(self) -> dict:
        resp = self.client.post(
            "/api/assessments",
            json={"assessmentType": "quick-check", "title": "Weekly pulse", "questions": self.QUESTIONS},
            headers=self.manager,
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def test_only_managers_create(self) -> None:
        resp = self.client.post(
            "/api/assessments",
            json={"assessmentType": "quick-check", "title": "Nope", "questions": self.QUESTIONS},
            headers=self.employee,
        )
        self.assertEqual(resp.status_code, 403)

    def test_invalid_questions_rejected(self) -> None:
        duplicate = [self.QUESTIONS[0], self.QUESTIONS[0]]
        for questions in ([], duplicate, [{"id": "q", "question": "?", "type": "slider", "category": "X"}]):
            resp = self.client.post(
                "/api/assessments",
                json={"assessmentType": "quick-check", "title": "Bad", "questions": questions},
                headers=self.manager,
            )
            self.assertEqual(resp.status_code, 400, questions)

    def test_org_scoping(self) -> None:
        assessment = self._create()
        ids = [a["id"] for a in self.client.get("/api/assessments", headers=self.employee).json()]
        self.assertIn(assessment["id"], ids)
        outsider_ids = [a["id"] for a in self.client.get("/api/assessments", headers=self.outsider).json()]
        self.assertNotIn(assessment["id"], outsider_ids)
        resp = self.client.post(
            f"/api/assessments/{assessment['id']}/respond",
            json={"responses": {"stress": 5}},
            headers=self.outsider,
        )
        self.assertEqual(resp.status_code, 404)

    def test_respond_scores_and_lists_own_responses(self) -> None:
        assessment = self._create()
        path = f"/api/assessments/{assessment['id']}"
        resp = self.client.post(
            f"{path}/respond",
            json={"responses": {"stress": 5, "sleep": 1, "notes": "busy week"}},
            headers=self.employee,
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        result = resp.json()
        # (4 + 0 + 0) / (3 * 4) * 10
        self.assertEqual(result["totalScore"], 3.3)
        self.assertEqual(result["categoryScores"]["Stress Management"], 4.0)
        self.assertIn(
            "Consider focusing on sleep & rest with additional resources and support.",
            result["recommendations"],
        )

        mine = self.client.get(f"{path}/responses", headers=self.employee).json()
        self.assertEqual([r["id"] for r in mine], [result["id"]])
        self.assertEqual(self.client.get(f"{path}/responses", headers=self.manager).json(), [])

    def test_unknown_question_or_assessment(self) -> None:
        assessment = self._create()
        resp = self.client.post(
            f"/api/assessments/{assessment['id']}/respond",
            json={"responses": {"mystery": 3}},
            headers=self.employee,
        )
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post(
            "/api/assessments/missing/respond", json={"responses": {}}, headers=self.employee
        )
        self.assertEqual(resp.status_code, 404)


class TestManagerDashboard(OrgTestCase):
    def test_metrics_aggregate_employee_moods(self) -> None:
        for score in (2, 3):
            self.client.post("/api/mood-entries", json={"moodScore": score}, headers=self.employee)
        # Entries from users outside the organization are not counted.
        self.client.post("/api/mood-entries", json={"moodScore": 10}, headers=self.outsider)

        resp = self.client.get("/api/manager/metrics", headers=self.manager)
        self.assertEqual(resp.status_code, 200, resp.text)
        metrics = resp.json()
        self.assertEqual(metrics["orgId"], self.org.id)
        self.assertEqual(metrics["employeeCount"], 1)
        self.assertEqual(metrics["teamWellness"], 2.5)
        self.assertEqual(metrics["participationRate"], 1.0)
        self.assertEqual(metrics["atRiskCount"], 1)
        self.assertEqual(metrics["sessionsThisWeek"], 2)
        self.assertEqual(metrics["departments"][0]["status"], "needs-attention")

    def test_employee_list_is_anonymized(self) -> None:
        employees = self.client.get("/api/manager/employees", headers=self.manager).json()
        self.assertEqual(len(employees), 1)
        self.assertEqual(
            set(employees[0]), {"anonymizedId", "jobTitle", "department", "wellnessStreak"}
        )

    def test_surveys(self) -> None:
        resp = self.client.post(
            "/api/manager/surveys",
            json={"title": "Q4 pulse", "questions": [{"id": "q1", "text": "How are you?"}]},
            headers=self.manager,
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        self.assertEqual(resp.json()["orgId"], self.org.id)
        listed = self.client.get("/api/manager/surveys", headers=self.manager).json()
        self.assertEqual([s["title"] for s in listed], ["Q4 pulse"])

    def test_admin_picks_org_with_org_id(self) -> None:
        other = self.client.post(
            "/api/organizations", json={"name": "Globex", "code": "GLOBEX-01"}, headers=self.admin
        )
        self.assertEqual(other.status_code, 201, other.text)
        other_id = other.json()["id"]

        resp = self.client.get(f"/api/manager/metrics?orgId={other_id}", headers=self.admin)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["orgId"], other_id)
        self.assertIsNone(resp.json()["teamWellness"])
        self.assertEqual(resp.json()["employeeCount"], 0)

        # Managers cannot look at another organization.
        resp = self.client.get(f"/api/manager/metrics?orgId={other_id}", headers=self.manager)
        self.assertEqual(resp.json()["orgId"], self.org.id)

        missing = self.client.get("/api/manager/metrics?orgId=missing", headers=self.admin)
        self.assertEqual(missing.status_code, 404)

    def test_admin_without_org_needs_org_id(self) -> None:
        admin = self.storage.create_user("root@x.com", "unused-hash", "Root", "admin")
        token = self.app.state.auth.issue_tokens(admin).access_token
        resp = self.client.get("/api/manager/metrics", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"message": "No organization associated with this account"})


class TestOrganizations(OrgTestCase):
    def test_create_requires_admin_and_unique_code(self) -> None:
        body = {"name": "Initech", "code": "INITECH-1"}
        self.assertEqual(
            self.client.post("/api/organizations", json=body, headers=self.manager).status_code, 403
        )
        created = self.client.post("/api/organizations", json=body, headers=self.admin)
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.json()["code"], "INITECH-1")
        duplicate = self.client.post("/api/organizations", json=body, headers=self.admin)
        self.assertEqual(duplicate.status_code, 409)

    def test_new_code_gates_registration(self) -> None:
        self.client.post("/api/organizations", json={"name": "Initech", "code": "INITECH-1"}, headers=self.admin)
        auth = self.register("boss@initech.com", role="manager", org_code="INITECH-1")
        self.assertIsNotNone(auth["user"]["organizationId"])


if __name__ == "__main__":
    unittest.main()
