"""Unit tests for mindfulme.services.wellness_metrics."""

import unittest
from datetime import UTC, datetime, timedelta

from mindfulme.models import Employee, MoodEntry
from mindfulme.services.wellness_metrics import compute_org_metrics

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _entry(user_id: str, score: int, days_ago: float) -> MoodEntry:
    return MoodEntry(user_id=user_id, mood_score=score, created_at=NOW - timedelta(days=days_ago))


class TestComputeOrgMetrics(unittest.TestCase):
    def setUp(self) -> None:
        self.employees = [
            Employee(user_id="u1", org_id="o1", department="Engineering"),
            Employee(user_id="u2", org_id="o1", department="Engineering"),
            Employee(user_id="u3", org_id="o1", department="Sales"),
        ]
        self.entries = [
            _entry("u1", 8, 10),
            _entry("u2", 2, 10),
            _entry("u1", 8, 1),
        ]

    def test_aggregates(self) -> None:
        metrics = compute_org_metrics(self.employees, self.entries, NOW)
        self.assertEqual(metrics["team_wellness"], 6.0)
        self.assertEqual(metrics["participation_rate"], 0.67)
        self.assertEqual(metrics["at_risk_count"], 1)
        self.assertEqual(metrics["sessions_this_week"], 1)
        self.assertEqual(metrics["employee_count"], 3)
        self.assertEqual(metrics["window_days"], 30)

    def test_departments(self) -> None:
        metrics = compute_org_metrics(self.employees, self.entries, NOW)
        self.assertEqual(
            metrics["departments"],
            [
                {"name": "Engineering", "average": 6.0, "status": "fair"},
                {"name": "Sales", "average": None, "status": "no-data"},
            ],
        )

    def test_entries_of_non_employees_are_ignored(self) -> None:
        entries = self.entries + [_entry("stranger", 1, 1)]
        metrics = compute_org_metrics(self.employees, entries, NOW)
        self.assertEqual(metrics["team_wellness"], 6.0)
        self.assertEqual(metrics["at_risk_count"], 1)

    def test_empty_org(self) -> None:
        metrics = compute_org_metrics([], [], NOW)
        self.assertIsNone(metrics["team_wellness"])
        self.assertEqual(metrics["participation_rate"], 0.0)
        self.assertEqual(metrics["at_risk_count"], 0)
        self.assertEqual(metrics["departments"], [])

    def test_unassigned_department_and_good_status(self) -> None:
        employees = [Employee(user_id="u1", org_id="o1", department=None)]
        metrics = compute_org_metrics(employees, [_entry("u1", 9, 2)], NOW)
        self.assertEqual(
            metrics["departments"], [{"name": "Unassigned", "average": 9.0, "status": "good"}]
        )


if __name__ == "__main__":
    unittest.main()
