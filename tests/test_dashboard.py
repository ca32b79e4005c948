# tests/test_dashboard.py

from datetime import date, datetime, timedelta

import pytest

from taskflow.models import Task
from taskflow.services.dashboard import (
    DashboardAggregator,
    compute_dashboard,
    days_between,
    month_bounds,
    percentage,
    round_half_up,
)
from taskflow.utils.access import scope_tasks

TODAY = date(2025, 3, 15)


def _aggregator(db, identity, now):
    return DashboardAggregator(scope_tasks(identity, db.query(Task)), now)


@pytest.mark.parametrize("value, places, expected", [
    (33.333333, 2, 33.33),
    (66.666666, 2, 66.67),
    (0.125, 2, 0.13),
    (5.55, 1, 5.6),
    (2.5, 0, 3.0),
])
def test_round_half_up(value, places, expected):
    assert round_half_up(value, places) == expected


def test_percentage_is_zero_for_empty_whole():
    assert percentage(0, 0) == 0
    assert percentage(1, 3) == 33.33
    assert percentage(3, 3) == 100.0


def test_days_between_counts_calendar_days():
    assert days_between(datetime(2025, 3, 1, 23, 59), datetime(2025, 3, 2, 0, 1)) == 1
    assert days_between(datetime(2025, 3, 1, 0, 1), datetime(2025, 3, 1, 23, 59)) == 0
    assert days_between(date(2025, 3, 15), date(2025, 3, 10)) == -5


def test_month_bounds_cover_the_whole_month():
    start, end = month_bounds(datetime(2024, 2, 10, 8, 30))

    assert start == datetime(2024, 2, 1, 0, 0, 0)
    assert end.date() == date(2024, 2, 29)
    assert end.hour == 23 and end.minute == 59


class TestTaskStatistics:
    def test_statistics_only_count_visible_tasks(self, db, alice, bob, make_task, identity_of, now):
        make_task(alice, status="pending")
        make_task(alice, status="completed")
        make_task(alice, status="in_progress")
        make_task(bob, status="completed")

        stats = _aggregator(db, identity_of(alice), now).task_statistics()

        assert stats == {
            "total_tasks": 3,
            "completed_tasks": 1,
            "pending_tasks": 1,
            "in_progress_tasks": 1,
            "cancelled_tasks": 0,
            "completion_rate": 33.33,
        }

    def test_administrator_sees_every_task(self, db, alice, bob, admin, make_task, identity_of, now):
        make_task(alice, status="completed")
        make_task(bob, status="cancelled")

        stats = _aggregator(db, identity_of(admin), now).task_statistics()

        assert stats["total_tasks"] == 2
        assert stats["completion_rate"] == 50.0
        assert stats["cancelled_tasks"] == 1

    def test_empty_statistics(self, db, alice, identity_of, now):
        stats = _aggregator(db, identity_of(alice), now).task_statistics()

        assert stats["total_tasks"] == 0
        assert stats["completion_rate"] == 0


class TestPerformanceMetrics:
    def test_average_completion_time(self, db, alice, make_task, identity_of, now):
        make_task(alice, status="completed",
                  created_at=datetime(2025, 3, 1, 10, 0), updated_at=datetime(2025, 3, 6, 9, 0))
        make_task(alice, status="completed",
                  created_at=datetime(2025, 3, 2, 10, 0), updated_at=datetime(2025, 3, 8, 11, 0))

        metrics = _aggregator(db, identity_of(alice), now).performance_metrics()

        assert metrics["tasks_created_this_month"] == 2
        assert metrics["tasks_completed_this_month"] == 2
        assert metrics["completion_rate_this_month"] == 100.0
        assert metrics["average_completion_time_days"] == 5.5

    def test_monthly_completion_rate(self, db, alice, make_task, identity_of, now):
        for day in range(1, 6):
            make_task(alice, status="pending", created_at=datetime(2025, 3, day, 9, 0))
        make_task(alice, status="completed",
                  created_at=datetime(2025, 3, 3, 9, 0), updated_at=datetime(2025, 3, 4, 9, 0))
        make_task(alice, status="completed",
                  created_at=datetime(2025, 3, 5, 9, 0), updated_at=datetime(2025, 3, 7, 9, 0))

        metrics = _aggregator(db, identity_of(alice), now).performance_metrics()

        assert metrics["tasks_created_this_month"] == 7
        assert metrics["tasks_completed_this_month"] == 2
        assert metrics["completion_rate_this_month"] == 28.57

    def test_task_created_already_completed_is_not_counted(self, db, alice, make_task, identity_of, now):
        stamp = datetime(2025, 3, 10, 9, 0)
        make_task(alice, status="completed", created_at=stamp, updated_at=stamp)

        metrics = _aggregator(db, identity_of(alice), now).performance_metrics()

        assert metrics["tasks_created_this_month"] == 1
        assert metrics["tasks_completed_this_month"] == 0
        assert metrics["completion_rate_this_month"] == 0
        # Still part of the average, with a zero-day duration
        assert metrics["average_completion_time_days"] == 0.0

    def test_tasks_from_other_months_are_excluded(self, db, alice, make_task, identity_of, now):
        make_task(alice, status="completed",
                  created_at=datetime(2025, 2, 27, 9, 0), updated_at=datetime(2025, 3, 2, 9, 0))
        make_task(alice, status="pending", created_at=datetime(2025, 4, 1, 0, 0))

        metrics = _aggregator(db, identity_of(alice), now).performance_metrics()

        assert metrics == {
            "tasks_created_this_month": 0,
            "tasks_completed_this_month": 0,
            "completion_rate_this_month": 0,
            "average_completion_time_days": 0,
        }

    def test_metrics_are_scoped(self, db, alice, bob, make_task, identity_of, now):
        make_task(bob, status="completed",
                  created_at=datetime(2025, 3, 1, 9, 0), updated_at=datetime(2025, 3, 9, 9, 0))
        make_task(alice, status="pending", created_at=datetime(2025, 3, 2, 9, 0))

        metrics = _aggregator(db, identity_of(alice), now).performance_metrics()

        assert metrics["tasks_created_this_month"] == 1
        assert metrics["tasks_completed_this_month"] == 0


class TestDistributions:
    def test_all_keys_present_and_sum_to_total(self, db, alice, make_task, identity_of, now):
        make_task(alice, priority="high", status="completed")
        make_task(alice, priority="high", status="pending")
        make_task(alice, priority="urgent", status="pending")

        aggregator = _aggregator(db, identity_of(alice), now)
        priorities = aggregator.priority_distribution()
        statuses = aggregator.status_distribution()

        assert priorities == {"low": 0, "medium": 0, "high": 2, "urgent": 1}
        assert statuses == {"pending": 2, "in_progress": 0, "completed": 1, "cancelled": 0}
        assert sum(priorities.values()) == sum(statuses.values()) == 3


class TestRecentActivity:
    def test_most_recent_ten_in_descending_order(self, db, alice, bob, make_task, identity_of, now):
        for n in range(12):
            make_task(alice, bob if n % 2 else None, title=f"t{n}",
                      created_at=datetime(2025, 3, 1), updated_at=datetime(2025, 3, 1) + timedelta(hours=n))

        activity = _aggregator(db, identity_of(alice), now).recent_activity()

        assert [item["title"] for item in activity] == [f"t{n}" for n in range(11, 1, -1)]
        first = activity[0]
        assert first["updated_at"] == "2025-03-01 11:00:00"
        assert first["creator"] == {"id": alice.id, "name": "Alice"}
        assert first["assignee"] == {"id": bob.id, "name": "Bob"}
        assert activity[1]["assignee"] is None

    def test_equal_timestamps_fall_back_to_id(self, db, alice, make_task, identity_of, now):
        stamp = datetime(2025, 3, 10, 9, 0)
        first = make_task(alice, created_at=stamp)
        second = make_task(alice, created_at=stamp)

        activity = _aggregator(db, identity_of(alice), now).recent_activity()

        assert [item["id"] for item in activity] == [first.id, second.id]


class TestDeadlines:
    def test_overdue_task_reports_days_overdue(self, db, alice, make_task, identity_of, now):
        task = make_task(alice, title="late", due_date=TODAY - timedelta(days=5))

        overdue = _aggregator(db, identity_of(alice), now).overdue_tasks()

        assert overdue == [{
            "id": task.id,
            "title": "late",
            "priority": "medium",
            "due_date": "2025-03-10",
            "days_overdue": 5,
            "assignee": {"id": alice.id, "name": "Alice"},
        }]

    def test_overdue_excludes_completed_and_caps_at_five(self, db, alice, make_task, identity_of, now):
        make_task(alice, title="done", due_date=TODAY - timedelta(days=20), status="completed")
        make_task(alice, title="cancelled", due_date=TODAY - timedelta(days=10), status="cancelled")
        for n in range(1, 7):
            make_task(alice, title=f"late {n}", due_date=TODAY - timedelta(days=n))

        overdue = _aggregator(db, identity_of(alice), now).overdue_tasks()

        assert [item["title"] for item in overdue] == ["cancelled", "late 6", "late 5", "late 4", "late 3"]

    def test_upcoming_window_is_today_through_seven_days(self, db, alice, make_task, identity_of, now):
        make_task(alice, title="yesterday", due_date=TODAY - timedelta(days=1))
        make_task(alice, title="today", due_date=TODAY)
        make_task(alice, title="in 3", due_date=TODAY + timedelta(days=3))
        make_task(alice, title="in 7", due_date=TODAY + timedelta(days=7))
        make_task(alice, title="in 8", due_date=TODAY + timedelta(days=8))
        make_task(alice, title="in 10", due_date=TODAY + timedelta(days=10))
        make_task(alice, title="done in 2", due_date=TODAY + timedelta(days=2), status="completed")
        make_task(alice, title="no date")

        upcoming = _aggregator(db, identity_of(alice), now).upcoming_deadlines()

        assert [(item["title"], item["days_until_due"]) for item in upcoming] == [
            ("today", 0),
            ("in 3", 3),
            ("in 7", 7),
        ]

    def test_deadlines_are_scoped(self, db, alice, bob, make_task, identity_of, now):
        make_task(bob, due_date=TODAY - timedelta(days=2))
        make_task(bob, due_date=TODAY + timedelta(days=2))

        aggregator = _aggregator(db, identity_of(alice), now)

        assert aggregator.overdue_tasks() == []
        assert aggregator.upcoming_deadlines() == []


def test_snapshot_has_every_section(db, alice, identity_of, now):
    snapshot = compute_dashboard(scope_tasks(identity_of(alice), db.query(Task)), now)

    assert set(snapshot) == {
        "task_statistics",
        "recent_activity",
        "performance_metrics",
        "priority_distribution",
        "status_distribution",
        "overdue_tasks",
        "upcoming_deadlines",
    }
    assert snapshot["recent_activity"] == []
    assert snapshot["priority_distribution"] == {"low": 0, "medium": 0, "high": 0, "urgent": 0}


def test_snapshot_is_idempotent(db, alice, bob, make_task, identity_of, now):
    make_task(alice, status="completed", created_at=datetime(2025, 3, 1), updated_at=datetime(2025, 3, 4))
    make_task(alice, bob, due_date=TODAY + timedelta(days=1))
    make_task(bob, alice, due_date=TODAY - timedelta(days=3))

    query = scope_tasks(identity_of(alice), db.query(Task))

    assert compute_dashboard(query, now) == compute_dashboard(query, now)
