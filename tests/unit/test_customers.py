"""Unit tests for customer aggregates and dashboard statistics"""

import pytest
from datetime import datetime
from trustrail_gateway.domain.customers import aggregate_customers, dashboard_stats, fold_application
from trustrail_gateway.domain.models import ApplicationOutcome, CustomerSummary


def outcome(email, status, score, amount=100000, day=1, name="Customer"):
    return ApplicationOutcome(
        customer_email=email,
        customer_name=name,
        amount=amount,
        status=status,
        trust_score=score,
        created_at=datetime(2026, 3, day, 12, 0),
    )


def test_fold_application_updates_running_totals():
    summary = CustomerSummary(customer_email="a@example.com", customer_name="Ada")

    fold_application(summary, outcome("a@example.com", "approved", 80, amount=60000, day=2))
    fold_application(summary, outcome("a@example.com", "declined", 30, amount=250000, day=5))
    fold_application(summary, outcome("a@example.com", "approved", 70, amount=40000, day=3))

    assert summary.total_payments == 3
    assert summary.successful_payments == 2
    assert summary.active_plans == 2
    assert summary.average_trust_score == pytest.approx(60)
    assert summary.total_amount_paid == 350000
    assert summary.last_payment_date == datetime(2026, 3, 5, 12, 0)


def test_fold_application_treats_missing_amount_as_zero():
    summary = CustomerSummary(customer_email="a@example.com", customer_name="Ada")
    fold_application(summary, outcome("a@example.com", "under_review", 55, amount=None))

    assert summary.total_amount_paid == 0
    assert summary.average_trust_score == 55


def test_aggregate_customers_groups_by_email_in_first_seen_order():
    applications = [
        outcome("b@example.com", "approved", 90, name="Bola"),
        outcome("a@example.com", "declined", 20, name="Ada"),
        outcome("b@example.com", "under_review", 50, name="Bola"),
    ]

    customers = aggregate_customers(applications)

    assert [c.customer_email for c in customers] == ["b@example.com", "a@example.com"]
    bola, ada = customers
    assert bola.total_payments == 2
    assert bola.successful_payments == 1
    assert bola.average_trust_score == pytest.approx(70)
    assert ada.total_payments == 1
    assert ada.successful_payments == 0
    assert ada.active_plans == 0


def test_aggregate_matches_incremental_folding():
    """Incremental updates on write agree with a full recompute"""
    applications = [outcome("a@example.com", s, score, day=i + 1) for i, (s, score) in enumerate(
        [("approved", 85), ("under_review", 45), ("declined", 25), ("approved", 72)]
    )]

    incremental = CustomerSummary(customer_email="a@example.com", customer_name="Customer")
    for app in applications:
        fold_application(incremental, app)

    assert aggregate_customers(applications) == [incremental]


def test_aggregate_customers_empty():
    assert aggregate_customers([]) == []


def test_dashboard_stats_counts_by_status():
    applications = [
        outcome("a@example.com", "approved", 80),
        outcome("b@example.com", "approved", 75),
        outcome("c@example.com", "under_review", 50),
        outcome("d@example.com", "declined", 20),
        outcome("e@example.com", "declined", 10),
        outcome("f@example.com", "approved", 90),
    ]

    stats = dashboard_stats(applications)

    assert stats.total_payments == 6
    assert stats.success_rate == 50
    assert stats.pending_approvals == 1
    assert stats.failed_payments == 2


def test_dashboard_stats_rounds_success_rate():
    applications = [
        outcome("a@example.com", "approved", 80),
        outcome("b@example.com", "declined", 20),
        outcome("c@example.com", "declined", 20),
    ]
    assert dashboard_stats(applications).success_rate == 33


def test_dashboard_stats_without_applications():
    stats = dashboard_stats([])

    assert stats.total_payments == 0
    assert stats.success_rate == 0
    assert stats.pending_approvals == 0
    assert stats.failed_payments == 0
