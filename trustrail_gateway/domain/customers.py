"""Customer aggregates and dashboard statistics derived from applications"""

from typing import Dict, Iterable, List

from trustrail_gateway.domain.models import ApplicationStatus, CustomerSummary, DashboardStats


def fold_application(summary: CustomerSummary, application) -> CustomerSummary:
    """
    Add one scored application to a customer's running aggregate.

    `application` is anything exposing customer_name, amount, status,
    trust_score and created_at (an ApplicationOutcome or the ORM row).
    The average trust score is a running mean over all applications.
    """
    approved = application.status == ApplicationStatus.APPROVED.value

    summary.total_payments += 1
    if approved:
        summary.successful_payments += 1
        summary.active_plans += 1

    summary.average_trust_score += (
        application.trust_score - summary.average_trust_score
    ) / summary.total_payments
    summary.total_amount_paid += application.amount or 0

    if summary.last_payment_date is None or application.created_at > summary.last_payment_date:
        summary.last_payment_date = application.created_at

    return summary


def aggregate_customers(applications: Iterable) -> List[CustomerSummary]:
    """Recompute every customer's aggregate from scratch, grouped by email in first-seen order"""
    customers: Dict[str, CustomerSummary] = {}

    for app in applications:
        summary = customers.get(app.customer_email)
        if summary is None:
            summary = CustomerSummary(
                customer_email=app.customer_email,
                customer_name=app.customer_name,
                customer_phone=getattr(app, "customer_phone", None),
            )
            customers[app.customer_email] = summary
        fold_application(summary, app)

    return list(customers.values())


def dashboard_stats(applications: Iterable) -> DashboardStats:
    """Totals by status; success rate is the rounded approved percentage"""
    statuses = [app.status for app in applications]
    total = len(statuses)
    approved = statuses.count(ApplicationStatus.APPROVED.value)

    return DashboardStats(
        total_payments=total,
        success_rate=round(approved / total * 100) if total > 0 else 0,
        pending_approvals=statuses.count(ApplicationStatus.UNDER_REVIEW.value),
        failed_payments=statuses.count(ApplicationStatus.DECLINED.value),
    )
