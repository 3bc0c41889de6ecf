"""Notifications raised for businesses when applications are scored"""

from trustrail_gateway.domain.models import ApplicationStatus, NotificationDraft

_NOTIFICATION_TYPES = {
    ApplicationStatus.APPROVED: ("application_approved", "Application Approved"),
    ApplicationStatus.DECLINED: ("application_declined", "Application Declined"),
    ApplicationStatus.UNDER_REVIEW: ("application_under_review", "Application Under Review"),
}


def notification_for_application(customer_name: str, status: str) -> NotificationDraft:
    """Build the notification a business receives for a newly scored application"""
    status = ApplicationStatus(status)
    notification_type, title = _NOTIFICATION_TYPES[status]

    return NotificationDraft(
        type=notification_type,
        title=title,
        message=f"Payment application from {customer_name} is {status.value.replace('_', ' ')}",
    )
