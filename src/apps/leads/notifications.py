"""Team email notifications for new leads."""

import logging

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string

from .models import Submission

logger = logging.getLogger(__name__)


def send_submission_notification(submission: Submission) -> None:
    """Email the team when a new intake submission arrives."""
    recipients: list[str] = getattr(settings, "LEADS_NOTIFICATION_EMAILS", [])

    if not recipients:
        logger.warning("No LEADS_NOTIFICATION_EMAILS configured, skipping notification.")
        return

    subject = f"New {submission.get_recommended_package_display()} lead: {submission.name}"
    dashboard_url = f"{settings.SITE_URL}/dashboard/?q={submission.email}"

    details = [
        f"Name: {submission.name}",
        f"Email: {submission.email}",
        f"Goal: {submission.get_goal_display()}",
        f"Budget: {submission.get_budget_display()}",
    ]
    if submission.pages_count:
        details.append(f"Pages: {submission.pages_count}")
    if submission.features:
        details.append(f"Features: {', '.join(submission.features)}")
    if submission.platform:
        details.append(f"Platform: {submission.platform}")
    if submission.auth_needed is not None:
        details.append(f"Authentication: {'Yes' if submission.auth_needed else 'No'}")
    details.append(f"Recommended package: {submission.get_recommended_package_display()}")

    text_body = (
        "New intake submission received:\n\n"
        + "\n".join(details)
        + f"\n\nSubmitted: {submission.created_at:%Y-%m-%d %H:%M}\n\n"
        + f"View in dashboard: {dashboard_url}\n"
    )

    html_body = render_to_string(
        "emails/submission_notification.html",
        {"submission": submission, "details": details, "dashboard_url": dashboard_url},
    )

    try:
        msg = EmailMultiAlternatives(
            subject=subject,
            body=text_body,
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=recipients,
            reply_to=[f"{submission.name} <{submission.email}>"],
        )
        msg.attach_alternative(html_body, "text/html")
        msg.send(fail_silently=False)
        logger.info("Lead notification sent to %s for submission #%d", recipients, submission.pk)
    except Exception:
        logger.exception("Failed to send lead notification for submission #%d", submission.pk)
