"""Lead submission services: storage, status updates, and the admin read path."""

import logging
from collections.abc import Mapping
from typing import Any

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone
from django.utils.crypto import constant_time_compare

from .exceptions import AuthorizationError, NotFoundError
from .intake import AppIntake, WebsiteIntake, parse_intake
from .models import Submission
from .packages import recommend_package

logger = logging.getLogger(__name__)


# ───────────────────────────── Credentials ───────────────────────────────────


def authorize(credential: str | None, secret: str) -> None:
    """Raise ``AuthorizationError`` unless ``credential`` matches ``secret``."""
    if not credential or not secret or not constant_time_compare(credential, secret):
        raise AuthorizationError("Unauthorized")


def check_token(token: str | None, *, secret: str) -> bool:
    """Return True if ``token`` is the configured admin token."""
    try:
        authorize(token, secret)
    except AuthorizationError:
        return False
    return True


def verify_password(password: str | None, *, admin_password: str, admin_token: str) -> tuple[bool, str | None]:
    """
    Check the dashboard password.

    Returns ``(True, admin_token)`` on a match, otherwise ``(False, None)``.
    The token is the static shared secret every admin request is checked
    against.
    """
    if password and admin_password and constant_time_compare(password, admin_password):
        return True, admin_token
    logger.warning("Rejected dashboard password attempt")
    return False, None


# ───────────────────────────── Store ─────────────────────────────────────────


def create_submission(data: Mapping[str, Any]) -> Submission:
    """
    Validate intake answers and persist a new submission.

    The package, status and timestamps are always assigned here; any values
    the caller sent for them are ignored.
    """
    intake = parse_intake(data)
    package = recommend_package(intake)

    fields: dict[str, Any] = {}
    if isinstance(intake, WebsiteIntake):
        fields = {"pages_count": intake.pages_count, "features": list(intake.features)}
    elif isinstance(intake, AppIntake):
        fields = {"platform": intake.platform or "", "auth_needed": intake.auth_needed}

    submission = Submission.objects.create(
        name=intake.name,
        email=intake.email,
        goal=intake.goal,
        budget=intake.budget,
        recommended_package=package,
        status=Submission.Status.NEW,
        **fields,
    )
    logger.info("Submission #%d created (%s, %s -> %s)", submission.pk, intake.goal, intake.budget, package)
    return submission


def update_status(pk: Any, status: str) -> None:
    """Set a submission's status. Raises ``NotFoundError`` for an unknown id."""
    if status not in Submission.Status.values:
        raise ValidationError({"status": [f"Must be one of: {', '.join(Submission.Status.values)}"]})

    try:
        updated = Submission.objects.filter(pk=pk).update(status=status, updated_at=timezone.now())
    except (TypeError, ValueError):
        updated = 0
    if not updated:
        raise NotFoundError(f"Submission {pk} not found")
    logger.info("Submission #%s marked as %s", pk, status)


# ───────────────────────────── Query ─────────────────────────────────────────


def filter_submissions(
    qs: models.QuerySet[Submission],
    *,
    status: str | None = None,
    search: str | None = None,
) -> models.QuerySet[Submission]:
    """Apply the dashboard filters. Unknown status values are ignored."""
    if status and status in Submission.Status.values:
        qs = qs.filter(status=status)
    if search:
        qs = qs.filter(models.Q(name__icontains=search) | models.Q(email__icontains=search))
    return qs.order_by("-created_at", "-id")


def list_submissions(
    credential: str | None,
    *,
    secret: str,
    status: str | None = None,
    search: str | None = None,
) -> list[Submission]:
    """Return submissions newest first, filtered by status and name/email search."""
    authorize(credential, secret)
    return list(filter_submissions(Submission.objects.all(), status=status, search=search))


def get_submission(credential: str | None, pk: Any, *, secret: str) -> Submission:
    """Fetch a single submission for an authorised caller."""
    authorize(credential, secret)
    try:
        return Submission.objects.get(pk=pk)
    except (Submission.DoesNotExist, TypeError, ValueError):
        raise NotFoundError(f"Submission {pk} not found") from None
