"""Pytest configuration and shared fixtures for the intake tests."""

from datetime import timedelta

import pytest
from django.test import Client
from django.utils import timezone

from apps.leads.models import Submission
from apps.leads.services import create_submission

ADMIN_TOKEN = "test-admin-token"  # matches config.settings.test
ADMIN_PASSWORD = "test-password"


@pytest.fixture
def admin_token(settings) -> str:
    """The configured dashboard token."""
    settings.LEADS_ADMIN_TOKEN = ADMIN_TOKEN
    settings.LEADS_ADMIN_PASSWORD = ADMIN_PASSWORD
    return ADMIN_TOKEN


@pytest.fixture
def make_submission(db):
    """Factory creating submissions through the real store, optionally backdated."""

    def _make(minutes_ago: int | None = None, **overrides) -> Submission:
        data = {
            "name": "Jo Example",
            "email": "jo@example.com",
            "goal": "Website",
            "budget": "2000-5000",
            "pages_count": 5,
        }
        data.update(overrides)
        submission = create_submission(data)
        if minutes_ago is not None:
            created = timezone.now() - timedelta(minutes=minutes_ago)
            Submission.objects.filter(pk=submission.pk).update(created_at=created, updated_at=created)
            submission.refresh_from_db()
        return submission

    return _make


@pytest.fixture
def leads(make_submission) -> list[Submission]:
    """Three submissions: Ada (newest, contacted), Bob, Cy (oldest)."""
    ada = make_submission(name="Ada Lovelace", email="ada@analytical.io", minutes_ago=1)
    bob = make_submission(name="Bob Builder", email="bob@build.co", goal="App", budget="500-2000", minutes_ago=10)
    cy = make_submission(name="Cy Twombly", email="cy@ADA-art.org", goal="Branding", budget="<500", minutes_ago=20)
    Submission.objects.filter(pk=ada.pk).update(status=Submission.Status.CONTACTED)
    ada.refresh_from_db()
    return [ada, bob, cy]


@pytest.fixture
def dashboard_client(db, admin_token) -> Client:
    """Client whose session already holds the admin token."""
    client = Client()
    session = client.session
    session["admin_token"] = admin_token
    session.save()
    return client
