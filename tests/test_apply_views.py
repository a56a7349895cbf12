"""Tests for the public pages and the three-step apply flow."""

import logging

import pytest
from django.core import mail
from django.test import Client
from django.urls import reverse

from apps.leads.models import Submission


def _events(caplog) -> list[str]:
    return [r.event for r in caplog.records if hasattr(r, "event")]


@pytest.fixture
def analytics_log(caplog):
    caplog.set_level(logging.INFO, logger="leads.analytics")
    logger = logging.getLogger("leads.analytics")
    logger.addHandler(caplog.handler)
    yield caplog
    logger.removeHandler(caplog.handler)


def _complete_basic(client: Client, goal: str = "Website") -> None:
    client.post(reverse("leads:apply"), {"name": "Jo", "email": "jo@x.com", "goal": goal, "action": "next"})


@pytest.mark.django_db
class TestPublicViews:
    """Public-facing pages."""

    def test_index_page_loads(self, client: Client) -> None:
        response = client.get(reverse("leads:index"))
        assert response.status_code == 200

    def test_apply_page_loads_on_first_step(self, client: Client) -> None:
        response = client.get(reverse("leads:apply"))
        assert response.status_code == 200
        assert response.context["step"] == 1

    def test_success_without_submission_redirects(self, client: Client) -> None:
        response = client.get(reverse("leads:apply_success"))
        assert response.status_code == 302
        assert response.url == reverse("leads:apply")


@pytest.mark.django_db
class TestApplyFlow:
    """Walking the form through the session-backed draft."""

    def test_invalid_first_step_shows_errors(self, client: Client) -> None:
        response = client.post(reverse("leads:apply"), {"name": "", "email": "bad", "action": "next"})
        assert response.status_code == 200
        assert response.context["step"] == 1
        assert set(response.context["errors"]) == {"name", "email", "goal"}

    def test_full_website_flow(self, client: Client, settings) -> None:
        settings.LEADS_NOTIFICATION_EMAILS = ["team@example.com"]
        _complete_basic(client)
        assert client.session["apply_draft"]["step"] == 2

        client.post(
            reverse("leads:apply"),
            {"budget": "2000-5000", "pages_count": "4", "features": ["blog", "auth", "payments"], "action": "next"},
        )
        review = client.get(reverse("leads:apply"))
        assert review.context["step"] == 3
        assert review.context["package"] == "Pro"

        response = client.post(reverse("leads:apply"), {"action": "submit"})
        assert response.status_code == 302
        assert response.url == reverse("leads:apply_success")

        submission = Submission.objects.get()
        assert submission.recommended_package == "Pro"
        assert submission.features == ["blog", "payments", "auth"]
        assert submission.pages_count == 4
        assert "apply_draft" not in client.session
        assert len(mail.outbox) == 1

        success = client.get(reverse("leads:apply_success"))
        assert success.status_code == 200
        assert success.context["submission"] == submission

    def test_app_flow_stores_app_fields(self, client: Client) -> None:
        _complete_basic(client, goal="App")
        client.post(
            reverse("leads:apply"),
            {"budget": "500-2000", "platform": "iOS", "auth_needed": "false", "action": "next"},
        )
        client.post(reverse("leads:apply"), {"action": "submit"})
        submission = Submission.objects.get()
        assert submission.recommended_package == "Growth"
        assert submission.platform == "iOS"
        assert submission.auth_needed is False
        assert submission.features == []

    def test_back_keeps_answers(self, client: Client) -> None:
        _complete_basic(client)
        client.post(reverse("leads:apply"), {"action": "back"})
        response = client.get(reverse("leads:apply"))
        assert response.context["step"] == 1
        assert response.context["data"]["name"] == "Jo"

    def test_submit_before_review_does_nothing(self, client: Client) -> None:
        _complete_basic(client)
        response = client.post(reverse("leads:apply"), {"action": "submit"})
        assert response.status_code == 302
        assert Submission.objects.count() == 0

    def test_tampered_draft_is_revalidated_on_submit(self, client: Client) -> None:
        session = client.session
        session["apply_draft"] = {"step": 3, "data": {"name": "Jo", "email": "not-an-email", "goal": "Other"}}
        session.save()
        response = client.post(reverse("leads:apply"), {"action": "submit"})
        assert response.status_code == 200
        assert response.context["step"] == 1
        assert set(response.context["errors"]) == {"email", "budget"}
        assert Submission.objects.count() == 0

    def test_events_emitted_without_pii(self, client: Client, analytics_log) -> None:
        client.get(reverse("leads:apply"))
        client.post(reverse("leads:apply"), {"name": "Jo", "email": "bad", "action": "next"})
        _complete_basic(client, goal="Branding")
        client.post(reverse("leads:apply"), {"budget": "<500", "action": "next"})
        client.get(reverse("leads:apply"))
        client.post(reverse("leads:apply"), {"action": "submit"})

        assert _events(analytics_log) == [
            "apply_started",
            "apply_step_viewed",
            "apply_validation_error",
            "apply_step_completed",
            "apply_step_completed",
            "apply_step_viewed",
            "apply_recommendation_shown",
            "apply_submitted_success",
        ]
        for record in analytics_log.records:
            if not hasattr(record, "event"):
                continue
            assert "jo@x.com" not in record.getMessage()
            assert "Jo" not in str(record.properties)
