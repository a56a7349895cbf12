"""Tests for intake parsing and field validation."""

import pytest
from django.core.exceptions import ValidationError

from apps.leads.intake import (
    AppIntake,
    BrandingIntake,
    OtherIntake,
    WebsiteIntake,
    clean_auth_needed,
    clean_email,
    clean_features,
    clean_name,
    clean_pages_count,
    parse_intake,
)


def _errors(data: dict) -> dict[str, list[str]]:
    with pytest.raises(ValidationError) as exc_info:
        parse_intake(data)
    return exc_info.value.message_dict


class TestParseIntake:
    """Building the goal-specific variant from raw answers."""

    def test_website_variant(self) -> None:
        intake = parse_intake(
            {
                "name": "  Jo  ",
                "email": "jo@x.com",
                "goal": "Website",
                "budget": "2000-5000",
                "pages_count": 12,
                "features": ["payments", "blog", "blog"],
            }
        )
        assert isinstance(intake, WebsiteIntake)
        assert intake.name == "Jo"
        assert intake.pages_count == 12
        assert intake.features == ("blog", "payments")

    def test_app_variant_drops_website_fields(self) -> None:
        intake = parse_intake(
            {
                "name": "Jo",
                "email": "jo@x.com",
                "goal": "App",
                "budget": "500-2000",
                "platform": "iOS",
                "auth_needed": True,
                "pages_count": 15,
                "features": ["blog", "auth", "payments"],
            }
        )
        assert isinstance(intake, AppIntake)
        assert intake.platform == "iOS"
        assert intake.auth_needed is True
        assert not hasattr(intake, "pages_count")

    def test_invalid_fields_for_other_goals_are_ignored(self) -> None:
        """Conditional fields for another goal never cause a validation failure."""
        intake = parse_intake(
            {
                "name": "Jo",
                "email": "jo@x.com",
                "goal": "Branding",
                "budget": "<500",
                "pages_count": 999,
                "platform": "Windows Phone",
            }
        )
        assert isinstance(intake, BrandingIntake)

    def test_other_variant(self) -> None:
        intake = parse_intake({"name": "Jo", "email": "jo@x.com", "goal": "Other", "budget": "5000+"})
        assert isinstance(intake, OtherIntake)
        assert intake.goal == "Other"

    def test_missing_required_fields_are_all_reported(self) -> None:
        errors = _errors({})
        assert set(errors) == {"name", "email", "goal", "budget"}

    def test_blank_name_rejected(self) -> None:
        errors = _errors({"name": "   ", "email": "jo@x.com", "goal": "App", "budget": "<500"})
        assert errors == {"name": ["Name is required"]}

    @pytest.mark.parametrize("email", ["not-an-email", "jo@", "@x.com", "jo x@x.com"])
    def test_malformed_email_rejected(self, email) -> None:
        errors = _errors({"name": "Jo", "email": email, "goal": "App", "budget": "<500"})
        assert errors == {"email": ["Invalid email address"]}

    def test_unknown_goal_and_budget_rejected(self) -> None:
        errors = _errors({"name": "Jo", "email": "jo@x.com", "goal": "Game", "budget": "lots"})
        assert set(errors) == {"goal", "budget"}

    def test_bad_website_fields_reported_with_required_ones(self) -> None:
        errors = _errors({"name": "", "email": "jo@x.com", "goal": "Website", "budget": "<500", "pages_count": 0})
        assert set(errors) == {"name", "pages_count"}

    def test_server_assigned_keys_are_not_read(self) -> None:
        intake = parse_intake(
            {
                "name": "Jo",
                "email": "jo@x.com",
                "goal": "Other",
                "budget": "<500",
                "recommended_package": "Pro",
                "status": "Contacted",
            }
        )
        assert not hasattr(intake, "recommended_package")
        assert not hasattr(intake, "status")

    def test_camel_case_field_names_accepted(self) -> None:
        intake = parse_intake(
            {"name": "Jo", "email": "jo@x.com", "goal": "Website", "budget": "2000-5000", "pagesCount": 12}
        )
        assert intake.pages_count == 12

        intake = parse_intake(
            {"name": "Jo", "email": "jo@x.com", "goal": "App", "budget": "<500", "authNeeded": True}
        )
        assert intake.auth_needed is True

    def test_snake_case_wins_over_camel_case(self) -> None:
        intake = parse_intake(
            {
                "name": "Jo",
                "email": "jo@x.com",
                "goal": "Website",
                "budget": "<500",
                "pages_count": 3,
                "pagesCount": 15,
            }
        )
        assert intake.pages_count == 3

    def test_camel_case_values_are_validated(self) -> None:
        errors = _errors({"name": "Jo", "email": "jo@x.com", "goal": "Website", "budget": "<500", "pagesCount": 99})
        assert set(errors) == {"pages_count"}

    def test_infinite_pages_count_is_a_field_error(self) -> None:
        errors = _errors(
            {"name": "Jo", "email": "jo@x.com", "goal": "Website", "budget": "<500", "pages_count": float("inf")}
        )
        assert set(errors) == {"pages_count"}

    def test_over_long_name_and_email_rejected(self) -> None:
        email = "a" * 60 + "@" + ".".join(["b" * 60] * 4) + ".com"
        assert 254 < len(email) <= 320
        errors = _errors({"name": "x" * 300, "email": email, "goal": "Other", "budget": "<500"})
        assert set(errors) == {"name", "email"}
        assert errors["name"] == ["Must be at most 255 characters"]
        assert errors["email"] == ["Must be at most 254 characters"]


class TestFieldCleaners:
    """Individual field cleaners accept JSON values and HTML form strings."""

    @pytest.mark.parametrize(("raw", "expected"), [(None, None), ("", None), ("7", 7), (20, 20), (1.0, 1)])
    def test_pages_count_accepted(self, raw, expected) -> None:
        assert clean_pages_count(raw) == expected

    @pytest.mark.parametrize("raw", [0, 21, "abc", 2.5, True, float("inf"), float("-inf"), float("nan"), 1e999])
    def test_pages_count_rejected(self, raw) -> None:
        with pytest.raises(ValidationError):
            clean_pages_count(raw)

    def test_features_canonical_order(self) -> None:
        assert clean_features(["dashboard", "auth", "blog"]) == ("blog", "auth", "dashboard")

    def test_single_feature_string(self) -> None:
        assert clean_features("blog") == ("blog",)

    @pytest.mark.parametrize("raw", [["chat"], 5, {"blog": True}])
    def test_features_rejected(self, raw) -> None:
        with pytest.raises(ValidationError):
            clean_features(raw)

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(True, True), (False, False), ("true", True), ("false", False), ("", None), (None, None)],
    )
    def test_auth_needed(self, raw, expected) -> None:
        assert clean_auth_needed(raw) is expected

    def test_auth_needed_rejects_garbage(self) -> None:
        with pytest.raises(ValidationError):
            clean_auth_needed("maybe")

    def test_name_at_column_limit_accepted(self) -> None:
        assert clean_name("x" * 255) == "x" * 255

    @pytest.mark.parametrize("raw", [["a"], 5, {"first": "Jo"}])
    def test_name_must_be_text(self, raw) -> None:
        with pytest.raises(ValidationError) as exc_info:
            clean_name(raw)
        assert exc_info.value.messages == ["Must be text"]

    def test_email_must_be_text(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            clean_email(["jo@x.com"])
        assert exc_info.value.messages == ["Must be text"]
