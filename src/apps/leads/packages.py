"""Package recommendation rules."""

from collections.abc import Collection

from .intake import Intake, WebsiteIntake
from .models import Budget, Goal, Package

COMPLEX_SITE_PAGES = 10
COMPLEX_SITE_FEATURES = 3


def determine_package(
    goal: str,
    budget: str,
    features: Collection[str] | None = None,
    pages_count: int | None = None,
) -> Package:
    """
    Map intake answers to a package tier. First matching rule wins.

    Never fails: an unrecognised budget falls back to Growth.
    """
    if budget == Budget.UNDER_500:
        return Package.STARTER
    if budget == Budget.FROM_500:
        if goal in (Goal.BRANDING, Goal.OTHER):
            return Package.STARTER
        return Package.GROWTH
    if budget == Budget.FROM_2000:
        if goal == Goal.WEBSITE and pages_count and pages_count > COMPLEX_SITE_PAGES:
            return Package.PRO
        if goal == Goal.WEBSITE and features and len(features) >= COMPLEX_SITE_FEATURES:
            return Package.PRO
        return Package.GROWTH
    if budget == Budget.OVER_5000:
        return Package.PRO
    return Package.GROWTH


def recommend_package(intake: Intake) -> Package:
    """Recommended package for a parsed intake. Used for both preview and storage."""
    if isinstance(intake, WebsiteIntake):
        return determine_package(intake.goal, intake.budget, intake.features, intake.pages_count)
    # App platform and auth answers do not affect the tier.
    return determine_package(intake.goal, intake.budget)
