"""Lead intake models."""

from typing import ClassVar

from django.db import models


class Goal(models.TextChoices):
    """What the prospective client wants built."""

    WEBSITE = "Website", "Website"
    APP = "App", "App"
    BRANDING = "Branding", "Branding"
    OTHER = "Other", "Other"


class Budget(models.TextChoices):
    """Declared budget ranges (USD)."""

    UNDER_500 = "<500", "Less than $500"
    FROM_500 = "500-2000", "$500 - $2,000"
    FROM_2000 = "2000-5000", "$2,000 - $5,000"
    OVER_5000 = "5000+", "$5,000+"


class Feature(models.TextChoices):
    """Website features a client can ask for."""

    BLOG = "blog", "Blog"
    PAYMENTS = "payments", "Payments"
    AUTH = "auth", "Authentication"
    DASHBOARD = "dashboard", "Dashboard"


class Platform(models.TextChoices):
    """Target platforms for app projects."""

    IOS = "iOS", "iOS"
    ANDROID = "Android", "Android"
    WEB = "Web", "Web"


class Package(models.TextChoices):
    """Service package tiers."""

    STARTER = "Starter", "Starter"
    GROWTH = "Growth", "Growth"
    PRO = "Pro", "Pro"


PACKAGE_DESCRIPTIONS = {
    Package.STARTER: "Perfect for small projects and simple requirements",
    Package.GROWTH: "Ideal for growing businesses with moderate complexity",
    Package.PRO: "Comprehensive solution for complex, enterprise-level needs",
}

MIN_PAGES = 1
MAX_PAGES = 20


class Submission(models.Model):
    """A prospective client's intake answers plus the server-computed package."""

    class Status(models.TextChoices):
        """Lead follow-up status."""

        NEW = "New", "New"
        CONTACTED = "Contacted", "Contacted"

    name = models.CharField("name", max_length=255)
    email = models.EmailField("email")
    goal = models.CharField("goal", max_length=20, choices=Goal.choices)

    # Website only
    pages_count = models.PositiveSmallIntegerField("number of pages", null=True, blank=True)
    features = models.JSONField("features", default=list, blank=True)

    # App only
    platform = models.CharField("platform", max_length=20, choices=Platform.choices, blank=True, default="")
    auth_needed = models.BooleanField("authentication needed", null=True, blank=True)

    budget = models.CharField("budget", max_length=20, choices=Budget.choices)

    # Server-assigned
    recommended_package = models.CharField(
        "recommended package",
        max_length=20,
        choices=Package.choices,
        editable=False,
    )
    status = models.CharField(
        "status",
        max_length=20,
        choices=Status.choices,
        default=Status.NEW,
        db_index=True,
    )
    created_at = models.DateTimeField("created", auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField("updated", auto_now=True)

    class Meta:
        ordering: ClassVar[list[str]] = ["-created_at", "-id"]
        verbose_name = "submission"
        verbose_name_plural = "submissions"

    def __str__(self) -> str:
        return f"{self.name} - {self.email} ({self.recommended_package})"

    @property
    def is_new(self) -> bool:
        return self.status == self.Status.NEW

    @property
    def package_description(self) -> str:
        return PACKAGE_DESCRIPTIONS.get(self.recommended_package, "")

    def to_dict(self) -> dict:
        """Serialise for the JSON API."""
        return {
            "id": self.pk,
            "name": self.name,
            "email": self.email,
            "goal": self.goal,
            "pages_count": self.pages_count,
            "features": list(self.features or []),
            "platform": self.platform or None,
            "auth_needed": self.auth_needed,
            "budget": self.budget,
            "recommended_package": self.recommended_package,
            "status": self.status,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
