"""
Intake answers as a tagged union keyed by goal.

Raw answers arrive either as a JSON body or as HTML form values. Each field
has a cleaner that turns the raw value into its typed form or reports a
message. ``parse_intake`` runs every cleaner that applies to the chosen goal
and builds the matching variant; goal-specific fields for other goals are
dropped without complaint.
"""

import math
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from django.core.exceptions import ValidationError
from django.core.validators import MaxLengthValidator, validate_email

from .models import MAX_PAGES, MIN_PAGES, Budget, Feature, Goal, Platform, Submission

REQUIRED_FIELDS = ("name", "email", "goal", "budget")

# camelCase spellings some clients send. The snake_case key wins when both are present.
FIELD_ALIASES = {
    "pagesCount": "pages_count",
    "authNeeded": "auth_needed",
}

NAME_MAX_LENGTH = Submission._meta.get_field("name").max_length
EMAIL_MAX_LENGTH = Submission._meta.get_field("email").max_length

GOAL_FIELDS: dict[str, tuple[str, ...]] = {
    Goal.WEBSITE: ("pages_count", "features"),
    Goal.APP: ("platform", "auth_needed"),
    Goal.BRANDING: (),
    Goal.OTHER: (),
}


@dataclass(frozen=True)
class Intake:
    """Answers shared by every goal."""

    goal: ClassVar[str]

    name: str
    email: str
    budget: str


@dataclass(frozen=True)
class WebsiteIntake(Intake):
    goal: ClassVar[str] = Goal.WEBSITE

    pages_count: int | None = None
    features: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class AppIntake(Intake):
    goal: ClassVar[str] = Goal.APP

    platform: str | None = None
    auth_needed: bool | None = None


@dataclass(frozen=True)
class BrandingIntake(Intake):
    goal: ClassVar[str] = Goal.BRANDING


@dataclass(frozen=True)
class OtherIntake(Intake):
    goal: ClassVar[str] = Goal.OTHER


INTAKE_TYPES: dict[str, type[Intake]] = {
    Goal.WEBSITE: WebsiteIntake,
    Goal.APP: AppIntake,
    Goal.BRANDING: BrandingIntake,
    Goal.OTHER: OtherIntake,
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _clean_text(value: Any, max_length: int) -> str:
    if not isinstance(value, str):
        raise ValidationError("Must be text")
    text = value.strip()
    try:
        MaxLengthValidator(max_length)(text)
    except ValidationError:
        raise ValidationError(f"Must be at most {max_length} characters") from None
    return text


def clean_name(value: Any) -> str:
    if _is_blank(value):
        raise ValidationError("Name is required")
    return _clean_text(value, NAME_MAX_LENGTH)


def clean_email(value: Any) -> str:
    if _is_blank(value):
        raise ValidationError("Email is required")
    email = _clean_text(value, EMAIL_MAX_LENGTH)
    try:
        validate_email(email)
    except ValidationError:
        raise ValidationError("Invalid email address") from None
    return email


def clean_goal(value: Any) -> str:
    if _is_blank(value):
        raise ValidationError("Please select a goal")
    if value not in Goal.values:
        raise ValidationError(f"Must be one of: {', '.join(Goal.values)}")
    return Goal(value)


def clean_budget(value: Any) -> str:
    if _is_blank(value):
        raise ValidationError("Please select a budget range")
    if value not in Budget.values:
        raise ValidationError(f"Must be one of: {', '.join(Budget.values)}")
    return Budget(value)


def clean_pages_count(value: Any) -> int | None:
    if _is_blank(value):
        return None
    if isinstance(value, bool) or (isinstance(value, float) and not math.isfinite(value)):
        raise ValidationError("Must be a whole number")
    try:
        pages = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError("Must be a whole number") from None
    if isinstance(value, float) and pages != value:
        raise ValidationError("Must be a whole number")
    if not MIN_PAGES <= pages <= MAX_PAGES:
        raise ValidationError(f"Must be between {MIN_PAGES} and {MAX_PAGES}")
    return pages


def clean_features(value: Any) -> tuple[str, ...]:
    """Return the requested features, de-duplicated, in canonical order."""
    if _is_blank(value):
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, Iterable) or isinstance(value, Mapping):
        raise ValidationError("Must be a list of features")
    requested = set()
    for item in value:
        if item not in Feature.values:
            raise ValidationError(f"Unknown feature '{item}'. Allowed: {', '.join(Feature.values)}")
        requested.add(item)
    return tuple(f for f in Feature.values if f in requested)


def clean_platform(value: Any) -> str | None:
    if _is_blank(value):
        return None
    if value not in Platform.values:
        raise ValidationError(f"Must be one of: {', '.join(Platform.values)}")
    return Platform(value)


def clean_auth_needed(value: Any) -> bool | None:
    if _is_blank(value):
        return None
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in ("true", "yes", "1", "on"):
        return True
    if lowered in ("false", "no", "0", "off"):
        return False
    raise ValidationError("Must be true or false")


FIELD_CLEANERS: dict[str, Callable[[Any], Any]] = {
    "name": clean_name,
    "email": clean_email,
    "goal": clean_goal,
    "budget": clean_budget,
    "pages_count": clean_pages_count,
    "features": clean_features,
    "platform": clean_platform,
    "auth_needed": clean_auth_needed,
}


def clean_fields(data: Mapping[str, Any], names: Iterable[str]) -> tuple[dict[str, Any], dict[str, str]]:
    """Run the cleaners for ``names``. Returns ``(cleaned, errors)``."""
    cleaned: dict[str, Any] = {}
    errors: dict[str, str] = {}
    for name in names:
        try:
            cleaned[name] = FIELD_CLEANERS[name](data.get(name))
        except ValidationError as exc:
            errors[name] = exc.messages[0]
    return cleaned, errors


def fields_for_goal(goal: Any) -> tuple[str, ...]:
    """Goal-specific fields that apply to ``goal`` (none for unknown goals)."""
    return GOAL_FIELDS.get(goal, ())


def resolve_aliases(data: Mapping[str, Any]) -> dict[str, Any]:
    """Copy ``data`` with camelCase field names mapped to their snake_case form."""
    resolved = dict(data)
    for alias, name in FIELD_ALIASES.items():
        if alias in resolved:
            value = resolved.pop(alias)
            resolved.setdefault(name, value)
    return resolved


def parse_intake(data: Mapping[str, Any]) -> Intake:
    """
    Validate raw answers and build the variant for the chosen goal.

    Raises ``ValidationError`` carrying a message per offending field.
    Server-assigned keys in ``data`` are never read.
    """
    data = resolve_aliases(data)
    cleaned, errors = clean_fields(data, REQUIRED_FIELDS)
    goal = cleaned.get("goal")
    extra, extra_errors = clean_fields(data, fields_for_goal(goal))
    errors.update(extra_errors)
    if errors:
        raise ValidationError({name: [message] for name, message in errors.items()})

    intake_type = INTAKE_TYPES[goal]
    return intake_type(
        name=cleaned["name"],
        email=cleaned["email"],
        budget=cleaned["budget"],
        **extra,
    )
