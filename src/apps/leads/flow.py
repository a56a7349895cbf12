"""
Three-step apply form state machine.

The flow works on a plain dict draft so it can live in the session between
requests. The draft is only a convenience for the user; the stored
submission is always rebuilt and validated by ``create_submission``.
"""

from collections.abc import Mapping
from typing import Any

from django.core.exceptions import ValidationError

from .intake import clean_fields, fields_for_goal, parse_intake
from .models import Package
from .packages import recommend_package

STEP_BASIC = 1
STEP_DETAILS = 2
STEP_REVIEW = 3
FIRST_STEP = STEP_BASIC
LAST_STEP = STEP_REVIEW

STEP_TITLES = {
    STEP_BASIC: "Basic Info",
    STEP_DETAILS: "Details",
    STEP_REVIEW: "Review",
}

BASIC_FIELDS = ("name", "email", "goal")


def step_fields(step: int, goal: Any = None) -> tuple[str, ...]:
    """Fields collected on ``step``. Step 2 depends on the chosen goal."""
    if step == STEP_BASIC:
        return BASIC_FIELDS
    if step == STEP_DETAILS:
        return ("budget", *fields_for_goal(goal))
    return ()


class IntakeFlow:
    """Collects answers step by step and validates each step before moving on."""

    def __init__(self, draft: Mapping[str, Any] | None = None):
        draft = dict(draft or {})
        step = draft.pop("step", FIRST_STEP)
        self.step: int = step if step in STEP_TITLES else FIRST_STEP
        data = draft.get("data")
        self.data: dict[str, Any] = dict(data) if isinstance(data, dict) else {}
        self.errors: dict[str, str] = {}

    @property
    def goal(self) -> Any:
        return self.data.get("goal")

    @property
    def is_empty(self) -> bool:
        return not self.data and self.step == FIRST_STEP

    def update(self, data: Mapping[str, Any]) -> None:
        """Merge the current step's raw answers into the draft."""
        goal = data.get("goal", self.goal) if self.step == STEP_BASIC else self.goal
        for name in step_fields(self.step, goal):
            if name in data:
                self.data[name] = data[name]

    def validate_step(self, step: int | None = None) -> dict[str, str]:
        step = self.step if step is None else step
        _, errors = clean_fields(self.data, step_fields(step, self.goal))
        return errors

    def advance(self) -> bool:
        """Move forward if the current step is valid. Returns False (with ``errors`` set) otherwise."""
        self.errors = self.validate_step()
        if self.errors:
            return False
        self.step = min(self.step + 1, LAST_STEP)
        return True

    def back(self) -> None:
        self.errors = {}
        self.step = max(self.step - 1, FIRST_STEP)

    def payload(self) -> dict[str, Any]:
        """Answers to submit, keeping goal-specific fields only for their own goal."""
        keep = set(BASIC_FIELDS) | {"budget"} | set(fields_for_goal(self.goal))
        return {name: value for name, value in self.data.items() if name in keep}

    def preview_package(self) -> Package | None:
        """Live recommendation, or None until the draft is complete enough to classify."""
        try:
            intake = parse_intake(self.payload())
        except ValidationError:
            return None
        return recommend_package(intake)

    def snapshot(self) -> dict[str, Any]:
        return {"step": self.step, "data": dict(self.data)}
