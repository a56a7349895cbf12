"""Errors raised by the leads services."""

from django.core.exceptions import ObjectDoesNotExist, PermissionDenied


class AuthorizationError(PermissionDenied):
    """The caller's credential is missing or does not match the admin token."""


class NotFoundError(ObjectDoesNotExist):
    """No submission exists with the requested id."""
