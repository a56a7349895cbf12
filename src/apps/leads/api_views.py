"""JSON API for intake submissions and the admin dashboard."""

import json
import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from . import services
from .exceptions import AuthorizationError, NotFoundError
from .notifications import send_submission_notification

logger = logging.getLogger(__name__)

UNAUTHORIZED = {"error": "Unauthorized"}


def get_bearer_token(request: HttpRequest) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    return auth_header[7:].strip() or None


def _json_body(request: HttpRequest) -> dict | None:
    try:
        data = json.loads(request.body) if request.body else {}
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None


@method_decorator(csrf_exempt, name="dispatch")
class APISubmissionListView(View):
    """API: create a submission (public) or list submissions (admin)."""

    def post(self, request: HttpRequest) -> JsonResponse:
        data = _json_body(request)
        if data is None:
            return JsonResponse({"error": "Invalid JSON body"}, status=400)

        try:
            submission = services.create_submission(data)
        except ValidationError as exc:
            details = {name: msgs[0] for name, msgs in exc.message_dict.items()}
            return JsonResponse({"error": "Validation failed", "details": details}, status=400)

        send_submission_notification(submission)
        return JsonResponse({"status": True, "data": submission.to_dict()}, status=201)

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            submissions = services.list_submissions(
                get_bearer_token(request),
                secret=settings.LEADS_ADMIN_TOKEN,
                status=request.GET.get("status") or None,
                search=request.GET.get("q") or request.GET.get("search") or None,
            )
        except AuthorizationError:
            logger.warning("Unauthorized submission list request")
            if settings.LEADS_MASK_UNAUTHORIZED_LIST:
                # Clients treat an empty list without an error as "sign in again".
                return JsonResponse({"status": True, "data": []})
            return JsonResponse(UNAUTHORIZED, status=401)

        return JsonResponse({"status": True, "data": [s.to_dict() for s in submissions]})


@method_decorator(csrf_exempt, name="dispatch")
class APISubmissionDetailView(View):
    """API: fetch one submission."""

    def get(self, request: HttpRequest, pk: int) -> JsonResponse:
        try:
            submission = services.get_submission(get_bearer_token(request), pk, secret=settings.LEADS_ADMIN_TOKEN)
        except AuthorizationError:
            return JsonResponse(UNAUTHORIZED, status=401)
        except NotFoundError:
            return JsonResponse({"error": "Submission not found"}, status=404)
        return JsonResponse({"status": True, "data": submission.to_dict()})


@method_decorator(csrf_exempt, name="dispatch")
class APISubmissionStatusView(View):
    """API: set a submission's status."""

    def post(self, request: HttpRequest, pk: int) -> JsonResponse:
        try:
            services.authorize(get_bearer_token(request), settings.LEADS_ADMIN_TOKEN)
        except AuthorizationError:
            return JsonResponse(UNAUTHORIZED, status=401)

        data = _json_body(request)
        if data is None:
            return JsonResponse({"error": "Invalid JSON body"}, status=400)

        try:
            services.update_status(pk, str(data.get("status", "")))
        except ValidationError as exc:
            details = {name: msgs[0] for name, msgs in exc.message_dict.items()}
            return JsonResponse({"error": "Validation failed", "details": details}, status=400)
        except NotFoundError:
            return JsonResponse({"error": "Submission not found"}, status=404)

        return JsonResponse({"status": True})


@method_decorator(csrf_exempt, name="dispatch")
class APIVerifyPasswordView(View):
    """API: exchange the dashboard password for the admin token."""

    def post(self, request: HttpRequest) -> JsonResponse:
        data = _json_body(request) or {}
        valid, token = services.verify_password(
            str(data.get("password", "")),
            admin_password=settings.LEADS_ADMIN_PASSWORD,
            admin_token=settings.LEADS_ADMIN_TOKEN,
        )
        if valid:
            return JsonResponse({"valid": True, "token": token})
        return JsonResponse({"valid": False})


@method_decorator(csrf_exempt, name="dispatch")
class APICheckTokenView(View):
    """API: report whether a token is still the admin token."""

    def post(self, request: HttpRequest) -> JsonResponse:
        data = _json_body(request) or {}
        token = data.get("token") or get_bearer_token(request)
        return JsonResponse({"valid": services.check_token(token, secret=settings.LEADS_ADMIN_TOKEN)})
