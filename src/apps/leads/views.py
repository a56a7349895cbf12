"""Leads views: the public apply flow and the admin dashboard."""

import io
import logging

from django.conf import settings
from django.contrib import messages
from django.core.exceptions import ValidationError
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme
from django.views import View
from django.views.generic import ListView, TemplateView

from . import analytics, services
from .exceptions import AuthorizationError, NotFoundError
from .export import export_filename, write_submissions_csv
from .flow import STEP_BASIC, STEP_DETAILS, STEP_REVIEW, STEP_TITLES, IntakeFlow, step_fields
from .models import PACKAGE_DESCRIPTIONS, Budget, Feature, Goal, Platform, Submission
from .notifications import send_submission_notification

logger = logging.getLogger(__name__)

DRAFT_SESSION_KEY = "apply_draft"
RESULT_SESSION_KEY = "apply_result"
TOKEN_SESSION_KEY = "admin_token"


class IndexView(TemplateView):
    """Public homepage."""

    template_name = "index.html"


# ───────────────────────────── Apply flow ────────────────────────────────────


def _form_answers(request: HttpRequest, fields: tuple[str, ...]) -> dict:
    """Pull the raw answers for ``fields`` out of a form POST."""
    answers = {}
    for name in fields:
        if name == "features":
            # Unticked checkboxes are simply absent from the POST.
            answers[name] = request.POST.getlist("features")
        elif name in request.POST:
            answers[name] = request.POST.get(name, "").strip()
    return answers


class ApplyView(View):
    """Three-step intake form. The draft is kept in the session between steps."""

    template_name = "apply/form.html"

    def _load(self, request: HttpRequest) -> IntakeFlow:
        return IntakeFlow(request.session.get(DRAFT_SESSION_KEY))

    def _save(self, request: HttpRequest, flow: IntakeFlow) -> None:
        request.session[DRAFT_SESSION_KEY] = flow.snapshot()

    def _render(self, request: HttpRequest, flow: IntakeFlow, *, error: str | None = None) -> HttpResponse:
        package = flow.preview_package() if flow.step == STEP_REVIEW else None
        context = {
            "flow": flow,
            "step": flow.step,
            "steps": STEP_TITLES,
            "data": flow.data,
            "errors": flow.errors,
            "error": error,
            "goal_choices": Goal.choices,
            "budget_choices": Budget.choices,
            "feature_choices": Feature.choices,
            "platform_choices": Platform.choices,
            "selected_features": flow.data.get("features") or [],
            "package": package,
            "package_description": PACKAGE_DESCRIPTIONS.get(package, "") if package else "",
        }
        return render(request, self.template_name, context)

    def get(self, request: HttpRequest) -> HttpResponse:
        flow = self._load(request)
        if flow.is_empty:
            analytics.track_apply_started()
        analytics.track_apply_step_viewed(flow.step)
        if flow.step == STEP_REVIEW:
            analytics.track_apply_recommendation_shown("review", flow.preview_package())
        return self._render(request, flow)

    def post(self, request: HttpRequest) -> HttpResponse:
        flow = self._load(request)
        action = request.POST.get("action", "next")

        if action == "back":
            flow.back()
            self._save(request, flow)
            return redirect("leads:apply")

        if action == "submit":
            return self._submit(request, flow)

        step = flow.step
        flow.update(_form_answers(request, step_fields(step, flow.goal)))
        if not flow.advance():
            analytics.track_apply_validation_error(step, list(flow.errors))
            self._save(request, flow)
            return self._render(request, flow)

        analytics.track_apply_step_completed(step)
        self._save(request, flow)
        return redirect("leads:apply")

    def _submit(self, request: HttpRequest, flow: IntakeFlow) -> HttpResponse:
        if flow.step != STEP_REVIEW:
            return redirect("leads:apply")

        try:
            submission = services.create_submission(flow.payload())
        except ValidationError as exc:
            analytics.track_apply_submitted_error("validation")
            flow.errors = {name: msgs[0] for name, msgs in exc.message_dict.items()}
            flow.step = STEP_BASIC if set(flow.errors) & set(step_fields(STEP_BASIC)) else STEP_DETAILS
            self._save(request, flow)
            return self._render(request, flow, error="Please correct the highlighted fields.")

        send_submission_notification(submission)
        analytics.track_apply_submitted_success(submission.recommended_package)

        request.session.pop(DRAFT_SESSION_KEY, None)
        request.session[RESULT_SESSION_KEY] = submission.pk
        return redirect("leads:apply_success")


class ApplySuccessView(View):
    """Thank-you page showing the recommended package."""

    template_name = "apply/success.html"

    def get(self, request: HttpRequest) -> HttpResponse:
        pk = request.session.get(RESULT_SESSION_KEY)
        submission = Submission.objects.filter(pk=pk).first() if pk else None
        if submission is None:
            return redirect("leads:apply")

        analytics.track_apply_recommendation_shown("success", submission.recommended_package)
        return render(request, self.template_name, {"submission": submission})


# ───────────────────────────── Dashboard ─────────────────────────────────────


class AdminTokenRequiredMixin:
    """
    Requires the shared admin token in the session.

    Any ``AuthorizationError`` raised while handling the request sends the
    user back to the login page to re-authenticate.
    """

    def dispatch(self, request, *args, **kwargs):
        self.admin_token = request.session.get(TOKEN_SESSION_KEY)
        try:
            services.authorize(self.admin_token, settings.LEADS_ADMIN_TOKEN)
            return super().dispatch(request, *args, **kwargs)
        except AuthorizationError:
            request.session.pop(TOKEN_SESSION_KEY, None)
            return redirect(f"{reverse('leads:dashboard_login')}?next={request.path}")


class DashboardLoginView(View):
    """Password check for the dashboard. Stores the admin token in the session."""

    template_name = "dashboard/login.html"

    def get(self, request: HttpRequest) -> HttpResponse:
        return render(request, self.template_name, {"next": request.GET.get("next", "")})

    def post(self, request: HttpRequest) -> HttpResponse:
        valid, token = services.verify_password(
            request.POST.get("password", ""),
            admin_password=settings.LEADS_ADMIN_PASSWORD,
            admin_token=settings.LEADS_ADMIN_TOKEN,
        )
        next_url = request.POST.get("next", "")
        if not valid:
            messages.error(request, "Invalid password.")
            return render(request, self.template_name, {"next": next_url}, status=401)

        request.session[TOKEN_SESSION_KEY] = token
        if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
            return redirect(next_url)
        return redirect("leads:dashboard")


class DashboardLogoutView(View):
    def post(self, request: HttpRequest) -> HttpResponse:
        request.session.pop(TOKEN_SESSION_KEY, None)
        messages.success(request, "Signed out.")
        return redirect("leads:dashboard_login")


class SubmissionListView(AdminTokenRequiredMixin, ListView):
    """List intake submissions with status and name/email filters."""

    template_name = "dashboard/list.html"
    context_object_name = "submissions"
    paginate_by = 20

    def get_queryset(self):
        return services.list_submissions(
            self.admin_token,
            secret=settings.LEADS_ADMIN_TOKEN,
            status=self.request.GET.get("status") or None,
            search=self.request.GET.get("q", "").strip() or None,
        )

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["total_count"] = Submission.objects.count()
        context["new_count"] = Submission.objects.filter(status=Submission.Status.NEW).count()
        context["contacted_count"] = Submission.objects.filter(status=Submission.Status.CONTACTED).count()
        context["current_status"] = self.request.GET.get("status", "all")
        context["search_query"] = self.request.GET.get("q", "")
        context["status_choices"] = Submission.Status.choices
        return context


class SubmissionToggleStatusView(AdminTokenRequiredMixin, View):
    """Flip a submission between New and Contacted."""

    def post(self, request: HttpRequest, pk: int) -> HttpResponse:
        status = request.POST.get("status", "")
        if not status:
            current = Submission.objects.filter(pk=pk).values_list("status", flat=True).first()
            status = Submission.Status.NEW if current == Submission.Status.CONTACTED else Submission.Status.CONTACTED

        try:
            services.update_status(pk, status)
        except NotFoundError:
            messages.error(request, "Submission not found.")
        except ValidationError:
            messages.error(request, "Invalid status.")
        else:
            messages.success(request, f"Marked as {status}.")

        next_url = request.POST.get("next", "")
        if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
            return redirect(next_url)
        return redirect("leads:dashboard")


class SubmissionExportView(AdminTokenRequiredMixin, View):
    """Export the currently filtered submissions as CSV."""

    def get(self, request: HttpRequest) -> HttpResponse:
        submissions = services.list_submissions(
            self.admin_token,
            secret=settings.LEADS_ADMIN_TOKEN,
            status=request.GET.get("status") or None,
            search=request.GET.get("q", "").strip() or None,
        )
        if not submissions:
            messages.error(request, "No submissions to export.")
            return redirect("leads:dashboard")

        buffer = io.StringIO()
        count = write_submissions_csv(submissions, buffer)
        logger.info("Exported %d submissions", count)

        response = HttpResponse(buffer.getvalue(), content_type="text/csv")
        response["Content-Disposition"] = f'attachment; filename="{export_filename()}"'
        return response

