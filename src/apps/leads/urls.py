"""Leads URL configuration."""

from django.urls import path

from . import views

app_name = "leads"

urlpatterns = [
    # Public pages
    path("", views.IndexView.as_view(), name="index"),
    path("apply/", views.ApplyView.as_view(), name="apply"),
    path("apply/success/", views.ApplySuccessView.as_view(), name="apply_success"),
    # Dashboard
    path("dashboard/", views.SubmissionListView.as_view(), name="dashboard"),
    path("dashboard/export/", views.SubmissionExportView.as_view(), name="dashboard_export"),
    path(
        "dashboard/<int:pk>/toggle-status/",
        views.SubmissionToggleStatusView.as_view(),
        name="dashboard_toggle_status",
    ),
    path("dashboard/login/", views.DashboardLoginView.as_view(), name="dashboard_login"),
    path("dashboard/logout/", views.DashboardLogoutView.as_view(), name="dashboard_logout"),
]
