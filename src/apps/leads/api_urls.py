"""API URL configuration for intake submissions."""

from django.urls import path

from . import api_views

app_name = "leads_api"

urlpatterns = [
    path("submissions/", api_views.APISubmissionListView.as_view(), name="submissions"),
    path("submissions/<int:pk>/", api_views.APISubmissionDetailView.as_view(), name="detail"),
    path("submissions/<int:pk>/status/", api_views.APISubmissionStatusView.as_view(), name="status"),
    path("auth/verify/", api_views.APIVerifyPasswordView.as_view(), name="verify_password"),
    path("auth/check/", api_views.APICheckTokenView.as_view(), name="check_token"),
]
