"""Leads admin configuration."""

from django.contrib import admin

from .models import Submission


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    """Admin interface for intake submissions."""

    list_display = ("name", "email", "goal", "budget", "recommended_package", "status", "created_at")
    list_filter = ("status", "recommended_package", "goal", "budget", "created_at")
    search_fields = ("name", "email")
    readonly_fields = ("recommended_package", "created_at", "updated_at")
    ordering = ("-created_at",)

    def has_delete_permission(self, request, obj=None) -> bool:
        return False
