from django.contrib import admin

from .models import Project


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "status", "total_reward",
                    "reward_distributed", "director", "sales")
    list_filter = ("status", "reward_distributed")
    search_fields = ("name", "client_name")
    filter_horizontal = ("assigned_users",)
