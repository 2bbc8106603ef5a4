from django.contrib import admin

from .models import RewardDistribution


@admin.register(RewardDistribution)
class RewardDistributionAdmin(admin.ModelAdmin):
    list_display = ("id", "project", "operation_percentage", "sales_percentage",
                    "director_percentage", "creator_percentage", "updated_at")
    readonly_fields = ("operation_percentage",)
    search_fields = ("project__name",)
