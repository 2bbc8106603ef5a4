import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Project",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("name", models.CharField(max_length=255, verbose_name="Name")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("not_started", "Not Started"),
                            ("in_progress", "In Progress"),
                            ("completed", "Completed"),
                            ("on_hold", "On Hold"),
                        ],
                        db_index=True,
                        default="not_started",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("due_date", models.DateField(blank=True, null=True, verbose_name="Due Date")),
                ("client_name", models.CharField(blank=True, default="", max_length=255, verbose_name="Client Name")),
                ("client_contact", models.CharField(blank=True, default="", max_length=255, verbose_name="Client Contact")),
                ("history", models.TextField(blank=True, default="", verbose_name="History")),
                (
                    "total_reward",
                    models.PositiveIntegerField(
                        blank=True,
                        help_text="Whole currency units (JPY).  Empty counts as zero.",
                        null=True,
                        verbose_name="Total Reward",
                    ),
                ),
                ("reward_rules", models.TextField(blank=True, default="", verbose_name="Reward Rules")),
                (
                    "reward_distributed",
                    models.BooleanField(
                        default=False,
                        help_text="Once set, the reward distribution is frozen.",
                        verbose_name="Reward Distributed",
                    ),
                ),
                (
                    "assigned_users",
                    models.ManyToManyField(
                        blank=True,
                        related_name="assigned_projects",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Assigned Creators",
                    ),
                ),
                (
                    "director",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="directed_projects",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Director",
                    ),
                ),
                (
                    "sales",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="sold_projects",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Sales",
                    ),
                ),
            ],
            options={
                "verbose_name": "Project",
                "verbose_name_plural": "Projects",
                "ordering": ["id"],
                "permissions": [
                    ("can_manage_projects", "Admin: manage every project and its reward fields"),
                    ("can_mark_reward_distributed", "Mark a project's reward as distributed"),
                ],
            },
        ),
    ]
