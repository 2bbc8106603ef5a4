import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("projects", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="RewardDistribution",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("operation_percentage", models.PositiveSmallIntegerField(default=10, editable=False, verbose_name="Operations %")),
                ("sales_percentage", models.PositiveSmallIntegerField(default=15, verbose_name="Sales %")),
                ("director_percentage", models.PositiveSmallIntegerField(default=25, verbose_name="Director %")),
                ("creator_percentage", models.PositiveSmallIntegerField(default=50, verbose_name="Creator %")),
                (
                    "project",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reward_distribution",
                        to="projects.project",
                        verbose_name="Project",
                    ),
                ),
            ],
            options={
                "verbose_name": "Reward Distribution",
                "verbose_name_plural": "Reward Distributions",
                "permissions": [
                    ("can_manage_reward_distribution", "Create or overwrite a project's reward distribution"),
                    ("can_view_all_rewards", "View any member's reward summary"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            operation_percentage=100
                            - models.F("sales_percentage")
                            - models.F("director_percentage")
                            - models.F("creator_percentage")
                        ),
                        name="reward_distribution_sums_to_100",
                    ),
                ],
            },
        ),
    ]
