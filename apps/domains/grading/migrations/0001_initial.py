# PATH: apps/domains/grading/migrations/0001_initial.py

import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("courses", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="CourseGradeWeights",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("assignment_weight", models.PositiveSmallIntegerField(default=40)),
                ("activity_weight", models.PositiveSmallIntegerField(default=30)),
                ("exam_weight", models.PositiveSmallIntegerField(default=30)),
                (
                    "course",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="grade_weights",
                        to="courses.course",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "course grade weights",
            },
        ),
    ]
