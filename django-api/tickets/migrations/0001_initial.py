from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Ticket",
            fields=[
                (
                    "id",
                    models.CharField(
                        editable=False, max_length=64, primary_key=True, serialize=False
                    ),
                ),
                ("holder_id", models.CharField(max_length=32)),
                (
                    "ticket_class",
                    models.CharField(
                        choices=[
                            ("limited", "Limited"),
                            ("daily", "Daily"),
                            ("annual", "Annual"),
                        ],
                        max_length=16,
                    ),
                ),
                ("issued_at", models.DateTimeField()),
                ("valid_until", models.DateTimeField(blank=True, null=True)),
                ("remaining_uses", models.PositiveIntegerField(blank=True, null=True)),
            ],
            options={
                "ordering": ["-issued_at"],
                "indexes": [
                    models.Index(fields=["holder_id"], name="tickets_tic_holder__idx"),
                    models.Index(fields=["-issued_at"], name="tickets_tic_issued__idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=(
                            models.Q(
                                ticket_class="limited",
                                remaining_uses__isnull=False,
                                valid_until__isnull=True,
                            )
                            | models.Q(
                                ticket_class__in=["daily", "annual"],
                                remaining_uses__isnull=True,
                                valid_until__isnull=False,
                            )
                        ),
                        name="ticket_policy_fields_match_class",
                    ),
                ],
            },
        ),
    ]
