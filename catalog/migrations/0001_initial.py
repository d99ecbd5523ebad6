from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Item",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=50, unique=True)),
                ("ingredients", models.TextField(blank=True, default="")),
                (
                    "item_type",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        default="",
                        help_text="Category tag, e.g. entree / drinks / sides.",
                        max_length=40,
                    ),
                ),
                ("price", models.DecimalField(decimal_places=2, max_digits=8)),
                ("description", models.TextField(blank=True, default="")),
            ],
            options={
                "ordering": ("id",),
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("price__gte", 0)),
                        name="catalog_item_price_non_negative",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Store",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("store_id", models.CharField(max_length=20, unique=True)),
                ("address", models.CharField(blank=True, default="", max_length=200)),
                ("city", models.CharField(blank=True, default="", max_length=100)),
                ("state", models.CharField(blank=True, default="", max_length=50)),
                ("is_open", models.BooleanField(db_index=True, default=True)),
                ("review_score", models.DecimalField(blank=True, decimal_places=1, max_digits=3, null=True)),
            ],
            options={
                "ordering": ("store_id",),
            },
        ),
    ]
