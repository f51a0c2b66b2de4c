from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Site",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("slug", models.SlugField(max_length=190, unique=True)),
                ("title", models.CharField(max_length=255)),
                ("theme", models.CharField(max_length=190)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "cms_sites",
                "ordering": ["slug"],
                "indexes": [
                    models.Index(fields=["theme"], name="idx_site_theme"),
                ],
            },
        ),
    ]
