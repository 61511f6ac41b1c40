from django.db import migrations, models


class Migration(migrations.Migration):

	initial = True

	dependencies = []

	operations = [
		migrations.CreateModel(
			name="Entity",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				(
					"entity_type",
					models.CharField(
						choices=[("buyer", "Buyer"), ("supplier", "Supplier"), ("partner", "Partner"), ("other", "Other")],
						default="buyer",
						max_length=20,
					),
				),
				("name", models.CharField(max_length=255)),
				("contact_person", models.CharField(blank=True, max_length=255)),
				("email", models.EmailField(blank=True, max_length=254)),
				("phone", models.CharField(blank=True, max_length=50)),
				("country", models.CharField(blank=True, max_length=100)),
				("address", models.TextField(blank=True)),
				("tax_id", models.CharField(blank=True, max_length=50, verbose_name="Tax ID")),
				(
					"verification_status",
					models.CharField(
						choices=[("unverified", "Unverified"), ("verified", "Verified")],
						default="unverified",
						max_length=20,
					),
				),
				("notes", models.TextField(blank=True)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
			],
			options={
				"ordering": ["name"],
				"verbose_name_plural": "entities",
			},
		),
	]
