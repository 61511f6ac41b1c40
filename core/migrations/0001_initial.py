from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

	initial = True

	dependencies = [
		migrations.swappable_dependency(settings.AUTH_USER_MODEL),
	]

	operations = [
		migrations.CreateModel(
			name="Company",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("legal_name", models.CharField(max_length=255)),
				("trade_name", models.CharField(blank=True, max_length=255)),
				("address", models.CharField(blank=True, max_length=255)),
				("city", models.CharField(blank=True, max_length=100)),
				("state", models.CharField(blank=True, max_length=100)),
				("country", models.CharField(blank=True, default="India", max_length=100)),
				("pincode", models.CharField(blank=True, max_length=20)),
				("email", models.EmailField(blank=True, max_length=254)),
				("phone", models.CharField(blank=True, max_length=50)),
				("website", models.CharField(blank=True, max_length=255)),
				("gstin", models.CharField(blank=True, max_length=30, verbose_name="GSTIN")),
				("iec", models.CharField(blank=True, max_length=30, verbose_name="IEC")),
				("logo", models.FileField(blank=True, upload_to="company/")),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
			],
			options={
				"verbose_name_plural": "companies",
			},
		),
		migrations.CreateModel(
			name="CompanyBank",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("bank_name", models.CharField(max_length=255)),
				("account_name", models.CharField(blank=True, max_length=255)),
				("account_number", models.CharField(max_length=50)),
				("swift_code", models.CharField(blank=True, max_length=20)),
				("ifsc_code", models.CharField(blank=True, max_length=20, verbose_name="IFSC")),
				("ad_code", models.CharField(blank=True, max_length=20, verbose_name="AD code")),
				("branch_name", models.CharField(blank=True, max_length=255)),
				("is_default", models.BooleanField(default=False)),
				(
					"company",
					models.ForeignKey(
						on_delete=django.db.models.deletion.CASCADE,
						related_name="banks",
						to="core.company",
					),
				),
			],
			options={
				"ordering": ["-is_default", "bank_name"],
			},
		),
		migrations.CreateModel(
			name="DocumentSequence",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("prefix", models.CharField(max_length=10)),
				("day", models.DateField()),
				("last_number", models.PositiveIntegerField(default=0)),
			],
		),
		migrations.AddConstraint(
			model_name="documentsequence",
			constraint=models.UniqueConstraint(fields=("prefix", "day"), name="core_documentsequence_prefix_day"),
		),
		migrations.CreateModel(
			name="AuditEvent",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				(
					"action",
					models.CharField(
						choices=[
							("status_changed", "Status changed"),
							("document_revised", "Document revised"),
							("document_converted", "Document converted"),
							("document_duplicated", "Document duplicated"),
							("document_uploaded", "Document uploaded"),
							("payment_recorded", "Payment recorded"),
							("bulk_upload", "Bulk upload"),
						],
						max_length=50,
					),
				),
				("entity_type", models.CharField(max_length=50)),
				("entity_id", models.PositiveIntegerField(blank=True, null=True)),
				("summary", models.CharField(blank=True, max_length=255)),
				("meta", models.JSONField(blank=True, default=dict)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				(
					"actor",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						to=settings.AUTH_USER_MODEL,
					),
				),
			],
			options={
				"ordering": ["-created_at"],
			},
		),
	]
