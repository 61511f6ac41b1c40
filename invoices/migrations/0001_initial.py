from decimal import Decimal

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

	initial = True

	dependencies = [
		("catalog", "0001_initial"),
		("core", "0001_initial"),
		("entities", "0001_initial"),
		("sales", "0001_initial"),
		migrations.swappable_dependency(settings.AUTH_USER_MODEL),
	]

	operations = [
		migrations.CreateModel(
			name="ProformaInvoice",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("number", models.CharField(blank=True, db_index=True, max_length=40)),
				("version", models.PositiveIntegerField(default=1)),
				("currency", models.CharField(default="USD", max_length=10)),
				("conversion_rate", models.DecimalField(decimal_places=6, default=Decimal("1.000000"), max_digits=14)),
				("total_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
				("notes", models.TextField(blank=True)),
				("approved_at", models.DateTimeField(blank=True, null=True)),
				("rejected_at", models.DateTimeField(blank=True, null=True)),
				("rejection_reason", models.TextField(blank=True, default="")),
				("cancelled_at", models.DateTimeField(blank=True, null=True)),
				("cancel_reason", models.TextField(blank=True, default="")),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
				(
					"created_by",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="+",
						to=settings.AUTH_USER_MODEL,
					),
				),
				(
					"approved_by",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="+",
						to=settings.AUTH_USER_MODEL,
					),
				),
				(
					"rejected_by",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="+",
						to=settings.AUTH_USER_MODEL,
					),
				),
				(
					"cancelled_by",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="+",
						to=settings.AUTH_USER_MODEL,
					),
				),
				(
					"revised_from",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="revisions",
						to="invoices.proformainvoice",
					),
				),
				(
					"status",
					models.CharField(
						choices=[
							("draft", "Draft"),
							("pending", "Pending Approval"),
							("approved", "Approved"),
							("rejected", "Rejected"),
							("revised", "Revised"),
							("converted", "Converted"),
							("cancelled", "Cancelled"),
						],
						default="draft",
						max_length=20,
					),
				),
				("pi_date", models.DateField(default=django.utils.timezone.localdate)),
				("valid_until", models.DateField(blank=True, null=True)),
				("incoterm", models.CharField(blank=True, max_length=20)),
				("incoterm_place", models.CharField(blank=True, max_length=120)),
				("payment_terms", models.CharField(blank=True, max_length=255)),
				("port_of_loading", models.CharField(blank=True, max_length=120)),
				("port_of_discharge", models.CharField(blank=True, max_length=120)),
				("final_destination", models.CharField(blank=True, max_length=120)),
				("lut_number", models.CharField(blank=True, max_length=60, verbose_name="LUT number")),
				(
					"quote",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="proformas",
						to="sales.quote",
					),
				),
				(
					"buyer",
					models.ForeignKey(
						on_delete=django.db.models.deletion.PROTECT,
						related_name="proformas",
						to="entities.entity",
					),
				),
				(
					"bank",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="+",
						to="core.companybank",
					),
				),
			],
			options={
				"ordering": ["-created_at"],
				"abstract": False,
			},
		),
		migrations.AddConstraint(
			model_name="proformainvoice",
			constraint=models.UniqueConstraint(fields=("number", "version"), name="invoices_proformainvoice_number_version"),
		),
		migrations.CreateModel(
			name="ProformaItem",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("description", models.CharField(max_length=255)),
				("hsn_code", models.CharField(blank=True, max_length=12)),
				("unit", models.CharField(default="pcs", max_length=20)),
				("quantity", models.DecimalField(decimal_places=2, default=Decimal("1.00"), max_digits=12)),
				("unit_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
				("net_weight", models.DecimalField(blank=True, decimal_places=3, max_digits=12, null=True)),
				("gross_weight", models.DecimalField(blank=True, decimal_places=3, max_digits=12, null=True)),
				(
					"proforma",
					models.ForeignKey(
						on_delete=django.db.models.deletion.CASCADE,
						related_name="items",
						to="invoices.proformainvoice",
					),
				),
				(
					"sku",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						to="catalog.sku",
					),
				),
			],
			options={
				"ordering": ["id"],
			},
		),
	]
