from decimal import Decimal

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

	initial = True

	dependencies = [
		("catalog", "0001_initial"),
		("entities", "0001_initial"),
		("enquiries", "0001_initial"),
		migrations.swappable_dependency(settings.AUTH_USER_MODEL),
	]

	operations = [
		migrations.CreateModel(
			name="Quote",
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
						to="sales.quote",
					),
				),
				(
					"status",
					models.CharField(
						choices=[
							("draft", "Draft"),
							("pending_approval", "Pending Approval"),
							("approved", "Approved"),
							("sent", "Sent"),
							("accepted", "Accepted"),
							("rejected", "Rejected"),
							("expired", "Expired"),
							("revised", "Revised"),
							("converted", "Converted"),
							("cancelled", "Cancelled"),
						],
						default="draft",
						max_length=20,
					),
				),
				("quote_date", models.DateField(default=django.utils.timezone.localdate)),
				("valid_until", models.DateField(blank=True, null=True)),
				("incoterm", models.CharField(blank=True, max_length=20)),
				("payment_terms", models.CharField(blank=True, max_length=255)),
				("subtotal_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
				("discount_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
				("tax_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
				("approval_requested_at", models.DateTimeField(blank=True, null=True)),
				("sent_at", models.DateTimeField(blank=True, null=True)),
				(
					"enquiry",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="quotes",
						to="enquiries.enquiry",
					),
				),
				(
					"buyer",
					models.ForeignKey(
						on_delete=django.db.models.deletion.PROTECT,
						related_name="quotes",
						to="entities.entity",
					),
				),
				(
					"approval_requested_by",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="+",
						to=settings.AUTH_USER_MODEL,
					),
				),
			],
			options={
				"ordering": ["-created_at"],
				"abstract": False,
			},
		),
		migrations.AddConstraint(
			model_name="quote",
			constraint=models.UniqueConstraint(fields=("number", "version"), name="sales_quote_number_version"),
		),
		migrations.CreateModel(
			name="QuoteItem",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("product_name", models.CharField(blank=True, default="", max_length=255)),
				("description", models.TextField(blank=True, default="")),
				("hsn_code", models.CharField(blank=True, max_length=12)),
				("quantity", models.DecimalField(decimal_places=2, default=Decimal("1.00"), max_digits=12)),
				("unit", models.CharField(default="pcs", max_length=20)),
				("unit_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
				("discount_percent", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=5)),
				("tax_percent", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=5)),
				("total_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
				(
					"quote",
					models.ForeignKey(
						on_delete=django.db.models.deletion.CASCADE,
						related_name="items",
						to="sales.quote",
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
