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
		("orders", "0001_initial"),
		migrations.swappable_dependency(settings.AUTH_USER_MODEL),
	]

	operations = [
		migrations.CreateModel(
			name="PurchaseOrder",
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
						to="purchasing.purchaseorder",
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
							("completed", "Completed"),
							("revised", "Revised"),
							("cancelled", "Cancelled"),
						],
						default="draft",
						max_length=20,
					),
				),
				("order_date", models.DateField(default=django.utils.timezone.localdate)),
				("expected_delivery_date", models.DateField(blank=True, null=True)),
				("delivery_address", models.TextField(blank=True)),
				("payment_terms", models.CharField(blank=True, max_length=255)),
				("subtotal_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
				("tax_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
				(
					"vendor",
					models.ForeignKey(
						on_delete=django.db.models.deletion.PROTECT,
						related_name="purchase_orders",
						to="entities.entity",
					),
				),
				(
					"export_order",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="purchase_orders",
						to="orders.exportorder",
					),
				),
			],
			options={
				"ordering": ["-created_at"],
				"abstract": False,
			},
		),
		migrations.AddConstraint(
			model_name="purchaseorder",
			constraint=models.UniqueConstraint(fields=("number", "version"), name="purchasing_purchaseorder_number_version"),
		),
		migrations.CreateModel(
			name="PurchaseOrderItem",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("description", models.CharField(max_length=255)),
				("unit", models.CharField(default="pcs", max_length=20)),
				("quantity", models.DecimalField(decimal_places=2, default=Decimal("1.00"), max_digits=12)),
				("unit_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
				("tax_rate", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=5)),
				(
					"purchase_order",
					models.ForeignKey(
						on_delete=django.db.models.deletion.CASCADE,
						related_name="items",
						to="purchasing.purchaseorder",
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
