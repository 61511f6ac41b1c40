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
		("invoices", "0001_initial"),
		migrations.swappable_dependency(settings.AUTH_USER_MODEL),
	]

	operations = [
		migrations.CreateModel(
			name="ExportOrder",
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
						to="orders.exportorder",
					),
				),
				(
					"status",
					models.CharField(
						choices=[
							("pending", "Pending Approval"),
							("approved", "Approved"),
							("rejected", "Rejected"),
							("confirmed", "Confirmed"),
							("shipped", "Shipped"),
							("completed", "Completed"),
							("revised", "Revised"),
							("cancelled", "Cancelled"),
						],
						default="pending",
						max_length=20,
					),
				),
				("order_date", models.DateField(default=django.utils.timezone.localdate)),
				("buyer_reference", models.CharField(blank=True, max_length=120)),
				("incoterm", models.CharField(blank=True, max_length=20)),
				(
					"payment_method",
					models.CharField(
						blank=True,
						choices=[
							("lc", "Letter of Credit"),
							("tt", "Telegraphic Transfer"),
							("da", "Documents against Acceptance"),
							("dp", "Documents against Payment"),
							("cad", "Cash against Documents"),
							("advance", "Advance Payment"),
						],
						max_length=20,
					),
				),
				("payment_terms", models.CharField(blank=True, max_length=255)),
				("port_of_loading", models.CharField(blank=True, max_length=120)),
				("port_of_discharge", models.CharField(blank=True, max_length=120)),
				("shipment_period", models.CharField(blank=True, max_length=120)),
				("latest_shipment_date", models.DateField(blank=True, null=True)),
				("partial_shipment_allowed", models.BooleanField(default=False)),
				("transhipment_allowed", models.BooleanField(default=False)),
				(
					"payment_status",
					models.CharField(
						choices=[("unpaid", "Unpaid"), ("partial", "Partially Paid"), ("paid", "Paid")],
						default="unpaid",
						max_length=20,
					),
				),
				(
					"proforma",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="orders",
						to="invoices.proformainvoice",
					),
				),
				(
					"buyer",
					models.ForeignKey(
						on_delete=django.db.models.deletion.PROTECT,
						related_name="export_orders",
						to="entities.entity",
					),
				),
			],
			options={
				"ordering": ["-created_at"],
				"abstract": False,
			},
		),
		migrations.AddConstraint(
			model_name="exportorder",
			constraint=models.UniqueConstraint(fields=("number", "version"), name="orders_exportorder_number_version"),
		),
		migrations.CreateModel(
			name="OrderItem",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("description", models.CharField(max_length=255)),
				("hsn_code", models.CharField(blank=True, max_length=12)),
				("unit", models.CharField(default="pcs", max_length=20)),
				("quantity", models.DecimalField(decimal_places=2, default=Decimal("1.00"), max_digits=12)),
				("unit_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
				(
					"order",
					models.ForeignKey(
						on_delete=django.db.models.deletion.CASCADE,
						related_name="items",
						to="orders.exportorder",
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
		migrations.CreateModel(
			name="OrderPayment",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("payment_date", models.DateField(default=django.utils.timezone.localdate)),
				("amount", models.DecimalField(decimal_places=2, max_digits=16)),
				("currency", models.CharField(default="USD", max_length=10)),
				("exchange_rate", models.DecimalField(decimal_places=6, default=Decimal("1.000000"), max_digits=14)),
				(
					"payment_method",
					models.CharField(
						blank=True,
						choices=[
							("lc", "Letter of Credit"),
							("tt", "Telegraphic Transfer"),
							("da", "Documents against Acceptance"),
							("dp", "Documents against Payment"),
							("cad", "Cash against Documents"),
							("advance", "Advance Payment"),
						],
						max_length=20,
					),
				),
				("reference_number", models.CharField(blank=True, max_length=120)),
				("remarks", models.TextField(blank=True)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				(
					"order",
					models.ForeignKey(
						on_delete=django.db.models.deletion.CASCADE,
						related_name="payments",
						to="orders.exportorder",
					),
				),
				(
					"recorded_by",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						to=settings.AUTH_USER_MODEL,
					),
				),
			],
			options={
				"ordering": ["-payment_date", "-id"],
			},
		),
	]
