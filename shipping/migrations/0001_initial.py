from decimal import Decimal

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

	initial = True

	dependencies = [
		("invoices", "0001_initial"),
		("orders", "0001_initial"),
		migrations.swappable_dependency(settings.AUTH_USER_MODEL),
	]

	operations = [
		migrations.CreateModel(
			name="ShippingBill",
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
						to="shipping.shippingbill",
					),
				),
				(
					"status",
					models.CharField(
						choices=[
							("drafted", "Drafted"),
							("pending", "Pending"),
							("filed", "Filed"),
							("rejected", "Rejected"),
							("cleared", "Cleared"),
							("revised", "Revised"),
						],
						default="drafted",
						max_length=20,
					),
				),
				("customs_sb_number", models.CharField(blank=True, max_length=40, verbose_name="customs SB number")),
				("sb_date", models.DateField(default=django.utils.timezone.localdate)),
				("port_code", models.CharField(blank=True, max_length=20)),
				("customs_house", models.CharField(blank=True, max_length=120)),
				("customs_officer_name", models.CharField(blank=True, max_length=120)),
				("vessel_name", models.CharField(blank=True, max_length=120)),
				("voyage_number", models.CharField(blank=True, max_length=60)),
				("port_of_loading", models.CharField(blank=True, max_length=120)),
				("port_of_discharge", models.CharField(blank=True, max_length=120)),
				("number_of_packages", models.PositiveIntegerField(default=0)),
				("gross_weight", models.DecimalField(decimal_places=3, default=Decimal("0.000"), max_digits=12)),
				("net_weight", models.DecimalField(decimal_places=3, default=Decimal("0.000"), max_digits=12)),
				("ad_code", models.CharField(blank=True, max_length=20, verbose_name="AD code")),
				("consignee_name", models.CharField(blank=True, max_length=255)),
				("consignee_address", models.TextField(blank=True)),
				("consignee_country", models.CharField(blank=True, max_length=100)),
				("fob_value", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
				("freight_value", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
				("insurance_value", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
				("total_value", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
				("let_export_order_number", models.CharField(blank=True, max_length=60)),
				("let_export_date", models.DateField(blank=True, null=True)),
				("filed_at", models.DateTimeField(blank=True, null=True)),
				("cleared_at", models.DateTimeField(blank=True, null=True)),
				(
					"export_order",
					models.ForeignKey(
						on_delete=django.db.models.deletion.PROTECT,
						related_name="shipping_bills",
						to="orders.exportorder",
					),
				),
				(
					"proforma",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="shipping_bills",
						to="invoices.proformainvoice",
					),
				),
			],
			options={
				"ordering": ["-created_at"],
				"abstract": False,
			},
		),
		migrations.AddConstraint(
			model_name="shippingbill",
			constraint=models.UniqueConstraint(fields=("number", "version"), name="shipping_shippingbill_number_version"),
		),
		migrations.CreateModel(
			name="ShippingBillItem",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("hsn_code", models.CharField(blank=True, max_length=12)),
				("description", models.CharField(max_length=255)),
				("quantity", models.DecimalField(decimal_places=2, default=Decimal("1.00"), max_digits=12)),
				("unit", models.CharField(default="pcs", max_length=20)),
				("unit_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
				("fob_value", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
				("freight_allocation", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
				("insurance_allocation", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
				("assessable_value", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
				("export_duty_rate", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=5)),
				("export_duty_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
				("cess_rate", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=5)),
				("cess_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
				(
					"shipping_bill",
					models.ForeignKey(
						on_delete=django.db.models.deletion.CASCADE,
						related_name="items",
						to="shipping.shippingbill",
					),
				),
				(
					"order_item",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="shipping_bill_items",
						to="orders.orderitem",
					),
				),
			],
			options={
				"ordering": ["id"],
			},
		),
	]
