from decimal import Decimal

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

	dependencies = [
		("purchasing", "0001_initial"),
		migrations.swappable_dependency(settings.AUTH_USER_MODEL),
	]

	operations = [
		migrations.AddField(
			model_name="purchaseorder",
			name="payment_status",
			field=models.CharField(
				choices=[("unpaid", "Unpaid"), ("partial", "Partially Paid"), ("paid", "Paid")],
				default="unpaid",
				max_length=20,
			),
		),
		migrations.CreateModel(
			name="PurchaseOrderPayment",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("payment_date", models.DateField(default=django.utils.timezone.localdate)),
				("amount", models.DecimalField(decimal_places=2, max_digits=16)),
				("currency", models.CharField(default="USD", max_length=10)),
				("exchange_rate", models.DecimalField(decimal_places=6, default=Decimal("1.000000"), max_digits=14)),
				("reference_number", models.CharField(blank=True, max_length=120)),
				("remarks", models.TextField(blank=True)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				(
					"payment_method",
					models.CharField(
						choices=[
							("bank_transfer", "Bank Transfer"),
							("cheque", "Cheque"),
							("cash", "Cash"),
							("card", "Card"),
							("other", "Other"),
						],
						default="bank_transfer",
						max_length=20,
					),
				),
				(
					"purchase_order",
					models.ForeignKey(
						on_delete=django.db.models.deletion.CASCADE,
						related_name="payments",
						to="purchasing.purchaseorder",
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
				"abstract": False,
			},
		),
	]
