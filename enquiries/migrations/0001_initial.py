from decimal import Decimal

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

	initial = True

	dependencies = [
		("catalog", "0001_initial"),
		("entities", "0001_initial"),
		migrations.swappable_dependency(settings.AUTH_USER_MODEL),
	]

	operations = [
		migrations.CreateModel(
			name="Enquiry",
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
				("customer_name", models.CharField(max_length=255)),
				("customer_email", models.EmailField(blank=True, max_length=254)),
				("customer_phone", models.CharField(blank=True, max_length=50)),
				("customer_company", models.CharField(blank=True, max_length=255)),
				("customer_country", models.CharField(blank=True, max_length=100)),
				(
					"source",
					models.CharField(
						choices=[
							("email", "Email"),
							("phone", "Phone"),
							("website", "Website"),
							("trade_show", "Trade Show"),
							("referral", "Referral"),
							("other", "Other"),
						],
						default="email",
						max_length=20,
					),
				),
				("subject", models.CharField(blank=True, max_length=255)),
				("description", models.TextField(blank=True)),
				(
					"priority",
					models.CharField(
						choices=[("low", "Low"), ("medium", "Medium"), ("high", "High")],
						default="medium",
						max_length=10,
					),
				),
				(
					"status",
					models.CharField(
						choices=[
							("new", "New"),
							("contacted", "Contacted"),
							("quoted", "Quoted"),
							("won", "Won"),
							("lost", "Lost"),
							("converted", "Converted"),
							("revised", "Revised"),
						],
						default="new",
						max_length=20,
					),
				),
				("follow_up_date", models.DateField(blank=True, null=True)),
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
						to="enquiries.enquiry",
					),
				),
				(
					"entity",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="enquiries",
						to="entities.entity",
					),
				),
				(
					"assigned_to",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="assigned_enquiries",
						to=settings.AUTH_USER_MODEL,
					),
				),
			],
			options={
				"ordering": ["-created_at"],
				"verbose_name_plural": "enquiries",
			},
		),
		migrations.AddConstraint(
			model_name="enquiry",
			constraint=models.UniqueConstraint(fields=("number", "version"), name="enquiries_enquiry_number_version"),
		),
		migrations.CreateModel(
			name="EnquiryItem",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("product_name", models.CharField(max_length=255)),
				("description", models.TextField(blank=True)),
				("quantity", models.DecimalField(decimal_places=2, default=Decimal("1.00"), max_digits=12)),
				("unit", models.CharField(default="pcs", max_length=20)),
				("target_price", models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
				("notes", models.CharField(blank=True, max_length=255)),
				(
					"enquiry",
					models.ForeignKey(
						on_delete=django.db.models.deletion.CASCADE,
						related_name="items",
						to="enquiries.enquiry",
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
