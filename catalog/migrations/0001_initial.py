from decimal import Decimal

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

	initial = True

	dependencies = []

	operations = [
		migrations.CreateModel(
			name="HSNCode",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("code", models.CharField(max_length=12, unique=True)),
				("description", models.CharField(blank=True, max_length=255)),
				("chapter", models.CharField(blank=True, editable=False, max_length=2)),
				("gst_rate", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=5)),
			],
			options={
				"ordering": ["code"],
				"verbose_name": "HSN code",
			},
		),
		migrations.CreateModel(
			name="Product",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("name", models.CharField(max_length=255)),
				("category", models.CharField(blank=True, max_length=120)),
				("description", models.TextField(blank=True)),
				("hsn_code", models.CharField(blank=True, max_length=12)),
				("is_active", models.BooleanField(default=True)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
			],
			options={
				"ordering": ["name"],
			},
		),
		migrations.CreateModel(
			name="SKU",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("sku_code", models.CharField(max_length=60, unique=True)),
				("name", models.CharField(max_length=255)),
				("unit", models.CharField(default="pcs", max_length=20)),
				("base_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
				("hsn_code", models.CharField(blank=True, max_length=12)),
				("is_active", models.BooleanField(default=True)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
				(
					"product",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="skus",
						to="catalog.product",
					),
				),
			],
			options={
				"ordering": ["sku_code"],
				"verbose_name": "SKU",
			},
		),
	]
