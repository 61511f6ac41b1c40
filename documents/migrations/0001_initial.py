from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone

import documents.models


class Migration(migrations.Migration):

	initial = True

	dependencies = [
		("enquiries", "0001_initial"),
		("invoices", "0001_initial"),
		("orders", "0001_initial"),
		("purchasing", "0001_initial"),
		("sales", "0001_initial"),
		("shipping", "0001_initial"),
		migrations.swappable_dependency(settings.AUTH_USER_MODEL),
	]

	operations = [
		migrations.CreateModel(
			name="Document",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				(
					"doc_type",
					models.CharField(
						choices=[
							("enquiry", "Enquiry"),
							("quote", "Quote"),
							("proforma", "Proforma Invoice"),
							("export_order", "Export Order"),
							("purchase_order", "Purchase Order"),
							("shipping_bill", "Shipping Bill"),
							("commercial_invoice", "Commercial Invoice"),
							("packing_list", "Packing List"),
							("bill_of_lading", "Bill of Lading"),
							("certificate_of_origin", "Certificate of Origin"),
							("insurance", "Insurance Certificate"),
							("letter_of_credit", "Letter of Credit"),
							("other", "Other"),
						],
						max_length=30,
					),
				),
				("doc_type_other", models.CharField(blank=True, default="", max_length=120, verbose_name="Other (specify)")),
				("title", models.CharField(blank=True, max_length=255)),
				("version", models.PositiveIntegerField(default=1)),
				("file", models.FileField(upload_to=documents.models.document_upload_to)),
				("is_generated", models.BooleanField(default=False)),
				("notes", models.TextField(blank=True)),
				("expiry_date", models.DateField(blank=True, null=True)),
				("uploaded_at", models.DateTimeField(default=django.utils.timezone.now)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				(
					"related_enquiry",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="documents",
						to="enquiries.enquiry",
					),
				),
				(
					"related_quote",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="documents",
						to="sales.quote",
					),
				),
				(
					"related_proforma",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="documents",
						to="invoices.proformainvoice",
					),
				),
				(
					"related_order",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="documents",
						to="orders.exportorder",
					),
				),
				(
					"related_purchase_order",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="documents",
						to="purchasing.purchaseorder",
					),
				),
				(
					"related_shipping_bill",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="documents",
						to="shipping.shippingbill",
					),
				),
				(
					"uploaded_by",
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
