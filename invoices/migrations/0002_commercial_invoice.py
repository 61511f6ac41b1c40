from django.db import migrations, models


class Migration(migrations.Migration):

	dependencies = [
		("invoices", "0001_initial"),
	]

	operations = [
		migrations.AddField(
			model_name="proformainvoice",
			name="invoice_type",
			field=models.CharField(
				choices=[("proforma", "Proforma Invoice"), ("commercial", "Commercial Invoice")],
				default="proforma",
				max_length=20,
			),
		),
		migrations.AddField(
			model_name="proformainvoice",
			name="converted_to_commercial_at",
			field=models.DateTimeField(blank=True, null=True),
		),
	]
