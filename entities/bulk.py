from django.db import transaction

from core.bulk import PRODUCT_COLUMN_HINTS, ImportResult, Sheet, pick, reject_columns, require_any_column

from .models import Entity


NAME_COLUMNS = ("name", "entityname", "companyname", "company")


def import_entities(sheet: Sheet) -> ImportResult:
	"""Create one Entity per row; rows without a name are skipped."""
	reject_columns(
		sheet.headers,
		PRODUCT_COLUMN_HINTS,
		message="This looks like a product file (it has category/HSN columns). Upload it under Products instead.",
	)
	require_any_column(sheet.headers, NAME_COLUMNS, message="The file needs a 'Name' column.")

	result = ImportResult()
	valid_types = set(Entity.EntityType.values)
	with transaction.atomic():
		for row in sheet.rows:
			name = pick(row, *NAME_COLUMNS)
			if not name:
				result.skipped += 1
				continue
			entity_type = pick(row, "type", "entitytype", default=Entity.EntityType.BUYER).lower()
			if entity_type not in valid_types:
				entity_type = Entity.EntityType.OTHER
			Entity.objects.create(
				entity_type=entity_type,
				name=name,
				contact_person=pick(row, "contactperson", "contact"),
				email=pick(row, "email", "emailaddress"),
				phone=pick(row, "phone", "phonenumber", "mobile"),
				country=pick(row, "country"),
				address=pick(row, "address"),
				tax_id=pick(row, "taxid", "gstin", "vat"),
			)
			result.created += 1
	return result
