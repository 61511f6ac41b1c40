from decimal import Decimal

from django.db import transaction

from core.bulk import ImportResult, Sheet, parse_decimal, pick, require_any_column

from .models import Enquiry, EnquiryItem


NAME_COLUMNS = ("customername", "customer", "name", "contactname")


def _choice(value: str, choices, default: str) -> str:
	value = (value or "").strip().lower().replace(" ", "_")
	return value if value in set(choices.values) else default


def import_enquiries(sheet: Sheet, *, actor=None) -> ImportResult:
	"""One enquiry per row, numbered automatically; an optional product column adds a line item."""
	require_any_column(
		sheet.headers,
		NAME_COLUMNS,
		message="This does not look like an enquiry file: it needs a 'Customer Name' column.",
	)

	result = ImportResult()
	with transaction.atomic():
		for row in sheet.rows:
			name = pick(row, *NAME_COLUMNS)
			if not name:
				result.skipped += 1
				continue
			enquiry = Enquiry.objects.create(
				customer_name=name,
				customer_email=pick(row, "customeremail", "email"),
				customer_phone=pick(row, "customerphone", "phone"),
				customer_company=pick(row, "customercompany", "company", "companyname"),
				customer_country=pick(row, "customercountry", "country"),
				subject=pick(row, "subject", "title"),
				description=pick(row, "description", "requirement", "details"),
				source=_choice(pick(row, "source"), Enquiry.Source, Enquiry.Source.OTHER),
				priority=_choice(pick(row, "priority"), Enquiry.Priority, Enquiry.Priority.MEDIUM),
				created_by=actor if getattr(actor, "is_authenticated", False) else None,
			)
			product = pick(row, "product", "productname", "item")
			if product:
				EnquiryItem.objects.create(
					enquiry=enquiry,
					product_name=product,
					quantity=parse_decimal(pick(row, "quantity", "qty"), Decimal("1")),
					unit=pick(row, "unit", default="pcs"),
					target_price=parse_decimal(pick(row, "targetprice", "price"), None),
				)
			result.created += 1
	return result
