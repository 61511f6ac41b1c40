from django.db import transaction

from core.bulk import ENTITY_COLUMN_HINTS, ImportResult, Sheet, parse_decimal, pick, reject_columns, require_any_column

from .models import HSNCode, Product, SKU


_ENTITY_FILE_MESSAGE = "This looks like an entity file (it has buyer/supplier/tax ID columns). Upload it under Entities instead."


def import_products(sheet: Sheet) -> ImportResult:
	reject_columns(sheet.headers, ENTITY_COLUMN_HINTS, message=_ENTITY_FILE_MESSAGE)
	require_any_column(sheet.headers, ("name", "productname"), message="The file needs a 'Name' column.")

	result = ImportResult()
	with transaction.atomic():
		for row in sheet.rows:
			name = pick(row, "name", "productname")
			if not name:
				result.skipped += 1
				continue
			_, created = Product.objects.update_or_create(
				name=name,
				defaults={
					"category": pick(row, "category"),
					"description": pick(row, "description"),
					"hsn_code": pick(row, "hsncode", "hsn"),
				},
			)
			if created:
				result.created += 1
			else:
				result.updated += 1
	return result


def import_skus(sheet: Sheet) -> ImportResult:
	"""Upsert SKUs by `sku_code`; both the code and a name are required."""
	reject_columns(sheet.headers, ENTITY_COLUMN_HINTS, message=_ENTITY_FILE_MESSAGE)
	require_any_column(sheet.headers, ("skucode", "sku"), message="The file needs a 'SKU Code' column.")

	result = ImportResult()
	products = {p.name.lower(): p for p in Product.objects.all()}
	with transaction.atomic():
		for idx, row in enumerate(sheet.rows, start=2):
			sku_code = pick(row, "skucode", "sku")
			name = pick(row, "name", "skuname")
			if not sku_code or not name:
				result.skipped += 1
				result.errors.append(f"Row {idx}: SKU code and name are required.")
				continue
			product_name = pick(row, "product", "productname")
			_, created = SKU.objects.update_or_create(
				sku_code=sku_code,
				defaults={
					"name": name,
					"unit": pick(row, "unit", "uom", default="pcs"),
					"base_price": parse_decimal(pick(row, "baseprice", "price", "unitprice")),
					"hsn_code": pick(row, "hsncode", "hsn"),
					"product": products.get(product_name.lower()) if product_name else None,
				},
			)
			if created:
				result.created += 1
			else:
				result.updated += 1
	return result


def import_hsn_codes(sheet: Sheet) -> ImportResult:
	reject_columns(sheet.headers, ENTITY_COLUMN_HINTS, message=_ENTITY_FILE_MESSAGE)
	require_any_column(sheet.headers, ("hsncode", "code", "hsn"), message="The file needs an 'HSN Code' column.")

	result = ImportResult()
	with transaction.atomic():
		for row in sheet.rows:
			code = pick(row, "hsncode", "code", "hsn")
			if not code:
				result.skipped += 1
				continue
			digits = "".join(ch for ch in code if ch.isdigit()) or code
			_, created = HSNCode.objects.update_or_create(
				code=digits,
				defaults={
					"description": pick(row, "description"),
					"gst_rate": parse_decimal(pick(row, "gstrate", "gst", "rate")),
				},
			)
			if created:
				result.created += 1
			else:
				result.updated += 1
	return result
