from core.pdf import amount_text, build_trade_pdf, fmt_date, money, number_label
from core.words import amount_in_words


def build_enquiry_pdf_bytes(enquiry) -> bytes:
	items = list(enquiry.items.select_related("sku").all())
	rows = [
		[
			idx,
			it.product_name,
			it.description or (it.sku.sku_code if it.sku_id else ""),
			money(it.quantity),
			it.unit,
			money(it.target_price) if it.target_price is not None else "-",
			money(it.line_total()) if it.target_price is not None else "-",
		]
		for idx, it in enumerate(items, start=1)
	]
	total = enquiry.total()
	return build_trade_pdf(
		title="ENQUIRY",
		number_label=number_label(enquiry),
		details=(
			"ENQUIRY DETAILS",
			[
				("Enquiry No.", enquiry.formatted_number),
				("Date", fmt_date(enquiry.created_at)),
				("Source", enquiry.get_source_display()),
				("Priority", enquiry.get_priority_display()),
				("Status", enquiry.get_status_display()),
				("Follow-up", fmt_date(enquiry.follow_up_date)),
			],
		),
		party=(
			"CUSTOMER",
			[
				("Name", enquiry.customer_name),
				("Company", enquiry.customer_company),
				("Email", enquiry.customer_email),
				("Phone", enquiry.customer_phone),
				("Country", enquiry.customer_country),
			],
		),
		item_header=["#", "Product", "Description", "Qty", "Unit", "Target Price", "Amount"],
		item_rows=rows,
		item_weights=[4, 22, 30, 9, 7, 13, 15],
		numeric_cols=(3, 5, 6),
		totals=[("Estimated value", amount_text(enquiry.currency, total))] if total else [],
		amount_words=amount_in_words(total, enquiry.currency) if total else "",
		boxes=[("REQUIREMENT", [(label, value) for label, value in (("Subject", enquiry.subject), ("Details", enquiry.description)) if value])],
		notes=enquiry.notes,
	)
