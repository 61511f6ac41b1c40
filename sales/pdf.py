from core.pdf import amount_text, base_currency_rows, build_trade_pdf, entity_rows, fmt_date, money, number_label
from core.words import amount_in_words


def build_quote_pdf_bytes(quote) -> bytes:
	items = list(quote.items.select_related("sku").all())
	rows = []
	for idx, it in enumerate(items, start=1):
		rows.append(
			[
				idx,
				it.product_name,
				it.description,
				it.hsn_code or "-",
				money(it.quantity),
				it.unit,
				money(it.unit_price),
				f"{money(it.discount_percent)}%" if it.discount_percent else "-",
				money(it.line_total()),
			]
		)

	cur = quote.currency
	totals = [("Subtotal", amount_text(cur, quote.subtotal_amount))]
	if quote.discount_amount:
		totals.append(("Discount", f"- {amount_text(cur, quote.discount_amount)}"))
	if quote.tax_amount:
		totals.append(("Tax", amount_text(cur, quote.tax_amount)))
	totals.append(("TOTAL", amount_text(cur, quote.total())))
	totals += base_currency_rows(quote)

	terms = [
		("Incoterm", quote.incoterm),
		("Payment terms", quote.payment_terms),
		("Valid until", fmt_date(quote.valid_until)),
	]
	return build_trade_pdf(
		title="QUOTATION",
		number_label=number_label(quote),
		details=(
			"QUOTE DETAILS",
			[
				("Quote No.", quote.formatted_number),
				("Date", fmt_date(quote.quote_date)),
				("Valid until", fmt_date(quote.valid_until)),
				("Currency", cur),
				("Enquiry", quote.enquiry.number if quote.enquiry_id else "-"),
			],
		),
		party=("BUYER", entity_rows(quote.buyer)),
		item_header=["#", "Product", "Description", "HSN", "Qty", "Unit", "Rate", "Disc.", "Amount"],
		item_rows=rows,
		item_weights=[4, 18, 24, 9, 8, 6, 11, 7, 13],
		numeric_cols=(4, 6, 7, 8),
		totals=totals,
		amount_words=amount_in_words(quote.total(), cur),
		boxes=[("TERMS", [(label, value) for label, value in terms if value and value != "-"])],
		notes=quote.notes,
	)
