from core.pdf import amount_text, build_trade_pdf, entity_rows, fmt_date, money, number_label
from core.words import amount_in_words


def build_purchase_order_pdf_bytes(po) -> bytes:
	items = list(po.items.all())
	rows = [
		[
			idx,
			it.description,
			money(it.quantity),
			it.unit,
			money(it.unit_price),
			f"{money(it.tax_rate)}%",
			money(it.line_total()),
		]
		for idx, it in enumerate(items, start=1)
	]
	cur = po.currency
	delivery = [
		("Expected delivery", fmt_date(po.expected_delivery_date) if po.expected_delivery_date else ""),
		("Deliver to", po.delivery_address),
		("Payment terms", po.payment_terms),
	]
	return build_trade_pdf(
		title="PURCHASE ORDER",
		number_label=number_label(po),
		details=(
			"PO DETAILS",
			[
				("PO No.", po.formatted_number),
				("Date", fmt_date(po.order_date)),
				("Export order", po.export_order.number if po.export_order_id else "-"),
				("Currency", cur),
			],
		),
		party=("VENDOR", entity_rows(po.vendor)),
		item_header=["#", "Description", "Qty", "Unit", "Rate", "Tax", "Amount"],
		item_rows=rows,
		item_weights=[4, 38, 10, 8, 14, 9, 17],
		numeric_cols=(2, 4, 5, 6),
		totals=[
			("Subtotal", amount_text(cur, po.subtotal_amount)),
			("Tax", amount_text(cur, po.tax_amount)),
			("TOTAL", amount_text(cur, po.total())),
		],
		amount_words=amount_in_words(po.total(), cur),
		boxes=[("DELIVERY & PAYMENT", [(label, value) for label, value in delivery if value])],
		notes=po.notes,
	)
