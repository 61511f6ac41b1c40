from core.pdf import amount_text, base_currency_rows, build_trade_pdf, entity_rows, fmt_date, money, number_label
from core.words import amount_in_words


def _yes_no(value: bool) -> str:
	return "Allowed" if value else "Not allowed"


def build_order_pdf_bytes(order) -> bytes:
	items = list(order.items.all())
	rows = [
		[idx, it.description, it.hsn_code or "-", money(it.quantity), it.unit, money(it.unit_price), money(it.line_total())]
		for idx, it in enumerate(items, start=1)
	]

	cur = order.currency
	paid = order.amount_paid()
	totals = [("TOTAL", amount_text(cur, order.total()))] + base_currency_rows(order)
	if paid:
		totals += [("Received", amount_text(cur, paid)), ("Balance", amount_text(cur, order.outstanding_balance()))]

	shipment = [
		("Incoterm", order.incoterm),
		("Port of loading", order.port_of_loading),
		("Port of discharge", order.port_of_discharge),
		("Shipment period", order.shipment_period),
		("Latest shipment", fmt_date(order.latest_shipment_date) if order.latest_shipment_date else ""),
		("Partial shipment", _yes_no(order.partial_shipment_allowed)),
		("Transhipment", _yes_no(order.transhipment_allowed)),
	]
	payment = [
		("Method", order.get_payment_method_display() if order.payment_method else ""),
		("Terms", order.payment_terms),
		("Status", order.get_payment_status_display()),
	]

	return build_trade_pdf(
		title="EXPORT ORDER",
		number_label=number_label(order),
		details=(
			"ORDER DETAILS",
			[
				("Order No.", order.formatted_number),
				("Date", fmt_date(order.order_date)),
				("Buyer ref.", order.buyer_reference or "-"),
				("PI ref.", order.proforma.number if order.proforma_id else "-"),
				("Currency", cur),
				("Status", order.get_status_display()),
			],
		),
		party=("BUYER", entity_rows(order.buyer)),
		item_header=["#", "Description", "HSN", "Qty", "Unit", "Rate", "Amount"],
		item_rows=rows,
		item_weights=[4, 36, 10, 10, 8, 14, 18],
		numeric_cols=(3, 5, 6),
		totals=totals,
		amount_words=amount_in_words(order.total(), cur),
		boxes=[
			("SHIPMENT", [(label, value) for label, value in shipment if value]),
			("PAYMENT", [(label, value) for label, value in payment if value]),
		],
		notes=order.notes,
	)
