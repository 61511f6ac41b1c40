from core.pdf import amount_text, build_trade_pdf, fmt_date, money, number_label
from core.words import amount_in_words


def build_shipping_bill_pdf_bytes(bill) -> bytes:
	items = list(bill.items.all())
	rows = [
		[
			idx,
			it.description,
			it.hsn_code or "-",
			f"{money(it.quantity)} {it.unit}",
			money(it.unit_price),
			money(it.fob_value),
			money(it.assessable_value),
			money(it.export_duty_amount + it.cess_amount),
		]
		for idx, it in enumerate(items, start=1)
	]

	cur = bill.currency
	order = bill.export_order
	consignee = [
		("Name", bill.consignee_name or (order.buyer.name if order else "")),
		("Address", bill.consignee_address),
		("Country", bill.consignee_country),
	]
	customs = [
		("Customs SB No.", bill.customs_sb_number),
		("Port code", bill.port_code),
		("Customs house", bill.customs_house),
		("Officer", bill.customs_officer_name),
		("AD code", bill.ad_code),
		("LEO No.", bill.let_export_order_number),
		("LEO date", fmt_date(bill.let_export_date) if bill.let_export_date else ""),
	]
	transport = [
		("Vessel", bill.vessel_name),
		("Voyage", bill.voyage_number),
		("Port of loading", bill.port_of_loading),
		("Port of discharge", bill.port_of_discharge),
		("Packages", bill.number_of_packages or ""),
		("Gross weight", money(bill.gross_weight) if bill.gross_weight else ""),
		("Net weight", money(bill.net_weight) if bill.net_weight else ""),
	]
	totals = [
		("FOB value", amount_text(cur, bill.fob_value)),
		("Freight", amount_text(cur, bill.freight_value)),
		("Insurance", amount_text(cur, bill.insurance_value)),
		("TOTAL VALUE", amount_text(cur, bill.total_value)),
	]
	duty = bill.total_duty()
	if duty:
		totals.append(("Export duty + cess", amount_text(cur, duty)))

	return build_trade_pdf(
		title="SHIPPING BILL",
		number_label=number_label(bill),
		details=(
			"SHIPPING BILL DETAILS",
			[
				("SB No.", bill.formatted_number),
				("Date", fmt_date(bill.sb_date)),
				("Export order", order.number if order else "-"),
				("PI ref.", bill.proforma.number if bill.proforma_id else "-"),
				("Status", bill.get_status_display()),
			],
		),
		party=("CONSIGNEE", [(label, value) for label, value in consignee if value]),
		item_header=["#", "Description", "HSN", "Qty", "Rate", "FOB", "Assessable", "Duty"],
		item_rows=rows,
		item_weights=[4, 26, 9, 11, 11, 13, 14, 12],
		numeric_cols=(4, 5, 6, 7),
		totals=totals,
		amount_words=amount_in_words(bill.total_value, cur),
		boxes=[
			("CUSTOMS", [(label, value) for label, value in customs if value]),
			("TRANSPORT & PACKAGES", [(label, value) for label, value in transport if value]),
		],
		notes=bill.notes,
	)
