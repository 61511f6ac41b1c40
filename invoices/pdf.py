from core.pdf import amount_text, base_currency_rows, build_trade_pdf, entity_rows, fmt_date, money, number_label
from core.words import amount_in_words


def _bank_rows(bank):
	if bank is None:
		return []
	rows = [
		("Bank", bank.bank_name),
		("Account name", bank.account_name),
		("Account no.", bank.account_number),
		("SWIFT", bank.swift_code),
		("IFSC", bank.ifsc_code),
		("AD code", bank.ad_code),
		("Branch", bank.branch_name),
	]
	return [(label, value) for label, value in rows if value]


def build_proforma_pdf_bytes(proforma) -> bytes:
	items = list(proforma.items.all())
	rows = [
		[
			idx,
			it.description,
			it.hsn_code or "-",
			money(it.quantity),
			it.unit,
			money(it.unit_price),
			money(it.net_weight) if it.net_weight is not None else "-",
			money(it.gross_weight) if it.gross_weight is not None else "-",
			money(it.line_total()),
		]
		for idx, it in enumerate(items, start=1)
	]

	cur = proforma.currency
	incoterm = " ".join(part for part in (proforma.incoterm, proforma.incoterm_place) if part)
	logistics = [
		("Incoterm", incoterm),
		("Port of loading", proforma.port_of_loading),
		("Port of discharge", proforma.port_of_discharge),
		("Final destination", proforma.final_destination),
		("Net weight", money(proforma.total_net_weight())),
		("Gross weight", money(proforma.total_gross_weight())),
	]
	payment = [
		("Payment terms", proforma.payment_terms),
		("LUT no.", proforma.lut_number),
	] + _bank_rows(proforma.bank)

	return build_trade_pdf(
		title="COMMERCIAL INVOICE" if proforma.is_commercial else "PROFORMA INVOICE",
		number_label=number_label(proforma),
		details=(
			"INVOICE DETAILS",
			[
				("Invoice No." if proforma.is_commercial else "PI No.", proforma.formatted_number),
				("Date", fmt_date(proforma.pi_date)),
				("Valid until", fmt_date(proforma.valid_until)),
				("Currency", cur),
				("Quote ref.", proforma.quote.number if proforma.quote_id else "-"),
			],
		),
		party=("CONSIGNEE / BUYER", entity_rows(proforma.buyer)),
		item_header=["#", "Description", "HSN", "Qty", "Unit", "Rate", "Net Wt", "Gross Wt", "Amount"],
		item_rows=rows,
		item_weights=[4, 28, 9, 8, 6, 11, 9, 10, 15],
		numeric_cols=(3, 5, 6, 7, 8),
		totals=[("TOTAL", amount_text(cur, proforma.total()))] + base_currency_rows(proforma),
		amount_words=amount_in_words(proforma.total(), cur),
		boxes=[
			("SHIPMENT", [(label, value) for label, value in logistics if value]),
			("PAYMENT & BANK", [(label, value) for label, value in payment if value]),
		],
		notes=proforma.notes,
	)
