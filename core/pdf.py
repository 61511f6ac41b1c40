"""reportlab building blocks for the printed trade documents.

Every document is an A4 `SimpleDocTemplate` with a branded header/footer
drawn on each page, two side-by-side info boxes, a line-item table whose
header row repeats across pages, a right-aligned totals table, the amount in
words, optional two-column detail boxes (logistics, bank, packing) and notes.
"""
from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import logging
from io import BytesIO
from typing import Iterable, Sequence
from xml.sax.saxutils import escape

from django.conf import settings
from django.http import HttpResponse
from django.utils import timezone

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Flowable, KeepTogether, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle


logger = logging.getLogger(__name__)

BRAND_BLUE = colors.HexColor("#0d6efd")
INK = colors.HexColor("#0f172a")
MUTED = colors.HexColor("#475569")
RULE = colors.HexColor("#cbd5e1")

FOOTER_NOTICE = "This is a computer-generated document and does not require a signature."

Rows = Sequence[tuple[str, object]]


def money(val) -> str:
	"""`1234.5` -> `1,234.50`; values that are not numbers are printed as given."""
	if val is None or val == "":
		return "0.00"
	try:
		dec = val if isinstance(val, Decimal) else Decimal(str(val))
	except (InvalidOperation, ValueError):
		return str(val)
	return f"{dec.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):,.2f}"


def text(value) -> str:
	"""Paragraph-safe text for user-entered values."""
	if value is None:
		return ""
	return escape(str(value)).replace("\n", "<br/>")


class BottomAligned(Flowable):
	"""Draw a list of flowables bottom-aligned within the remaining frame.

	If the block can't fit in the remaining space, it falls back to normal
	flow so the content can naturally move/split across pages.
	"""

	def __init__(self, flowables):
		super().__init__()
		self.flowables = list(flowables or [])
		self._wrapped = []
		self._padding = 0

	def wrap(self, availWidth, availHeight):
		self._wrapped = []
		total_h = 0
		for flowable in self.flowables:
			w, h = flowable.wrap(availWidth, availHeight)
			self._wrapped.append((flowable, w, h))
			total_h += h
		self._padding = max(0, availHeight - total_h)
		return availWidth, total_h + self._padding

	def split(self, availWidth, availHeight):
		return self.flowables

	def draw(self):
		cursor = self._padding + sum(h for _, _, h in self._wrapped)
		for flowable, _, h in self._wrapped:
			cursor -= h
			flowable.drawOn(self.canv, 0, cursor)


def _logo_path(company) -> str | None:
	logo = getattr(company, "logo", None)
	if not logo:
		return None
	try:
		return logo.path
	except (ValueError, NotImplementedError):
		return None


def _draw_logo(canvas, path: str, x: float, y: float, *, max_w: float, max_h: float) -> bool:
	if path.lower().endswith(".svg"):
		try:
			from svglib.svglib import svg2rlg
			from reportlab.graphics import renderPDF

			drawing = svg2rlg(path)
			if drawing and getattr(drawing, "width", 0) and getattr(drawing, "height", 0):
				scale = min(max_w / float(drawing.width), max_h / float(drawing.height))
				drawing.scale(scale, scale)
				renderPDF.draw(drawing, canvas, x, y)
				return True
		except Exception:
			logger.exception("Failed to draw SVG logo %s", path)
		return False
	try:
		canvas.drawImage(path, x, y, width=max_h, height=max_h, mask="auto", preserveAspectRatio=True)
		return True
	except Exception:
		logger.exception("Failed to draw logo %s", path)
		return False


def draw_header_footer(canvas, doc, *, title: str, company=None) -> None:
	"""Draw the company header bar and the generated-document footer on each page."""
	page_width, page_height = doc.pagesize
	left = doc.leftMargin
	right = page_width - doc.rightMargin
	bar_h = 62

	canvas.saveState()
	canvas.setFillColor(BRAND_BLUE)
	canvas.rect(0, page_height - bar_h, page_width, bar_h, fill=1, stroke=0)

	text_x = left
	logo = _logo_path(company)
	if logo and _draw_logo(canvas, logo, left, page_height - bar_h + 14, max_w=120, max_h=34):
		text_x = left + 44

	canvas.setFillColor(colors.white)
	name = getattr(company, "display_name", "") or ""
	canvas.setFont("Helvetica-Bold", 13)
	canvas.drawString(text_x, page_height - 24, name)
	canvas.setFont("Helvetica", 7.5)
	detail_lines = []
	if company is not None:
		detail_lines = [line for line in (company.address_line(), company.contact_line(), company.registration_line()) if line]
	for idx, line in enumerate(detail_lines[:3]):
		canvas.drawString(text_x, page_height - 35 - idx * 9, line)

	canvas.setFont("Helvetica-Bold", 12)
	canvas.drawRightString(right, page_height - 24, title)

	footer_line_y = 50
	canvas.setStrokeColor(RULE)
	canvas.setLineWidth(0.6)
	canvas.line(left, footer_line_y, right, footer_line_y)
	canvas.setFillColor(MUTED)
	canvas.setFont("Helvetica", 7.5)
	canvas.drawCentredString(page_width / 2.0, footer_line_y - 11, FOOTER_NOTICE)
	generated = timezone.localtime(timezone.now()).strftime("%d %b %Y %H:%M")
	canvas.drawString(left, footer_line_y - 22, f"Generated on {generated}")
	canvas.drawRightString(right, footer_line_y - 22, f"Page {canvas.getPageNumber()}")
	canvas.restoreState()


def _styles():
	styles = getSampleStyleSheet()
	styles.add(ParagraphStyle("pdf_cell", parent=styles["Normal"], fontSize=8.5, leading=10.5, textColor=INK))
	styles.add(ParagraphStyle("pdf_cell_right", parent=styles["pdf_cell"], alignment=2))
	styles.add(ParagraphStyle("pdf_label", parent=styles["Normal"], fontName="Helvetica-Bold", fontSize=8.5, leading=10.5, textColor=INK))
	styles.add(ParagraphStyle("pdf_section", parent=styles["Heading3"], textColor=INK, spaceBefore=8, spaceAfter=4))
	styles.add(ParagraphStyle("pdf_words", parent=styles["Normal"], fontSize=9, leading=12, textColor=INK))
	return styles


def heading_table(*, title: str, number_label: str, width: float) -> Table:
	table = Table([[title, number_label]], colWidths=[width * 0.5, width * 0.5])
	table.setStyle(
		TableStyle(
			[
				("ALIGN", (0, 0), (0, 0), "LEFT"),
				("ALIGN", (1, 0), (1, 0), "RIGHT"),
				("FONTNAME", (0, 0), (-1, -1), "Helvetica-Bold"),
				("FONTSIZE", (0, 0), (-1, -1), 14),
				("TEXTCOLOR", (0, 0), (-1, -1), INK),
				("LEFTPADDING", (0, 0), (-1, -1), 0),
				("RIGHTPADDING", (0, 0), (-1, -1), 0),
				("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
			]
		)
	)
	return table


def _kv_block(styles, rows: Rows, width: float) -> Table:
	label_w = min(95.0, width * 0.42)
	data = [
		[Paragraph(text(str(label).upper()) + ":", styles["pdf_label"]), Paragraph(text(value) or "-", styles["pdf_cell"])]
		for label, value in rows
	] or [["", ""]]
	table = Table(data, colWidths=[label_w, width - label_w])
	table.setStyle(
		TableStyle(
			[
				("LEFTPADDING", (0, 0), (-1, -1), 0),
				("RIGHTPADDING", (0, 0), (0, -1), 6),
				("TOPPADDING", (0, 0), (-1, -1), 0),
				("BOTTOMPADDING", (0, 0), (-1, -1), 1),
				("VALIGN", (0, 0), (-1, -1), "TOP"),
			]
		)
	)
	return table


def info_boxes(styles, *, left: tuple[str, Rows], right: tuple[str, Rows] | None, width: float) -> Table:
	"""Two bordered boxes side by side, each with a blue title bar and label/value rows."""
	gutter = 14.0
	box_w = (width - gutter) / 2.0
	inner_w = box_w - 12
	left_title, left_rows = left
	right_title, right_rows = right if right else ("", [])
	table = Table(
		[
			[left_title, "", right_title],
			[_kv_block(styles, left_rows, inner_w), "", _kv_block(styles, right_rows, inner_w) if right else ""],
		],
		colWidths=[box_w, gutter, box_w],
	)
	style = [
		("BACKGROUND", (0, 0), (0, 0), BRAND_BLUE),
		("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
		("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
		("FONTSIZE", (0, 0), (-1, 0), 9.5),
		("LEFTPADDING", (0, 0), (-1, -1), 6),
		("RIGHTPADDING", (0, 0), (-1, -1), 6),
		("LEFTPADDING", (1, 0), (1, -1), 0),
		("RIGHTPADDING", (1, 0), (1, -1), 0),
		("TOPPADDING", (0, 0), (-1, -1), 5),
		("BOTTOMPADDING", (0, 0), (-1, -1), 5),
		("VALIGN", (0, 0), (-1, -1), "TOP"),
		("BOX", (0, 0), (0, -1), 0.6, RULE),
	]
	if right:
		style += [("BACKGROUND", (2, 0), (2, 0), BRAND_BLUE), ("BOX", (2, 0), (2, -1), 0.6, RULE)]
	table.setStyle(TableStyle(style))
	return table


def items_table(
	styles,
	*,
	header: Sequence[str],
	rows: Iterable[Sequence[object]],
	width: float,
	weights: Sequence[float],
	numeric_cols: Iterable[int] = (),
) -> Table:
	"""Line-item table; the header row repeats when the table splits across pages."""
	numeric = set(numeric_cols)
	body = []
	for row in rows:
		body.append(
			[
				Paragraph(text(cell), styles["pdf_cell_right"] if idx in numeric else styles["pdf_cell"])
				for idx, cell in enumerate(row)
			]
		)
	if not body:
		body = [[Paragraph("(No items)", styles["pdf_cell"])] + ["" for _ in header[1:]]]

	wsum = float(sum(weights)) or 1.0
	col_widths = [(w / wsum) * width for w in weights]
	table = Table([list(header)] + body, repeatRows=1, colWidths=col_widths)
	style = [
		("BACKGROUND", (0, 0), (-1, 0), BRAND_BLUE),
		("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
		("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
		("FONTSIZE", (0, 0), (-1, 0), 8.5),
		("LEFTPADDING", (0, 0), (-1, -1), 5),
		("RIGHTPADDING", (0, 0), (-1, -1), 5),
		("TOPPADDING", (0, 0), (-1, -1), 4),
		("BOTTOMPADDING", (0, 0), (-1, -1), 4),
		("GRID", (0, 0), (-1, -1), 0.5, colors.black),
		("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.whitesmoke]),
		("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
	]
	for idx in sorted(numeric):
		style.append(("ALIGN", (idx, 0), (idx, 0), "RIGHT"))
	table.setStyle(TableStyle(style))
	return table


def totals_table(*, rows: Sequence[tuple[str, str]], width: float) -> Table:
	"""Right-aligned summary block; the last row is the grand total."""
	summary_w = width * 0.45
	summary = Table([["Summary", "Amount"]] + [list(r) for r in rows], colWidths=[summary_w * 0.5, summary_w * 0.5])
	summary.setStyle(
		TableStyle(
			[
				("BACKGROUND", (0, 0), (-1, 0), BRAND_BLUE),
				("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
				("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
				("FONTSIZE", (0, 0), (-1, -1), 9),
				("GRID", (0, 0), (-1, -1), 0.5, colors.black),
				("ALIGN", (1, 1), (1, -1), "RIGHT"),
				("FONTNAME", (0, 1), (0, -1), "Helvetica-Bold"),
				("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
				("BACKGROUND", (0, -1), (-1, -1), colors.HexColor("#e2e8f0")),
				("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
			]
		)
	)
	wrap = Table([["", summary]], colWidths=[width - summary_w, summary_w])
	wrap.setStyle(
		TableStyle(
			[
				("LEFTPADDING", (0, 0), (-1, -1), 0),
				("RIGHTPADDING", (0, 0), (-1, -1), 0),
				("TOPPADDING", (0, 0), (-1, -1), 0),
				("BOTTOMPADDING", (0, 0), (-1, -1), 0),
			]
		)
	)
	return wrap


def build_trade_pdf(
	*,
	title: str,
	number_label: str,
	details: tuple[str, Rows],
	party: tuple[str, Rows] | None,
	item_header: Sequence[str],
	item_rows: Iterable[Sequence[object]],
	item_weights: Sequence[float],
	numeric_cols: Iterable[int] = (),
	totals: Sequence[tuple[str, str]] = (),
	amount_words: str = "",
	boxes: Sequence[tuple[str, Rows]] = (),
	notes: str = "",
	company=None,
) -> bytes:
	"""Render a complete trade document and return the PDF bytes."""
	if company is None:
		from core.models import Company

		company = Company.load()

	buffer = BytesIO()
	doc = SimpleDocTemplate(
		buffer,
		pagesize=A4,
		title=f"{title} {number_label}",
		topMargin=90,
		bottomMargin=72,
		leftMargin=36,
		rightMargin=36,
	)
	styles = _styles()
	width = float(doc.width)

	elements: list[Flowable] = [
		heading_table(title=title, number_label=number_label, width=width),
		Spacer(1, 10),
		info_boxes(styles, left=details, right=party, width=width),
		Spacer(1, 14),
		items_table(
			styles,
			header=item_header,
			rows=item_rows,
			width=width,
			weights=item_weights,
			numeric_cols=numeric_cols,
		),
	]
	if totals:
		elements += [Spacer(1, 10), KeepTogether(totals_table(rows=totals, width=width))]
	if amount_words:
		elements += [Spacer(1, 8), Paragraph(f"<b>Amount in words:</b> {text(amount_words)}", styles["pdf_words"])]

	box_list = [box for box in boxes if box and box[1]]
	for idx in range(0, len(box_list), 2):
		pair = box_list[idx : idx + 2]
		elements += [
			Spacer(1, 12),
			KeepTogether(info_boxes(styles, left=pair[0], right=pair[1] if len(pair) > 1 else None, width=width)),
		]

	notes = (notes or "").strip()
	if notes:
		elements += [
			Spacer(1, 12),
			BottomAligned([Paragraph("Notes / Terms", styles["pdf_section"]), Paragraph(text(notes), styles["pdf_words"])]),
		]

	page_title = f"{title} {number_label}"
	doc.build(
		elements,
		onFirstPage=lambda c, d: draw_header_footer(c, d, title=page_title, company=company),
		onLaterPages=lambda c, d: draw_header_footer(c, d, title=page_title, company=company),
	)
	pdf_bytes = buffer.getvalue()
	buffer.close()
	return pdf_bytes


def pdf_response(pdf_bytes: bytes, filename: str, *, inline: bool = False) -> HttpResponse:
	response = HttpResponse(pdf_bytes, content_type="application/pdf")
	disposition = "inline" if inline else "attachment"
	response["Content-Disposition"] = f'{disposition}; filename="{filename}"'
	return response


def fmt_date(value) -> str:
	if not value:
		return "-"
	if hasattr(value, "hour"):
		value = timezone.localtime(value) if timezone.is_aware(value) else value
	return value.strftime("%d %b %Y")


def number_label(doc) -> str:
	"""`No. <number>` with the version appended from V2 onwards."""
	label = f"No. {doc.number}"
	if (doc.version or 1) > 1:
		label += f" V{doc.version}"
	return label


def amount_text(currency: str, value) -> str:
	return f"{currency} {money(value)}"


def base_currency_rows(doc) -> list[tuple[str, str]]:
	"""Extra totals row with the amount in the base currency, for foreign-currency documents."""
	base = getattr(settings, "BASE_CURRENCY", "INR")
	if not doc.currency or doc.currency == base:
		return []
	return [(f"In {base} @ {doc.conversion_rate.normalize():f}", amount_text(base, doc.base_currency_total()))]


def entity_rows(entity) -> list[tuple[str, object]]:
	if entity is None:
		return [("Name", "-")]
	rows = [
		("Name", entity.name),
		("Contact", entity.contact_person),
		("Address", entity.address),
		("Country", entity.country),
		("Email", entity.email),
		("Phone", entity.phone),
		("Tax ID", entity.tax_id),
	]
	return [(label, value) for label, value in rows if value]
