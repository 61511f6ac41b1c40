"""Create downstream trade documents from upstream ones.

enquiry -> quote -> proforma invoice -> export order -> shipping bill(s)

Every conversion runs in one transaction, copies the line items, stores the
reference to its source on the new document and records an audit event.
"""
from __future__ import annotations

from decimal import Decimal
import logging

from django.db import transaction
from django.utils import timezone

from entities.models import Entity
from enquiries.models import Enquiry
from invoices.models import ProformaInvoice, ProformaItem
from orders.models import ExportOrder
from sales.models import Quote, QuoteItem
from shipping.models import ShippingBill, ShippingBillItem

from .audit import log_conversion, log_event
from .models import AuditEvent, CompanyBank
from .workflow import WorkflowError, clear_approval_metadata, ensure_status, mark_converted, transition


logger = logging.getLogger(__name__)


def _actor_or_none(actor):
	return actor if getattr(actor, "is_authenticated", False) else None


def _buyer_for_enquiry(enquiry: Enquiry) -> Entity:
	if enquiry.entity_id:
		return enquiry.entity

	name = (enquiry.customer_company or enquiry.customer_name).strip()
	entity = Entity.objects.filter(name__iexact=name).first()
	if entity is None:
		entity = Entity.objects.create(
			entity_type=Entity.EntityType.BUYER,
			name=name,
			contact_person=enquiry.customer_name if enquiry.customer_company else "",
			email=enquiry.customer_email,
			phone=enquiry.customer_phone,
			country=enquiry.customer_country,
		)
		logger.info("Created buyer %s from enquiry %s", entity.pk, enquiry.number)
	enquiry.entity = entity
	enquiry.save(update_fields=["entity", "updated_at"])
	return entity


def _unit_price_for(item) -> Decimal:
	if item.target_price is not None:
		return item.target_price
	if item.sku_id:
		return item.sku.base_price or Decimal("0.00")
	return Decimal("0.00")


def convert_enquiry_to_quote(*, enquiry: Enquiry, actor=None) -> Quote:
	ensure_status(enquiry, enquiry.CONVERTIBLE_FROM, action="convert")

	with transaction.atomic():
		buyer = _buyer_for_enquiry(enquiry)
		quote = Quote.objects.create(
			enquiry=enquiry,
			buyer=buyer,
			currency=enquiry.currency,
			conversion_rate=enquiry.conversion_rate,
			notes=enquiry.notes,
			created_by=_actor_or_none(actor),
		)
		for item in enquiry.items.select_related("sku").all():
			QuoteItem.objects.create(
				quote=quote,
				sku=item.sku,
				product_name=item.product_name,
				description=item.description,
				quantity=item.quantity,
				unit=item.unit,
				unit_price=_unit_price_for(item),
			)
		quote.refresh_from_db()
		mark_converted(enquiry, target=quote, actor=actor)
	return quote


def convert_quote_to_proforma(*, quote: Quote, actor=None) -> ProformaInvoice:
	ensure_status(quote, quote.CONVERTIBLE_FROM, action="convert")
	quote.check_transition("convert")

	with transaction.atomic():
		proforma = ProformaInvoice.objects.create(
			quote=quote,
			buyer=quote.buyer,
			currency=quote.currency,
			conversion_rate=quote.conversion_rate,
			valid_until=quote.valid_until,
			incoterm=quote.incoterm,
			payment_terms=quote.payment_terms,
			bank=CompanyBank.default(),
			notes=quote.notes,
			created_by=_actor_or_none(actor),
		)
		for item in quote.items.all():
			ProformaItem.objects.create(
				proforma=proforma,
				sku_id=item.sku_id,
				description=(item.product_name or item.description)[:255],
				hsn_code=item.hsn_code,
				unit=item.unit,
				quantity=item.quantity,
				unit_price=item.net_unit_price(),
			)
		proforma.refresh_from_db()
		mark_converted(quote, target=proforma, actor=actor)
	return proforma


def convert_proforma_to_order(*, proforma: ProformaInvoice, actor=None) -> ExportOrder:
	ensure_status(proforma, proforma.CONVERTIBLE_FROM, action="convert")

	with transaction.atomic():
		order = ExportOrder.objects.create(
			proforma=proforma,
			buyer=proforma.buyer,
			status=ExportOrder.Status.CONFIRMED,
			currency=proforma.currency,
			conversion_rate=proforma.conversion_rate,
			incoterm=proforma.incoterm,
			payment_terms=proforma.payment_terms,
			port_of_loading=proforma.port_of_loading,
			port_of_discharge=proforma.port_of_discharge,
			notes=proforma.notes,
			created_by=_actor_or_none(actor),
		)
		for item in proforma.items.all():
			order.items.create(
				sku_id=item.sku_id,
				description=item.description,
				hsn_code=item.hsn_code,
				unit=item.unit,
				quantity=item.quantity,
				unit_price=item.unit_price,
			)
		order.refresh_from_db()
		mark_converted(proforma, target=order, actor=actor)
	return order


def convert_proforma_to_commercial(*, proforma: ProformaInvoice, actor=None) -> ProformaInvoice:
	"""Turn an approved proforma into the commercial invoice, in place.

	Number, version, items and status stay as they are; only the invoice type
	and its conversion timestamp change.
	"""
	proforma.check_transition("convert-commercial")

	proforma.invoice_type = ProformaInvoice.InvoiceType.COMMERCIAL
	proforma.converted_to_commercial_at = timezone.now()
	proforma.save(update_fields=["invoice_type", "converted_to_commercial_at", "updated_at"])

	log_event(
		action=AuditEvent.Action.DOCUMENT_CONVERTED,
		actor=actor,
		entity=proforma,
		summary=f"{proforma.number}: proforma -> commercial invoice",
		meta={"invoice_type": proforma.invoice_type},
	)
	logger.info("Proforma invoice %s converted to a commercial invoice", proforma.number)
	return proforma


def create_shipping_bill(*, order: ExportOrder, actor=None) -> ShippingBill:
	"""Raise a shipping bill for whatever is still unshipped on `order`.

	May be called repeatedly for part shipments. The order itself is not
	closed; it moves to shipped once every line is fully covered.
	"""
	ensure_status(order, order.SHIPPABLE_FROM, action="create a shipping bill for")
	remaining = [row for row in order.shippable_items() if row["remaining"] > 0]
	if not remaining:
		raise WorkflowError(f"Nothing is left to ship on export order {order.number}.")

	bank = CompanyBank.default()
	with transaction.atomic():
		bill = ShippingBill.objects.create(
			export_order=order,
			proforma=order.proforma,
			currency=order.currency,
			conversion_rate=order.conversion_rate,
			port_of_loading=order.port_of_loading,
			port_of_discharge=order.port_of_discharge,
			consignee_name=order.buyer.name,
			consignee_address=order.buyer.address,
			consignee_country=order.buyer.country,
			ad_code=bank.ad_code if bank else "",
			created_by=_actor_or_none(actor),
		)
		for row in remaining:
			item = row["item"]
			ShippingBillItem.objects.create(
				shipping_bill=bill,
				order_item=item,
				hsn_code=item.hsn_code,
				description=item.description,
				quantity=row["remaining"],
				unit=item.unit,
				unit_price=item.unit_price,
			)
		bill.refresh_from_db()

		if order.status == ExportOrder.Status.CONFIRMED and order.is_fully_shipped():
			transition(order, "ship", actor=actor)

	log_conversion(source=order, target=bill, actor=actor)
	logger.info("Shipping bill %s raised for export order %s", bill.number, order.number)
	return bill


def duplicate_quote(*, quote: Quote, actor=None) -> Quote:
	"""Copy `quote` into a brand-new draft with its own number."""
	with transaction.atomic():
		copy = Quote.objects.get(pk=quote.pk)
		copy.pk = None
		copy.id = None
		copy._state.adding = True
		copy.number = ""
		copy.version = 1
		copy.revised_from = None
		copy.status = Quote.Status.DRAFT
		copy.quote_date = timezone.localdate()
		copy.valid_until = None
		copy.created_by = _actor_or_none(actor)
		clear_approval_metadata(copy)
		copy.save()
		quote.copy_items_to(copy)

	log_event(
		action=AuditEvent.Action.DOCUMENT_DUPLICATED,
		actor=actor,
		entity=copy,
		summary=f"{quote.number} duplicated as {copy.number}",
		meta={"source_id": quote.pk},
	)
	logger.info("Quote %s duplicated as %s", quote.number, copy.number)
	return copy
