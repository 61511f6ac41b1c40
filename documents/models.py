import logging
import os
import uuid

from django.conf import settings
from django.core.files.base import ContentFile
from django.db import models
from django.utils import timezone


logger = logging.getLogger(__name__)

RELATED_FIELDS = (
	"related_enquiry",
	"related_quote",
	"related_proforma",
	"related_order",
	"related_purchase_order",
	"related_shipping_bill",
)


def document_upload_to(instance, filename: str) -> str:
	ext = os.path.splitext(filename)[1].lower()
	return f"documents/{instance.doc_type}/{timezone.localdate():%Y/%m}/{uuid.uuid4().hex}{ext}"


class Document(models.Model):
	class DocumentType(models.TextChoices):
		ENQUIRY = "enquiry", "Enquiry"
		QUOTE = "quote", "Quote"
		PROFORMA = "proforma", "Proforma Invoice"
		EXPORT_ORDER = "export_order", "Export Order"
		PURCHASE_ORDER = "purchase_order", "Purchase Order"
		SHIPPING_BILL = "shipping_bill", "Shipping Bill"
		COMMERCIAL_INVOICE = "commercial_invoice", "Commercial Invoice"
		PACKING_LIST = "packing_list", "Packing List"
		BILL_OF_LADING = "bill_of_lading", "Bill of Lading"
		CERTIFICATE_OF_ORIGIN = "certificate_of_origin", "Certificate of Origin"
		INSURANCE = "insurance", "Insurance Certificate"
		LETTER_OF_CREDIT = "letter_of_credit", "Letter of Credit"
		OTHER = "other", "Other"

	related_enquiry = models.ForeignKey(
		"enquiries.Enquiry",
		on_delete=models.SET_NULL,
		null=True,
		blank=True,
		related_name="documents",
	)
	related_quote = models.ForeignKey(
		"sales.Quote",
		on_delete=models.SET_NULL,
		null=True,
		blank=True,
		related_name="documents",
	)
	related_proforma = models.ForeignKey(
		"invoices.ProformaInvoice",
		on_delete=models.SET_NULL,
		null=True,
		blank=True,
		related_name="documents",
	)
	related_order = models.ForeignKey(
		"orders.ExportOrder",
		on_delete=models.SET_NULL,
		null=True,
		blank=True,
		related_name="documents",
	)
	related_purchase_order = models.ForeignKey(
		"purchasing.PurchaseOrder",
		on_delete=models.SET_NULL,
		null=True,
		blank=True,
		related_name="documents",
	)
	related_shipping_bill = models.ForeignKey(
		"shipping.ShippingBill",
		on_delete=models.SET_NULL,
		null=True,
		blank=True,
		related_name="documents",
	)
	uploaded_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True)

	doc_type = models.CharField(max_length=30, choices=DocumentType.choices)
	doc_type_other = models.CharField(max_length=120, blank=True, default="", verbose_name="Other (specify)")
	title = models.CharField(max_length=255, blank=True)
	version = models.PositiveIntegerField(default=1)
	file = models.FileField(upload_to=document_upload_to)
	is_generated = models.BooleanField(default=False)
	notes = models.TextField(blank=True)
	expiry_date = models.DateField(null=True, blank=True)
	uploaded_at = models.DateTimeField(default=timezone.now)

	created_at = models.DateTimeField(auto_now_add=True)

	class Meta:
		ordering = ["-created_at"]

	def __str__(self):
		return f"{self.title} v{self.version}" if self.title else self.doc_type_label

	@property
	def doc_type_label(self) -> str:
		if self.doc_type == self.DocumentType.OTHER and (self.doc_type_other or "").strip():
			return self.doc_type_other.strip()
		return self.get_doc_type_display()

	@property
	def is_expired(self) -> bool:
		return bool(self.expiry_date) and timezone.localdate() > self.expiry_date

	def save(self, *args, **kwargs):
		# Fall back to the file name when no title was given.
		if not (self.title or "").strip():
			name = getattr(self.file, "name", "") or ""
			base = os.path.splitext(os.path.basename(name))[0].strip()
			self.title = base or self.doc_type_label

		if not self.pk:
			# Versioning by (doc_type, title, related records)
			lookup = {f"{field}_id": getattr(self, f"{field}_id") for field in RELATED_FIELDS}
			latest = (
				Document.objects.filter(doc_type=self.doc_type, title=self.title, **lookup)
				.order_by("-version")
				.values_list("version", flat=True)
				.first()
			)
			if latest:
				self.version = int(latest) + 1

		super().save(*args, **kwargs)


# Trade document model label -> (doc_type, related field)
SOURCE_LINKS = {
	"enquiries.enquiry": (Document.DocumentType.ENQUIRY, "related_enquiry"),
	"sales.quote": (Document.DocumentType.QUOTE, "related_quote"),
	"invoices.proformainvoice": (Document.DocumentType.PROFORMA, "related_proforma"),
	"orders.exportorder": (Document.DocumentType.EXPORT_ORDER, "related_order"),
	"purchasing.purchaseorder": (Document.DocumentType.PURCHASE_ORDER, "related_purchase_order"),
	"shipping.shippingbill": (Document.DocumentType.SHIPPING_BILL, "related_shipping_bill"),
}


def store_generated_pdf(*, source, pdf_bytes: bytes, actor=None) -> Document:
	"""Save a rendered trade-document PDF as a `Document` linked to its source."""
	from core.audit import log_event
	from core.models import AuditEvent

	doc_type, field = SOURCE_LINKS[source._meta.label_lower]
	document = Document(
		doc_type=doc_type,
		title=f"{source.DOCUMENT_TITLE} {source.number}",
		is_generated=True,
		uploaded_by=actor if getattr(actor, "is_authenticated", False) else None,
		**{field: source},
	)
	document.file.save(source.pdf_filename, ContentFile(pdf_bytes), save=False)
	document.save()

	log_event(
		action=AuditEvent.Action.DOCUMENT_UPLOADED,
		actor=actor,
		entity=source,
		summary=f"{document.title} v{document.version} stored",
		meta={"document_id": document.pk, "file": document.file.name},
	)
	logger.info("Stored generated PDF for %s as document %s", source, document.pk)
	return document
