from decimal import Decimal
import logging

from django.db import models
from django.utils import timezone

from core.models import TradeDocument
from core.workflow import WorkflowError


logger = logging.getLogger(__name__)


class ProformaInvoice(TradeDocument):
	class Status(models.TextChoices):
		DRAFT = "draft", "Draft"
		PENDING = "pending", "Pending Approval"
		APPROVED = "approved", "Approved"
		REJECTED = "rejected", "Rejected"
		REVISED = "revised", "Revised"
		CONVERTED = "converted", "Converted"
		CANCELLED = "cancelled", "Cancelled"

	class InvoiceType(models.TextChoices):
		PROFORMA = "proforma", "Proforma Invoice"
		COMMERCIAL = "commercial", "Commercial Invoice"

	NUMBER_PREFIX = "PI"
	DOCUMENT_TITLE = "Proforma Invoice"
	ITEM_PARENT_FIELD = "proforma"
	TRANSITIONS = {
		"submit": (frozenset({Status.DRAFT}), Status.PENDING),
		"approve": (frozenset({Status.PENDING}), Status.APPROVED),
		"reject": (frozenset({Status.PENDING}), Status.REJECTED),
		"cancel": (frozenset({Status.DRAFT, Status.PENDING}), Status.CANCELLED),
	}
	REVISABLE_FROM = frozenset({Status.PENDING, Status.APPROVED, Status.REJECTED})
	REVISION_STATUS = Status.PENDING
	CONVERTIBLE_FROM = frozenset({Status.APPROVED})
	EXTRA_ACTIONS = ("convert-commercial",)

	quote = models.ForeignKey(
		"sales.Quote",
		on_delete=models.SET_NULL,
		null=True,
		blank=True,
		related_name="proformas",
	)
	buyer = models.ForeignKey("entities.Entity", on_delete=models.PROTECT, related_name="proformas")
	status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT)
	invoice_type = models.CharField(max_length=20, choices=InvoiceType.choices, default=InvoiceType.PROFORMA)
	converted_to_commercial_at = models.DateTimeField(null=True, blank=True)

	pi_date = models.DateField(default=timezone.localdate)
	valid_until = models.DateField(null=True, blank=True)
	incoterm = models.CharField(max_length=20, blank=True)
	incoterm_place = models.CharField(max_length=120, blank=True)
	payment_terms = models.CharField(max_length=255, blank=True)
	port_of_loading = models.CharField(max_length=120, blank=True)
	port_of_discharge = models.CharField(max_length=120, blank=True)
	final_destination = models.CharField(max_length=120, blank=True)
	bank = models.ForeignKey("core.CompanyBank", on_delete=models.SET_NULL, null=True, blank=True, related_name="+")
	lut_number = models.CharField(max_length=60, blank=True, verbose_name="LUT number")

	class Meta(TradeDocument.Meta):
		constraints = [
			models.UniqueConstraint(fields=["number", "version"], name="invoices_proformainvoice_number_version"),
		]

	@property
	def is_commercial(self) -> bool:
		return self.invoice_type == self.InvoiceType.COMMERCIAL

	def check_transition(self, action: str) -> None:
		if action != "convert-commercial":
			return
		if self.is_commercial:
			raise WorkflowError(f"Proforma invoice {self.number} is already a commercial invoice.")
		if self.status != self.Status.APPROVED:
			raise WorkflowError(f"Only approved proforma invoices can become commercial invoices; {self.number} is {self.get_status_display()}.")

	def reset_for_revision(self) -> None:
		# A revision goes back through approval as a proforma.
		self.invoice_type = self.InvoiceType.PROFORMA
		self.converted_to_commercial_at = None

	def total_net_weight(self) -> Decimal:
		return sum((it.net_weight or Decimal("0") for it in self.items.all()), Decimal("0.000"))

	def total_gross_weight(self) -> Decimal:
		return sum((it.gross_weight or Decimal("0") for it in self.items.all()), Decimal("0.000"))


class ProformaItem(models.Model):
	proforma = models.ForeignKey(ProformaInvoice, on_delete=models.CASCADE, related_name="items")
	sku = models.ForeignKey("catalog.SKU", on_delete=models.SET_NULL, null=True, blank=True)
	description = models.CharField(max_length=255)
	hsn_code = models.CharField(max_length=12, blank=True)
	unit = models.CharField(max_length=20, default="pcs")
	quantity = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("1.00"))
	unit_price = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
	net_weight = models.DecimalField(max_digits=12, decimal_places=3, null=True, blank=True)
	gross_weight = models.DecimalField(max_digits=12, decimal_places=3, null=True, blank=True)

	class Meta:
		ordering = ["id"]

	def __str__(self):
		return self.description

	def line_total(self) -> Decimal:
		return ((self.quantity or Decimal("0")) * (self.unit_price or Decimal("0"))).quantize(Decimal("0.01"))

	def save(self, *args, **kwargs):
		if self.sku_id:
			if not self.description:
				self.description = self.sku.name
			if not self.hsn_code:
				self.hsn_code = self.sku.effective_hsn_code
		super().save(*args, **kwargs)
		if self.proforma_id:
			try:
				self.proforma.recalculate_amounts(save=True)
			except Exception:
				logger.exception("Failed to recalculate proforma %s after saving item %s", self.proforma_id, self.pk)

	def delete(self, *args, **kwargs):
		proforma = self.proforma
		ret = super().delete(*args, **kwargs)
		if proforma and proforma.pk:
			proforma.recalculate_amounts(save=True)
		return ret
