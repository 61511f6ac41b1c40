from datetime import timedelta
from decimal import Decimal
import logging

from django.conf import settings
from django.db import models
from django.utils import timezone

from core.models import TradeDocument
from core.workflow import WorkflowError, transition


logger = logging.getLogger(__name__)


def _setting_decimal(name: str, default: str) -> Decimal:
	return Decimal(str(getattr(settings, name, default)))


class Quote(TradeDocument):
	class Status(models.TextChoices):
		DRAFT = "draft", "Draft"
		PENDING_APPROVAL = "pending_approval", "Pending Approval"
		APPROVED = "approved", "Approved"
		SENT = "sent", "Sent"
		ACCEPTED = "accepted", "Accepted"
		REJECTED = "rejected", "Rejected"
		EXPIRED = "expired", "Expired"
		REVISED = "revised", "Revised"
		CONVERTED = "converted", "Converted"
		CANCELLED = "cancelled", "Cancelled"

	NUMBER_PREFIX = "QT"
	DOCUMENT_TITLE = "Quote"
	ITEM_PARENT_FIELD = "quote"
	TRANSITIONS = {
		"submit": (frozenset({Status.DRAFT, Status.REJECTED}), Status.PENDING_APPROVAL),
		"approve": (frozenset({Status.PENDING_APPROVAL}), Status.APPROVED),
		"reject": (frozenset({Status.PENDING_APPROVAL}), Status.REJECTED),
		"send": (frozenset({Status.DRAFT, Status.APPROVED}), Status.SENT),
		"accept": (frozenset({Status.SENT}), Status.ACCEPTED),
		"decline": (frozenset({Status.SENT}), Status.REJECTED),
		"expire": (frozenset({Status.DRAFT, Status.SENT, Status.PENDING_APPROVAL}), Status.EXPIRED),
		"cancel": (frozenset({Status.DRAFT, Status.SENT, Status.PENDING_APPROVAL, Status.APPROVED}), Status.CANCELLED),
	}
	REVISABLE_FROM = frozenset(
		{
			Status.DRAFT,
			Status.PENDING_APPROVAL,
			Status.APPROVED,
			Status.SENT,
			Status.ACCEPTED,
			Status.REJECTED,
			Status.EXPIRED,
		}
	)
	REVISION_STATUS = Status.DRAFT
	CONVERTIBLE_FROM = frozenset({Status.APPROVED, Status.SENT, Status.ACCEPTED})
	CLOSED_STATUSES = frozenset({Status.REVISED, Status.CONVERTED, Status.CANCELLED, Status.REJECTED, Status.EXPIRED})
	# An approval covers the lines it was given for; edits need a revision or a resubmission.
	LOCKED_STATUSES = frozenset(
		{
			Status.PENDING_APPROVAL,
			Status.APPROVED,
			Status.SENT,
			Status.ACCEPTED,
			Status.EXPIRED,
			Status.REVISED,
			Status.CONVERTED,
			Status.CANCELLED,
		}
	)
	EXTRA_ACTIONS = ("duplicate",)

	enquiry = models.ForeignKey(
		"enquiries.Enquiry",
		on_delete=models.SET_NULL,
		null=True,
		blank=True,
		related_name="quotes",
	)
	buyer = models.ForeignKey("entities.Entity", on_delete=models.PROTECT, related_name="quotes")
	status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT)

	quote_date = models.DateField(default=timezone.localdate)
	valid_until = models.DateField(null=True, blank=True)
	incoterm = models.CharField(max_length=20, blank=True)
	payment_terms = models.CharField(max_length=255, blank=True)

	subtotal_amount = models.DecimalField(max_digits=16, decimal_places=2, default=Decimal("0.00"))
	discount_amount = models.DecimalField(max_digits=16, decimal_places=2, default=Decimal("0.00"))
	tax_amount = models.DecimalField(max_digits=16, decimal_places=2, default=Decimal("0.00"))

	approval_requested_at = models.DateTimeField(null=True, blank=True)
	approval_requested_by = models.ForeignKey(
		settings.AUTH_USER_MODEL,
		on_delete=models.SET_NULL,
		null=True,
		blank=True,
		related_name="+",
	)
	sent_at = models.DateTimeField(null=True, blank=True)

	class Meta(TradeDocument.Meta):
		constraints = [
			models.UniqueConstraint(fields=["number", "version"], name="sales_quote_number_version"),
		]

	def save(self, *args, **kwargs):
		if not self.valid_until and not self.pk:
			days = int(getattr(settings, "QUOTE_DEFAULT_VALIDITY_DAYS", 30))
			self.valid_until = (self.quote_date or timezone.localdate()) + timedelta(days=days)
		super().save(*args, **kwargs)

	def recalculate_amounts(self, *, save: bool = True) -> None:
		"""Recalculate and store subtotal/discount/tax/total from the line items."""
		items = list(self.items.all())
		subtotal = sum((it.gross_amount() for it in items), Decimal("0.00"))
		discount = sum((it.discount_value() for it in items), Decimal("0.00"))
		tax = sum((it.tax_value() for it in items), Decimal("0.00"))

		self.subtotal_amount = subtotal.quantize(Decimal("0.01"))
		self.discount_amount = discount.quantize(Decimal("0.01"))
		self.tax_amount = tax.quantize(Decimal("0.01"))
		self.total_amount = (subtotal - discount + tax).quantize(Decimal("0.01"))

		if save and self.pk:
			self.save(update_fields=["subtotal_amount", "discount_amount", "tax_amount", "total_amount", "updated_at"])

	def discount_ratio(self) -> Decimal:
		if not self.subtotal_amount:
			return Decimal("0")
		return (self.discount_amount or Decimal("0")) / self.subtotal_amount

	def approval_required(self) -> bool:
		"""High-value or heavily discounted quotes need owner/admin sign-off before they go out."""
		threshold = _setting_decimal("QUOTE_APPROVAL_VALUE_THRESHOLD", "10000")
		max_ratio = _setting_decimal("QUOTE_APPROVAL_DISCOUNT_RATIO", "0.10")
		return self.total() > threshold or self.discount_ratio() > max_ratio

	@property
	def is_approved(self) -> bool:
		return self.approved_at is not None

	def check_transition(self, action: str) -> None:
		if action == "send" and self.status == self.Status.DRAFT and self.approval_required():
			raise WorkflowError(f"Quote {self.number} needs internal approval before it can be sent.")
		if action == "convert" and self.approval_required() and not self.is_approved:
			raise WorkflowError(f"Quote {self.number} needs internal approval before it can be converted.")

	def after_transition(self, action: str, *, actor=None) -> list[str]:
		if action == "submit":
			self.approval_requested_at = timezone.now()
			self.approval_requested_by = actor
			return ["approval_requested_at", "approval_requested_by"]
		if action == "send":
			self.sent_at = timezone.now()
			return ["sent_at"]
		return []

	def reset_for_revision(self) -> None:
		self.approval_requested_at = None
		self.approval_requested_by = None
		self.sent_at = None

	def is_expired(self) -> bool:
		if not self.valid_until:
			return False
		return timezone.localdate() > self.valid_until

	def refresh_expiry_status(self) -> bool:
		"""Auto-expire Draft/Sent/Pending quotes after their validity date."""
		sources, _ = self.TRANSITIONS["expire"]
		if self.is_expired() and self.status in sources:
			transition(self, "expire")
			return True
		return False


class QuoteItem(models.Model):
	quote = models.ForeignKey(Quote, on_delete=models.CASCADE, related_name="items")
	sku = models.ForeignKey("catalog.SKU", on_delete=models.SET_NULL, null=True, blank=True)
	product_name = models.CharField(max_length=255, blank=True, default="")
	description = models.TextField(blank=True, default="")
	hsn_code = models.CharField(max_length=12, blank=True)
	quantity = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("1.00"))
	unit = models.CharField(max_length=20, default="pcs")
	unit_price = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
	discount_percent = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0.00"))
	tax_percent = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0.00"))
	total_price = models.DecimalField(max_digits=16, decimal_places=2, default=Decimal("0.00"))

	class Meta:
		ordering = ["id"]

	def __str__(self):
		return self.product_name or self.description

	def gross_amount(self) -> Decimal:
		return ((self.quantity or Decimal("0")) * (self.unit_price or Decimal("0"))).quantize(Decimal("0.01"))

	def discount_value(self) -> Decimal:
		return (self.gross_amount() * (self.discount_percent or Decimal("0")) / Decimal("100")).quantize(Decimal("0.01"))

	def tax_value(self) -> Decimal:
		taxable = self.gross_amount() - self.discount_value()
		return (taxable * (self.tax_percent or Decimal("0")) / Decimal("100")).quantize(Decimal("0.01"))

	def line_total(self) -> Decimal:
		return (self.gross_amount() - self.discount_value() + self.tax_value()).quantize(Decimal("0.01"))

	def net_unit_price(self) -> Decimal:
		"""Unit price after the line discount."""
		factor = Decimal("1") - (self.discount_percent or Decimal("0")) / Decimal("100")
		return ((self.unit_price or Decimal("0")) * factor).quantize(Decimal("0.01"))

	def save(self, *args, **kwargs):
		if self.sku_id:
			if not self.product_name:
				self.product_name = self.sku.name
			if not self.hsn_code:
				self.hsn_code = self.sku.effective_hsn_code
		if not self.product_name and self.description:
			self.product_name = self.description[:255]
		self.total_price = self.line_total()
		super().save(*args, **kwargs)
		if self.quote_id:
			try:
				self.quote.recalculate_amounts(save=True)
			except Exception:
				logger.exception("Failed to recalculate quote %s after saving item %s", self.quote_id, self.pk)

	def delete(self, *args, **kwargs):
		quote = self.quote
		ret = super().delete(*args, **kwargs)
		if quote and quote.pk:
			quote.recalculate_amounts(save=True)
		return ret
