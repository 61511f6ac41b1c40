from decimal import Decimal
import logging

from django.conf import settings
from django.db import models
from django.utils import timezone


logger = logging.getLogger(__name__)


class Company(models.Model):
	"""Exporter profile printed on every generated document (single row)."""

	legal_name = models.CharField(max_length=255)
	trade_name = models.CharField(max_length=255, blank=True)
	address = models.CharField(max_length=255, blank=True)
	city = models.CharField(max_length=100, blank=True)
	state = models.CharField(max_length=100, blank=True)
	country = models.CharField(max_length=100, blank=True, default="India")
	pincode = models.CharField(max_length=20, blank=True)
	email = models.EmailField(blank=True)
	phone = models.CharField(max_length=50, blank=True)
	website = models.CharField(max_length=255, blank=True)
	gstin = models.CharField(max_length=30, blank=True, verbose_name="GSTIN")
	iec = models.CharField(max_length=30, blank=True, verbose_name="IEC")
	logo = models.FileField(upload_to="company/", blank=True)

	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)

	class Meta:
		verbose_name_plural = "companies"

	def __str__(self):
		return self.display_name

	@classmethod
	def load(cls) -> "Company":
		company = cls.objects.order_by("pk").first()
		if company is None:
			company = cls(legal_name=getattr(settings, "COMPANY_FALLBACK_NAME", "EximDesk Exports"))
		return company

	@property
	def display_name(self) -> str:
		return (self.trade_name or self.legal_name or "").strip()

	def address_line(self) -> str:
		parts = [self.address, self.city, self.state, self.pincode, self.country]
		return ", ".join(p.strip() for p in parts if (p or "").strip())

	def contact_line(self) -> str:
		parts = [self.phone, self.email, self.website]
		return "  |  ".join(p.strip() for p in parts if (p or "").strip())

	def registration_line(self) -> str:
		parts = []
		if self.gstin:
			parts.append(f"GSTIN: {self.gstin}")
		if self.iec:
			parts.append(f"IEC: {self.iec}")
		return "  |  ".join(parts)


class CompanyBank(models.Model):
	company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name="banks")
	bank_name = models.CharField(max_length=255)
	account_name = models.CharField(max_length=255, blank=True)
	account_number = models.CharField(max_length=50)
	swift_code = models.CharField(max_length=20, blank=True)
	ifsc_code = models.CharField(max_length=20, blank=True, verbose_name="IFSC")
	ad_code = models.CharField(max_length=20, blank=True, verbose_name="AD code")
	branch_name = models.CharField(max_length=255, blank=True)
	is_default = models.BooleanField(default=False)

	class Meta:
		ordering = ["-is_default", "bank_name"]

	def __str__(self):
		return f"{self.bank_name} ({self.account_number})"

	@classmethod
	def default(cls):
		return cls.objects.order_by("-is_default", "pk").first()

	def save(self, *args, **kwargs):
		super().save(*args, **kwargs)
		if self.is_default:
			CompanyBank.objects.filter(company_id=self.company_id).exclude(pk=self.pk).update(is_default=False)


class DocumentSequence(models.Model):
	"""Per-prefix, per-day counter used to issue document numbers."""

	prefix = models.CharField(max_length=10)
	day = models.DateField()
	last_number = models.PositiveIntegerField(default=0)

	class Meta:
		constraints = [
			models.UniqueConstraint(fields=["prefix", "day"], name="core_documentsequence_prefix_day"),
		]

	def __str__(self):
		return f"{self.prefix} {self.day:%Y-%m-%d} #{self.last_number}"


class AuditEvent(models.Model):
	"""Lightweight audit trail.

	Stores the *what/who/when* of key workflow actions without requiring admin usage.
	"""

	class Action(models.TextChoices):
		STATUS_CHANGED = "status_changed", "Status changed"
		DOCUMENT_REVISED = "document_revised", "Document revised"
		DOCUMENT_CONVERTED = "document_converted", "Document converted"
		DOCUMENT_DUPLICATED = "document_duplicated", "Document duplicated"
		DOCUMENT_UPLOADED = "document_uploaded", "Document uploaded"
		PAYMENT_RECORDED = "payment_recorded", "Payment recorded"
		BULK_UPLOAD = "bulk_upload", "Bulk upload"

	action = models.CharField(max_length=50, choices=Action.choices)
	actor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True)
	entity_type = models.CharField(max_length=50)
	entity_id = models.PositiveIntegerField(null=True, blank=True)
	summary = models.CharField(max_length=255, blank=True)
	meta = models.JSONField(blank=True, default=dict)
	created_at = models.DateTimeField(auto_now_add=True)

	class Meta:
		ordering = ["-created_at"]

	def __str__(self):
		return f"{self.action} ({self.entity_type}:{self.entity_id})"


class TradeDocument(models.Model):
	"""Header fields and lifecycle hooks shared by every numbered trade document.

	Subclasses declare their own `Status` choices and `status` field, plus:

	- `NUMBER_PREFIX`: prefix used by `core.numbering.next_number`.
	- `TRANSITIONS`: action -> (statuses the action is allowed from, target status).
	- `REVISABLE_FROM` / `REVISION_STATUS`: where `revise` is allowed and the
	  status the new version starts in.
	- `LOCKED_STATUSES`: statuses in which line items can no longer change.
	- `CONVERTIBLE_FROM` / `SHIPPABLE_FROM` / `EXTRA_ACTIONS`: non-transition
	  actions reported by `core.workflow.allowed_actions`.
	- `ITEM_PARENT_FIELD`: name of the FK on the line-item model.

	`check_transition(action)` is consulted for transitions, `revise` and
	`convert` alike.
	"""

	NUMBER_PREFIX = ""
	DOCUMENT_TITLE = ""
	TRANSITIONS: dict = {}
	REVISABLE_FROM = frozenset()
	REVISION_STATUS = ""
	REVISED_STATUS = "revised"
	CONVERTED_STATUS = "converted"
	CLOSED_STATUSES = frozenset({"revised", "converted", "cancelled", "rejected"})
	LOCKED_STATUSES = frozenset({"revised", "converted", "cancelled"})
	CONVERTIBLE_FROM = frozenset()
	SHIPPABLE_FROM = frozenset()
	EXTRA_ACTIONS: tuple = ()
	ITEM_PARENT_FIELD = ""

	number = models.CharField(max_length=40, blank=True, db_index=True)
	version = models.PositiveIntegerField(default=1)
	revised_from = models.ForeignKey(
		"self",
		on_delete=models.SET_NULL,
		null=True,
		blank=True,
		related_name="revisions",
	)

	currency = models.CharField(max_length=10, default=getattr(settings, "DEFAULT_CURRENCY", "USD"))
	conversion_rate = models.DecimalField(max_digits=14, decimal_places=6, default=Decimal("1.000000"))
	total_amount = models.DecimalField(max_digits=16, decimal_places=2, default=Decimal("0.00"))
	notes = models.TextField(blank=True)

	created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+")

	# Approval metadata
	approved_at = models.DateTimeField(null=True, blank=True)
	approved_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+")
	rejected_at = models.DateTimeField(null=True, blank=True)
	rejected_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+")
	rejection_reason = models.TextField(blank=True, default="")

	# Cancellation metadata (audit-friendly; avoids deleting history)
	cancelled_at = models.DateTimeField(null=True, blank=True)
	cancelled_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+")
	cancel_reason = models.TextField(blank=True, default="")

	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)

	class Meta:
		abstract = True
		ordering = ["-created_at"]

	def __str__(self):
		return self.formatted_number if self.number else f"{self.DOCUMENT_TITLE} #{self.pk}"

	def save(self, *args, **kwargs):
		if not self.number:
			from core.numbering import next_number

			self.number = next_number(self.NUMBER_PREFIX)
		super().save(*args, **kwargs)

	@property
	def formatted_number(self) -> str:
		from core.numbering import format_document_number

		return format_document_number(self.number, self.version, self.status)

	@property
	def pdf_filename(self) -> str:
		from core.numbering import format_document_name

		return format_document_name(self.number, self.version, self.status)

	def total(self) -> Decimal:
		return (self.total_amount or Decimal("0.00")).quantize(Decimal("0.01"))

	def base_currency_total(self) -> Decimal:
		rate = self.conversion_rate or Decimal("1")
		return (self.total() * rate).quantize(Decimal("0.01"))

	def recalculate_amounts(self, *, save: bool = True) -> None:
		"""Recalculate and store the document total from its line items."""
		total = sum((item.line_total() for item in self.items.all()), Decimal("0.00"))
		self.total_amount = total.quantize(Decimal("0.01"))
		if save and self.pk:
			self.save(update_fields=["total_amount", "updated_at"])

	def copy_items_to(self, target) -> None:
		"""Copy every line item onto `target` (same item model)."""
		for item in self.items.all():
			item.pk = None
			item.id = None
			item._state.adding = True
			setattr(item, self.ITEM_PARENT_FIELD, target)
			item.save()
		target.recalculate_amounts(save=True)

	def check_transition(self, action: str) -> None:
		"""Extra guards for `action`; raise `core.workflow.WorkflowError` to block it."""

	def after_transition(self, action: str, *, actor=None) -> list[str]:
		"""Stamp action-specific fields; return the names of the fields changed."""
		return []

	def reset_for_revision(self) -> None:
		"""Clear per-version fields on a freshly copied revision before it is saved."""


class PaymentStatus(models.TextChoices):
	UNPAID = "unpaid", "Unpaid"
	PARTIAL = "partial", "Partially Paid"
	PAID = "paid", "Paid"


class PaymentTrackingMixin:
	"""Derive `payment_status` for an order from the `payments` recorded against it."""

	def amount_paid(self) -> Decimal:
		return sum((p.amount_in_order_currency() for p in self.payments.all()), Decimal("0.00")).quantize(Decimal("0.01"))

	def outstanding_balance(self) -> Decimal:
		return (self.total() - self.amount_paid()).quantize(Decimal("0.01"))

	def refresh_payment_status(self, *, save: bool = True) -> str:
		"""Paid once payments cover a non-zero total, partial when something came in, else unpaid."""
		paid = self.amount_paid()
		if paid > Decimal("0.00") and paid >= self.total():
			new_status = PaymentStatus.PAID
		elif paid > Decimal("0.00"):
			new_status = PaymentStatus.PARTIAL
		else:
			new_status = PaymentStatus.UNPAID

		if new_status != self.payment_status:
			self.payment_status = new_status
			if save and self.pk:
				self.save(update_fields=["payment_status", "updated_at"])
		return self.payment_status

	def reset_for_revision(self) -> None:
		# Payments stay with the version they were recorded against.
		self.payment_status = PaymentStatus.UNPAID
		super().reset_for_revision()


class Payment(models.Model):
	"""A payment against an order; subclasses add the FK named by `ORDER_FIELD` (related_name="payments")."""

	ORDER_FIELD = ""

	payment_date = models.DateField(default=timezone.localdate)
	amount = models.DecimalField(max_digits=16, decimal_places=2)
	currency = models.CharField(max_length=10, default=getattr(settings, "DEFAULT_CURRENCY", "USD"))
	exchange_rate = models.DecimalField(max_digits=14, decimal_places=6, default=Decimal("1.000000"))
	reference_number = models.CharField(max_length=120, blank=True)
	remarks = models.TextField(blank=True)
	recorded_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True)

	created_at = models.DateTimeField(auto_now_add=True)

	class Meta:
		abstract = True
		ordering = ["-payment_date", "-id"]

	def __str__(self):
		return f"{self.parent_order.number} {self.currency} {self.amount}"

	@property
	def parent_order(self):
		return getattr(self, self.ORDER_FIELD)

	def amount_in_order_currency(self) -> Decimal:
		"""Payment amount expressed in the order's currency (`exchange_rate` converts between them)."""
		amount = self.amount or Decimal("0.00")
		if self.currency and self.currency != self.parent_order.currency:
			amount = amount * (self.exchange_rate or Decimal("1"))
		return amount.quantize(Decimal("0.01"))

	def save(self, *args, **kwargs):
		super().save(*args, **kwargs)
		try:
			self.parent_order.refresh_payment_status(save=True)
		except Exception:
			logger.exception("Failed to refresh payment status after saving %s %s", self._meta.model_name, self.pk)

	def delete(self, *args, **kwargs):
		order = self.parent_order
		ret = super().delete(*args, **kwargs)
		order.refresh_payment_status(save=True)
		return ret
