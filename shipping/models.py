from decimal import Decimal
import logging

from django.db import models
from django.utils import timezone

from core.models import TradeDocument


logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


def _pct(amount: Decimal, rate: Decimal | None) -> Decimal:
	return (amount * (rate or Decimal("0")) / Decimal("100")).quantize(Decimal("0.01"))


class ShippingBill(TradeDocument):
	"""Customs shipping bill raised against an export order.

	FOB is the sum of the item FOB values; the declared total adds freight and
	insurance on top of it.
	"""

	class Status(models.TextChoices):
		DRAFTED = "drafted", "Drafted"
		PENDING = "pending", "Pending"
		FILED = "filed", "Filed"
		REJECTED = "rejected", "Rejected"
		CLEARED = "cleared", "Cleared"
		REVISED = "revised", "Revised"

	NUMBER_PREFIX = "SB"
	DOCUMENT_TITLE = "Shipping Bill"
	ITEM_PARENT_FIELD = "shipping_bill"
	TRANSITIONS = {
		"submit": (frozenset({Status.DRAFTED}), Status.PENDING),
		"approve": (frozenset({Status.DRAFTED, Status.PENDING}), Status.FILED),
		"reject": (frozenset({Status.DRAFTED, Status.PENDING}), Status.REJECTED),
		"clear": (frozenset({Status.FILED}), Status.CLEARED),
	}
	REVISABLE_FROM = frozenset({Status.DRAFTED, Status.PENDING, Status.FILED, Status.REJECTED})
	REVISION_STATUS = Status.DRAFTED
	CLOSED_STATUSES = frozenset({Status.REVISED, Status.REJECTED, Status.CLEARED})
	LOCKED_STATUSES = frozenset({Status.REVISED, Status.CLEARED})

	export_order = models.ForeignKey("orders.ExportOrder", on_delete=models.PROTECT, related_name="shipping_bills")
	proforma = models.ForeignKey(
		"invoices.ProformaInvoice",
		on_delete=models.SET_NULL,
		null=True,
		blank=True,
		related_name="shipping_bills",
	)
	status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFTED)

	customs_sb_number = models.CharField(max_length=40, blank=True, verbose_name="customs SB number")
	sb_date = models.DateField(default=timezone.localdate)
	port_code = models.CharField(max_length=20, blank=True)
	customs_house = models.CharField(max_length=120, blank=True)
	customs_officer_name = models.CharField(max_length=120, blank=True)

	vessel_name = models.CharField(max_length=120, blank=True)
	voyage_number = models.CharField(max_length=60, blank=True)
	port_of_loading = models.CharField(max_length=120, blank=True)
	port_of_discharge = models.CharField(max_length=120, blank=True)
	number_of_packages = models.PositiveIntegerField(default=0)
	gross_weight = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal("0.000"))
	net_weight = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal("0.000"))
	ad_code = models.CharField(max_length=20, blank=True, verbose_name="AD code")

	consignee_name = models.CharField(max_length=255, blank=True)
	consignee_address = models.TextField(blank=True)
	consignee_country = models.CharField(max_length=100, blank=True)

	fob_value = models.DecimalField(max_digits=16, decimal_places=2, default=ZERO)
	freight_value = models.DecimalField(max_digits=16, decimal_places=2, default=ZERO)
	insurance_value = models.DecimalField(max_digits=16, decimal_places=2, default=ZERO)
	total_value = models.DecimalField(max_digits=16, decimal_places=2, default=ZERO)

	let_export_order_number = models.CharField(max_length=60, blank=True)
	let_export_date = models.DateField(null=True, blank=True)
	filed_at = models.DateTimeField(null=True, blank=True)
	cleared_at = models.DateTimeField(null=True, blank=True)

	class Meta(TradeDocument.Meta):
		constraints = [
			models.UniqueConstraint(fields=["number", "version"], name="shipping_shippingbill_number_version"),
		]

	def save(self, *args, **kwargs):
		self.total_value = (
			(self.fob_value or ZERO) + (self.freight_value or ZERO) + (self.insurance_value or ZERO)
		).quantize(Decimal("0.01"))
		self.total_amount = self.total_value
		update_fields = kwargs.get("update_fields")
		if update_fields is not None and any(f in update_fields for f in ("fob_value", "freight_value", "insurance_value")):
			kwargs["update_fields"] = list(dict.fromkeys([*update_fields, "total_value", "total_amount"]))
		super().save(*args, **kwargs)

	def recalculate_amounts(self, *, save: bool = True) -> None:
		"""FOB = Σ item FOB; total = FOB + freight + insurance."""
		fob = sum((it.fob_value or ZERO for it in self.items.all()), ZERO)
		self.fob_value = fob.quantize(Decimal("0.01"))
		if save and self.pk:
			self.save(update_fields=["fob_value", "updated_at"])
		else:
			self.total_value = self.fob_value + (self.freight_value or ZERO) + (self.insurance_value or ZERO)
			self.total_amount = self.total_value

	def total_duty(self) -> Decimal:
		return sum((it.export_duty_amount + it.cess_amount for it in self.items.all()), ZERO)

	def after_transition(self, action: str, *, actor=None) -> list[str]:
		if action == "approve":
			self.filed_at = timezone.now()
			return ["filed_at"]
		if action == "clear":
			self.cleared_at = timezone.now()
			return ["cleared_at"]
		return []

	def reset_for_revision(self) -> None:
		self.filed_at = None
		self.cleared_at = None


class ShippingBillItem(models.Model):
	shipping_bill = models.ForeignKey(ShippingBill, on_delete=models.CASCADE, related_name="items")
	order_item = models.ForeignKey(
		"orders.OrderItem",
		on_delete=models.SET_NULL,
		null=True,
		blank=True,
		related_name="shipping_bill_items",
	)
	hsn_code = models.CharField(max_length=12, blank=True)
	description = models.CharField(max_length=255)
	quantity = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("1.00"))
	unit = models.CharField(max_length=20, default="pcs")
	unit_price = models.DecimalField(max_digits=14, decimal_places=2, default=ZERO)

	fob_value = models.DecimalField(max_digits=16, decimal_places=2, default=ZERO)
	freight_allocation = models.DecimalField(max_digits=16, decimal_places=2, default=ZERO)
	insurance_allocation = models.DecimalField(max_digits=16, decimal_places=2, default=ZERO)
	assessable_value = models.DecimalField(max_digits=16, decimal_places=2, default=ZERO)
	export_duty_rate = models.DecimalField(max_digits=5, decimal_places=2, default=ZERO)
	export_duty_amount = models.DecimalField(max_digits=16, decimal_places=2, default=ZERO)
	cess_rate = models.DecimalField(max_digits=5, decimal_places=2, default=ZERO)
	cess_amount = models.DecimalField(max_digits=16, decimal_places=2, default=ZERO)

	class Meta:
		ordering = ["id"]

	def __str__(self):
		return self.description

	def compute_values(self) -> None:
		"""Derive FOB, assessable value and duty/cess amounts from quantity, price and rates."""
		self.fob_value = ((self.quantity or ZERO) * (self.unit_price or ZERO)).quantize(Decimal("0.01"))
		self.assessable_value = (
			self.fob_value - (self.freight_allocation or ZERO) - (self.insurance_allocation or ZERO)
		).quantize(Decimal("0.01"))
		self.export_duty_amount = _pct(self.assessable_value, self.export_duty_rate)
		self.cess_amount = _pct(self.assessable_value, self.cess_rate)

	def line_total(self) -> Decimal:
		return self.fob_value

	def save(self, *args, **kwargs):
		if self.order_item_id:
			if not self.description:
				self.description = self.order_item.description
			if not self.hsn_code:
				self.hsn_code = self.order_item.hsn_code
		self.compute_values()
		super().save(*args, **kwargs)
		if self.shipping_bill_id:
			try:
				self.shipping_bill.recalculate_amounts(save=True)
			except Exception:
				logger.exception("Failed to recalculate shipping bill %s after saving item %s", self.shipping_bill_id, self.pk)

	def delete(self, *args, **kwargs):
		bill = self.shipping_bill
		ret = super().delete(*args, **kwargs)
		if bill and bill.pk:
			bill.recalculate_amounts(save=True)
		return ret
