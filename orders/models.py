from decimal import Decimal
import logging

from django.db import models
from django.db.models import Sum
from django.utils import timezone

from core.models import Payment, PaymentStatus, PaymentTrackingMixin, TradeDocument
from core.workflow import WorkflowError


logger = logging.getLogger(__name__)

# Shipping bills in these states no longer hold a claim on the ordered quantity.
INACTIVE_SHIPPING_BILL_STATUSES = ("revised", "rejected")


class ExportOrder(PaymentTrackingMixin, TradeDocument):
	class Status(models.TextChoices):
		PENDING = "pending", "Pending Approval"
		APPROVED = "approved", "Approved"
		REJECTED = "rejected", "Rejected"
		CONFIRMED = "confirmed", "Confirmed"
		SHIPPED = "shipped", "Shipped"
		COMPLETED = "completed", "Completed"
		REVISED = "revised", "Revised"
		CANCELLED = "cancelled", "Cancelled"

	class PaymentMethod(models.TextChoices):
		LC = "lc", "Letter of Credit"
		TT = "tt", "Telegraphic Transfer"
		DA = "da", "Documents against Acceptance"
		DP = "dp", "Documents against Payment"
		CAD = "cad", "Cash against Documents"
		ADVANCE = "advance", "Advance Payment"

	PaymentStatus = PaymentStatus

	NUMBER_PREFIX = "EO"
	DOCUMENT_TITLE = "Export Order"
	ITEM_PARENT_FIELD = "order"
	TRANSITIONS = {
		"approve": (frozenset({Status.PENDING}), Status.APPROVED),
		"reject": (frozenset({Status.PENDING}), Status.REJECTED),
		"confirm": (frozenset({Status.APPROVED}), Status.CONFIRMED),
		"ship": (frozenset({Status.CONFIRMED}), Status.SHIPPED),
		"complete": (frozenset({Status.SHIPPED}), Status.COMPLETED),
		"cancel": (frozenset({Status.PENDING, Status.APPROVED, Status.CONFIRMED}), Status.CANCELLED),
	}
	REVISABLE_FROM = frozenset({Status.PENDING, Status.APPROVED, Status.REJECTED})
	REVISION_STATUS = Status.PENDING
	CLOSED_STATUSES = frozenset({Status.REVISED, Status.CANCELLED, Status.REJECTED, Status.COMPLETED})
	SHIPPABLE_FROM = frozenset({Status.APPROVED, Status.CONFIRMED, Status.SHIPPED})

	proforma = models.ForeignKey(
		"invoices.ProformaInvoice",
		on_delete=models.SET_NULL,
		null=True,
		blank=True,
		related_name="orders",
	)
	buyer = models.ForeignKey("entities.Entity", on_delete=models.PROTECT, related_name="export_orders")
	status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)

	order_date = models.DateField(default=timezone.localdate)
	buyer_reference = models.CharField(max_length=120, blank=True)
	incoterm = models.CharField(max_length=20, blank=True)
	payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices, blank=True)
	payment_terms = models.CharField(max_length=255, blank=True)
	port_of_loading = models.CharField(max_length=120, blank=True)
	port_of_discharge = models.CharField(max_length=120, blank=True)
	shipment_period = models.CharField(max_length=120, blank=True)
	latest_shipment_date = models.DateField(null=True, blank=True)
	partial_shipment_allowed = models.BooleanField(default=False)
	transhipment_allowed = models.BooleanField(default=False)

	payment_status = models.CharField(max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.UNPAID)

	class Meta(TradeDocument.Meta):
		constraints = [
			models.UniqueConstraint(fields=["number", "version"], name="orders_exportorder_number_version"),
		]

	def active_shipping_bills(self):
		return self.shipping_bills.exclude(status__in=INACTIVE_SHIPPING_BILL_STATUSES)

	def check_transition(self, action: str) -> None:
		# A new version gets fresh item rows, so bills on the old rows would stop counting.
		if action == "revise" and self.active_shipping_bills().exists():
			raise WorkflowError(
				f"Export order {self.number} has active shipping bills; reject them before revising the order."
			)

	def shippable_items(self) -> list[dict]:
		"""Per order line: ordered, already on active shipping bills, and what is left to ship."""
		rows = []
		for item in self.items.all():
			shipped = item.shipped_quantity()
			remaining = max(item.quantity - shipped, Decimal("0.00"))
			rows.append({"item": item, "ordered": item.quantity, "shipped": shipped, "remaining": remaining})
		return rows

	def is_fully_shipped(self) -> bool:
		rows = self.shippable_items()
		return bool(rows) and all(row["remaining"] <= 0 for row in rows)


class OrderItem(models.Model):
	order = models.ForeignKey(ExportOrder, on_delete=models.CASCADE, related_name="items")
	sku = models.ForeignKey("catalog.SKU", on_delete=models.SET_NULL, null=True, blank=True)
	description = models.CharField(max_length=255)
	hsn_code = models.CharField(max_length=12, blank=True)
	unit = models.CharField(max_length=20, default="pcs")
	quantity = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("1.00"))
	unit_price = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))

	class Meta:
		ordering = ["id"]

	def __str__(self):
		return self.description

	def line_total(self) -> Decimal:
		return ((self.quantity or Decimal("0")) * (self.unit_price or Decimal("0"))).quantize(Decimal("0.01"))

	def shipped_quantity(self, *, exclude=None) -> Decimal:
		"""Quantity on active shipping bills, leaving out the bill line `exclude` when given."""
		if not self.pk:
			return Decimal("0.00")
		lines = self.shipping_bill_items.exclude(shipping_bill__status__in=INACTIVE_SHIPPING_BILL_STATUSES)
		if exclude is not None and exclude.pk:
			lines = lines.exclude(pk=exclude.pk)
		agg = lines.aggregate(total=Sum("quantity"))
		return agg["total"] or Decimal("0.00")

	def save(self, *args, **kwargs):
		if self.sku_id:
			if not self.description:
				self.description = self.sku.name
			if not self.hsn_code:
				self.hsn_code = self.sku.effective_hsn_code
		super().save(*args, **kwargs)
		if self.order_id:
			try:
				self.order.recalculate_amounts(save=True)
				self.order.refresh_payment_status(save=True)
			except Exception:
				logger.exception("Failed to recalculate export order %s after saving item %s", self.order_id, self.pk)

	def delete(self, *args, **kwargs):
		order = self.order
		ret = super().delete(*args, **kwargs)
		if order and order.pk:
			order.recalculate_amounts(save=True)
			order.refresh_payment_status(save=True)
		return ret


class OrderPayment(Payment):
	ORDER_FIELD = "order"

	order = models.ForeignKey(ExportOrder, on_delete=models.CASCADE, related_name="payments")
	payment_method = models.CharField(max_length=20, choices=ExportOrder.PaymentMethod.choices, blank=True)
