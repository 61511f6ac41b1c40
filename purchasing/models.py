from decimal import Decimal
import logging

from django.db import models
from django.utils import timezone

from core.models import Payment, PaymentStatus, PaymentTrackingMixin, TradeDocument


logger = logging.getLogger(__name__)


class PurchaseOrder(PaymentTrackingMixin, TradeDocument):
	class Status(models.TextChoices):
		DRAFT = "draft", "Draft"
		PENDING = "pending", "Pending Approval"
		APPROVED = "approved", "Approved"
		REJECTED = "rejected", "Rejected"
		COMPLETED = "completed", "Completed"
		REVISED = "revised", "Revised"
		CANCELLED = "cancelled", "Cancelled"

	class PaymentMethod(models.TextChoices):
		BANK_TRANSFER = "bank_transfer", "Bank Transfer"
		CHEQUE = "cheque", "Cheque"
		CASH = "cash", "Cash"
		CARD = "card", "Card"
		OTHER = "other", "Other"

	PaymentStatus = PaymentStatus

	NUMBER_PREFIX = "PO"
	DOCUMENT_TITLE = "Purchase Order"
	ITEM_PARENT_FIELD = "purchase_order"
	TRANSITIONS = {
		"submit": (frozenset({Status.DRAFT}), Status.PENDING),
		"approve": (frozenset({Status.PENDING}), Status.APPROVED),
		"reject": (frozenset({Status.PENDING}), Status.REJECTED),
		"complete": (frozenset({Status.APPROVED}), Status.COMPLETED),
		"cancel": (frozenset({Status.DRAFT, Status.PENDING, Status.APPROVED}), Status.CANCELLED),
	}
	REVISABLE_FROM = frozenset({Status.PENDING, Status.APPROVED, Status.REJECTED})
	REVISION_STATUS = Status.PENDING
	CLOSED_STATUSES = frozenset({Status.REVISED, Status.CANCELLED, Status.REJECTED, Status.COMPLETED})

	vendor = models.ForeignKey("entities.Entity", on_delete=models.PROTECT, related_name="purchase_orders")
	export_order = models.ForeignKey(
		"orders.ExportOrder",
		on_delete=models.SET_NULL,
		null=True,
		blank=True,
		related_name="purchase_orders",
	)
	status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT)

	order_date = models.DateField(default=timezone.localdate)
	expected_delivery_date = models.DateField(null=True, blank=True)
	delivery_address = models.TextField(blank=True)
	payment_terms = models.CharField(max_length=255, blank=True)

	subtotal_amount = models.DecimalField(max_digits=16, decimal_places=2, default=Decimal("0.00"))
	tax_amount = models.DecimalField(max_digits=16, decimal_places=2, default=Decimal("0.00"))

	payment_status = models.CharField(max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.UNPAID)

	class Meta(TradeDocument.Meta):
		constraints = [
			models.UniqueConstraint(fields=["number", "version"], name="purchasing_purchaseorder_number_version"),
		]

	def recalculate_amounts(self, *, save: bool = True) -> None:
		items = list(self.items.all())
		subtotal = sum((it.net_amount() for it in items), Decimal("0.00"))
		tax = sum((it.tax_value() for it in items), Decimal("0.00"))
		self.subtotal_amount = subtotal.quantize(Decimal("0.01"))
		self.tax_amount = tax.quantize(Decimal("0.01"))
		self.total_amount = (subtotal + tax).quantize(Decimal("0.01"))
		if save and self.pk:
			self.save(update_fields=["subtotal_amount", "tax_amount", "total_amount", "updated_at"])


class PurchaseOrderItem(models.Model):
	purchase_order = models.ForeignKey(PurchaseOrder, on_delete=models.CASCADE, related_name="items")
	sku = models.ForeignKey("catalog.SKU", on_delete=models.SET_NULL, null=True, blank=True)
	description = models.CharField(max_length=255)
	unit = models.CharField(max_length=20, default="pcs")
	quantity = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("1.00"))
	unit_price = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
	tax_rate = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0.00"))

	class Meta:
		ordering = ["id"]

	def __str__(self):
		return self.description

	def net_amount(self) -> Decimal:
		return ((self.quantity or Decimal("0")) * (self.unit_price or Decimal("0"))).quantize(Decimal("0.01"))

	def tax_value(self) -> Decimal:
		return (self.net_amount() * (self.tax_rate or Decimal("0")) / Decimal("100")).quantize(Decimal("0.01"))

	def line_total(self) -> Decimal:
		return self.net_amount() + self.tax_value()

	def save(self, *args, **kwargs):
		if self.sku_id and not self.description:
			self.description = self.sku.name
		super().save(*args, **kwargs)
		if self.purchase_order_id:
			try:
				self.purchase_order.recalculate_amounts(save=True)
				self.purchase_order.refresh_payment_status(save=True)
			except Exception:
				logger.exception("Failed to recalculate purchase order %s after saving item %s", self.purchase_order_id, self.pk)

	def delete(self, *args, **kwargs):
		po = self.purchase_order
		ret = super().delete(*args, **kwargs)
		if po and po.pk:
			po.recalculate_amounts(save=True)
			po.refresh_payment_status(save=True)
		return ret


class PurchaseOrderPayment(Payment):
	ORDER_FIELD = "purchase_order"

	purchase_order = models.ForeignKey(PurchaseOrder, on_delete=models.CASCADE, related_name="payments")
	payment_method = models.CharField(
		max_length=20,
		choices=PurchaseOrder.PaymentMethod.choices,
		default=PurchaseOrder.PaymentMethod.BANK_TRANSFER,
	)
