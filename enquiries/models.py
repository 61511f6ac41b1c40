from decimal import Decimal
import logging

from django.conf import settings
from django.db import models

from core.models import TradeDocument


logger = logging.getLogger(__name__)


class Enquiry(TradeDocument):
	class Status(models.TextChoices):
		NEW = "new", "New"
		CONTACTED = "contacted", "Contacted"
		QUOTED = "quoted", "Quoted"
		WON = "won", "Won"
		LOST = "lost", "Lost"
		CONVERTED = "converted", "Converted"
		REVISED = "revised", "Revised"

	class Source(models.TextChoices):
		EMAIL = "email", "Email"
		PHONE = "phone", "Phone"
		WEBSITE = "website", "Website"
		TRADE_SHOW = "trade_show", "Trade Show"
		REFERRAL = "referral", "Referral"
		OTHER = "other", "Other"

	class Priority(models.TextChoices):
		LOW = "low", "Low"
		MEDIUM = "medium", "Medium"
		HIGH = "high", "High"

	NUMBER_PREFIX = "ENQ"
	DOCUMENT_TITLE = "Enquiry"
	ITEM_PARENT_FIELD = "enquiry"
	TRANSITIONS = {
		"contact": (frozenset({Status.NEW}), Status.CONTACTED),
		"mark_quoted": (frozenset({Status.NEW, Status.CONTACTED}), Status.QUOTED),
		"win": (frozenset({Status.QUOTED}), Status.WON),
		"lose": (frozenset({Status.NEW, Status.CONTACTED, Status.QUOTED}), Status.LOST),
	}
	REVISABLE_FROM = frozenset({Status.NEW, Status.CONTACTED, Status.QUOTED, Status.WON, Status.LOST})
	REVISION_STATUS = Status.NEW
	CONVERTIBLE_FROM = frozenset({Status.NEW, Status.CONTACTED, Status.QUOTED})
	CLOSED_STATUSES = frozenset({Status.REVISED, Status.CONVERTED, Status.WON, Status.LOST})

	entity = models.ForeignKey(
		"entities.Entity",
		on_delete=models.SET_NULL,
		null=True,
		blank=True,
		related_name="enquiries",
	)
	customer_name = models.CharField(max_length=255)
	customer_email = models.EmailField(blank=True)
	customer_phone = models.CharField(max_length=50, blank=True)
	customer_company = models.CharField(max_length=255, blank=True)
	customer_country = models.CharField(max_length=100, blank=True)

	source = models.CharField(max_length=20, choices=Source.choices, default=Source.EMAIL)
	subject = models.CharField(max_length=255, blank=True)
	description = models.TextField(blank=True)
	priority = models.CharField(max_length=10, choices=Priority.choices, default=Priority.MEDIUM)
	status = models.CharField(max_length=20, choices=Status.choices, default=Status.NEW)

	assigned_to = models.ForeignKey(
		settings.AUTH_USER_MODEL,
		on_delete=models.SET_NULL,
		null=True,
		blank=True,
		related_name="assigned_enquiries",
	)
	follow_up_date = models.DateField(null=True, blank=True)

	class Meta(TradeDocument.Meta):
		verbose_name_plural = "enquiries"
		constraints = [
			models.UniqueConstraint(fields=["number", "version"], name="enquiries_enquiry_number_version"),
		]

	@property
	def display_customer(self) -> str:
		return self.customer_company or self.customer_name


class EnquiryItem(models.Model):
	enquiry = models.ForeignKey(Enquiry, on_delete=models.CASCADE, related_name="items")
	sku = models.ForeignKey("catalog.SKU", on_delete=models.SET_NULL, null=True, blank=True)
	product_name = models.CharField(max_length=255)
	description = models.TextField(blank=True)
	quantity = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("1.00"))
	unit = models.CharField(max_length=20, default="pcs")
	target_price = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
	notes = models.CharField(max_length=255, blank=True)

	class Meta:
		ordering = ["id"]

	def __str__(self):
		return self.product_name

	def line_total(self) -> Decimal:
		return ((self.quantity or Decimal("0.00")) * (self.target_price or Decimal("0.00"))).quantize(Decimal("0.01"))

	def save(self, *args, **kwargs):
		if not self.product_name and self.sku_id:
			self.product_name = self.sku.name
		super().save(*args, **kwargs)
		if self.enquiry_id:
			try:
				self.enquiry.recalculate_amounts(save=True)
			except Exception:
				logger.exception("Failed to recalculate enquiry %s after saving item %s", self.enquiry_id, self.pk)

	def delete(self, *args, **kwargs):
		enquiry = self.enquiry
		ret = super().delete(*args, **kwargs)
		if enquiry and enquiry.pk:
			enquiry.recalculate_amounts(save=True)
		return ret
