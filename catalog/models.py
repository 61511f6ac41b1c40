from decimal import Decimal

from django.db import models


class HSNCode(models.Model):
	"""Harmonized tariff classification used on export documents."""

	code = models.CharField(max_length=12, unique=True)
	description = models.CharField(max_length=255, blank=True)
	chapter = models.CharField(max_length=2, blank=True, editable=False)
	gst_rate = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0.00"))

	class Meta:
		ordering = ["code"]
		verbose_name = "HSN code"

	def __str__(self):
		return f"{self.code} {self.description}".strip()

	def save(self, *args, **kwargs):
		digits = "".join(ch for ch in (self.code or "") if ch.isdigit())
		if digits:
			self.code = digits
		self.chapter = self.code[:2]
		super().save(*args, **kwargs)


class Product(models.Model):
	name = models.CharField(max_length=255)
	category = models.CharField(max_length=120, blank=True)
	description = models.TextField(blank=True)
	hsn_code = models.CharField(max_length=12, blank=True)
	is_active = models.BooleanField(default=True)

	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)

	class Meta:
		ordering = ["name"]

	def __str__(self):
		return self.name


class SKU(models.Model):
	product = models.ForeignKey(Product, on_delete=models.SET_NULL, null=True, blank=True, related_name="skus")
	sku_code = models.CharField(max_length=60, unique=True)
	name = models.CharField(max_length=255)
	unit = models.CharField(max_length=20, default="pcs")
	base_price = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
	hsn_code = models.CharField(max_length=12, blank=True)
	is_active = models.BooleanField(default=True)

	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)

	class Meta:
		ordering = ["sku_code"]
		verbose_name = "SKU"

	def __str__(self):
		return f"{self.sku_code} - {self.name}"

	@property
	def effective_hsn_code(self) -> str:
		if self.hsn_code:
			return self.hsn_code
		return getattr(self.product, "hsn_code", "") or ""
