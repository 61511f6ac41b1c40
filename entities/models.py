from django.db import models


class Entity(models.Model):
	"""A trading counterparty: buyer, supplier/vendor, partner or other contact."""

	class EntityType(models.TextChoices):
		BUYER = "buyer", "Buyer"
		SUPPLIER = "supplier", "Supplier"
		PARTNER = "partner", "Partner"
		OTHER = "other", "Other"

	class VerificationStatus(models.TextChoices):
		UNVERIFIED = "unverified", "Unverified"
		VERIFIED = "verified", "Verified"

	entity_type = models.CharField(max_length=20, choices=EntityType.choices, default=EntityType.BUYER)
	name = models.CharField(max_length=255)
	contact_person = models.CharField(max_length=255, blank=True)
	email = models.EmailField(blank=True)
	phone = models.CharField(max_length=50, blank=True)
	country = models.CharField(max_length=100, blank=True)
	address = models.TextField(blank=True)
	tax_id = models.CharField(max_length=50, blank=True, verbose_name="Tax ID")
	verification_status = models.CharField(
		max_length=20,
		choices=VerificationStatus.choices,
		default=VerificationStatus.UNVERIFIED,
	)
	notes = models.TextField(blank=True)

	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)

	class Meta:
		ordering = ["name"]
		verbose_name_plural = "entities"

	def __str__(self):
		return self.name or f"Entity #{self.pk}"

	def address_block(self) -> str:
		lines = [self.address.strip() if self.address else "", self.country]
		return "\n".join(line for line in lines if line)
