from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase
from rest_framework.test import APIClient

from core.models import AuditEvent

from .models import Entity


class EntityBulkUploadTests(TestCase):
	def setUp(self):
		self.user = get_user_model().objects.create_user(email="exec@example.com", password="x", role="executive")
		self.api = APIClient()
		self.api.force_authenticate(self.user)

	def _upload(self, name, content):
		return self.api.post("/api/entities/bulk-upload/", {"file": SimpleUploadedFile(name, content)}, format="multipart")

	def test_csv_creates_entities(self):
		content = (
			b"Name,Type,Country,Email,Tax ID\n"
			b"Acme Imports,buyer,Germany,buy@acme.de,DE123\n"
			b"Cotton Mills,supplier,India,,\n"
			b"Odd One,alien,,,\n"
			b",buyer,France,,\n"
		)
		res = self._upload("entities.csv", content)
		self.assertEqual(res.status_code, 201)
		self.assertEqual(res.data["created"], 3)
		self.assertEqual(res.data["skipped"], 1)
		self.assertEqual(Entity.objects.get(name="Cotton Mills").entity_type, Entity.EntityType.SUPPLIER)
		self.assertEqual(Entity.objects.get(name="Odd One").entity_type, Entity.EntityType.OTHER)
		self.assertEqual(Entity.objects.get(name="Acme Imports").tax_id, "DE123")
		self.assertTrue(AuditEvent.objects.filter(action=AuditEvent.Action.BULK_UPLOAD).exists())

	def test_product_file_is_rejected(self):
		res = self._upload("products.csv", b"Name,Category,HSN Code\nTowel,Textiles,6302\n")
		self.assertEqual(res.status_code, 400)
		self.assertIn("product file", res.data["error"])
		self.assertFalse(Entity.objects.exists())

	def test_file_without_valid_rows_is_rejected(self):
		res = self._upload("entities.csv", b"Name,Country\n,India\n")
		self.assertEqual(res.status_code, 400)

	def test_unsupported_extension(self):
		res = self._upload("entities.pdf", b"%PDF-1.4")
		self.assertEqual(res.status_code, 400)

	def test_viewer_cannot_upload(self):
		viewer = get_user_model().objects.create_user(email="viewer@example.com", password="x", role="viewer")
		self.api.force_authenticate(viewer)
		res = self._upload("entities.csv", b"Name\nAcme\n")
		self.assertEqual(res.status_code, 403)


class EntityApiTests(TestCase):
	def setUp(self):
		self.user = get_user_model().objects.create_user(email="exec@example.com", password="x", role="executive")
		self.api = APIClient()
		self.api.force_authenticate(self.user)
		Entity.objects.create(name="Acme Imports", entity_type=Entity.EntityType.BUYER)
		Entity.objects.create(name="Cotton Mills", entity_type=Entity.EntityType.SUPPLIER)

	def test_filter_by_type(self):
		res = self.api.get("/api/entities/", {"type": "supplier"})
		self.assertEqual(res.status_code, 200)
		self.assertEqual([row["name"] for row in res.data], ["Cotton Mills"])
