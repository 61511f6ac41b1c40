import shutil
import tempfile
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.files.base import ContentFile
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework.test import APIClient

from core.models import AuditEvent
from entities.models import Entity
from sales.models import Quote, QuoteItem

from .models import Document


TEMP_MEDIA = tempfile.mkdtemp()


@override_settings(MEDIA_ROOT=TEMP_MEDIA)
class DocumentModelTests(TestCase):
	@classmethod
	def tearDownClass(cls):
		super().tearDownClass()
		shutil.rmtree(TEMP_MEDIA, ignore_errors=True)

	def setUp(self):
		buyer = Entity.objects.create(name="Acme Imports")
		self.quote = Quote.objects.create(buyer=buyer)

	def _document(self, **kwargs):
		doc = Document(doc_type=Document.DocumentType.PACKING_LIST, **kwargs)
		doc.file.save("packing list.pdf", ContentFile(b"%PDF-1.4"), save=False)
		doc.save()
		return doc

	def test_title_defaults_to_file_name(self):
		doc = self._document()
		self.assertTrue(doc.file.name.startswith("documents/packing_list/"))
		self.assertTrue(doc.title)
		self.assertEqual(doc.version, 1)

	def test_versions_per_title_and_related_record(self):
		first = self._document(title="Packing list", related_quote=self.quote)
		second = self._document(title="Packing list", related_quote=self.quote)
		unrelated = self._document(title="Packing list")
		self.assertEqual(first.version, 1)
		self.assertEqual(second.version, 2)
		self.assertEqual(unrelated.version, 1)

	def test_other_type_label_and_expiry(self):
		doc = Document(
			doc_type=Document.DocumentType.OTHER,
			doc_type_other="Fumigation certificate",
			expiry_date=timezone.localdate() - timedelta(days=1),
		)
		self.assertEqual(doc.doc_type_label, "Fumigation certificate")
		self.assertTrue(doc.is_expired)


@override_settings(MEDIA_ROOT=TEMP_MEDIA)
class DocumentApiTests(TestCase):
	@classmethod
	def tearDownClass(cls):
		super().tearDownClass()
		shutil.rmtree(TEMP_MEDIA, ignore_errors=True)

	def setUp(self):
		self.user = get_user_model().objects.create_user(email="exec@example.com", password="x", role="executive")
		self.api = APIClient()
		self.api.force_authenticate(self.user)
		buyer = Entity.objects.create(name="Acme Imports")
		self.quote = Quote.objects.create(buyer=buyer)
		QuoteItem.objects.create(quote=self.quote, product_name="Towels", quantity=Decimal("10"), unit_price=Decimal("5.00"))

	def _upload(self, **data):
		payload = {"file": SimpleUploadedFile("coo.pdf", b"%PDF-1.4"), **data}
		return self.api.post("/api/documents/", payload, format="multipart")

	def test_upload_and_filter(self):
		res = self._upload(doc_type="certificate_of_origin", related_quote=self.quote.pk)
		self.assertEqual(res.status_code, 201)
		self.assertEqual(res.data["title"], "coo")
		self.assertEqual(res.data["uploaded_by"], self.user.pk)
		self.assertTrue(AuditEvent.objects.filter(action=AuditEvent.Action.DOCUMENT_UPLOADED).exists())

		res = self._upload(doc_type="certificate_of_origin", related_quote=self.quote.pk, title="coo")
		self.assertEqual(res.data["version"], 2)

		res = self.api.get("/api/documents/", {"related_quote": self.quote.pk, "doc_type": "certificate_of_origin"})
		self.assertEqual(len(res.data), 2)
		res = self.api.get("/api/documents/", {"doc_type": "insurance"})
		self.assertEqual(len(res.data), 0)

	def test_other_type_needs_description(self):
		res = self._upload(doc_type="other")
		self.assertEqual(res.status_code, 400)
		self.assertIn("doc_type_other", res.data)
		res = self._upload(doc_type="other", doc_type_other="Fumigation certificate")
		self.assertEqual(res.status_code, 201)
		self.assertEqual(res.data["doc_type_label"], "Fumigation certificate")

	def test_store_generated_pdf(self):
		url = f"/api/quotes/{self.quote.pk}/store-pdf/"
		res = self.api.post(url)
		self.assertEqual(res.status_code, 201)
		self.assertEqual(res.data["doc_type"], Document.DocumentType.QUOTE)
		self.assertEqual(res.data["related_quote"], self.quote.pk)
		self.assertTrue(res.data["is_generated"])
		self.assertEqual(res.data["title"], f"Quote {self.quote.number}")

		res = self.api.post(url)
		self.assertEqual(res.data["version"], 2)
		stored = Document.objects.get(pk=res.data["id"])
		with stored.file.open("rb") as fh:
			self.assertTrue(fh.read().startswith(b"%PDF"))
