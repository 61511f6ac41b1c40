from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase
from rest_framework.test import APIClient

from catalog.models import SKU
from entities.models import Entity
from sales.models import Quote

from .models import Enquiry, EnquiryItem


class EnquiryModelTests(TestCase):
	def test_number_and_totals(self):
		enquiry = Enquiry.objects.create(customer_name="Hans Muller", customer_company="Acme GmbH")
		self.assertTrue(enquiry.number.startswith("ENQ-"))
		self.assertEqual(enquiry.formatted_number, f"{enquiry.number}-V1")
		self.assertEqual(enquiry.display_customer, "Acme GmbH")

		EnquiryItem.objects.create(enquiry=enquiry, product_name="Towels", quantity=Decimal("100"), target_price=Decimal("2.50"))
		EnquiryItem.objects.create(enquiry=enquiry, product_name="Napkins", quantity=Decimal("10"))
		enquiry.refresh_from_db()
		self.assertEqual(enquiry.total_amount, Decimal("250.00"))

	def test_item_name_defaults_to_sku(self):
		sku = SKU.objects.create(sku_code="BT-01", name="Bath towel")
		enquiry = Enquiry.objects.create(customer_name="Hans")
		item = EnquiryItem.objects.create(enquiry=enquiry, sku=sku)
		self.assertEqual(item.product_name, "Bath towel")


class EnquiryApiTests(TestCase):
	def setUp(self):
		self.user = get_user_model().objects.create_user(email="exec@example.com", password="x", role="executive")
		self.api = APIClient()
		self.api.force_authenticate(self.user)
		self.enquiry = Enquiry.objects.create(
			customer_name="Hans Muller",
			customer_company="Acme GmbH",
			customer_email="hans@acme.de",
			customer_country="Germany",
			created_by=self.user,
		)
		self.sku = SKU.objects.create(sku_code="BT-01", name="Bath towel", base_price=Decimal("4.00"))
		EnquiryItem.objects.create(enquiry=self.enquiry, product_name="Towels", quantity=Decimal("100"), target_price=Decimal("2.50"))
		EnquiryItem.objects.create(enquiry=self.enquiry, sku=self.sku, quantity=Decimal("10"))

	def _url(self, suffix=""):
		return f"/api/enquiries/{self.enquiry.pk}/{suffix}"

	def test_create_assigns_number(self):
		res = self.api.post("/api/enquiries/", {"customer_name": "Jane", "source": "trade_show"}, format="json")
		self.assertEqual(res.status_code, 201)
		self.assertTrue(res.data["number"].startswith("ENQ-"))
		self.assertEqual(res.data["status"], Enquiry.Status.NEW)

	def test_status_flow(self):
		res = self.api.post(self._url("contact/"))
		self.assertEqual(res.data["status"], Enquiry.Status.CONTACTED)
		res = self.api.post(self._url("mark-quoted/"))
		self.assertEqual(res.data["status"], Enquiry.Status.QUOTED)
		res = self.api.post(self._url("win/"))
		self.assertEqual(res.data["status"], Enquiry.Status.WON)
		self.assertTrue(res.data["formatted_number"].endswith("-FN"))

		res = self.api.post(self._url("contact/"))
		self.assertEqual(res.status_code, 400)
		self.assertIn("error", res.data)

	def test_set_status(self):
		res = self.api.post(self._url("set-status/"), {"status": "lost"}, format="json")
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.data["status"], Enquiry.Status.LOST)

	def test_revise(self):
		res = self.api.post(self._url("revise/"))
		self.assertEqual(res.status_code, 201)
		self.assertEqual(res.data["version"], 2)
		self.assertEqual(res.data["number"], self.enquiry.number)
		self.assertEqual(len(res.data["items"]), 2)
		self.enquiry.refresh_from_db()
		self.assertEqual(self.enquiry.status, Enquiry.Status.REVISED)

	def test_convert_creates_buyer_and_quote(self):
		res = self.api.post(self._url("convert/"))
		self.assertEqual(res.status_code, 201)

		quote = Quote.objects.get(pk=res.data["id"])
		self.assertEqual(quote.enquiry, self.enquiry)
		self.assertEqual(quote.buyer.name, "Acme GmbH")
		self.assertEqual(quote.buyer.entity_type, Entity.EntityType.BUYER)
		prices = sorted(item.unit_price for item in quote.items.all())
		self.assertEqual(prices, [Decimal("2.50"), Decimal("4.00")])
		self.assertEqual(quote.total_amount, Decimal("290.00"))

		self.enquiry.refresh_from_db()
		self.assertEqual(self.enquiry.status, Enquiry.Status.CONVERTED)
		self.assertEqual(self.enquiry.entity, quote.buyer)

		res = self.api.post(self._url("convert/"))
		self.assertEqual(res.status_code, 400)

	def test_convert_reuses_existing_buyer(self):
		buyer = Entity.objects.create(name="ACME GMBH")
		self.api.post(self._url("convert/"))
		self.assertEqual(Quote.objects.get().buyer, buyer)
		self.assertEqual(Entity.objects.count(), 1)

	def test_pdf(self):
		res = self.api.get(self._url("pdf/"))
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res["Content-Type"], "application/pdf")
		self.assertIn(f"{self.enquiry.number}-V1.pdf", res["Content-Disposition"])
		self.assertTrue(res.content.startswith(b"%PDF"))

	def test_bulk_upload(self):
		content = (
			b"Customer Name,Company,Country,Source,Product,Qty,Target Price\n"
			b"Jane Doe,Doe Ltd,UK,Trade Show,Towels,50,3.00\n"
			b"Raj,,India,,,,\n"
		)
		res = self.api.post("/api/enquiries/bulk-upload/", {"file": SimpleUploadedFile("enquiries.csv", content)}, format="multipart")
		self.assertEqual(res.status_code, 201)
		self.assertEqual(res.data["created"], 2)
		jane = Enquiry.objects.get(customer_name="Jane Doe")
		self.assertEqual(jane.source, Enquiry.Source.TRADE_SHOW)
		self.assertEqual(jane.total_amount, Decimal("150.00"))
		self.assertEqual(Enquiry.objects.get(customer_name="Raj").source, Enquiry.Source.OTHER)

	def test_viewer_cannot_convert(self):
		viewer = get_user_model().objects.create_user(email="viewer@example.com", password="x", role="viewer")
		self.api.force_authenticate(viewer)
		self.assertEqual(self.api.post(self._url("convert/")).status_code, 403)
		self.assertEqual(self.api.get(self._url()).status_code, 200)
