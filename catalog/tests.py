from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase
from rest_framework.test import APIClient

from .models import HSNCode, Product, SKU


class HSNCodeTests(TestCase):
	def test_code_is_cleaned_and_chapter_derived(self):
		hsn = HSNCode.objects.create(code="6302.60 10", description="Terry towelling")
		self.assertEqual(hsn.code, "63026010")
		self.assertEqual(hsn.chapter, "63")

	def test_sku_falls_back_to_product_hsn(self):
		product = Product.objects.create(name="Bath towel", hsn_code="6302")
		sku = SKU.objects.create(product=product, sku_code="BT-01", name="Bath towel white")
		self.assertEqual(sku.effective_hsn_code, "6302")
		sku.hsn_code = "63026010"
		self.assertEqual(sku.effective_hsn_code, "63026010")


class CatalogApiTests(TestCase):
	def setUp(self):
		self.user = get_user_model().objects.create_user(email="exec@example.com", password="x", role="executive")
		self.api = APIClient()
		self.api.force_authenticate(self.user)

	def _upload(self, url, name, content):
		return self.api.post(url, {"file": SimpleUploadedFile(name, content)}, format="multipart")

	def test_hsn_search(self):
		HSNCode.objects.create(code="6302", description="Bed linen")
		HSNCode.objects.create(code="0904", description="Pepper")
		res = self.api.get("/api/hsn-codes/", {"q": "63"})
		self.assertEqual([row["code"] for row in res.data], ["6302"])
		res = self.api.get("/api/hsn-codes/", {"q": "pepp"})
		self.assertEqual([row["code"] for row in res.data], ["0904"])

	def test_sku_upload_upserts_by_code(self):
		Product.objects.create(name="Bath towel")
		SKU.objects.create(sku_code="BT-01", name="Old name", base_price=Decimal("1.00"))

		content = (
			b"SKU Code,Name,Product,Unit,Base Price\n"
			b"BT-01,Bath towel white,Bath towel,pcs,\"1,250.50\"\n"
			b"BT-02,Bath towel blue,,dozen,3\n"
			b",Missing code,,,\n"
		)
		res = self._upload("/api/skus/bulk-upload/", "skus.csv", content)
		self.assertEqual(res.status_code, 201)
		self.assertEqual(res.data["created"], 1)
		self.assertEqual(res.data["updated"], 1)
		self.assertEqual(res.data["skipped"], 1)
		self.assertEqual(len(res.data["errors"]), 1)

		sku = SKU.objects.get(sku_code="BT-01")
		self.assertEqual(sku.name, "Bath towel white")
		self.assertEqual(sku.base_price, Decimal("1250.50"))
		self.assertEqual(sku.product.name, "Bath towel")
		self.assertEqual(SKU.objects.get(sku_code="BT-02").unit, "dozen")

	def test_product_upload(self):
		res = self._upload("/api/products/bulk-upload/", "products.csv", b"Name,Category,HSN Code\nTowel,Textiles,6302\n")
		self.assertEqual(res.status_code, 201)
		self.assertEqual(Product.objects.get(name="Towel").hsn_code, "6302")

	def test_entity_file_is_rejected_for_products(self):
		res = self._upload("/api/products/bulk-upload/", "buyers.csv", b"Name,Buyer Country,Tax ID\nAcme,DE,123\n")
		self.assertEqual(res.status_code, 400)
		self.assertIn("entity file", res.data["error"])
		self.assertFalse(Product.objects.exists())

	def test_hsn_upload(self):
		res = self._upload("/api/hsn-codes/bulk-upload/", "hsn.csv", b"HSN Code,Description,GST Rate\n6302.60,Towels,12\n")
		self.assertEqual(res.status_code, 201)
		hsn = HSNCode.objects.get(code="630260")
		self.assertEqual(hsn.chapter, "63")
		self.assertEqual(hsn.gst_rate, Decimal("12"))
