from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from entities.models import Entity
from orders.models import ExportOrder, OrderItem

from .models import ShippingBill, ShippingBillItem


class ShippingBillModelTests(TestCase):
	def setUp(self):
		buyer = Entity.objects.create(name="Acme Imports")
		self.order = ExportOrder.objects.create(buyer=buyer, status=ExportOrder.Status.CONFIRMED)
		self.item = OrderItem.objects.create(order=self.order, description="Towels", hsn_code="6302", quantity=Decimal("100"), unit_price=Decimal("10.00"))
		self.bill = ShippingBill.objects.create(export_order=self.order)

	def test_item_values(self):
		line = ShippingBillItem.objects.create(
			shipping_bill=self.bill,
			order_item=self.item,
			quantity=Decimal("100"),
			unit_price=Decimal("10.00"),
			freight_allocation=Decimal("50.00"),
			insurance_allocation=Decimal("10.00"),
			export_duty_rate=Decimal("2.5"),
			cess_rate=Decimal("1"),
		)
		self.assertEqual(line.description, "Towels")
		self.assertEqual(line.hsn_code, "6302")
		self.assertEqual(line.fob_value, Decimal("1000.00"))
		self.assertEqual(line.assessable_value, Decimal("940.00"))
		self.assertEqual(line.export_duty_amount, Decimal("23.50"))
		self.assertEqual(line.cess_amount, Decimal("9.40"))
		self.assertEqual(self.bill.total_duty(), Decimal("32.90"))

	def test_total_value_adds_freight_and_insurance(self):
		ShippingBillItem.objects.create(shipping_bill=self.bill, order_item=self.item, quantity=Decimal("20"), unit_price=Decimal("10.00"))
		self.bill.freight_value = Decimal("30.00")
		self.bill.insurance_value = Decimal("5.00")
		self.bill.save()
		self.bill.refresh_from_db()
		self.assertEqual(self.bill.fob_value, Decimal("200.00"))
		self.assertEqual(self.bill.total_value, Decimal("235.00"))
		self.assertEqual(self.bill.total_amount, Decimal("235.00"))

		ShippingBillItem.objects.create(shipping_bill=self.bill, order_item=self.item, quantity=Decimal("5"), unit_price=Decimal("10.00"))
		self.bill.refresh_from_db()
		self.assertEqual(self.bill.fob_value, Decimal("250.00"))
		self.assertEqual(self.bill.total_value, Decimal("285.00"))


class ShippingBillApiTests(TestCase):
	def setUp(self):
		User = get_user_model()
		self.owner = User.objects.create_user(email="owner@example.com", password="x", role="owner")
		self.executive = User.objects.create_user(email="exec@example.com", password="x", role="executive")
		self.api = APIClient()
		self.api.force_authenticate(self.executive)

		buyer = Entity.objects.create(name="Acme Imports")
		self.order = ExportOrder.objects.create(buyer=buyer, status=ExportOrder.Status.CONFIRMED)
		self.item = OrderItem.objects.create(order=self.order, description="Towels", quantity=Decimal("100"), unit_price=Decimal("10.00"))
		res = self.api.post(f"/api/export-orders/{self.order.pk}/create-shipping-bill/")
		self.bill = ShippingBill.objects.get(pk=res.data["id"])

	def _url(self, suffix=""):
		return f"/api/shipping-bills/{self.bill.pk}/{suffix}"

	def test_file_and_clear(self):
		self.assertEqual(self.api.post(self._url("file/")).status_code, 403)

		self.api.force_authenticate(self.owner)
		res = self.api.post(self._url("file/"))
		self.assertEqual(res.data["status"], ShippingBill.Status.FILED)
		self.assertIsNotNone(res.data["filed_at"])

		res = self.api.post(self._url("clear/"))
		self.assertEqual(res.data["status"], ShippingBill.Status.CLEARED)
		self.assertIsNotNone(res.data["cleared_at"])

		self.assertEqual(self.api.post(self._url("revise/")).status_code, 400)
		line = self.bill.items.get()
		res = self.api.patch(f"/api/shipping-bill-items/{line.pk}/", {"quantity": "1"}, format="json")
		self.assertEqual(res.status_code, 400)

	def test_revise_releases_old_version_quantity(self):
		self.assertEqual(self.item.shipped_quantity(), Decimal("100"))
		res = self.api.post(self._url("revise/"))
		self.assertEqual(res.status_code, 201)
		self.assertEqual(res.data["status"], ShippingBill.Status.DRAFTED)
		self.assertEqual(res.data["version"], 2)
		self.assertEqual(self.item.shipped_quantity(), Decimal("100"))
		self.bill.refresh_from_db()
		self.assertEqual(self.bill.status, ShippingBill.Status.REVISED)

	def test_item_quantity_cannot_exceed_what_is_left(self):
		line = self.bill.items.get()
		res = self.api.patch(f"/api/shipping-bill-items/{line.pk}/", {"quantity": "500"}, format="json")
		self.assertEqual(res.status_code, 400)
		self.assertIn("quantity", res.data)
		self.assertEqual(self.item.shipped_quantity(), Decimal("100"))

		res = self.api.patch(f"/api/shipping-bill-items/{line.pk}/", {"quantity": "60"}, format="json")
		self.assertEqual(res.status_code, 200)
		self.assertEqual(self.item.shipped_quantity(), Decimal("60"))

		res = self.api.post(f"/api/export-orders/{self.order.pk}/create-shipping-bill/")
		self.assertEqual(res.status_code, 201)
		second = ShippingBill.objects.get(pk=res.data["id"]).items.get()
		self.assertEqual(second.quantity, Decimal("40"))

		res = self.api.patch(f"/api/shipping-bill-items/{second.pk}/", {"quantity": "41"}, format="json")
		self.assertEqual(res.status_code, 400)
		res = self.api.post(
			"/api/shipping-bill-items/",
			{"shipping_bill": self.bill.pk, "order_item": self.item.pk, "description": "Towels", "quantity": "1", "unit_price": "10.00"},
			format="json",
		)
		self.assertEqual(res.status_code, 400)
		res = self.api.patch(f"/api/shipping-bill-items/{line.pk}/", {"quantity": "0"}, format="json")
		self.assertEqual(res.status_code, 400)

	def test_item_must_belong_to_the_order(self):
		other_order = ExportOrder.objects.create(buyer=self.order.buyer)
		foreign = OrderItem.objects.create(order=other_order, description="Napkins", quantity=Decimal("5"), unit_price=Decimal("1.00"))
		res = self.api.post(
			"/api/shipping-bill-items/",
			{"shipping_bill": self.bill.pk, "order_item": foreign.pk, "description": "Napkins", "quantity": "5", "unit_price": "1.00"},
			format="json",
		)
		self.assertEqual(res.status_code, 400)
		self.assertIn("order_item", res.data)

	def test_filter_and_pdf(self):
		res = self.api.get("/api/shipping-bills/", {"export_order": self.order.pk})
		self.assertEqual(len(res.data), 1)
		self.assertEqual(res.data[0]["total_value"], "1000.00")

		res = self.api.get(self._url("pdf/"))
		self.assertEqual(res.status_code, 200)
		self.assertTrue(res.content.startswith(b"%PDF"))
