from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from core.models import AuditEvent
from entities.models import Entity
from shipping.models import ShippingBill

from .models import ExportOrder, OrderItem, OrderPayment


class OrderPaymentTests(TestCase):
	def setUp(self):
		self.buyer = Entity.objects.create(name="Acme Imports")
		self.order = ExportOrder.objects.create(buyer=self.buyer, currency="USD")
		OrderItem.objects.create(order=self.order, description="Towels", quantity=Decimal("100"), unit_price=Decimal("10.00"))

	def test_payment_status_follows_payments(self):
		self.assertEqual(self.order.total_amount, Decimal("1000.00"))
		self.assertEqual(self.order.payment_status, ExportOrder.PaymentStatus.UNPAID)

		first = OrderPayment.objects.create(order=self.order, amount=Decimal("400.00"), currency="USD")
		self.assertEqual(self.order.payment_status, ExportOrder.PaymentStatus.PARTIAL)
		self.assertEqual(self.order.outstanding_balance(), Decimal("600.00"))

		OrderPayment.objects.create(order=self.order, amount=Decimal("600.00"), currency="USD")
		self.order.refresh_from_db()
		self.assertEqual(self.order.payment_status, ExportOrder.PaymentStatus.PAID)

		first.delete()
		self.order.refresh_from_db()
		self.assertEqual(self.order.payment_status, ExportOrder.PaymentStatus.PARTIAL)

	def test_foreign_currency_payment_uses_exchange_rate(self):
		payment = OrderPayment.objects.create(
			order=self.order,
			amount=Decimal("900.00"),
			currency="EUR",
			exchange_rate=Decimal("1.12"),
		)
		self.assertEqual(payment.amount_in_order_currency(), Decimal("1008.00"))
		self.order.refresh_from_db()
		self.assertEqual(self.order.payment_status, ExportOrder.PaymentStatus.PAID)

	def test_adding_items_can_reopen_a_paid_order(self):
		OrderPayment.objects.create(order=self.order, amount=Decimal("1000.00"), currency="USD")
		self.assertEqual(self.order.payment_status, ExportOrder.PaymentStatus.PAID)
		OrderItem.objects.create(order=self.order, description="Napkins", quantity=Decimal("10"), unit_price=Decimal("5.00"))
		self.assertEqual(self.order.payment_status, ExportOrder.PaymentStatus.PARTIAL)


class ExportOrderApiTests(TestCase):
	def setUp(self):
		User = get_user_model()
		self.owner = User.objects.create_user(email="owner@example.com", password="x", role="owner")
		self.executive = User.objects.create_user(email="exec@example.com", password="x", role="executive")
		self.api = APIClient()
		self.api.force_authenticate(self.executive)

		self.buyer = Entity.objects.create(name="Acme Imports", address="Hafenstrasse 1", country="Germany")
		self.order = ExportOrder.objects.create(
			buyer=self.buyer,
			status=ExportOrder.Status.CONFIRMED,
			port_of_loading="Nhava Sheva",
			port_of_discharge="Hamburg",
		)
		self.towels = OrderItem.objects.create(order=self.order, description="Towels", hsn_code="6302", quantity=Decimal("100"), unit_price=Decimal("10.00"))
		self.napkins = OrderItem.objects.create(order=self.order, description="Napkins", quantity=Decimal("50"), unit_price=Decimal("2.00"))

	def _url(self, suffix=""):
		return f"/api/export-orders/{self.order.pk}/{suffix}"

	def test_approval_flow(self):
		order = ExportOrder.objects.create(buyer=self.buyer)
		self.assertEqual(order.status, ExportOrder.Status.PENDING)
		url = f"/api/export-orders/{order.pk}/"
		self.assertEqual(self.api.post(url + "approve/").status_code, 403)
		self.api.force_authenticate(self.owner)
		self.assertEqual(self.api.post(url + "approve/").data["status"], ExportOrder.Status.APPROVED)
		self.assertEqual(self.api.post(url + "confirm/").data["status"], ExportOrder.Status.CONFIRMED)
		self.assertEqual(self.api.post(url + "complete/").status_code, 400)

	def test_reject_needs_reason(self):
		order = ExportOrder.objects.create(buyer=self.buyer)
		url = f"/api/export-orders/{order.pk}/"
		self.api.force_authenticate(self.owner)
		self.assertEqual(self.api.post(url + "reject/").status_code, 400)
		res = self.api.post(url + "reject/", {"reason": "Buyer credit not cleared"}, format="json")
		self.assertEqual(res.data["status"], ExportOrder.Status.REJECTED)
		self.assertEqual(res.data["rejection_reason"], "Buyer credit not cleared")
		self.assertEqual(self.api.post(url + "approve/").status_code, 400)

	def test_cancel(self):
		url = self._url()
		self.assertEqual(self.api.post(url + "cancel/").status_code, 400)
		res = self.api.post(url + "cancel/", {"reason": "Buyer withdrew"}, format="json")
		self.assertEqual(res.data["status"], ExportOrder.Status.CANCELLED)
		self.assertEqual(res.data["cancel_reason"], "Buyer withdrew")
		self.assertEqual(self.api.post(url + "ship/").status_code, 400)
		res = self.api.post("/api/order-items/", {"order": self.order.pk, "description": "Extra", "quantity": "1", "unit_price": "1"}, format="json")
		self.assertEqual(res.status_code, 400)

	def test_revise_returns_to_pending(self):
		order = ExportOrder.objects.create(buyer=self.buyer)
		OrderItem.objects.create(order=order, description="Towels", quantity=Decimal("10"), unit_price=Decimal("4.00"))
		self.api.force_authenticate(self.owner)
		self.api.post(f"/api/export-orders/{order.pk}/approve/")

		res = self.api.post(f"/api/export-orders/{order.pk}/revise/")
		self.assertEqual(res.status_code, 201)
		self.assertEqual(res.data["status"], ExportOrder.Status.PENDING)
		self.assertEqual(res.data["version"], 2)
		self.assertEqual(res.data["revised_from"], order.pk)
		self.assertIsNone(res.data["approved_at"])
		self.assertEqual(len(res.data["items"]), 1)
		self.assertEqual(res.data["total_amount"], "40.00")

		order.refresh_from_db()
		self.assertEqual(order.status, ExportOrder.Status.REVISED)
		self.assertEqual(order.items.count(), 1)

	def test_revise_is_refused_while_shipping_bills_are_active(self):
		order = ExportOrder.objects.create(buyer=self.buyer)
		OrderItem.objects.create(order=order, description="Towels", quantity=Decimal("10"), unit_price=Decimal("4.00"))
		self.api.force_authenticate(self.owner)
		self.api.post(f"/api/export-orders/{order.pk}/approve/")
		res = self.api.post(f"/api/export-orders/{order.pk}/create-shipping-bill/")
		self.assertEqual(res.status_code, 201)
		bill_id = res.data["id"]

		self.assertNotIn("revise", self.api.get(f"/api/export-orders/{order.pk}/actions/").data["actions"])
		res = self.api.post(f"/api/export-orders/{order.pk}/revise/")
		self.assertEqual(res.status_code, 400)
		self.assertIn("shipping bills", res.data["error"])

		self.api.post(f"/api/shipping-bills/{bill_id}/reject/", {"reason": "Wrong consignee"}, format="json")
		res = self.api.post(f"/api/export-orders/{order.pk}/revise/")
		self.assertEqual(res.status_code, 201)
		new_id = res.data["id"]
		self.api.post(f"/api/export-orders/{new_id}/approve/")
		res = self.api.post(f"/api/export-orders/{new_id}/create-shipping-bill/")
		self.assertEqual(res.status_code, 201)

		active = ShippingBill.objects.exclude(status__in=["revised", "rejected"])
		self.assertEqual(active.count(), 1)
		self.assertEqual(sum(item.quantity for bill in active for item in bill.items.all()), Decimal("10"))

	def test_actions_include_shipping(self):
		actions = self.api.get(self._url("actions/")).data["actions"]
		self.assertIn("create-shipping-bill", actions)
		self.assertIn("ship", actions)
		self.assertNotIn("convert", actions)

	def test_record_payment(self):
		res = self.api.post(
			"/api/order-payments/",
			{"order": self.order.pk, "amount": "500.00", "currency": "USD", "payment_method": "tt", "reference_number": "SWIFT-1"},
			format="json",
		)
		self.assertEqual(res.status_code, 201)
		self.assertEqual(res.data["recorded_by"], self.executive.pk)
		self.assertTrue(AuditEvent.objects.filter(action=AuditEvent.Action.PAYMENT_RECORDED).exists())

		res = self.api.get(self._url())
		self.assertEqual(res.data["payment_status"], ExportOrder.PaymentStatus.PARTIAL)
		self.assertEqual(res.data["amount_paid"], Decimal("500.00"))
		self.assertEqual(res.data["outstanding_balance"], Decimal("600.00"))

		res = self.api.get("/api/export-orders/", {"payment_status": "partial"})
		self.assertEqual(len(res.data), 1)
		res = self.api.get("/api/order-payments/", {"order": self.order.pk})
		self.assertEqual(len(res.data), 1)

	def test_payment_amount_must_be_positive(self):
		res = self.api.post("/api/order-payments/", {"order": self.order.pk, "amount": "0"}, format="json")
		self.assertEqual(res.status_code, 400)
		res = self.api.post(
			"/api/order-payments/",
			{"order": self.order.pk, "amount": "10", "currency": "EUR", "exchange_rate": "0"},
			format="json",
		)
		self.assertEqual(res.status_code, 400)

	def test_partial_then_full_shipment(self):
		res = self.api.post(self._url("create-shipping-bill/"))
		self.assertEqual(res.status_code, 201)
		bill = ShippingBill.objects.get(pk=res.data["id"])
		self.assertEqual(bill.consignee_name, "Acme Imports")
		self.assertEqual(bill.fob_value, Decimal("1100.00"))
		self.order.refresh_from_db()
		self.assertEqual(self.order.status, ExportOrder.Status.SHIPPED)

		res = self.api.post(self._url("create-shipping-bill/"))
		self.assertEqual(res.status_code, 400)
		self.assertIn("Nothing is left to ship", res.data["error"])

	def test_split_shipment(self):
		first = ShippingBill.objects.create(export_order=self.order, currency=self.order.currency)
		first.items.create(order_item=self.towels, quantity=Decimal("60"), unit_price=Decimal("10.00"))

		res = self.api.get(self._url("shippable-items/"))
		rows = {row["order_item"]: row for row in res.data}
		self.assertEqual(rows[self.towels.pk]["shipped"], Decimal("60"))
		self.assertEqual(rows[self.towels.pk]["remaining"], Decimal("40"))
		self.assertEqual(rows[self.napkins.pk]["remaining"], Decimal("50"))

		res = self.api.post(self._url("create-shipping-bill/"))
		self.assertEqual(res.status_code, 201)
		second = ShippingBill.objects.get(pk=res.data["id"])
		quantities = {item.order_item_id: item.quantity for item in second.items.all()}
		self.assertEqual(quantities, {self.towels.pk: Decimal("40"), self.napkins.pk: Decimal("50")})
		self.assertEqual(second.fob_value, Decimal("500.00"))
		self.assertTrue(self.order.is_fully_shipped())

	def test_rejected_bill_frees_quantity(self):
		bill = ShippingBill.objects.create(export_order=self.order, status=ShippingBill.Status.REJECTED)
		bill.items.create(order_item=self.towels, quantity=Decimal("100"), unit_price=Decimal("10.00"))
		self.assertEqual(self.towels.shipped_quantity(), Decimal("0.00"))

	def test_pending_order_cannot_ship(self):
		order = ExportOrder.objects.create(buyer=self.buyer)
		OrderItem.objects.create(order=order, description="Towels", quantity=Decimal("1"), unit_price=Decimal("1.00"))
		res = self.api.post(f"/api/export-orders/{order.pk}/create-shipping-bill/")
		self.assertEqual(res.status_code, 400)

	def test_pdf(self):
		res = self.api.get(self._url("pdf/"))
		self.assertEqual(res.status_code, 200)
		self.assertTrue(res.content.startswith(b"%PDF"))
