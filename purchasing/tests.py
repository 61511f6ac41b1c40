from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from core.models import AuditEvent
from entities.models import Entity
from orders.models import ExportOrder

from .models import PurchaseOrder, PurchaseOrderItem, PurchaseOrderPayment


class PurchaseOrderModelTests(TestCase):
	def test_amounts_include_tax(self):
		vendor = Entity.objects.create(name="Cotton Mills", entity_type=Entity.EntityType.SUPPLIER)
		po = PurchaseOrder.objects.create(vendor=vendor)
		PurchaseOrderItem.objects.create(purchase_order=po, description="Yarn", quantity=Decimal("200"), unit_price=Decimal("3.50"), tax_rate=Decimal("5"))
		item = PurchaseOrderItem.objects.create(purchase_order=po, description="Dye", quantity=Decimal("10"), unit_price=Decimal("12.00"))
		po.refresh_from_db()
		self.assertTrue(po.number.startswith("PO-"))
		self.assertEqual(po.subtotal_amount, Decimal("820.00"))
		self.assertEqual(po.tax_amount, Decimal("35.00"))
		self.assertEqual(po.total_amount, Decimal("855.00"))

		item.delete()
		po.refresh_from_db()
		self.assertEqual(po.total_amount, Decimal("735.00"))

	def test_payment_status_follows_payments(self):
		vendor = Entity.objects.create(name="Cotton Mills", entity_type=Entity.EntityType.SUPPLIER)
		po = PurchaseOrder.objects.create(vendor=vendor, currency="INR")
		PurchaseOrderItem.objects.create(purchase_order=po, description="Yarn", quantity=Decimal("100"), unit_price=Decimal("10.00"))
		po.refresh_from_db()
		self.assertEqual(po.payment_status, PurchaseOrder.PaymentStatus.UNPAID)

		advance = PurchaseOrderPayment.objects.create(purchase_order=po, amount=Decimal("250.00"), currency="INR")
		po.refresh_from_db()
		self.assertEqual(po.payment_status, PurchaseOrder.PaymentStatus.PARTIAL)
		self.assertEqual(po.outstanding_balance(), Decimal("750.00"))
		self.assertEqual(advance.payment_method, PurchaseOrder.PaymentMethod.BANK_TRANSFER)

		# 10 USD at 75 INR each covers the rest.
		PurchaseOrderPayment.objects.create(purchase_order=po, amount=Decimal("10.00"), currency="USD", exchange_rate=Decimal("75"))
		po.refresh_from_db()
		self.assertEqual(po.payment_status, PurchaseOrder.PaymentStatus.PAID)

		advance.delete()
		po.refresh_from_db()
		self.assertEqual(po.payment_status, PurchaseOrder.PaymentStatus.PARTIAL)


class PurchaseOrderApiTests(TestCase):
	def setUp(self):
		User = get_user_model()
		self.owner = User.objects.create_user(email="owner@example.com", password="x", role="owner")
		self.executive = User.objects.create_user(email="exec@example.com", password="x", role="executive")
		self.api = APIClient()
		self.api.force_authenticate(self.executive)

		self.vendor = Entity.objects.create(name="Cotton Mills", entity_type=Entity.EntityType.SUPPLIER)
		buyer = Entity.objects.create(name="Acme Imports")
		self.order = ExportOrder.objects.create(buyer=buyer)

	def test_create_and_complete(self):
		res = self.api.post(
			"/api/purchase-orders/",
			{"vendor": self.vendor.pk, "export_order": self.order.pk, "payment_terms": "30 days"},
			format="json",
		)
		self.assertEqual(res.status_code, 201)
		po_id = res.data["id"]
		self.assertEqual(res.data["status"], PurchaseOrder.Status.DRAFT)

		res = self.api.post(
			"/api/purchase-order-items/",
			{"purchase_order": po_id, "description": "Yarn", "quantity": "100", "unit_price": "2.00", "tax_rate": "12"},
			format="json",
		)
		self.assertEqual(res.status_code, 201)

		url = f"/api/purchase-orders/{po_id}/"
		self.assertEqual(self.api.post(url + "complete/").status_code, 400)
		self.assertEqual(self.api.post(url + "submit/").data["status"], PurchaseOrder.Status.PENDING)
		self.assertEqual(self.api.post(url + "approve/").status_code, 403)

		self.api.force_authenticate(self.owner)
		self.assertEqual(self.api.post(url + "approve/").data["status"], PurchaseOrder.Status.APPROVED)
		res = self.api.post(url + "complete/")
		self.assertEqual(res.data["status"], PurchaseOrder.Status.COMPLETED)
		self.assertEqual(res.data["total_amount"], "224.00")

		res = self.api.get("/api/purchase-orders/", {"export_order": self.order.pk})
		self.assertEqual(len(res.data), 1)

	def test_pdf(self):
		po = PurchaseOrder.objects.create(vendor=self.vendor, delivery_address="Plot 4, Tiruppur")
		PurchaseOrderItem.objects.create(purchase_order=po, description="Yarn", quantity=Decimal("10"), unit_price=Decimal("3.00"), tax_rate=Decimal("5"))
		res = self.api.get(f"/api/purchase-orders/{po.pk}/pdf/")
		self.assertEqual(res.status_code, 200)
		self.assertIn(f"{po.number}-V1.pdf", res["Content-Disposition"])
		self.assertTrue(res.content.startswith(b"%PDF"))

	def _submitted_po(self):
		po = PurchaseOrder.objects.create(vendor=self.vendor, export_order=self.order)
		PurchaseOrderItem.objects.create(purchase_order=po, description="Yarn", quantity=Decimal("100"), unit_price=Decimal("2.00"))
		self.api.post(f"/api/purchase-orders/{po.pk}/submit/")
		return po

	def test_reject_needs_reason(self):
		po = self._submitted_po()
		url = f"/api/purchase-orders/{po.pk}/"
		self.api.force_authenticate(self.owner)
		res = self.api.post(url + "reject/")
		self.assertEqual(res.status_code, 400)
		self.assertIn("reason", res.data["error"])

		res = self.api.post(url + "reject/", {"reason": "Price above last quote"}, format="json")
		self.assertEqual(res.data["status"], PurchaseOrder.Status.REJECTED)
		self.assertEqual(res.data["rejection_reason"], "Price above last quote")
		self.assertEqual(self.api.post(url + "complete/").status_code, 400)

	def test_cancel(self):
		po = self._submitted_po()
		url = f"/api/purchase-orders/{po.pk}/"
		self.assertEqual(self.api.post(url + "cancel/").status_code, 400)
		res = self.api.post(url + "cancel/", {"reason": "Vendor out of stock"}, format="json")
		self.assertEqual(res.data["status"], PurchaseOrder.Status.CANCELLED)
		self.assertEqual(res.data["cancel_reason"], "Vendor out of stock")
		self.assertEqual(self.api.get(url + "actions/").data["actions"], [])

		res = self.api.post(
			"/api/purchase-order-items/",
			{"purchase_order": po.pk, "description": "Dye", "quantity": "1", "unit_price": "1"},
			format="json",
		)
		self.assertEqual(res.status_code, 400)

	def test_revise_returns_to_pending(self):
		po = self._submitted_po()
		self.api.force_authenticate(self.owner)
		self.api.post(f"/api/purchase-orders/{po.pk}/approve/")
		PurchaseOrderPayment.objects.create(purchase_order=po, amount=Decimal("50.00"), currency=po.currency)

		res = self.api.post(f"/api/purchase-orders/{po.pk}/revise/")
		self.assertEqual(res.status_code, 201)
		self.assertEqual(res.data["status"], PurchaseOrder.Status.PENDING)
		self.assertEqual(res.data["number"], po.number)
		self.assertEqual(res.data["version"], 2)
		self.assertEqual(res.data["revised_from"], po.pk)
		self.assertIsNone(res.data["approved_at"])
		self.assertEqual(res.data["total_amount"], "200.00")
		self.assertEqual(len(res.data["items"]), 1)
		self.assertEqual(res.data["payment_status"], PurchaseOrder.PaymentStatus.UNPAID)

		po.refresh_from_db()
		self.assertEqual(po.status, PurchaseOrder.Status.REVISED)
		self.assertEqual(po.payment_status, PurchaseOrder.PaymentStatus.PARTIAL)
		self.assertEqual(self.api.post(f"/api/purchase-orders/{po.pk}/revise/").status_code, 400)

	def test_record_payment(self):
		po = self._submitted_po()
		res = self.api.post(
			"/api/purchase-order-payments/",
			{"purchase_order": po.pk, "amount": "120.00", "currency": po.currency, "reference_number": "NEFT-77"},
			format="json",
		)
		self.assertEqual(res.status_code, 201)
		self.assertEqual(res.data["recorded_by"], self.executive.pk)
		self.assertEqual(res.data["payment_method"], PurchaseOrder.PaymentMethod.BANK_TRANSFER)
		event = AuditEvent.objects.get(action=AuditEvent.Action.PAYMENT_RECORDED)
		self.assertIn(po.number, event.summary)

		res = self.api.get(f"/api/purchase-orders/{po.pk}/")
		self.assertEqual(res.data["payment_status"], PurchaseOrder.PaymentStatus.PARTIAL)
		self.assertEqual(res.data["amount_paid"], Decimal("120.00"))
		self.assertEqual(res.data["outstanding_balance"], Decimal("80.00"))

		self.api.post(
			"/api/purchase-order-payments/",
			{"purchase_order": po.pk, "amount": "80.00", "currency": po.currency, "payment_method": "cheque"},
			format="json",
		)
		res = self.api.get("/api/purchase-orders/", {"payment_status": "paid"})
		self.assertEqual([row["id"] for row in res.data], [po.pk])
		res = self.api.get("/api/purchase-order-payments/", {"purchase_order": po.pk})
		self.assertEqual(len(res.data), 2)

	def test_payment_amount_must_be_positive(self):
		po = self._submitted_po()
		res = self.api.post("/api/purchase-order-payments/", {"purchase_order": po.pk, "amount": "0"}, format="json")
		self.assertEqual(res.status_code, 400)
		self.assertFalse(po.payments.exists())
