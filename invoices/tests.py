from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from core.models import AuditEvent
from core.workflow import transition
from entities.models import Entity
from orders.models import ExportOrder

from .models import ProformaInvoice, ProformaItem


class ProformaModelTests(TestCase):
	def test_totals_and_weights(self):
		buyer = Entity.objects.create(name="Acme Imports")
		proforma = ProformaInvoice.objects.create(buyer=buyer)
		ProformaItem.objects.create(
			proforma=proforma,
			description="Towels",
			quantity=Decimal("100"),
			unit_price=Decimal("2.50"),
			net_weight=Decimal("40.5"),
			gross_weight=Decimal("45"),
		)
		ProformaItem.objects.create(proforma=proforma, description="Napkins", quantity=Decimal("10"), unit_price=Decimal("1.25"))
		proforma.refresh_from_db()
		self.assertTrue(proforma.number.startswith("PI-"))
		self.assertEqual(proforma.total_amount, Decimal("262.50"))
		self.assertEqual(proforma.total_net_weight(), Decimal("40.5"))
		self.assertEqual(proforma.total_gross_weight(), Decimal("45"))


class ProformaApiTests(TestCase):
	def setUp(self):
		User = get_user_model()
		self.owner = User.objects.create_user(email="owner@example.com", password="x", role="owner")
		self.executive = User.objects.create_user(email="exec@example.com", password="x", role="executive")
		self.api = APIClient()
		self.api.force_authenticate(self.executive)

		self.buyer = Entity.objects.create(name="Acme Imports")
		self.proforma = ProformaInvoice.objects.create(
			buyer=self.buyer,
			incoterm="CIF",
			port_of_loading="Nhava Sheva",
			port_of_discharge="Hamburg",
			created_by=self.executive,
		)
		ProformaItem.objects.create(proforma=self.proforma, description="Towels", quantity=Decimal("100"), unit_price=Decimal("2.50"))

	def _url(self, suffix=""):
		return f"/api/proforma-invoices/{self.proforma.pk}/{suffix}"

	def test_workflow(self):
		res = self.api.post(self._url("submit/"))
		self.assertEqual(res.data["status"], ProformaInvoice.Status.PENDING)
		self.assertEqual(self.api.post(self._url("approve/")).status_code, 403)

		self.api.force_authenticate(self.owner)
		res = self.api.post(self._url("approve/"))
		self.assertEqual(res.data["status"], ProformaInvoice.Status.APPROVED)
		self.assertTrue(res.data["formatted_number"].endswith("-FN"))

	def test_cancel_needs_reason(self):
		self.assertEqual(self.api.post(self._url("cancel/")).status_code, 400)
		res = self.api.post(self._url("cancel/"), {"reason": "Buyer withdrew"}, format="json")
		self.assertEqual(res.data["status"], ProformaInvoice.Status.CANCELLED)
		self.assertEqual(res.data["cancel_reason"], "Buyer withdrew")

	def test_revise_goes_back_to_pending(self):
		transition(self.proforma, "submit", actor=self.executive)
		transition(self.proforma, "approve", actor=self.owner)
		res = self.api.post(self._url("revise/"))
		self.assertEqual(res.status_code, 201)
		self.assertEqual(res.data["status"], ProformaInvoice.Status.PENDING)
		self.assertEqual(res.data["version"], 2)
		self.assertIsNone(res.data["approved_at"])
		self.assertEqual(res.data["total_amount"], "250.00")

	def test_convert_requires_approval(self):
		res = self.api.post(self._url("convert/"))
		self.assertEqual(res.status_code, 400)
		self.assertFalse(ExportOrder.objects.exists())

	def test_convert_to_export_order(self):
		transition(self.proforma, "submit", actor=self.executive)
		transition(self.proforma, "approve", actor=self.owner)

		res = self.api.post(self._url("convert/"))
		self.assertEqual(res.status_code, 201)
		order = ExportOrder.objects.get(pk=res.data["id"])
		self.assertEqual(order.status, ExportOrder.Status.CONFIRMED)
		self.assertEqual(order.proforma, self.proforma)
		self.assertEqual(order.port_of_discharge, "Hamburg")
		self.assertEqual(order.total_amount, Decimal("250.00"))
		self.assertEqual(order.items.get().quantity, Decimal("100"))

		self.proforma.refresh_from_db()
		self.assertEqual(self.proforma.status, ProformaInvoice.Status.CONVERTED)

	def test_convert_to_commercial_invoice(self):
		self.assertEqual(self.api.post(self._url("convert-commercial/")).status_code, 400)
		self.assertNotIn("convert-commercial", self.api.get(self._url("actions/")).data["actions"])

		transition(self.proforma, "submit", actor=self.executive)
		transition(self.proforma, "approve", actor=self.owner)
		self.assertIn("convert-commercial", self.api.get(self._url("actions/")).data["actions"])

		res = self.api.post(self._url("convert-commercial/"))
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.data["invoice_type"], ProformaInvoice.InvoiceType.COMMERCIAL)
		self.assertEqual(res.data["status"], ProformaInvoice.Status.APPROVED)
		self.assertEqual(res.data["number"], self.proforma.number)
		self.assertIsNotNone(res.data["converted_to_commercial_at"])
		self.assertTrue(AuditEvent.objects.filter(action=AuditEvent.Action.DOCUMENT_CONVERTED, entity_id=self.proforma.pk).exists())

		res = self.api.post(self._url("convert-commercial/"))
		self.assertEqual(res.status_code, 400)
		self.assertIn("already a commercial invoice", res.data["error"])
		self.assertNotIn("convert-commercial", self.api.get(self._url("actions/")).data["actions"])

		res = self.api.get(self._url("pdf/"))
		self.assertEqual(res.status_code, 200)
		self.assertTrue(res.content.startswith(b"%PDF"))

	def test_revising_a_commercial_invoice_starts_over_as_proforma(self):
		transition(self.proforma, "submit", actor=self.executive)
		transition(self.proforma, "approve", actor=self.owner)
		self.api.post(self._url("convert-commercial/"))

		res = self.api.post(self._url("revise/"))
		self.assertEqual(res.status_code, 201)
		self.assertEqual(res.data["invoice_type"], ProformaInvoice.InvoiceType.PROFORMA)
		self.assertIsNone(res.data["converted_to_commercial_at"])

	def test_pdf(self):
		res = self.api.get(self._url("pdf/"))
		self.assertEqual(res.status_code, 200)
		self.assertTrue(res.content.startswith(b"%PDF"))
