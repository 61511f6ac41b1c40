from datetime import date, timedelta
from decimal import Decimal
from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework.test import APIClient

from core.models import AuditEvent, Company, CompanyBank
from core.workflow import WorkflowError, transition
from entities.models import Entity
from invoices.models import ProformaInvoice

from .models import Quote, QuoteItem


class QuoteModelTests(TestCase):
	def setUp(self):
		self.buyer = Entity.objects.create(name="Acme Imports")

	def test_amounts_with_discount_and_tax(self):
		quote = Quote.objects.create(buyer=self.buyer)
		item = QuoteItem.objects.create(
			quote=quote,
			product_name="Towels",
			quantity=Decimal("10"),
			unit_price=Decimal("100.00"),
			discount_percent=Decimal("5"),
			tax_percent=Decimal("10"),
		)
		quote.refresh_from_db()
		self.assertEqual(quote.subtotal_amount, Decimal("1000.00"))
		self.assertEqual(quote.discount_amount, Decimal("50.00"))
		self.assertEqual(quote.tax_amount, Decimal("95.00"))
		self.assertEqual(quote.total_amount, Decimal("1045.00"))
		self.assertEqual(item.total_price, Decimal("1045.00"))
		self.assertEqual(item.net_unit_price(), Decimal("95.00"))

		item.delete()
		quote.refresh_from_db()
		self.assertEqual(quote.total_amount, Decimal("0.00"))

	def test_validity_defaults_from_quote_date(self):
		quote = Quote.objects.create(buyer=self.buyer, quote_date=date(2025, 1, 1))
		self.assertEqual(quote.valid_until, date(2025, 1, 31))

	def test_approval_required_for_high_value(self):
		quote = Quote.objects.create(buyer=self.buyer)
		QuoteItem.objects.create(quote=quote, product_name="Towels", quantity=Decimal("1000"), unit_price=Decimal("20.00"))
		self.assertTrue(quote.approval_required())

	def test_approval_required_for_heavy_discount(self):
		quote = Quote.objects.create(buyer=self.buyer)
		QuoteItem.objects.create(
			quote=quote,
			product_name="Towels",
			quantity=Decimal("10"),
			unit_price=Decimal("100.00"),
			discount_percent=Decimal("15"),
		)
		self.assertTrue(quote.approval_required())
		with self.assertRaises(WorkflowError):
			transition(quote, "send")

	@override_settings(QUOTE_APPROVAL_VALUE_THRESHOLD="100")
	def test_threshold_comes_from_settings(self):
		quote = Quote.objects.create(buyer=self.buyer)
		QuoteItem.objects.create(quote=quote, product_name="Towels", quantity=Decimal("10"), unit_price=Decimal("20.00"))
		self.assertTrue(quote.approval_required())

	def test_small_quote_can_be_sent_directly(self):
		quote = Quote.objects.create(buyer=self.buyer)
		QuoteItem.objects.create(quote=quote, product_name="Towels", quantity=Decimal("10"), unit_price=Decimal("20.00"))
		self.assertFalse(quote.approval_required())
		transition(quote, "send")
		self.assertEqual(quote.status, Quote.Status.SENT)
		self.assertIsNotNone(quote.sent_at)

	def test_refresh_expiry_status(self):
		quote = Quote.objects.create(buyer=self.buyer, quote_date=date(2020, 1, 1))
		self.assertTrue(quote.is_expired())
		self.assertTrue(quote.refresh_expiry_status())
		self.assertEqual(quote.status, Quote.Status.EXPIRED)
		self.assertFalse(quote.refresh_expiry_status())


class ExpireQuotesCommandTests(TestCase):
	def setUp(self):
		buyer = Entity.objects.create(name="Acme Imports")
		self.old = Quote.objects.create(buyer=buyer, quote_date=date(2020, 1, 1))
		self.accepted = Quote.objects.create(buyer=buyer, quote_date=date(2020, 1, 1), status=Quote.Status.ACCEPTED)
		self.fresh = Quote.objects.create(buyer=buyer, valid_until=timezone.localdate() + timedelta(days=5))

	def test_dry_run_changes_nothing(self):
		out = StringIO()
		call_command("expire_quotes", "--dry-run", stdout=out)
		self.assertIn("1 quote(s) would expire", out.getvalue())
		self.old.refresh_from_db()
		self.assertEqual(self.old.status, Quote.Status.DRAFT)

	def test_expires_only_open_quotes(self):
		out = StringIO()
		call_command("expire_quotes", stdout=out)
		self.assertIn("1 quote(s) expired", out.getvalue())
		for quote in (self.old, self.accepted, self.fresh):
			quote.refresh_from_db()
		self.assertEqual(self.old.status, Quote.Status.EXPIRED)
		self.assertEqual(self.accepted.status, Quote.Status.ACCEPTED)
		self.assertEqual(self.fresh.status, Quote.Status.DRAFT)


class QuoteApiTests(TestCase):
	def setUp(self):
		User = get_user_model()
		self.owner = User.objects.create_user(email="owner@example.com", password="x", role="owner")
		self.executive = User.objects.create_user(email="exec@example.com", password="x", role="executive")
		self.api = APIClient()
		self.api.force_authenticate(self.executive)

		self.buyer = Entity.objects.create(name="Acme Imports", country="Germany")
		company = Company.objects.create(legal_name="Exim Pvt Ltd")
		self.bank = CompanyBank.objects.create(company=company, bank_name="State Bank", account_number="123", is_default=True)

		self.quote = Quote.objects.create(buyer=self.buyer, incoterm="FOB", created_by=self.executive)
		QuoteItem.objects.create(quote=self.quote, product_name="Towels", quantity=Decimal("1000"), unit_price=Decimal("20.00"))

	def _url(self, suffix=""):
		return f"/api/quotes/{self.quote.pk}/{suffix}"

	def test_create_quote(self):
		res = self.api.post(
			"/api/quotes/",
			{"buyer": self.buyer.pk, "quote_date": "2025-03-01", "incoterm": "CIF"},
			format="json",
		)
		self.assertEqual(res.status_code, 201)
		self.assertTrue(res.data["number"].startswith("QT-"))
		self.assertEqual(res.data["valid_until"], "2025-03-31")
		self.assertEqual(res.data["status"], Quote.Status.DRAFT)

	def test_valid_until_before_quote_date_is_rejected(self):
		res = self.api.post(
			"/api/quotes/",
			{"buyer": self.buyer.pk, "quote_date": "2025-03-01", "valid_until": "2025-02-01"},
			format="json",
		)
		self.assertEqual(res.status_code, 400)
		self.assertIn("valid_until", res.data)

	def test_item_percentages_are_validated(self):
		res = self.api.post(
			"/api/quote-items/",
			{"quote": self.quote.pk, "product_name": "Napkins", "quantity": "1", "unit_price": "1", "discount_percent": "120"},
			format="json",
		)
		self.assertEqual(res.status_code, 400)

	def test_approval_flow(self):
		res = self.api.get(self._url())
		self.assertTrue(res.data["approval_required"])

		res = self.api.post(self._url("send/"))
		self.assertEqual(res.status_code, 400)
		self.assertIn("approval", res.data["error"])

		res = self.api.post(self._url("submit/"))
		self.assertEqual(res.data["status"], Quote.Status.PENDING_APPROVAL)

		res = self.api.post(self._url("approve/"))
		self.assertEqual(res.status_code, 403)

		self.api.force_authenticate(self.owner)
		res = self.api.post(self._url("approve/"))
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.data["status"], Quote.Status.APPROVED)
		self.assertEqual(res.data["approved_by"], self.owner.pk)

		self.api.force_authenticate(self.executive)
		res = self.api.post(self._url("send/"))
		self.assertEqual(res.data["status"], Quote.Status.SENT)
		res = self.api.post(self._url("accept/"))
		self.assertEqual(res.data["status"], Quote.Status.ACCEPTED)

	def test_reject_needs_reason(self):
		self.api.post(self._url("submit/"))
		self.api.force_authenticate(self.owner)
		res = self.api.post(self._url("reject/"))
		self.assertEqual(res.status_code, 400)
		res = self.api.post(self._url("reject/"), {"reason": "Margin too thin"}, format="json")
		self.assertEqual(res.data["status"], Quote.Status.REJECTED)
		self.assertEqual(res.data["rejection_reason"], "Margin too thin")

		self.api.force_authenticate(self.executive)
		res = self.api.post(self._url("submit/"))
		self.assertEqual(res.data["status"], Quote.Status.PENDING_APPROVAL)
		self.assertEqual(res.data["rejection_reason"], "")

	def test_set_status_approve_needs_approver(self):
		self.api.post(self._url("submit/"))
		res = self.api.post(self._url("set-status/"), {"status": "approved"}, format="json")
		self.assertEqual(res.status_code, 403)

	def test_convert_requires_approval(self):
		self.quote.status = Quote.Status.SENT
		self.quote.save(update_fields=["status"])
		res = self.api.post(self._url("convert/"))
		self.assertEqual(res.status_code, 400)

	def test_convert_to_proforma(self):
		transition(self.quote, "submit", actor=self.executive)
		transition(self.quote, "approve", actor=self.owner)

		res = self.api.post(self._url("convert/"))
		self.assertEqual(res.status_code, 201)
		proforma = ProformaInvoice.objects.get(pk=res.data["id"])
		self.assertEqual(proforma.quote, self.quote)
		self.assertEqual(proforma.buyer, self.buyer)
		self.assertEqual(proforma.status, ProformaInvoice.Status.DRAFT)
		self.assertEqual(proforma.bank, self.bank)
		self.assertEqual(proforma.incoterm, "FOB")
		self.assertEqual(proforma.total_amount, Decimal("20000.00"))

		self.quote.refresh_from_db()
		self.assertEqual(self.quote.status, Quote.Status.CONVERTED)
		self.assertTrue(AuditEvent.objects.filter(action=AuditEvent.Action.DOCUMENT_CONVERTED).exists())

		res = self.api.post("/api/quote-items/", {"quote": self.quote.pk, "product_name": "Extra", "quantity": "1", "unit_price": "1"}, format="json")
		self.assertEqual(res.status_code, 400)

	def test_items_are_frozen_once_submitted(self):
		line = self.quote.items.get()
		transition(self.quote, "submit", actor=self.executive)
		transition(self.quote, "approve", actor=self.owner)

		res = self.api.post(
			"/api/quote-items/",
			{"quote": self.quote.pk, "product_name": "Bathrobes", "quantity": "1", "unit_price": "900000", "discount_percent": "50"},
			format="json",
		)
		self.assertEqual(res.status_code, 400)
		res = self.api.patch(f"/api/quote-items/{line.pk}/", {"unit_price": "900000"}, format="json")
		self.assertEqual(res.status_code, 400)
		res = self.api.delete(f"/api/quote-items/{line.pk}/")
		self.assertEqual(res.status_code, 400)
		self.assertIn("error", res.data)

		self.quote.refresh_from_db()
		self.assertEqual(self.quote.total_amount, Decimal("20000.00"))
		res = self.api.post(self._url("convert/"))
		self.assertEqual(res.status_code, 201)
		self.assertEqual(res.data["total_amount"], "20000.00")

	def test_rejected_quote_is_edited_then_resubmitted(self):
		line = self.quote.items.get()
		transition(self.quote, "submit", actor=self.executive)
		transition(self.quote, "reject", actor=self.owner, reason="Price too low")

		res = self.api.patch(f"/api/quote-items/{line.pk}/", {"unit_price": "25.00"}, format="json")
		self.assertEqual(res.status_code, 200)
		res = self.api.post(self._url("submit/"))
		self.assertEqual(res.data["status"], Quote.Status.PENDING_APPROVAL)
		self.assertEqual(res.data["total_amount"], "25000.00")
		self.assertIsNone(res.data["approved_at"])

	def test_actions_follow_approval_rules(self):
		actions = self.api.get(self._url("actions/")).data["actions"]
		self.assertIn("duplicate", actions)
		self.assertNotIn("send", actions)
		self.assertNotIn("convert", actions)

		transition(self.quote, "submit", actor=self.executive)
		transition(self.quote, "approve", actor=self.owner)
		actions = self.api.get(self._url("actions/")).data["actions"]
		self.assertIn("send", actions)
		self.assertIn("convert", actions)

	def test_duplicate(self):
		res = self.api.post(self._url("duplicate/"))
		self.assertEqual(res.status_code, 201)
		self.assertNotEqual(res.data["number"], self.quote.number)
		self.assertEqual(res.data["version"], 1)
		self.assertEqual(res.data["status"], Quote.Status.DRAFT)
		self.assertEqual(len(res.data["items"]), 1)
		self.assertEqual(res.data["total_amount"], "20000.00")

	def test_revise_returns_to_draft(self):
		self.api.post(self._url("submit/"))
		res = self.api.post(self._url("revise/"))
		self.assertEqual(res.status_code, 201)
		self.assertEqual(res.data["status"], Quote.Status.DRAFT)
		self.assertIsNone(res.data["approval_requested_at"])
		self.assertEqual(res.data["formatted_number"], f"{self.quote.number}-V2")

	def test_actions_and_filters(self):
		res = self.api.get(self._url("actions/"))
		self.assertIn("submit", res.data["actions"])
		res = self.api.get("/api/quotes/", {"buyer": self.buyer.pk, "status": "draft"})
		self.assertEqual(len(res.data), 1)
		res = self.api.get("/api/quotes/", {"status": "sent"})
		self.assertEqual(len(res.data), 0)

	def test_stats(self):
		other = Quote.objects.create(buyer=self.buyer)
		QuoteItem.objects.create(quote=other, product_name="Napkins", quantity=Decimal("10"), unit_price=Decimal("5.00"))
		other.status = Quote.Status.CONVERTED
		other.save(update_fields=["status"])

		res = self.api.get("/api/quotes/stats/")
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.data["count"], 2)
		self.assertEqual(res.data["total_value"], "20050.00")
		self.assertEqual(res.data["pipeline_value"], "20000.00")
		self.assertEqual(res.data["conversion_rate"], 50.0)

	def test_pdf(self):
		QuoteItem.objects.create(
			quote=self.quote,
			product_name="Napkins",
			quantity=Decimal("5"),
			unit_price=Decimal("3.00"),
			discount_percent=Decimal("10"),
			tax_percent=Decimal("5"),
		)
		res = self.api.get(self._url("pdf/"), {"inline": "1"})
		self.assertEqual(res.status_code, 200)
		self.assertTrue(res["Content-Disposition"].startswith("inline"))
		self.assertTrue(res.content.startswith(b"%PDF"))
