from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from entities.models import Entity
from sales.models import Quote, QuoteItem

from .bulk import BulkUploadError, parse_decimal, read_sheet, reject_columns
from .models import AuditEvent, Company, CompanyBank, DocumentSequence
from .numbering import format_document_name, format_document_number, next_number
from .pdf import base_currency_rows, build_trade_pdf, money
from .words import amount_in_words, integer_to_words
from .workflow import WorkflowError, allowed_actions, revise, transition, transition_to


class NumberingTests(TestCase):
	def test_numbers_increment_per_prefix_and_day(self):
		day = date(2025, 3, 9)
		self.assertEqual(next_number("QT", day=day), "QT-2025-03-09-001")
		self.assertEqual(next_number("QT", day=day), "QT-2025-03-09-002")
		self.assertEqual(next_number("PI", day=day), "PI-2025-03-09-001")
		self.assertEqual(next_number("QT", day=date(2025, 3, 10)), "QT-2025-03-10-001")
		self.assertEqual(DocumentSequence.objects.get(prefix="QT", day=day).last_number, 2)

	def test_formatted_number_marks_final_documents(self):
		self.assertEqual(format_document_number("QT-2025-03-09-001", 2, "draft"), "QT-2025-03-09-001-V2")
		self.assertEqual(format_document_number("QT-2025-03-09-001", 2, "approved"), "QT-2025-03-09-001-FN")
		self.assertEqual(format_document_number("ENQ-2025-03-09-004", 1, "won"), "ENQ-2025-03-09-004-FN")
		self.assertEqual(format_document_name("PI-2025-03-09-001", 1, "pending"), "PI-2025-03-09-001-V1.pdf")


class AmountInWordsTests(TestCase):
	def test_integer_to_words(self):
		self.assertEqual(integer_to_words(0), "Zero")
		self.assertEqual(integer_to_words(15), "Fifteen")
		self.assertEqual(integer_to_words(105), "One Hundred Five")
		self.assertEqual(integer_to_words(1234567), "One Million Two Hundred Thirty Four Thousand Five Hundred Sixty Seven")
		self.assertEqual(integer_to_words(10**15 - 1).split()[:3], ["Nine", "Hundred", "Ninety"])

	def test_integer_out_of_range(self):
		with self.assertRaises(ValueError):
			integer_to_words(10**15)
		with self.assertRaises(ValueError):
			integer_to_words(-1)

	def test_amount_with_cents(self):
		self.assertEqual(amount_in_words(Decimal("1250.50"), "USD"), "One Thousand Two Hundred Fifty USD and Fifty Cents Only")

	def test_inr_uses_rupees_and_paise(self):
		self.assertEqual(amount_in_words("100.05", "INR"), "One Hundred Rupees and Five Paise Only")

	def test_zero_amount(self):
		self.assertEqual(amount_in_words(0, "EUR"), "Zero EUR")
		self.assertEqual(amount_in_words(None), "Zero USD")


class WorkflowTests(TestCase):
	def setUp(self):
		self.user = get_user_model().objects.create_user(email="owner@example.com", password="x", role="owner")
		self.buyer = Entity.objects.create(name="Acme Imports")
		self.quote = Quote.objects.create(buyer=self.buyer, created_by=self.user)
		QuoteItem.objects.create(quote=self.quote, product_name="Cotton towels", quantity=Decimal("10"), unit_price=Decimal("5.00"))

	def test_transition_updates_status_and_records_audit(self):
		transition(self.quote, "submit", actor=self.user)
		self.quote.refresh_from_db()
		self.assertEqual(self.quote.status, Quote.Status.PENDING_APPROVAL)
		self.assertEqual(self.quote.approval_requested_by, self.user)
		self.assertTrue(
			AuditEvent.objects.filter(action=AuditEvent.Action.STATUS_CHANGED, entity_type="quote", entity_id=self.quote.pk).exists()
		)

	def test_illegal_transition_raises(self):
		with self.assertRaises(WorkflowError):
			transition(self.quote, "accept", actor=self.user)
		with self.assertRaises(WorkflowError):
			transition(self.quote, "teleport", actor=self.user)

	def test_reject_requires_reason(self):
		transition(self.quote, "submit", actor=self.user)
		with self.assertRaises(WorkflowError):
			transition(self.quote, "reject", actor=self.user)
		transition(self.quote, "reject", actor=self.user, reason="Price too low")
		self.assertEqual(self.quote.status, Quote.Status.REJECTED)
		self.assertEqual(self.quote.rejection_reason, "Price too low")
		self.assertEqual(self.quote.rejected_by, self.user)

	def test_transition_to_finds_action(self):
		transition_to(self.quote, Quote.Status.PENDING_APPROVAL, actor=self.user)
		self.assertEqual(self.quote.status, Quote.Status.PENDING_APPROVAL)
		with self.assertRaises(WorkflowError):
			transition_to(self.quote, Quote.Status.ACCEPTED, actor=self.user)

	def test_allowed_actions(self):
		actions = allowed_actions(self.quote)
		self.assertIn("submit", actions)
		self.assertIn("send", actions)
		self.assertIn("revise", actions)
		self.assertNotIn("approve", actions)

	def test_revise_creates_next_version(self):
		transition(self.quote, "submit", actor=self.user)
		transition(self.quote, "approve", actor=self.user)
		new = revise(self.quote, actor=self.user)

		self.quote.refresh_from_db()
		self.assertEqual(self.quote.status, Quote.Status.REVISED)
		self.assertEqual(new.number, self.quote.number)
		self.assertEqual(new.version, 2)
		self.assertEqual(new.revised_from, self.quote)
		self.assertEqual(new.status, Quote.Status.DRAFT)
		self.assertIsNone(new.approved_at)
		self.assertIsNone(new.approval_requested_at)
		self.assertEqual(new.items.count(), 1)
		self.assertEqual(new.total_amount, Decimal("50.00"))
		self.assertEqual(self.quote.items.count(), 1)

	def test_revised_document_cannot_be_revised_again(self):
		revise(self.quote, actor=self.user)
		self.quote.refresh_from_db()
		with self.assertRaises(WorkflowError):
			revise(self.quote, actor=self.user)


class BulkParsingTests(TestCase):
	def test_csv_headers_are_normalised(self):
		upload = SimpleUploadedFile("entities.csv", b"Name,Tax ID,E-mail\nAcme,GST1,a@b.com\n,,\n")
		sheet = read_sheet(upload)
		self.assertEqual(sheet.headers, ["name", "taxid", "email"])
		self.assertEqual(sheet.rows, [{"name": "Acme", "taxid": "GST1", "email": "a@b.com"}])

	def test_rejects_bad_files(self):
		with self.assertRaises(BulkUploadError):
			read_sheet(None)
		with self.assertRaises(BulkUploadError):
			read_sheet(SimpleUploadedFile("entities.txt", b"Name\nAcme\n"))
		with self.assertRaises(BulkUploadError):
			read_sheet(SimpleUploadedFile("entities.csv", b""))
		with self.assertRaises(BulkUploadError):
			read_sheet(SimpleUploadedFile("entities.csv", b"Name,Country\n"))
		with self.assertRaises(BulkUploadError):
			read_sheet(SimpleUploadedFile("entities.xlsx", b"not a zip file"))

	@override_settings(BULK_UPLOAD_MAX_ROWS=2)
	def test_row_limit(self):
		with self.assertRaises(BulkUploadError):
			read_sheet(SimpleUploadedFile("entities.csv", b"Name\nA\nB\nC\n"))

	def test_reject_columns_matches_fragments(self):
		with self.assertRaises(BulkUploadError):
			reject_columns(["name", "hsncode"], ("hsn",), message="wrong file")
		reject_columns(["name", "country"], ("hsn",), message="wrong file")

	def test_parse_decimal(self):
		self.assertEqual(parse_decimal("1,250.50"), Decimal("1250.50"))
		self.assertEqual(parse_decimal("abc"), Decimal("0"))
		self.assertIsNone(parse_decimal("", None))


class PdfLayoutTests(TestCase):
	def test_money(self):
		self.assertEqual(money(Decimal("1234567.5")), "1,234,567.50")
		self.assertEqual(money(None), "0.00")
		self.assertEqual(money("0.005"), "0.01")
		self.assertEqual(money("n/a"), "n/a")

	@override_settings(BASE_CURRENCY="INR")
	def test_base_currency_rows(self):
		buyer = Entity.objects.create(name="Acme Imports")
		quote = Quote.objects.create(buyer=buyer, currency="USD", conversion_rate=Decimal("83.25"))
		QuoteItem.objects.create(quote=quote, product_name="Towels", quantity=Decimal("10"), unit_price=Decimal("10.00"))
		self.assertEqual(base_currency_rows(quote), [("In INR @ 83.25", "INR 8,325.00")])
		quote.currency = "INR"
		self.assertEqual(base_currency_rows(quote), [])

	def test_build_trade_pdf_paginates_long_tables(self):
		rows = [[i, f"Item {i}", "1.00", "2.00"] for i in range(1, 120)]
		pdf = build_trade_pdf(
			title="TEST",
			number_label="No. T-1",
			details=("DETAILS", [("Date", "01 Jan 2025")]),
			party=("PARTY", [("Name", "Acme")]),
			item_header=["#", "Item", "Qty", "Amount"],
			item_rows=rows,
			item_weights=[5, 55, 20, 20],
			numeric_cols=(2, 3),
			totals=[("TOTAL", "USD 238.00")],
			amount_words="Two Hundred Thirty Eight USD Only",
			notes="Thank you & goodbye <b>",
		)
		self.assertTrue(pdf.startswith(b"%PDF"))
		self.assertGreater(pdf.count(b"/Type /Page"), 2)


class CompanyTests(TestCase):
	def test_load_falls_back_to_unsaved_profile(self):
		company = Company.load()
		self.assertIsNone(company.pk)
		self.assertTrue(company.display_name)

	def test_only_one_default_bank(self):
		company = Company.objects.create(legal_name="Exim Pvt Ltd", gstin="27ABCDE1234F1Z5")
		first = CompanyBank.objects.create(company=company, bank_name="First", account_number="1", is_default=True)
		second = CompanyBank.objects.create(company=company, bank_name="Second", account_number="2", is_default=True)
		first.refresh_from_db()
		self.assertFalse(first.is_default)
		self.assertEqual(CompanyBank.default(), second)
		self.assertIn("GSTIN", company.registration_line())


class CompanyApiTests(TestCase):
	def setUp(self):
		User = get_user_model()
		self.owner = User.objects.create_user(email="owner@example.com", password="x", role="owner")
		self.executive = User.objects.create_user(email="exec@example.com", password="x", role="executive")
		self.api = APIClient()

	def test_only_owner_or_admin_can_edit_company(self):
		self.api.force_authenticate(self.executive)
		res = self.api.post("/api/company/", {"legal_name": "Exim Pvt Ltd"}, format="json")
		self.assertEqual(res.status_code, 403)

		self.api.force_authenticate(self.owner)
		res = self.api.post("/api/company/", {"legal_name": "Exim Pvt Ltd"}, format="json")
		self.assertEqual(res.status_code, 201)

	def test_anonymous_is_rejected(self):
		res = self.api.get("/api/company/")
		self.assertIn(res.status_code, (401, 403))
