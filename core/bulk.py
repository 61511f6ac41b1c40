"""Spreadsheet parsing shared by the bulk-upload endpoints.

Uploads are read into lists of dictionaries keyed by a normalised header
(lower-case, alphanumerics only: "Tax ID" -> "taxid"), so importers can
match columns regardless of spacing or punctuation.
"""
from __future__ import annotations

import csv
import io
import os
import re
import zipfile
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from django.conf import settings

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException


SUPPORTED_EXTENSIONS = (".csv", ".xlsx", ".xlsm")

# Column fragments that give away the wrong kind of file.
PRODUCT_COLUMN_HINTS = ("category", "hsn")
ENTITY_COLUMN_HINTS = ("buyer", "supplier", "entity", "taxid")


class BulkUploadError(ValueError):
	"""The uploaded file cannot be imported; the message is shown to the user."""


@dataclass
class Sheet:
	headers: list[str]
	rows: list[dict[str, str]]


@dataclass
class ImportResult:
	created: int = 0
	updated: int = 0
	skipped: int = 0
	errors: list[str] = field(default_factory=list)

	def as_dict(self) -> dict:
		return {"created": self.created, "updated": self.updated, "skipped": self.skipped, "errors": self.errors}


def normalize_header(value) -> str:
	return re.sub(r"[^a-z0-9]", "", str(value or "").lower())


def _cell(value) -> str:
	if value is None:
		return ""
	if isinstance(value, float) and value.is_integer():
		return str(int(value))
	if isinstance(value, datetime):
		return value.date().isoformat()
	if isinstance(value, date):
		return value.isoformat()
	return str(value).strip()


def _csv_rows(data: bytes) -> list[list]:
	try:
		decoded = data.decode("utf-8-sig")
	except UnicodeDecodeError:
		decoded = data.decode("latin-1")
	return [row for row in csv.reader(io.StringIO(decoded))]


def _xlsx_rows(data: bytes) -> list[list]:
	try:
		wb = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
	except (InvalidFileException, zipfile.BadZipFile, KeyError) as exc:
		raise BulkUploadError("The spreadsheet could not be read. Save it as .xlsx or .csv and try again.") from exc
	try:
		ws = wb.active
		return [list(row) for row in ws.iter_rows(values_only=True)]
	finally:
		wb.close()


def read_sheet(upload) -> Sheet:
	"""Read an uploaded .csv/.xlsx file into normalised header -> value rows."""
	if upload is None:
		raise BulkUploadError("No file was uploaded.")
	ext = os.path.splitext((getattr(upload, "name", "") or "").lower())[1]
	if ext not in SUPPORTED_EXTENSIONS:
		raise BulkUploadError("Unsupported file type. Upload a .csv or .xlsx file.")

	data = upload.read()
	if not data:
		raise BulkUploadError("The uploaded file is empty.")
	raw_rows = _csv_rows(data) if ext == ".csv" else _xlsx_rows(data)
	raw_rows = [row for row in raw_rows if any(_cell(v) for v in row)]
	if not raw_rows:
		raise BulkUploadError("The uploaded file is empty.")

	headers = [normalize_header(h) for h in raw_rows[0]]
	if not any(headers):
		raise BulkUploadError("The uploaded file has no header row.")

	rows: list[dict[str, str]] = []
	for raw in raw_rows[1:]:
		values = [_cell(v) for v in raw]
		rows.append({h: (values[i] if i < len(values) else "") for i, h in enumerate(headers) if h})
	if not rows:
		raise BulkUploadError("The uploaded file has no data rows.")

	limit = int(getattr(settings, "BULK_UPLOAD_MAX_ROWS", 5000))
	if len(rows) > limit:
		raise BulkUploadError(f"Too many rows ({len(rows)}). Upload at most {limit} rows per file.")
	return Sheet(headers=[h for h in headers if h], rows=rows)


def reject_columns(headers: list[str], hints: tuple[str, ...], *, message: str) -> None:
	"""Raise when any header contains one of `hints` (wrong file for this upload)."""
	if any(hint in header for header in headers for hint in hints):
		raise BulkUploadError(message)


def require_any_column(headers: list[str], names: tuple[str, ...], *, message: str) -> None:
	if not any(name in headers for name in names):
		raise BulkUploadError(message)


def pick(row: dict[str, str], *keys: str, default: str = "") -> str:
	for key in keys:
		value = (row.get(key) or "").strip()
		if value:
			return value
	return default


def parse_decimal(value, default: Decimal | None = Decimal("0")) -> Decimal | None:
	cleaned = str(value or "").replace(",", "").strip()
	if not cleaned:
		return default
	try:
		return Decimal(cleaned)
	except InvalidOperation:
		return default
