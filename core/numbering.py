from __future__ import annotations

import logging
from datetime import date

from django.db import transaction
from django.utils import timezone

from core.models import DocumentSequence


logger = logging.getLogger(__name__)

# Statuses after which a document is treated as final and printed with "-FN".
FINAL_STATUSES = frozenset({"approved", "finalized", "final", "won", "converted"})


def next_number(prefix: str, *, day: date | None = None) -> str:
	"""Issue the next `PREFIX-YYYY-MM-DD-NNN` number for `prefix`.

	If the sequence increment fails (locked or read-only database on shared
	hosts), fall back to a timestamp-based suffix so the request doesn't 500.
	"""
	day = day or timezone.localdate()
	try:
		with transaction.atomic():
			seq, _ = DocumentSequence.objects.select_for_update().get_or_create(prefix=prefix, day=day)
			seq.last_number += 1
			seq.save(update_fields=["last_number"])
			return f"{prefix}-{day:%Y-%m-%d}-{seq.last_number:03d}"
	except Exception:
		logger.exception("Document sequence increment failed for %s", prefix)
		ts = int(timezone.now().timestamp())
		return f"{prefix}-{day:%Y-%m-%d}-{ts}"


def format_document_number(number: str, version: int | None = 1, status: str | None = None) -> str:
	"""Printed document number: `NUMBER-FN` once final, `NUMBER-V<version>` before."""
	if (status or "").lower() in FINAL_STATUSES:
		return f"{number}-FN"
	return f"{number}-V{version or 1}"


def format_document_name(number: str, version: int | None = 1, status: str | None = None) -> str:
	return f"{format_document_number(number, version, status)}.pdf"
